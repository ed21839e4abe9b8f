"""
Regex blacklist lookups for unsubscribe targets.

Two filters are built from one rule set: ``emails`` lists addresses that
must never receive an automatic unsubscribe email, ``browser`` lists URLs
that must be opened in the OS default browser instead of an embedded view.
"""

import re
from typing import Iterable, List, Optional, Pattern, Tuple

from .constants import BLACKLIST_EMAILS, BLACKLIST_BROWSER
from .exceptions import BlacklistConfigError
from .logging import ExtractionLogger
from .types import BlacklistRules


class BlacklistFilter:
    """Ordered list of regex rules; the first matching rule wins."""

    def __init__(self, patterns: Iterable[str], purpose: str = ''):
        self.purpose = purpose
        self.logger = ExtractionLogger(f"blacklist.{purpose or 'default'}")
        self._rules: List[Tuple[str, Pattern]] = []

        for source in patterns:
            if not isinstance(source, str):
                raise BlacklistConfigError("Blacklist pattern must be a string",
                                           purpose=purpose, pattern=repr(source))
            try:
                self._rules.append((source, re.compile(source, re.IGNORECASE)))
            except re.error as e:
                raise BlacklistConfigError(f"Invalid blacklist pattern: {e}",
                                           purpose=purpose, pattern=source) from e

    @property
    def patterns(self) -> List[str]:
        return [source for source, _ in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def first_match(self, value: str) -> Optional[str]:
        """Return the source of the first rule matching value, if any."""
        for source, regex in self._rules:
            if regex.search(value):
                self.logger.debug("Blacklist rule matched", {
                    'purpose': self.purpose,
                    'pattern': source,
                    'value': value
                })
                return source
        return None

    def is_blacklisted(self, value: str) -> bool:
        return self.first_match(value) is not None


def build_filters(rules: BlacklistRules) -> Tuple[BlacklistFilter, BlacklistFilter]:
    """Build the (emails, browser) filter pair for a rule set."""
    return (
        BlacklistFilter(rules.emails, BLACKLIST_EMAILS),
        BlacklistFilter(rules.browser, BLACKLIST_BROWSER)
    )
