"""
Action type classification for candidate unsubscribe links.

mailto: candidates become email actions with a bare address as target;
everything else is opened in a browser. Email actions are moved ahead of
browser actions without disturbing the order inside either group.
"""

from typing import Optional, Sequence

from .blacklist import BlacklistFilter
from .constants import ACTION_EMAIL, ACTION_BROWSER, MAILTO_PATTERN
from .logging import ExtractionLogger
from .types import ClassifiedLink, ClassificationResult


class LinkClassifier:
    """Classify raw hrefs as email or browser actions."""

    def __init__(self, browser_blacklist: Optional[BlacklistFilter] = None):
        self.browser_blacklist = browser_blacklist or BlacklistFilter([], 'browser')
        self.logger = ExtractionLogger("link_classifier")

    def classify_link(self, href: str) -> ClassifiedLink:
        mailto = MAILTO_PATTERN.match(href)
        if mailto:
            return ClassifiedLink(target=mailto.group(1), action_type=ACTION_EMAIL)

        return ClassifiedLink(
            target=href,
            action_type=ACTION_BROWSER,
            open_externally=self.browser_blacklist.is_blacklisted(href)
        )

    def classify(self, hrefs: Sequence[str]) -> ClassificationResult:
        classified = [self.classify_link(href) for href in hrefs]

        # sorted() is stable, so input order survives inside each group
        ordered = tuple(sorted(classified, key=lambda link: 0 if link.is_email else 1))
        has_email_action = any(link.is_email for link in ordered)

        self.logger.debug("Classified links", {
            'total': len(ordered),
            'email': sum(1 for link in ordered if link.is_email),
            'has_email_action': has_email_action
        })
        return ClassificationResult(links=ordered, has_email_action=has_email_action)
