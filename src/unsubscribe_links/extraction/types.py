"""
Type-safe dataclasses for unsubscribe link extraction.

Every value passed between pipeline stages is an immutable dataclass;
the extraction result is created in the loading condition and replaced
exactly once by a terminal copy.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Any, List, Optional, Tuple

from .constants import (
    ACTION_EMAIL, ACTION_BROWSER, CONDITION_LOADING, TERMINAL_CONDITIONS,
    BLACKLIST_EMAILS, BLACKLIST_BROWSER, LIST_UNSUBSCRIBE_HEADER
)


@dataclass(frozen=True)
class Message:
    """A single email message as seen by the extraction pipeline."""

    subject: str = ''
    headers: Dict[str, str] = field(default_factory=dict)
    html_body: Optional[str] = None
    category: Optional[str] = None
    is_draft: bool = False
    message_id: Optional[str] = None
    account_id: Optional[str] = None


@dataclass(frozen=True)
class ParsedMessage:
    """Header map and HTML body returned by a message fetcher."""

    headers: Dict[str, str] = field(default_factory=dict)
    html_body: Optional[str] = None

    def get_header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @property
    def list_unsubscribe(self) -> Optional[str]:
        return self.get_header(LIST_UNSUBSCRIBE_HEADER)

    def is_empty(self) -> bool:
        return not self.headers and not self.html_body


@dataclass(frozen=True)
class RawCandidate:
    """An href found in a message body plus the text it was found with."""

    href: str
    inner_text: str = ''


@dataclass(frozen=True)
class ClassifiedLink:
    """A candidate resolved to an action type and a normalized target."""

    target: str
    action_type: str
    open_externally: bool = False

    @property
    def is_email(self) -> bool:
        return self.action_type == ACTION_EMAIL

    @property
    def is_browser(self) -> bool:
        return self.action_type == ACTION_BROWSER

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'target': self.target,
            'action_type': self.action_type,
        }
        if self.is_browser:
            result['open_externally'] = self.open_externally
        return result


@dataclass(frozen=True)
class ClassificationResult:
    """Ordered classified links plus whether any of them sends an email."""

    links: Tuple[ClassifiedLink, ...] = ()
    has_email_action: bool = False


@dataclass(frozen=True)
class BlacklistRules:
    """Regex sources for disallowed mail targets and externally opened URLs."""

    emails: Tuple[str, ...] = ()
    browser: Tuple[str, ...] = ()

    def for_purpose(self, purpose: str) -> Tuple[str, ...]:
        if purpose == BLACKLIST_EMAILS:
            return self.emails
        if purpose == BLACKLIST_BROWSER:
            return self.browser
        raise KeyError(purpose)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BlacklistRules':
        return cls(
            emails=tuple(data.get(BLACKLIST_EMAILS, ())),
            browser=tuple(data.get(BLACKLIST_BROWSER, ()))
        )

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            BLACKLIST_EMAILS: list(self.emails),
            BLACKLIST_BROWSER: list(self.browser)
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of running the extraction pipeline over one message."""

    condition: str = CONDITION_LOADING
    has_links: bool = False
    links: Tuple[ClassifiedLink, ...] = ()
    is_forwarded: bool = False
    confirm_text: str = ''

    @property
    def is_terminal(self) -> bool:
        return self.condition in TERMINAL_CONDITIONS

    @property
    def primary_link(self) -> Optional[ClassifiedLink]:
        """The suggested action, or None when nothing was found."""
        if not self.has_links:
            return None
        return self.links[0]

    def finish(self, condition: str, **changes: Any) -> 'ExtractionResult':
        """Return the terminal copy of a loading result."""
        if self.is_terminal:
            raise ValueError(f"Result already finished with condition {self.condition}")
        if condition not in TERMINAL_CONDITIONS:
            raise ValueError(f"Not a terminal condition: {condition}")

        links = tuple(changes.pop('links', self.links))
        return replace(
            self,
            condition=condition,
            links=links,
            has_links=len(links) > 0,
            **changes
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        primary = self.primary_link
        return {
            'condition': self.condition,
            'has_links': self.has_links,
            'links': [link.to_dict() for link in self.links],
            'primary_link': primary.to_dict() if primary else None,
            'is_forwarded': self.is_forwarded,
            'confirm_text': self.confirm_text
        }
