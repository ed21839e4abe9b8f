"""
Unsubscribe link extraction from email headers and HTML body content.

- HeaderLinkExtractor reads the List-Unsubscribe header (RFC 2369)
- BodyLinkExtractor matches anchors, and the sentences around them,
  against the locale keyword table
"""

from typing import List, Optional, Pattern, Sequence, Tuple, TypeVar

from bs4 import BeautifulSoup

from .blacklist import BlacklistFilter
from .constants import BLANK_HREF, KEYWORD_REGEXES, MAILTO_PATTERN
from .logging import ExtractionLogger
from .segmenter import SentenceSegmenter
from .types import RawCandidate

T = TypeVar("T")


def has_target(href: str) -> bool:
    """Empty hrefs and the "blank" placeholder point nowhere."""
    return bool(href) and href != BLANK_HREF


class HeaderLinkExtractor:
    """Extract candidate hrefs from a List-Unsubscribe header value."""

    def __init__(self, email_blacklist: Optional[BlacklistFilter] = None):
        self.email_blacklist = email_blacklist or BlacklistFilter([], 'emails')
        self.logger = ExtractionLogger("header_extractor")

    @staticmethod
    def _strip_brackets(token: str) -> str:
        if token.startswith('<'):
            token = token[1:]
        if token.endswith('>'):
            token = token[:-1]
        return token

    def extract(self, header_value: Optional[str]) -> List[str]:
        """Return header candidates in header order.

        mailto: targets whose address is on the email blacklist are
        dropped; every other token is kept as is.
        """
        if not header_value:
            return []

        links = []
        for raw_token in header_value.split(','):
            token = self._strip_brackets(raw_token.strip())
            if not token:
                continue

            mailto = MAILTO_PATTERN.match(token)
            if mailto:
                address = mailto.group(1)
                if self.email_blacklist.is_blacklisted(address):
                    self.logger.debug("Dropped blacklisted header address", {'address': address})
                    continue

            links.append(token)

        self.logger.debug("Extracted header links", {'count': len(links), 'header': header_value})
        return links


class BodyLinkExtractor:
    """Extract keyword-matching hrefs from an HTML body."""

    def __init__(self, keyword_patterns: Sequence[Tuple[str, Pattern]] = KEYWORD_REGEXES,
                 segmenter: Optional[SentenceSegmenter] = None):
        self.keyword_patterns = tuple(keyword_patterns)
        self.segmenter = segmenter or SentenceSegmenter()
        self.logger = ExtractionLogger("body_extractor")

    def collect_candidates(self, soup: BeautifulSoup) -> List[RawCandidate]:
        """Direct anchors first, then the segmenter's sentence pairs."""
        candidates = []
        for a_tag in soup.find_all('a', href=True):
            href = a_tag['href'].strip()
            if has_target(href):
                candidates.append(RawCandidate(href, a_tag.get_text()))

        for pair in self.segmenter.segment(soup):
            href = pair.href.strip()
            if has_target(href):
                candidates.append(RawCandidate(href, pair.inner_text))

        return candidates

    def match_keywords(self, candidates: Sequence[RawCandidate]) -> List[str]:
        """Append each href once per keyword pattern matching href or text."""
        links = []
        for candidate in candidates:
            for locale, pattern in self.keyword_patterns:
                if pattern.search(candidate.href) or pattern.search(candidate.inner_text):
                    self.logger.debug("Keyword pattern matched", {
                        'locale': locale,
                        'pattern': pattern.pattern,
                        'href': candidate.href
                    })
                    links.append(candidate.href)
        return links

    def extract(self, html_body: Optional[str]) -> List[str]:
        if not html_body:
            return []

        soup = BeautifulSoup(html_body, 'html.parser')
        links = self.match_keywords(self.collect_candidates(soup))

        self.logger.debug("Extracted body links", {'count': len(links)})
        return links


def dedupe_links(links: Sequence[T]) -> List[T]:
    """Remove duplicates while preserving order.

    Not applied by the pipeline; the first occurrence of each link is kept.
    """
    return list(dict.fromkeys(links))
