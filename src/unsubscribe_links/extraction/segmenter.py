"""
Sentence segmentation around bare anchors.

Many senders write "To stop receiving these emails, <a>click here</a>."
where the anchor text says nothing useful. The segmenter walks the
direct children of every element that contains an anchor and pairs each
anchor with the sentence it sits in, so the keyword matcher can look at
the sentence instead of the anchor text.

This is a best-effort heuristic, not a grammatical parser.
"""

from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, Tag

from .constants import SENTENCE_TERMINATOR_PATTERN, SENTENCE_SEGMENT_PATTERN
from .logging import ExtractionLogger
from .types import RawCandidate


def rendered_text(node: PageElement) -> str:
    """Rendered text of a child node; comments and doctypes render as nothing."""
    if isinstance(node, Tag):
        return node.get_text()
    if type(node) is NavigableString:
        return str(node)
    return ''


def is_anchor(node: PageElement) -> bool:
    return isinstance(node, Tag) and node.name == 'a'


class SentenceSegmenter:
    """Associate bare anchor links with their surrounding sentence text."""

    def __init__(self):
        self.logger = ExtractionLogger("sentence_segmenter")

    def anchor_parents(self, soup: BeautifulSoup) -> List[Tag]:
        """Distinct immediate parents of anchors, in first-appearance order."""
        parents: List[Tag] = []
        seen = set()
        for anchor in soup.find_all('a'):
            parent = anchor.parent
            if parent is None or id(parent) in seen:
                continue
            seen.add(id(parent))
            parents.append(parent)
        return parents

    def segment(self, soup: BeautifulSoup) -> List[RawCandidate]:
        """Return (href, sentence) pairs for every parent of an anchor."""
        pairs: List[RawCandidate] = []
        for parent in self.anchor_parents(soup):
            pairs.extend(self._segment_parent(parent))

        self.logger.debug("Segmented anchor sentences", {'pairs': len(pairs)})
        return pairs

    def _segment_parent(self, parent: Tag) -> List[RawCandidate]:
        pairs: List[RawCandidate] = []
        pending_link: Optional[str] = None
        leftover = ''

        for child in parent.children:
            if is_anchor(child):
                if pending_link and leftover:
                    pairs.append(RawCandidate(pending_link, leftover))
                    leftover = ''
                pending_link = (child.get('href') or '').strip() or None

            text = rendered_text(child)
            if SENTENCE_TERMINATOR_PATTERN.match(text):
                for segment in SENTENCE_SEGMENT_PATTERN.findall(text):
                    if not segment:
                        continue
                    if pending_link:
                        pairs.append(RawCandidate(pending_link, leftover + segment))
                        pending_link = None
                        leftover = ''
                    else:
                        leftover += segment
            else:
                leftover += text

            # Keeps text of adjacent elements from running together
            leftover += ' '

        if pending_link and leftover:
            pairs.append(RawCandidate(pending_link, leftover))

        return pairs
