"""
Unsubscribe link extraction and classification.

This module provides:
- Link extraction from the List-Unsubscribe header and HTML body content
- Sentence segmentation for bare "click here" anchors
- Email / browser action classification
- Blacklist policy for mail targets and browser routing
- The extraction pipeline tying these together for one message
"""

from .blacklist import BlacklistFilter
from .classifiers import LinkClassifier
from .extractors import HeaderLinkExtractor, BodyLinkExtractor, dedupe_links
from .fetchers import MessageFetcher, InlineMessageFetcher, EmlFileFetcher
from .processors import ExtractionPipeline, PipelineConfig, extract_unsubscribe_links
from .segmenter import SentenceSegmenter
from .types import (
    Message, ParsedMessage, RawCandidate, ClassifiedLink, BlacklistRules,
    ExtractionResult
)

__all__ = [
    'BlacklistFilter',
    'LinkClassifier',
    'HeaderLinkExtractor',
    'BodyLinkExtractor',
    'dedupe_links',
    'MessageFetcher',
    'InlineMessageFetcher',
    'EmlFileFetcher',
    'ExtractionPipeline',
    'PipelineConfig',
    'extract_unsubscribe_links',
    'SentenceSegmenter',
    'Message',
    'ParsedMessage',
    'RawCandidate',
    'ClassifiedLink',
    'BlacklistRules',
    'ExtractionResult'
]
