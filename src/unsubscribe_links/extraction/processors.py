"""
Unsubscribe extraction pipeline.

Runs the eligibility checks, the header and body extractors and the
classifier over one message and reports the outcome as an immutable
ExtractionResult:

    loading -> done       at least one unsubscribe action was found
    loading -> disabled   sent mail, or nothing found
    loading -> errored    draft, missing content, fetch or parse failure

The pipeline holds only read-only configuration, so one instance can be
shared between threads.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Pattern, Tuple

from .blacklist import build_filters
from .classifiers import LinkClassifier
from .constants import (
    KEYWORD_REGEXES, DEFAULT_SENT_CATEGORIES, FORWARDED_SUBJECT_PATTERN,
    CONDITION_DONE, CONDITION_DISABLED, CONDITION_ERRORED,
    CONFIRM_TEXT_DEFAULT, CONFIRM_TEXT_EMAIL, CONFIRM_TEXT_FORWARDED
)
from .exceptions import (
    UnsubscribeExtractionError, SentMailNotApplicable, DraftNotSupported
)
from .extractors import HeaderLinkExtractor, BodyLinkExtractor
from .fetchers import MessageFetcher, InlineMessageFetcher
from .logging import ExtractionLogger
from .types import BlacklistRules, ExtractionResult, Message, ParsedMessage

StateChangeCallback = Callable[[ExtractionResult], None]


@dataclass(frozen=True)
class PipelineConfig:
    """Read-only configuration shared by every extraction."""

    blacklist: BlacklistRules = field(default_factory=BlacklistRules)
    keyword_patterns: Tuple[Tuple[str, Pattern], ...] = KEYWORD_REGEXES
    sent_categories: Tuple[str, ...] = DEFAULT_SENT_CATEGORIES
    max_body_length: Optional[int] = None


def is_forwarded_subject(subject: Optional[str]) -> bool:
    return bool(subject and FORWARDED_SUBJECT_PATTERN.match(subject))


def confirm_text_for(is_forwarded: bool, has_email_action: bool) -> str:
    if is_forwarded:
        return CONFIRM_TEXT_FORWARDED
    if has_email_action:
        return CONFIRM_TEXT_EMAIL
    return CONFIRM_TEXT_DEFAULT


class ExtractionPipeline:
    """Extract and classify unsubscribe actions for single messages."""

    def __init__(self, config: Optional[PipelineConfig] = None,
                 fetcher: Optional[MessageFetcher] = None):
        self.config = config or PipelineConfig()
        self.fetcher = fetcher or InlineMessageFetcher()

        email_blacklist, browser_blacklist = build_filters(self.config.blacklist)
        self.header_extractor = HeaderLinkExtractor(email_blacklist)
        self.body_extractor = BodyLinkExtractor(self.config.keyword_patterns)
        self.classifier = LinkClassifier(browser_blacklist)
        self.sent_categories = frozenset(c.strip().lower() for c in self.config.sent_categories)
        self.logger = ExtractionLogger("pipeline")
        self.logger.add_context('blacklist_rules', {
            'emails': len(email_blacklist),
            'browser': len(browser_blacklist)
        })

    def is_sent_mail(self, message: Message) -> bool:
        return bool(message.category) and message.category.strip().lower() in self.sent_categories

    def check_eligibility(self, message: Message) -> None:
        """Raise when the message can never carry an unsubscribe action."""
        if self.is_sent_mail(message):
            raise SentMailNotApplicable("Message is in the account's sent mail",
                                        {'category': message.category})
        if message.is_draft:
            raise DraftNotSupported("Drafts cannot be parsed for unsubscribe links",
                                    {'message_id': message.message_id})

    def _limit_body(self, html_body: Optional[str]) -> Optional[str]:
        limit = self.config.max_body_length
        if html_body and limit and len(html_body) > limit:
            # Unsubscribe footers sit at the end of the body
            self.logger.warning("Truncating oversized HTML body", {
                'length': len(html_body),
                'limit': limit
            })
            return html_body[-limit:]
        return html_body

    def extract_links(self, message: Message, parsed: ParsedMessage,
                      result: ExtractionResult) -> ExtractionResult:
        """Run extractors and classifier; return the terminal result."""
        is_forwarded = is_forwarded_subject(message.subject)

        header_links = self.header_extractor.extract(parsed.list_unsubscribe)
        body_links = self.body_extractor.extract(self._limit_body(parsed.html_body))
        classification = self.classifier.classify(header_links + body_links)

        self.logger.debug("Extraction finished", {
            'headers_seen': sorted(parsed.headers),
            'header_links': len(header_links),
            'body_links': len(body_links),
            'is_forwarded': is_forwarded
        })

        condition = CONDITION_DONE if classification.links else CONDITION_DISABLED
        return result.finish(
            condition,
            links=classification.links,
            is_forwarded=is_forwarded,
            confirm_text=confirm_text_for(is_forwarded, classification.has_email_action)
        )

    def _run(self, message: Message, result: ExtractionResult) -> ExtractionResult:
        try:
            self.check_eligibility(message)
            parsed = self.fetcher.fetch(message)
            with self.logger.time_operation("extract_links", failure_level=logging.DEBUG):
                return self.extract_links(message, parsed, result)

        except SentMailNotApplicable as e:
            self.logger.debug(str(e))
            return result.finish(CONDITION_DISABLED)

        except UnsubscribeExtractionError as e:
            self.logger.log_exception(e, level=logging.DEBUG)
            return result.finish(CONDITION_ERRORED)

        except Exception as e:
            self.logger.log_exception(e, {'stage': 'extraction'})
            return result.finish(CONDITION_ERRORED)

    def extract(self, message: Message,
                on_state_change: Optional[StateChangeCallback] = None) -> ExtractionResult:
        """Extract unsubscribe actions from one message.

        Args:
            message: The message to inspect
            on_state_change: Called once with the terminal result

        Returns:
            ExtractionResult in a terminal condition
        """
        result = ExtractionResult()

        result = self._run(message, result)
        self.logger.info("Extraction condition changed", {
            'message_id': message.message_id,
            'condition': result.condition,
            'links': len(result.links)
        })

        if on_state_change is not None:
            on_state_change(result)
        return result


def extract_unsubscribe_links(message: Message, config: Optional[PipelineConfig] = None,
                              on_state_change: Optional[StateChangeCallback] = None,
                              fetcher: Optional[MessageFetcher] = None) -> ExtractionResult:
    """Run a one-off pipeline over a single message."""
    return ExtractionPipeline(config, fetcher).extract(message, on_state_change)
