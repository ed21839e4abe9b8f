"""
Tests for the message-fetch collaborators and .eml parsing.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from unsubscribe_links.extraction import (
    EmlFileFetcher, InlineMessageFetcher, ExtractionPipeline, Message, ClassifiedLink
)
from unsubscribe_links.extraction.constants import CONDITION_DONE, CONDITION_ERRORED
from unsubscribe_links.extraction.exceptions import FetchFailed, NoMessageContent
from unsubscribe_links.extraction.fetchers import message_from_eml, message_from_eml_file


class TestInlineMessageFetcher:

    def test_returns_message_content(self):
        message = Message(headers={'List-Unsubscribe': '<https://e.com/u>'}, html_body='<p>x</p>')

        parsed = InlineMessageFetcher().fetch(message)

        assert parsed.list_unsubscribe == '<https://e.com/u>'
        assert parsed.html_body == '<p>x</p>'

    def test_empty_message_raises(self):
        with pytest.raises(NoMessageContent):
            InlineMessageFetcher().fetch(Message(subject='nothing'))


class TestEmlParsing:
    """Test building messages from RFC 822 bytes."""

    def test_headers_are_lower_cased(self, newsletter_eml):
        message = message_from_eml(newsletter_eml)

        assert 'list-unsubscribe' in message.headers
        assert message.headers['list-unsubscribe'].startswith('<mailto:unsub@example.com')
        assert message.subject == 'Weekly digest'
        assert message.message_id == '<digest-42@example.com>'

    def test_html_part_is_selected(self, newsletter_eml):
        message = message_from_eml(newsletter_eml)

        assert 'body-unsubscribe' in message.html_body
        assert 'Plain text version' not in message.html_body

    def test_plain_text_only_message_has_no_html(self):
        data = (
            "From: a@example.com\r\n"
            "Subject: Hi\r\n"
            "Content-Type: text/plain; charset=utf-8\r\n"
            "\r\n"
            "Hello\r\n"
        ).encode('utf-8')

        assert message_from_eml(data).html_body is None

    def test_x_unsent_marks_draft(self):
        data = (
            "From: me@example.com\r\n"
            "Subject: Draft\r\n"
            "X-Unsent: 1\r\n"
            "Content-Type: text/html\r\n"
            "\r\n"
            "<p>Draft</p>\r\n"
        ).encode('utf-8')

        assert message_from_eml(data).is_draft is True

    def test_category_and_draft_flag_are_passed_through(self, newsletter_eml_file):
        message = message_from_eml_file(newsletter_eml_file, category='Sent Mail', is_draft=True)

        assert message.category == 'Sent Mail'
        assert message.is_draft is True
        assert message.message_id == str(newsletter_eml_file)

    def test_eml_message_end_to_end(self, newsletter_eml):
        result = ExtractionPipeline().extract(message_from_eml(newsletter_eml))

        assert result.condition == CONDITION_DONE
        assert list(result.links) == [
            ClassifiedLink('unsub@example.com', 'email'),
            ClassifiedLink('https://example.com/u?token=abc123', 'browser'),
            ClassifiedLink('https://example.com/body-unsubscribe', 'browser'),
            ClassifiedLink('https://example.com/body-unsubscribe', 'browser'),
        ]


class TestEmlFileFetcher:
    """Test reading message content from files named by message id."""

    def test_fetch_reads_file(self, tmp_path, newsletter_eml_file):
        fetcher = EmlFileFetcher(tmp_path)

        parsed = fetcher.fetch(Message(message_id=newsletter_eml_file.name))

        assert parsed.get_header('List-Unsubscribe').startswith('<mailto:')
        assert 'body-unsubscribe' in parsed.html_body

    def test_missing_file_raises_fetch_failed(self, tmp_path):
        fetcher = EmlFileFetcher(tmp_path)

        with pytest.raises(FetchFailed) as exc_info:
            fetcher.fetch(Message(message_id='missing.eml'))

        assert isinstance(exc_info.value.cause, OSError)
        assert 'missing.eml' in str(exc_info.value)

    def test_message_without_id_raises(self, tmp_path):
        with pytest.raises(NoMessageContent):
            EmlFileFetcher(tmp_path).fetch(Message())

    def test_pipeline_with_file_fetcher(self, tmp_path, newsletter_eml_file):
        pipeline = ExtractionPipeline(fetcher=EmlFileFetcher(tmp_path))

        found = pipeline.extract(Message(subject='Fwd: digest', message_id=newsletter_eml_file.name))
        missing = pipeline.extract(Message(message_id='missing.eml'))

        assert found.condition == CONDITION_DONE
        assert found.is_forwarded is True
        assert missing.condition == CONDITION_ERRORED
