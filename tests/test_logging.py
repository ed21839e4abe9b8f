"""
Tests for the structured extraction logger.
"""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from unsubscribe_links.extraction.exceptions import FetchFailed
from unsubscribe_links.extraction.logging import (
    ExtractionLogger, SensitiveDataFilter, configure_unsubscribe_logging
)


def records_for(caplog, name):
    return [json.loads(record.getMessage()) for record in caplog.records if record.name == name]


class TestSensitiveDataFilter:
    """Test masking of recipient tokens and mailboxes."""

    def test_token_parameter_is_masked(self):
        data_filter = SensitiveDataFilter()

        filtered = data_filter.filter_message('https://example.com/u?id=7&token=abc123')

        assert filtered == 'https://example.com/u?id=7&token=***'

    def test_email_local_part_is_masked(self):
        data_filter = SensitiveDataFilter()

        assert data_filter.filter_message('mail unsub@example.com') == 'mail ***@example.com'

    def test_nested_values_are_filtered(self):
        data_filter = SensitiveDataFilter()

        filtered = data_filter.filter_dict({
            'links': ['a@b.com', 'https://e.com/?sig=xyz'],
            'count': 2
        })

        assert filtered == {'links': ['***@b.com', 'https://e.com/?sig=***'], 'count': 2}


class TestExtractionLogger:
    """Test JSON records, context and exception details."""

    def test_logger_name(self):
        assert ExtractionLogger('pipeline').logger.name == 'unsubscribe.pipeline'

    def test_record_is_json_with_context(self, caplog):
        caplog.set_level(logging.DEBUG, logger='unsubscribe')
        logger = ExtractionLogger('test')
        logger.add_context('account', 'reader@example.org')

        logger.info('Found links', {'count': 2})

        [record] = records_for(caplog, 'unsubscribe.test')
        assert record['component'] == 'test'
        assert record['message'] == 'Found links'
        assert record['context'] == {'account': '***@example.org'}
        assert record['extra'] == {'count': 2}

    def test_disabled_level_is_not_emitted(self, caplog):
        caplog.set_level(logging.WARNING, logger='unsubscribe')

        ExtractionLogger('test').debug('hidden')

        assert records_for(caplog, 'unsubscribe.test') == []

    def test_log_exception_includes_context_and_cause(self, caplog):
        caplog.set_level(logging.DEBUG, logger='unsubscribe')
        error = FetchFailed('Fetch failed', cause=TimeoutError('timed out'), context={'message_id': 'm1'})

        ExtractionLogger('test').log_exception(error, {'stage': 'fetch'})

        [record] = records_for(caplog, 'unsubscribe.test')
        details = record['extra']['exception']
        assert details['type'] == 'FetchFailed'
        assert details['context'] == {'message_id': 'm1'}
        assert details['cause'] == 'TimeoutError: timed out'
        assert record['extra']['stage'] == 'fetch'
        assert caplog.records[-1].levelno == logging.ERROR
        assert caplog.records[-1].exc_info is not None

    def test_time_operation_success(self, caplog):
        caplog.set_level(logging.DEBUG, logger='unsubscribe')

        with ExtractionLogger('test').time_operation('parse'):
            pass

        records = records_for(caplog, 'unsubscribe.test')
        assert [r['message'] for r in records] == ['Starting parse', 'Operation parse completed']
        assert records[-1]['extra']['status'] == 'success'

    def test_time_operation_failure_reraises(self, caplog):
        caplog.set_level(logging.DEBUG, logger='unsubscribe')

        with pytest.raises(ValueError):
            with ExtractionLogger('test').time_operation('parse'):
                raise ValueError('bad html')

        record = records_for(caplog, 'unsubscribe.test')[-1]
        assert record['message'] == 'Operation parse failed'
        assert record['extra']['status'] == 'failure'
        assert record['extra']['error'] == 'bad html'


class TestConfigureLogging:

    def test_console_handler(self):
        logger = configure_unsubscribe_logging(level='debug')

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_reconfiguring_replaces_handlers(self):
        configure_unsubscribe_logging()
        logger = configure_unsubscribe_logging(format='standard')

        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self):
        assert configure_unsubscribe_logging(level='chatty').level == logging.WARNING

    def test_file_output(self, tmp_path):
        log_file = tmp_path / 'unsubscribe.log'
        logger = configure_unsubscribe_logging(level='INFO', output='file', filename=str(log_file))

        ExtractionLogger('file').info('written')
        for handler in logger.handlers:
            handler.flush()
            handler.close()

        assert json.loads(log_file.read_text(encoding='utf-8').strip())['message'] == 'written'
