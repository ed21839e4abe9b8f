"""Shared fixtures for tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from unsubscribe_links.config import Config


NEWSLETTER_EML = (
    "From: Weekly News <news@example.com>\r\n"
    "To: reader@example.org\r\n"
    "Subject: Weekly digest\r\n"
    "Message-ID: <digest-42@example.com>\r\n"
    "List-Unsubscribe: <mailto:unsub@example.com?subject=unsubscribe>, "
    "<https://example.com/u?token=abc123>\r\n"
    "MIME-Version: 1.0\r\n"
    "Content-Type: multipart/alternative; boundary=\"BOUNDARY\"\r\n"
    "\r\n"
    "--BOUNDARY\r\n"
    "Content-Type: text/plain; charset=utf-8\r\n"
    "\r\n"
    "Plain text version\r\n"
    "--BOUNDARY\r\n"
    "Content-Type: text/html; charset=utf-8\r\n"
    "\r\n"
    "<html><body><p>Thanks for reading!</p>"
    "<p><a href=\"https://example.com/body-unsubscribe\">Unsubscribe</a></p>"
    "</body></html>\r\n"
    "--BOUNDARY--\r\n"
)


@pytest.fixture
def newsletter_eml() -> bytes:
    return NEWSLETTER_EML.encode('utf-8')


@pytest.fixture
def newsletter_eml_file(tmp_path, newsletter_eml) -> Path:
    path = tmp_path / "newsletter.eml"
    path.write_bytes(newsletter_eml)
    return path


@pytest.fixture(autouse=True)
def reset_unsubscribe_logging():
    """Drop handlers installed by the CLI and re-read settings after each test."""
    yield
    logger = logging.getLogger("unsubscribe")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    Config.reload()
