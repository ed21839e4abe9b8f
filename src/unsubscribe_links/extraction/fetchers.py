"""
Message-fetch collaborators for the extraction pipeline.

A fetcher turns a Message into its header map and HTML body. Failures
are raised as the typed extraction errors; the pipeline turns them into
a terminal condition.
"""

import email
from abc import ABC, abstractmethod
from email import policy
from email.message import EmailMessage
from pathlib import Path
from typing import Dict, Optional, Union

from .exceptions import FetchFailed, NoMessageContent
from .logging import ExtractionLogger
from .types import Message, ParsedMessage


class MessageFetcher(ABC):
    """Provides the header map and HTML body for a message."""

    @abstractmethod
    def fetch(self, message: Message) -> ParsedMessage:
        """Return parsed content or raise an UnsubscribeExtractionError."""
        pass


class InlineMessageFetcher(MessageFetcher):
    """Serve the content already carried by the Message itself."""

    def fetch(self, message: Message) -> ParsedMessage:
        parsed = ParsedMessage(headers=dict(message.headers), html_body=message.html_body)
        if parsed.is_empty():
            raise NoMessageContent("Message has neither headers nor body",
                                   {'message_id': message.message_id})
        return parsed


def _decode_part(part: EmailMessage) -> str:
    payload = part.get_payload(decode=True)
    if payload is None:
        return ''
    charset = part.get_content_charset() or 'utf-8'
    try:
        return payload.decode(charset, errors='replace')
    except LookupError:
        # Unknown charset label
        return payload.decode('utf-8', errors='replace')


def parse_eml_bytes(data: bytes) -> EmailMessage:
    return email.message_from_bytes(data, policy=policy.default)


def extract_html_body(email_msg: EmailMessage) -> Optional[str]:
    """First text/html part of a message, decoded with its charset."""
    for part in email_msg.walk():
        if part.get_content_type() == 'text/html' and not part.is_attachment():
            return _decode_part(part)
    return None


def extract_headers(email_msg: EmailMessage) -> Dict[str, str]:
    """Header map with lower-cased names; repeated headers are comma-joined."""
    headers: Dict[str, str] = {}
    for name, value in email_msg.items():
        key = name.lower()
        value = str(value)
        headers[key] = f"{headers[key]}, {value}" if key in headers else value
    return headers


def message_from_eml(data: bytes, category: Optional[str] = None,
                     is_draft: bool = False, message_id: Optional[str] = None) -> Message:
    """Build a Message from raw RFC 822 bytes."""
    email_msg = parse_eml_bytes(data)
    headers = extract_headers(email_msg)
    draft = is_draft or headers.get('x-unsent', '').strip() == '1'

    return Message(
        subject=str(email_msg.get('Subject', '') or ''),
        headers=headers,
        html_body=extract_html_body(email_msg),
        category=category,
        is_draft=draft,
        message_id=message_id or headers.get('message-id')
    )


def message_from_eml_file(path: Union[str, Path], category: Optional[str] = None,
                          is_draft: bool = False) -> Message:
    path = Path(path)
    return message_from_eml(path.read_bytes(), category=category,
                            is_draft=is_draft, message_id=str(path))


class EmlFileFetcher(MessageFetcher):
    """Read message content from ``<root>/<message_id>`` .eml files."""

    def __init__(self, root: Union[str, Path] = '.'):
        self.root = Path(root)
        self.logger = ExtractionLogger("eml_fetcher")

    def fetch(self, message: Message) -> ParsedMessage:
        if not message.message_id:
            raise NoMessageContent("Message has no id to fetch")

        path = self.root / message.message_id
        try:
            email_msg = parse_eml_bytes(path.read_bytes())
        except OSError as e:
            raise FetchFailed("Could not read message file", cause=e,
                              context={'path': str(path)}) from e

        parsed = ParsedMessage(headers=extract_headers(email_msg),
                               html_body=extract_html_body(email_msg))
        if parsed.is_empty():
            raise NoMessageContent("Message file is empty", {'path': str(path)})

        self.logger.debug("Fetched message file", {
            'path': str(path),
            'headers': sorted(parsed.headers)
        })
        return parsed
