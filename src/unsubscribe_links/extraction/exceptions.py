"""
Custom exceptions for unsubscribe link extraction with error context.

The pipeline absorbs every extraction error into the terminal condition
of its result; only configuration errors reach the caller.
"""

from typing import Dict, Any, Optional


class UnsubscribeExtractionError(Exception):
    """Base exception for failures while extracting unsubscribe links."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context

    def __str__(self) -> str:
        base_message = super().__str__()
        if self.context is not None and self.context:
            context_info = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_message} (context: {context_info})"
        return base_message


class SentMailNotApplicable(UnsubscribeExtractionError):
    """Message comes from the account's own sent mail."""


class DraftNotSupported(UnsubscribeExtractionError):
    """Message is a draft and cannot be parsed reliably."""


class NoMessageContent(UnsubscribeExtractionError):
    """Neither headers nor body content are available."""


class FetchFailed(UnsubscribeExtractionError):
    """The message-fetch collaborator failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.cause = cause

    def __str__(self) -> str:
        base_message = super().__str__()
        if self.cause is not None:
            return f"{base_message} [cause: {type(self.cause).__name__}: {self.cause}]"
        return base_message


class BlacklistConfigError(Exception):
    """Exception raised when the blacklist rule set is malformed."""

    def __init__(self, message: str, purpose: Optional[str] = None, pattern: Optional[str] = None):
        super().__init__(message)
        self.purpose = purpose
        self.pattern = pattern

    def __str__(self) -> str:
        base_message = super().__str__()
        details = []
        if self.purpose:
            details.append(f"purpose={self.purpose}")
        if self.pattern is not None:
            details.append(f"pattern={self.pattern}")

        if details:
            return f"{base_message} ({', '.join(details)})"
        return base_message
