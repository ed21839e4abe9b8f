"""
Configuration settings for unsubscribe link extraction.
"""

import os
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


class SettingsError(ValueError):
    """Exception raised when an environment setting has an invalid value."""

    def __init__(self, name: str, value: str, expected: str):
        super().__init__(f"{name} must be {expected}, got {value!r}")
        self.name = name
        self.value = value


def _optional_int(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == '':
        return None
    try:
        return int(value)
    except ValueError:
        raise SettingsError(name, value, "an integer") from None


class Config:
    """Configuration settings."""

    # Blacklist rule file (bundled default when unset)
    BLACKLIST_PATH = os.getenv('UNSUBSCRIBE_BLACKLIST_PATH')

    # Logging settings
    LOG_LEVEL = os.getenv('UNSUBSCRIBE_LOG_LEVEL', 'WARNING')
    LOG_FORMAT = os.getenv('UNSUBSCRIBE_LOG_FORMAT', 'json')

    # Optional body limit; the tail of longer bodies is kept (unset: no limit)
    MAX_BODY_LENGTH = os.getenv('MAX_BODY_LENGTH')

    # Category tags that mark a message as the account's own sent mail
    SENT_CATEGORIES = os.getenv('SENT_CATEGORIES', 'sent,sent mail,sent items,[gmail]/sent mail')

    @classmethod
    def get_sent_categories(cls) -> Tuple[str, ...]:
        return tuple(part.strip().lower() for part in cls.SENT_CATEGORIES.split(',') if part.strip())

    @classmethod
    def get_max_body_length(cls) -> Optional[int]:
        """Parsed body limit, or None when unset."""
        return _optional_int('MAX_BODY_LENGTH', cls.MAX_BODY_LENGTH)

    @classmethod
    def get_blacklist_path(cls) -> Optional[Path]:
        """Get the configured blacklist file, if any."""
        if not cls.BLACKLIST_PATH:
            return None
        return Path(cls.BLACKLIST_PATH).expanduser()

    @classmethod
    def reload(cls):
        """Re-read settings from the environment."""
        cls.BLACKLIST_PATH = os.getenv('UNSUBSCRIBE_BLACKLIST_PATH')
        cls.LOG_LEVEL = os.getenv('UNSUBSCRIBE_LOG_LEVEL', 'WARNING')
        cls.LOG_FORMAT = os.getenv('UNSUBSCRIBE_LOG_FORMAT', 'json')
        cls.MAX_BODY_LENGTH = os.getenv('MAX_BODY_LENGTH')
        cls.SENT_CATEGORIES = os.getenv('SENT_CATEGORIES', 'sent,sent mail,sent items,[gmail]/sent mail')


def load_config_from_env_file(env_file: str = '.env') -> bool:
    """Load configuration from environment file."""
    env_path = Path(env_file)
    if not env_path.exists():
        return False

    load_dotenv(env_path)
    Config.reload()
    return True
