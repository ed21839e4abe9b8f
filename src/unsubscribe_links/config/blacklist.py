"""
Blacklist rule file loading.

The rule file is JSON with two lists of regex sources:

    {
        "emails": ["^legal@", ...],
        "browser": ["^https://(www\\.)?example\\.com/", ...]
    }

A default rule file ships with the package; ``UNSUBSCRIBE_BLACKLIST_PATH``
points at a replacement.
"""

import json
import re
from pathlib import Path
from typing import Optional, Union

from ..extraction.constants import BLACKLIST_EMAILS, BLACKLIST_BROWSER
from ..extraction.exceptions import BlacklistConfigError
from ..extraction.processors import PipelineConfig
from ..extraction.types import BlacklistRules
from .settings import Config

DEFAULT_BLACKLIST_PATH = Path(__file__).resolve().parent.parent / 'data' / 'blacklist.json'


def parse_blacklist(data: object) -> BlacklistRules:
    """Validate decoded JSON and build a rule set."""
    if not isinstance(data, dict):
        raise BlacklistConfigError("Blacklist file must contain a JSON object")

    for purpose in (BLACKLIST_EMAILS, BLACKLIST_BROWSER):
        patterns = data.get(purpose, [])
        if not isinstance(patterns, list):
            raise BlacklistConfigError("Blacklist entry must be a list", purpose=purpose)
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise BlacklistConfigError("Blacklist pattern must be a string",
                                           purpose=purpose, pattern=repr(pattern))
            try:
                re.compile(pattern)
            except re.error as e:
                raise BlacklistConfigError(f"Invalid blacklist pattern: {e}",
                                           purpose=purpose, pattern=pattern) from e

    return BlacklistRules.from_dict(data)


def load_blacklist(path: Optional[Union[str, Path]] = None) -> BlacklistRules:
    """Load a blacklist rule file, falling back to the configured or bundled one."""
    if path is None:
        path = Config.get_blacklist_path() or DEFAULT_BLACKLIST_PATH
    path = Path(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise BlacklistConfigError(f"Cannot read blacklist file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise BlacklistConfigError(f"Blacklist file {path} is not valid JSON: {e}") from e

    return parse_blacklist(data)


def load_pipeline_config(blacklist_path: Optional[Union[str, Path]] = None) -> PipelineConfig:
    """Build the pipeline configuration from the current settings."""
    return PipelineConfig(
        blacklist=load_blacklist(blacklist_path),
        sent_categories=Config.get_sent_categories(),
        max_body_length=Config.get_max_body_length()
    )
