"""
Configuration module.
"""

from .settings import Config, SettingsError, load_config_from_env_file
from .blacklist import DEFAULT_BLACKLIST_PATH, load_blacklist, load_pipeline_config, parse_blacklist

__all__ = [
    'Config', 'SettingsError', 'load_config_from_env_file', 'DEFAULT_BLACKLIST_PATH',
    'load_blacklist', 'load_pipeline_config', 'parse_blacklist'
]
