"""Configuration module."""

from .constants import (
    CLOUDFRONT_FIELDS,
    DEFAULT_URL_PARAM,
    HEADER_PREFIXES,
    NULL_SENTINEL,
    TOKEN_COUNT,
)
from .settings import ParserSettings, Settings, clear_settings_cache, get_settings
from .sops_loader import decrypt_sops_file, load_config_file

__all__ = [
    # Log grammar
    "CLOUDFRONT_FIELDS",
    "HEADER_PREFIXES",
    "NULL_SENTINEL",
    "TOKEN_COUNT",
    "DEFAULT_URL_PARAM",
    # Settings
    "ParserSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "load_config_file",
    "decrypt_sops_file",
]
