"""Utility functions for CloudFront event deserialization."""

from .file_utils import open_file_auto_decompress
from .logging_utils import setup_logging
from .null_fields import is_null_field, to_optional_str
from .url_utils import QueryStringUrlBuilder, UrlBuilder, resolve_page_url
from .user_agent import BrowserInfo, UserAgentClassifier, UserAgentsClassifier

__all__ = [
    # Null fields
    "is_null_field",
    "to_optional_str",
    # Browser classification
    "BrowserInfo",
    "UserAgentClassifier",
    "UserAgentsClassifier",
    # URL utilities
    "QueryStringUrlBuilder",
    "UrlBuilder",
    "resolve_page_url",
    # Files and logging
    "open_file_auto_decompress",
    "setup_logging",
]
