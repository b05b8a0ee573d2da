"""CloudFront access-log row parser producing flat event records."""

from .serde import (
    CloudFrontRowParser,
    CloudFrontTokens,
    EventRecord,
    ParseError,
    SerDeError,
    is_header_row,
    parse_row,
    records_to_dataframe,
    tokenize_row,
)
from .utils import (
    BrowserInfo,
    QueryStringUrlBuilder,
    UserAgentClassifier,
    UserAgentsClassifier,
    is_null_field,
    resolve_page_url,
)

__version__ = "0.1.0"

__all__ = [
    "CloudFrontRowParser",
    "CloudFrontTokens",
    "EventRecord",
    "ParseError",
    "SerDeError",
    "is_header_row",
    "parse_row",
    "records_to_dataframe",
    "tokenize_row",
    "BrowserInfo",
    "QueryStringUrlBuilder",
    "UserAgentClassifier",
    "UserAgentsClassifier",
    "is_null_field",
    "resolve_page_url",
]
