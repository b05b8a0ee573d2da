"""
CloudFront access-log row parser.

Turns one raw line of a CloudFront access log into an EventRecord.

Row grammar (whitespace separated, the last field takes the remainder):
    date time x-edge-location sc-bytes c-ip cs-method cs(Host)
    cs-uri-stem sc-status cs(Referer) cs(User-Agent) cs-uri-query...

Each call has one of three outcomes:
    EventRecord  - the row is a tracked event
    None         - the row is a header, or carries no query string
    ParseError   - the row is malformed or its user-agent cannot be classified
"""

import logging
import re
import urllib.parse
from typing import NamedTuple, Optional

from ..config.constants import HEADER_PREFIXES
from ..config.settings import ParserSettings
from ..utils.null_fields import is_null_field, to_optional_str
from ..utils.url_utils import QueryStringUrlBuilder, UrlBuilder, resolve_page_url
from ..utils.user_agent import BrowserInfo, UserAgentClassifier, UserAgentsClassifier
from .exceptions import ParseError
from .record import EventRecord

logger = logging.getLogger(__name__)

# Adapted from Amazon's cloudfront-loganalyzer field layout
_WS = r"\s+"
_CLOUDFRONT_RE = re.compile(
    r"(\S+)"  # Date          / date
    + _WS + r"(\S+)"  # Time          / time
    + _WS + r"(\S+)"  # EdgeLocation  / x-edge-location
    + _WS + r"(\S+)"  # BytesSent     / sc-bytes
    + _WS + r"(\S+)"  # IPAddress     / c-ip
    + _WS + r"(\S+)"  # Operation     / cs-method
    + _WS + r"(\S+)"  # Domain        / cs(Host)
    + _WS + r"(\S+)"  # Object        / cs-uri-stem
    + _WS + r"(\S+)"  # HttpStatus    / sc-status
    + _WS + r"(\S+)"  # Referrer      / cs(Referer)
    + _WS + r"(\S+)"  # UserAgent     / cs(User-Agent)
    + _WS + r"(.+)"  # Querystring   / cs-uri-query
)


class CloudFrontTokens(NamedTuple):
    """The twelve positional tokens of a CloudFront access-log row."""

    date: str
    time: str
    edge_location: str
    bytes_sent: str
    client_ip: str
    method: str
    host: str
    path: str
    status: str
    referrer: str
    user_agent: str
    querystring: str


def is_header_row(row: str) -> bool:
    """Check whether a row is a #Version: or #Fields: directive."""
    return row.startswith(HEADER_PREFIXES)


def tokenize_row(row: str) -> CloudFrontTokens:
    """
    Split a data row into its twelve tokens.

    Args:
        row: Raw row text; a trailing newline is tolerated

    Returns:
        CloudFrontTokens, with the query string holding the rest of the line

    Raises:
        ParseError: If the row does not match the twelve-field grammar
    """
    match = _CLOUDFRONT_RE.fullmatch(row.rstrip("\r\n"))
    if match is None:
        raise ParseError("Could not parse row", line_content=row)
    return CloudFrontTokens(*match.groups())


class CloudFrontRowParser:
    """
    Stateless parser from CloudFront rows to EventRecords.

    The user-agent engine and the query-string URL builder are injected, so
    tests can stub them out and deployments can swap engines. A single
    instance is safe to share between threads.

    Usage:
        parser = CloudFrontRowParser()
        for line in log_file:
            record = parser.parse(line)
            if record is not None:
                store(record)
    """

    def __init__(
        self,
        classifier: Optional[UserAgentClassifier] = None,
        url_builder: Optional[UrlBuilder] = None,
        settings: Optional[ParserSettings] = None,
    ):
        """
        Initialize the row parser.

        Args:
            classifier: User-agent engine (default: UserAgentsClassifier)
            url_builder: Query-string URL builder (default: QueryStringUrlBuilder)
            settings: Parser settings (default: ParserSettings())
        """
        self.settings = settings or ParserSettings()
        if classifier is None:
            classifier = UserAgentsClassifier(
                cache_size=self.settings.user_agent_cache_size
            )
        if url_builder is None:
            url_builder = QueryStringUrlBuilder(
                url_param=self.settings.querystring_url_param,
                fallback_base_url=self.settings.fallback_base_url,
            )
        self.classifier = classifier
        self.url_builder = url_builder

    def parse(self, row: str) -> Optional[EventRecord]:
        """
        Parse a single row.

        Args:
            row: One line of CloudFront access-log text

        Returns:
            EventRecord, or None if the row should be skipped

        Raises:
            ParseError: If the row is malformed or cannot be fully parsed
        """
        if is_header_row(row):
            logger.debug(f"Skipping header row: {row[:100]!r}")
            return None

        tokens = tokenize_row(row)

        # Rows without a query string were not produced by the tracker
        if is_null_field(tokens.querystring):
            logger.debug("Skipping row without query string")
            return None

        browser = self._classify_user_agent(tokens.user_agent, row)

        return EventRecord(
            dt=tokens.date,
            tm=tokens.time,
            user_ipaddress=tokens.client_ip,
            page_url=resolve_page_url(
                tokens.referrer, tokens.querystring, self.url_builder
            ),
            br_name=browser.name,
            br_group=browser.group,
            br_version=browser.version,
            br_type=browser.type,
            edge_location=to_optional_str(tokens.edge_location),
            bytes_sent=to_optional_str(tokens.bytes_sent),
            method=to_optional_str(tokens.method),
            host=to_optional_str(tokens.host),
            path=to_optional_str(tokens.path),
            status=to_optional_str(tokens.status),
            user_agent=to_optional_str(tokens.user_agent),
            querystring=tokens.querystring,
        )

    def _classify_user_agent(self, user_agent: str, row: str) -> BrowserInfo:
        """Run the injected classifier, reporting any failure against the row."""
        if self.settings.decode_user_agent:
            user_agent = urllib.parse.unquote(user_agent, errors="replace")

        try:
            return self.classifier.classify(user_agent)
        except Exception as e:
            raise ParseError("Could not parse row", line_content=row) from e


# Built at import so every thread shares one parser and one user-agent cache
_default_parser = CloudFrontRowParser()


def parse_row(row: str) -> Optional[EventRecord]:
    """
    Parse a single row with a shared default parser.

    See CloudFrontRowParser.parse for outcomes.
    """
    return _default_parser.parse(row)
