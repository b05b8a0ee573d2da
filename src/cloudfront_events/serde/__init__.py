"""
CloudFront access-log deserialization.

Converts raw CloudFront access-log rows into flat, immutable EventRecords.

Usage:
    from cloudfront_events.serde import CloudFrontRowParser

    parser = CloudFrontRowParser()
    record = parser.parse(line)
    if record is not None:
        print(record.to_dict())
"""

from .exceptions import ParseError, SerDeError
from .record import EventRecord, records_to_dataframe
from .row_parser import (
    CloudFrontRowParser,
    CloudFrontTokens,
    is_header_row,
    parse_row,
    tokenize_row,
)

__all__ = [
    # Parser
    "CloudFrontRowParser",
    "CloudFrontTokens",
    "is_header_row",
    "tokenize_row",
    "parse_row",
    # Records
    "EventRecord",
    "records_to_dataframe",
    # Exceptions
    "SerDeError",
    "ParseError",
]
