"""
Event record produced by the row parser.

One EventRecord is built per parsed row and never mutated afterwards, so
records can be handed to a storage layer or shared between threads freely.
"""

from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from typing import Iterable, Optional

import pandas as pd


@dataclass(frozen=True)
class EventRecord:
    """
    Flat event record for a single CloudFront access-log row.

    Pass-through Fields:
        dt: Request date (YYYY-MM-DD)
        tm: Request time (HH:MM:SS, UTC)
        user_ipaddress: Client IP address

    Derived Fields:
        page_url: Referrer, or the URL rebuilt from the query string
        br_name: Browser name with major version
        br_group: Browser family
        br_version: Browser version
        br_type: Browser type (Browser, Mobile Browser, Robot, ...)

    Raw Fields (hyphen sentinels normalised to None):
        edge_location: Edge POP identifier (x-edge-location)
        bytes_sent: Response size (sc-bytes)
        method: HTTP method (cs-method)
        host: CloudFront distribution domain (cs(Host))
        path: Request URI stem (cs-uri-stem)
        status: HTTP status (sc-status)
        user_agent: Raw user-agent token (cs(User-Agent))
        querystring: Query string and any trailing columns (cs-uri-query)
    """

    dt: Optional[str] = None
    tm: Optional[str] = None
    user_ipaddress: Optional[str] = None
    page_url: Optional[str] = None

    br_name: Optional[str] = None
    br_group: Optional[str] = None
    br_version: Optional[str] = None
    br_type: Optional[str] = None

    edge_location: Optional[str] = None
    bytes_sent: Optional[str] = None
    method: Optional[str] = None
    host: Optional[str] = None
    path: Optional[str] = None
    status: Optional[str] = None
    user_agent: Optional[str] = None
    querystring: Optional[str] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        """Combine dt and tm into a UTC timestamp, or None if unparseable."""
        if not self.dt or not self.tm:
            return None
        try:
            dt = datetime.strptime(f"{self.dt} {self.tm}", "%Y-%m-%d %H:%M:%S")
        except ValueError:
            return None
        return dt.replace(tzinfo=timezone.utc)

    def to_dict(self) -> dict[str, Optional[str]]:
        """
        Convert to dictionary representation.

        Returns:
            Dictionary with every field, in declaration order
        """
        return asdict(self)

    @classmethod
    def field_names(cls) -> list[str]:
        """Return record field names in declaration order."""
        return [f.name for f in fields(cls)]


def records_to_dataframe(records: Iterable[EventRecord]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record and one column per field.

    Columns are always present, even for an empty input, so the frame can
    be written to a columnar store with a stable schema.
    """
    return pd.DataFrame(
        [record.to_dict() for record in records],
        columns=EventRecord.field_names(),
    )
