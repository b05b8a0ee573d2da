"""
URL utility functions.

Helpers for choosing the page URL of an event: either the referrer that
CloudFront logged, or a URL rebuilt from the tracking query string.
"""

import logging
from typing import Callable, Optional
from urllib.parse import parse_qs

from ..config.constants import DEFAULT_URL_PARAM
from .null_fields import is_null_field

logger = logging.getLogger(__name__)

# Given a query-string token, return a page URL or None
UrlBuilder = Callable[[str], Optional[str]]


class QueryStringUrlBuilder:
    """
    Rebuild a page URL from the query-string token of a CloudFront row.

    Resolution order:
    1. The value of the page-URL parameter (``url`` by default), decoded
    2. ``fallback_base_url`` joined with the query string, if configured
    3. None

    Only the first whitespace-delimited segment of the token is used, since
    the query-string token also absorbs any trailing log columns. The scheme
    and host are never guessed from the row itself.

    Usage:
        builder = QueryStringUrlBuilder()
        builder("e=pv&url=http%3A%2F%2Fshop.example%2F")
        'http://shop.example/'
    """

    def __init__(
        self,
        url_param: str = DEFAULT_URL_PARAM,
        fallback_base_url: Optional[str] = None,
    ):
        self.url_param = url_param
        self.fallback_base_url = fallback_base_url

    def __call__(self, querystring: Optional[str]) -> Optional[str]:
        if is_null_field(querystring):
            return None

        segments = querystring.split(maxsplit=1)
        if not segments:
            return None
        qs = segments[0].lstrip("?")
        if is_null_field(qs):
            return None

        values = parse_qs(qs, keep_blank_values=True).get(self.url_param, [])
        for value in values:
            if not is_null_field(value):
                return value

        if self.fallback_base_url:
            return f"{self.fallback_base_url}?{qs}"

        logger.debug(f"No page URL recoverable from query string: {qs[:100]!r}")
        return None


def resolve_page_url(
    referrer: Optional[str],
    querystring: Optional[str],
    url_builder: UrlBuilder,
) -> Optional[str]:
    """
    Choose the page URL for an event.

    CloudFront's cs(Referer) wins when present, because it is the URL the
    browser actually reported. Otherwise the URL is rebuilt from the query
    string. There is no further fallback.

    Args:
        referrer: Referrer token (cs(Referer))
        querystring: Query-string token (cs-uri-query and remainder)
        url_builder: Callable rebuilding a URL from the query string

    Returns:
        Page URL, or None if neither source yields one

    Examples:
        >>> resolve_page_url("http://ref.example/", "foo=bar", QueryStringUrlBuilder())
        'http://ref.example/'
        >>> resolve_page_url("-", "url=http%3A%2F%2Fa.example%2F", QueryStringUrlBuilder())
        'http://a.example/'
    """
    if not is_null_field(referrer):
        return referrer
    return url_builder(querystring)
