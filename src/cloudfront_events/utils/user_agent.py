"""
Browser classification from user-agent strings.

Decomposes a user-agent into the four browser fields carried by an
EventRecord. The row parser only depends on the UserAgentClassifier
protocol, so any engine (or a test stub) can be injected.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Protocol, runtime_checkable

from user_agents import parse as ua_parse

from ..config.constants import (
    BROWSER_TYPE_BROWSER,
    BROWSER_TYPE_EMAIL,
    BROWSER_TYPE_MOBILE,
    BROWSER_TYPE_ROBOT,
    BROWSER_TYPE_UNKNOWN,
    UNKNOWN_BROWSER_FAMILY,
)
from .null_fields import is_null_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserInfo:
    """Result of browser classification."""

    name: Optional[str] = None
    group: Optional[str] = None
    version: Optional[str] = None
    type: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "group": self.group,
            "version": self.version,
            "type": self.type,
        }


@runtime_checkable
class UserAgentClassifier(Protocol):
    """Protocol for user-agent engines, duck-typed, no inheritance required."""

    def classify(self, user_agent: str) -> BrowserInfo:
        """
        Classify a raw user-agent string.

        Implementations may raise on input they cannot handle; the row
        parser reports that as a ParseError for the row.
        """
        ...


class UserAgentsClassifier:
    """
    Default classifier backed by the ``user-agents`` library.

    Field mapping:
        name    -> browser family plus major version ("Chrome 120")
        group   -> browser family ("Chrome")
        version -> full browser version string ("120.0.0")
        type    -> Robot / Email Client / Mobile Browser / Browser / Unknown

    Lookups are memoised per user-agent string, since access logs repeat
    the same handful of agents many times.

    Usage:
        classifier = UserAgentsClassifier()
        info = classifier.classify("Mozilla/5.0 (Windows NT 10.0) Chrome/120.0")
        info.group
        'Chrome'
    """

    def __init__(self, cache_size: int = 1024):
        """
        Initialize the classifier.

        Args:
            cache_size: Maximum number of memoised user-agents (0 disables)
        """
        self.cache_size = cache_size
        if cache_size > 0:
            self._classify = lru_cache(maxsize=cache_size)(self._classify_uncached)
        else:
            self._classify = self._classify_uncached

    def classify(self, user_agent: str) -> BrowserInfo:
        """Classify a user-agent; null values yield an empty BrowserInfo."""
        if is_null_field(user_agent):
            return BrowserInfo()
        return self._classify(user_agent)

    @staticmethod
    def _classify_uncached(user_agent: str) -> BrowserInfo:
        ua = ua_parse(user_agent)
        family = ua.browser.family
        if not family or family == UNKNOWN_BROWSER_FAMILY:
            family = None

        version = ua.browser.version_string or None
        major = str(ua.browser.version[0]) if ua.browser.version else None

        if family and major:
            name = f"{family} {major}"
        else:
            name = family

        return BrowserInfo(
            name=name,
            group=family,
            version=version,
            type=_browser_type(ua),
        )


def _browser_type(ua) -> str:
    """Map user-agents device flags onto a single browser type label."""
    if ua.is_bot:
        return BROWSER_TYPE_ROBOT
    if ua.is_email_client:
        return BROWSER_TYPE_EMAIL
    if ua.is_mobile or ua.is_tablet:
        return BROWSER_TYPE_MOBILE
    if ua.is_pc:
        return BROWSER_TYPE_BROWSER
    return BROWSER_TYPE_UNKNOWN
