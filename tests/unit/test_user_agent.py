"""
Unit tests for user_agent module.

Exercises the default classifier against the real user-agents engine.
"""

import pytest

from cloudfront_events.utils.user_agent import (
    BrowserInfo,
    UserAgentClassifier,
    UserAgentsClassifier,
)

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
GOOGLEBOT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"


class TestBrowserInfo:
    """Tests for BrowserInfo dataclass."""

    def test_defaults_are_none(self):
        """An empty BrowserInfo has every field unset."""
        info = BrowserInfo()
        assert info.to_dict() == {
            "name": None,
            "group": None,
            "version": None,
            "type": None,
        }

    def test_frozen(self):
        """BrowserInfo is immutable."""
        info = BrowserInfo(name="Chrome 120")
        with pytest.raises(AttributeError):
            info.name = "Firefox"


class TestUserAgentsClassifier:
    """Tests for UserAgentsClassifier."""

    @pytest.fixture
    def classifier(self):
        return UserAgentsClassifier()

    def test_satisfies_protocol(self, classifier):
        """The default engine satisfies the classifier protocol."""
        assert isinstance(classifier, UserAgentClassifier)

    def test_desktop_chrome(self, classifier):
        """Desktop Chrome is a Browser in the Chrome group."""
        info = classifier.classify(CHROME_WINDOWS)
        assert info.group == "Chrome"
        assert info.name == "Chrome 120"
        assert info.version.startswith("120")
        assert info.type == "Browser"

    def test_mobile_safari(self, classifier):
        """iPhone Safari is a Mobile Browser."""
        info = classifier.classify(SAFARI_IPHONE)
        assert info.group == "Mobile Safari"
        assert info.name == "Mobile Safari 17"
        assert info.type == "Mobile Browser"

    def test_bot(self, classifier):
        """Crawlers are classified as Robot."""
        info = classifier.classify(GOOGLEBOT)
        assert info.type == "Robot"

    def test_unidentified_agent(self, classifier):
        """An agent the engine cannot identify has no group or version."""
        info = classifier.classify("Mozilla/5.0")
        assert info.group is None
        assert info.name is None
        assert info.version is None
        assert info.type == "Unknown"

    @pytest.mark.parametrize("user_agent", [None, "", "-"])
    def test_null_agent(self, classifier, user_agent):
        """Null user-agents yield an empty BrowserInfo."""
        assert classifier.classify(user_agent) == BrowserInfo()

    def test_results_cached(self, classifier):
        """Repeated agents are served from the cache."""
        first = classifier.classify(CHROME_WINDOWS)
        second = classifier.classify(CHROME_WINDOWS)
        assert first is second

    def test_cache_disabled(self):
        """A cache size of 0 classifies every call afresh."""
        classifier = UserAgentsClassifier(cache_size=0)
        first = classifier.classify(CHROME_WINDOWS)
        second = classifier.classify(CHROME_WINDOWS)
        assert first == second
        assert first is not second
