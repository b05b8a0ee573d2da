"""
Parser settings and configuration management.

Supports loading from:
1. YAML config files (config.yaml, or SOPS-encrypted *.enc.yaml)
2. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

from .constants import DEFAULT_URL_PARAM

logger = logging.getLogger(__name__)


# =============================================================================
# Row Parser Settings
# =============================================================================


@dataclass
class ParserSettings:
    """
    Configuration for the CloudFront row parser.

    Controls how derived fields are computed. None of these settings change
    the row grammar or the skip rules.
    """

    # CloudFront percent-encodes spaces in cs(User-Agent)
    decode_user_agent: bool = True

    # Query-string parameter that carries the page URL
    querystring_url_param: str = DEFAULT_URL_PARAM

    # Base URL used to rebuild a page URL from a bare query string
    fallback_base_url: Optional[str] = None

    # Memoised user-agent lookups
    user_agent_cache_size: int = 1024

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if not self.querystring_url_param:
            errors.append("querystring_url_param must not be empty")
        if self.fallback_base_url is not None and "://" not in self.fallback_base_url:
            errors.append(
                f"fallback_base_url must include a scheme, "
                f"got {self.fallback_base_url!r}"
            )
        if self.user_agent_cache_size < 0:
            errors.append(
                f"user_agent_cache_size must be >= 0, "
                f"got {self.user_agent_cache_size}"
            )

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "decode_user_agent": self.decode_user_agent,
            "querystring_url_param": self.querystring_url_param,
            "fallback_base_url": self.fallback_base_url,
            "user_agent_cache_size": self.user_agent_cache_size,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "ParserSettings":
        """Create from configuration dictionary."""
        return cls(
            decode_user_agent=config.get("decode_user_agent", True),
            querystring_url_param=config.get("querystring_url_param", DEFAULT_URL_PARAM),
            fallback_base_url=config.get("fallback_base_url"),
            user_agent_cache_size=config.get("user_agent_cache_size", 1024),
        )

    @classmethod
    def from_env(cls) -> "ParserSettings":
        """Create from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            try:
                return int(os.environ.get(key, str(default)))
            except ValueError:
                return default

        def safe_bool(key: str, default: bool) -> bool:
            """Safely parse bool from env var."""
            return os.environ.get(key, str(default).lower()).lower() == "true"

        return cls(
            decode_user_agent=safe_bool("CF_SERDE_DECODE_USER_AGENT", True),
            querystring_url_param=os.environ.get(
                "CF_SERDE_URL_PARAM", DEFAULT_URL_PARAM
            ),
            fallback_base_url=os.environ.get("CF_SERDE_FALLBACK_BASE_URL") or None,
            user_agent_cache_size=safe_int("CF_SERDE_UA_CACHE_SIZE", 1024),
        )


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings:
    """Application settings."""

    # Level name ("DEBUG") or numeric level (10)
    log_level: Union[int, str] = "INFO"

    parser: ParserSettings = field(default_factory=ParserSettings)

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if isinstance(self.log_level, int):
            if self.log_level < 0:
                errors.append(f"log_level must be >= 0, got {self.log_level}")
        elif not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            errors.append(f"Unknown log_level: {self.log_level!r}")

        errors.extend(self.parser.validate())

        return errors

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """Create Settings from configuration dictionary (e.g., from YAML)."""
        logging_config = config.get("logging", {})
        parser = config.get("parser", {})

        return cls(
            log_level=logging_config.get("level", "INFO"),
            parser=ParserSettings.from_dict(parser),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            log_level=os.environ.get("CF_SERDE_LOG_LEVEL", "INFO"),
            parser=ParserSettings.from_env(),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("config.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Loads from a YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML (or SOPS-encrypted YAML) file

    Returns:
        Settings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        try:
            from .sops_loader import load_config_file

            config = load_config_file(path)
            return Settings.from_dict(config)
        except Exception as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Falling back to environment variables")

    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
