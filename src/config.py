"""Configuration and constants for the Tencent Git MCP server."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Tencent Git API Configuration
DEFAULT_BASE_URL = "https://git.code.tencent.com"
API_PATH = "/api/v3"
TOKEN_HELP_URL = "https://git.code.tencent.com/profile/account"

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100

# Response shaping
DEFAULT_MAX_RESPONSE_CHARS = 15000
DEFAULT_ENABLE_TRUNCATION = True

# Environment variable names
ENV_TOKEN = "TENCENT_GIT_TOKEN"
ENV_BASE_URL = "TENCENT_GIT_BASE_URL"
ENV_DEFAULT_PAGE = "TENCENT_GIT_DEFAULT_PAGE"
ENV_DEFAULT_PER_PAGE = "TENCENT_GIT_DEFAULT_PER_PAGE"
ENV_MAX_PER_PAGE = "TENCENT_GIT_MAX_PER_PAGE"
ENV_MAX_RESPONSE_CHARS = "TENCENT_GIT_MAX_RESPONSE_CHARS"
ENV_ENABLE_TRUNCATION = "TENCENT_GIT_ENABLE_RESPONSE_TRUNCATION"
ENV_LOG_LEVEL = "TENCENT_GIT_LOG_LEVEL"
ENV_LOG_FILE = "TENCENT_GIT_LOG_FILE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# Error Codes
class ErrorCode:
    """Standardized error codes for consistent error handling."""
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    TENCENT_GIT_API_ERROR = "TENCENT_GIT_API_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    CHANGE_NOT_FOUND = "CHANGE_NOT_FOUND"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


def parse_positive_int(value: Optional[str], fallback: int) -> int:
    """Parse a positive integer from an environment value, or return fallback."""
    if not value:
        return fallback
    try:
        parsed = int(value.strip(), 10)
    except ValueError:
        return fallback
    if parsed <= 0:
        return fallback
    return parsed


def parse_bool(value: Optional[str], fallback: bool) -> bool:
    """Parse a boolean flag from an environment value, or return fallback."""
    if not value:
        return fallback
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return fallback


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and passed to every component."""

    token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    default_page: int = DEFAULT_PAGE
    default_per_page: int = DEFAULT_PER_PAGE
    max_per_page: int = MAX_PER_PAGE
    max_response_chars: int = DEFAULT_MAX_RESPONSE_CHARS
    enable_truncation: bool = DEFAULT_ENABLE_TRUNCATION
    log_level: int = logging.INFO
    log_file: Optional[str] = None

    def __post_init__(self):
        # frozen dataclass: clamp through object.__setattr__
        if self.default_per_page > self.max_per_page:
            object.__setattr__(self, "default_per_page", self.max_per_page)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def api_base(self) -> str:
        return f"{self.base_url}{API_PATH}"

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Invalid numeric or boolean values fall back to their defaults.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance
        """
        env = os.environ if environ is None else environ
        max_per_page = parse_positive_int(env.get(ENV_MAX_PER_PAGE), MAX_PER_PAGE)
        log_level = logging.getLevelName((env.get(ENV_LOG_LEVEL) or "INFO").strip().upper())

        return cls(
            token=env.get(ENV_TOKEN) or None,
            base_url=env.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            default_page=parse_positive_int(env.get(ENV_DEFAULT_PAGE), DEFAULT_PAGE),
            default_per_page=min(
                parse_positive_int(env.get(ENV_DEFAULT_PER_PAGE), DEFAULT_PER_PAGE),
                max_per_page,
            ),
            max_per_page=max_per_page,
            max_response_chars=parse_positive_int(
                env.get(ENV_MAX_RESPONSE_CHARS), DEFAULT_MAX_RESPONSE_CHARS
            ),
            enable_truncation=parse_bool(env.get(ENV_ENABLE_TRUNCATION), DEFAULT_ENABLE_TRUNCATION),
            log_level=log_level if isinstance(log_level, int) else logging.INFO,
            log_file=env.get(ENV_LOG_FILE) or None,
        )


# Tencent Git API Headers
def get_api_headers(token: str) -> dict:
    """Get Tencent Git API headers with private-token authentication."""
    return {
        "PRIVATE-TOKEN": token,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
