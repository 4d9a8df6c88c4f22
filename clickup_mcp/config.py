# =============================================================================
# ClickUp MCP Server - Configuration
# =============================================================================
"""
Settings and constants for the ClickUp MCP server.

Settings are loaded from environment variables (and an optional .env file).
The response-shaping code never reads settings directly; the server passes
the relevant limits in as parameters, with the module constants below as
defaults.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
API_BASE_URL = "https://api.clickup.com/api/v2"

# Maximum characters in a single tool response
CHARACTER_LIMIT = 100_000

# Default page size for list/search tools
DEFAULT_LIMIT = 20

# Largest page ClickUp returns; also the page size for exhaustive fetches
MAX_LIMIT = 100

DEFAULT_TIMEOUT = 30.0


class ResponseFormat(str, Enum):
    """
    Output format for tool responses.

    Attributes:
        MARKDOWN: Human-readable markdown.
        JSON: Machine-readable JSON.
    """

    MARKDOWN = "markdown"
    JSON = "json"


class ResponseMode(str, Enum):
    """
    Level of detail for task listings.

    Attributes:
        FULL: Complete task details.
        COMPACT: One line per task (id, name, status, assignees).
        SUMMARY: Counts by status, assignee and priority only.
    """

    FULL = "full"
    COMPACT = "compact"
    SUMMARY = "summary"


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
class Settings(BaseSettings):
    """
    Server settings loaded from environment variables.

    Attributes:
        clickup_api_token: ClickUp personal API token.
        clickup_api_base_url: Base URL for the ClickUp API.
        clickup_request_timeout: Request timeout in seconds.
        character_limit: Maximum characters per tool response.
        max_limit: Page size used for exhaustive fetches.
        default_limit: Default page size for list tools.
        host: Server host address.
        port: Server port number.
        log_level: Logging level.
    """

    clickup_api_token: str = Field(
        default="",
        description="ClickUp API token",
    )
    clickup_api_base_url: str = Field(
        default=API_BASE_URL,
        description="ClickUp API base URL",
    )
    clickup_request_timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
    )
    character_limit: int = Field(
        default=CHARACTER_LIMIT,
        description="Maximum characters per tool response",
        gt=0,
    )
    max_limit: int = Field(
        default=MAX_LIMIT,
        description="Page size for exhaustive pagination",
        gt=0,
    )
    default_limit: int = Field(
        default=DEFAULT_LIMIT,
        description="Default page size for list tools",
        gt=0,
    )
    host: str = Field(
        default="0.0.0.0",
        description="Server host address",
    )
    port: int = Field(
        default=8082,
        description="Server port number",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize the logging level name.

        Args:
            v: The configured level name.

        Returns:
            The upper-cased level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings instance loaded from the environment.
    """
    return Settings()
