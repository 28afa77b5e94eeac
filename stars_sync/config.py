"""
Configuration management for GitHub Stars → Notion sync.

Loads settings from environment variables and provides
structured configuration for all sync components.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Notion and GitHub both cap list endpoints at 100 items per page
MAX_PAGE_SIZE = 100

DEFAULT_OPERATION_BATCH_SIZE = 10


def _read_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _read_int(name: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    """Read a bounded integer setting, raising ValueError on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None

    if value < minimum or (maximum is not None and value > maximum):
        bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        raise ValueError(f"{name} must be {bounds}, got {value}.")

    return value


@dataclass
class Config:
    """
    Central configuration for the sync system.

    Loads from environment variables and provides defaults.
    All secrets are loaded from env vars - never hardcoded.
    """

    # GitHub settings
    github_token: str
    github_user: str

    # Notion settings
    notion_token: str
    notion_database_id: str

    # Paging and batching
    operation_batch_size: int = DEFAULT_OPERATION_BATCH_SIZE
    notion_page_size: int = MAX_PAGE_SIZE
    github_page_size: int = MAX_PAGE_SIZE

    # Sync behavior
    debug: bool = False
    dry_run: bool = False

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory.

        Returns:
            Configured Config instance.

        Raises:
            ValueError: If required environment variables are missing
                        or a numeric setting is out of range.
        """
        # Load .env file if it exists
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        # Required variables
        github_token = os.getenv("GH_USER_TOKEN", "").strip()
        if not github_token:
            raise ValueError(
                "GH_USER_TOKEN environment variable is required.\n"
                "Create a token at https://github.com/settings/tokens"
            )

        github_user = os.getenv("GH_STARS_USER", "").strip()
        if not github_user:
            raise ValueError(
                "GH_STARS_USER environment variable is required.\n"
                "Set this to the GitHub username whose stars should be synced."
            )

        notion_token = os.getenv("NOTION_KEY", "").strip()
        if not notion_token:
            raise ValueError(
                "NOTION_KEY environment variable is required.\n"
                "Create a Notion integration at https://www.notion.so/my-integrations"
            )

        notion_database_id = os.getenv("NOTION_DATABASE_ID", "").strip()
        if not notion_database_id:
            raise ValueError(
                "NOTION_DATABASE_ID environment variable is required.\n"
                "This should be the ID of the database shared with your integration."
            )

        return cls(
            github_token=github_token,
            github_user=github_user,
            notion_token=notion_token,
            notion_database_id=notion_database_id,
            operation_batch_size=_read_int(
                "OPERATION_BATCH_SIZE", DEFAULT_OPERATION_BATCH_SIZE
            ),
            notion_page_size=_read_int("NOTION_PAGE_SIZE", MAX_PAGE_SIZE, maximum=MAX_PAGE_SIZE),
            github_page_size=_read_int("GITHUB_PAGE_SIZE", MAX_PAGE_SIZE, maximum=MAX_PAGE_SIZE),
            debug=_read_bool("DEBUG"),
            dry_run=_read_bool("DRY_RUN"),
        )

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.operation_batch_size < 1:
            raise ValueError("operation_batch_size must be at least 1.")
        if not 1 <= self.notion_page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"notion_page_size must be between 1 and {MAX_PAGE_SIZE}.")
        if not 1 <= self.github_page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"github_page_size must be between 1 and {MAX_PAGE_SIZE}.")
