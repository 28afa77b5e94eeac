"""
Notion API wrapper for the sync system.

Provides a clean interface to Notion's API with:
- Rate limiting compliance
- Cursor pagination over database rows
- Page creation and updates
- Error handling
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

from notion_client import Client
from notion_client.errors import APIResponseError, RequestTimeoutError
from ratelimit import limits, sleep_and_retry
from rich.console import Console

from stars_sync.config import Config

console = Console()

# Notion API rate limit: 3 requests per second
RATE_LIMIT_CALLS = 3
RATE_LIMIT_PERIOD = 1  # second

# Number property holding the GitHub repository id
KEY_PROPERTY = "Star ID"


@dataclass(frozen=True)
class NotionRow:
    """An existing row of the stars database."""

    page_id: str
    star_id: Optional[int]

    @classmethod
    def from_api_response(cls, page: dict, key_property: str = KEY_PROPERTY) -> "NotionRow":
        """Create NotionRow from a database query result."""
        number = page.get("properties", {}).get(key_property, {}).get("number")

        return cls(
            page_id=page["id"],
            star_id=int(number) if number is not None else None,
        )


class NotionAPI:
    """
    Wrapper around Notion API with rate limiting and utilities.

    Handles:
    - Authentication
    - Rate limiting (3 req/sec), shared by concurrent writers
    - Database pagination
    - Error reporting
    """

    def __init__(self, config: Config, client: Optional[Client] = None):
        """
        Initialize the Notion API client.

        Args:
            config: Configuration instance with Notion token.
            client: Optional pre-built client, mainly for tests.
        """
        self.config = config
        self.client = client or Client(
            auth=config.notion_token,
            log_level=logging.DEBUG if config.debug else logging.WARNING,
        )
        self._request_count = 0
        self._count_lock = threading.Lock()

    @sleep_and_retry
    @limits(calls=RATE_LIMIT_CALLS, period=RATE_LIMIT_PERIOD)
    def _rate_limited_call(self, func, *args, **kwargs) -> Any:
        """Execute a rate-limited API call."""
        with self._count_lock:
            self._request_count += 1
        return func(*args, **kwargs)

    def get_database_rows(self, database_id: str) -> list[NotionRow]:
        """
        Get every row of a database.

        Args:
            database_id: The Notion database ID.

        Returns:
            List of NotionRow objects in query order.

        Raises:
            APIResponseError: If Notion rejects a query.
            RequestTimeoutError: If a query times out.
        """
        rows = []
        start_cursor = None

        formatted_id = self._format_page_id(database_id)

        while True:
            query = {
                "database_id": formatted_id,
                "page_size": self.config.notion_page_size,
            }
            if start_cursor:
                query["start_cursor"] = start_cursor

            try:
                response = self._rate_limited_call(self.client.databases.query, **query)
            except (APIResponseError, RequestTimeoutError) as e:
                console.print(f"[red]API Error querying database {database_id}: {e}[/red]")
                raise

            for page in response.get("results", []):
                rows.append(NotionRow.from_api_response(page))

            start_cursor = response.get("next_cursor")
            if not response.get("has_more", False) or not start_cursor:
                break

        return rows

    def create_page(self, database_id: str, properties: dict) -> dict:
        """
        Create a row in a database.

        Args:
            database_id: The Notion database ID.
            properties: Property values keyed by property name.

        Returns:
            The created page as returned by Notion.
        """
        return self._rate_limited_call(
            self.client.pages.create,
            parent={"database_id": self._format_page_id(database_id)},
            properties=properties,
        )

    def update_page(self, page_id: str, properties: dict) -> dict:
        """
        Overwrite properties of an existing row.

        Args:
            page_id: The Notion page ID of the row.
            properties: Property values keyed by property name.

        Returns:
            The updated page as returned by Notion.
        """
        return self._rate_limited_call(
            self.client.pages.update,
            page_id=self._format_page_id(page_id),
            properties=properties,
        )

    def _format_page_id(self, page_id: str) -> str:
        """
        Format a page or database ID for API calls.

        IDs copied from Notion URLs come without dashes,
        this ensures consistent formatting.
        """
        # Remove existing dashes
        clean_id = page_id.replace("-", "")

        # Add dashes in standard UUID format
        if len(clean_id) == 32:
            return f"{clean_id[:8]}-{clean_id[8:12]}-{clean_id[12:16]}-{clean_id[16:20]}-{clean_id[20:]}"

        return page_id

    @property
    def request_count(self) -> int:
        """Number of API requests made."""
        return self._request_count
