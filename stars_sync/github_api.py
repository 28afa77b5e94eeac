"""
GitHub API wrapper for the sync system.

Fetches every repository a user has starred, following the
``Link`` header until GitHub reports no further pages.
"""

from dataclasses import dataclass
from typing import Optional

import requests
from rich.console import Console

from stars_sync.config import Config

console = Console()

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

# Adds starred_at to every item of the starred list
STAR_MEDIA_TYPE = "application/vnd.github.v3.star+json"

REQUEST_TIMEOUT = 30  # seconds


def _optional_text(value: Optional[str]) -> Optional[str]:
    """Collapse null and blank strings to None."""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass(frozen=True)
class StarredRepo:
    """A starred repository as reported by GitHub."""

    id: int
    title: str
    url: str
    starred_at: str
    created_at: str
    pushed_at: Optional[str] = None
    homepage: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    topics: tuple[str, ...] = ()
    stargazers: int = 0
    watchers: int = 0
    forks: int = 0
    size_kb: int = 0

    @classmethod
    def from_api_response(cls, item: dict) -> "StarredRepo":
        """
        Create StarredRepo from one item of the starred list.

        Items have the ``{"starred_at": ..., "repo": {...}}`` shape
        returned for the star media type.
        """
        repo = item["repo"]

        return cls(
            id=int(repo["id"]),
            title=repo["full_name"],
            url=repo["html_url"],
            starred_at=item["starred_at"],
            created_at=repo["created_at"],
            pushed_at=_optional_text(repo.get("pushed_at")),
            homepage=_optional_text(repo.get("homepage")),
            description=_optional_text(repo.get("description")),
            language=_optional_text(repo.get("language")),
            topics=tuple(repo.get("topics") or ()),
            stargazers=repo.get("stargazers_count") or 0,
            watchers=repo.get("watchers_count") or 0,
            forks=repo.get("forks_count") or 0,
            size_kb=repo.get("size") or 0,
        )


class GitHubAPI:
    """
    Thin wrapper around the GitHub REST API.

    Handles:
    - Authentication
    - Pagination through the Link header
    - Error reporting
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """
        Initialize the GitHub API client.

        Args:
            config: Configuration instance with GitHub token.
            session: Optional pre-built session, mainly for tests.
        """
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": STAR_MEDIA_TYPE,
                "Authorization": f"Bearer {config.github_token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            }
        )
        self._request_count = 0

    def get_starred_repos(self, username: str) -> list[StarredRepo]:
        """
        Get every repository starred by a user.

        Pages are requested one after another; a failure on any page
        aborts the whole fetch so no partial snapshot is returned.

        Args:
            username: GitHub login whose stars are listed.

        Returns:
            List of StarredRepo objects in the order GitHub returns them.

        Raises:
            requests.RequestException: On transport or HTTP errors.
        """
        stars = []
        url: Optional[str] = f"{GITHUB_API_URL}/users/{username}/starred"
        params: Optional[dict] = {"per_page": self.config.github_page_size}

        while url:
            try:
                response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
                self._request_count += 1
                response.raise_for_status()
            except requests.RequestException as e:
                console.print(f"[red]API Error fetching stars for {username}: {e}[/red]")
                raise

            for item in response.json():
                stars.append(StarredRepo.from_api_response(item))

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        return stars

    @property
    def request_count(self) -> int:
        """Number of API requests made."""
        return self._request_count
