"""Shared fixtures for the sync tests."""

import pytest

from stars_sync.config import Config
from stars_sync.github_api import StarredRepo


@pytest.fixture
def config():
    """A complete configuration that never touches the environment."""
    return Config(
        github_token="gh-token",
        github_user="octocat",
        notion_token="notion-token",
        notion_database_id="0123456789abcdef0123456789abcdef",
        operation_batch_size=2,
        notion_page_size=2,
        github_page_size=2,
    )


@pytest.fixture
def make_star():
    """Factory for StarredRepo with sensible defaults."""

    def _make_star(star_id: int = 1, **overrides) -> StarredRepo:
        values = {
            "id": star_id,
            "title": f"octocat/repo-{star_id}",
            "url": f"https://github.com/octocat/repo-{star_id}",
            "starred_at": "2024-01-02T03:04:05Z",
            "created_at": "2020-01-01T00:00:00Z",
            "pushed_at": "2024-01-01T00:00:00Z",
            "homepage": "https://example.com",
            "description": "A repository",
            "language": "Python",
            "topics": ("cli", "notion"),
            "stargazers": 10,
            "watchers": 10,
            "forks": 2,
            "size_kb": 128,
        }
        values.update(overrides)
        return StarredRepo(**values)

    return _make_star


@pytest.fixture
def star_item():
    """Factory for raw items of the starred list API."""

    def _star_item(star_id: int = 1, **repo_overrides) -> dict:
        repo = {
            "id": star_id,
            "full_name": f"octocat/repo-{star_id}",
            "html_url": f"https://github.com/octocat/repo-{star_id}",
            "created_at": "2020-01-01T00:00:00Z",
            "pushed_at": "2024-01-01T00:00:00Z",
            "homepage": "https://example.com",
            "description": "A repository",
            "language": "Python",
            "topics": ["cli", "notion"],
            "stargazers_count": 10,
            "watchers_count": 10,
            "forks_count": 2,
            "size": 128,
        }
        repo.update(repo_overrides)
        return {"starred_at": "2024-01-02T03:04:05Z", "repo": repo}

    return _star_item
