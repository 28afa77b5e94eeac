"""
StarredRepo to Notion property converter.

The target database must provide these properties:

    Name         title         always
    Star ID      number        always, used to match rows across runs
    URL          url           always
    Starred      date          always
    Created      date          always
    Pushed       date          always, cleared when GitHub has no push
    Stargazers   number        always
    Watchers     number        always
    Forks        number        always
    Size (Kb)    number        always
    Homepage     url           only when the repo has one
    Description  rich_text     only when the repo has one
    Language     select        only when GitHub detected one
    Topics       multi_select  only when the repo has topics

Optional properties are left out of the payload rather than sent empty,
so values typed by hand in Notion are not wiped by an empty update.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Optional

from stars_sync.github_api import StarredRepo
from stars_sync.notion_api import KEY_PROPERTY

# Notion rejects text objects longer than this
MAX_TEXT_LENGTH = 2000


def _text_objects(content: str) -> list[dict]:
    return [{"type": "text", "text": {"content": content[:MAX_TEXT_LENGTH]}}]


def _option_name(name: str) -> str:
    # Commas are not allowed in select option names
    return name.replace(",", " ")[:100]


def title(value: str) -> dict:
    return {"title": _text_objects(value)}


def rich_text(value: str) -> dict:
    return {"rich_text": _text_objects(value)}


def number(value: int) -> dict:
    return {"number": value}


def url(value: str) -> dict:
    return {"url": value}


def date(value: Optional[str]) -> dict:
    return {"date": {"start": value} if value else None}


def select(value: str) -> dict:
    return {"select": {"name": _option_name(value)}}


def multi_select(values: Sequence[str]) -> dict:
    return {"multi_select": [{"name": _option_name(v)} for v in values]}


@dataclass(frozen=True)
class PropertyRule:
    """How one database property is filled from a StarredRepo."""

    name: str
    getter: Callable[[StarredRepo], Any]
    builder: Callable[[Any], dict]
    required: bool = True

    def is_present(self, value: Any) -> bool:
        if self.required:
            return True
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, (tuple, list)):
            return len(value) > 0
        return True


PROPERTY_RULES: tuple[PropertyRule, ...] = (
    PropertyRule("Name", lambda s: s.title, title),
    PropertyRule(KEY_PROPERTY, lambda s: s.id, number),
    PropertyRule("URL", lambda s: s.url, url),
    PropertyRule("Starred", lambda s: s.starred_at, date),
    PropertyRule("Created", lambda s: s.created_at, date),
    PropertyRule("Pushed", lambda s: s.pushed_at, date),
    PropertyRule("Stargazers", lambda s: s.stargazers, number),
    PropertyRule("Watchers", lambda s: s.watchers, number),
    PropertyRule("Forks", lambda s: s.forks, number),
    PropertyRule("Size (Kb)", lambda s: s.size_kb, number),
    PropertyRule("Homepage", lambda s: s.homepage, url, required=False),
    PropertyRule("Description", lambda s: s.description, rich_text, required=False),
    PropertyRule("Language", lambda s: s.language, select, required=False),
    PropertyRule("Topics", lambda s: s.topics, multi_select, required=False),
)

REQUIRED_PROPERTIES = tuple(rule.name for rule in PROPERTY_RULES if rule.required)
OPTIONAL_PROPERTIES = tuple(rule.name for rule in PROPERTY_RULES if not rule.required)


def get_properties_from_star(star: StarredRepo) -> dict[str, dict]:
    """
    Convert a star to the database's property payload.

    Args:
        star: The starred repository.

    Returns:
        Property values keyed by property name, ready for
        ``pages.create`` or ``pages.update``.
    """
    properties = {}

    for rule in PROPERTY_RULES:
        value = rule.getter(star)
        if rule.is_present(value):
            properties[rule.name] = rule.builder(value)

    return properties
