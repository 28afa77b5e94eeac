"""
Decides which stars become new Notion rows and which refresh existing ones.

The decision is keyed on the GitHub repository id stored in every row,
so renamed or transferred repositories keep their row.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from stars_sync.github_api import StarredRepo
from stars_sync.notion_api import NotionRow


@dataclass(frozen=True)
class IdentityIndex:
    """
    Read-only map of GitHub repository id to Notion page id.

    Built once per run from the database snapshot. When two rows carry
    the same id the later one wins and the id is listed in ``duplicates``.
    """

    pages: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))
    duplicates: frozenset[int] = frozenset()
    unkeyed: int = 0

    @classmethod
    def from_rows(cls, rows: Iterable[NotionRow]) -> "IdentityIndex":
        pages: dict[int, str] = {}
        duplicates = set()
        unkeyed = 0

        for row in rows:
            if row.star_id is None:
                unkeyed += 1
                continue
            if row.star_id in pages:
                duplicates.add(row.star_id)
            pages[row.star_id] = row.page_id

        return cls(
            pages=MappingProxyType(pages),
            duplicates=frozenset(duplicates),
            unkeyed=unkeyed,
        )

    def get(self, star_id: int) -> Optional[str]:
        return self.pages.get(star_id)

    def __contains__(self, star_id: object) -> bool:
        return star_id in self.pages

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[int]:
        return iter(self.pages)


@dataclass(frozen=True)
class CreatePage:
    """A star with no row yet."""

    star: StarredRepo


@dataclass(frozen=True)
class UpdatePage:
    """A star whose row already exists."""

    page_id: str
    star: StarredRepo


@dataclass
class SyncPlan:
    """Operations for one run, in source order."""

    to_create: list[CreatePage] = field(default_factory=list)
    to_update: list[UpdatePage] = field(default_factory=list)
    duplicates: frozenset[int] = frozenset()

    @property
    def total(self) -> int:
        return len(self.to_create) + len(self.to_update)


def plan_operations(stars: Iterable[StarredRepo], index: IdentityIndex) -> SyncPlan:
    """
    Split stars into rows to create and rows to update.

    Every star id lands in exactly one list. A repository listed more
    than once (the starred list can shift while it is paged) is planned
    once, from its last occurrence. The index is only read.
    """
    latest: dict[int, StarredRepo] = {}
    duplicates = set()

    for star in stars:
        if star.id in latest:
            duplicates.add(star.id)
            del latest[star.id]
        latest[star.id] = star

    plan = SyncPlan(duplicates=frozenset(duplicates))

    for star in latest.values():
        page_id = index.get(star.id)
        if page_id is None:
            plan.to_create.append(CreatePage(star))
        else:
            plan.to_update.append(UpdatePage(page_id, star))

    return plan
