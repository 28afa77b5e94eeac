"""
Main sync engine for GitHub Stars → Notion synchronization.

Orchestrates:
- Reading existing rows from the Notion database
- Reading the user's stars from GitHub
- Deciding which rows to create and which to update
- Writing rows in bounded concurrent batches
"""

from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from stars_sync.batching import OperationResult, run_in_batches
from stars_sync.config import Config
from stars_sync.github_api import GitHubAPI
from stars_sync.notion_api import NotionAPI
from stars_sync.property_mapper import get_properties_from_star
from stars_sync.reconciler import CreatePage, IdentityIndex, SyncPlan, UpdatePage, plan_operations

console = Console()


@dataclass
class SyncResult:
    """Result of a sync operation."""

    fetched_rows: int = 0
    fetched_stars: int = 0
    created: list[OperationResult] = field(default_factory=list)
    updated: list[OperationResult] = field(default_factory=list)
    failed: list[OperationResult] = field(default_factory=list)
    plan: Optional[SyncPlan] = None
    dry_run: bool = False

    @property
    def has_failures(self) -> bool:
        """Check if any individual write failed."""
        return len(self.failed) > 0


class SyncEngine:
    """
    Main orchestrator for GitHub Stars → Notion synchronization.

    Coordinates all components to perform the sync:
    1. Snapshot the rows already in the database
    2. Snapshot the user's stars
    3. Split stars into creates and updates
    4. Write creates, then updates, in batches
    """

    def __init__(
        self,
        config: Config,
        github_api: Optional[GitHubAPI] = None,
        notion_api: Optional[NotionAPI] = None,
    ):
        """
        Initialize sync engine.

        Args:
            config: Configuration instance.
            github_api: Optional GitHub client, built from config if omitted.
            notion_api: Optional Notion client, built from config if omitted.
        """
        self.config = config
        self.github_api = github_api or GitHubAPI(config)
        self.notion_api = notion_api or NotionAPI(config)

    def sync(self) -> SyncResult:
        """
        Perform full synchronization.

        Snapshot errors propagate; write errors are collected on the result.

        Returns:
            SyncResult with details of the operation.
        """
        result = SyncResult(dry_run=self.config.dry_run)

        console.print("\n[bold blue]🔄 Starting GitHub Stars → Notion Sync[/bold blue]\n")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Fetching rows from Notion...", total=None)
            rows = self.notion_api.get_database_rows(self.config.notion_database_id)
            progress.update(task, description=f"Fetched {len(rows)} rows from Notion")

            task = progress.add_task(
                f"Fetching stars for {self.config.github_user}...", total=None
            )
            stars = self.github_api.get_starred_repos(self.config.github_user)
            progress.update(task, description=f"Fetched {len(stars)} stars from GitHub")

        result.fetched_rows = len(rows)
        result.fetched_stars = len(stars)

        index = IdentityIndex.from_rows(rows)
        self._report_index(index)

        plan = plan_operations(stars, index)
        result.plan = plan

        if plan.duplicates:
            console.print(
                f"[yellow]Warning: GitHub listed {len(plan.duplicates)} repositories more than once; "
                f"each is synced once[/yellow]"
            )

        console.print(f"\n[cyan]{len(plan.to_create)}[/cyan] new stars to add to Notion.")
        console.print(f"[cyan]{len(plan.to_update)}[/cyan] stars to update in Notion.")

        if self.config.dry_run:
            self._print_preview(plan)
            return result

        self._write(plan, result)
        self._print_summary(result)

        return result

    def _report_index(self, index: IdentityIndex) -> None:
        """Warn about rows that cannot be matched reliably."""
        if index.unkeyed:
            console.print(
                f"[yellow]Warning: {index.unkeyed} rows have no Star ID and will be ignored[/yellow]"
            )

        if index.duplicates:
            ids = ", ".join(str(star_id) for star_id in sorted(index.duplicates))
            console.print(
                f"[yellow]Warning: several rows share Star ID {ids}; "
                f"only the last one will be updated[/yellow]"
            )

    def _write(self, plan: SyncPlan, result: SyncResult) -> None:
        """Apply creates then updates, collecting per-row outcomes."""
        batch_size = self.config.operation_batch_size

        if plan.to_create:
            console.print("\n[bold]Creating pages[/bold]")
            outcomes = run_in_batches(
                plan.to_create, self._create_page, batch_size, self._report_batch
            )
            self._collect(outcomes, result.created, result)

        if plan.to_update:
            console.print("\n[bold]Updating pages[/bold]")
            outcomes = run_in_batches(
                plan.to_update, self._update_page, batch_size, self._report_batch
            )
            self._collect(outcomes, result.updated, result)

    def _create_page(self, operation: CreatePage) -> dict:
        return self.notion_api.create_page(
            self.config.notion_database_id,
            get_properties_from_star(operation.star),
        )

    def _update_page(self, operation: UpdatePage) -> dict:
        return self.notion_api.update_page(
            operation.page_id,
            get_properties_from_star(operation.star),
        )

    def _collect(
        self,
        outcomes: list[OperationResult],
        succeeded: list[OperationResult],
        result: SyncResult,
    ) -> None:
        for outcome in outcomes:
            if outcome.ok:
                succeeded.append(outcome)
            else:
                result.failed.append(outcome)

    def _report_batch(self, number: int, outcomes: list[OperationResult]) -> None:
        for outcome in outcomes:
            if not outcome.ok:
                console.print(
                    f"[red]Failed to sync '{escape(outcome.item.star.title)}': {escape(str(outcome.error))}[/red]"
                )

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        suffix = f" ({failed} failed)" if failed else ""
        console.print(f"[dim]Completed batch {number}, size: {len(outcomes)}{suffix}[/dim]")

    def _print_preview(self, plan: SyncPlan) -> None:
        """Print the planned operations without applying them."""
        table = Table(title="Planned changes (dry run)")
        table.add_column("Action", style="cyan")
        table.add_column("Repository", style="white")
        table.add_column("Star ID", style="yellow")
        table.add_column("Page", style="dim")

        for operation in plan.to_create:
            table.add_row("create", escape(operation.star.title), str(operation.star.id), "")

        for operation in plan.to_update:
            table.add_row("update", escape(operation.star.title), str(operation.star.id), operation.page_id)

        console.print(table)
        console.print("[yellow]Dry run: no changes were written to Notion.[/yellow]\n")

    def _print_summary(self, result: SyncResult) -> None:
        """Print sync summary."""
        console.print("\n" + "=" * 50)
        console.print("[bold]Sync Summary[/bold]")
        console.print("=" * 50)

        table = Table(show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Rows in Notion", str(result.fetched_rows))
        table.add_row("Stars on GitHub", str(result.fetched_stars))
        table.add_row("Pages created", str(len(result.created)))
        table.add_row("Pages updated", str(len(result.updated)))
        table.add_row("Pages failed", str(len(result.failed)))
        table.add_row("GitHub requests", str(self.github_api.request_count))
        table.add_row("Notion requests", str(self.notion_api.request_count))

        console.print(table)

        if result.failed:
            titles = ", ".join(escape(outcome.item.star.title) for outcome in result.failed)
            console.print(f"\n[red]Failed:[/red] {titles}")
        else:
            console.print("\n[green]✅ Notion database is synced with GitHub.[/green]")

        console.print("")
