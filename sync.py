#!/usr/bin/env python3
"""
GitHub Stars → Notion Sync CLI

Usage:
    python sync.py              # Run full sync
    python sync.py sync         # Same as above
    python sync.py version      # Show version information

All settings come from the environment (or a .env file):
GH_USER_TOKEN, GH_STARS_USER, NOTION_KEY and NOTION_DATABASE_ID are
required; DRY_RUN, DEBUG and OPERATION_BATCH_SIZE are optional.
"""

import sys
import traceback

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from stars_sync import __version__
from stars_sync.config import Config
from stars_sync.sync_engine import SyncEngine

console = Console()


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """
    GitHub Stars → Notion Sync

    Mirrors a GitHub user's starred repositories into a Notion database.
    """
    # If no subcommand, run sync
    if ctx.invoked_subcommand is None:
        ctx.invoke(sync)


@cli.command()
def sync():
    """Run synchronization from GitHub to Notion."""
    load_dotenv()

    try:
        config = Config.from_env()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        console.print("\n[dim]Make sure you have created a .env file with your credentials.[/dim]")
        console.print("[dim]See .env.example for the required variables.[/dim]")
        sys.exit(1)

    try:
        engine = SyncEngine(config)
        engine.sync()
    except KeyboardInterrupt:
        console.print("\n[yellow]Sync cancelled.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if config.debug:
            traceback.print_exc()
        sys.exit(1)


@cli.command()
def version():
    """Show version information."""
    console.print(f"GitHub Stars → Notion Sync v{__version__}")


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
