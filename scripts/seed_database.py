#!/usr/bin/env python3
"""
CLI script to seed the database with activity logs from CSV files.

Usage:
    # Basic seeding
    python scripts/seed_database.py

    # Clear existing logs and payouts before seeding
    python scripts/seed_database.py --clear

    # Use a different data directory
    python scripts/seed_database.py --data-dir path/to/csv/files
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from carbon_ledger.core.config import get_config, get_config_file_for_environment
from carbon_ledger.database.base import get_db_url, get_engine_kw
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.services.seed_database import DEFAULT_DATA_DIR, DatabaseSeeder

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()


def print_header(text: str, style: str = "bold cyan"):
    """Print a formatted header using Rich Panel."""
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def print_config(args):
    """Print configuration details."""
    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Setting", style="bold yellow")
    config_table.add_column("Value", style="green")

    config_table.add_row("Data Directory", str(args.data_dir))
    config_table.add_row("Clear Existing", "Yes" if args.clear else "No")

    console.print(config_table)
    console.print()


def print_stats(stats: dict):
    """Print seeding statistics using Rich Table."""
    print_header("SEEDING STATISTICS", "bold green")

    stats_table = Table(show_header=True, box=None, padding=(0, 2))
    stats_table.add_column("Category", style="bold cyan", width=30)
    stats_table.add_column("Count", justify="right", style="bold green")

    stats_table.add_row("Activity Logs", str(stats["activity_logs"]))
    stats_table.add_row("Farmers", str(stats["owners"]))

    console.print(stats_table)

    if stats.get("errors"):
        console.print()
        console.print(
            Panel(
                f"[yellow]{len(stats['errors'])} rows skipped during seeding[/yellow]",
                border_style="yellow",
            )
        )
        for i, error in enumerate(stats["errors"][:5], 1):
            console.print(f"  {i}. [dim]{error}[/dim]")
        if len(stats["errors"]) > 5:
            console.print(f"  [dim]... and {len(stats['errors']) - 5} more[/dim]")

    console.print()


async def main():
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(
        description="Seed the database with activity logs from CSV files"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear existing logs and payouts before seeding",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=str(DEFAULT_DATA_DIR),
        help="Directory containing Activity_Logs.csv",
    )

    args = parser.parse_args()

    print_header("DATABASE SEEDING", "bold cyan")
    print_config(args)

    try:
        config = get_config(get_config_file_for_environment())
        async_db_url = get_db_url(config)
        Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
        logger.info("Database initialized")

        with console.status("[bold cyan]Seeding activity logs...", spinner="dots"):
            async with DatabaseSeeder(data_dir=args.data_dir) as seeder:
                stats = await seeder.seed_all(clear_existing=args.clear)

        print_stats(stats)

        console.print(
            Panel(
                Text("SEEDING COMPLETED SUCCESSFULLY", justify="center"),
                border_style="bold green",
                style="bold green",
            )
        )

    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        console.print()
        console.print(
            Panel(
                Text(f"SEEDING FAILED\n\n{e}", justify="center"),
                border_style="bold red",
                style="bold red",
            )
        )
        sys.exit(1)
    finally:
        await Database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
