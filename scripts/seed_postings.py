#!/usr/bin/env python3
"""Seed the local posting store from a YAML file.

Loads postings into the sqlite database used by the ``sqlite`` store backend,
so the catalog can be browsed without access to the hosted API. Postings are
upserted by id, so re-running the script is safe.

Usage:
    # Seed the default database with the sample postings
    python scripts/seed_postings.py

    # Custom postings file and database path
    python scripts/seed_postings.py --postings my_postings.yaml --database /tmp/jobs.db

    # Shift every crawl date so the newest one is today
    python scripts/seed_postings.py --rebase-dates
"""

import argparse
import sys
from collections import Counter
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from jobcloud.catalog.dates import format_date_key
from jobcloud.domain.models import Posting
from jobcloud.logging.config import configure_logging
from jobcloud.persistence import PostingRepository, close_database, get_session, init_database


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def load_posting_rows(postings_path: Path) -> List[Dict[str, Any]]:
    """Read the ``postings`` list from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no ``postings`` list
    """
    if not postings_path.exists():
        raise FileNotFoundError(f"Postings file not found: {postings_path}")

    with open(postings_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    rows = data.get("postings") if isinstance(data, dict) else None
    if not isinstance(rows, list):
        raise ValueError(f"{postings_path} must contain a top-level 'postings' list")
    return rows


def rebase_dates(rows: List[Dict[str, Any]], today: date) -> List[Dict[str, Any]]:
    """Shift every crawled_date so that the newest one becomes today."""
    days = [date.fromisoformat(str(row["crawled_date"])) for row in rows if row.get("crawled_date")]
    if not days:
        return rows

    shift = today - max(days)
    rebased = []
    for row in rows:
        row = dict(row)
        if row.get("crawled_date"):
            shifted = date.fromisoformat(str(row["crawled_date"])) + shift
            row["crawled_date"] = format_date_key(shifted)
        rebased.append(row)
    return rebased


def print_summary_table(counts: Counter):
    """Print postings per crawl date, newest first."""
    print_header("Seeded Postings by Crawl Date")

    print("┌" + "─" * 14 + "┬" + "─" * 12 + "┐")
    print(f"│ {'Crawl Date':<12} │ {'Postings':<10} │")
    print("├" + "─" * 14 + "┼" + "─" * 12 + "┤")
    for date_key in sorted(counts, reverse=True):
        print(f"│ {date_key:<12} │ {counts[date_key]:<10} │")
    print("└" + "─" * 14 + "┴" + "─" * 12 + "┘")


def main():
    """Main entry point for the seed script."""
    parser = argparse.ArgumentParser(
        description="Load postings from YAML into the local posting store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--postings",
        type=Path,
        default=Path("docs/sample_postings.yaml"),
        help="Path to postings YAML file (default: docs/sample_postings.yaml)",
    )
    parser.add_argument(
        "--database",
        type=Path,
        default=Path("data/job_cloud.db"),
        help="Path to SQLite database (default: data/job_cloud.db)",
    )
    parser.add_argument(
        "--rebase-dates",
        action="store_true",
        help="Shift crawl dates so the newest one is today",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )

    args = parser.parse_args()

    load_dotenv()
    configure_logging(level=args.log_level, environment="seed")

    print_header("Job Cloud - Seed Local Posting Store")
    print(f"Postings file: {args.postings}")
    print(f"Database: {args.database}")

    try:
        rows = load_posting_rows(args.postings)
        if args.rebase_dates:
            rows = rebase_dates(rows, date.today())

        postings = [Posting.model_validate(row) for row in rows]
        print(f"✓ Loaded {len(postings)} postings")

        init_database(f"sqlite:///{args.database.absolute()}")
        with get_session() as session:
            repo = PostingRepository(session)
            repo.bulk_upsert(postings)
            total = repo.count()
        print(f"✓ Upserted {len(postings)} postings ({total} stored in total)")

        print_summary_table(Counter(posting.crawled_date for posting in postings))
        print(f"\nBrowse them with: job-cloud --date {max(p.crawled_date for p in postings)}\n" if postings else "")
        return 0

    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"\n❌ Error: {e}")
        return 1
    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1
    finally:
        close_database()


if __name__ == "__main__":
    sys.exit(main())
