"""Command-line entry point for browsing the Job Cloud catalog."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from jobcloud.catalog.dates import QUICK_DATES, parse_date_input, quick_date
from jobcloud.catalog.filtering import SearchField
from jobcloud.catalog.service import CatalogService
from jobcloud.catalog.suggestions import SUGGESTION_FIELDS
from jobcloud.config.environment import EnvironmentConfig
from jobcloud.config.exceptions import ConfigurationError
from jobcloud.config.loader import load_config
from jobcloud.config.models import AppConfig, StoreBackend
from jobcloud.logging import get_logger
from jobcloud.logging.config import configure_logging
from jobcloud.persistence.database import close_database, init_database
from jobcloud.presentation import (
    PlainTextRenderer,
    TemplateRenderer,
    build_detail_view,
    build_listing_view,
)
from jobcloud.stores.factory import get_store

logger = get_logger(__name__, component="cli")

QUERY_ARGUMENTS = (
    ("title", SearchField.TITLE, "Job title"),
    ("company", SearchField.COMPANY, "Company"),
    ("location", SearchField.LOCATION, "City or location"),
    ("job_type", SearchField.JOB_TYPE, "Job type"),
    ("job_level", SearchField.JOB_LEVEL, "Experience level"),
)


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > environment > config file > INFO.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Job Cloud - browse crawled job postings by date"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )

    when = parser.add_mutually_exclusive_group()
    when.add_argument("--date", default=None, help="Crawl date as YYYY-MM-DD (default: today)")
    when.add_argument(
        "--days-ago",
        type=int,
        default=None,
        help="Quick date: "
        + ", ".join(f"{offset} = {label.lower()}" for label, offset in QUICK_DATES.items()),
    )

    for dest, _, label in QUERY_ARGUMENTS:
        parser.add_argument(f"--{dest.replace('_', '-')}", dest=dest, default="", help=f"{label} search text")

    parser.add_argument("--pick", default=None, help="Show the detail of the posting with this id")
    parser.add_argument(
        "--suggest",
        choices=[field.value for field in SUGGESTION_FIELDS],
        default=None,
        help="Print autocomplete suggestions for a search field and exit",
    )
    parser.add_argument(
        "--list-dates",
        action="store_true",
        help="Print the dates that have postings and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def resolve_date(date_text: Optional[str], days_ago: Optional[int]) -> date:
    """Pick the date to browse. Invalid --date input is ignored in favour of today."""
    if days_ago is not None:
        return quick_date(days_ago)

    if date_text:
        parsed = parse_date_input(date_text)
        if parsed is not None:
            return parsed
        logger.warning(
            f"Ignoring invalid date: {date_text}",
            extra={"event": "cli.date_ignored", "input": date_text},
        )

    return date.today()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Job Cloud CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)
    store = None
    database_open = False

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=os.environ.get("ENVIRONMENT", "local"),
        )

        service_vocabularies = app_config.suggestions.vocabularies()

        if args.suggest:
            field = SearchField(args.suggest)
            service = CatalogService(store=None, vocabularies=service_vocabularies)
            service.set_query(field, getattr(args, field.value))
            service.focus_field(field)
            for candidate in service.suggestions(field):
                print(candidate)
            return 0

        if app_config.store.backend == StoreBackend.SQLITE.value:
            init_database(env_config.database_url)
            database_open = True

        store = get_store(app_config, env_config)
        service = CatalogService(
            store=store,
            vocabularies=service_vocabularies,
            hide_delay_seconds=app_config.suggestions.hide_delay_seconds,
        )

        logger.info(
            "Job Cloud starting",
            extra={
                "event": "service.starting",
                "backend": app_config.store.backend,
                "log_level": env_config.log_level,
            },
        )

        service.load_available_dates()

        if args.list_dates:
            for date_key in sorted(service.available_dates, reverse=True):
                print(date_key)
            return 0

        outcome = service.select_date(resolve_date(args.date, args.days_ago))
        if outcome.failed:
            print(f"Could not load postings for {outcome.date_key}: {outcome.error}", file=sys.stderr)

        for dest, field, _ in QUERY_ARGUMENTS:
            service.set_query(field, getattr(args, dest))

        if args.pick:
            service.pick_posting(args.pick)

        templates = TemplateRenderer()
        print(templates.render_listing(build_listing_view(service.state)))
        print(templates.render_detail(build_detail_view(service.selected, PlainTextRenderer())))
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=logging.getLogger().isEnabledFor(logging.DEBUG),
        )
        return 1
    finally:
        if store is not None:
            store.close()
        if database_open:
            close_database()


if __name__ == "__main__":
    sys.exit(main())
