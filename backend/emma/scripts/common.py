from __future__ import annotations

import argparse
import dataclasses
import sys
from functools import partial
from pathlib import Path

from sqlalchemy.orm import sessionmaker

from emma.core.config import DEFAULT_TARGET_HOST, ConfigError, Settings, load_settings
from emma.core.logging_config import configure_logging
from emma.db.session import build_engine, build_sessionmaker
from emma.importer.batch import ImportRunner, RecordHandler
from emma.importer.errors import SourceDirectoryError
from emma.importer.stats import ImportStats, format_import_summary


DEFAULT_ENV_FILE = ".env"


def build_parser(description: str, *, force: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "env_file",
        nargs="?",
        default=None,
        help=f"Environment file to load (default: {DEFAULT_ENV_FILE}).",
    )
    if force:
        parser.add_argument(
            "--force",
            action="store_true",
            help="Update records that already exist instead of skipping them.",
        )
    parser.add_argument(
        "--host",
        default=None,
        help="Hostname selecting the data/<host> directory (default: HOSTNAME from the env file).",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Root of the data/<host>/<entity> tree.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    env_file = args.env_file or DEFAULT_ENV_FILE
    print(f"Loading environment variables from: {env_file}")
    settings = load_settings(env_file, required=args.env_file is not None)
    if args.data_dir is not None:
        settings = dataclasses.replace(settings, data_dir=args.data_dir)
    return settings


def resolve_hosts(args: argparse.Namespace, settings: Settings) -> tuple[str, str]:
    """Return the (target, source) hosts of the file-to-file scripts."""
    target = args.host or settings.hostname or DEFAULT_TARGET_HOST
    return target, args.source_host or settings.source_hostname


def open_sessionmaker(settings: Settings) -> sessionmaker:
    engine = build_engine(settings.require_database(), settings.echo_sql)
    return build_sessionmaker(engine)


def run_import(
    args: argparse.Namespace,
    *,
    entity: str,
    label: str,
    handler: RecordHandler,
    default_host: str | None = None,
) -> int:
    """Shared body of the single-directory import scripts."""
    configure_logging(args.verbose)
    try:
        settings = settings_from_args(args)
        source_dir = settings.host_dir(args.host, default_host) / entity
        session_factory = open_sessionmaker(settings)
        print(
            "Force mode: "
            + ("enabled (will update existing records)" if args.force else "disabled (will skip duplicates)")
        )
        print(f"Reading {entity} files from: {source_dir}")
        runner = ImportRunner(session_factory, label=label)
        stats = runner.run(source_dir, partial(handler, force=args.force), ImportStats(label))
    except (ConfigError, SourceDirectoryError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(format_import_summary(stats))
    return 0
