"""Import translated IGroups and FGroups.

Usage:
    python -m emma.scripts.import_groups [ENV_FILE] [--force] [--host HOSTNAME]

Reads data/<host>/i-groups/*.json and then data/<host>/f-groups/*.json, as
written by ``translate_groups``. A missing group directory is reported and
the other one is still imported.
"""

from __future__ import annotations

import logging
import sys
from functools import partial
from pathlib import Path

from emma.core.config import ConfigError
from emma.core.logging_config import configure_logging
from emma.importer.batch import ImportRunner, RecordHandler
from emma.importer.errors import SourceDirectoryError
from emma.importer.records import import_fgroup, import_igroup
from emma.importer.stats import ImportStats, format_import_summary
from emma.scripts.common import build_parser, open_sessionmaker, settings_from_args


logger = logging.getLogger(__name__)

GROUP_SOURCES = (
    ("i-groups", "IGroups", import_igroup),
    ("f-groups", "FGroups", import_fgroup),
)


def _run_section(
    runner: ImportRunner, source_dir: Path, label: str, handler: RecordHandler
) -> ImportStats:
    stats = ImportStats(label)
    print(f"\nReading {label} files from: {source_dir}")
    try:
        runner.run(source_dir, handler, stats)
    except SourceDirectoryError as exc:
        logger.warning("Could not read %s directory: %s", label, exc)
    return stats


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import translated IGroups and FGroups.")
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = settings_from_args(args)
        host_dir = settings.host_dir(args.host)
        session_factory = open_sessionmaker(settings)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    sections = []
    for dirname, label, handler in GROUP_SOURCES:
        runner = ImportRunner(session_factory, label=label)
        sections.append(
            _run_section(runner, host_dir / dirname, label, partial(handler, force=args.force))
        )
    print(format_import_summary(*sections))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
