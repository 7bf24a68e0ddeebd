"""Translate MKP Connect i-group exports into Emma IGroup/FGroup files.

Usage:
    python -m emma.scripts.translate_groups [ENV_FILE] [--host HOST] [--source-host HOST]
        [--dry-run] [--pretty]

Reads data/<source-host>/igroups/*.json, resolves area and community names
against data/<host>/{areas,communities}, and writes one file per group to
data/<host>/{i-groups,f-groups}/<name>_<id8>.json. No database is needed.
"""

from __future__ import annotations

import sys

from emma.core.config import ConfigError
from emma.core.logging_config import configure_logging
from emma.importer.errors import SourceDirectoryError
from emma.importer.mappings import load_mappings
from emma.importer.translate import run_translation
from emma.scripts.common import build_parser, resolve_hosts, settings_from_args


def main(argv: list[str] | None = None) -> int:
    parser = build_parser(
        "Translate MKP Connect i-groups into IGroup/FGroup files.", force=False
    )
    parser.add_argument(
        "--source-host",
        default=None,
        help="Hostname of the legacy export directory (default: mkpconnect.org).",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Translate everything but write no files."
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print output JSON.")
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = settings_from_args(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    target_host, source_host = resolve_hosts(args, settings)
    target_dir = settings.data_dir / target_host
    source_dir = settings.data_dir / source_host / "igroups"

    print("\nMKP Connect to Emma v3 Group Translation")
    print(f"   Source: {source_host}")
    print(f"   Target: {target_host}")
    if args.dry_run:
        print("   Mode: DRY RUN (no files will be written)")

    print("\nLoading reference data...")
    mappings = load_mappings(target_dir)
    print(
        f"  Loaded {len(mappings.areas)} area mappings, "
        f"{len(mappings.communities)} community mappings"
    )

    print(f"\nReading source files from: {source_dir}")
    try:
        stats = run_translation(
            source_dir, target_dir, mappings, dry_run=args.dry_run, pretty=args.pretty
        )
    except SourceDirectoryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(stats.format_summary())
    if args.dry_run:
        print("\n   DRY RUN - No files were written")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
