"""Extract unique warriors from the MKP Connect i-group membership rosters.

Usage:
    python -m emma.scripts.extract_warriors [ENV_FILE] [--host HOST] [--source-host HOST]
        [--pretty]

Reads data/<source-host>/igroups/membership/*.json and writes one file per
unique member to data/<host>/warriors/<name>_<id8>.json, ready for
import_warriors. No database is needed.
"""

from __future__ import annotations

import sys

from emma.core.config import ConfigError
from emma.core.logging_config import configure_logging
from emma.importer.errors import SourceDirectoryError
from emma.importer.warriors import run_extraction
from emma.scripts.common import build_parser, resolve_hosts, settings_from_args


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Extract warriors from MKP Connect group memberships.", force=False)
    parser.add_argument(
        "--source-host",
        default=None,
        help="Hostname of the legacy export directory (default: mkpconnect.org).",
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
    source_dir = settings.data_dir / source_host / "igroups" / "membership"
    output_dir = settings.data_dir / target_host / "warriors"
    print(f"Reading membership files from: {source_dir}")
    print(f"Output directory: {output_dir}")

    try:
        stats = run_extraction(source_dir, output_dir, pretty=args.pretty)
    except SourceDirectoryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(stats.format_summary())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
