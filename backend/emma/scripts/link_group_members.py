"""Set the members of translated i-groups from the legacy rosters.

Usage:
    python -m emma.scripts.link_group_members [ENV_FILE] [--host HOST] [--source-host HOST]
        [--dry-run] [--pretty]

Run after translate_groups and extract_warriors. Rewrites every
data/<host>/i-groups/*.json file in place with ``members`` set to the ids of
the warriors in data/<host>/warriors that match the group's roster in
data/<source-host>/igroups/membership.
"""

from __future__ import annotations

import sys

from emma.core.config import ConfigError
from emma.core.logging_config import configure_logging
from emma.importer.errors import SourceDirectoryError
from emma.importer.membership import run_membership_link
from emma.scripts.common import build_parser, resolve_hosts, settings_from_args


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Link i-group members to extracted warriors.", force=False)
    parser.add_argument(
        "--source-host",
        default=None,
        help="Hostname of the legacy export directory (default: mkpconnect.org).",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Match everything but rewrite no files."
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
    print(f"Source hostname: {source_host}")
    print(f"Destination hostname: {target_host}")
    if args.dry_run:
        print("DRY RUN MODE - No files will be modified")

    try:
        stats = run_membership_link(
            target_dir / "i-groups",
            settings.data_dir / source_host / "igroups" / "membership",
            target_dir / "warriors",
            dry_run=args.dry_run,
            pretty=args.pretty,
        )
    except SourceDirectoryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(stats.format_summary())
    if args.dry_run:
        print("\n   DRY RUN - No files were modified")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
