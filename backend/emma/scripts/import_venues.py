"""Import venues from exported JSON files.

Usage:
    python -m emma.scripts.import_venues [ENV_FILE] [--force] [--host HOSTNAME]

Reads data/<host>/venues/*.json and writes each record to the venues table,
skipping records that already exist unless --force is given.
"""

from __future__ import annotations

from emma.importer.records import import_venue
from emma.scripts.common import build_parser, run_import


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import venues from exported JSON files.")
    args = parser.parse_args(argv)
    return run_import(args, entity="venues", label="Venues", handler=import_venue)


if __name__ == "__main__":
    raise SystemExit(main())
