"""Import communities from exported JSON files.

Usage:
    python -m emma.scripts.import_communities [ENV_FILE] [--force] [--host HOSTNAME]

Reads data/<host>/communities/*.json and writes each record to the communities table,
skipping records that already exist unless --force is given.
"""

from __future__ import annotations

from emma.importer.records import import_community
from emma.scripts.common import build_parser, run_import


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import communities from exported JSON files.")
    args = parser.parse_args(argv)
    return run_import(args, entity="communities", label="Communities", handler=import_community)


if __name__ == "__main__":
    raise SystemExit(main())
