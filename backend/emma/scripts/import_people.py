"""Import people from exported JSON files.

Run import_addresses first: billing, mailing and physical address ids must
already exist or the person is reported and skipped.

Usage:
    python -m emma.scripts.import_people [ENV_FILE] [--force] [--host HOSTNAME]

Reads data/<host>/people/*.json and writes each record to the people table,
skipping records that already exist unless --force is given.
"""

from __future__ import annotations

from emma.importer.records import import_person
from emma.scripts.common import build_parser, run_import


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import people from exported JSON files.")
    args = parser.parse_args(argv)
    return run_import(args, entity="people", label="People", handler=import_person)


if __name__ == "__main__":
    raise SystemExit(main())
