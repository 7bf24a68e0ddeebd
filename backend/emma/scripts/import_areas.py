"""Import areas and their area admins.

Usage:
    python -m emma.scripts.import_areas [ENV_FILE] [--force] [--host HOSTNAME]

Area files may carry an ``area_admins`` list. Admins are written in the same
transaction as their area; when any listed person is missing the area is
still imported and its admins are skipped with a warning. With --force the
existing admins of an updated area are replaced.
"""

from __future__ import annotations

from emma.importer.records import import_area
from emma.scripts.common import build_parser, run_import


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import areas (with area admins) from exported JSON files.")
    args = parser.parse_args(argv)
    return run_import(args, entity="areas", label="Areas", handler=import_area)


if __name__ == "__main__":
    raise SystemExit(main())
