"""Import addresses from exported JSON files.

Usage:
    python -m emma.scripts.import_addresses [ENV_FILE] [--force] [--host HOSTNAME]
"""

from __future__ import annotations

from emma.importer.records import import_address
from emma.scripts.common import build_parser, run_import


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import addresses from exported JSON files.")
    args = parser.parse_args(argv)
    return run_import(args, entity="addresses", label="Addresses", handler=import_address)


if __name__ == "__main__":
    raise SystemExit(main())
