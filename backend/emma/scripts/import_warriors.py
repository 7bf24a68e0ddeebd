"""Import warriors (person + warrior rows) from extracted JSON files.

Usage:
    python -m emma.scripts.import_warriors [ENV_FILE] [--force] [--host HOSTNAME]

The input host defaults to mkp-emma-v3.vercel.app when neither --host nor
HOSTNAME is set. Each file becomes one people row and one warriors row with
the same id, written together; ``mkpconnect_data.imported_at`` records when.
"""

from __future__ import annotations

from emma.core.config import DEFAULT_TARGET_HOST
from emma.importer.records import import_warrior
from emma.scripts.common import build_parser, run_import


def main(argv: list[str] | None = None) -> int:
    parser = build_parser("Import warriors from extracted JSON files.")
    args = parser.parse_args(argv)
    return run_import(
        args,
        entity="warriors",
        label="Warriors",
        handler=import_warrior,
        default_host=DEFAULT_TARGET_HOST,
    )


if __name__ == "__main__":
    raise SystemExit(main())
