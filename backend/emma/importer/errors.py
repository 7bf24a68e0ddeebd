from __future__ import annotations


class ImportRecordError(Exception):
    """A failure confined to one input record; the batch keeps going."""


class RecordParseError(ImportRecordError):
    pass


class ForeignKeyError(ImportRecordError):
    pass


class RecordWriteError(ImportRecordError):
    def __init__(self, table: str, action: str, message: str) -> None:
        super().__init__(f"Error {action} {table}: {message}")
        self.table = table
        self.action = action


class SourceDirectoryError(RuntimeError):
    pass
