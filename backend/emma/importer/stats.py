from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from emma.models.enums import FGroupType


RULE = "=" * 60


@dataclass
class ImportStats:
    label: str
    processed: int = 0
    imported: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    def summary_lines(self) -> list[str]:
        lines = [f"  {self.label}:", f"    Imported: {self.imported}"]
        if self.updated:
            lines.append(f"    Updated: {self.updated}")
        if self.skipped:
            lines.append(f"    Skipped: {self.skipped}")
        if self.errors:
            lines.append(f"    Errors: {self.errors}")
        return lines

    def merge(self, other: "ImportStats", label: str = "Total") -> "ImportStats":
        return ImportStats(
            label=label,
            processed=self.processed + other.processed,
            imported=self.imported + other.imported,
            updated=self.updated + other.updated,
            skipped=self.skipped + other.skipped,
            errors=self.errors + other.errors,
        )


def format_import_summary(*sections: ImportStats) -> str:
    lines = ["", RULE, "Import Summary", RULE]
    for section in sections:
        lines.append("")
        lines.extend(section.summary_lines())
    lines.extend(["", RULE, "Import complete!", RULE])
    return "\n".join(lines)


@dataclass
class TranslationStats:
    total_processed: int = 0
    igroups_created: int = 0
    fgroups_created: int = 0
    fgroups_by_type: Counter = field(default_factory=Counter)
    missing_area_mapping: int = 0
    missing_community_mapping: int = 0
    skipped: int = 0

    @property
    def errors(self) -> int:
        return self.skipped

    def record_fgroup(self, group_type: FGroupType) -> None:
        self.fgroups_created += 1
        self.fgroups_by_type[group_type] += 1

    def has_warnings(self) -> bool:
        return bool(
            self.missing_area_mapping or self.missing_community_mapping or self.skipped
        )

    def format_summary(self) -> str:
        lines = [
            "",
            RULE,
            "Translation Complete!",
            RULE,
            f"   Total files processed: {self.total_processed}",
            "",
            f"   IGroups created: {self.igroups_created}",
            f"   FGroups created: {self.fgroups_created}",
            "",
            "   FGroup breakdown:",
        ]
        for group_type in FGroupType:
            lines.append(f"   - {group_type.value}: {self.fgroups_by_type[group_type]}")
        if self.has_warnings():
            lines.extend(["", "   Warnings:"])
            if self.missing_area_mapping:
                lines.append(f"   - Missing area mapping: {self.missing_area_mapping} groups")
            if self.missing_community_mapping:
                lines.append(
                    f"   - Missing community mapping: {self.missing_community_mapping} groups"
                )
            if self.skipped:
                lines.append(f"   - Skipped/Failed: {self.skipped} files")
        return "\n".join(lines)


@dataclass
class ExtractionStats:
    memberships_processed: int = 0
    members_processed: int = 0
    warriors_created: int = 0
    duplicates_merged: int = 0
    skipped: int = 0
    failed_files: int = 0
    missing_civicrm_id: int = 0
    missing_email: int = 0
    missing_name: int = 0
    name_parse_failed: int = 0

    def format_summary(self) -> str:
        lines = [
            "",
            RULE,
            "Extraction Complete!",
            RULE,
            f"   Membership files processed: {self.memberships_processed}",
            f"   Total members processed: {self.members_processed}",
            f"   Unique warriors created: {self.warriors_created}",
            f"   Duplicates merged: {self.duplicates_merged}",
            f"   Skipped: {self.skipped}",
        ]
        if self.failed_files:
            lines.append(f"   Unreadable membership files: {self.failed_files}")
        lines.extend(
            [
                "",
                "   Warnings:",
                f"   - Missing CiviCRM ID: {self.missing_civicrm_id}",
                f"   - Missing email: {self.missing_email}",
                f"   - Missing name: {self.missing_name}",
                f"   - Name parsing failed: {self.name_parse_failed}",
            ]
        )
        return "\n".join(lines)


@dataclass
class MembershipStats:
    igroups_processed: int = 0
    igroups_updated: int = 0
    igroups_without_membership: int = 0
    igroups_skipped: int = 0
    members_matched: int = 0
    members_not_found: int = 0
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def format_summary(self, max_warnings: int = 10) -> str:
        lines = [
            "",
            RULE,
            "Membership Transformation Complete!",
            RULE,
            f"   IGroups processed: {self.igroups_processed}",
            f"   IGroups updated: {self.igroups_updated}",
            f"   IGroups with no membership data: {self.igroups_without_membership}",
            f"   IGroups skipped: {self.igroups_skipped}",
            "",
            f"   Members matched: {self.members_matched}",
            f"   Members not found: {self.members_not_found}",
        ]
        if self.warnings:
            lines.extend(["", f"   Warnings ({len(self.warnings)}):"])
            lines.extend(f"   - {warning}" for warning in self.warnings[:max_warnings])
            if len(self.warnings) > max_warnings:
                lines.append(f"   ... and {len(self.warnings) - max_warnings} more")
        return "\n".join(lines)
