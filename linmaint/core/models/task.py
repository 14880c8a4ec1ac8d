"""
Task models — the named maintenance operations and their outcomes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from linmaint.core.models.step import Receipt


class TaskName(str, Enum):
    """Menu entries, in display order. Values are the menu labels."""

    UPDATE_SYSTEM = "Update System"
    CLEAN_PACKAGE_CACHE = "Clean Package Cache"
    REMOVE_ORPHANS = "Remove Orphans"
    CLEAN_UNUSED_CACHE = "Clean Unused Cache"
    OPTIMIZE_PERFORMANCE = "Optimize Performance"
    UPDATE_MIRRORS = "Update Mirrors"
    CHECK_BROKEN_SYMLINKS = "Check Broken Symlinks"
    CLEAN_JOURNAL_LOGS = "Clean Journal Logs"
    CHECK_FILESYSTEM = "Check Filesystem"
    FULL_OPTIMIZATION = "Full Optimization"

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "-")

    @classmethod
    def from_label(cls, label: str) -> TaskName | None:
        """Match a menu label or slug, case-insensitively."""
        wanted = label.strip().lower()
        if not wanted:
            return None
        for task in cls:
            if wanted in (task.value.lower(), task.slug):
                return task
        return None


class Notice(BaseModel):
    """A notification that was sent to the user."""

    title: str
    message: str
    urgency: str = "normal"


class TaskReport(BaseModel):
    """Everything that happened while one task ran."""

    task: TaskName
    receipts: list[Receipt] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)
    findings: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.status == "skipped")

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"
