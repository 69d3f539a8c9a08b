"""Coverage diff models.

A side that is ``None`` means the file or group was absent from that
report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CoverageChange:
    """A percentage before and after."""

    from_: float | None
    to: float | None

    def to_dict(self) -> dict[str, float | None]:
        return {"from": self.from_, "to": self.to}


@dataclass(frozen=True)
class FileCoverageDiff:
    """Line and branch coverage change for one file."""

    filename: str
    lines: CoverageChange
    branches: CoverageChange

    @property
    def is_added(self) -> bool:
        """Return True if the file only exists in the newer report."""
        return self.lines.from_ is None

    @property
    def is_removed(self) -> bool:
        """Return True if the file only exists in the older report."""
        return self.lines.to is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "lines": self.lines.to_dict(),
            "branches": self.branches.to_dict(),
        }


@dataclass(frozen=True)
class GroupCoverageDiff:
    """Coverage change for one group."""

    name: str
    from_: float | None
    to: float | None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "from": self.from_, "to": self.to}


@dataclass(frozen=True)
class CoverageDiff:
    """File and group differences between two reports."""

    files: tuple[FileCoverageDiff, ...] = ()
    groups: tuple[GroupCoverageDiff, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "groups", tuple(self.groups))

    @property
    def has_changes(self) -> bool:
        """Return True if any file changed or any group entry was emitted."""
        return bool(self.files or self.groups)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [file_diff.to_dict() for file_diff in self.files],
            "groups": [group_diff.to_dict() for group_diff in self.groups],
        }
