"""Coverage summary models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileCoverage:
    """Coverage percentages for a single source file."""

    filename: str

    lines: float
    """Line coverage percentage (0.0-100.0), floored to 2 decimals."""

    branches: float
    """Branch coverage percentage (0.0-100.0), floored to 2 decimals."""


@dataclass(frozen=True)
class GroupCoverage:
    """Coverage for a logical group of files (a folder, a module, ...)."""

    name: str

    covered_percent: float
    """Line coverage percentage exactly as the report states it."""


@dataclass(frozen=True)
class CoverageSummary:
    """Summarized coverage for a whole report.

    ``files`` and ``groups`` follow the key order of the raw report.
    """

    files: tuple[FileCoverage, ...] = ()
    groups: tuple[GroupCoverage, ...] = ()

    def files_map(self) -> dict[str, FileCoverage]:
        """Return file coverages keyed by filename."""
        return {file_cov.filename: file_cov for file_cov in self.files}

    def groups_map(self) -> dict[str, GroupCoverage]:
        """Return group coverages keyed by group name."""
        return {group_cov.name: group_cov for group_cov in self.groups}

    @property
    def filenames(self) -> list[str]:
        return [file_cov.filename for file_cov in self.files]

    @property
    def group_names(self) -> list[str]:
        return [group_cov.name for group_cov in self.groups]
