"""Data models for covdiff."""

from covdiff.models.coverage import CoverageSummary, FileCoverage, GroupCoverage
from covdiff.models.diff import (
    CoverageChange,
    CoverageDiff,
    FileCoverageDiff,
    GroupCoverageDiff,
)
from covdiff.models.report import BranchEntry, RawFileCoverage, RawReport

__all__ = [
    "BranchEntry",
    "CoverageChange",
    "CoverageDiff",
    "CoverageSummary",
    "FileCoverage",
    "FileCoverageDiff",
    "GroupCoverage",
    "GroupCoverageDiff",
    "RawFileCoverage",
    "RawReport",
]
