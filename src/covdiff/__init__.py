"""covdiff: summarize SimpleCov coverage reports and diff two of them."""

from covdiff.compare import compare_report_files, compare_reports, compare_summaries
from covdiff.diff import diff_files, diff_groups
from covdiff.errors import ConfigError, CovDiffError, InvalidInputError
from covdiff.summary import branches_coverage, build_summary, floor_digits, lines_coverage

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "CovDiffError",
    "InvalidInputError",
    "branches_coverage",
    "build_summary",
    "compare_report_files",
    "compare_reports",
    "compare_summaries",
    "diff_files",
    "diff_groups",
    "floor_digits",
    "lines_coverage",
]
