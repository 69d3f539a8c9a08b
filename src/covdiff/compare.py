"""Entry points that run the whole summarize-then-diff pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from covdiff.adapters.simplecov import SimpleCovAdapter
from covdiff.config import validate_config
from covdiff.diff import diff_files, diff_groups
from covdiff.errors import InvalidInputError
from covdiff.models.diff import CoverageDiff
from covdiff.summary import build_summary

if TYPE_CHECKING:
    from collections.abc import Mapping

    from covdiff.config import CovDiffConfig
    from covdiff.models.coverage import CoverageSummary
    from covdiff.models.report import RawReport

logger = logging.getLogger(__name__)


def compare_summaries(
    base: CoverageSummary,
    head: CoverageSummary,
    *,
    groups_diff_only: bool = False,
) -> CoverageDiff:
    """Diff two summaries at file and group level."""
    result = CoverageDiff(
        files=diff_files(base, head),
        groups=diff_groups(base, head, diff_only=groups_diff_only),
    )
    logger.info(
        "Coverage diff: %d files changed, %d group entries",
        len(result.files),
        len(result.groups),
    )
    return result


def compare_reports(
    base: RawReport | Mapping[str, Any],
    head: RawReport | Mapping[str, Any],
    *,
    groups_diff_only: bool = False,
) -> CoverageDiff:
    """Summarize two raw reports and diff them.

    Raises:
        InvalidInputError: If either report is malformed.
    """
    return compare_summaries(
        build_summary(base),
        build_summary(head),
        groups_diff_only=groups_diff_only,
    )


def compare_report_files(config: CovDiffConfig) -> CoverageDiff:
    """Load the base and head reports named by *config* and diff them.

    Raises:
        InvalidInputError: If the configuration is invalid, or a report is
            missing, unreadable or malformed.
    """
    errors = validate_config(config)
    if errors:
        msg = "Invalid configuration: " + "; ".join(errors)
        raise InvalidInputError(msg)

    adapter = SimpleCovAdapter()
    reports = []
    for path in (config.base_report_path, config.head_report_path):
        if not path.is_file():
            msg = f"Coverage report not found: {path}"
            raise InvalidInputError(msg)
        reports.append(adapter.parse_coverage_file(path))

    base, head = reports
    return compare_reports(base, head, groups_diff_only=config.diff.groups_diff_only)
