"""Summarize raw coverage reports into per-file and per-group percentages."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from covdiff.adapters.simplecov import SimpleCovAdapter
from covdiff.errors import InvalidInputError
from covdiff.models.coverage import CoverageSummary, FileCoverage, GroupCoverage
from covdiff.models.report import RawReport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covdiff.models.report import BranchEntry

logger = logging.getLogger(__name__)

FULL_COVERAGE = 100.0
PERCENT_DIGITS = 2


def floor_digits(value: float, digits: int = 0) -> float:
    """Truncate *value* to *digits* decimal places (never rounds up).

    Coverage is floored so that 66.666% reads as 66.66%, not 66.67%.
    """
    scale = 10**digits
    return math.floor(value * scale) / scale


def _check_hits(hits: Any, where: str) -> int:
    if isinstance(hits, bool) or not isinstance(hits, int) or hits < 0:
        msg = f"{where} must be a non-negative integer hit count (got: {hits!r})"
        raise InvalidInputError(msg)
    return hits


def lines_coverage(lines: Sequence[int | None]) -> float:
    """Return the percentage of executable lines that were hit.

    ``None`` entries are non-executable and ignored. A file without any
    executable line counts as fully covered.
    """
    effective = [_check_hits(hit, "line hit count") for hit in lines if hit is not None]
    if not effective:
        return FULL_COVERAGE

    covered = sum(1 for hit in effective if hit > 0)
    return floor_digits(covered / len(effective) * 100, PERCENT_DIGITS)


def branches_coverage(branches: Sequence[BranchEntry]) -> float:
    """Return the percentage of branches taken at least once.

    A file without branches counts as fully covered.
    """
    if not branches:
        return FULL_COVERAGE

    covered = 0
    for branch in branches:
        if _check_hits(branch.coverage, "branch coverage") > 0:
            covered += 1
    return floor_digits(covered / len(branches) * 100, PERCENT_DIGITS)


def build_summary(report: RawReport | Mapping[str, Any]) -> CoverageSummary:
    """Summarize a raw report.

    Args:
        report: A :class:`RawReport`, or a decoded SimpleCov JSON document
            which is validated first.

    Returns:
        Files and groups in the order the report lists them. Group
        percentages are copied unchanged.

    Raises:
        InvalidInputError: If the report is malformed.
    """
    if isinstance(report, Mapping):
        report = SimpleCovAdapter().parse_report(dict(report))
    elif not isinstance(report, RawReport):
        msg = f"expected a coverage report (got: {type(report).__name__})"
        raise InvalidInputError(msg)

    files = tuple(
        FileCoverage(
            filename=filename,
            lines=lines_coverage(raw.lines),
            branches=branches_coverage(raw.branches),
        )
        for filename, raw in report.coverage.items()
    )
    groups = tuple(
        GroupCoverage(name=name, covered_percent=covered_percent)
        for name, covered_percent in report.groups.items()
    )

    logger.debug("Summarized %d files and %d groups", len(files), len(groups))
    return CoverageSummary(files=files, groups=groups)
