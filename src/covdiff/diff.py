"""Diff two coverage summaries at file and group granularity.

Both diffs walk the sorted union of identifiers from the two summaries, so
their output order does not depend on the order of either report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from covdiff.models.diff import CoverageChange, FileCoverageDiff, GroupCoverageDiff

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covdiff.models.coverage import CoverageSummary, FileCoverage, GroupCoverage

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ── Pairing ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class OnlyBase(Generic[T]):
    """Present in the base summary only."""

    base: T


@dataclass(frozen=True)
class OnlyHead(Generic[T]):
    """Present in the head summary only."""

    head: T


@dataclass(frozen=True)
class Both(Generic[T]):
    """Present in both summaries."""

    base: T
    head: T


Pairing = OnlyBase[T] | OnlyHead[T] | Both[T]


def pair(base: T | None, head: T | None) -> Pairing[T]:
    """Pair up the two sides of one identifier.

    Raises:
        AssertionError: If both sides are missing. The union iteration
            never produces such an identifier.
    """
    if base is not None and head is not None:
        return Both(base, head)
    if base is not None:
        return OnlyBase(base)
    if head is not None:
        return OnlyHead(head)
    msg = "no coverages"
    raise AssertionError(msg)


def _merge_keys(base: Iterable[str], head: Iterable[str]) -> list[str]:
    return sorted({*base, *head})


# ── File diff ────────────────────────────────────────────────────


def _file_changed(pairing: Pairing[FileCoverage]) -> bool:
    if not isinstance(pairing, Both):
        return True
    # Both sides are already floored to 2 decimals, so exact comparison
    return (
        pairing.base.lines != pairing.head.lines
        or pairing.base.branches != pairing.head.branches
    )


def _make_file_diff(pairing: Pairing[FileCoverage]) -> FileCoverageDiff:
    if isinstance(pairing, OnlyHead):
        head = pairing.head
        return FileCoverageDiff(
            filename=head.filename,
            lines=CoverageChange(from_=None, to=head.lines),
            branches=CoverageChange(from_=None, to=head.branches),
        )
    if isinstance(pairing, OnlyBase):
        base = pairing.base
        return FileCoverageDiff(
            filename=base.filename,
            lines=CoverageChange(from_=base.lines, to=None),
            branches=CoverageChange(from_=base.branches, to=None),
        )
    return FileCoverageDiff(
        filename=pairing.head.filename,
        lines=CoverageChange(from_=pairing.base.lines, to=pairing.head.lines),
        branches=CoverageChange(from_=pairing.base.branches, to=pairing.head.branches),
    )


def diff_files(base: CoverageSummary, head: CoverageSummary) -> list[FileCoverageDiff]:
    """Return the files whose coverage differs between *base* and *head*.

    A file present on one side only is always reported, with the missing
    side set to ``None``. Files with identical line and branch percentages
    are left out.
    """
    base_files = base.files_map()
    head_files = head.files_map()

    diff: list[FileCoverageDiff] = []
    for filename in _merge_keys(base_files, head_files):
        pairing = pair(base_files.get(filename), head_files.get(filename))
        if _file_changed(pairing):
            diff.append(_make_file_diff(pairing))

    logger.debug("File diff: %d of %d files changed", len(diff), len(base_files | head_files))
    return diff


# ── Group diff ───────────────────────────────────────────────────


def _group_changed(pairing: Pairing[GroupCoverage]) -> bool:
    if not isinstance(pairing, Both):
        return True
    return pairing.base.covered_percent != pairing.head.covered_percent


def _make_group_diff(pairing: Pairing[GroupCoverage]) -> GroupCoverageDiff:
    if isinstance(pairing, OnlyHead):
        return GroupCoverageDiff(
            name=pairing.head.name, from_=None, to=pairing.head.covered_percent
        )
    if isinstance(pairing, OnlyBase):
        return GroupCoverageDiff(
            name=pairing.base.name, from_=pairing.base.covered_percent, to=None
        )
    return GroupCoverageDiff(
        name=pairing.head.name,
        from_=pairing.base.covered_percent,
        to=pairing.head.covered_percent,
    )


def diff_groups(
    base: CoverageSummary,
    head: CoverageSummary,
    *,
    diff_only: bool,
) -> list[GroupCoverageDiff]:
    """Return group coverage changes between *base* and *head*.

    Args:
        base: The older summary.
        head: The newer summary.
        diff_only: Only report groups whose ``covered_percent`` changed or
            that exist on one side only. When False, every group of either
            summary is reported.
    """
    base_groups = base.groups_map()
    head_groups = head.groups_map()

    diff: list[GroupCoverageDiff] = []
    for name in _merge_keys(base_groups, head_groups):
        pairing = pair(base_groups.get(name), head_groups.get(name))
        if not diff_only or _group_changed(pairing):
            diff.append(_make_group_diff(pairing))

    logger.debug("Group diff: %d entries (diff_only=%s)", len(diff), diff_only)
    return diff
