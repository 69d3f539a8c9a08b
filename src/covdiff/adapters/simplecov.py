"""SimpleCov JSON coverage adapter.

Reads the document written by ``simplecov-json`` (or SimpleCov's own JSON
formatter) and validates it into a :class:`RawReport`.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from covdiff.errors import InvalidInputError
from covdiff.models.report import BranchEntry, RawFileCoverage, RawReport

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────

_COVERAGE_PATHS = ["coverage/coverage.json"]


# ── Adapter ──────────────────────────────────────────────────────


class SimpleCovAdapter:
    """Parse SimpleCov JSON reports into the raw report model.

    SimpleCov format::

        {
          "coverage": {
            "lib/foo.rb": {
              "lines": [1, 0, null, 2],
              "branches": [
                {"type": "then", "start_line": 3, "end_line": 3, "coverage": 1}
              ]
            }
          },
          "groups": {
            "Models": {"lines": {"covered_percent": 87.5}}
          }
        }
    """

    # ── Identity ─────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return "simplecov"

    @property
    def language(self) -> str:
        return "ruby"

    # ── Detection ────────────────────────────────────────────────

    def detect(self, project_path: Path) -> bool:
        """Return True if a SimpleCov JSON report exists under *project_path*."""
        return self.find_coverage_file(project_path) is not None

    def find_coverage_file(self, project_path: Path) -> Path | None:
        """Return the first standard SimpleCov JSON output that exists."""
        for coverage_path in _COVERAGE_PATHS:
            full_path = project_path / coverage_path
            if full_path.is_file():
                return full_path
        return None

    # ── Parsing ──────────────────────────────────────────────────

    def parse_coverage_file(self, coverage_file: Path) -> RawReport:
        """Read and validate a SimpleCov JSON file.

        Raises:
            InvalidInputError: If the file cannot be read, is not JSON, or
                does not have the SimpleCov shape.
        """
        try:
            with coverage_file.open(encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to parse coverage file %s: %s", coverage_file, e)
            msg = f"Cannot read coverage report {coverage_file}: {e}"
            raise InvalidInputError(msg) from e

        report = self.parse_report(data)
        logger.info(
            "Loaded %s: %d files, %d groups",
            coverage_file,
            len(report.coverage),
            len(report.groups),
        )
        return report

    def parse_report(self, data: Any) -> RawReport:
        """Validate a decoded SimpleCov document into a :class:`RawReport`.

        ``groups`` may be omitted. Key order is preserved.

        Raises:
            InvalidInputError: On any structural problem, naming the
                offending location.
        """
        if not isinstance(data, dict):
            msg = f"coverage report must be an object (got: {type(data).__name__})"
            raise InvalidInputError(msg)

        coverage_raw = data.get("coverage")
        if not isinstance(coverage_raw, dict):
            msg = "coverage report is missing the 'coverage' object"
            raise InvalidInputError(msg)

        groups_raw = data.get("groups", {})
        if groups_raw is None:
            groups_raw = {}
        if not isinstance(groups_raw, dict):
            msg = f"'groups' must be an object (got: {type(groups_raw).__name__})"
            raise InvalidInputError(msg)

        coverage = {
            str(filename): _parse_file_coverage(str(filename), file_data)
            for filename, file_data in coverage_raw.items()
        }
        groups = {
            str(name): _parse_group_percent(str(name), group_data)
            for name, group_data in groups_raw.items()
        }

        logger.debug("Parsed SimpleCov report with %d files", len(coverage))
        return RawReport(coverage=coverage, groups=groups)


# ── Helper functions ─────────────────────────────────────────────


def _is_hit_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _parse_file_coverage(filename: str, data: Any) -> RawFileCoverage:
    """Validate the ``lines``/``branches`` entry of one file."""
    where = f"coverage[{filename!r}]"
    if not isinstance(data, dict):
        msg = f"{where} must be an object"
        raise InvalidInputError(msg)

    lines_raw = data.get("lines")
    if not isinstance(lines_raw, list):
        msg = f"{where}.lines must be an array"
        raise InvalidInputError(msg)

    for index, hit in enumerate(lines_raw):
        if hit is not None and not _is_hit_count(hit):
            msg = (
                f"{where}.lines[{index}] must be a non-negative integer or null "
                f"(got: {hit!r})"
            )
            raise InvalidInputError(msg)

    # Older SimpleCov versions omit branches when branch coverage is disabled
    branches_raw = data.get("branches", [])
    if branches_raw is None:
        branches_raw = []
    if not isinstance(branches_raw, list):
        msg = f"{where}.branches must be an array"
        raise InvalidInputError(msg)

    branches = tuple(
        _parse_branch(f"{where}.branches[{index}]", entry)
        for index, entry in enumerate(branches_raw)
    )
    return RawFileCoverage(lines=tuple(lines_raw), branches=branches)


def _parse_branch(where: str, entry: Any) -> BranchEntry:
    if not isinstance(entry, dict):
        msg = f"{where} must be an object"
        raise InvalidInputError(msg)

    hits = entry.get("coverage")
    if not _is_hit_count(hits):
        msg = f"{where}.coverage must be a non-negative integer (got: {hits!r})"
        raise InvalidInputError(msg)

    start_line = entry.get("start_line", 0)
    end_line = entry.get("end_line", 0)
    return BranchEntry(
        coverage=hits,
        type=str(entry.get("type", "")),
        start_line=start_line if isinstance(start_line, int) else 0,
        end_line=end_line if isinstance(end_line, int) else 0,
    )


def _parse_group_percent(name: str, data: Any) -> float:
    where = f"groups[{name!r}]"
    lines = data.get("lines") if isinstance(data, dict) else None
    if not isinstance(lines, dict):
        msg = f"{where}.lines must be an object"
        raise InvalidInputError(msg)

    percent = lines.get("covered_percent")
    if not _is_number(percent):
        msg = f"{where}.lines.covered_percent must be a number (got: {percent!r})"
        raise InvalidInputError(msg)
    return percent
