"""Raw coverage report models (the simplecov-json shape, already decoded)."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class BranchEntry:
    """A single branch as reported by SimpleCov."""

    coverage: int
    """Number of times the branch was taken."""

    type: str = ""
    """Branch kind (``then``, ``else``, ``when``, ...)."""

    start_line: int = 0
    end_line: int = 0

    @property
    def is_covered(self) -> bool:
        """Return True if this branch was taken at least once."""
        return self.coverage > 0


@dataclass(frozen=True)
class RawFileCoverage:
    """Per-line and per-branch hit data for one source file."""

    lines: tuple[int | None, ...] = ()
    """Hit count per source line; ``None`` marks a non-executable line."""

    branches: tuple[BranchEntry, ...] = ()


@dataclass(frozen=True)
class RawReport:
    """A decoded coverage report.

    Both mappings keep the key order of the source document.
    """

    coverage: Mapping[str, RawFileCoverage] = field(default_factory=dict)
    """Raw coverage keyed by filename."""

    groups: Mapping[str, float] = field(default_factory=dict)
    """Pre-computed ``covered_percent`` keyed by group name."""

    def __post_init__(self) -> None:
        # Read-only copies; the caller keeps ownership of the passed mappings
        object.__setattr__(self, "coverage", MappingProxyType(dict(self.coverage)))
        object.__setattr__(self, "groups", MappingProxyType(dict(self.groups)))
