"""Exceptions raised by covdiff."""

from __future__ import annotations


class CovDiffError(Exception):
    """Base exception for covdiff errors."""


class InvalidInputError(CovDiffError):
    """Raised when a raw coverage report is malformed or cannot be read."""


class ConfigError(CovDiffError):
    """Raised when ``.covdiff.yml`` cannot be parsed."""
