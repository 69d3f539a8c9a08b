"""Adapters that load coverage reports into the raw report model."""

from covdiff.adapters.simplecov import SimpleCovAdapter

__all__ = ["SimpleCovAdapter"]
