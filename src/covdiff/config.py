"""Configuration parsing from ``.covdiff.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from covdiff.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".covdiff.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_DEFAULT_BASE_REPORT = "coverage/base/coverage.json"
_DEFAULT_HEAD_REPORT = "coverage/coverage.json"


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class ReportsConfig:
    """Locations of the two coverage reports to compare."""

    base: str = _DEFAULT_BASE_REPORT
    """SimpleCov JSON report of the baseline (e.g. the target branch)."""

    head: str = _DEFAULT_HEAD_REPORT
    """SimpleCov JSON report of the change under review."""


@dataclass
class DiffConfig:
    """Diff behaviour."""

    groups_diff_only: bool = False
    """Only report groups whose coverage changed."""


@dataclass
class CovDiffConfig:
    """Top-level configuration."""

    root: str
    """Project root; relative report paths resolve against it."""

    reports: ReportsConfig = field(default_factory=ReportsConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)

    raw: dict[str, Any] = field(default_factory=dict)
    """The resolved YAML document, for sections covdiff does not model."""

    @property
    def base_report_path(self) -> Path:
        return Path(self.root) / self.reports.base

    @property
    def head_report_path(self) -> Path:
        return Path(self.root) / self.reports.head


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        logger.warning("Ignoring malformed '%s' section in %s", name, CONFIG_FILENAME)
        return {}
    return value


def _report_path(reports_raw: dict[str, Any], key: str, env_var: str, default: str) -> str:
    """Return the configured path, treating an empty YAML value as unset."""
    value = reports_raw.get(key)
    if value is None:
        return os.environ.get(env_var, default)
    return str(value)


def _parse_reports_config(raw: dict[str, Any]) -> ReportsConfig:
    """Parse the ``reports`` section, falling back to environment variables."""
    reports_raw = _section(raw, "reports")
    return ReportsConfig(
        base=_report_path(reports_raw, "base", "COVDIFF_BASE_REPORT", _DEFAULT_BASE_REPORT),
        head=_report_path(reports_raw, "head", "COVDIFF_HEAD_REPORT", _DEFAULT_HEAD_REPORT),
    )


def _parse_diff_config(raw: dict[str, Any]) -> DiffConfig:
    diff_raw = _section(raw, "diff")
    return DiffConfig(groups_diff_only=bool(diff_raw.get("groups_diff_only", False)))


def load_config(root: str | Path) -> CovDiffConfig:
    """Load and parse ``.covdiff.yml`` from *root*.

    Falls back to defaults and environment variables when the file is
    missing or incomplete.

    Raises:
        ConfigError: If the file exists but is not valid YAML.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        text = config_file.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {config_file}: {e}"
            raise ConfigError(msg) from e
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        logger.debug("Loaded configuration from %s", config_file)

    return CovDiffConfig(
        root=str(root_path),
        reports=_parse_reports_config(raw),
        diff=_parse_diff_config(raw),
        raw=raw,
    )


def validate_config(config: CovDiffConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.reports.base:
        errors.append("reports.base is required")
    if not config.reports.head:
        errors.append("reports.head is required")

    if (
        config.reports.base
        and config.reports.head
        and config.base_report_path.resolve() == config.head_report_path.resolve()
    ):
        errors.append(
            f"reports.base and reports.head point to the same file ({config.reports.head})"
        )

    return errors
