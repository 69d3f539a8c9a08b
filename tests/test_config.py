"""Tests for config.py: .covdiff.yml parsing and validation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import yaml

from covdiff.config import (
    CovDiffConfig,
    DiffConfig,
    ReportsConfig,
    _resolve_dict,
    _resolve_env_vars,
    load_config,
    validate_config,
)
from covdiff.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterator


def _write_config(root: Path, data: dict[str, Any]) -> None:
    """Write .covdiff.yml with given data."""
    (root / ".covdiff.yml").write_text(yaml.dump(data), encoding="utf-8")


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("COVDIFF_BASE_REPORT", raising=False)
    monkeypatch.delenv("COVDIFF_HEAD_REPORT", raising=False)
    yield


# ── _resolve_env_vars / _resolve_dict ─────────────────────────────────


class TestResolveEnvVars:
    def test_resolves_existing_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _resolve_env_vars("${MY_VAR}") == "hello"

    def test_missing_var_returns_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MISSING_VAR", raising=False)
        assert _resolve_env_vars("${MISSING_VAR}") == ""

    def test_no_vars_unchanged(self) -> None:
        assert _resolve_env_vars("plain text") == "plain text"


class TestResolveDict:
    def test_resolves_nested_dicts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INNER", "resolved")
        result = _resolve_dict({"outer": {"inner": "${INNER}"}})
        assert result["outer"]["inner"] == "resolved"

    def test_resolves_list_items(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ITEM", "x")
        result = _resolve_dict({"items": ["${ITEM}", 42]})
        assert result["items"] == ["x", 42]

    def test_passes_other_values(self) -> None:
        assert _resolve_dict({"flag": True, "n": 3}) == {"flag": True, "n": 3}


# ── load_config ──────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.root == str(tmp_path.resolve())
        assert config.reports == ReportsConfig()
        assert config.diff == DiffConfig()
        assert config.head_report_path == tmp_path.resolve() / "coverage/coverage.json"
        assert config.base_report_path == tmp_path.resolve() / "coverage/base/coverage.json"

    def test_reads_file(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            {
                "reports": {"base": "main.json", "head": "pr.json"},
                "diff": {"groups_diff_only": True},
            },
        )

        config = load_config(tmp_path)

        assert config.reports.base == "main.json"
        assert config.reports.head == "pr.json"
        assert config.diff.groups_diff_only is True
        assert config.raw["reports"]["head"] == "pr.json"

    def test_env_var_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVDIFF_BASE_REPORT", "/tmp/base.json")
        config = load_config(tmp_path)
        assert config.reports.base == "/tmp/base.json"
        assert config.base_report_path == Path("/tmp/base.json")

    def test_file_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVDIFF_HEAD_REPORT", "from-env.json")
        _write_config(tmp_path, {"reports": {"head": "from-file.json"}})
        assert load_config(tmp_path).reports.head == "from-file.json"

    def test_expands_placeholders(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CI_ARTIFACTS", "artifacts")
        _write_config(tmp_path, {"reports": {"base": "${CI_ARTIFACTS}/base.json"}})
        assert load_config(tmp_path).reports.base == "artifacts/base.json"

    def test_empty_path_uses_default(self, tmp_path: Path) -> None:
        (tmp_path / ".covdiff.yml").write_text("reports:\n  base:\n", encoding="utf-8")

        config = load_config(tmp_path)

        assert config.reports.base == "coverage/base/coverage.json"
        assert validate_config(config) == []

    def test_empty_path_uses_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVDIFF_HEAD_REPORT", "pr.json")
        (tmp_path / ".covdiff.yml").write_text("reports:\n  head: null\n", encoding="utf-8")
        assert load_config(tmp_path).reports.head == "pr.json"

    def test_malformed_sections_fall_back(self, tmp_path: Path) -> None:
        _write_config(tmp_path, {"reports": "nope", "diff": ["x"]})

        config = load_config(tmp_path)

        assert config.reports == ReportsConfig()
        assert config.diff == DiffConfig()

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        (tmp_path / ".covdiff.yml").write_text("- a\n- b\n", encoding="utf-8")
        assert load_config(tmp_path).raw == {}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".covdiff.yml").write_text("reports: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(tmp_path)


# ── validate_config ──────────────────────────────────────────────


class TestValidateConfig:
    def test_defaults_are_valid(self, tmp_path: Path) -> None:
        assert validate_config(load_config(tmp_path)) == []

    def test_missing_paths(self, tmp_path: Path) -> None:
        config = CovDiffConfig(root=str(tmp_path), reports=ReportsConfig(base="", head=""))

        errors = validate_config(config)

        assert "reports.base is required" in errors
        assert "reports.head is required" in errors

    def test_same_file(self, tmp_path: Path) -> None:
        config = CovDiffConfig(
            root=str(tmp_path),
            reports=ReportsConfig(base="cov.json", head="./cov.json"),
        )

        errors = validate_config(config)

        assert len(errors) == 1
        assert "same file" in errors[0]
