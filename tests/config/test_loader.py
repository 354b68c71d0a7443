"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: kwargs > env > project yaml > global yaml > defaults
- resolve_path() function
"""

from __future__ import annotations

from pathlib import Path

import pytest

from covbadge.config.loader import (
    PROJECT_CONFIG_DIR,
    PROJECT_CONFIG_NAME,
    _deep_merge,
    _load_yaml,
    load_config,
    resolve_path,
)
from covbadge.config.models import CovBadgeConfig, CoverageConfig
from covbadge.core.errors import ConfigError, ErrorCode


def _write_project_yaml(root: Path, content: str) -> Path:
    config_dir = root / PROJECT_CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / PROJECT_CONFIG_NAME
    path.write_text(content)
    return path


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("coverage:\n  required: 80\n")

        assert _load_yaml(yaml_file) == {"coverage": {"required": 80}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("coverage:\n  folder:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        base = {"badges": {"folder": ".", "colors": {"zero": "red"}}}
        override = {"badges": {"colors": {"complete": "green"}}}

        assert _deep_merge(base, override) == {
            "badges": {"folder": ".", "colors": {"zero": "red", "complete": "green"}}
        }

    def test_does_not_mutate_base(self) -> None:
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert isinstance(config, CovBadgeConfig)
        assert config.coverage.folder == "coverage"
        assert config.coverage.percent is None
        assert config.coverage.required == 0.0
        assert config.badges.coverage_badge_path == "coverage-summary.svg"
        assert config.badges.colors.complete == "#4bc124"
        assert config.logging.level == "WARNING"

    def test_project_yaml(self, tmp_path: Path) -> None:
        _write_project_yaml(tmp_path, "coverage:\n  required: 85\n  folder: build/cov\n")

        config = load_config(tmp_path)

        assert config.coverage.required == 85.0
        assert config.coverage.folder == "build/cov"
        assert config.coverage.lcov_info_path == "lcov.info"

    def test_project_yaml_overrides_global(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        global_yaml = tmp_path / "global.yaml"
        global_yaml.write_text(
            "badges:\n  folder: global-badges\n  colors:\n    zero: black\n"
        )
        monkeypatch.setattr("covbadge.config.loader.GLOBAL_CONFIG_PATH", global_yaml)
        project = tmp_path / "project"
        _write_project_yaml(project, "badges:\n  folder: docs/badges\n")

        config = load_config(project)

        assert config.badges.folder == "docs/badges"
        assert config.badges.colors.zero == "black"

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_project_yaml(tmp_path, "coverage:\n  percent: 10\n")
        monkeypatch.setenv("COVBADGE__COVERAGE__PERCENT", "87.5")

        config = load_config(tmp_path)

        assert config.coverage.percent == 87.5

    def test_nested_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVBADGE__BADGES__COLORS__ZERO", "crimson")

        assert load_config(tmp_path).badges.colors.zero == "crimson"

    def test_release_section_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("COVBADGE__RELEASE__NOTES_FOLDER", "docs/releases")

        assert load_config(tmp_path).release.notes_folder == "docs/releases"

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVBADGE__COVERAGE__REQUIRED", "50")

        config = load_config(tmp_path, coverage=CoverageConfig(required=75))

        assert config.coverage.required == 75.0

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        _write_project_yaml(tmp_path, "coverage:\n  required: 120\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        error = exc_info.value
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "coverage" in error.details["field"]

    def test_invalid_yaml_raises_parse_error(self, tmp_path: Path) -> None:
        _write_project_yaml(tmp_path, "coverage: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestResolvePath:
    """Tests for resolve_path function."""

    def test_joins_relative_parts(self, tmp_path: Path) -> None:
        assert resolve_path(tmp_path, "coverage", "lcov.info") == (
            tmp_path / "coverage" / "lcov.info"
        ).resolve()

    def test_absolute_part_restarts(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere"
        assert resolve_path(tmp_path / "project", "coverage", str(absolute)) == absolute.resolve()

    def test_normalizes_dot_segments(self, tmp_path: Path) -> None:
        assert resolve_path(tmp_path, ".", "a", "..", "b") == (tmp_path / "b").resolve()
