"""Tests for covbadge discover, generate, coverage-report and coverage-gate."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from covbadge.cli.main import cli

runner = CliRunner()


def _set_percent(root: Path, percent: float) -> None:
    config_dir = root / ".covbadge"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "config.yaml").write_text(f"coverage:\n  percent: {percent}\n")


class TestDiscoverCommand:
    """Tests for covbadge discover."""

    def test_reports_project_and_coverage(self, project_dir: Path) -> None:
        _set_percent(project_dir, 64.25)

        result = runner.invoke(cli, ["discover", str(project_dir)])

        assert result.exit_code == 0
        assert "Discovered project: demo, version: 1.2.3" in result.output
        assert "Discovered code coverage: 64.3%" in result.output

    def test_failures_are_not_fatal(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["discover", str(tmp_path)])

        assert result.exit_code == 0
        assert "Unable to discover project" in result.output
        assert "Unable to discover code coverage" in result.output


class TestGenerateCommand:
    """Tests for covbadge generate."""

    def test_writes_badges(self, project_dir: Path) -> None:
        result = runner.invoke(cli, ["generate", str(project_dir)])

        assert result.exit_code == 0
        assert (project_dir / "coverage-summary.svg").is_file()
        assert (project_dir / "version-badge.svg").is_file()
        assert "2 badges generated" in result.output

    def test_dry_run(self, project_dir: Path) -> None:
        result = runner.invoke(cli, ["generate", str(project_dir), "--dry-run"])

        assert result.exit_code == 0
        assert not (project_dir / "coverage-summary.svg").exists()
        assert not (project_dir / "version-badge.svg").exists()
        assert "2 badges planned" in result.output

    def test_nothing_to_generate(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["generate", str(tmp_path)])

        assert result.exit_code == 0
        assert "No badges generated" in result.output


class TestCoverageReportCommand:
    """Tests for covbadge coverage-report."""

    def test_writes_report(self, project_dir: Path) -> None:
        result = runner.invoke(cli, ["coverage-report", str(project_dir)])

        assert result.exit_code == 0
        index = project_dir / "coverage" / "lcov-report" / "index.html"
        content = index.read_text(encoding="utf-8")
        assert "<h1>Coverage Report</h1>" in content
        assert "main.py" in content
        assert "2 files" in result.output

    def test_missing_lcov_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["coverage-report", str(tmp_path)])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestCoverageGateCommand:
    """Tests for covbadge coverage-gate."""

    def test_no_gate_skips(self, tmp_path: Path) -> None:
        """With no gate configured coverage is not even discovered."""
        result = runner.invoke(cli, ["coverage-gate", str(tmp_path)])

        assert result.exit_code == 0
        assert "No coverage gate configured" in result.output

    def test_passes(self, project_dir: Path) -> None:
        _set_percent(project_dir, 75)

        result = runner.invoke(
            cli, ["coverage-gate", str(project_dir), "--required-coverage", "70"]
        )

        assert result.exit_code == 0
        assert "gate passed" in result.output

    def test_fails_below_gate(self, project_dir: Path) -> None:
        _set_percent(project_dir, 75)

        result = runner.invoke(
            cli, ["coverage-gate", str(project_dir), "--required-coverage", "80"]
        )

        assert result.exit_code == 1
        assert "Code coverage gate failed: 75.0% < 80.0%" in result.output

    def test_gate_from_config(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _set_percent(project_dir, 75)
        monkeypatch.setenv("COVBADGE__COVERAGE__REQUIRED", "90")

        result = runner.invoke(cli, ["coverage-gate", str(project_dir)])

        assert result.exit_code == 1
        assert "75.0% < 90.0%" in result.output

    def test_cli_value_overrides_config(
        self, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _set_percent(project_dir, 75)
        monkeypatch.setenv("COVBADGE__COVERAGE__REQUIRED", "90")

        result = runner.invoke(
            cli, ["coverage-gate", str(project_dir), "--required-coverage", "0"]
        )

        assert result.exit_code == 0
        assert "No coverage gate configured" in result.output

    @pytest.mark.parametrize("value", ["-5", "nan"])
    def test_invalid_required_value(self, project_dir: Path, value: str) -> None:
        result = runner.invoke(
            cli, ["coverage-gate", str(project_dir), f"--required-coverage={value}"]
        )

        assert result.exit_code == 1
        assert "Invalid value for 'required_coverage'" in result.output

    def test_no_coverage_fails_gate(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["coverage-gate", str(tmp_path), "--required-coverage", "10"])

        assert result.exit_code == 1
        assert "Unable to discover code coverage" in result.output


class TestApplyVersionCommand:
    """Tests for covbadge apply-version."""

    def test_writes_version_module_and_notes(self, project_dir: Path) -> None:
        (project_dir / "release-notes-template.md").write_text("# {{NAME}} v{{VERSION}}\n")

        result = runner.invoke(cli, ["apply-version", str(project_dir)])

        assert result.exit_code == 0
        assert "apply-version completed: demo v1.2.3" in result.output
        assert (project_dir / "_version.py").is_file()
        notes = project_dir / "notes" / "release-notes-v1.2.3.md"
        assert notes.read_text(encoding="utf-8") == "# demo v1.2.3\n"

    def test_existing_notes_left_alone(self, project_dir: Path) -> None:
        (project_dir / "release-notes-template.md").write_text("# {{NAME}}\n")
        notes = project_dir / "notes" / "release-notes-v1.2.3.md"
        notes.parent.mkdir()
        notes.write_text("kept")

        result = runner.invoke(cli, ["apply-version", str(project_dir)])

        assert result.exit_code == 0
        assert "already exist" in result.output
        assert notes.read_text() == "kept"

    def test_dry_run(self, project_dir: Path) -> None:
        result = runner.invoke(cli, ["apply-version", str(project_dir), "--dry-run"])

        assert result.exit_code == 0
        assert 'VERSION = "1.2.3"' in result.output
        assert "Release notes template not found" in result.output
        assert not (project_dir / "_version.py").exists()

    def test_no_project_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["apply-version", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error during apply-version: Unable to discover project" in result.output
