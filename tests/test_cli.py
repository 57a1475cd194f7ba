"""
Tests for CLI commands — launch, check, resolve, can-launch, list, config.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from launchdeck.main import cli


def _write_config(tmp_path: Path, apps: list[dict]) -> Path:
    path = tmp_path / "apps.json"
    path.write_text(json.dumps({"apps": apps}))
    return path


@pytest.fixture
def real_config(tmp_path: Path) -> Path:
    """Config whose commands are real, harmless POSIX utilities."""
    return _write_config(
        tmp_path,
        [
            {"name": "ok", "type": "check", "command": "true"},
            {"name": "nope", "type": "check", "command": "false"},
            {"name": "exit3", "type": "check", "command": "sh", "args": ["-c", "exit 3"]},
            {"name": "ghost", "type": "check", "command": "launchdeck-no-such-binary"},
            {
                "name": "gated",
                "type": "executable",
                "command": "fallback",
                "dependencies": {"ok": {"on_success": "true --online"}},
            },
            {
                "name": "blocked",
                "type": "executable",
                "command": "true",
                "dependencies": {"nope": {"on_success": "true"}},
            },
            {"name": "plain", "type": "executable", "command": "true", "tags": ["web"]},
        ],
    )


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "launchdeck" in result.output
        for command in ("launch", "check", "resolve", "can-launch", "list", "config"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_config(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "none.json"), "launch"])
        assert result.exit_code == 1
        assert "Error loading configuration" in result.output

    def test_config_from_env(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("LAUNCHDECK_CONFIG", str(config_file))
        runner = CliRunner()
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert result.output.split() == ["mail", "editor", "intranet"]


# ── launch ───────────────────────────────────────────────────────────


class TestLaunchCommand:
    def test_dry_run_all(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "-r", "launch"])
        assert result.exit_code == 0
        assert "[dry-run] Would execute app 'mail': mail-client --online" in result.output
        assert "[dry-run] Would execute app 'editor': editor" in result.output
        assert "Execution Summary:" in result.output
        assert "Successfully launched: 3" in result.output

    def test_dry_run_single_app(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "--dry-run", "launch", "--app", "editor"]
        )
        assert result.exit_code == 0
        assert "'editor'" in result.output
        assert "'mail'" not in result.output

    def test_dry_run_group(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "-r", "launch", "-g", "work"]
        )
        assert result.exit_code == 0
        assert "'intranet'" in result.output
        assert "'editor'" not in result.output

    def test_dry_run_tags(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "-r", "launch", "-t", "comms,work"]
        )
        assert result.exit_code == 0
        assert "'mail'" in result.output
        assert "'intranet'" in result.output
        assert "'editor'" not in result.output

    def test_unknown_group_warns(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "-r", "launch", "-g", "nothing"]
        )
        assert result.exit_code == 0
        assert "no apps found with tag 'nothing'" in result.output

    def test_unknown_app(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "-r", "launch", "--app", "nope"]
        )
        assert result.exit_code == 1
        assert "app 'nope' not found" in result.output

    def test_json(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "-r", "launch", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["report"]["dry_run"] is True
        assert data["report"]["launched"] == 3
        assert data["report"]["skipped"] == 2

    def test_real_launch(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(real_config), "launch", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        receipts = {r["app"]: r for r in data["report"]["receipts"]}
        assert receipts["gated"]["status"] == "ok"
        assert receipts["gated"]["arguments"] == ["--online"]
        assert receipts["blocked"]["status"] == "skipped"
        assert receipts["plain"]["pid"] is not None

    def test_start_failure_exits_nonzero(self, tmp_path: Path):
        config = _write_config(
            tmp_path,
            [{"name": "broken", "type": "executable", "command": "launchdeck-no-such-binary"}],
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "launch"])
        assert result.exit_code == 1
        assert "failed to start app 'broken'" in result.output


# ── check ────────────────────────────────────────────────────────────


class TestCheckCommand:
    def test_success(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "check", "ok"])
        assert result.exit_code == 0
        assert "Executing check: ok" in result.output
        assert "Command: true" in result.output
        assert "Result: SUCCESS (exit code 0)" in result.output

    def test_failure_exit_code(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "check", "exit3"])
        assert result.exit_code == 1
        assert "Result: FAILURE (exit code 3)" in result.output

    def test_start_failure(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "check", "ghost"])
        assert result.exit_code == 1
        assert "Result: FAILURE (failed to start" in result.output

    def test_dry_run(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "-r", "check", "nope"])
        assert result.exit_code == 0
        assert "Result: SUCCESS (simulated)" in result.output

    def test_not_a_check(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "check", "plain"])
        assert result.exit_code == 1
        assert "app 'plain' is not a check type" in result.output

    def test_json(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(real_config), "check", "nope", "--json"]
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert data["return_code"] == 1


# ── resolve / can-launch ─────────────────────────────────────────────


class TestResolveCommand:
    def test_overridden(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "resolve", "gated"])
        assert result.exit_code == 0
        assert "Default Command:  fallback" in result.output
        assert "Resolved Command: true --online" in result.output
        assert "dependency 'ok'" in result.output

    def test_default(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "resolve", "plain"])
        assert result.exit_code == 0
        assert "Command: true" in result.output

    def test_check_app_rejected(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "resolve", "ok"])
        assert result.exit_code == 1
        assert "app 'ok' is not an executable type" in result.output

    def test_json(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(real_config), "resolve", "gated", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["command"] == "true"
        assert data["arguments"] == ["--online"]
        assert data["source"] == "ok"


class TestCanLaunchCommand:
    def test_allowed(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "can-launch", "gated"])
        assert result.exit_code == 0
        assert "gated can be launched" in result.output

    def test_denied(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(real_config), "can-launch", "blocked"])
        assert result.exit_code == 1
        assert "blocked cannot be launched" in result.output

    def test_denied_allowed_in_dry_run(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(real_config), "-r", "can-launch", "blocked"]
        )
        assert result.exit_code == 0

    def test_verbose_lists_outcomes(self, real_config: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(real_config), "-v", "can-launch", "blocked"]
        )
        assert "nope: failed (no action)" in result.output


# ── list ─────────────────────────────────────────────────────────────


class TestListCommand:
    def test_names(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "list"])
        assert result.exit_code == 0
        assert result.output.split() == ["mail", "editor", "intranet"]

    def test_detailed(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "-r", "list", "-L"])
        assert result.exit_code == 0
        assert "Executable Apps:" in result.output
        assert "Name: mail" in result.output
        assert "Tags: desktop, comms" in result.output
        assert "Default Command: mail-client --offline" in result.output
        assert "Resolved Command: mail-client --online" in result.output
        assert "on_success: mail-client --online" in result.output
        assert "Total: 3 executable app(s)" in result.output

    def test_filtered_by_tag(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "list", "-g", "desktop"])
        assert result.output.split() == ["mail", "editor"]

    def test_detailed_empty(self, tmp_path: Path):
        config = _write_config(tmp_path, [{"name": "c", "type": "check", "command": "true"}])
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "list", "--detailed"])
        assert result.exit_code == 0
        assert "No executable apps found." in result.output

    def test_json(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "list", "--json"])
        data = json.loads(result.output)
        assert data["total"] == 3


# ── config check ─────────────────────────────────────────────────────


class TestConfigCheckCommand:
    def test_valid(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "Checks: 2" in result.output
        assert "Executables: 3" in result.output

    def test_wrong_dependency_type(self, tmp_path: Path):
        config = _write_config(
            tmp_path,
            [
                {"name": "a", "type": "executable", "command": "a"},
                {
                    "name": "b",
                    "type": "executable",
                    "command": "b",
                    "dependencies": {"a": {"on_success": "x"}},
                },
            ],
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 1
        assert "dependency 'a' is not a check type" in result.output

    def test_invalid_file(self, tmp_path: Path):
        config = tmp_path / "bad.json"
        config.write_text("{not json")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"]
