"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from launchdeck.adapters.mock import MockLauncher
from launchdeck.core.models.config import AppConfig


@pytest.fixture
def mock_launcher() -> MockLauncher:
    """A fresh mock launcher: every check exits 0 by default."""
    return MockLauncher()


@pytest.fixture
def sample_apps() -> list[dict]:
    """A small but complete app catalog."""
    return [
        {"name": "net-up", "type": "check", "command": "net-probe", "args": ["--quick"]},
        {"name": "vpn-up", "type": "check", "command": "vpn-probe"},
        {
            "name": "mail",
            "type": "executable",
            "command": "mail-client",
            "args": ["--offline"],
            "tags": ["desktop", "comms"],
            "dependencies": {
                "net-up": {"on_success": "mail-client --online"},
            },
        },
        {
            "name": "editor",
            "type": "executable",
            "command": "editor",
            "tags": ["desktop"],
        },
        {
            "name": "intranet",
            "type": "executable",
            "command": "browser",
            "args": ["https://intranet"],
            "tags": ["work"],
            "dependencies": {
                "vpn-up": {"on_success": "browser https://intranet"},
            },
        },
    ]


@pytest.fixture
def sample_config(sample_apps: list[dict]) -> AppConfig:
    return AppConfig.model_validate({"apps": sample_apps})


@pytest.fixture
def config_file(tmp_path: Path, sample_apps: list[dict]) -> Path:
    """The sample catalog written as a JSON config file."""
    path = tmp_path / "launchdeck.json"
    path.write_text(json.dumps({"apps": sample_apps}, indent=2))
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    """Keep tests away from the user's config and log settings."""
    monkeypatch.delenv("LAUNCHDECK_CONFIG", raising=False)
    monkeypatch.delenv("LAUNCHDECK_CHECK_TIMEOUT", raising=False)
    monkeypatch.delenv("LAUNCHDECK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LAUNCHDECK_LOG_FILE", raising=False)
    monkeypatch.delenv("LAUNCHDECK_LOG_FILE_LEVEL", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
