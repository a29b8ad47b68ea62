"""Tests for SyncConfig and logging setup."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from depsync.core.config import DEFAULT_DOWNLOADS_URL, SyncConfig
from depsync.core.logging import setup_logging
from depsync.exceptions import ConfigurationError

_ENV_KEYS = [
    "DEPSYNC_SECURE",
    "DEPSYNC_NPM",
    "DEPSYNC_REGISTRY_URL",
    "DEPSYNC_POPULARITY_THRESHOLD",
]


@pytest.fixture
def clean_env():
    with patch.dict(os.environ, {}, clear=False):
        for key in _ENV_KEYS:
            os.environ.pop(key, None)
        yield


class TestSyncConfig:
    def test_defaults(self, clean_env, tmp_path: Path):
        config = SyncConfig.from_env(tmp_path)
        assert config.secure is False
        assert config.popularity_threshold == 10_000
        assert config.registry_downloads_url == DEFAULT_DOWNLOADS_URL
        assert config.npm_executable == "npm"
        assert config.extensions == (".js",)
        assert config.reinstall is True
        assert config.manifest_path == tmp_path / "package.json"

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_secure_from_env(self, clean_env, tmp_path: Path, raw):
        os.environ["DEPSYNC_SECURE"] = raw
        assert SyncConfig.from_env(tmp_path).secure is True

    def test_env_values(self, clean_env, tmp_path: Path):
        os.environ["DEPSYNC_NPM"] = "/usr/local/bin/npm"
        os.environ["DEPSYNC_REGISTRY_URL"] = "https://mirror.test/downloads/"
        os.environ["DEPSYNC_POPULARITY_THRESHOLD"] = "500"
        config = SyncConfig.from_env(tmp_path)
        assert config.npm_executable == "/usr/local/bin/npm"
        assert config.registry_downloads_url == "https://mirror.test/downloads"
        assert config.popularity_threshold == 500

    def test_overrides_win_over_env(self, clean_env, tmp_path: Path):
        os.environ["DEPSYNC_SECURE"] = "1"
        config = SyncConfig.from_env(tmp_path, secure=False, npm_executable="pnpm")
        assert config.secure is False
        assert config.npm_executable == "pnpm"

    def test_none_overrides_ignored(self, clean_env, tmp_path: Path):
        os.environ["DEPSYNC_SECURE"] = "true"
        assert SyncConfig.from_env(tmp_path, secure=None).secure is True

    def test_bad_bool(self, clean_env, tmp_path: Path):
        os.environ["DEPSYNC_SECURE"] = "maybe"
        with pytest.raises(ConfigurationError, match="DEPSYNC_SECURE"):
            SyncConfig.from_env(tmp_path)

    def test_bad_threshold(self, clean_env, tmp_path: Path):
        os.environ["DEPSYNC_POPULARITY_THRESHOLD"] = "lots"
        with pytest.raises(ConfigurationError, match="integer"):
            SyncConfig.from_env(tmp_path)

    def test_negative_threshold(self, clean_env, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            SyncConfig.from_env(tmp_path, popularity_threshold=-1)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_logging")
class TestSetupLogging:
    def test_level_from_argument(self):
        setup_logging(level="debug", fmt="json")
        assert logging.getLogger("depsync").level == logging.DEBUG

    def test_level_from_env(self):
        with patch.dict(os.environ, {"DEPSYNC_LOG_LEVEL": "error"}):
            setup_logging()
        assert logging.getLogger("depsync").level == logging.ERROR

    def test_third_party_loggers_quieted(self):
        setup_logging(level="debug")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_json_lines_go_to_stderr(self, capsys):
        setup_logging(level="info", fmt="json")
        structlog.get_logger("depsync.test").info("sample.event", module="chalk")
        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "sample.event"
        assert record["module"] == "chalk"
        assert record["level"] == "info"
