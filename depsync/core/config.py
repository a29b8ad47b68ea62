"""Run configuration for a single reconcile pass."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from depsync.exceptions import ConfigurationError

DEFAULT_POPULARITY_THRESHOLD = 10_000
DEFAULT_DOWNLOADS_URL = "https://api.npmjs.org/downloads/point/last-month"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SyncConfig:
    """Settings consumed by the reconciler and its collaborators."""

    project_root: Path
    secure: bool = False
    popularity_threshold: int = DEFAULT_POPULARITY_THRESHOLD
    registry_downloads_url: str = DEFAULT_DOWNLOADS_URL
    npm_executable: str = "npm"
    extensions: tuple[str, ...] = (".js",)
    reinstall: bool = True
    command_timeout: float | None = None

    @property
    def manifest_path(self) -> Path:
        return self.project_root / "package.json"

    @classmethod
    def from_env(cls, project_root: Path | str, **overrides: Any) -> SyncConfig:
        """Build a config from ``DEPSYNC_*`` env vars.

        Supported variables:
            DEPSYNC_SECURE               → secure (bool)
            DEPSYNC_NPM                  → npm_executable
            DEPSYNC_REGISTRY_URL         → registry_downloads_url
            DEPSYNC_POPULARITY_THRESHOLD → popularity_threshold (int)

        Keyword *overrides* whose value is not None take precedence over the
        environment (CLI flags pass through here).
        """
        env_values: dict[str, Any] = {}

        secure = os.environ.get("DEPSYNC_SECURE")
        if secure is not None:
            env_values["secure"] = _parse_bool("DEPSYNC_SECURE", secure)

        npm = os.environ.get("DEPSYNC_NPM")
        if npm:
            env_values["npm_executable"] = npm

        url = os.environ.get("DEPSYNC_REGISTRY_URL")
        if url:
            env_values["registry_downloads_url"] = url.rstrip("/")

        threshold = os.environ.get("DEPSYNC_POPULARITY_THRESHOLD")
        if threshold is not None:
            env_values["popularity_threshold"] = _parse_int(
                "DEPSYNC_POPULARITY_THRESHOLD", threshold
            )

        config = cls(project_root=Path(project_root), **env_values)
        explicit = {k: v for k, v in overrides.items() if v is not None}
        if explicit:
            config = replace(config, **explicit)
        if config.popularity_threshold < 0:
            raise ConfigurationError("popularity_threshold must be >= 0")
        return config


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
