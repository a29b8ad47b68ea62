"""Shared fixtures for depsync tests. Every project lives under tmp_path."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from depsync.engines.reconciler.models import Action
from depsync.exceptions import OracleError


class FakePackageManager:
    """Records every call; names in *failing* report failure."""

    def __init__(self, failing: set[str] | None = None, reinstall_ok: bool = True) -> None:
        self.failing = failing or set()
        self.reinstall_ok = reinstall_ok
        self.calls: list[tuple[Action, str, bool]] = []
        self.reinstall_calls = 0

    def apply(self, action: Action, name: str, dev: bool) -> bool:
        self.calls.append((action, name, dev))
        return name not in self.failing

    def reinstall(self) -> bool:
        self.reinstall_calls += 1
        return self.reinstall_ok


class FakeOracle:
    """Download counts from a dict; names missing from it are unknown."""

    def __init__(self, downloads: dict[str, float]) -> None:
        self.downloads = downloads
        self.queried: list[str] = []
        self.closed = False

    def get_downloads(self, name: str) -> float:
        self.queried.append(name)
        if name not in self.downloads:
            raise OracleError(f"no stats for {name}")
        return self.downloads[name]

    def close(self) -> None:
        self.closed = True


ProjectFactory = Callable[..., Path]


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Write a package.json plus source files and return the project root."""

    def _make(
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        files: dict[str, str] | None = None,
    ) -> Path:
        manifest: dict[str, object] = {"name": "demo", "version": "1.0.0"}
        if dependencies is not None:
            manifest["dependencies"] = dependencies
        if dev_dependencies is not None:
            manifest["devDependencies"] = dev_dependencies
        (tmp_path / "package.json").write_text(json.dumps(manifest))
        for rel, content in (files or {}).items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return tmp_path

    return _make


@pytest.fixture
def make_package_manager() -> type[FakePackageManager]:
    return FakePackageManager


@pytest.fixture
def make_oracle() -> type[FakeOracle]:
    return FakeOracle


@pytest.fixture
def package_manager(make_package_manager) -> FakePackageManager:
    return make_package_manager()
