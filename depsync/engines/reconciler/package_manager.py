"""npm adapter: the only place that changes the project on disk."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from depsync.engines.reconciler.models import Action

log = structlog.get_logger("depsync.engine")


@runtime_checkable
class PackageManager(Protocol):
    """Interface the reconciler drives to apply a diff."""

    def apply(self, action: Action, name: str, dev: bool) -> bool: ...

    def reinstall(self) -> bool: ...


class NpmPackageManager:
    """Run ``npm install`` / ``npm uninstall`` inside the project root."""

    def __init__(
        self,
        project_root: Path,
        executable: str = "npm",
        timeout: float | None = None,
    ) -> None:
        self.project_root = project_root
        self.executable = executable
        self.timeout = timeout

    def build_command(self, action: Action, name: str, dev: bool) -> list[str]:
        save_flag = "--save-dev" if dev else "--save"
        return [self.executable, action.value, name, save_flag]

    def apply(self, action: Action, name: str, dev: bool) -> bool:
        return self._run(self.build_command(action, name, dev))

    def reinstall(self) -> bool:
        return self._run([self.executable, "install"])

    def _run(self, cmd: list[str]) -> bool:
        """Run *cmd*; True on exit status 0, False on any failure."""
        try:
            proc = subprocess.run(
                cmd,
                cwd=self.project_root,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            log.error("npm.not_found", executable=self.executable)
            return False
        except subprocess.TimeoutExpired:
            log.error("npm.timeout", command=" ".join(cmd), timeout=self.timeout)
            return False

        if proc.returncode != 0:
            log.warning(
                "npm.command_failed",
                command=" ".join(cmd),
                exit_code=proc.returncode,
                stderr=(proc.stderr or "").strip()[-2000:],
            )
            return False
        log.debug("npm.command_ok", command=" ".join(cmd))
        return True
