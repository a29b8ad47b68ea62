"""Scan, diff, and apply the result through the package manager."""

from __future__ import annotations

from typing import Callable

import structlog

from depsync.core.config import SyncConfig
from depsync.engines.module_scanner.manifest import read_manifest
from depsync.engines.module_scanner.models import ModuleRef
from depsync.engines.module_scanner.scanner import scan_used_modules
from depsync.engines.reconciler.diff import compute_diff
from depsync.engines.reconciler.models import (
    Action,
    ActionOutcome,
    DiffResult,
    OutcomeStatus,
    SyncReport,
)
from depsync.engines.reconciler.package_manager import PackageManager
from depsync.engines.reconciler.trust import TrustGate
from depsync.exceptions import ConfigurationError

log = structlog.get_logger("depsync.engine")

OutcomeCallback = Callable[[ActionOutcome], None]


class Reconciler:
    """One reconcile pass per :meth:`run` call; nothing is cached between runs."""

    def __init__(
        self,
        config: SyncConfig,
        package_manager: PackageManager,
        trust_gate: TrustGate | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        if config.secure and trust_gate is None:
            raise ConfigurationError("secure mode requires a trust gate")
        self.config = config
        self._package_manager = package_manager
        self._trust_gate = trust_gate
        self._on_outcome = on_outcome

    def plan(self) -> DiffResult:
        """Compute the diff without touching the project.

        Manifest errors propagate; there is no diff without a declared set.
        """
        declared = read_manifest(self.config.manifest_path)
        used = scan_used_modules(self.config.project_root, self.config.extensions)
        result = compute_diff(used, declared)
        log.info(
            "reconciler.planned",
            root=str(self.config.project_root),
            used=len(used),
            declared=len(declared.production) + len(declared.development),
            to_install=len(result.to_install),
            to_remove=len(result.to_remove),
        )
        return result

    def run(self) -> SyncReport:
        """Plan, then install missing and uninstall unused modules.

        1. Compute the diff (see :meth:`plan`)
        2. Install each missing module, gated by popularity in secure mode
        3. Uninstall each unused module
        4. Optionally run a plain ``npm install`` to settle the tree

        A failure on one module is recorded and the batch continues.
        """
        report = SyncReport(diff=self.plan())

        for module in report.diff.to_install:
            self._record(report, self._install(module))
        for module in report.diff.to_remove:
            self._record(report, self._uninstall(module))

        if self.config.reinstall and report.succeeded:
            report.reinstalled = self._package_manager.reinstall()
            if not report.reinstalled:
                log.warning("reconciler.reinstall_failed", root=str(self.config.project_root))

        log.info(
            "reconciler.completed",
            succeeded=len(report.succeeded),
            failed=len(report.failed),
            skipped=len(report.skipped),
        )
        return report

    # ── internal ───────────────────────────────────────────────────────────

    def _install(self, module: ModuleRef) -> ActionOutcome:
        gate = self._trust_gate if self.config.secure else None
        if gate is not None and not gate.is_trusted(module.name):
            return ActionOutcome(
                module,
                Action.INSTALL,
                OutcomeStatus.UNTRUSTED,
                f"{module.name} not trusted",
            )

        if self._apply(Action.INSTALL, module):
            message = f"{module.name} installed"
            if module.dev:
                message += " in devDependencies"
            return ActionOutcome(module, Action.INSTALL, OutcomeStatus.INSTALLED, message)
        return ActionOutcome(
            module,
            Action.INSTALL,
            OutcomeStatus.FAILED,
            f"{module.name} installation failed",
        )

    def _uninstall(self, module: ModuleRef) -> ActionOutcome:
        if self._apply(Action.UNINSTALL, module):
            message = f"{module.name} removed"
            if module.dev:
                message += " from devDependencies"
            return ActionOutcome(module, Action.UNINSTALL, OutcomeStatus.REMOVED, message)
        return ActionOutcome(
            module,
            Action.UNINSTALL,
            OutcomeStatus.FAILED,
            f"{module.name} removal failed",
        )

    def _apply(self, action: Action, module: ModuleRef) -> bool:
        try:
            return self._package_manager.apply(action, module.name, module.dev)
        except Exception:
            log.error(
                "reconciler.apply_error",
                action=action.value,
                module=module.name,
                exc_info=True,
            )
            return False

    def _record(self, report: SyncReport, outcome: ActionOutcome) -> None:
        report.outcomes.append(outcome)
        if outcome.status is OutcomeStatus.FAILED:
            log.warning(
                f"reconciler.{outcome.action.value}_failed",
                module=outcome.module.name,
                dev=outcome.module.dev,
            )
        if self._on_outcome is not None:
            self._on_outcome(outcome)
