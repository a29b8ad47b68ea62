"""Reconciler engine — turn a scan into npm install/uninstall actions."""

from depsync.engines.reconciler.diff import compute_diff, diff
from depsync.engines.reconciler.models import (
    Action,
    ActionOutcome,
    DiffResult,
    OutcomeStatus,
    SyncReport,
)
from depsync.engines.reconciler.package_manager import NpmPackageManager, PackageManager
from depsync.engines.reconciler.runner import Reconciler
from depsync.engines.reconciler.trust import NpmDownloadsClient, TrustGate

__all__ = [
    "Action",
    "ActionOutcome",
    "DiffResult",
    "NpmDownloadsClient",
    "NpmPackageManager",
    "OutcomeStatus",
    "PackageManager",
    "Reconciler",
    "SyncReport",
    "TrustGate",
    "compute_diff",
    "diff",
]
