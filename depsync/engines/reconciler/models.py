"""Data models for the reconciler engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from depsync.engines.module_scanner.models import ModuleRef


class Action(str, enum.Enum):
    INSTALL = "install"
    UNINSTALL = "uninstall"


class OutcomeStatus(str, enum.Enum):
    INSTALLED = "installed"
    REMOVED = "removed"
    UNTRUSTED = "untrusted"
    FAILED = "failed"


@dataclass
class DiffResult:
    """Modules to add to and drop from the manifest."""

    to_install: list[ModuleRef] = field(default_factory=list)
    to_remove: list[ModuleRef] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_install and not self.to_remove


@dataclass
class ActionOutcome:
    """What happened to a single module during a sync."""

    module: ModuleRef
    action: Action
    status: OutcomeStatus
    message: str


@dataclass
class SyncReport:
    """Result of a full reconcile pass."""

    diff: DiffResult
    outcomes: list[ActionOutcome] = field(default_factory=list)
    reinstalled: bool | None = None  # None = not attempted

    @property
    def succeeded(self) -> list[ActionOutcome]:
        return [
            o
            for o in self.outcomes
            if o.status in (OutcomeStatus.INSTALLED, OutcomeStatus.REMOVED)
        ]

    @property
    def failed(self) -> list[ActionOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]

    @property
    def skipped(self) -> list[ActionOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.UNTRUSTED]
