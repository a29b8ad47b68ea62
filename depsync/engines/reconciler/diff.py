"""Set differences between used and declared modules."""

from __future__ import annotations

from collections.abc import Iterable

from depsync.engines.module_scanner.models import DeclaredSet, ModuleRef
from depsync.engines.reconciler.models import DiffResult


def diff(first: Iterable[ModuleRef], second: Iterable[ModuleRef]) -> list[ModuleRef]:
    """Members of *first* whose name does not occur anywhere in *second*.

    Matching is by name only: the ``dev`` flag is ignored, so a production
    declaration satisfies a test-only usage and vice versa. Entries keep the
    flag they carry in *first*.
    """
    names_in_second = {module.name for module in second}
    return [module for module in first if module.name not in names_in_second]


def compute_diff(used: list[ModuleRef], declared: DeclaredSet) -> DiffResult:
    declared_modules = declared.modules()
    return DiffResult(
        to_install=diff(used, declared_modules),
        to_remove=diff(declared_modules, used),
    )
