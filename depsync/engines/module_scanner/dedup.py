"""Collapse per-file module references into one used set."""

from __future__ import annotations

from collections.abc import Iterable

from depsync.engines.module_scanner.models import ModuleRef


def deduplicate(modules: Iterable[ModuleRef]) -> list[ModuleRef]:
    """Keep the first occurrence of each name within its partition.

    Development references come first in the output, then production ones.
    The same name may appear once in each partition.
    """
    dev_refs: list[ModuleRef] = []
    prod_refs: list[ModuleRef] = []
    seen_dev: set[str] = set()
    seen_prod: set[str] = set()

    for module in modules:
        if module.dev:
            if module.name not in seen_dev:
                seen_dev.add(module.name)
                dev_refs.append(module)
        elif module.name not in seen_prod:
            seen_prod.add(module.name)
            prod_refs.append(module)

    return dev_refs + prod_refs
