"""Build the used-module set for a project tree."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from depsync.engines.module_scanner.classifier import filter_registry_modules
from depsync.engines.module_scanner.dedup import deduplicate
from depsync.engines.module_scanner.discovery import discover_source_files, is_test_file
from depsync.engines.module_scanner.extractor import iter_references
from depsync.engines.module_scanner.models import ModuleRef
from depsync.engines.module_scanner.validator import is_valid_module_name

log = structlog.get_logger("depsync.engine")


def modules_in_text(text: str) -> list[str]:
    """Registry module names required by one file's source."""
    candidates = (name for name in iter_references(text) if is_valid_module_name(name))
    return filter_registry_modules(candidates)


def scan_used_modules(
    root: Path, extensions: Sequence[str] = (".js",)
) -> list[ModuleRef]:
    """Scan every source file under *root* (no manifest required).

    Files that cannot be read are logged and skipped.
    """
    files = discover_source_files(root, extensions)
    refs: list[ModuleRef] = []
    skipped = 0
    for file_path in files:
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            skipped += 1
            log.warning(
                "scanner.file_unreadable",
                path=str(file_path.relative_to(root)),
                error=str(exc),
            )
            continue
        dev = is_test_file(file_path)
        refs.extend(ModuleRef(name, dev=dev) for name in modules_in_text(content))

    used = deduplicate(refs)
    log.debug(
        "scanner.scan_complete",
        root=str(root),
        files=len(files),
        skipped=skipped,
        modules=len(used),
    )
    return used
