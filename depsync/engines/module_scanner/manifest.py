"""Read declared dependencies from package.json."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from depsync.engines.module_scanner.models import DeclaredSet
from depsync.exceptions import ManifestNotFoundError, ManifestParseError

PRODUCTION_SECTION = "dependencies"
DEVELOPMENT_SECTION = "devDependencies"


def read_manifest(path: Path) -> DeclaredSet:
    """Parse *path* into a :class:`DeclaredSet`.

    Only the keys of ``dependencies`` and ``devDependencies`` are used;
    version specifiers are ignored. Missing sections are empty.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ManifestNotFoundError(str(path)) from None
    return parse_manifest(content, source=str(path))


def parse_manifest(content: str, source: str = "package.json") -> DeclaredSet:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(source, str(exc)) from exc

    if not isinstance(data, dict):
        raise ManifestParseError(source, "top-level value must be an object")

    return DeclaredSet(
        production=_section_names(data, PRODUCTION_SECTION, source),
        development=_section_names(data, DEVELOPMENT_SECTION, source),
    )


def _section_names(data: dict[str, Any], section: str, source: str) -> list[str]:
    deps = data.get(section)
    if deps is None:
        return []
    if not isinstance(deps, dict):
        raise ManifestParseError(source, f"'{section}' must be an object")
    # dict keys are already unique; keep manifest order
    return [name for name in deps if name]
