"""Enumerate JavaScript sources under a project root."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from depsync.exceptions import SourceDiscoveryError

EXCLUDED_DIRS = frozenset({"node_modules"})
TEST_FILE_SUFFIXES = (".spec.js", ".test.js")


def discover_source_files(
    root: Path, extensions: Sequence[str] = (".js",)
) -> list[Path]:
    """Return every source file below *root*, in a stable order.

    ``node_modules`` and dot-directories are pruned, dot-files are skipped.
    Raises :class:`SourceDiscoveryError` if any directory cannot be listed.
    """
    if not root.is_dir():
        raise SourceDiscoveryError(f"project root is not a directory: {root}")

    suffixes = tuple(extensions)
    found: list[Path] = []

    def _fail(exc: OSError) -> None:
        raise SourceDiscoveryError(f"cannot read {exc.filename}: {exc.strerror}") from exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_fail):
        # Prune in place so os.walk does not descend.
        dirnames[:] = sorted(
            d for d in dirnames if d not in EXCLUDED_DIRS and not d.startswith(".")
        )
        for filename in sorted(filenames):
            if filename.startswith(".") or not filename.endswith(suffixes):
                continue
            found.append(Path(dirpath) / filename)

    return found


def is_test_file(path: Path | str) -> bool:
    """Files whose requires count as development dependencies."""
    return str(path).endswith(TEST_FILE_SUFFIXES)
