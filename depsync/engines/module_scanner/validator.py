"""Lexical validation of candidate module names."""

from __future__ import annotations

import re

# Lowercase registry names only. Scoped names (``@scope/pkg``) are rejected.
MODULE_NAME_RE = re.compile(r"[a-z0-9_-]+")


def is_valid_module_name(name: str) -> bool:
    return bool(name) and MODULE_NAME_RE.fullmatch(name) is not None
