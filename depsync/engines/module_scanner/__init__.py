"""Module scanner engine — find the registry modules a project requires."""

from depsync.engines.module_scanner.manifest import read_manifest
from depsync.engines.module_scanner.models import DeclaredSet, ModuleRef
from depsync.engines.module_scanner.scanner import scan_used_modules

__all__ = ["DeclaredSet", "ModuleRef", "read_manifest", "scan_used_modules"]
