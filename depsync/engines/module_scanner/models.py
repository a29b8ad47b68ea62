"""Data models for the module scanner engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModuleRef:
    """A registry module, tagged with the partition it belongs to."""

    name: str
    dev: bool = False


@dataclass
class DeclaredSet:
    """Module names declared in the manifest, split by section."""

    production: list[str] = field(default_factory=list)
    development: list[str] = field(default_factory=list)

    def modules(self) -> list[ModuleRef]:
        """Production entries first, then development entries."""
        return [ModuleRef(name, dev=False) for name in self.production] + [
            ModuleRef(name, dev=True) for name in self.development
        ]

    @property
    def names(self) -> set[str]:
        return set(self.production) | set(self.development)
