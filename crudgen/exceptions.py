# File: crudgen/exceptions.py
"""
crudgen - Exception Hierarchy
==============================
Every error the engine raises on purpose derives from ``ScaffoldError`` so
callers (the CLI, mostly) can map them to exit codes in one place.
"""

from __future__ import annotations

from typing import List, Sequence


class ScaffoldError(Exception):
    """Base class for all scaffold-generation failures."""


class ModuleExistsError(ScaffoldError):
    """Artifacts for the module already exist and regeneration was not requested."""

    def __init__(self, module: str, existing: Sequence[str]) -> None:
        self.module: str = module
        self.existing: List[str] = list(existing)
        listing: str = ", ".join(self.existing)
        super().__init__(
            f"Module '{module}' already exists ({listing}). "
            f"Use --force to regenerate it."
        )


class SchemaApplyError(ScaffoldError):
    """The persistence engine refused a schema descriptor."""

    def __init__(self, table_name: str, reason: str) -> None:
        self.table_name: str = table_name
        self.reason: str = reason
        super().__init__(f"Failed to apply schema for '{table_name}': {reason}")


class ArtifactWriteError(ScaffoldError):
    """A generated artifact could not be written to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path: str = path
        self.reason: str = reason
        super().__init__(f"Failed to write '{path}': {reason}")


__all__: List[str] = [
    "ScaffoldError",
    "ModuleExistsError",
    "SchemaApplyError",
    "ArtifactWriteError",
]
