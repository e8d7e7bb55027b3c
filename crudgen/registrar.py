# File: crudgen/registrar.py
"""
crudgen - Route & Menu Registrar
=================================
Connects a freshly generated module to the running application:

- appends an import + ``router.include_router(...)`` declaration to the
  application's ``routes.py`` (created with a header when missing);
- upserts the module's navigation entry in the menu table.

Both operations run only after the module schema has been applied.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from crudgen.models import (
    ArtifactKind,
    GeneratedArtifact,
    NamingVariants,
    ScaffoldConfig,
)
from crudgen.persistence import PersistenceEngine
from crudgen.templates import TemplateGenerator
from crudgen.utils import read_file

logger: logging.Logger = logging.getLogger("crudgen.registrar")

ROUTES_HEADER: List[str] = [
    '"""',
    "Admin route registrations.",
    "Generated by crudgen; each new module appends its router below.",
    '"""',
    "",
    "from fastapi import APIRouter",
    "",
    "router = APIRouter()",
    "",
]


class RouteMenuRegistrar:
    """Produces the route declaration and writes the menu entry."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self._config: ScaffoldConfig = config
        self._templates: TemplateGenerator = TemplateGenerator(config)

    def routes_path(self) -> str:
        return f"{self._config.package_name}/routes.py"

    def route_prefix(self, naming: NamingVariants) -> str:
        return f"{self._config.admin_prefix}/{naming.collection_name}"

    def include_line(self, naming: NamingVariants) -> str:
        return (
            f"router.include_router({naming.handler_name}.as_router(), "
            f'prefix="{self.route_prefix(naming)}")'
        )

    def route_declaration(self, naming: NamingVariants) -> List[str]:
        return [
            self._templates.handler_import(naming) + "  # noqa: E402",
            self.include_line(naming),
        ]

    def is_registered(self, naming: NamingVariants, existing: Optional[str]) -> bool:
        """True when *existing* routes text already mounts this module."""
        if not existing:
            return False
        return self.include_line(naming) in existing

    def route_artifact(
        self, naming: NamingVariants, app_root: Optional[Path] = None
    ) -> Optional[GeneratedArtifact]:
        """
        Build the artifact that registers *naming*'s routes.

        When ``routes.py`` does not exist yet the artifact creates it with
        the header; otherwise it is an append. Returns ``None`` when the
        declaration is already present.
        """
        existing: Optional[str] = None
        if app_root is not None:
            target: Path = app_root / self.routes_path()
            if target.is_file():
                existing = read_file(target)

        if self.is_registered(naming, existing):
            logger.info("Routes for '%s' already registered.", naming.collection_name)
            return None

        declaration: List[str] = self.route_declaration(naming)
        if existing is None:
            content: str = "\n".join(ROUTES_HEADER + declaration) + "\n"
            return GeneratedArtifact(
                kind=ArtifactKind.ROUTE, path=self.routes_path(), content=content
            )

        lead: str = "\n" if existing.endswith("\n") else "\n\n"
        return GeneratedArtifact(
            kind=ArtifactKind.ROUTE,
            path=self.routes_path(),
            content=lead + "\n".join(declaration) + "\n",
            append=True,
        )

    def register_menu(self, engine: PersistenceEngine, naming: NamingVariants) -> bool:
        """Upsert the navigation entry keyed by the collection name."""
        inserted: bool = engine.upsert_menu_entry(naming.collection_name, naming.type_name)
        if inserted:
            logger.info("Admin menu [%s] added.", naming.type_name)
        else:
            logger.info("Admin menu [%s] already present.", naming.type_name)
        return inserted


__all__: List[str] = ["RouteMenuRegistrar", "ROUTES_HEADER"]
