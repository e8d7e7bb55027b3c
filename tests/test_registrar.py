"""
tests/test_registrar.py
Tests for crudgen.registrar: route declarations and menu registration.
"""

from __future__ import annotations

import ast
import pathlib

from crudgen.models import ArtifactKind, NamingVariants, ScaffoldConfig
from crudgen.naming import derive_naming
from crudgen.persistence import PersistenceEngine
from crudgen.registrar import ROUTES_HEADER, RouteMenuRegistrar
from crudgen.schema import SchemaSynthesizer


class TestRouteDeclaration:
    def test_include_line(self, config: ScaffoldConfig, product_naming: NamingVariants) -> None:
        registrar = RouteMenuRegistrar(config)
        assert registrar.include_line(product_naming) == (
            'router.include_router(ProductHandler.as_router(), prefix="/admin/products")'
        )
        assert registrar.route_declaration(product_naming)[0] == (
            "from app.handlers.product_handler import ProductHandler  # noqa: E402"
        )

    def test_new_routes_file(
        self, config: ScaffoldConfig, app_root: pathlib.Path, product_naming: NamingVariants
    ) -> None:
        artifact = RouteMenuRegistrar(config).route_artifact(product_naming, app_root)
        assert artifact is not None
        assert artifact.kind is ArtifactKind.ROUTE
        assert artifact.path == "app/routes.py"
        assert artifact.append is False
        assert artifact.content.startswith("\n".join(ROUTES_HEADER))
        assert "router = APIRouter()" in artifact.content
        ast.parse(artifact.content)

    def test_existing_routes_file_is_appended(
        self, config: ScaffoldConfig, app_root: pathlib.Path, product_naming: NamingVariants
    ) -> None:
        routes = app_root / "app" / "routes.py"
        routes.parent.mkdir(parents=True)
        routes.write_text("\n".join(ROUTES_HEADER) + "\n", encoding="utf-8")

        artifact = RouteMenuRegistrar(config).route_artifact(product_naming, app_root)
        assert artifact is not None
        assert artifact.append is True
        assert artifact.content.startswith("\n")
        ast.parse(routes.read_text(encoding="utf-8") + artifact.content)

    def test_registered_module_is_skipped(
        self, config: ScaffoldConfig, app_root: pathlib.Path, product_naming: NamingVariants
    ) -> None:
        registrar = RouteMenuRegistrar(config)
        first = registrar.route_artifact(product_naming, app_root)
        assert first is not None
        routes = app_root / first.path
        routes.parent.mkdir(parents=True)
        routes.write_text(first.content, encoding="utf-8")

        assert registrar.is_registered(product_naming, first.content) is True
        assert registrar.route_artifact(product_naming, app_root) is None

    def test_two_modules_share_one_file(
        self, config: ScaffoldConfig, app_root: pathlib.Path
    ) -> None:
        registrar = RouteMenuRegistrar(config)
        product, order = derive_naming("Product"), derive_naming("Order")

        first = registrar.route_artifact(product, app_root)
        assert first is not None
        routes = app_root / first.path
        routes.parent.mkdir(parents=True)
        routes.write_text(first.content, encoding="utf-8")

        second = registrar.route_artifact(order, app_root)
        assert second is not None and second.append
        text = first.content + second.content
        assert text.count("router = APIRouter()") == 1
        assert registrar.is_registered(product, text)
        assert registrar.is_registered(order, text)
        ast.parse(text)

    def test_is_registered_without_text(
        self, config: ScaffoldConfig, product_naming: NamingVariants
    ) -> None:
        assert RouteMenuRegistrar(config).is_registered(product_naming, None) is False

    def test_custom_prefix(self, config: ScaffoldConfig) -> None:
        cfg = config.overrides(admin_prefix="backoffice")
        naming = derive_naming("Product", cfg.admin_segment)
        assert RouteMenuRegistrar(cfg).route_prefix(naming) == "/backoffice/products"


class TestMenuRegistration:
    def test_register_once(
        self,
        config: ScaffoldConfig,
        engine: PersistenceEngine,
        product_naming: NamingVariants,
    ) -> None:
        SchemaSynthesizer(config).bootstrap_menu(engine)
        registrar = RouteMenuRegistrar(config)

        assert registrar.register_menu(engine, product_naming) is True
        assert registrar.register_menu(engine, product_naming) is False

        entries = engine.menu_entries()
        assert len(entries) == 1
        assert entries[0].slug == "products"
        assert entries[0].label == "Product"
