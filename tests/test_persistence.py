"""
tests/test_persistence.py
Tests for crudgen.persistence against a real SQLite database.
"""

from __future__ import annotations

import pytest

from crudgen.exceptions import SchemaApplyError
from crudgen.models import ModuleSpec, NamingVariants, ScaffoldConfig
from crudgen.persistence import PersistenceEngine
from crudgen.schema import SchemaSynthesizer


@pytest.fixture()
def menu_engine(config: ScaffoldConfig, engine: PersistenceEngine) -> PersistenceEngine:
    SchemaSynthesizer(config).bootstrap_menu(engine)
    return engine


class TestApply:
    def test_apply_creates_table(
        self,
        config: ScaffoldConfig,
        engine: PersistenceEngine,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        descriptor = SchemaSynthesizer(config).module_descriptor(product_spec, product_naming)
        assert engine.has_table("products") is False
        engine.apply(descriptor)
        assert engine.has_table("products") is True
        assert engine.count_rows("products") == 0

    def test_apply_twice_raises(
        self,
        config: ScaffoldConfig,
        engine: PersistenceEngine,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        descriptor = SchemaSynthesizer(config).module_descriptor(product_spec, product_naming)
        engine.apply(descriptor)
        with pytest.raises(SchemaApplyError) as excinfo:
            engine.apply(descriptor)
        assert excinfo.value.table_name == "products"
        assert "already exists" in str(excinfo.value)


class TestMenuUpsert:
    def test_insert_then_noop(self, menu_engine: PersistenceEngine) -> None:
        assert menu_engine.upsert_menu_entry("products", "Product") is True
        assert menu_engine.upsert_menu_entry("products", "Product") is False
        assert menu_engine.count_rows("admin_menus") == 1

    def test_first_entry_gets_order_one(self, menu_engine: PersistenceEngine) -> None:
        menu_engine.upsert_menu_entry("products", "Product")
        entry = menu_engine.menu_entries()[0]
        assert entry.slug == "products"
        assert entry.label == "Product"
        assert entry.order_no == 1
        assert entry.is_active is True

    def test_order_is_previous_max_plus_one(self, menu_engine: PersistenceEngine) -> None:
        menu_engine.upsert_menu_entry("products", "Product")
        menu_engine.upsert_menu_entry("orders", "Order")
        menu_engine.upsert_menu_entry("products", "Product")
        menu_engine.upsert_menu_entry("customers", "Customer")

        entries = menu_engine.menu_entries()
        assert [e.slug for e in entries] == ["products", "orders", "customers"]
        assert [e.order_no for e in entries] == [1, 2, 3]

    def test_inactive_entries_filtered(self, menu_engine: PersistenceEngine) -> None:
        from sqlalchemy import update

        menu_engine.upsert_menu_entry("products", "Product")
        menu_engine.upsert_menu_entry("orders", "Order")
        menu = menu_engine._menu()
        with menu_engine.engine.begin() as conn:
            conn.execute(update(menu).where(menu.c.slug == "orders").values(is_active=False))

        assert [e.slug for e in menu_engine.menu_entries()] == ["products"]
        assert [e.slug for e in menu_engine.menu_entries(active_only=False)] == [
            "products", "orders"
        ]


class TestLifecycle:
    def test_context_manager(self, database_url: str) -> None:
        with PersistenceEngine(database_url) as eng:
            assert eng.has_table("anything") is False
        assert "sqlite" in repr(eng)

    def test_from_config(self, config: ScaffoldConfig) -> None:
        eng = PersistenceEngine.from_config(config.overrides(menu_table="navigation"))
        try:
            assert str(eng.engine.url) == config.database_url
        finally:
            eng.dispose()
