# File: crudgen/persistence.py
"""
crudgen - Persistence Engine
=============================
SQLAlchemy-backed implementation of the narrow persistence interface the
scaffold pipeline consumes:

    has_table(name)            → bool
    check_columns(descriptor)  → fail when an existing table has drifted
    apply(descriptor)          → create the table (fails on collision)
    upsert_menu_entry(slug, …) → insert-if-absent with next order_no
    menu_entries()             → ordered MenuEntry list
    dispose()                  → release the connection pool

The menu upsert reads ``max(order_no)`` and inserts inside one transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import MetaData, Table, create_engine, func, insert, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from crudgen.exceptions import SchemaApplyError
from crudgen.models import MenuEntry, SchemaDescriptor, ScaffoldConfig
from crudgen.schema import build_table

logger: logging.Logger = logging.getLogger("crudgen.persistence")


class PersistenceEngine:
    """
    Thin wrapper around a SQLAlchemy ``Engine``.

    Usage::

        engine = PersistenceEngine("sqlite:///./app.db")
        if not engine.has_table("admin_menus"):
            engine.apply(descriptor)
        engine.upsert_menu_entry("products", "Product")
        engine.dispose()
    """

    def __init__(
        self,
        database_url: str,
        *,
        menu_table: str = "admin_menus",
        echo: bool = False,
    ) -> None:
        self._database_url: str = database_url
        self._menu_table_name: str = menu_table
        self._engine: Engine = create_engine(database_url, echo=echo)
        self._menu_table: Optional[Table] = None
        logger.debug("PersistenceEngine created for %s.", self._engine.url)

    @classmethod
    def from_config(cls, config: ScaffoldConfig) -> "PersistenceEngine":
        return cls(config.database_url, menu_table=config.menu_table)

    @property
    def engine(self) -> Engine:
        return self._engine

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def has_table(self, name: str) -> bool:
        return inspect(self._engine).has_table(name)

    def column_names(self, name: str) -> List[str]:
        return [col["name"] for col in inspect(self._engine).get_columns(name)]

    def check_columns(self, descriptor: SchemaDescriptor) -> None:
        """
        Compare an existing table with *descriptor*.

        Raises:
            SchemaApplyError: the live table lacks descriptor columns or has
                columns the descriptor does not declare.
        """
        live: List[str] = self.column_names(descriptor.table_name)
        missing: List[str] = [c for c in descriptor.column_names if c not in live]
        extra: List[str] = [c for c in live if c not in descriptor.column_names]
        if not (missing or extra):
            return
        parts: List[str] = []
        if missing:
            parts.append(f"missing columns {', '.join(missing)}")
        if extra:
            parts.append(f"unexpected columns {', '.join(extra)}")
        raise SchemaApplyError(
            descriptor.table_name,
            f"existing table does not match the field list ({'; '.join(parts)}). "
            f"Migrate or drop the table, then regenerate.",
        )

    def apply(self, descriptor: SchemaDescriptor) -> None:
        """
        Create the table described by *descriptor*.

        Raises:
            SchemaApplyError: the engine rejected the DDL (for example the
                table already exists).
        """
        metadata: MetaData = MetaData()
        table: Table = build_table(descriptor, metadata)
        try:
            table.create(self._engine, checkfirst=False)
        except SQLAlchemyError as exc:
            reason: Any = getattr(exc, "orig", None) or exc
            raise SchemaApplyError(descriptor.table_name, str(reason)) from exc
        if descriptor.table_name == self._menu_table_name:
            self._menu_table = None
        logger.info(
            "Applied schema '%s' (%d columns).",
            descriptor.table_name,
            len(descriptor.columns),
        )

    # ------------------------------------------------------------------
    # Menu entries
    # ------------------------------------------------------------------

    def _menu(self) -> Table:
        if self._menu_table is None:
            self._menu_table = Table(
                self._menu_table_name, MetaData(), autoload_with=self._engine
            )
        return self._menu_table

    def upsert_menu_entry(self, slug: str, label: str) -> bool:
        """
        Insert a menu entry for *slug* unless one already exists.

        The new row gets ``order_no = max(order_no) + 1`` (1 on an empty
        table). Returns True when a row was inserted.
        """
        menu: Table = self._menu()
        with self._engine.begin() as conn:
            existing: Any = conn.execute(
                select(menu.c.id).where(menu.c.slug == slug)
            ).first()
            if existing is not None:
                logger.debug("Menu entry '%s' already present.", slug)
                return False

            current_max: int = conn.execute(
                select(func.coalesce(func.max(menu.c.order_no), 0))
            ).scalar_one()
            values: Dict[str, Any] = {
                "slug": slug,
                "label": label,
                "order_no": current_max + 1,
                "is_active": True,
            }
            conn.execute(insert(menu).values(**values))

        logger.info("Menu entry '%s' added (order_no=%d).", slug, values["order_no"])
        return True

    def menu_entries(self, active_only: bool = True) -> List[MenuEntry]:
        """Menu entries ordered by ``order_no``."""
        menu: Table = self._menu()
        stmt = select(
            menu.c.slug, menu.c.label, menu.c.order_no, menu.c.is_active
        ).order_by(menu.c.order_no, menu.c.id)
        if active_only:
            stmt = stmt.where(menu.c.is_active.is_(True))
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).all()
        return [MenuEntry.model_validate(dict(row._mapping)) for row in rows]

    def count_rows(self, table_name: str) -> int:
        table: Table = Table(table_name, MetaData(), autoload_with=self._engine)
        with self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar_one()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        self._engine.dispose()
        logger.debug("PersistenceEngine disposed.")

    def __enter__(self) -> "PersistenceEngine":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"<PersistenceEngine {self._engine.url}>"


__all__: List[str] = ["PersistenceEngine"]
