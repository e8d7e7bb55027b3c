# File: crudgen/schema.py
"""
crudgen - Schema Synthesizer
=============================
Builds ``SchemaDescriptor`` objects for the menu table and for each module
table, turns them into SQLAlchemy Core ``Table`` objects, and renders each
one as a small schema module under ``database/schemas/``.

Column order of a module table is fixed:

    id, <declared fields in order>, created_at, updated_at

The menu table is bootstrapped once; a second bootstrap sees the table and
does nothing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from sqlalchemy import Column, MetaData, Table, func

from crudgen.models import (
    ArtifactKind,
    ColumnDescriptor,
    ColumnKind,
    EntityDefinition,
    GeneratedArtifact,
    ModuleSpec,
    NamingVariants,
    SchemaDescriptor,
    ScaffoldConfig,
)
from crudgen.typemap import map_field_type, sqlalchemy_source, sqlalchemy_type

if TYPE_CHECKING:
    from crudgen.persistence import PersistenceEngine

logger: logging.Logger = logging.getLogger("crudgen.schema")

SCHEMA_DIR: str = "database/schemas"
MENU_CLASS_NAME: str = "AdminMenu"
MENU_FILLABLE: Tuple[str, ...] = ("slug", "label", "order_no", "is_active")
TIMESTAMP_COLUMNS: Tuple[str, ...] = ("created_at", "updated_at")

_INDENT: str = "    "


# ---------------------------------------------------------------------------
# Descriptor helpers
# ---------------------------------------------------------------------------


def _identity_column() -> ColumnDescriptor:
    return ColumnDescriptor(name="id", kind=ColumnKind.ID, primary_key=True, nullable=False)


def _timestamp_columns() -> List[ColumnDescriptor]:
    return [ColumnDescriptor(name=n, kind=ColumnKind.TIMESTAMP) for n in TIMESTAMP_COLUMNS]


def build_column(col: ColumnDescriptor) -> Column:
    """SQLAlchemy Core ``Column`` for one descriptor column."""
    kwargs: dict = {"nullable": col.nullable}
    if col.primary_key:
        kwargs["primary_key"] = True
        kwargs["autoincrement"] = True
    if col.unique:
        kwargs["unique"] = True
    if col.default is not None:
        kwargs["default"] = col.default
    if col.kind is ColumnKind.TIMESTAMP:
        kwargs["server_default"] = func.now()
    return Column(col.name, sqlalchemy_type(col.kind), **kwargs)


def build_table(descriptor: SchemaDescriptor, metadata: Optional[MetaData] = None) -> Table:
    """Materialise *descriptor* as a Core ``Table`` bound to *metadata*."""
    metadata = metadata if metadata is not None else MetaData()
    return Table(
        descriptor.table_name,
        metadata,
        *(build_column(c) for c in descriptor.columns),
    )


def _column_source(col: ColumnDescriptor) -> str:
    args: List[str] = [f'"{col.name}"', sqlalchemy_source(col.kind)]
    if col.primary_key:
        args.extend(["primary_key=True", "autoincrement=True"])
    if col.unique:
        args.append("unique=True")
    args.append(f"nullable={col.nullable!r}")
    if col.default is not None:
        args.append(f"default={col.default!r}")
    if col.kind is ColumnKind.TIMESTAMP:
        args.append("server_default=func.now()")
    return f"Column({', '.join(args)})"


# ---------------------------------------------------------------------------
# Synthesizer
# ---------------------------------------------------------------------------


class SchemaSynthesizer:
    """Produces schema descriptors and schema-module artifacts."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self._config: ScaffoldConfig = config

    # ------------------------------------------------------------------
    # Menu bootstrap
    # ------------------------------------------------------------------

    def menu_descriptor(self) -> SchemaDescriptor:
        columns: List[ColumnDescriptor] = [
            _identity_column(),
            ColumnDescriptor(name="slug", kind=ColumnKind.STRING, unique=True, nullable=False),
            ColumnDescriptor(name="label", kind=ColumnKind.STRING, nullable=False),
            ColumnDescriptor(name="order_no", kind=ColumnKind.INTEGER, nullable=False, default=0),
            ColumnDescriptor(
                name="is_active", kind=ColumnKind.BOOLEAN, nullable=False, default=True
            ),
            *_timestamp_columns(),
        ]
        return SchemaDescriptor(table_name=self._config.menu_table, columns=tuple(columns))

    def menu_entity(self) -> EntityDefinition:
        return EntityDefinition(
            class_name=MENU_CLASS_NAME,
            table_name=self._config.menu_table,
            fillable=MENU_FILLABLE,
        )

    def bootstrap_menu(self, engine: "PersistenceEngine") -> Optional[SchemaDescriptor]:
        """
        Create the menu table if the engine reports it absent.

        Returns the applied descriptor, or ``None`` when the table was
        already there.
        """
        if engine.has_table(self._config.menu_table):
            logger.debug("Menu table '%s' already present.", self._config.menu_table)
            return None
        descriptor: SchemaDescriptor = self.menu_descriptor()
        engine.apply(descriptor)
        logger.info("Bootstrapped menu table '%s'.", descriptor.table_name)
        return descriptor

    # ------------------------------------------------------------------
    # Module tables
    # ------------------------------------------------------------------

    def module_descriptor(self, spec: ModuleSpec, naming: NamingVariants) -> SchemaDescriptor:
        columns: List[ColumnDescriptor] = [_identity_column()]
        for field in spec.fields:
            columns.append(
                ColumnDescriptor(
                    name=field.identifier,
                    kind=map_field_type(field.type),
                    nullable=False,
                )
            )
        columns.extend(_timestamp_columns())
        descriptor = SchemaDescriptor(table_name=naming.collection_name, columns=tuple(columns))
        logger.debug("Synthesized %r", descriptor)
        return descriptor

    def module_entity(self, spec: ModuleSpec, naming: NamingVariants) -> EntityDefinition:
        return EntityDefinition(
            class_name=naming.type_name,
            table_name=naming.collection_name,
            fillable=spec.field_identifiers,
        )

    # ------------------------------------------------------------------
    # Schema module rendering
    # ------------------------------------------------------------------

    @staticmethod
    def schema_path(table_name: str) -> str:
        return f"{SCHEMA_DIR}/create_{table_name}_table.py"

    def render_schema_module(self, descriptor: SchemaDescriptor) -> GeneratedArtifact:
        """
        Render *descriptor* as a standalone module exposing ``define``,
        ``upgrade`` and ``downgrade``.
        """
        sa_names: Set[str] = {"Column", "MetaData", "Table"}
        for col in descriptor.columns:
            sa_names.add(sqlalchemy_source(col.kind).split("(")[0])
            if col.kind is ColumnKind.TIMESTAMP:
                sa_names.add("func")

        lines: List[str] = []
        lines.append('"""')
        lines.append(f"Create the '{descriptor.table_name}' table.")
        lines.append("Generated by crudgen.")
        lines.append('"""')
        lines.append("")
        lines.append("from __future__ import annotations")
        lines.append("")
        lines.append(f"from sqlalchemy import {', '.join(sorted(sa_names, key=str.lower))}")
        lines.append("from sqlalchemy.engine import Engine")
        lines.append("")
        lines.append(f'TABLE_NAME: str = "{descriptor.table_name}"')
        lines.append("")
        lines.append("")
        lines.append("def define(metadata: MetaData) -> Table:")
        lines.append(f"{_INDENT}return Table(")
        lines.append(f"{_INDENT * 2}TABLE_NAME,")
        lines.append(f"{_INDENT * 2}metadata,")
        for col in descriptor.columns:
            lines.append(f"{_INDENT * 2}{_column_source(col)},")
        lines.append(f"{_INDENT})")
        lines.append("")
        lines.append("")
        lines.append("def upgrade(bind: Engine) -> None:")
        lines.append(f"{_INDENT}define(MetaData()).create(bind, checkfirst=True)")
        lines.append("")
        lines.append("")
        lines.append("def downgrade(bind: Engine) -> None:")
        lines.append(f"{_INDENT}define(MetaData()).drop(bind, checkfirst=True)")
        lines.append("")

        return GeneratedArtifact(
            kind=ArtifactKind.SCHEMA,
            path=self.schema_path(descriptor.table_name),
            content="\n".join(lines),
        )


__all__: List[str] = [
    "SchemaSynthesizer",
    "build_table",
    "build_column",
    "SCHEMA_DIR",
    "MENU_CLASS_NAME",
    "TIMESTAMP_COLUMNS",
]
