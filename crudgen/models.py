# File: crudgen/models.py
"""
crudgen - Core Data Models
===========================
Pydantic V2 models for the scaffold pipeline. These are the single source of
truth handed between components:

    ModuleSpec → NamingVariants → SchemaDescriptor / EntityDefinition
               → GeneratedArtifact (files) → MenuEntry (database row)

``ModuleSpec`` and everything derived from it is immutable once built; every
emitter reads the same field list in the same order.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from crudgen.utils import count_lines, to_title_label

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.models")

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FieldType(str, Enum):
    """Abstract field-type tokens an operator may choose from."""

    TEXT = "text"
    LONG_TEXT = "longText"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"


class ColumnKind(str, Enum):
    """Persistence-layer column kinds understood by the schema applier."""

    ID = "id"
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"


class ArtifactKind(str, Enum):
    """Kinds of output the engine produces."""

    SCHEMA = "schema"
    MODEL = "model"
    HANDLER = "handler"
    TEMPLATE = "template"
    ROUTE = "route"
    LAYOUT = "layout"
    SUPPORT = "support"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    frozen=True,
    extra="forbid",
)

_MUTABLE_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    extra="forbid",
)

DEFAULT_FIELD_IDENTIFIER: str = "name"
IDENTIFIER_PATTERN: str = r"^[a-z_][a-z0-9_]*$"


# ---------------------------------------------------------------------------
# Operator input
# ---------------------------------------------------------------------------


class FieldSpec(BaseModel):
    """One declared attribute of a module."""

    model_config = _FROZEN_CONFIG

    identifier: str = Field(
        ...,
        min_length=1,
        pattern=IDENTIFIER_PATTERN,
        description="Attribute / column name.",
    )
    type: FieldType = Field(default=FieldType.TEXT, description="Abstract field type.")

    @computed_field  # type: ignore[misc]
    @property
    def label(self) -> str:
        return to_title_label(self.identifier)

    def __repr__(self) -> str:
        return f"<Field {self.identifier}:{self.type.value}>"


class ModuleSpec(BaseModel):
    """
    A module name plus its ordered field declarations.

    An empty field list is replaced by a single ``name: text`` field before
    validation completes, so downstream emitters never see an empty module.
    """

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Raw module name, e.g. 'Product'.")
    fields: Tuple[FieldSpec, ...] = Field(
        default=(), description="Ordered field declarations."
    )

    @model_validator(mode="before")
    @classmethod
    def _substitute_default_field(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("fields"):
            logger.warning(
                "No fields provided for module '%s'. Adding default '%s' field.",
                data.get("name"),
                DEFAULT_FIELD_IDENTIFIER,
            )
            data = {
                **data,
                "fields": (FieldSpec(identifier=DEFAULT_FIELD_IDENTIFIER),),
            }
        return data

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Module name must not be blank.")
        return v

    @field_validator("fields")
    @classmethod
    def _unique_identifiers(cls, v: Tuple[FieldSpec, ...]) -> Tuple[FieldSpec, ...]:
        seen: List[str] = [f.identifier for f in v]
        dupes: List[str] = sorted({x for x in seen if seen.count(x) > 1})
        if dupes:
            raise ValueError(f"Duplicate field identifiers: {dupes}")
        return v

    @computed_field  # type: ignore[misc]
    @property
    def field_identifiers(self) -> Tuple[str, ...]:
        return tuple(f.identifier for f in self.fields)

    def __repr__(self) -> str:
        return f"<ModuleSpec {self.name} ({len(self.fields)} fields)>"


# ---------------------------------------------------------------------------
# Derived naming
# ---------------------------------------------------------------------------


class NamingVariants(BaseModel):
    """Every name the emitters need, derived from one module name."""

    model_config = _FROZEN_CONFIG

    type_name: str = Field(..., description="PascalCase entity type, e.g. 'Product'.")
    collection_name: str = Field(..., description="Plural snake_case table, e.g. 'products'.")
    handler_name: str = Field(..., description="Handler class, e.g. 'ProductHandler'.")
    route_segment: str = Field(..., description="URL segment, e.g. 'admin/products'.")
    variable_name: str = Field(..., description="camelCase singular, e.g. 'product'.")
    module_name: str = Field(..., description="snake_case singular for file names.")

    @computed_field  # type: ignore[misc]
    @property
    def route_name(self) -> str:
        """Dotted route-name prefix, e.g. ``admin.products``."""
        return self.route_segment.replace("/", ".")


# ---------------------------------------------------------------------------
# Persistence descriptors
# ---------------------------------------------------------------------------


class ColumnDescriptor(BaseModel):
    """A single column in a schema descriptor."""

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1)
    kind: ColumnKind
    primary_key: bool = False
    unique: bool = False
    nullable: bool = True
    default: Optional[Any] = None

    def __repr__(self) -> str:
        flags: str = " PK" if self.primary_key else ""
        flags += " UNIQUE" if self.unique else ""
        return f"<Column {self.name} {self.kind.value}{flags}>"


class SchemaDescriptor(BaseModel):
    """Declarative description of one table, applied once to create storage."""

    model_config = _FROZEN_CONFIG

    table_name: str = Field(..., min_length=1)
    columns: Tuple[ColumnDescriptor, ...] = Field(..., min_length=1)

    @computed_field  # type: ignore[misc]
    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def __repr__(self) -> str:
        return f"<SchemaDescriptor {self.table_name} ({len(self.columns)} cols)>"


class EntityDefinition(BaseModel):
    """Entity type declaration: class, backing table, mass-assignable attributes."""

    model_config = _FROZEN_CONFIG

    class_name: str
    table_name: str
    fillable: Tuple[str, ...]


class MenuEntry(BaseModel):
    """A persisted navigation record."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    slug: str
    label: str
    order_no: int = 0
    is_active: bool = True


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class GeneratedArtifact(BaseModel):
    """One file-shaped output of an emitter, addressed relative to the app root."""

    model_config = _FROZEN_CONFIG

    kind: ArtifactKind
    path: str = Field(..., min_length=1, description="POSIX path relative to the app root.")
    content: str
    append: bool = Field(default=False, description="Append instead of replacing.")

    @computed_field  # type: ignore[misc]
    @property
    def line_count(self) -> int:
        return count_lines(self.content)

    def __repr__(self) -> str:
        mode: str = "append" if self.append else "write"
        return f"<Artifact {self.kind.value} {self.path} ({mode})>"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ScaffoldConfig(BaseModel):
    """
    Settings for one generation run.

    Loaded from defaults, then an optional ``crudgen.yaml`` / ``crudgen.json``
    in the app root, then CLI overrides.
    """

    model_config = _MUTABLE_CONFIG

    app_root: str = Field(default=".", description="Root of the target application.")
    package_name: str = Field(
        default="app",
        pattern=IDENTIFIER_PATTERN,
        description="Python package of the target application.",
    )
    database_url: str = Field(
        default="sqlite:///./app.db",
        description="SQLAlchemy URL of the target application's database.",
    )
    admin_prefix: str = Field(default="/admin", description="URL prefix for CRUD routes.")
    page_size: int = Field(default=10, ge=1, le=1000, description="Rows per list page.")
    menu_table: str = Field(
        default="admin_menus",
        pattern=IDENTIFIER_PATTERN,
        description="Table that stores navigation menu entries.",
    )
    templates_dir: str = Field(default="templates", description="Jinja2 template root.")
    layout_template: str = Field(
        default="layouts/admin.html", description="Layout every view extends."
    )
    overwrite_existing: bool = Field(
        default=False, description="Regenerate a module that already exists."
    )
    dry_run: bool = Field(
        default=False, description="Render artifacts without touching disk or database."
    )

    @field_validator("admin_prefix")
    @classmethod
    def _normalise_prefix(cls, v: str) -> str:
        v = "/" + v.strip("/")
        if v == "/":
            raise ValueError("admin_prefix must name at least one path segment.")
        return v

    @computed_field  # type: ignore[misc]
    @property
    def admin_segment(self) -> str:
        """Prefix without slashes, e.g. ``admin``."""
        return self.admin_prefix.strip("/")

    @property
    def app_path(self) -> Path:
        return Path(self.app_root).resolve()

    def overrides(self, **changes: Any) -> "ScaffoldConfig":
        """Return a copy with *changes* applied (``None`` values ignored)."""
        data: Dict[str, Any] = self.model_dump(exclude={"admin_segment"})
        data.update({k: v for k, v in changes.items() if v is not None})
        return ScaffoldConfig.model_validate(data)


__all__: List[str] = [
    "FieldType",
    "ColumnKind",
    "ArtifactKind",
    "FieldSpec",
    "ModuleSpec",
    "NamingVariants",
    "ColumnDescriptor",
    "SchemaDescriptor",
    "EntityDefinition",
    "MenuEntry",
    "GeneratedArtifact",
    "ScaffoldConfig",
    "DEFAULT_FIELD_IDENTIFIER",
]
