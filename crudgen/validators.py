# File: crudgen/validators.py
"""
crudgen - Module & Configuration Validators
============================================
Pydantic already rejects malformed identifiers, unknown field types and
duplicate fields when a ``ModuleSpec`` is built. This module adds the
semantic checks that need more context: reserved words, clashes with the
columns every entity inherits, clashes with the menu table, and a sane
configuration.

Usage:
    from crudgen.validators import validate_full
    result = validate_full(spec, naming, config)
    if not result.is_valid:
        print(result.format_report())
"""

from __future__ import annotations

import keyword
import logging
import re
from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from crudgen.models import ModuleSpec, NamingVariants, ScaffoldConfig
from crudgen.schema import MENU_CLASS_NAME, TIMESTAMP_COLUMNS
from crudgen.templates import BASE_CLASS_NAME

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationError:
    """Lightweight error descriptor (no Pydantic overhead)."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning" | "info"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationError`` instances produced by the checks."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationError] = []

    def add_error(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationError("error", code, message, context))

    def add_warning(
        self, code: str, message: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self._items.append(ValidationError("warning", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    @property
    def errors(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_error]

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_warning]

    @property
    def codes(self) -> List[str]:
        return [e.code for e in self._items]

    @property
    def is_valid(self) -> bool:
        return not any(e.is_error for e in self._items)

    def summary(self) -> str:
        return (
            f"Validation: {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are NO errors."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self) -> str:
        lines: List[str] = [self.summary(), ""]
        for item in self._items:
            prefix: str = "❌" if item.is_error else "⚠️"
            lines.append(f"  {prefix} [{item.code}] {item.message}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Regex patterns & word lists
# ---------------------------------------------------------------------------

_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PASCAL_CASE_RE: re.Pattern[str] = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
_SNAKE_CASE_RE: re.Pattern[str] = re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$")

_SQL_RESERVED_WORDS: FrozenSet[str] = frozenset(
    {
        "select", "insert", "update", "delete", "drop", "create", "alter",
        "table", "column", "index", "from", "where", "join", "inner",
        "outer", "left", "right", "on", "and", "or", "not", "null",
        "true", "false", "in", "between", "like", "is", "as", "order",
        "by", "group", "having", "limit", "offset", "union", "all",
        "distinct", "case", "when", "then", "else", "end", "exists",
        "primary", "foreign", "key", "references", "constraint", "check",
        "default", "unique", "values", "into", "user", "schema",
    }
)

# Attributes every generated entity already defines.
_ENTITY_ATTRIBUTES: FrozenSet[str] = frozenset(
    {"id", *TIMESTAMP_COLUMNS, "fill", "metadata", "registry", "query"}
)

# Names the generated handler module defines at module level.
_HANDLER_NAMES: FrozenSet[str] = frozenset(
    {
        "ValidationFailed", "validate_submission", "APIRouter", "Depends",
        "HTTPException", "Request", "Response", "HTMLResponse",
        "RedirectResponse", "Session", "templates", "get_db",
        BASE_CLASS_NAME, "Base", MENU_CLASS_NAME,
    }
)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_module_name(
    naming: NamingVariants, config: ScaffoldConfig
) -> ValidationResult:
    """Entity class and table names derived from the module name."""
    result: ValidationResult = ValidationResult()
    ctx: Dict[str, Any] = {"module": naming.type_name}

    if not _IDENTIFIER_RE.match(naming.type_name) or keyword.iskeyword(naming.type_name):
        result.add_error(
            "INVALID_MODULE_NAME",
            f"Module name '{naming.type_name}' is not a valid class name.",
            ctx,
        )
        return result

    if not _PASCAL_CASE_RE.match(naming.type_name):
        result.add_warning(
            "MODULE_NAME_NOT_PASCAL_CASE",
            f"Module name '{naming.type_name}' is not PascalCase.",
            ctx,
        )

    if naming.type_name in _HANDLER_NAMES:
        result.add_error(
            "MODULE_NAME_RESERVED",
            f"Module name '{naming.type_name}' clashes with a generated name.",
            ctx,
        )

    if naming.collection_name == config.menu_table:
        result.add_error(
            "MODULE_TABLE_CONFLICT",
            f"Table '{naming.collection_name}' is the menu table.",
            ctx,
        )

    if naming.collection_name in _SQL_RESERVED_WORDS:
        result.add_error(
            "TABLE_NAME_SQL_RESERVED",
            f"Table name '{naming.collection_name}' is a SQL reserved word.",
            ctx,
        )
    return result


def validate_field_names(spec: ModuleSpec) -> ValidationResult:
    """Per-field clashes with keywords and inherited entity attributes."""
    result: ValidationResult = ValidationResult()

    for field in spec.fields:
        name: str = field.identifier
        ctx: Dict[str, Any] = {"field": name}

        if keyword.iskeyword(name):
            result.add_error(
                "FIELD_NAME_PYTHON_KEYWORD",
                f"Field '{name}' is a Python keyword.",
                ctx,
            )
            continue

        if name in _ENTITY_ATTRIBUTES:
            result.add_error(
                "FIELD_NAME_RESERVED",
                f"Field '{name}' is already defined on every entity.",
                ctx,
            )
            continue

        if name.startswith("_"):
            result.add_error(
                "FIELD_NAME_PRIVATE",
                f"Field '{name}' must not start with an underscore.",
                ctx,
            )
            continue

        if not _SNAKE_CASE_RE.match(name):
            result.add_warning(
                "FIELD_NAME_NOT_SNAKE_CASE",
                f"Field '{name}' is not snake_case.",
                ctx,
            )

        if name in _SQL_RESERVED_WORDS:
            result.add_warning(
                "FIELD_NAME_SQL_RESERVED",
                f"Field '{name}' is a SQL reserved word and will be quoted.",
                ctx,
            )

    return result


def validate_config(config: ScaffoldConfig) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    try:
        make_url(config.database_url)
    except ArgumentError as exc:
        result.add_error(
            "INVALID_DATABASE_URL",
            f"Could not parse database URL '{config.database_url}': {exc}",
        )
    if not config.layout_template.endswith(".html"):
        result.add_warning(
            "LAYOUT_NOT_HTML",
            f"Layout template '{config.layout_template}' does not end in .html.",
        )
    return result


def validate_full(
    spec: ModuleSpec, naming: NamingVariants, config: ScaffoldConfig
) -> ValidationResult:
    """Run every check and merge the results."""
    result: ValidationResult = ValidationResult()
    result.merge(validate_module_name(naming, config))
    result.merge(validate_field_names(spec))
    result.merge(validate_config(config))
    logger.debug("%s", result.summary())
    return result


__all__: List[str] = [
    "ValidationError",
    "ValidationResult",
    "validate_module_name",
    "validate_field_names",
    "validate_config",
    "validate_full",
]
