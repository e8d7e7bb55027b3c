# File: crudgen/typemap.py
"""
crudgen - Type Mapper
======================
Total one-to-one mapping from operator-facing ``FieldType`` tokens to
persistence ``ColumnKind`` values, plus the companion tables every emitter
needs for a given kind:

    FieldType   ColumnKind   SQLAlchemy      Python     <input type>
    ---------   ----------   -------------   --------   --------------
    text        string       String(255)     str        text
    longText    text         Text            str        textarea
    integer     integer      Integer         int        number
    boolean     boolean      Boolean         bool       checkbox
    date        date         Date            date       date
    datetime    datetime     DateTime        datetime   datetime-local
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping

from sqlalchemy import Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.types import TypeEngine

from crudgen.models import ColumnKind, FieldType

logger: logging.Logger = logging.getLogger("crudgen.typemap")

STRING_LENGTH: int = 255

FIELD_TO_COLUMN: Mapping[FieldType, ColumnKind] = MappingProxyType({
    FieldType.TEXT: ColumnKind.STRING,
    FieldType.LONG_TEXT: ColumnKind.TEXT,
    FieldType.INTEGER: ColumnKind.INTEGER,
    FieldType.BOOLEAN: ColumnKind.BOOLEAN,
    FieldType.DATE: ColumnKind.DATE,
    FieldType.DATETIME: ColumnKind.DATETIME,
})

# Source-code spelling of the SQLAlchemy type, used in emitted modules.
_SQLALCHEMY_SOURCE: Dict[ColumnKind, str] = {
    ColumnKind.ID: "Integer",
    ColumnKind.STRING: f"String({STRING_LENGTH})",
    ColumnKind.TEXT: "Text",
    ColumnKind.INTEGER: "Integer",
    ColumnKind.BOOLEAN: "Boolean",
    ColumnKind.DATE: "Date",
    ColumnKind.DATETIME: "DateTime",
    ColumnKind.TIMESTAMP: "DateTime",
}

_SQLALCHEMY_FACTORY: Dict[ColumnKind, Callable[[], TypeEngine]] = {
    ColumnKind.ID: Integer,
    ColumnKind.STRING: lambda: String(STRING_LENGTH),
    ColumnKind.TEXT: Text,
    ColumnKind.INTEGER: Integer,
    ColumnKind.BOOLEAN: Boolean,
    ColumnKind.DATE: Date,
    ColumnKind.DATETIME: DateTime,
    ColumnKind.TIMESTAMP: DateTime,
}

_PYTHON_TYPE: Dict[ColumnKind, str] = {
    ColumnKind.ID: "int",
    ColumnKind.STRING: "str",
    ColumnKind.TEXT: "str",
    ColumnKind.INTEGER: "int",
    ColumnKind.BOOLEAN: "bool",
    ColumnKind.DATE: "date",
    ColumnKind.DATETIME: "datetime",
    ColumnKind.TIMESTAMP: "datetime",
}

_INPUT_TYPE: Dict[ColumnKind, str] = {
    ColumnKind.STRING: "text",
    ColumnKind.TEXT: "textarea",
    ColumnKind.INTEGER: "number",
    ColumnKind.BOOLEAN: "checkbox",
    ColumnKind.DATE: "date",
    ColumnKind.DATETIME: "datetime-local",
}


def map_field_type(field_type: FieldType) -> ColumnKind:
    """Return the column kind for *field_type*."""
    return FIELD_TO_COLUMN[FieldType(field_type)]


def sqlalchemy_source(kind: ColumnKind) -> str:
    return _SQLALCHEMY_SOURCE[kind]


def sqlalchemy_type(kind: ColumnKind) -> TypeEngine:
    """Fresh SQLAlchemy type instance for *kind*."""
    return _SQLALCHEMY_FACTORY[kind]()


def python_type(kind: ColumnKind) -> str:
    return _PYTHON_TYPE[kind]


def input_type(kind: ColumnKind) -> str:
    """HTML input type for *kind*; ``textarea`` is rendered as its own element."""
    return _INPUT_TYPE.get(kind, "text")


__all__: List[str] = [
    "FIELD_TO_COLUMN",
    "STRING_LENGTH",
    "map_field_type",
    "sqlalchemy_source",
    "sqlalchemy_type",
    "python_type",
    "input_type",
]
