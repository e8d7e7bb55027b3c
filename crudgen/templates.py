# File: crudgen/templates.py
"""
crudgen - Code Template Engine
===============================
Turns ``EntityDefinition`` / ``SchemaDescriptor`` / ``ModuleSpec`` objects
into Python source for the target application:

    1. SQLAlchemy 2.0 entity classes (``Mapped[]`` / ``mapped_column()``)
    2. The shared declarative base with identity + timestamp columns
    3. FastAPI CRUD handler classes (list / create / store / edit / update /
       destroy) with a pure ``validate_submission`` function
    4. ``database.py`` (engine, session factory, ``get_db``)
    5. ``templating.py`` (``Jinja2Templates`` + ``admin_menus()`` global)

All string assembly uses ``List[str]`` + ``"\\n".join()``. Every generate
method is stateless and returns one ``GeneratedArtifact``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Set

from crudgen.models import (
    ArtifactKind,
    ColumnKind,
    EntityDefinition,
    GeneratedArtifact,
    ModuleSpec,
    NamingVariants,
    ScaffoldConfig,
    SchemaDescriptor,
)
from crudgen.schema import TIMESTAMP_COLUMNS
from crudgen.typemap import map_field_type, python_type, sqlalchemy_source
from crudgen.utils import format_tuple_literal, to_snake_case

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GENERATED_BY: str = "Generated by crudgen."
BASE_CLASS_NAME: str = "TimestampedModel"

_SKIPPED_COLUMNS: Set[str] = {"id", *TIMESTAMP_COLUMNS}


def _docstring_header(title: str) -> List[str]:
    return ['"""', title, _GENERATED_BY, '"""', "", "from __future__ import annotations", ""]


class TemplateGenerator:
    """
    Stateless code-generation engine for the Python side of a module.

    Each ``generate_*`` method returns a complete, self-contained file as a
    ``GeneratedArtifact`` whose path is relative to the application root.
    """

    def __init__(self, config: ScaffoldConfig) -> None:
        self._config: ScaffoldConfig = config
        self._pkg: str = config.package_name
        self._indent: str = "    "
        self._double_indent: str = self._indent * 2
        self._triple_indent: str = self._indent * 3
        logger.debug("TemplateGenerator initialised (package=%s).", self._pkg)

    # ===================================================================
    # Paths
    # ===================================================================

    def model_path(self, module_name: str) -> str:
        return f"{self._pkg}/models/{module_name}.py"

    def handler_path(self, module_name: str) -> str:
        return f"{self._pkg}/handlers/{module_name}_handler.py"

    def handler_import(self, naming: NamingVariants) -> str:
        return (
            f"from {self._pkg}.handlers.{naming.module_name}_handler "
            f"import {naming.handler_name}"
        )

    # ===================================================================
    # 1. Declarative base
    # ===================================================================

    def generate_base_model(self) -> GeneratedArtifact:
        """Shared ``Base`` plus an abstract model carrying id and timestamps."""
        i, ii, iii = self._indent, self._double_indent, self._triple_indent
        lines: List[str] = _docstring_header("Declarative base and shared entity columns.")
        lines.append("from datetime import datetime")
        lines.append("from typing import Any, Mapping, Optional")
        lines.append("")
        lines.append("from sqlalchemy import DateTime, Integer, func")
        lines.append("from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column")
        lines.append("")
        lines.append("")
        lines.append("class Base(DeclarativeBase):")
        lines.append(f'{i}"""SQLAlchemy declarative base."""')
        lines.append("")
        lines.append("")
        lines.append(f"class {BASE_CLASS_NAME}(Base):")
        lines.append(f'{i}"""Identity and timestamp columns shared by every entity."""')
        lines.append("")
        lines.append(f"{i}__abstract__ = True")
        lines.append("")
        lines.append(f"{i}FILLABLE = ()")
        lines.append("")
        lines.append(
            f"{i}id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)"
        )
        lines.append(f"{i}created_at: Mapped[Optional[datetime]] = mapped_column(")
        lines.append(f"{ii}DateTime, server_default=func.now()")
        lines.append(f"{i})")
        lines.append(f"{i}updated_at: Mapped[Optional[datetime]] = mapped_column(")
        lines.append(f"{ii}DateTime, server_default=func.now(), onupdate=func.now()")
        lines.append(f"{i})")
        lines.append("")
        lines.append(f"{i}def fill(self, data: Mapping[str, Any]) -> \"{BASE_CLASS_NAME}\":")
        lines.append(f'{ii}"""Assign every key of *data* that is listed in ``FILLABLE``."""')
        lines.append(f"{ii}for key in self.FILLABLE:")
        lines.append(f"{iii}if key in data:")
        lines.append(f"{iii}{i}setattr(self, key, data[key])")
        lines.append(f"{ii}return self")
        lines.append("")
        return GeneratedArtifact(
            kind=ArtifactKind.SUPPORT,
            path=f"{self._pkg}/models/base.py",
            content="\n".join(lines),
        )

    # ===================================================================
    # 2. Entity model
    # ===================================================================

    def generate_model(
        self, entity: EntityDefinition, descriptor: SchemaDescriptor
    ) -> GeneratedArtifact:
        """
        Generate one SQLAlchemy 2.0 entity class.

        Identity and timestamp columns come from the shared base; every other
        descriptor column becomes a ``Mapped[...]`` attribute. ``FILLABLE``
        lists exactly the entity's mass-assignable attributes.
        """
        i, ii = self._indent, self._double_indent
        columns = [c for c in descriptor.columns if c.name not in _SKIPPED_COLUMNS]

        sa_names: Set[str] = {sqlalchemy_source(c.kind).split("(")[0] for c in columns}
        py_names: Set[str] = {
            python_type(c.kind) for c in columns if c.kind in (ColumnKind.DATE, ColumnKind.DATETIME)
        }

        stdlib: List[str] = []
        if py_names:
            stdlib.append(f"from datetime import {', '.join(sorted(py_names))}")
        if any(c.nullable for c in columns):
            stdlib.append("from typing import Optional")

        lines: List[str] = _docstring_header(f"{entity.class_name} entity.")
        if stdlib:
            lines.extend(stdlib)
            lines.append("")
        lines.append(f"from sqlalchemy import {', '.join(sorted(sa_names))}")
        lines.append("from sqlalchemy.orm import Mapped, mapped_column")
        lines.append("")
        lines.append(f"from {self._pkg}.models.base import {BASE_CLASS_NAME}")
        lines.append("")
        lines.append("")
        lines.append(f"class {entity.class_name}({BASE_CLASS_NAME}):")
        lines.append(f'{i}__tablename__ = "{entity.table_name}"')
        lines.append("")
        lines.append(f"{i}FILLABLE = {format_tuple_literal(list(entity.fillable))}")
        lines.append("")
        for col in columns:
            args: List[str] = [sqlalchemy_source(col.kind)]
            if col.unique:
                args.append("unique=True")
            if col.default is not None:
                args.append(f"default={col.default!r}")
            annotation: str = python_type(col.kind)
            if col.nullable:
                annotation = f"Optional[{annotation}]"
            lines.append(
                f"{i}{col.name}: Mapped[{annotation}] = mapped_column({', '.join(args)})"
            )
        lines.append("")
        lines.append(f"{i}def __repr__(self) -> str:")
        lines.append(f'{ii}return f"<{entity.class_name} id={{self.id!r}}>"')
        lines.append("")

        module_name: str = to_snake_case(entity.class_name)
        content: str = "\n".join(lines)
        logger.debug(
            "Generated model '%s': %d lines.", entity.class_name, content.count("\n") + 1
        )
        return GeneratedArtifact(
            kind=ArtifactKind.MODEL, path=self.model_path(module_name), content=content
        )

    # ===================================================================
    # 3. CRUD handler
    # ===================================================================

    def generate_handler(self, spec: ModuleSpec, naming: NamingVariants) -> GeneratedArtifact:
        """
        Generate the handler module for one module.

        Module-level pieces (``REQUIRED_FIELDS``, ``FIELD_KINDS``,
        ``ValidationFailed``, ``validate_submission``) carry no web-framework
        dependency so they can be exercised on their own.
        """
        i, ii, iii = self._indent, self._double_indent, self._triple_indent
        t: str = naming.type_name
        route: str = naming.route_name
        kinds: Dict[str, ColumnKind] = {f.identifier: map_field_type(f.type) for f in spec.fields}
        needs_date: bool = ColumnKind.DATE in kinds.values()
        needs_datetime: bool = ColumnKind.DATETIME in kinds.values()

        lines: List[str] = _docstring_header(f"Admin CRUD handler for {t}.")
        dt_names: List[str] = []
        if needs_date:
            dt_names.append("date")
        if needs_datetime:
            dt_names.append("datetime")
        if dt_names:
            lines.append(f"from datetime import {', '.join(dt_names)}")
        lines.append("from typing import Any, Dict, Mapping, Tuple")
        lines.append("")
        lines.append("from fastapi import APIRouter, Depends, HTTPException, Request")
        lines.append("from fastapi.responses import HTMLResponse, RedirectResponse, Response")
        lines.append("from sqlalchemy import func, select")
        lines.append("from sqlalchemy.orm import Session")
        lines.append("")
        lines.append(f"from {self._pkg}.database import get_db")
        lines.append(f"from {self._pkg}.models.{naming.module_name} import {t}")
        lines.append(f"from {self._pkg}.templating import templates")
        lines.append("")
        lines.append(f"REQUIRED_FIELDS: Tuple[str, ...] = {format_tuple_literal(list(kinds))}")
        lines.append("FIELD_KINDS: Dict[str, str] = {")
        for name, kind in kinds.items():
            lines.append(f'{i}"{name}": "{kind.value}",')
        lines.append("}")
        lines.append(f"PAGE_SIZE: int = {self._config.page_size}")
        lines.append(f'VIEW_DIR: str = "{naming.route_segment}"')
        lines.append(f'ROUTE_NAME: str = "{route}"')
        lines.append("")
        lines.append("")

        # --- validation ---
        lines.append("class ValidationFailed(ValueError):")
        lines.append(f'{i}"""Submitted form data is missing fields or has unreadable values."""')
        lines.append("")
        lines.append(
            f"{i}def __init__(self, missing: Tuple[str, ...] = (), "
            f"invalid: Tuple[str, ...] = ()) -> None:"
        )
        lines.append(f"{ii}self.missing = missing")
        lines.append(f"{ii}self.invalid = invalid")
        lines.append(f"{ii}parts = []")
        lines.append(f"{ii}if missing:")
        lines.append(f'{iii}parts.append("The " + ", ".join(missing) + " field(s) are required.")')
        lines.append(f"{ii}if invalid:")
        lines.append(f'{iii}parts.append("Invalid value for " + ", ".join(invalid) + ".")')
        lines.append(f'{ii}super().__init__(" ".join(parts))')
        lines.append("")
        lines.append("")
        lines.append("def _coerce(kind: str, raw: Any) -> Any:")
        lines.append(f'{i}if kind == "integer":')
        lines.append(f"{ii}return int(raw)")
        lines.append(f'{i}if kind == "boolean":')
        lines.append(f'{ii}return str(raw).lower() in ("1", "true", "on", "yes")')
        if needs_date:
            lines.append(f'{i}if kind == "date":')
            lines.append(f"{ii}return date.fromisoformat(str(raw))")
        if needs_datetime:
            lines.append(f'{i}if kind == "datetime":')
            lines.append(f"{ii}return datetime.fromisoformat(str(raw))")
        lines.append(f"{i}return str(raw)")
        lines.append("")
        lines.append("")
        lines.append("def validate_submission(data: Mapping[str, Any]) -> Dict[str, Any]:")
        lines.append(f'{i}"""')
        lines.append(f"{i}Check that every declared field is present and non-empty.")
        lines.append("")
        lines.append(f"{i}Returns the cleaned values keyed by field name; raises")
        lines.append(f"{i}``ValidationFailed`` naming the offending fields.")
        lines.append(f'{i}"""')
        lines.append(f"{i}missing = tuple(")
        lines.append(f"{ii}name for name in REQUIRED_FIELDS")
        lines.append(f'{ii}if data.get(name) is None or str(data.get(name)).strip() == ""')
        lines.append(f"{i})")
        lines.append(f"{i}if missing:")
        lines.append(f"{ii}raise ValidationFailed(missing=missing)")
        lines.append("")
        lines.append(f"{i}cleaned: Dict[str, Any] = {{}}")
        lines.append(f"{i}invalid = []")
        lines.append(f"{i}for name in REQUIRED_FIELDS:")
        lines.append(f"{ii}try:")
        lines.append(f"{iii}cleaned[name] = _coerce(FIELD_KINDS[name], data[name])")
        lines.append(f"{ii}except ValueError:")
        lines.append(f"{iii}invalid.append(name)")
        lines.append(f"{i}if invalid:")
        lines.append(f"{ii}raise ValidationFailed(invalid=tuple(invalid))")
        lines.append(f"{i}return cleaned")
        lines.append("")
        lines.append("")

        # --- handler class ---
        lines.append(f"class {naming.handler_name}:")
        lines.append(f'{i}"""List, create, edit and delete {t} records."""')
        lines.append("")
        lines.append(f"{i}def __init__(self, db: Session) -> None:")
        lines.append(f"{ii}self.db = db")
        lines.append("")
        lines.extend(self._handler_actions(t, naming))
        lines.extend(self._handler_router(naming))

        content: str = "\n".join(lines)
        logger.debug("Generated handler '%s': %d lines.", naming.handler_name, content.count("\n") + 1)
        return GeneratedArtifact(
            kind=ArtifactKind.HANDLER,
            path=self.handler_path(naming.module_name),
            content=content,
        )

    def _handler_actions(self, t: str, naming: NamingVariants) -> List[str]:
        i, ii, iii = self._indent, self._double_indent, self._triple_indent
        var: str = naming.variable_name
        lines: List[str] = []

        lines.append(f"{i}def _find(self, item_id: int) -> {t}:")
        lines.append(f"{ii}{var} = self.db.get({t}, item_id)")
        lines.append(f"{ii}if {var} is None:")
        lines.append(f'{iii}raise HTTPException(status_code=404, detail="{t} not found.")')
        lines.append(f"{ii}return {var}")
        lines.append("")
        lines.append(f"{i}def _rejected(")
        lines.append(
            f"{ii}self, request: Request, view: str, item: Any, "
            f"form: Mapping[str, Any], exc: ValidationFailed"
        )
        lines.append(f"{i}) -> Response:")
        lines.append(f'{ii}"""Re-render *view* with the submitted values and the errors."""')
        lines.append(f"{ii}return templates.TemplateResponse(")
        lines.append(f"{iii}request,")
        lines.append(f'{iii}VIEW_DIR + "/" + view,')
        lines.append(f"{iii}{{")
        lines.append(f'{iii}{i}"item": item,')
        lines.append(f'{iii}{i}"old": {{name: form.get(name, "") for name in REQUIRED_FIELDS}},')
        lines.append(f'{iii}{i}"errors": [str(exc)],')
        lines.append(f"{iii}}},")
        lines.append(f"{iii}status_code=422,")
        lines.append(f"{ii})")
        lines.append("")
        lines.append(f"{i}def _to_index(self, request: Request) -> RedirectResponse:")
        lines.append(
            f'{ii}return RedirectResponse(str(request.url_for(ROUTE_NAME + ".index")), '
            f"status_code=303)"
        )
        lines.append("")

        # index
        lines.append(f"{i}def index(self, request: Request, page: int = 1) -> Response:")
        lines.append(f"{ii}page = max(page, 1)")
        lines.append(f"{ii}total = self.db.scalar(select(func.count()).select_from({t})) or 0")
        lines.append(f"{ii}items = self.db.scalars(")
        lines.append(f"{iii}select({t})")
        lines.append(f"{iii}.order_by({t}.created_at.desc(), {t}.id.desc())")
        lines.append(f"{iii}.offset((page - 1) * PAGE_SIZE)")
        lines.append(f"{iii}.limit(PAGE_SIZE)")
        lines.append(f"{ii}).all()")
        lines.append(f"{ii}pages = max((total + PAGE_SIZE - 1) // PAGE_SIZE, 1)")
        lines.append(f"{ii}return templates.TemplateResponse(")
        lines.append(f"{iii}request,")
        lines.append(f'{iii}VIEW_DIR + "/index.html",')
        lines.append(f'{iii}{{"items": items, "page": page, "pages": pages, "total": total}},')
        lines.append(f"{ii})")
        lines.append("")

        # create
        lines.append(f"{i}def create(self, request: Request) -> Response:")
        lines.append(
            f'{ii}return templates.TemplateResponse(request, VIEW_DIR + "/create.html", '
            f'{{"item": None}})'
        )
        lines.append("")

        # store
        lines.append(f"{i}async def store(self, request: Request) -> Response:")
        lines.append(f"{ii}form = await request.form()")
        lines.append(f"{ii}try:")
        lines.append(f"{iii}data = validate_submission(form)")
        lines.append(f"{ii}except ValidationFailed as exc:")
        lines.append(f'{iii}return self._rejected(request, "create.html", None, form, exc)')
        lines.append(f"{ii}self.db.add({t}().fill(data))")
        lines.append(f"{ii}self.db.commit()")
        lines.append(f"{ii}return self._to_index(request)")
        lines.append("")

        # edit
        lines.append(f"{i}def edit(self, request: Request, item_id: int) -> Response:")
        lines.append(f"{ii}{var} = self._find(item_id)")
        lines.append(
            f'{ii}return templates.TemplateResponse(request, VIEW_DIR + "/edit.html", '
            f'{{"item": {var}}})'
        )
        lines.append("")

        # update
        lines.append(f"{i}async def update(self, request: Request, item_id: int) -> Response:")
        lines.append(f"{ii}{var} = self._find(item_id)")
        lines.append(f"{ii}form = await request.form()")
        lines.append(f"{ii}try:")
        lines.append(f"{iii}data = validate_submission(form)")
        lines.append(f"{ii}except ValidationFailed as exc:")
        lines.append(f'{iii}return self._rejected(request, "edit.html", {var}, form, exc)')
        lines.append(f"{ii}{var}.fill(data)")
        lines.append(f"{ii}self.db.commit()")
        lines.append(f"{ii}return self._to_index(request)")
        lines.append("")

        # destroy
        lines.append(f"{i}def destroy(self, request: Request, item_id: int) -> Response:")
        lines.append(f"{ii}self.db.delete(self._find(item_id))")
        lines.append(f"{ii}self.db.commit()")
        lines.append(f'{ii}referer = request.headers.get("referer")')
        lines.append(f"{ii}if referer:")
        lines.append(f"{iii}return RedirectResponse(referer, status_code=303)")
        lines.append(f"{ii}return self._to_index(request)")
        lines.append("")
        return lines

    def _handler_router(self, naming: NamingVariants) -> List[str]:
        i, ii, iii = self._indent, self._double_indent, self._triple_indent
        h: str = naming.handler_name
        db_dep: str = "db: Session = Depends(get_db)"
        lines: List[str] = []

        lines.append(f"{i}@classmethod")
        lines.append(f"{i}def as_router(cls) -> APIRouter:")
        lines.append(f'{ii}"""Router exposing the six actions; mount it under the module prefix."""')
        lines.append(f"{ii}router = APIRouter()")
        lines.append("")

        routes = [
            ("get", '""', "index", f"request: Request, page: int = 1, {db_dep}",
             "cls(db).index(request, page)", False),
            ("get", '"/create"', "create", f"request: Request, {db_dep}",
             "cls(db).create(request)", False),
            ("post", '""', "store", f"request: Request, {db_dep}",
             "await cls(db).store(request)", True),
            ("get", '"/{item_id}/edit"', "edit", f"request: Request, item_id: int, {db_dep}",
             "cls(db).edit(request, item_id)", False),
            ("post", '"/{item_id}"', "update", f"request: Request, item_id: int, {db_dep}",
             "await cls(db).update(request, item_id)", True),
            ("post", '"/{item_id}/delete"', "destroy",
             f"request: Request, item_id: int, {db_dep}",
             "cls(db).destroy(request, item_id)", False),
        ]
        for method, path, action, params, call, is_async in routes:
            lines.append(
                f"{ii}@router.{method}({path}, name=ROUTE_NAME + \".{action}\", "
                f"response_class=HTMLResponse)"
            )
            prefix: str = "async def" if is_async else "def"
            lines.append(f"{ii}{prefix} {action}({params}) -> Response:")
            lines.append(f"{iii}return {call}")
            lines.append("")

        lines.append(f"{ii}return router")
        lines.append("")
        logger.debug("Handler router for %s: %d routes.", h, len(routes))
        return lines

    # ===================================================================
    # 4. Database module
    # ===================================================================

    def generate_database_module(self) -> GeneratedArtifact:
        """Generate database.py with engine, session factory and ``get_db``."""
        i, ii = self._indent, self._double_indent
        lines: List[str] = _docstring_header("Database engine and session factory.")
        lines.append("import os")
        lines.append("from typing import Generator")
        lines.append("")
        lines.append("from sqlalchemy import create_engine")
        lines.append("from sqlalchemy.orm import Session, sessionmaker")
        lines.append("")
        lines.append(
            f'DATABASE_URL: str = os.environ.get("DATABASE_URL", "{self._config.database_url}")'
        )
        lines.append("")
        lines.append("engine = create_engine(DATABASE_URL, echo=False, pool_pre_ping=True)")
        lines.append("")
        lines.append("SessionLocal = sessionmaker(")
        lines.append(f"{i}bind=engine,")
        lines.append(f"{i}autocommit=False,")
        lines.append(f"{i}autoflush=False,")
        lines.append(")")
        lines.append("")
        lines.append("")
        lines.append("def get_db() -> Generator[Session, None, None]:")
        lines.append(f'{i}"""FastAPI dependency yielding a DB session."""')
        lines.append(f"{i}db = SessionLocal()")
        lines.append(f"{i}try:")
        lines.append(f"{ii}yield db")
        lines.append(f"{i}finally:")
        lines.append(f"{ii}db.close()")
        lines.append("")
        return GeneratedArtifact(
            kind=ArtifactKind.SUPPORT,
            path=f"{self._pkg}/database.py",
            content="\n".join(lines),
        )

    # ===================================================================
    # 5. Templating module
    # ===================================================================

    def generate_templating_module(self, menu: EntityDefinition) -> GeneratedArtifact:
        """
        Generate templating.py: the ``Jinja2Templates`` instance with an
        ``admin_menus()`` global the layout calls at render time.
        """
        i, ii, iii = self._indent, self._double_indent, self._triple_indent
        menu_module: str = to_snake_case(menu.class_name)
        cls: str = menu.class_name
        lines: List[str] = _docstring_header("Jinja2 environment shared by every admin view.")
        lines.append("from pathlib import Path")
        lines.append("from typing import List")
        lines.append("")
        lines.append("from fastapi.templating import Jinja2Templates")
        lines.append("from sqlalchemy import select")
        lines.append("")
        lines.append(f"from {self._pkg}.database import SessionLocal")
        lines.append(f"from {self._pkg}.models.{menu_module} import {cls}")
        lines.append("")
        lines.append(
            f'TEMPLATES_DIR: Path = Path(__file__).resolve().parent.parent / '
            f'"{self._config.templates_dir}"'
        )
        lines.append("")
        lines.append("templates = Jinja2Templates(directory=str(TEMPLATES_DIR))")
        lines.append("")
        lines.append("")
        lines.append(f"def admin_menus() -> List[{cls}]:")
        lines.append(f'{i}"""Active menu entries in display order."""')
        lines.append(f"{i}with SessionLocal() as session:")
        lines.append(f"{ii}return list(")
        lines.append(f"{iii}session.scalars(")
        lines.append(f"{iii}{i}select({cls})")
        lines.append(f"{iii}{i}.where({cls}.is_active.is_(True))")
        lines.append(f"{iii}{i}.order_by({cls}.order_no, {cls}.id)")
        lines.append(f"{iii})")
        lines.append(f"{ii})")
        lines.append("")
        lines.append("")
        lines.append('templates.env.globals["admin_menus"] = admin_menus')
        lines.append("")
        return GeneratedArtifact(
            kind=ArtifactKind.SUPPORT,
            path=f"{self._pkg}/templating.py",
            content="\n".join(lines),
        )

    # ===================================================================
    # 6. Package markers
    # ===================================================================

    def generate_package_inits(self) -> List[GeneratedArtifact]:
        """Empty ``__init__.py`` files for the package and its sub-packages."""
        return [
            GeneratedArtifact(
                kind=ArtifactKind.SUPPORT,
                path=f"{path}/__init__.py",
                content="",
            )
            for path in (self._pkg, f"{self._pkg}/models", f"{self._pkg}/handlers")
        ]


__all__: List[str] = ["TemplateGenerator", "BASE_CLASS_NAME"]
