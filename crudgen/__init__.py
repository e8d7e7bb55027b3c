# File: crudgen/__init__.py
"""
crudgen - Admin CRUD Scaffold Generator
========================================

Generates a complete admin CRUD module for a FastAPI + SQLAlchemy 2.0 +
Jinja2 application from a module name and an ordered list of typed fields:
the table, the entity class, the request handler, the list / create / edit
views, the route registration and a sidebar menu entry.

Architecture overview::

    ┌──────────────┐     ┌──────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ ScaffoldGenerator │────▶│ TemplateGenerator│
    │   (cli.py)   │     │  (generator.py)   │     │ ViewRenderer     │
    └──────────────┘     └────────┬─────────┘     └──────────────────┘
                                  │
           ┌──────────────┬───────┼────────┬──────────────┐
           ▼              ▼       ▼        ▼              ▼
      ┌──────────┐ ┌──────────┐ ┌──────┐ ┌───────────┐ ┌───────────┐
      │  naming  │ │validators│ │schema│ │persistence│ │ exporters │
      └──────────┘ └──────────┘ └──────┘ └───────────┘ └───────────┘

Usage::

    # As a library
    from crudgen import ModuleSpec, ScaffoldConfig, ScaffoldGenerator
    spec = ModuleSpec(name="Product", fields=[{"identifier": "title"}])
    report = ScaffoldGenerator(ScaffoldConfig(app_root="./shop")).generate(spec)

    # From the command line
    python -m crudgen make Product --field title:text --field price:integer
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from crudgen.exceptions import (
    ArtifactWriteError,
    ModuleExistsError,
    SchemaApplyError,
    ScaffoldError,
)
from crudgen.models import (
    FieldSpec,
    FieldType,
    GeneratedArtifact,
    MenuEntry,
    ModuleSpec,
    NamingVariants,
    ScaffoldConfig,
    SchemaDescriptor,
)
from crudgen.naming import derive_naming
from crudgen.persistence import PersistenceEngine
from crudgen.validators import ValidationResult, validate_full
from crudgen.generator import GenerationReport, ScaffoldGenerator, load_config

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    "__version__",
    "__license__",
    # Orchestrator
    "ScaffoldGenerator",
    "GenerationReport",
    "load_config",
    # Models
    "FieldSpec",
    "FieldType",
    "GeneratedArtifact",
    "MenuEntry",
    "ModuleSpec",
    "NamingVariants",
    "ScaffoldConfig",
    "SchemaDescriptor",
    # Components
    "derive_naming",
    "PersistenceEngine",
    "validate_full",
    "ValidationResult",
    # Errors
    "ScaffoldError",
    "ModuleExistsError",
    "SchemaApplyError",
    "ArtifactWriteError",
]
