# File: crudgen/generator.py
"""
crudgen - Scaffold Pipeline (Orchestrator)
===========================================

Connects every component for one module:

    ModuleSpec → Naming → Validation → Pre-flight → Menu bootstrap
               → Module schema → Model → Menu entry → Handler
               → Route declaration → Views → Layout

The ``ScaffoldGenerator`` class is the programmatic API and the backend of
the CLI.

Error handling strategy:
    - Validation errors are collected in the report; nothing is touched.
    - Pre-existing module artifacts raise ``ModuleExistsError`` unless the
      config asks to overwrite them.
    - Any collaborator failure (schema, database, file system) stops the run
      at that step; earlier artifacts stay where they are and the report
      names the failing step.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import yaml
from sqlalchemy.exc import SQLAlchemyError

from crudgen.exceptions import ModuleExistsError, ScaffoldError
from crudgen.exporters import ArtifactExporter, ExportManifest
from crudgen.models import (
    EntityDefinition,
    GeneratedArtifact,
    ModuleSpec,
    NamingVariants,
    SchemaDescriptor,
    ScaffoldConfig,
)
from crudgen.naming import derive_naming
from crudgen.persistence import PersistenceEngine
from crudgen.registrar import RouteMenuRegistrar
from crudgen.schema import SchemaSynthesizer
from crudgen.templates import TemplateGenerator
from crudgen.utils import Timer, read_file
from crudgen.validators import ValidationResult, validate_full
from crudgen.views import ViewRenderer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.generator")

CONFIG_FILENAMES: Sequence[str] = ("crudgen.yaml", "crudgen.yml", "crudgen.json")


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """Everything ``ScaffoldGenerator.generate()`` did for one module."""

    success: bool = False
    module: str = ""
    collection: str = ""
    app_root: str = ""
    dry_run: bool = False
    menu_entry_added: bool = False
    total_elapsed_seconds: float = 0.0

    step_metrics: List[GenerationStepMetric] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    generation_errors: List[str] = field(default_factory=list)

    manifest: Optional[ExportManifest] = None

    @property
    def failed_step(self) -> Optional[str]:
        for step in self.step_metrics:
            if not step.success:
                return step.step_name
        return None

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "✅ SUCCESS" if self.success else "❌ FAILED"
        files: int = self.manifest.total_files if self.manifest else 0
        total_lines: int = self.manifest.total_lines if self.manifest else 0
        lines.append(f"{'=' * 60}")
        lines.append("  crudgen - Scaffold Report")
        lines.append(f"{'=' * 60}")
        lines.append(f"  Status:           {status}{' (dry run)' if self.dry_run else ''}")
        lines.append(f"  Module:           {self.module}")
        lines.append(f"  Table:            {self.collection}")
        lines.append(f"  App root:         {self.app_root}")
        lines.append(f"  Files:            {files}")
        lines.append(f"  Total lines:      {total_lines:,}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")
        lines.append(f"{'─' * 60}")

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<24s} "
                    f"{step.elapsed_seconds:>7.3f}s  "
                    f"{step.detail}"
                )

        for title, items, icon in (
            ("Validation Errors", self.validation_errors, "✗"),
            ("Validation Warnings", self.validation_warnings, "⚠"),
            ("Generation Errors", self.generation_errors, "✗"),
        ):
            if items:
                lines.append(f"{'─' * 60}")
                lines.append(f"  {title} ({len(items)}):")
                for item in items:
                    lines.append(f"    {icon} {item}")

        lines.append(f"{'=' * 60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Configuration loading
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    try:
        data: Any = json.loads(read_file(path))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at top level, got {type(data).__name__}.")
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    try:
        data: Any = yaml.safe_load(read_file(path))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping at top level, got {type(data).__name__}.")
    return data


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON or YAML settings file, dispatching on the extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() == ".json":
        return _load_json_file(path)
    return _load_yaml_file(path)


def load_config(
    app_root: Path,
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> ScaffoldConfig:
    """
    Build a ``ScaffoldConfig`` from defaults, a settings file and overrides.

    Without *config_path* the first of ``crudgen.yaml``, ``crudgen.yml`` and
    ``crudgen.json`` found in *app_root* is used. ``None`` overrides are
    ignored.
    """
    data: Dict[str, Any] = {}
    if config_path is None:
        for name in CONFIG_FILENAMES:
            candidate: Path = app_root / name
            if candidate.is_file():
                config_path = candidate
                break
    if config_path is not None:
        data = load_config_file(config_path)
        logger.info("Loaded settings from %s (%d keys).", config_path, len(data))

    data.setdefault("app_root", str(app_root))
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ScaffoldConfig.model_validate(data)


# ---------------------------------------------------------------------------
# ScaffoldGenerator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """
    Runs the scaffold pipeline for one module at a time.

    Usage::

        generator = ScaffoldGenerator(config)
        report = generator.generate(
            ModuleSpec(name="Product", fields=[{"identifier": "title"}])
        )
        print(report.summary())

    A ``PersistenceEngine`` may be injected; otherwise one is created from
    ``config.database_url`` per run and disposed afterwards. Dry runs never
    touch the database.
    """

    def __init__(
        self, config: ScaffoldConfig, *, engine: Optional[PersistenceEngine] = None
    ) -> None:
        self._config: ScaffoldConfig = config
        self._engine: Optional[PersistenceEngine] = engine
        self._schema: SchemaSynthesizer = SchemaSynthesizer(config)
        self._templates: TemplateGenerator = TemplateGenerator(config)
        self._views: ViewRenderer = ViewRenderer(config)
        self._registrar: RouteMenuRegistrar = RouteMenuRegistrar(config)

    @property
    def config(self) -> ScaffoldConfig:
        return self._config

    # -----------------------------------------------------------------
    # Public
    # -----------------------------------------------------------------

    def generate(self, spec: ModuleSpec) -> GenerationReport:
        """
        Generate every artifact for *spec*.

        Raises:
            ModuleExistsError: artifacts of this module already exist and
                ``overwrite_existing`` is off.
        """
        cfg: ScaffoldConfig = self._config
        report: GenerationReport = GenerationReport(
            module=spec.name, app_root=str(cfg.app_path), dry_run=cfg.dry_run
        )
        start: float = time.perf_counter()

        owns_engine: bool = False
        engine: Optional[PersistenceEngine] = self._engine
        if engine is None and not cfg.dry_run:
            engine = PersistenceEngine.from_config(cfg)
            owns_engine = True

        try:
            self._run_pipeline(spec, engine, report)
        finally:
            if owns_engine and engine is not None:
                engine.dispose()
            report.total_elapsed_seconds = time.perf_counter() - start
            report.success = not (report.validation_errors or report.generation_errors)

        return report

    # -----------------------------------------------------------------
    # Internal: master pipeline
    # -----------------------------------------------------------------

    def _run_pipeline(
        self,
        spec: ModuleSpec,
        engine: Optional[PersistenceEngine],
        report: GenerationReport,
    ) -> None:
        cfg: ScaffoldConfig = self._config

        # --- Naming ---
        try:
            naming: NamingVariants = derive_naming(spec.name, cfg.admin_segment)
        except ValueError as exc:
            report.validation_errors.append(str(exc))
            return
        report.collection = naming.collection_name
        report.step_metrics.append(GenerationStepMetric(
            step_name="Derive Naming",
            detail=f"{naming.type_name} → {naming.collection_name}",
        ))

        # --- Validation ---
        if not self._step_validate(spec, naming, report):
            return

        exporter: ArtifactExporter = ArtifactExporter(
            cfg.app_path, module=naming.type_name, dry_run=cfg.dry_run
        )
        report.manifest = exporter.manifest

        # --- Pre-flight ---
        existing: List[str] = []
        table_exists: bool = False
        ok: bool = self._step(report, "Detect Existing", lambda: self._detect(
            naming, engine, exporter, existing
        ))
        if not ok:
            return
        table_exists = f"table {naming.collection_name}" in existing
        if existing and not cfg.overwrite_existing:
            raise ModuleExistsError(naming.type_name, existing)

        descriptor: SchemaDescriptor = self._schema.module_descriptor(spec, naming)
        entity: EntityDefinition = self._schema.module_entity(spec, naming)

        steps: List[tuple] = [
            ("Bootstrap Menu Schema", lambda: self._bootstrap_menu(engine, exporter)),
            ("Apply Module Schema", lambda: self._apply_module(
                descriptor, table_exists, engine, exporter
            )),
            ("Emit Model", lambda: self._write(
                exporter, self._templates.generate_model(entity, descriptor)
            )),
            ("Register Menu", lambda: self._register_menu(engine, naming, report)),
            ("Emit Handler", lambda: self._write(
                exporter, self._templates.generate_handler(spec, naming)
            )),
            ("Register Routes", lambda: self._register_routes(naming, exporter)),
            ("Render Views", lambda: self._write_all(
                exporter, self._views.render_views(spec, naming)
            )),
            ("Bootstrap Layout", lambda: self._bootstrap_layout(exporter)),
        ]
        for name, action in steps:
            if not self._step(report, name, action):
                return

        logger.info(
            "Module '%s' generated: %d files in %s.",
            naming.type_name,
            exporter.manifest.total_files,
            cfg.app_path,
        )

    def _step(
        self, report: GenerationReport, name: str, action: Callable[[], str]
    ) -> bool:
        """Run one pipeline step, recording its metric. False stops the run."""
        with Timer(name) as t:
            try:
                detail: str = action()
                success: bool = True
            except (ScaffoldError, SQLAlchemyError, OSError) as exc:
                detail = f"{type(exc).__name__}: {exc}"
                success = False
        report.step_metrics.append(GenerationStepMetric(
            step_name=name, success=success, elapsed_seconds=t.elapsed, detail=detail
        ))
        if not success:
            report.generation_errors.append(f"{name}: {detail}")
            logger.error("Step '%s' failed: %s", name, detail)
        return success

    # -----------------------------------------------------------------
    # Pipeline steps
    # -----------------------------------------------------------------

    def _step_validate(
        self, spec: ModuleSpec, naming: NamingVariants, report: GenerationReport
    ) -> bool:
        with Timer("validation") as t:
            result: ValidationResult = validate_full(spec, naming, self._config)

        report.validation_errors.extend(str(e.message) for e in result.errors)
        report.validation_warnings.extend(str(w.message) for w in result.warnings)
        for warn in result.warnings:
            logger.warning("  ⚠ %s", warn.message)

        if result.errors:
            detail: str = f"{len(result.errors)} error(s)"
        elif result.warnings:
            detail = f"{len(result.warnings)} warning(s)"
        else:
            detail = "all checks passed"
        report.step_metrics.append(GenerationStepMetric(
            step_name="Validate Module",
            success=result.is_valid,
            elapsed_seconds=t.elapsed,
            detail=detail,
        ))
        if not result.is_valid:
            for err in result.errors:
                logger.error("  ✗ %s", err.message)
        return result.is_valid

    def _detect(
        self,
        naming: NamingVariants,
        engine: Optional[PersistenceEngine],
        exporter: ArtifactExporter,
        existing: List[str],
    ) -> str:
        if engine is not None and engine.has_table(naming.collection_name):
            existing.append(f"table {naming.collection_name}")
        for rel in (
            self._templates.model_path(naming.module_name),
            self._templates.handler_path(naming.module_name),
            self._views.view_dir(naming),
        ):
            if exporter.exists(rel):
                existing.append(rel)
        routes: Path = exporter.resolve(self._registrar.routes_path())
        if routes.is_file() and self._registrar.is_registered(naming, read_file(routes)):
            existing.append(f"route {self._registrar.route_prefix(naming)}")
        return ", ".join(existing) if existing else "none"

    def _bootstrap_menu(
        self, engine: Optional[PersistenceEngine], exporter: ArtifactExporter
    ) -> str:
        created: Optional[SchemaDescriptor] = None
        if engine is not None:
            created = self._schema.bootstrap_menu(engine)

        written: int = 0
        support: List[GeneratedArtifact] = [
            *self._templates.generate_package_inits(),
            self._templates.generate_database_module(),
            self._templates.generate_base_model(),
            self._schema.render_schema_module(self._schema.menu_descriptor()),
            self._templates.generate_model(
                self._schema.menu_entity(), self._schema.menu_descriptor()
            ),
        ]
        for artifact in support:
            written += exporter.write_once(artifact)
        table_note: str = "table created" if created is not None else "table present"
        if engine is None:
            table_note = "database skipped"
        return f"{table_note}, {written} support file(s)"

    def _apply_module(
        self,
        descriptor: SchemaDescriptor,
        table_exists: bool,
        engine: Optional[PersistenceEngine],
        exporter: ArtifactExporter,
    ) -> str:
        if engine is not None and table_exists:
            engine.check_columns(descriptor)
        exporter.write(self._schema.render_schema_module(descriptor))
        if engine is None:
            return "database skipped"
        if table_exists:
            logger.warning("Table '%s' exists with matching columns; kept.", descriptor.table_name)
            return f"table {descriptor.table_name} kept"
        engine.apply(descriptor)
        return f"table {descriptor.table_name} ({len(descriptor.columns)} columns)"

    def _register_menu(
        self,
        engine: Optional[PersistenceEngine],
        naming: NamingVariants,
        report: GenerationReport,
    ) -> str:
        if engine is None:
            return "database skipped"
        report.menu_entry_added = self._registrar.register_menu(engine, naming)
        return "entry added" if report.menu_entry_added else "entry present"

    def _register_routes(self, naming: NamingVariants, exporter: ArtifactExporter) -> str:
        artifact: Optional[GeneratedArtifact] = self._registrar.route_artifact(
            naming, exporter.app_root
        )
        if artifact is None:
            return "already registered"
        exporter.write(artifact)
        return f"{'appended to' if artifact.append else 'created'} {artifact.path}"

    def _bootstrap_layout(self, exporter: ArtifactExporter) -> str:
        written: int = exporter.write_once(self._views.render_layout())
        written += exporter.write_once(
            self._templates.generate_templating_module(self._schema.menu_entity())
        )
        return f"{written} file(s) created" if written else "already present"

    @staticmethod
    def _write(exporter: ArtifactExporter, artifact: GeneratedArtifact) -> str:
        exporter.write(artifact)
        return artifact.path

    @staticmethod
    def _write_all(exporter: ArtifactExporter, artifacts: List[GeneratedArtifact]) -> str:
        for artifact in artifacts:
            exporter.write(artifact)
        return f"{len(artifacts)} templates"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ScaffoldGenerator",
    "GenerationReport",
    "GenerationStepMetric",
    "load_config",
    "load_config_file",
    "CONFIG_FILENAMES",
]
