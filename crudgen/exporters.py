# File: crudgen/exporters.py
"""
crudgen - Artifact Exporter (File-System Manager)
==================================================

Responsible for:
    1. Writing generated artifacts under the application root atomically
       (write-to-temp then rename).
    2. Appending to append-only registration files.
    3. Answering "does this artifact already exist?" for the pre-flight check.
    4. Producing a manifest with checksums of everything written.

A failed write raises ``ArtifactWriteError``; files written before the
failure stay in place.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from crudgen.exceptions import ArtifactWriteError
from crudgen.models import GeneratedArtifact
from crudgen.utils import append_file, count_lines, sha256_hex, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.exporters")

_PAST_TENSE: Dict[str, str] = {"write": "Wrote", "append": "Appended"}


# ---------------------------------------------------------------------------
# Data classes for export results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Immutable record of a single exported artifact."""

    relative_path: str
    kind: str
    mode: str
    size_bytes: int
    line_count: int
    sha256: str
    written: bool


@dataclass(frozen=False, slots=True)
class ExportManifest:
    """Every artifact handled during one run, serialisable to JSON."""

    module: str = ""
    app_root: str = ""
    export_timestamp: str = ""
    dry_run: bool = False
    files: List[FileRecord] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_bytes(self) -> int:
        return sum(f.size_bytes for f in self.files)

    @property
    def total_lines(self) -> int:
        return sum(f.line_count for f in self.files)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.module,
            "app_root": self.app_root,
            "export_timestamp": self.export_timestamp,
            "dry_run": self.dry_run,
            "total_files": self.total_files,
            "total_bytes": self.total_bytes,
            "total_lines": self.total_lines,
            "files": [
                {
                    "relative_path": f.relative_path,
                    "kind": f.kind,
                    "mode": f.mode,
                    "size_bytes": f.size_bytes,
                    "line_count": f.line_count,
                    "sha256": f.sha256,
                    "written": f.written,
                }
                for f in self.files
            ],
        }

    def to_json(self, indent_size: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent_size, ensure_ascii=False)


# ---------------------------------------------------------------------------
# ArtifactExporter
# ---------------------------------------------------------------------------


class ArtifactExporter:
    """
    Writes ``GeneratedArtifact`` objects relative to an application root.

    Usage::

        exporter = ArtifactExporter(Path("./myapp"), module="Product")
        exporter.write(artifact)
        print(exporter.manifest.to_json())

    With ``dry_run=True`` nothing touches the disk; the manifest still lists
    what would have been written.
    """

    def __init__(self, app_root: Path, *, module: str = "", dry_run: bool = False) -> None:
        self._app_root: Path = app_root.resolve()
        self._dry_run: bool = dry_run
        self._manifest: ExportManifest = ExportManifest(
            module=module,
            app_root=str(self._app_root),
            export_timestamp=datetime.now(timezone.utc).isoformat(),
            dry_run=dry_run,
        )
        logger.debug(
            "ArtifactExporter initialised: app_root=%s, dry_run=%s.",
            self._app_root,
            dry_run,
        )

    @property
    def app_root(self) -> Path:
        return self._app_root

    @property
    def manifest(self) -> ExportManifest:
        return self._manifest

    def resolve(self, relative_path: str) -> Path:
        return self._app_root / relative_path

    def exists(self, relative_path: str) -> bool:
        return self.resolve(relative_path).exists()

    # -----------------------------------------------------------------
    # Writing
    # -----------------------------------------------------------------

    def write(self, artifact: GeneratedArtifact) -> FileRecord:
        """
        Write (or append) *artifact*.

        Raises:
            ArtifactWriteError: the underlying file operation failed.
        """
        target: Path = self.resolve(artifact.path)
        mode: str = "append" if artifact.append else "write"

        if not self._dry_run:
            try:
                if artifact.append:
                    append_file(target, artifact.content)
                else:
                    write_file(target, artifact.content)
            except OSError as exc:
                logger.error("Failed to %s %s: %s", mode, artifact.path, exc)
                raise ArtifactWriteError(artifact.path, str(exc)) from exc

        record: FileRecord = FileRecord(
            relative_path=artifact.path,
            kind=artifact.kind.value,
            mode=mode,
            size_bytes=len(artifact.content.encode("utf-8")),
            line_count=count_lines(artifact.content),
            sha256=sha256_hex(artifact.content),
            written=not self._dry_run,
        )
        self._manifest.files.append(record)
        logger.debug(
            "%s %s (%d bytes, %d lines).",
            "Would " + mode if self._dry_run else _PAST_TENSE[mode],
            artifact.path,
            record.size_bytes,
            record.line_count,
        )
        return record

    def write_once(self, artifact: GeneratedArtifact) -> bool:
        """Write *artifact* only if its target is absent. Returns True if written."""
        if self.exists(artifact.path):
            logger.debug("Keeping existing %s.", artifact.path)
            return False
        self.write(artifact)
        return True


__all__: List[str] = ["ArtifactExporter", "ExportManifest", "FileRecord"]
