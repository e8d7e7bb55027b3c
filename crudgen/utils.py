# File: crudgen/utils.py
"""
crudgen - Utility Functions & Helpers
======================================
String transformation, file I/O, and small formatting helpers used by every
emitter in the scaffold pipeline.

- Casing / pluralisation helpers are wrapped in ``functools.lru_cache`` so a
  module name is only ever converted once per process.
- ``write_file`` uses write-to-temp then rename so an interrupted run never
  leaves a half-written artifact behind.
"""

from __future__ import annotations

import functools
import hashlib
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_CAMEL_TO_SNAKE_RE1: re.Pattern[str] = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_TO_SNAKE_RE2: re.Pattern[str] = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
_MULTI_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"_{2,}")
_LEADING_TRAILING_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"^_+|_+$")
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+|[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]|\d+"
)

_IRREGULAR_PLURALS: Dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
    "datum": "data",
    "index": "indices",
    "matrix": "matrices",
    "axis": "axes",
    "crisis": "crises",
    "analysis": "analyses",
    "status": "statuses",
    "address": "addresses",
}

# Singular nouns ending in a single "s"; other words ending in "s" are taken
# to be plural already
_S_ES_PLURALS: FrozenSet[str] = frozenset({
    "gas", "alias", "atlas", "bias", "canvas", "lens",
})

_O_ES_PLURALS: FrozenSet[str] = frozenset({
    "hero", "potato", "tomato", "echo", "veto", "torpedo",
})

# Words whose plural is the word itself
_UNCOUNTABLE: FrozenSet[str] = frozenset({
    "equipment", "information", "rice", "money", "species", "series",
    "fish", "sheep", "news", "feedback", "metadata", "inventory",
})


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def to_snake_case(name: str) -> str:
    """
    Convert any string to snake_case.

    Examples:
        >>> to_snake_case("OrderItem")
        'order_item'
        >>> to_snake_case("HTTPRequestLog")
        'http_request_log'
    """
    if not name:
        return ""
    s: str = _CAMEL_TO_SNAKE_RE1.sub(r"\1_\2", name)
    s = _CAMEL_TO_SNAKE_RE2.sub(r"\1_\2", s)
    s = _NON_ALPHANUM_RE.sub("_", s)
    s = _MULTI_UNDERSCORE_RE.sub("_", s)
    s = _LEADING_TRAILING_UNDERSCORE_RE.sub("", s)
    return s.lower()


@functools.lru_cache(maxsize=None)
def _extract_words(name: str) -> Tuple[str, ...]:
    """Split any casing style into a tuple of lowercase words."""
    cleaned: str = _NON_ALPHANUM_RE.sub(" ", name)
    words: List[str] = _SPLIT_WORDS_RE.findall(cleaned)
    return tuple(w.lower() for w in words if w)


@functools.lru_cache(maxsize=None)
def to_camel_case(name: str) -> str:
    """
    Convert any string to camelCase.

    Examples:
        >>> to_camel_case("OrderItem")
        'orderItem'
        >>> to_camel_case("product")
        'product'
    """
    words: Tuple[str, ...] = _extract_words(name)
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


@functools.lru_cache(maxsize=None)
def capitalize_first(name: str) -> str:
    """Upper-case the first character only; the rest is left untouched."""
    if not name:
        return ""
    return name[0].upper() + name[1:]


@functools.lru_cache(maxsize=None)
def to_title_label(identifier: str) -> str:
    """
    Human-readable label for a field identifier.

    Underscores become spaces, then every word is title-cased.

        >>> to_title_label("unit_price")
        'Unit Price'
    """
    return " ".join(w.capitalize() for w in identifier.replace("_", " ").split())


@functools.lru_cache(maxsize=None)
def _pluralize_word(word: str) -> str:
    lower: str = word.lower()

    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[lower]
    if lower[-2:] in ("az", "ez", "iz", "oz", "uz"):
        return word + "zes"
    if lower.endswith(("sh", "ch", "x", "z", "ss", "us")) or lower in _S_ES_PLURALS:
        return word + "es"
    if lower.endswith("is") and len(word) > 3:
        return word[:-2] + "es"
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith("fe"):
        return word[:-2] + "ves"
    if lower.endswith(("lf", "af", "arf")):
        return word[:-1] + "ves"
    if lower in _O_ES_PLURALS:
        return word + "es"
    if lower.endswith("s"):
        return word
    return word + "s"


@functools.lru_cache(maxsize=None)
def to_plural(name: str) -> str:
    """
    Naive English pluralisation of a snake_case name.

    Only the last segment is inflected, so ``order_item`` becomes
    ``order_items`` and ``sales_person`` becomes ``sales_people``.
    """
    if not name:
        return ""
    head, sep, last = name.rpartition("_")
    return f"{head}{sep}{_pluralize_word(last)}"


# ---------------------------------------------------------------------------
# Code formatting helpers
# ---------------------------------------------------------------------------


def format_tuple_literal(items: Sequence[str]) -> str:
    """Render a Python tuple literal of quoted strings (``("a", "b")``)."""
    if len(items) == 1:
        return f'("{items[0]}",)'
    return "(" + ", ".join(f'"{item}"' for item in items) + ")"


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*, creating parent directories.

    When *atomic* is True the content goes to a temporary sibling first and
    is moved into place with ``os.replace``.

    Returns the number of bytes written.
    """
    ensure_directory(path.parent)
    encoded: bytes = content.encode("utf-8")

    if atomic:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


def append_file(path: Path, content: str) -> int:
    """Append *content* to *path* (created if missing). Returns bytes appended."""
    ensure_directory(path.parent)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(content)
    logger.debug("Appended %d chars to %s", len(content), path)
    return len(content.encode("utf-8"))


def read_file(path: Path) -> str:
    """Read a UTF-8 text file."""
    return path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Checksum & metrics
# ---------------------------------------------------------------------------


def sha256_hex(content: str) -> str:
    """Return SHA-256 hex digest of a string."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for pipeline steps.

    Usage:
        with Timer("apply schema") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


__all__: List[str] = [
    "to_snake_case",
    "to_camel_case",
    "capitalize_first",
    "to_title_label",
    "to_plural",
    "format_tuple_literal",
    "ensure_directory",
    "write_file",
    "append_file",
    "read_file",
    "sha256_hex",
    "count_lines",
    "Timer",
]
