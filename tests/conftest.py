"""
tests/conftest.py
Shared fixtures for the crudgen test suite.

No external mocking libraries are used; real file I/O and real SQLite
databases are created inside temporary directories managed by pytest's
tmp_path fixture.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Callable, Iterator, List

import pytest

from crudgen.models import ModuleSpec, NamingVariants, ScaffoldConfig
from crudgen.naming import derive_naming
from crudgen.persistence import PersistenceEngine


# ---------------------------------------------------------------------------
# Logging isolation (the CLI reconfigures the "crudgen" logger)
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_crudgen_logger() -> Iterator[None]:
    yield
    logging.disable(logging.NOTSET)
    crudgen_logger = logging.getLogger("crudgen")
    crudgen_logger.handlers.clear()
    crudgen_logger.setLevel(logging.NOTSET)
    crudgen_logger.propagate = True


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------


@pytest.fixture()
def app_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """Empty application root inside tmp_path."""
    root = tmp_path / "shop_app"
    root.mkdir()
    return root


@pytest.fixture()
def database_url(tmp_path: pathlib.Path) -> str:
    return f"sqlite:///{tmp_path / 'shop.db'}"


@pytest.fixture()
def config(app_root: pathlib.Path, database_url: str) -> ScaffoldConfig:
    return ScaffoldConfig(app_root=str(app_root), database_url=database_url)


@pytest.fixture()
def engine(config: ScaffoldConfig) -> Iterator[PersistenceEngine]:
    """Persistence engine on a fresh SQLite file, disposed after the test."""
    eng = PersistenceEngine.from_config(config)
    yield eng
    eng.dispose()


# ---------------------------------------------------------------------------
# Module specs
# ---------------------------------------------------------------------------


@pytest.fixture()
def product_spec() -> ModuleSpec:
    """Product{title:text, price:integer}."""
    return ModuleSpec(
        name="Product",
        fields=[
            {"identifier": "title", "type": "text"},
            {"identifier": "price", "type": "integer"},
        ],
    )


@pytest.fixture()
def product_naming() -> NamingVariants:
    return derive_naming("Product")


@pytest.fixture()
def gadget_spec() -> ModuleSpec:
    """One field of every supported type, in declaration order."""
    return ModuleSpec(
        name="Gadget",
        fields=[
            {"identifier": "title", "type": "text"},
            {"identifier": "body", "type": "longText"},
            {"identifier": "qty", "type": "integer"},
            {"identifier": "active", "type": "boolean"},
            {"identifier": "released", "type": "date"},
            {"identifier": "starts_at", "type": "datetime"},
        ],
    )


@pytest.fixture()
def gadget_naming() -> NamingVariants:
    return derive_naming("Gadget")


# ---------------------------------------------------------------------------
# Prompt answers
# ---------------------------------------------------------------------------


def scripted_input(*answers: str) -> Callable[[str], str]:
    """Input function returning *answers* in order, then raising EOFError."""
    pending: List[str] = list(answers)

    def _ask(prompt: str) -> str:
        if not pending:
            raise EOFError(prompt)
        return pending.pop(0)

    return _ask


@pytest.fixture()
def answers() -> Callable[..., Callable[[str], str]]:
    return scripted_input
