"""Shared test fixtures for specgen.

Provides reusable fixtures for loading the Swagger fixture document,
building merged generator configurations, isolating the working directory
and environment, and managing output state. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from specgen.config import merge_default_params
from specgen.models import GenConfig
from specgen.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PETSTORE_PATH = FIXTURES_DIR / "petstore_2.0.json"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Load a fresh copy of the raw petstore 2.0 document."""
    with open(PETSTORE_PATH) as f:
        return json.load(f)


@pytest.fixture
def petstore_path() -> Path:
    """Path of the petstore 2.0 fixture file."""
    return PETSTORE_PATH


@pytest.fixture
def minimal_raw() -> dict[str, Any]:
    """Two operations under one tag, both returning the same definition."""
    return {
        "swagger": "2.0",
        "info": {"title": "Minimal", "version": "1"},
        "paths": {
            "/pets": {
                "get": {
                    "tags": ["pet"],
                    "responses": {
                        "200": {
                            "description": "ok",
                            "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                        }
                    },
                }
            },
            "/pets/{id}": {
                "delete": {
                    "tags": ["pet"],
                    "parameters": [
                        {"name": "id", "in": "path", "required": True, "type": "string"}
                    ],
                    "responses": {
                        "200": {"description": "ok", "schema": {"$ref": "#/definitions/Pet"}}
                    },
                }
            }
        },
        "definitions": {
            "Pet": {"type": "object", "properties": {"name": {"type": "string"}}}
        },
    }


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


def _merged(source: dict[str, Any], lang: str, root: Path) -> GenConfig:
    return merge_default_params(
        {"source": copy.deepcopy(source), "lang": lang, "root": str(root), "timestamp": False}
    )


@pytest.fixture
def ts_config(petstore_raw: dict[str, Any], tmp_path: Path) -> GenConfig:
    """Merged ts configuration writing under ``tmp_path/api``."""
    return _merged(petstore_raw, "ts", tmp_path / "api")


@pytest.fixture
def js_config(petstore_raw: dict[str, Any], tmp_path: Path) -> GenConfig:
    """Merged js configuration writing under ``tmp_path/api``."""
    return _merged(petstore_raw, "js", tmp_path / "api")


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no ``SPECGEN_*`` variables.

    Keeps a developer's ``specgen.json`` or environment from leaking into
    option resolution.
    """
    for var in ("SPECGEN_SOURCE", "SPECGEN_ROOT", "SPECGEN_LANG", "SPECGEN_MOCK_ROOT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """A Typer CliRunner."""
    return CliRunner()
