"""Canonical Pydantic models shared across all specgen modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Configuration models** -- merged once from user options and defaults, then
threaded read-only through every pipeline stage:
    :class:`GenConfig` and :class:`MockConfig`.

**Pipeline models** -- produced by one stage and consumed by the next:
    :class:`HTTPMethod`, :class:`ParsedPath`, :class:`CompiledFragment`,
    :class:`PipelineState`, and :class:`GenerationResult`.

Both configuration models are ``frozen``; a stage that needs different flags
derives a new value with ``model_copy(update=...)`` instead of mutating.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

INTERFACE_PATH = "interface/index.ts"
"""Location of the TypeScript interface file, relative to the output root."""

JSDOC_PATH = "interface/_typedef.js"
"""Location of the JSDoc typedef file, relative to the output root."""

INTERFACE_IMPORT = "./interface"
"""Module specifier used by generated ``.ts`` files to import interfaces."""

DEFAULT_CUSTOM_IMPORT_CODE = 'import axios from "axios";'


# --- Config ---


class GenConfig(BaseModel):
    """Effective configuration for one generation run.

    Built by :func:`~specgen.config.merge_default_params`, which layers user
    options over defaults and normalizes ``source``. Never mutated afterwards.

    Example::

        GenConfig(source=document, root="./src/api", lang="ts")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: dict[str, Any] = Field(description="Normalized Swagger document")
    source_url: Optional[str] = Field(
        default=None, description="URL the document was fetched from, if any"
    )
    root: str = Field(default="./src/api", description="Output directory")
    lang: Literal["ts", "js"] = "js"
    type_only: bool = Field(
        default=False, description="Only emit the interface/typedef file"
    )
    filename: Optional[Callable[[str], str]] = Field(
        default=None, description="Maps a tag name to an output file stem"
    )
    custom_import_code: str = DEFAULT_CUSTOM_IMPORT_CODE
    js_doc: bool = Field(default=True, description="Emit JSDoc blocks for js output")
    interface: bool = Field(
        default=False, description="Inline interfaces into each ts fragment"
    )
    typedef: bool = Field(
        default=False, description="Inline typedefs into each js fragment"
    )
    recursive: bool = Field(
        default=False,
        description="Follow definition references when inlining declarations",
    )
    timestamp: bool = Field(
        default=True, description="Stamp the generation time into file headers"
    )


class MockConfig(BaseModel):
    """Effective configuration for one mock generation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: dict[str, Any]
    source_url: Optional[str] = None
    mock_root: str = Field(default="./mock", description="Mock output directory")
    wrap: bool = Field(
        default=False,
        description="Nest responses as {code, msg, data} envelopes",
    )


# --- Pipeline models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by Swagger 2.0 path-item objects."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"


class ParsedPath(BaseModel):
    """A reference to one operation (URL template + HTTP method pair).

    Produced by :func:`~specgen.parser.grouper.group_by_tag`. The operation
    body itself stays in the document; the compiler looks it up again from
    ``url`` and ``method``.
    """

    url: str
    method: HTTPMethod
    tags: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = None
    deprecated: bool = False


GroupedOperations = dict[str, list[ParsedPath]]
"""Tag name to the ordered operations carrying that tag."""


class CompiledFragment(BaseModel):
    """Code compiled from a single operation.

    ``imports`` lists every definition name the typed code references, in
    first-appearance order without duplicates. ``js_doc_code`` is empty for
    typed output or when JSDoc is disabled.
    """

    name: str
    code: str
    js_doc_code: str = ""
    imports: list[str] = Field(default_factory=list)


class PipelineState(str, enum.Enum):
    """States of the generation state machine in :mod:`specgen.pipeline`."""

    IDLE = "idle"
    NORMALIZING = "normalizing"
    GROUPING = "grouping"
    SELECTING = "selecting"
    COMPILING = "compiling"
    ASSEMBLING = "assembling"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


class GenerationResult(BaseModel):
    """Outcome of a successful :class:`~specgen.pipeline.Pipeline` run."""

    source: dict[str, Any]
    files: list[Path] = Field(default_factory=list)
    state: PipelineState = PipelineState.DONE
