"""Repair and canonicalize a raw Swagger document before generation.

Some Swagger producers omit the top-level ``tags`` array or name models with
dotted package paths (``com.example.Pet``) or generic markers
(``Result«Pet»``). Every later stage assumes tags are declared and
definition names are usable identifiers, so :func:`normalize_source` fixes
both up front.

Two distinct source names can collapse to the same canonical name
(``a.b`` and ``aB`` both become ``AB``). The later definition wins; this is
accepted behavior and not reported.
"""

from __future__ import annotations

import re
from typing import Any, Iterator

from specgen.models import HTTPMethod
from specgen.parser.loader import validate_swagger_version

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

# Anything that cannot appear in a JavaScript identifier splits words.
_NAME_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9_$]+")


def normalize_definition_name(name: str) -> str:
    """Canonicalize a definition name to a PascalCase identifier.

    Dots, generic brackets and other characters not allowed in an
    identifier are dropped, and the word after each of them is upper-cased
    at its first character. A leading digit gets a ``_`` prefix.

    Example::

        >>> normalize_definition_name("abc.def.ghi")
        'AbcDefGhi'
        >>> normalize_definition_name("Result«List«Pet»»")
        'ResultListPet'
        >>> normalize_definition_name("AbcDefGhi")
        'AbcDefGhi'
    """
    words = [word for word in _NAME_SEPARATOR_RE.split(name) if word]
    joined = "".join(word[:1].upper() + word[1:] for word in words)
    if joined[:1].isdigit():
        joined = "_" + joined
    return joined


def normalize_definitions(definitions: dict[str, Any] | None) -> dict[str, Any]:
    """Return a new definitions map keyed by canonical names."""
    if not definitions:
        return {}
    return {
        normalize_definition_name(key): value for key, value in definitions.items()
    }


def iter_operations(paths: dict[str, Any]) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """Yield ``(url, method, operation)`` for every operation in *paths*.

    Paths and methods are visited in document order. Non-method keys of a
    path item (``parameters``, ``$ref``, vendor extensions) are skipped.
    """
    for url, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method not in _HTTP_METHODS or not isinstance(operation, dict):
                continue
            yield url, method, operation


def operation_tags(operation: dict[str, Any]) -> list[str]:
    """Return the tag names of *operation* as strings, empty names dropped.

    YAML reads ``tags: [2024]`` as an integer, so names are coerced.
    """
    return [str(tag) for tag in operation.get("tags") or [] if tag is not None and tag != ""]


def create_tags_by_paths(paths: dict[str, Any]) -> list[dict[str, Any]]:
    """Synthesize tag objects from the tag names used by operations.

    Returns:
        One ``{"name": ...}`` per distinct tag name, sorted by name.
    """
    names: set[str] = set()
    for _, _, operation in iter_operations(paths):
        names.update(operation_tags(operation))
    return [{"name": name} for name in sorted(names)]


def normalize_source(source: dict[str, Any]) -> dict[str, Any]:
    """Validate and normalize a raw Swagger document.

    The version check runs first, so nothing is normalized for an
    unsupported document. The input is left untouched; a new top-level dict
    is returned with ``tags`` and ``definitions`` replaced.

    Raises:
        ValidationError: If the document is not Swagger 2.x.
    """
    validate_swagger_version(source)
    paths = source.get("paths") or {}
    tags = source.get("tags")
    return {
        **source,
        "paths": paths,
        "tags": tags if tags is not None else create_tags_by_paths(paths),
        "definitions": normalize_definitions(source.get("definitions")),
    }
