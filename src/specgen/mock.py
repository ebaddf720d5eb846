"""Mock response generation -- the engine behind ``specgen mock``.

For every operation of the document (tagged or not) one JSON file is written
to the mock root, named after the generated request function::

    mock/getPets.json
    {
      "url": "/pets",
      "method": "GET",
      "response": [{"id": 0, "name": "doggie"}]
    }

Example values come from the success response schema: ``example`` first,
then the first ``enum`` value, then ``default``, then a placeholder for the
schema type. Definitions are followed through ``$ref`` with a guard so that
self-referencing models terminate.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from specgen.config import merge_default_mock_config
from specgen.generator.naming import build_function_name
from specgen.models import MockConfig
from specgen.output import debug, success, warning
from specgen.parser.normalizer import iter_operations, normalize_definition_name
from specgen.parser.resolver import deref, definition_ref_name
from specgen.writer import ensure_dir, write_file

_SUCCESS_STATUSES = ("200", "201", "default")

_PLACEHOLDERS: dict[str, Any] = {
    "string": "string",
    "integer": 0,
    "number": 0,
    "boolean": True,
    "file": "",
}

_FORMAT_PLACEHOLDERS: dict[str, str] = {
    "date": "2024-01-01",
    "date-time": "2024-01-01T00:00:00Z",
    "uuid": "00000000-0000-0000-0000-000000000000",
    "email": "user@example.com",
}


def example_value(
    schema: Any,
    source: dict[str, Any],
    seen: Optional[frozenset[str]] = None,
) -> Any:
    """Build an example value for *schema*.

    Args:
        schema: A Swagger schema object.
        source: The normalized document, for ``$ref`` lookups.
        seen: Definition names already being expanded on this branch.

    Returns:
        A JSON-serializable example. ``None`` for a definition that refers
        back to itself, or for an empty schema.
    """
    if seen is None:
        seen = frozenset()
    if not isinstance(schema, dict) or not schema:
        return None

    if "$ref" in schema:
        raw_name = definition_ref_name(schema["$ref"])
        if raw_name is None:
            return example_value(deref(schema, source), source, seen)
        name = normalize_definition_name(raw_name)
        if name in seen:
            return None
        target = (source.get("definitions") or {}).get(name)
        return example_value(target, source, seen | {name})

    if "example" in schema:
        return schema["example"]
    if schema.get("enum"):
        return schema["enum"][0]
    if "default" in schema:
        return schema["default"]

    if "allOf" in schema:
        merged: dict[str, Any] = {}
        for sub in schema["allOf"]:
            value = example_value(sub, source, seen)
            if isinstance(value, dict):
                merged.update(value)
        return merged

    schema_type = schema.get("type")
    if schema_type == "array":
        item = example_value(schema.get("items"), source, seen)
        return [] if item is None else [item]

    if schema_type == "object" or "properties" in schema:
        return {
            name: example_value(prop, source, seen)
            for name, prop in (schema.get("properties") or {}).items()
        }

    if schema_type == "string" and schema.get("format") in _FORMAT_PLACEHOLDERS:
        return _FORMAT_PLACEHOLDERS[schema["format"]]
    return _PLACEHOLDERS.get(schema_type)


def _success_schema(operation: dict[str, Any], source: dict[str, Any]) -> Any:
    responses = operation.get("responses") or {}
    for status_code in _SUCCESS_STATUSES:
        if status_code in responses:
            response = deref(responses[status_code], source)
            if isinstance(response, dict) and "schema" in response:
                return response["schema"]
    return None


def mock_operation(url: str, method: str, operation: dict[str, Any], config: MockConfig) -> dict[str, Any]:
    """Build the mock document for one operation."""
    response = example_value(_success_schema(operation, config.source), config.source)
    if config.wrap:
        response = {"code": 200, "msg": "success", "data": response}
    return {"url": url, "method": method.upper(), "response": response}


def mock(config: Union[MockConfig, dict[str, Any], str]) -> list[Path]:
    """Write one mock file per operation under ``config.mock_root``.

    Args:
        config: Options to merge, or an already merged :class:`MockConfig`.

    Returns:
        The written paths, in document order. Operations that map to the
        same function name share one file; the later one wins and a warning
        is printed.

    Raises:
        SpecgenError: If the document cannot be loaded or a file cannot
            be written.
    """
    merged = merge_default_mock_config(config)
    root = ensure_dir(Path(merged.mock_root))

    written: dict[Path, str] = {}
    for url, method, operation in iter_operations(merged.source.get("paths") or {}):
        name = build_function_name(method, url)
        label = f"{method.upper()} {url}"
        path = root / f"{name}.json"
        if path in written:
            warning(f"{path.name}: {label} overwrites {written[path]}")
        content = json.dumps(
            mock_operation(url, method, operation, merged),
            indent=2,
            ensure_ascii=False,
        )
        write_file(path, content + "\n")
        written[path] = label
        debug(f"Mocked {label}")

    files = list(written)
    success(f"Generated {len(files)} mock file(s) under {root.resolve()}")
    return files
