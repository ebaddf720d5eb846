"""Read a Swagger document from a URL, a local file, or stdin.

:func:`load_spec` returns the raw document as a dict; nothing is validated
beyond "it parses to a mapping". :func:`validate_swagger_version` is the
gate that rejects anything other than Swagger 2.x, and
:func:`~specgen.parser.normalizer.normalize_source` calls it first.

JSON and YAML are both accepted. A ``.json``/``.yaml``/``.yml`` suffix or a
JSON/YAML ``Content-Type`` picks the parser; otherwise JSON is tried first
and YAML second.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from specgen.exceptions import SpecParseError, ValidationError

_FETCH_TIMEOUT = 30.0

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load the document named by *source*.

    Args:
        source: ``http(s)://`` URL, file path, or ``-`` for stdin.

    Raises:
        SpecParseError: If the document cannot be read or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if is_url(source):
        return _load_from_url(source)
    return _load_from_file(source)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc

    return _parse_content(response.text, hint=_hint_from_content_type(response))


def _hint_from_content_type(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return "json"
    if "yaml" in content_type or "yml" in content_type:
        return "yaml"
    return ""


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read document {path}: {exc}") from exc
    if not content.strip():
        raise SpecParseError(f"Document is empty: {path}")
    return _parse_content(content, hint=_SUFFIX_HINTS.get(file_path.suffix.lower(), ""))


def _as_document(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        kind = "empty document" if value is None else type(value).__name__
        raise SpecParseError(f"Document must be a JSON/YAML object (got {kind})")
    return value


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    Args:
        content: Raw document text.
        hint: ``"json"`` or ``"yaml"`` to commit to one parser; empty to try
            JSON and then YAML.

    Raises:
        SpecParseError: If no parser accepts the text, or it is not a mapping.
    """
    json_error: Optional[Exception] = None
    if hint != "yaml":
        try:
            return _as_document(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        return _as_document(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        message = "Failed to parse document as JSON or YAML"
        if json_error is not None:
            message += f"\n  JSON error: {json_error}"
        message += f"\n  YAML error: {exc}"
        raise SpecParseError(message) from exc


def validate_swagger_version(spec: dict[str, Any]) -> str:
    """Return the document's ``swagger`` version if it is 2.x.

    Raises:
        ValidationError: For OpenAPI 3 documents, documents without a
            ``swagger`` field, and any other Swagger version.
    """
    if "openapi" in spec and "swagger" not in spec:
        raise ValidationError(
            f"OpenAPI {spec['openapi']} is not supported. "
            "Only Swagger 2.0 documents are supported."
        )
    if spec.get("swagger") is None:
        raise ValidationError("Missing 'swagger' field. Is this a Swagger 2.0 document?")

    version = str(spec["swagger"])
    if version != "2" and not version.startswith("2."):
        raise ValidationError(
            f"Unsupported Swagger version: {version}. "
            "Only Swagger 2.0 documents are supported."
        )
    return version
