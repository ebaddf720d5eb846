"""Follow internal ``$ref`` pointers in a Swagger 2.0 document.

Documents share parameters (``#/parameters/...``), responses
(``#/responses/...``) and schemas (``#/definitions/...``) by reference.
Schema references stay symbolic (they become type names in the generated
code), so nothing here inlines the document; callers resolve one pointer at
the moment they need its target.

Pointers into other files are not supported.
"""

from __future__ import annotations

from typing import Any

from specgen.exceptions import SpecParseError

DEFINITIONS_PREFIX = "#/definitions/"


def _unescape(segment: str) -> str:
    # RFC 6901: "~1" is "/", "~0" is "~"; order matters.
    return segment.replace("~1", "/").replace("~0", "~")


def _step(current: Any, segment: str, ref: str) -> Any:
    if isinstance(current, dict):
        if segment not in current:
            raise SpecParseError(f"Cannot resolve $ref '{ref}': key '{segment}' not found at path")
        return current[segment]
    if isinstance(current, list):
        try:
            return current[int(segment)]
        except (ValueError, IndexError) as exc:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
            ) from exc
    raise SpecParseError(
        f"Cannot resolve $ref '{ref}': cannot navigate into {type(current).__name__}"
    )


def resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Return the value *ref* points at inside *root*.

    Raises:
        SpecParseError: If *ref* is not a ``#/`` pointer or leads nowhere.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. Only '#/...' pointers are handled."
        )
    current: Any = root
    for segment in ref[2:].split("/"):
        current = _step(current, _unescape(segment), ref)
    return current


def deref(obj: Any, root: dict[str, Any]) -> Any:
    """Return *obj*, or its target when *obj* is a ``{"$ref": ...}`` dict.

    Chains of references are followed; a pointer seen twice ends the walk.
    """
    seen: set[str] = set()
    while isinstance(obj, dict) and "$ref" in obj and obj["$ref"] not in seen:
        seen.add(obj["$ref"])
        obj = resolve_ref(obj["$ref"], root)
    return obj


def definition_ref_name(ref: str) -> str | None:
    """Raw definition name of a ``#/definitions/...`` pointer, else ``None``."""
    if not ref.startswith(DEFINITIONS_PREFIX):
        return None
    return _unescape(ref[len(DEFINITIONS_PREFIX):])
