"""Map Swagger 2.0 schemas to TypeScript and JSDoc type expressions.

A :class:`TypeCollector` is created for each compilation unit (one operation
or one declaration file). Besides rendering type strings it records every
``#/definitions/...`` name it meets, in first-appearance order, so callers
can emit a single import statement.

Mapping rules:

=================  =====================  ======================
Swagger schema     TypeScript             JSDoc
=================  =====================  ======================
string             ``string``             ``string``
integer / number   ``number``             ``number``
boolean            ``boolean``            ``boolean``
file               ``Blob``               ``Blob``
array of T         ``T[]``                ``Array<T>``
enum               ``"a" | "b"``          ``("a"|"b")``
object             ``{ a: T; b?: U }``    ``Object``
map of T           ``Record<string, T>``  ``Object<string, T>``
allOf              ``A & B``              first member
``$ref``           definition name        definition name
anything else      ``any``                ``*``
=================  =====================  ======================
"""

from __future__ import annotations

import json
from typing import Any, Optional

from specgen.exceptions import CompileError
from specgen.generator.naming import property_key
from specgen.parser.normalizer import normalize_definition_name
from specgen.parser.resolver import definition_ref_name

_SCALAR_TYPES: dict[str, str] = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "file": "Blob",
}


class TypeCollector:
    """Render schema types and remember the definitions they reference.

    Args:
        definitions: The normalized ``definitions`` map of the document.
        url: URL template of the operation being compiled, for error context.
        method: HTTP method of the operation being compiled.
    """

    def __init__(
        self,
        definitions: dict[str, Any],
        url: Optional[str] = None,
        method: Optional[str] = None,
    ) -> None:
        self._definitions = definitions
        self._url = url
        self._method = method
        self._refs: dict[str, None] = {}

    @property
    def refs(self) -> list[str]:
        """Referenced definition names, deduplicated, in first-seen order."""
        return list(self._refs)

    def reference(self, ref: str) -> Optional[str]:
        """Record a ``$ref`` and return its canonical definition name.

        Returns ``None`` for pointers outside ``#/definitions``.

        Raises:
            CompileError: If the definition does not exist.
        """
        raw_name = definition_ref_name(ref)
        if raw_name is None:
            return None
        name = normalize_definition_name(raw_name)
        if name not in self._definitions:
            raise CompileError(
                f"Unresolved definition reference '{ref}'",
                url=self._url,
                method=self._method,
            )
        self._refs.setdefault(name, None)
        return name

    # ------------------------------------------------------------------ #
    # TypeScript
    # ------------------------------------------------------------------ #

    def ts_type(self, schema: Any) -> str:
        """Return the TypeScript type expression for *schema*."""
        if not isinstance(schema, dict) or not schema:
            return "any"

        if "$ref" in schema:
            return self.reference(schema["$ref"]) or "any"

        if "allOf" in schema:
            parts = [self.ts_type(sub) for sub in schema["allOf"]]
            parts = [part for part in parts if part != "any"]
            return " & ".join(parts) if parts else "any"

        if schema.get("enum"):
            return " | ".join(json.dumps(value) for value in schema["enum"])

        schema_type = schema.get("type")
        if schema_type in _SCALAR_TYPES:
            return _SCALAR_TYPES[schema_type]

        if schema_type == "array":
            item_type = self.ts_type(schema.get("items"))
            if " " in item_type and not item_type.startswith("{"):
                item_type = f"({item_type})"
            return f"{item_type}[]"

        if schema_type == "object" or "properties" in schema or "additionalProperties" in schema:
            return self._ts_object(schema)

        return "any"

    def _ts_object(self, schema: dict[str, Any]) -> str:
        properties = schema.get("properties") or {}
        if properties:
            required = set(schema.get("required") or [])
            members = [
                f"{property_key(name)}{'' if name in required else '?'}: {self.ts_type(prop)}"
                for name, prop in properties.items()
            ]
            return "{ " + "; ".join(members) + " }"

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return f"Record<string, {self.ts_type(additional)}>"
        return "Record<string, any>"

    # ------------------------------------------------------------------ #
    # JSDoc
    # ------------------------------------------------------------------ #

    def jsdoc_type(self, schema: Any) -> str:
        """Return the JSDoc type expression for *schema*."""
        if not isinstance(schema, dict) or not schema:
            return "*"

        if "$ref" in schema:
            return self.reference(schema["$ref"]) or "*"

        if "allOf" in schema:
            parts = [self.jsdoc_type(sub) for sub in schema["allOf"]]
            return parts[0] if parts else "*"

        if schema.get("enum"):
            return "(" + "|".join(json.dumps(value) for value in schema["enum"]) + ")"

        schema_type = schema.get("type")
        if schema_type in _SCALAR_TYPES:
            return _SCALAR_TYPES[schema_type]

        if schema_type == "array":
            return f"Array<{self.jsdoc_type(schema.get('items'))}>"

        if schema_type == "object" or "properties" in schema or "additionalProperties" in schema:
            additional = schema.get("additionalProperties")
            if isinstance(additional, dict) and not schema.get("properties"):
                return f"Object<string, {self.jsdoc_type(additional)}>"
            # Walk nested properties so their references are validated and recorded.
            for prop in (schema.get("properties") or {}).values():
                self.jsdoc_type(prop)
            return "Object"

        return "*"

    def type_for(self, schema: Any, lang: str) -> str:
        """Dispatch to :meth:`ts_type` or :meth:`jsdoc_type` by target language."""
        if lang == "ts":
            return self.ts_type(schema)
        return self.jsdoc_type(schema)
