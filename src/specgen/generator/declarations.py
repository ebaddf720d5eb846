"""Compile ``definitions`` into TypeScript interfaces or JSDoc typedefs.

The pipeline writes one shared declaration file per run
(:data:`~specgen.models.INTERFACE_PATH` for ``ts``,
:data:`~specgen.models.JSDOC_PATH` for ``js``) from
:func:`compile_interfaces` / :func:`compile_jsdoc_typedefs`. When a caller
asks the operation compiler to inline declarations instead,
:func:`compile_declarations` emits only the definitions a fragment uses.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from specgen.generator.naming import one_line, property_key
from specgen.generator.render import render
from specgen.generator.types import TypeCollector


def _is_object_schema(schema: dict[str, Any]) -> bool:
    if "$ref" in schema or "allOf" in schema or schema.get("enum"):
        return False
    return schema.get("type", "object") == "object" and not (
        isinstance(schema.get("additionalProperties"), dict) and not schema.get("properties")
    )


def _interface_code(name: str, schema: dict[str, Any], collector: TypeCollector) -> str:
    if not _is_object_schema(schema):
        return render(
            "interface.ts.j2",
            name=name,
            description=one_line(schema.get("description")),
            properties=None,
            type=collector.ts_type(schema),
        )

    required = set(schema.get("required") or [])
    properties = [
        {
            "key": property_key(prop_name),
            "required": prop_name in required,
            "type": collector.ts_type(prop_schema),
            "description": one_line(
                prop_schema.get("description") if isinstance(prop_schema, dict) else None
            ),
        }
        for prop_name, prop_schema in (schema.get("properties") or {}).items()
    ]
    return render(
        "interface.ts.j2",
        name=name,
        description=one_line(schema.get("description")),
        properties=properties,
        type=None,
    )


def _typedef_code(name: str, schema: dict[str, Any], collector: TypeCollector) -> str:
    if not _is_object_schema(schema):
        return render(
            "typedef.js.j2",
            name=name,
            description=one_line(schema.get("description")),
            properties=None,
            type_tag="{" + collector.jsdoc_type(schema) + "}",
        )

    required = set(schema.get("required") or [])
    properties = []
    for prop_name, prop_schema in (schema.get("properties") or {}).items():
        type_tag = "{" + collector.jsdoc_type(prop_schema) + "}"
        label = prop_name if prop_name in required else f"[{prop_name}]"
        description = one_line(
            prop_schema.get("description") if isinstance(prop_schema, dict) else None
        )
        tag = f"{type_tag} {label}"
        if description:
            tag += f" - {description}"
        properties.append({"tag": tag})
    return render(
        "typedef.js.j2",
        name=name,
        description=one_line(schema.get("description")),
        properties=properties,
        type_tag=None,
    )


def _declaration(name: str, schema: Any, lang: str, collector: TypeCollector) -> str:
    if not isinstance(schema, dict):
        schema = {}
    if lang == "ts":
        return _interface_code(name, schema, collector)
    return _typedef_code(name, schema, collector)


def _compile_all(source: dict[str, Any], lang: str) -> str:
    definitions = source.get("definitions") or {}
    collector = TypeCollector(definitions)
    blocks = [
        _declaration(name, schema, lang, collector)
        for name, schema in definitions.items()
    ]
    return "\n".join(blocks)


def compile_interfaces(source: dict[str, Any]) -> str:
    """Compile every definition of *source* into TypeScript declarations.

    Raises:
        CompileError: If a definition references an unknown definition.
    """
    return _compile_all(source, "ts")


def compile_jsdoc_typedefs(source: dict[str, Any]) -> str:
    """Compile every definition of *source* into JSDoc ``@typedef`` blocks.

    Raises:
        CompileError: If a definition references an unknown definition.
    """
    return _compile_all(source, "js")


def compile_declarations(
    names: Iterable[str],
    source: dict[str, Any],
    lang: str,
    recursive: bool = False,
    url: Optional[str] = None,
    method: Optional[str] = None,
) -> str:
    """Compile declarations for *names*, optionally following their references.

    With ``recursive`` the output also covers every definition reachable
    from *names*, each emitted once, in discovery order.
    """
    definitions = source.get("definitions") or {}
    pending = list(dict.fromkeys(names))
    emitted: dict[str, str] = {}

    while pending:
        name = pending.pop(0)
        if name in emitted:
            continue
        collector = TypeCollector(definitions, url=url, method=method)
        emitted[name] = _declaration(name, definitions.get(name), lang, collector)
        if recursive:
            pending.extend(ref for ref in collector.refs if ref not in emitted)

    return "\n".join(emitted.values())
