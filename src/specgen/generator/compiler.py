"""Compile a single Swagger operation into a request function.

This is the core of the generator. :func:`compile_path` looks up one
``(url, method)`` pair in the configured document and produces a
:class:`~specgen.models.CompiledFragment`:

1. Path-level and operation-level parameters are merged and resolved.
2. Parameters are partitioned into three argument groups, in this order:
   ``pathParams`` (``in: path``), ``params`` (``in: query``) and ``data``
   (``in: body`` or ``in: formData``). Header parameters are not part of
   the generated signature.
3. The function is rendered from the template of the target language.
   ``ts`` output carries static types and records every referenced
   definition in ``imports``; ``js`` output carries the same information in
   a JSDoc block.

The function only reads its arguments, so distinct operations can be
compiled concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from specgen.exceptions import CompileError, SpecParseError
from specgen.generator.declarations import compile_declarations
from specgen.generator.naming import (
    build_function_name,
    interpolate_url,
    one_line,
    path_param_names,
    property_key,
)
from specgen.generator.render import render
from specgen.generator.types import TypeCollector
from specgen.models import CompiledFragment, GenConfig
from specgen.parser.resolver import deref

PATH_ARG = "pathParams"
QUERY_ARG = "params"
BODY_ARG = "data"

_SUCCESS_STATUSES = ("200", "201", "default")


@dataclass
class _Member:
    """One parameter inside an argument group."""

    name: str
    schema: dict[str, Any]
    required: bool
    description: str = ""


@dataclass
class _Argument:
    """One argument of the generated function."""

    name: str
    members: list[_Member] = field(default_factory=list)
    # Set for a bare ``in: body`` argument, which is typed by its schema
    # instead of an object literal built from members.
    body_schema: Optional[dict[str, Any]] = None
    body_description: str = ""
    required: bool = False
    optional: bool = False


def compile_path(config: GenConfig, url: str, method: str) -> CompiledFragment:
    """Compile the operation at ``(url, method)`` of ``config.source``.

    Args:
        config: Merged generator configuration; ``config.source`` must be a
            normalized document.
        url: URL template as it appears under ``paths``.
        method: Lower-case HTTP method.

    Returns:
        The compiled fragment.

    Raises:
        CompileError: If the operation does not exist, a parameter is
            malformed, or a schema references an unknown definition.

    Example::

        fragment = compile_path(config, "/pets/{id}", "delete")
        fragment.name     # 'deletePetsId'
        fragment.imports  # e.g. ['Pet']
    """
    source = config.source
    method = method.lower()
    path_item = (source.get("paths") or {}).get(url)
    if not isinstance(path_item, dict) or not isinstance(path_item.get(method), dict):
        raise CompileError("Operation not found in document", url=url, method=method)
    operation = path_item[method]

    collector = TypeCollector(source.get("definitions") or {}, url=url, method=method)
    parameters = _resolve_parameters(source, path_item, operation, url, method)
    arguments = _build_arguments(parameters, url)

    response_schema = _response_schema(source, operation, url, method)
    blob = isinstance(response_schema, dict) and response_schema.get("type") == "file"

    name = build_function_name(method, url)
    summary = one_line(operation.get("summary") or operation.get("description"))
    deprecated = bool(operation.get("deprecated", False))
    context = {
        "name": name,
        "summary": summary,
        "deprecated": deprecated,
        "url": interpolate_url(url, PATH_ARG),
        "method": method,
        "has_query": any(arg.name == QUERY_ARG for arg in arguments),
        "has_body": any(arg.name == BODY_ARG for arg in arguments),
        "blob": blob,
    }

    js_doc_code = ""
    if config.lang == "ts":
        code = render(
            "function.ts.j2",
            arguments=[_ts_argument(arg, collector) for arg in arguments],
            response_type=collector.ts_type(response_schema),
            **context,
        )
    else:
        param_lines = _jsdoc_param_lines(arguments, collector)
        response_type = collector.jsdoc_type(response_schema)
        code = render(
            "function.js.j2",
            arguments=[arg.name for arg in arguments],
            js_doc=config.js_doc,
            **context,
        )
        if config.js_doc:
            js_doc_code = render(
                "jsdoc.js.j2",
                summary=summary,
                deprecated=deprecated,
                param_lines=param_lines,
                response_type=response_type,
            )

    imports = collector.refs
    inline = config.interface if config.lang == "ts" else config.typedef
    if inline and imports:
        declarations = compile_declarations(
            imports, source, config.lang, config.recursive, url=url, method=method
        )
        code = f"{declarations}\n{code}"

    return CompiledFragment(name=name, code=code, js_doc_code=js_doc_code, imports=imports)


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


def _deref(obj: Any, source: dict[str, Any], url: str, method: str) -> Any:
    try:
        return deref(obj, source)
    except SpecParseError as exc:
        raise CompileError(str(exc), url=url, method=method) from exc


def _resolve_parameters(
    source: dict[str, Any],
    path_item: dict[str, Any],
    operation: dict[str, Any],
    url: str,
    method: str,
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    ``name`` and ``in``.
    """
    path_params = [
        _checked_parameter(_deref(p, source, url, method), url, method)
        for p in path_item.get("parameters") or []
    ]
    op_params = [
        _checked_parameter(_deref(p, source, url, method), url, method)
        for p in operation.get("parameters") or []
    ]

    op_keys = {(p["name"], p["in"]) for p in op_params}
    merged = [p for p in path_params if (p["name"], p["in"]) not in op_keys]
    merged.extend(op_params)
    return merged


def _checked_parameter(param: Any, url: str, method: str) -> dict[str, Any]:
    if not isinstance(param, dict) or not param.get("name") or not param.get("in"):
        raise CompileError(
            f"Malformed parameter {param!r}: 'name' and 'in' are required",
            url=url,
            method=method,
        )
    return param


def _parameter_schema(param: dict[str, Any]) -> dict[str, Any]:
    if param["in"] == "body":
        schema = param.get("schema")
        return schema if isinstance(schema, dict) else {}
    return {k: v for k, v in param.items() if k not in ("name", "in", "required", "description")}


def _build_arguments(parameters: list[dict[str, Any]], url: str) -> list[_Argument]:
    path_arg = _Argument(PATH_ARG, required=True)
    query_arg = _Argument(QUERY_ARG)
    body_arg = _Argument(BODY_ARG)

    for param in parameters:
        location = param["in"]
        member = _Member(
            name=param["name"],
            schema=_parameter_schema(param),
            required=bool(param.get("required", False)) or location == "path",
            description=one_line(param.get("description")),
        )
        if location == "path":
            path_arg.members.append(member)
        elif location == "query":
            query_arg.members.append(member)
            query_arg.required = query_arg.required or member.required
        elif location == "body":
            body_arg.body_schema = member.schema
            body_arg.body_description = member.description
            body_arg.required = member.required
        elif location == "formData":
            body_arg.members.append(member)
            if body_arg.body_schema is None:
                body_arg.required = body_arg.required or member.required

    # Placeholders the document forgot to declare still need a value.
    declared = {m.name for m in path_arg.members}
    for placeholder in path_param_names(url):
        if placeholder not in declared:
            path_arg.members.append(_Member(placeholder, {"type": "string"}, True))

    arguments = [
        arg
        for arg in (path_arg, query_arg, body_arg)
        if arg.members or arg.body_schema is not None
    ]

    # An argument may only be optional when everything after it is too.
    trailing_optional = True
    for arg in reversed(arguments):
        arg.optional = trailing_optional and not arg.required
        trailing_optional = arg.optional
    return arguments


def _response_schema(
    source: dict[str, Any], operation: dict[str, Any], url: str, method: str
) -> Optional[dict[str, Any]]:
    responses = operation.get("responses") or {}
    for status in _SUCCESS_STATUSES:
        if status not in responses:
            continue
        response = _deref(responses[status], source, url, method)
        if isinstance(response, dict) and isinstance(response.get("schema"), dict):
            return response["schema"]
    return None


# ---------------------------------------------------------------------------
# Typed rendering
# ---------------------------------------------------------------------------


def _ts_argument(arg: _Argument, collector: TypeCollector) -> str:
    if arg.body_schema is not None:
        type_expr = collector.ts_type(arg.body_schema)
    else:
        members = [
            f"{property_key(m.name)}{'' if m.required else '?'}: {collector.ts_type(m.schema)}"
            for m in arg.members
        ]
        type_expr = "{ " + "; ".join(members) + " }"
    return f"{arg.name}{'?' if arg.optional else ''}: {type_expr}"


# ---------------------------------------------------------------------------
# Untyped rendering
# ---------------------------------------------------------------------------


def _jsdoc_label(name: str, optional: bool) -> str:
    return f"[{name}]" if optional else name


def _jsdoc_line(type_expr: str, label: str, description: str) -> str:
    line = f"{{{type_expr}}} {label}"
    if description:
        line += f" - {description}"
    return line


def _jsdoc_param_lines(arguments: list[_Argument], collector: TypeCollector) -> list[str]:
    lines: list[str] = []
    for arg in arguments:
        if arg.body_schema is not None:
            lines.append(
                _jsdoc_line(
                    collector.jsdoc_type(arg.body_schema),
                    _jsdoc_label(arg.name, arg.optional),
                    arg.body_description,
                )
            )
            continue

        lines.append(_jsdoc_line("Object", _jsdoc_label(arg.name, arg.optional), ""))
        for member in arg.members:
            lines.append(
                _jsdoc_line(
                    collector.jsdoc_type(member.schema),
                    _jsdoc_label(f"{arg.name}.{member.name}", not member.required),
                    member.description,
                )
            )
    return lines
