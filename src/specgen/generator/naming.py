"""Derive generated identifiers from HTTP methods and URL templates.

Pattern: ``{method}{Segment}{Segment}...``

  - Path parameter braces are stripped, the parameter name is kept.
  - Every segment is split on non-identifier characters and each word has
    its first character upper-cased.

Examples:
  GET    /pets                 -> getPets
  DELETE /pets/{id}            -> deletePetsId
  GET    /user-info/v2         -> getUserInfoV2
  POST   /store/order.json     -> postStoreOrderJson
"""

from __future__ import annotations

import json
import re

_WORD_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")

# JavaScript identifier subset accepted unquoted in property keys
_JS_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Matches ``{param}`` placeholders in a URL template.
PATH_PARAM_RE = re.compile(r"\{([^{}]+)\}")


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def build_function_name(method: str, url: str) -> str:
    """Build a function name from an HTTP method and URL template.

    Returns a camelCase name such as ``getPets`` or ``deletePetsId``. The
    result only depends on its arguments, so the same operation always gets
    the same name.
    """
    words: list[str] = []
    for segment in url.split("/"):
        segment = segment.replace("{", "").replace("}", "")
        words.extend(word for word in _WORD_SPLIT_RE.split(segment) if word)

    name = method.lower() + "".join(_upper_first(word) for word in words)
    if name[:1].isdigit():
        name = "_" + name
    return name


def is_identifier(name: str) -> bool:
    """Return True if *name* can be used unquoted as a JS property key."""
    return bool(_JS_IDENT_RE.match(name))


def property_key(name: str) -> str:
    """Render *name* as an object-literal key, quoting it when needed."""
    return name if is_identifier(name) else json.dumps(name)


def member_access(obj: str, name: str) -> str:
    """Render a property access on *obj*: ``obj.name`` or ``obj["na-me"]``."""
    if is_identifier(name):
        return f"{obj}.{name}"
    return f"{obj}[{json.dumps(name)}]"


def path_param_names(url: str) -> list[str]:
    """Return the placeholder names of *url* in order of appearance."""
    return list(dict.fromkeys(PATH_PARAM_RE.findall(url)))


def interpolate_url(url: str, obj: str) -> str:
    """Turn a URL template into the body of a JS template literal.

    ``/pets/{id}`` with ``obj="pathParams"`` becomes
    ``/pets/${pathParams.id}``.
    """
    return PATH_PARAM_RE.sub(lambda m: "${" + member_access(obj, m.group(1)) + "}", url)


def one_line(text: str | None) -> str:
    """Collapse whitespace in *text* so it fits a single comment line."""
    if not text:
        return ""
    text = re.sub(r"\s+", " ", text).strip()
    return text.replace("*/", "*\\/")
