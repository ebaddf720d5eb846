"""Line-level formatting applied to generated files before they are written.

The generated code is already laid out by the templates; this pass only
normalizes whitespace so output is stable regardless of how fragments were
joined: trailing spaces are stripped, runs of blank lines collapse to one,
and the file ends with exactly one newline.
"""

from __future__ import annotations

from typing import Callable


def format_code(lang: str) -> Callable[[str], str]:
    """Return the formatter for *lang* (``"ts"`` or ``"js"``).

    Both languages share the same rules today; the indirection keeps the
    call site independent of that.
    """
    return _format_source


def _format_source(code: str) -> str:
    lines = [line.rstrip() for line in code.splitlines()]
    formatted: list[str] = []
    for line in lines:
        if not line and (not formatted or not formatted[-1]):
            continue
        formatted.append(line)
    while formatted and not formatted[-1]:
        formatted.pop()
    return "\n".join(formatted) + "\n"
