"""Assemble compiled fragments into the contents of one per-tag file.

Layout of an assembled file::

    <header banner>
    import { A, B } from "./interface";   (ts only, when types are used)
    <custom import code>

    <fragment 1>

    <fragment 2>

The assembler performs no formatting; the pipeline hands its output to
:func:`~specgen.generator.formatter.format_code` before writing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from specgen.generator.naming import one_line
from specgen.generator.render import render
from specgen.models import INTERFACE_IMPORT, CompiledFragment, GenConfig

DATE_FORMAT = "%Y-%m-%d %H:%M"


def create_default_head_code(
    title: Optional[str] = None,
    description: Optional[str] = None,
    file_description: Optional[str] = None,
    host: Optional[str] = None,
    version: Optional[str] = None,
    date: Optional[str] = None,
) -> str:
    """Render the banner placed at the top of every generated file.

    Empty values are left out of the banner.
    """
    return render(
        "head.js.j2",
        title=one_line(title),
        description=one_line(description),
        file_description=one_line(file_description),
        host=one_line(host),
        version=one_line(str(version) if version is not None else None),
        date=date or "",
    )


def head_code_for(tag: Optional[str], config: GenConfig, now: Optional[datetime] = None) -> str:
    """Render the banner for *tag*'s file from the document metadata."""
    source = config.source
    info: dict[str, Any] = source.get("info") or {}
    file_description = None
    if tag is not None:
        file_description = next(
            (t.get("description") for t in source.get("tags") or [] if t.get("name") == tag),
            None,
        )
    date = None
    if config.timestamp:
        date = (now or datetime.now()).strftime(DATE_FORMAT)
    return create_default_head_code(
        title=info.get("title"),
        description=info.get("description"),
        file_description=file_description,
        host=config.source_url or source.get("host"),
        version=info.get("version"),
        date=date,
    )


def merge_imports(fragments: Sequence[CompiledFragment]) -> list[str]:
    """Union of fragment imports, keeping each name at its first appearance."""
    merged: dict[str, None] = {}
    for fragment in fragments:
        for name in fragment.imports:
            merged.setdefault(name, None)
    return list(merged)


def import_statement(names: Sequence[str]) -> str:
    """Render the aggregated interface import for ``.ts`` files."""
    return f'import {{ {", ".join(names)} }} from "{INTERFACE_IMPORT}";'


def assemble(
    tag: str,
    fragments: Sequence[CompiledFragment],
    config: GenConfig,
    now: Optional[datetime] = None,
) -> str:
    """Concatenate header, imports, custom code and fragment bodies for *tag*.

    Args:
        tag: Tag whose file is being assembled; selects the file description.
        fragments: Compiled fragments, in output order.
        config: Merged generator configuration.
        now: Timestamp for the banner; defaults to the current time.

    Returns:
        Unformatted file contents.
    """
    parts = [head_code_for(tag, config, now)]

    imports = merge_imports(fragments)
    if config.lang == "ts" and imports:
        parts.append(import_statement(imports) + "\n")
    if config.custom_import_code:
        parts.append(config.custom_import_code + "\n")

    bodies = []
    for fragment in fragments:
        body = fragment.code
        if config.lang == "js":
            body = fragment.js_doc_code + body
        bodies.append(body.strip("\n"))

    return "".join(parts) + "\n" + "\n\n".join(bodies) + "\n"
