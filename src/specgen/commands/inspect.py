"""Inspect commands -- preview what a document would generate.

Provides the ``specgen inspect`` sub-command group with read-only commands
that normalize and group a document without writing anything.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from specgen.output import error, print_table


inspect_app = typer.Typer(no_args_is_help=True)


def _load_source(source: Optional[str]) -> dict[str, Any]:
    """Load and normalize the document named by *source* or the config chain.

    Raises:
        typer.Exit: With the error's exit code when loading fails.
    """
    from specgen.config import merge_default_params, options_for, resolve_options
    from specgen.exceptions import SpecgenError
    from specgen.models import GenConfig

    try:
        options = options_for(GenConfig, resolve_options({"source": source}))
        return merge_default_params(options).source
    except SpecgenError as exc:
        error(f"Failed to load document: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("tags")
def inspect_tags(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Swagger document URL or file path."
    ),
) -> None:
    """List tags with their operation counts, in output order."""
    from specgen.parser import group_by_tag

    document = _load_source(source)
    grouped = group_by_tag(document)
    descriptions = {t.get("name"): t.get("description") or "" for t in document.get("tags") or []}

    rows = [
        [tag, str(len(operations)), descriptions.get(tag, "")]
        for tag, operations in grouped.items()
    ]
    print_table(["Tag", "Operations", "Description"], rows, title="Tags")


@inspect_app.command("paths")
def inspect_paths(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Swagger document URL or file path."
    ),
    tag: Optional[str] = typer.Option(
        None, "--tag", "-t", help="Only list operations of this tag."
    ),
) -> None:
    """List grouped operations with the function name each one compiles to."""
    from specgen.generator.naming import build_function_name
    from specgen.parser import group_by_tag

    grouped = group_by_tag(_load_source(source))
    rows = []
    for group, operations in grouped.items():
        if tag is not None and group != tag:
            continue
        for op in operations:
            rows.append(
                [
                    group,
                    op.method.value.upper(),
                    op.url,
                    build_function_name(op.method.value, op.url),
                    op.summary or "",
                ]
            )
    print_table(["Tag", "Method", "Path", "Function", "Summary"], rows, title="Operations")
