"""Gen command -- generate request modules from a Swagger document.

Implements ``specgen gen``. Options not given on the command line fall back
to ``SPECGEN_*`` environment variables, then to ``./specgen.json``, then to
the defaults on :class:`~specgen.models.GenConfig`.
"""

from __future__ import annotations

from typing import Callable, Optional

import typer

from specgen.models import GroupedOperations
from specgen.output import warning


def tag_filter(tags: list[str]) -> Callable[[GroupedOperations], GroupedOperations]:
    """Build a selection hook keeping only the operations of *tags*.

    Groups keep their original order; unknown tag names are reported.
    """
    wanted = list(dict.fromkeys(tags))

    def _choose(paths: GroupedOperations) -> GroupedOperations:
        for tag in wanted:
            if tag not in paths:
                warning(f'Tag "{tag}" not found in document')
        return {tag: ops for tag, ops in paths.items() if tag in wanted}

    return _choose


def gen_command(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Swagger document URL or file path ('-' for stdin)."
    ),
    root: Optional[str] = typer.Option(
        None, "--root", "-r", help="Output directory."
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", "-l", help="Target language: ts or js."
    ),
    type_only: Optional[bool] = typer.Option(
        None, "--type-only", help="Only generate the interface/typedef file."
    ),
    tag: Optional[list[str]] = typer.Option(
        None, "--tag", "-t", help="Only generate these tags (repeatable)."
    ),
    custom_import_code: Optional[str] = typer.Option(
        None, "--custom-import-code", help="Code inserted after the imports of every file."
    ),
    js_doc: Optional[bool] = typer.Option(
        None, "--js-doc/--no-js-doc", help="Emit JSDoc blocks in js output."
    ),
    timestamp: Optional[bool] = typer.Option(
        None, "--timestamp/--no-timestamp", help="Stamp the generation date into headers."
    ),
) -> None:
    """Generate one request module per tag from a Swagger 2.0 document.

    Example::

        specgen gen --source ./swagger.json --lang ts --root ./src/api
        specgen gen -s https://petstore.swagger.io/v2/swagger.json -t pet -t store
    """
    from specgen.config import options_for, resolve_options
    from specgen.exceptions import SpecgenError
    from specgen.models import GenConfig
    from specgen.output import error, info
    from specgen.pipeline import Pipeline

    try:
        resolved = resolve_options(
            {
                "source": source,
                "root": root,
                "lang": lang,
                "type_only": type_only,
                "custom_import_code": custom_import_code,
                "js_doc": js_doc,
                "timestamp": timestamp,
            }
        )
        options = options_for(GenConfig, resolved)
    except SpecgenError as exc:
        error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=exc.exit_code) from None

    if options.get("source"):
        info(f"Reading document from: {options['source']}")
    try:
        pipeline = Pipeline(options, on_choose_api=tag_filter(tag) if tag else None)
        result = pipeline.run()
    except SpecgenError as exc:
        raise typer.Exit(code=exc.exit_code) from None

    if result.files:
        info(f"Last written file: {result.files[-1]}")
