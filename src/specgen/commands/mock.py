"""Mock command -- write example responses for every operation."""

from __future__ import annotations

from typing import Optional

import typer


def mock_command(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Swagger document URL or file path ('-' for stdin)."
    ),
    mock_root: Optional[str] = typer.Option(
        None, "--mock-root", "-m", help="Directory for mock files."
    ),
    wrap: Optional[bool] = typer.Option(
        None, "--wrap/--no-wrap", help="Nest responses in {code, msg, data}."
    ),
) -> None:
    """Generate one mock JSON file per operation.

    Example::

        specgen mock --source ./swagger.json --mock-root ./mock --wrap
    """
    from specgen.config import options_for, resolve_options
    from specgen.exceptions import SpecgenError
    from specgen.mock import mock
    from specgen.models import MockConfig
    from specgen.output import error

    try:
        options = resolve_options({"source": source, "mock_root": mock_root, "wrap": wrap})
        mock(options_for(MockConfig, options))
    except SpecgenError as exc:
        error(f"Mock generation failed: {exc}")
        raise typer.Exit(code=exc.exit_code) from None
