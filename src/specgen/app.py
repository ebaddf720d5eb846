"""Root Typer application and the ``specgen`` console-script entry point.

Sub-commands (``gen``, ``mock``, ``inspect``) live in :mod:`specgen.commands`
and are attached by :func:`register_commands`, which :func:`main` calls
before handing control to Typer. Tests call it too and then drive
:data:`app` through ``typer.testing.CliRunner``.

See Also:
    :mod:`specgen.config`: Where option values come from.
    :mod:`specgen.output`: The output manager built by :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import tempfile
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from specgen import __version__
from specgen.exit_codes import EXIT_GENERIC_FAILURE

_EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="specgen",
    help="Generate API request modules from Swagger 2.0 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print inspect tables as JSON."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print warnings and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print pipeline state transitions."
    ),
) -> None:
    """Generate API request modules from Swagger 2.0 documents."""
    from specgen.output import OutputFormat, OutputManager, set_output

    set_output(
        OutputManager(
            format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(_EXIT_INTERRUPTED)


def _write_crash_log(exc: Exception) -> Path:
    """Save the traceback of *exc* under ``$TMPDIR/specgen`` and return its path."""
    log_dir = Path(tempfile.gettempdir()) / "specgen"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return log_path


_commands_registered = False


def register_commands() -> None:
    """Attach the built-in sub-commands to :data:`app`; repeat calls are no-ops."""
    global _commands_registered
    if _commands_registered:
        return

    from specgen.commands.gen import gen_command
    from specgen.commands.inspect import inspect_app
    from specgen.commands.mock import mock_command

    app.command("gen")(gen_command)
    app.command("mock")(mock_command)
    app.add_typer(inspect_app, name="inspect", help="Inspect tags and operations.")
    _commands_registered = True


def main() -> None:
    """Run the CLI.

    Commands turn :class:`~specgen.exceptions.SpecgenError` into their own
    exit codes; one that still reaches this point is reported the same way.
    Any other exception is written to a crash log and exits with
    :data:`~specgen.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    signal.signal(signal.SIGINT, _on_sigint)
    try:
        register_commands()
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(_EXIT_INTERRUPTED)
    except Exception as exc:
        from specgen.exceptions import SpecgenError
        from specgen.output import error

        if isinstance(exc, SpecgenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
