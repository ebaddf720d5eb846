"""Terminal output for specgen commands.

Generated files are the real product of a run, so almost everything this
module prints is a diagnostic and goes to **stderr**: progress while the
pipeline runs, the success line naming the output root, warnings about
unknown tags, and errors. **stdout** only carries the tables printed by
``specgen inspect``, which makes them safe to pipe (``--json`` turns them
into a JSON array).

Colour follows the usual switches: ``NO_COLOR`` (any value), ``TERM=dumb``
and the ``--no-color`` flag all force plain text.

Commands and pipeline stages never hold an :class:`OutputManager` directly.
:func:`~specgen.app.main_callback` installs one with :func:`set_output`, and
the module-level helpers (:func:`info`, :func:`debug`, :func:`status`, ...)
forward to it. Outside the CLI a default manager is created on first use.
"""

from __future__ import annotations

import contextlib
import json
import os
import sys
from enum import Enum
from typing import ContextManager, Iterator, Optional

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    """How tables are rendered on stdout.

    ``AUTO`` picks ``RICH`` for an interactive, coloured terminal and
    ``PLAIN`` for everything else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes tables to stdout and diagnostics to stderr.

    Args:
        format: Table format; ``AUTO`` is resolved once, at construction.
        no_color: Print diagnostics without Rich markup.
        quiet: Drop info, success and progress messages. Warnings and
            errors are always printed.
        verbose: Print :meth:`debug` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            interactive = _is_tty() and not self._no_color
            format = OutputFormat.RICH if interactive else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* and a newline to stdout."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers* in the active format.

        JSON mode emits one object per row keyed by header; plain mode emits
        tab-separated lines with a header line first; Rich mode draws a
        table with *title* above it.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return

        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def _emit(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Print a ``[debug]`` line, only with ``--verbose``."""
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def progress(self, message: str) -> None:
        """Print a dimmed line when stdout is a terminal and not quiet."""
        if not self._quiet and _is_tty():
            self._emit(message, f"[dim]{message}[/dim]")

    @contextlib.contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Show a spinner on stderr while the body runs.

        Without an interactive, coloured stderr this degrades to a single
        :meth:`progress` line.
        """
        if self._quiet or self._no_color or not self._stderr.is_terminal:
            self.progress(message)
            yield
            return
        with self._stderr.status(message):
            yield


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide manager
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests call this between cases)."""
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def debug(message: str) -> None:
    get_output().debug(message)


def progress(message: str) -> None:
    get_output().progress(message)


def status(message: str) -> ContextManager[None]:
    """Spinner context manager on the installed manager."""
    return get_output().status(message)
