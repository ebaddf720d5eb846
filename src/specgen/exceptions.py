"""Errors raised while loading, compiling, and writing generated code.

Every error derives from :class:`SpecgenError` and knows the process exit
code it maps to (see :mod:`specgen.exit_codes`). Pipeline stages let these
propagate; the pipeline marks the run failed and re-raises, and the CLI
commands exit with ``exc.exit_code``.

Subclass hierarchy::

    SpecgenError (exit 1)
    +-- ConfigError         (exit 2)
    +-- SpecParseError      (exit 7)
    +-- ValidationError     (exit 7)
    +-- CompileError        (exit 8)
    +-- IOError_            (exit 9)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from specgen.exit_codes import (
    EXIT_COMPILE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_IO_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecgenError(Exception):
    """Base class; subclasses pick their ``exit_code`` at class level.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SpecgenError):
    """Raised for invalid generator options or a malformed ``specgen.json``."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecgenError):
    """Raised when the document cannot be fetched, read, or parsed."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ValidationError(SpecgenError):
    """Raised when the document is not an OpenAPI 2.0 (Swagger) document."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class CompileError(SpecgenError):
    """Raised when a single operation or definition cannot be compiled.

    Carries enough context to locate the offending operation. ``tag`` is
    filled in by the pipeline, since the compiler itself only sees the
    ``(url, method)`` pair.

    Args:
        message: Description of what could not be compiled.
        url: URL template of the operation, if any.
        method: HTTP method of the operation, if any.
        tag: Tag whose file was being compiled, if known.
    """

    exit_code = EXIT_COMPILE_ERROR

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        method: Optional[str] = None,
        tag: Optional[str] = None,
    ):
        super().__init__(message)
        self.reason = message
        self.url = url
        self.method = method
        self.tag = tag

    def __str__(self) -> str:
        location = []
        if self.tag is not None:
            location.append(f"tag '{self.tag}'")
        if self.method is not None and self.url is not None:
            location.append(f"{self.method.upper()} {self.url}")
        if not location:
            return self.reason
        return f"{self.reason} ({', '.join(location)})"


class IOError_(SpecgenError):
    """Raised when an output directory or file cannot be created or written.

    Named with a trailing underscore to avoid shadowing the built-in
    ``IOError``.
    """

    exit_code = EXIT_IO_ERROR

    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path)
