"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specgen.exceptions.SpecgenError` subclass.
Build scripts can inspect the exit code to tell a broken document apart from
a broken output directory without parsing stderr.

Example::

    $ specgen gen --source swagger.json
    $ echo $?
    8   # EXIT_COMPILE_ERROR -- an operation references an unknown definition
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or options."""

EXIT_SPEC_PARSE_ERROR = 7
"""The document could not be loaded, parsed, or is not Swagger 2.0."""

EXIT_COMPILE_ERROR = 8
"""An operation or definition could not be compiled."""

EXIT_IO_ERROR = 9
"""An output directory or file could not be written."""
