"""Code generator -- compile operations and definitions into source files.

This sub-package is the second half of the specgen pipeline: taking a
normalized document and the grouped operations produced by
:mod:`specgen.parser` and producing file contents.

Typical usage::

    from specgen.generator import assemble, compile_path

    fragments = [compile_path(config, p.url, p.method.value) for p in paths]
    code = assemble("pet", fragments, config)

Sub-modules:

* :mod:`~specgen.generator.naming` -- function names and JS identifiers.
* :mod:`~specgen.generator.types` -- schema to TypeScript/JSDoc types.
* :mod:`~specgen.generator.compiler` -- one operation to one fragment.
* :mod:`~specgen.generator.declarations` -- interface and typedef files.
* :mod:`~specgen.generator.assembler` -- per-tag file assembly.
* :mod:`~specgen.generator.formatter` -- whitespace normalization.
"""

from specgen.generator.assembler import assemble, create_default_head_code
from specgen.generator.compiler import compile_path
from specgen.generator.declarations import compile_interfaces, compile_jsdoc_typedefs
from specgen.generator.formatter import format_code

__all__ = [
    "assemble",
    "compile_interfaces",
    "compile_jsdoc_typedefs",
    "compile_path",
    "create_default_head_code",
    "format_code",
]
