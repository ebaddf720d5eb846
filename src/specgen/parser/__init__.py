"""Swagger document parser -- load, validate, normalize, and group operations.

This sub-package covers the first half of the specgen pipeline: turning a
raw Swagger 2.0 document (JSON or YAML, local file or remote URL) into a
normalized document and a tag-to-operations map the generator can consume.

Typical usage::

    from specgen.parser import load_spec, normalize_source, group_by_tag

    raw = load_spec("https://petstore.swagger.io/v2/swagger.json")
    source = normalize_source(raw)
    grouped = group_by_tag(source)

Sub-modules:

* :mod:`~specgen.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and Swagger version validation.
* :mod:`~specgen.parser.resolver` -- Internal ``$ref`` lookup.
* :mod:`~specgen.parser.normalizer` -- Synthesizes missing tags and
  canonicalizes definition names.
* :mod:`~specgen.parser.grouper` -- Partitions operations by tag.
"""

from specgen.parser.grouper import group_by_tag
from specgen.parser.loader import load_spec, validate_swagger_version
from specgen.parser.normalizer import normalize_definition_name, normalize_source

__all__ = [
    "load_spec",
    "validate_swagger_version",
    "normalize_source",
    "normalize_definition_name",
    "group_by_tag",
]
