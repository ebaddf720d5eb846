"""Built-in CLI sub-commands for specgen.

* :mod:`~specgen.commands.gen` -- generate request modules.
* :mod:`~specgen.commands.mock` -- generate mock response files.
* :mod:`~specgen.commands.inspect` -- list the tags and operations a
  document would produce.

``gen`` and ``mock`` are plain callbacks registered directly on the root
app; ``inspect`` is a :class:`typer.Typer` sub-application.
"""
