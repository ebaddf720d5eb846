"""Generation pipeline -- the state machine behind ``specgen gen``.

A run moves through these states::

    IDLE -> NORMALIZING -> GROUPING -> [SELECTING] -> COMPILING
         -> ASSEMBLING -> WRITING -> DONE

``SELECTING`` only happens when an ``on_choose_api`` hook is given. In
``type_only`` mode the run goes from ``NORMALIZING`` straight to
``WRITING`` and only emits the declaration file. Any error moves the run to
``FAILED`` and is re-raised unchanged.

Every tag is compiled and assembled before the first file is written, so a
:class:`~specgen.exceptions.CompileError` leaves the output directory as it
was. An :class:`~specgen.exceptions.IOError_` during ``WRITING`` can still
leave some files of the run behind.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from specgen.config import merge_default_params
from specgen.exceptions import CompileError
from specgen.generator.assembler import assemble, head_code_for
from specgen.generator.compiler import compile_path
from specgen.generator.declarations import compile_interfaces, compile_jsdoc_typedefs
from specgen.generator.formatter import format_code
from specgen.models import (
    INTERFACE_PATH,
    JSDOC_PATH,
    CompiledFragment,
    GenConfig,
    GenerationResult,
    GroupedOperations,
    ParsedPath,
    PipelineState,
)
from specgen.output import debug, error, status, success
from specgen.parser.grouper import group_by_tag
from specgen.writer import ensure_dir, write_file

ChooseApiHook = Callable[..., GroupedOperations]
"""Called as ``hook(paths=grouped)``; returns the operations to generate."""

# Flags that only make sense when compiling a single fragment in isolation.
# The pipeline writes one shared declaration file instead.
_PIPELINE_CORE_OVERRIDES: dict[str, Any] = {
    "interface": False,
    "typedef": False,
    "recursive": False,
}


class Pipeline:
    """One generation run over a merged configuration.

    Args:
        config: Options to merge (dict or bare source) or an already merged
            :class:`~specgen.models.GenConfig`.
        on_choose_api: Optional selection hook invoked once after grouping.
            Its return value replaces the grouped operations as-is.

    Example::

        pipeline = Pipeline({"source": "swagger.json", "lang": "ts"})
        result = pipeline.run()
        result.files  # [Path('src/api/interface/index.ts'), Path('src/api/pet.ts')]
    """

    def __init__(
        self,
        config: Union[GenConfig, dict[str, Any], str],
        on_choose_api: Optional[ChooseApiHook] = None,
    ) -> None:
        self._raw_config = config
        self._on_choose_api = on_choose_api
        self.config: Optional[GenConfig] = None
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [PipelineState.IDLE]

    def _transition(self, state: PipelineState) -> None:
        debug(f"pipeline: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def run(self) -> GenerationResult:
        """Execute the pipeline.

        Returns:
            The normalized document and every written path.

        Raises:
            SpecgenError: Any failure; the pipeline is left in ``FAILED``.
        """
        if self.state != PipelineState.IDLE:
            raise RuntimeError("A Pipeline instance can only run once")

        try:
            with status("Generating files..."):
                files = self._run()
        except Exception as exc:
            self._transition(PipelineState.FAILED)
            error(f"Generation failed: {exc}")
            raise

        self._transition(PipelineState.DONE)
        assert self.config is not None
        success(f"Generated {len(files)} file(s) under {Path(self.config.root).resolve()}")
        return GenerationResult(source=self.config.source, files=files)

    def _run(self) -> list[Path]:
        self._transition(PipelineState.NORMALIZING)
        config = merge_default_params(self._raw_config)
        self.config = config
        now = datetime.now()
        root = Path(config.root)

        if config.type_only:
            self._transition(PipelineState.WRITING)
            ensure_dir(root)
            return [self._write_declarations(config, root, now)]

        self._transition(PipelineState.GROUPING)
        grouped = group_by_tag(config.source)
        debug(f"Grouped {sum(len(v) for v in grouped.values())} operation(s) into {len(grouped)} tag(s)")

        if self._on_choose_api is not None:
            self._transition(PipelineState.SELECTING)
            grouped = self._on_choose_api(paths=grouped)

        self._transition(PipelineState.COMPILING)
        compile_config = config.model_copy(update=_PIPELINE_CORE_OVERRIDES)
        compiled = {tag: _compile_tag(compile_config, tag, grouped[tag]) for tag in grouped}

        self._transition(PipelineState.ASSEMBLING)
        formatter = format_code(config.lang)
        contents = {
            tag: formatter(assemble(tag, fragments, compile_config, now))
            for tag, fragments in compiled.items()
        }

        self._transition(PipelineState.WRITING)
        ensure_dir(root)
        files = [self._write_declarations(config, root, now)]
        for tag, content in contents.items():
            stem = config.filename(tag) if config.filename else tag
            files.append(write_file(root / f"{stem}.{config.lang}", content))
            debug(f"Wrote {tag} ({len(compiled[tag])} operation(s))")
        return files

    def _write_declarations(self, config: GenConfig, root: Path, now: datetime) -> Path:
        if config.lang == "ts":
            relative, body = INTERFACE_PATH, compile_interfaces(config.source)
        else:
            relative, body = JSDOC_PATH, compile_jsdoc_typedefs(config.source)
        content = format_code(config.lang)(head_code_for(None, config, now) + "\n" + body)
        return write_file(root / relative, content)


def _compile_tag(
    config: GenConfig, tag: str, paths: list[ParsedPath]
) -> list[CompiledFragment]:
    fragments: list[CompiledFragment] = []
    for parsed in paths:
        try:
            fragments.append(compile_path(config, parsed.url, parsed.method.value))
        except CompileError as exc:
            exc.tag = tag
            raise
    return fragments


def generate(
    config: Union[GenConfig, dict[str, Any], str],
    on_choose_api: Optional[ChooseApiHook] = None,
) -> GenerationResult:
    """Merge *config*, run a :class:`Pipeline`, and return its result."""
    return Pipeline(config, on_choose_api=on_choose_api).run()
