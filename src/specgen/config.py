"""Option resolution and default merging.

Generator options come from four layers. Precedence (high to low):

1. CLI flags
2. Environment variables (``SPECGEN_SOURCE``, ``SPECGEN_ROOT``,
   ``SPECGEN_LANG``, ``SPECGEN_MOCK_ROOT``)
3. Project config (``./specgen.json``)
4. Defaults declared on :class:`~specgen.models.GenConfig` /
   :class:`~specgen.models.MockConfig`

:func:`resolve_options` merges layers 1-3 into a plain dict;
:func:`merge_default_params` and :func:`merge_default_mock_config` load and
normalize the document and apply the model defaults, producing the frozen
configuration every pipeline stage reads.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import pydantic

from specgen.exceptions import ConfigError
from specgen.models import GenConfig, MockConfig
from specgen.parser.loader import is_url, load_spec
from specgen.parser.normalizer import normalize_source

_PROJECT_CONFIG_FILENAME = "specgen.json"

_ENV_OPTIONS: dict[str, str] = {
    "SPECGEN_SOURCE": "source",
    "SPECGEN_ROOT": "root",
    "SPECGEN_LANG": "lang",
    "SPECGEN_MOCK_ROOT": "mock_root",
}

# Keys accepted in camelCase in ``specgen.json``.
_CAMEL_KEYS: dict[str, str] = {
    "typeOnly": "type_only",
    "customImportCode": "custom_import_code",
    "jsDoc": "js_doc",
    "mockRoot": "mock_root",
}


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./specgen.json``.

    camelCase keys (``typeOnly``, ``customImportCode``, ``jsDoc``,
    ``mockRoot``) are accepted and converted to their snake_case names.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected an object")
    return _canonical_keys(data)


# --- Precedence resolution ---


def resolve_options(cli_options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Resolve options through the precedence chain.

    ``None`` values in *cli_options* mean "not given on the command line" and
    do not override lower layers.

    Returns:
        A flat options dict suitable for :func:`merge_default_params` or
        :func:`merge_default_mock_config`.
    """
    options: dict[str, Any] = {}

    # 3. Project config
    project = load_project_config()
    if project:
        options.update(project)

    # 2. Environment variables
    for env_var, key in _ENV_OPTIONS.items():
        value = os.environ.get(env_var)
        if value:
            options[key] = value

    # 1. CLI flags
    for key, value in (cli_options or {}).items():
        if value is not None:
            options[key] = value

    return options


# --- Default merging ---


def _load_source(options: dict[str, Any]) -> dict[str, Any]:
    """Replace a string ``source`` with the loaded, normalized document."""
    source = options.get("source")
    if source is None:
        raise ConfigError("No source given. Pass --source or set SPECGEN_SOURCE.")

    merged = dict(options)
    if isinstance(source, (str, Path)):
        source = str(source)
        if is_url(source):
            merged.setdefault("source_url", source)
        source = load_spec(source)
    elif not isinstance(source, dict):
        raise ConfigError(f"Unsupported source type: {type(source).__name__}")

    merged["source"] = normalize_source(source)
    return merged


def _canonical_keys(options: dict[str, Any]) -> dict[str, Any]:
    return {_CAMEL_KEYS.get(key, key): value for key, value in options.items()}


def options_for(model: type, options: dict[str, Any]) -> dict[str, Any]:
    """Drop the options that only the other configuration model accepts.

    :func:`resolve_options` returns one dict for every command, so
    ``mock_root`` from ``specgen.json`` reaches ``gen`` and ``lang`` reaches
    ``mock``. Keys neither model knows are kept, so a typo still fails in
    :func:`merge_default_params` / :func:`merge_default_mock_config`.
    """
    other = MockConfig if model is GenConfig else GenConfig
    foreign = set(other.model_fields) - set(model.model_fields)
    return {
        key: value
        for key, value in _canonical_keys(options).items()
        if key not in foreign
    }


def _build(model: type, options: dict[str, Any]) -> Any:
    unknown = sorted(key for key in options if key not in model.model_fields)
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
    try:
        return model(**options)
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def merge_default_params(config: Union[GenConfig, dict[str, Any], str]) -> GenConfig:
    """Merge user options over defaults into a frozen :class:`GenConfig`.

    Args:
        config: A ``GenConfig``, an options dict, or a bare source (URL or
            file path). Dict keys may use the camelCase names
            (``typeOnly``, ``customImportCode``, ``jsDoc``).

    Returns:
        The effective configuration with a normalized ``source``.

    Raises:
        ConfigError: If an option is unknown or invalid, or no source is
            given.
        SpecParseError: If the document cannot be loaded.
        ValidationError: If the document is not Swagger 2.0.
    """
    if isinstance(config, GenConfig):
        options = config.model_dump()
        options["filename"] = config.filename
    elif isinstance(config, str):
        options = {"source": config}
    else:
        options = _canonical_keys(config)
    return _build(GenConfig, _load_source(options))


def merge_default_mock_config(config: Union[MockConfig, dict[str, Any], str]) -> MockConfig:
    """Merge user options over defaults into a frozen :class:`MockConfig`.

    Accepts the same shapes as :func:`merge_default_params`; ``mockRoot``
    is accepted for ``mock_root``.
    """
    if isinstance(config, MockConfig):
        options = config.model_dump()
    elif isinstance(config, str):
        options = {"source": config}
    else:
        options = _canonical_keys(config)
    return _build(MockConfig, _load_source(options))
