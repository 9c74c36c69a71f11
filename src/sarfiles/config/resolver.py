"""Merge configuration sources into a validated model."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import SarfilesConfig

ENV_PREFIX = "SARFILES__"


def resolve_with_precedence(
    *,
    defaults: SarfilesConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> SarfilesConfig:
    """Layer overrides onto ``defaults`` in order: file, environment, CLI.

    Override keys may be nested mappings or dotted paths such as
    ``"scan.recursive"``.

    Raises:
        ConfigError: If an override is malformed or the result fails validation.
    """
    merged = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for label, layer in layers:
        if layer is not None:
            merged = _deep_merge(merged, _expand_dotted(layer, label=label))

    try:
        return SarfilesConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: SarfilesConfig) -> Dict[str, str]:
    """Render ``config`` as ``SARFILES__SECTION__KEY`` environment variables."""
    flat: Dict[str, str] = {}
    for section, fields in config.model_dump(mode="python").items():
        for key, value in fields.items():
            name = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
            if isinstance(value, list):
                flat[name] = yaml.safe_dump(value, default_flow_style=True).strip()
            elif value is None:
                flat[name] = "null"
            else:
                flat[name] = str(value)
    return flat


def _expand_dotted(source: Mapping[str, Any], *, label: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{label.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{label.capitalize()} override keys must be strings.")
        *parents, leaf = key.split(".")
        node = expanded
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigError(f"{label.capitalize()} override for {key} conflicts with {segment}.")
            node = child
        if isinstance(value, MappingABC):
            value = _expand_dotted(value, label=label)
            existing = node.get(leaf)
            if isinstance(existing, dict):
                value = _deep_merge(existing, value)
        node[leaf] = value
    return expanded


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["ENV_PREFIX", "resolve_with_precedence", "flatten_for_env"]
