"""Loading and validation of the format registry (numeric limits and named presets)."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import jsonschema
import yaml

from fixlib.binding.binder import DEFAULT_MAX_TOTAL_BITS
from fixlib.core.errors import ConfigError
from fixlib.core.format import FormatDescriptor
from fixlib.core.inference import DEFAULT_MAX_FRACTIONAL_BITS

logger = logging.getLogger(__name__)

REGISTRY_DIR = Path(__file__).resolve().parent / "registry"
DEFAULT_REGISTRY_PATH = REGISTRY_DIR / "formats.yaml"
SCHEMA_PATH = REGISTRY_DIR / "schema.json"

# Preset names may not shadow words of the constant language.
RESERVED_NAMES = frozenset({"const", "program", "within", "sfix", "ufix"})


@dataclass(frozen=True)
class FixConfig:
    """Validated contents of a format registry file."""

    max_fractional_bits: int = DEFAULT_MAX_FRACTIONAL_BITS
    max_total_bits: int = DEFAULT_MAX_TOTAL_BITS
    formats: Mapping[str, FormatDescriptor] = field(default_factory=lambda: MappingProxyType({}))
    source: Path | None = None

    def preset(self, name: str) -> FormatDescriptor | None:
        """Look up a named format preset."""
        return self.formats.get(name)


def load_schema() -> dict:
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def validate_registry(data: Any, schema: dict | None = None) -> list[str]:
    """Validate parsed registry *data*. Returns a list of problems (empty if valid)."""
    validator = jsonschema.Draft7Validator(schema if schema is not None else load_schema())
    problems = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
        where = " -> ".join(str(p) for p in error.path)
        problems.append(f"{where}: {error.message}" if where else error.message)
    if problems:
        return problems

    max_total_bits = data["binding"]["max_total_bits"]
    for name, preset in data["formats"].items():
        if name in RESERVED_NAMES:
            problems.append(f"formats -> {name}: name is reserved")
        width = int(preset["signed"]) + preset["integer_bits"] + preset["fractional_bits"]
        if width > max_total_bits:
            problems.append(
                f"formats -> {name}: width {width} exceeds binding.max_total_bits {max_total_bits}"
            )
    return problems


def load_config(path: str | Path | None = None) -> FixConfig:
    """
    Load a format registry.

    Args:
        path: YAML registry file. The packaged registry is used when omitted.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or fails validation.
    """
    registry_path = Path(path) if path is not None else DEFAULT_REGISTRY_PATH
    try:
        with open(registry_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Format registry not found: {registry_path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {registry_path}: {e}") from e

    problems = validate_registry(data)
    if problems:
        raise ConfigError(f"Invalid format registry {registry_path}", problems)

    formats = {
        name: FormatDescriptor(preset["signed"], preset["integer_bits"], preset["fractional_bits"])
        for name, preset in data["formats"].items()
    }
    logger.debug("Loaded %d format presets from %s", len(formats), registry_path)
    return FixConfig(
        max_fractional_bits=data["inference"]["max_fractional_bits"],
        max_total_bits=data["binding"]["max_total_bits"],
        formats=MappingProxyType(formats),
        source=registry_path,
    )
