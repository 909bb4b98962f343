"""
Conformance: Format Registry well-formedness and cross-reference checks.
Reference: Format Registry - libs/fixlib/fixlib/registry/formats.yaml
"""
import json
import re
from pathlib import Path

import jsonschema
import pytest
import yaml

REPO_ROOT = Path(__file__).resolve().parents[3]
REGISTRY_DIR = REPO_ROOT / "libs" / "fixlib" / "fixlib" / "registry"
REGISTRY_PATH = REGISTRY_DIR / "formats.yaml"
SCHEMA_PATH = REGISTRY_DIR / "schema.json"
EXAMPLES_DIR = REPO_ROOT / "examples"


@pytest.fixture(scope="module")
def registry():
    with open(REGISTRY_PATH) as f:
        return yaml.safe_load(f)


@pytest.fixture(scope="module")
def schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)


@pytest.fixture(scope="module")
def example_presets():
    """Extract preset names used as formats in example .fx programs."""
    presets = set()
    pattern = re.compile(r"^\s*const\s+\w+\s*:\s*([A-Za-z_]\w*)\s*=")
    for fx_file in EXAMPLES_DIR.glob("*.fx"):
        with open(fx_file) as f:
            for line in f:
                m = pattern.match(line)
                if m and m.group(1) not in ("sfix", "ufix"):
                    presets.add(m.group(1))
    return presets


# ---------------------------------------------------------------------------
# Structure tests
# ---------------------------------------------------------------------------

def test_registry_loads(registry):
    """Registry YAML parses successfully."""
    assert registry is not None
    assert "version" in registry
    assert "formats" in registry


def test_registry_version_format(registry):
    """Version follows MAJOR.MINOR format."""
    assert re.match(r"^\d+\.\d+$", registry["version"])


def test_registry_has_presets(registry):
    """Registry contains at least one preset."""
    assert len(registry["formats"]) > 0


def test_search_bound_is_double_significand(registry):
    """The fractional-width search stops at the significand width of a double."""
    assert registry["inference"]["max_fractional_bits"] == 52


# ---------------------------------------------------------------------------
# Schema validation
# ---------------------------------------------------------------------------

def test_schema_validation(registry, schema):
    """Registry validates against JSON Schema."""
    jsonschema.validate(registry, schema)


def test_schema_is_draft7(schema):
    jsonschema.Draft7Validator.check_schema(schema)


# ---------------------------------------------------------------------------
# Per-preset structural tests
# ---------------------------------------------------------------------------

RESERVED = {"program", "const", "within", "sfix", "ufix"}


@pytest.fixture(scope="module")
def preset_items(registry):
    return list(registry["formats"].items())


def test_no_reserved_preset_names(preset_items):
    for name, _ in preset_items:
        assert name not in RESERVED, f"{name}: reserved word used as preset name"


def test_all_presets_fit_binder_limit(registry, preset_items):
    limit = registry["binding"]["max_total_bits"]
    for name, defn in preset_items:
        width = int(defn["signed"]) + defn["integer_bits"] + defn["fractional_bits"]
        assert width <= limit, f"{name}: width {width} exceeds {limit}"


def test_all_presets_have_descriptions(preset_items):
    for name, defn in preset_items:
        assert defn.get("description", "").strip(), f"{name}: missing description"


def test_q_presets_are_signed_fractions(preset_items):
    """qN presets are signed with no integer bits and N fractional bits."""
    for name, defn in preset_items:
        m = re.fullmatch(r"q(\d+)", name)
        if m:
            assert defn["signed"] is True, f"{name}: should be signed"
            assert defn["integer_bits"] == 0, f"{name}: should have no integer bits"
            assert defn["fractional_bits"] == int(m.group(1)), f"{name}: wrong fractional bits"


def test_preset_widths_are_whole_bytes(preset_items):
    for name, defn in preset_items:
        width = int(defn["signed"]) + defn["integer_bits"] + defn["fractional_bits"]
        assert width % 8 == 0, f"{name}: width {width} is not a whole number of bytes"


# ---------------------------------------------------------------------------
# Cross-reference tests
# ---------------------------------------------------------------------------

def test_example_presets_in_registry(registry, example_presets):
    """Every preset used in example .fx programs has a registry entry."""
    for preset in example_presets:
        assert preset in registry["formats"], \
            f"Preset '{preset}' used in examples but missing from registry"


@pytest.mark.parametrize("path", sorted(EXAMPLES_DIR.glob("*.fx")), ids=lambda p: p.name)
def test_examples_compile(runner, path):
    """Example programs compile against the packaged registry."""
    result = runner.validate(path.read_text())
    assert result.valid, f"{path.name}: {result.diagnostics}"
