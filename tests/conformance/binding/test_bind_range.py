"""
Conformance: Value Binding - explicit formats, rounding and range limits
Reference: Dynamic Type Binding, bind
"""
import pytest


# Each test case is a tuple: (description, source, expected_outcome)
# expected_outcome is "valid", "valid: NAME=<values>" or "error: <description>"

CASES = [
    ("exact_values", "const X : sfix<1, 4> = [0.5, -0.8125]", "valid: X=0.5,-0.8125"),
    ("rounds_to_nearest", "const X : sfix<1, 4> = [0.3]", "valid: X=0.3125"),
    ("ties_round_up", "const X : sfix<2, 1> = [0.25, -0.25]", "valid: X=0.5,0.0"),
    ("upper_bound_inclusive", "const X : ufix<1, 2> = [2.0]", "valid: X=2.0"),
    ("lower_bound_inclusive", "const X : sfix<1, 2> = [-2.0]", "valid: X=-2.0"),
    ("above_range", "const X : ufix<1, 2> = [2.5]", "error: outside the range"),
    ("below_signed_range", "const X : sfix<1, 2> = [-2.5]", "error: outside the range"),
    ("negative_into_unsigned", "const X : ufix<1, 2> = [-0.5]", "error: outside the range"),
    ("tiny_negative_rounds_to_zero", "const X : ufix<1, 2> = [-0.1]", "valid: X=0.0"),
    ("preset_q15", "const X : q15 = [0.5, -0.25]", "valid: X=0.5,-0.25"),
    ("preset_q7_rounds", "const X : q7 = [0.3]", "valid: X=0.296875"),
    ("preset_out_of_range", "const X : uq0_8 = [1.5]", "error: outside the range"),
    ("unknown_preset", "const X : q99 = [0.5]", "error: unknown format preset q99"),
    ("zero_width_format", "const X : ufix<0, 0> = [0.0, 1.0]", "valid: X=0.0,1.0"),
    ("scalar_expression", "const A = 0.5 within 0.1\nconst B : sfix<2, 4> = A * 3 - 2", "valid: B=-0.5"),
    ("inferred_samples_bind_exactly", "const W = [1.125, 2.25, 1.3125, 2.75] within 0.001",
     "valid: W=1.125,2.25,1.3125,2.75"),
]


@pytest.mark.parametrize("description,source,expected", CASES, ids=[c[0] for c in CASES])
def test_bind_range(runner, description, source, expected):
    """Bound values are rounded to the format and range-checked."""
    result = runner.validate(source)
    if expected.startswith("valid"):
        assert result.valid, f"Expected valid but got errors: {result.diagnostics}"
        if ":" in expected:
            name, values = expected.removeprefix("valid: ").split("=", 1)
            assert result.values[name] == [float(v) for v in values.split(",")]
    else:
        assert not result.valid, f"Expected error but got valid"
        error_text = expected.removeprefix("error: ")
        assert any(error_text.lower() in d.lower() for d in result.diagnostics), \
            f"Expected '{error_text}' in diagnostics: {result.diagnostics}"
