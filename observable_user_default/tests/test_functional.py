"""
Functional tests for the accessor pipeline.

Each case in test_data/declaration_tests.json names a declaration, its
expected classification, and fragments that must appear in the Swift and
Python output. Cases in test_data/error_tests.json name the error kind the
declaration must be rejected with.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from observable_user_default import ObservableUserDefaultError
from observable_user_default.pipeline import GeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_test_data(file_name):
    """Load test cases from a JSON file in test_data."""
    with open(TEST_DATA_DIR / file_name) as f:
        return json.load(f)


def _generate(declaration, language):
    generator = PipelineGenerator(GeneratorConfig(), language)
    pair = generator.generate_accessors(declaration)
    return f"{pair.getter}\n{pair.setter}"


@pytest.mark.parametrize("test_case", load_test_data("declaration_tests.json"), ids=lambda c: c["name"])
def test_classification(test_case):
    """Strategy, base type and default value match the expectation."""
    result = PipelineGenerator().classify(test_case["declaration"])

    assert result.strategy.value == test_case["strategy"]
    assert result.base_type == test_case["base_type"]
    assert result.default_value_expression == test_case["default"]


@pytest.mark.parametrize("test_case", load_test_data("declaration_tests.json"), ids=lambda c: c["name"])
def test_swift_generation(test_case):
    """Expected fragments appear in the Swift accessors."""
    output = _generate(test_case["declaration"], "swift")
    for expected in test_case.get("expected_swift", []):
        assert expected in output, f"Expected '{expected}' not found in output:\n{output}"


@pytest.mark.parametrize(
    "test_case",
    [case for case in load_test_data("declaration_tests.json") if "expected_python" in case],
    ids=lambda c: c["name"],
)
def test_python_generation(test_case):
    """Expected fragments appear in the Python accessors."""
    output = _generate(test_case["declaration"], "python")
    for expected in test_case["expected_python"]:
        assert expected in output, f"Expected '{expected}' not found in output:\n{output}"


@pytest.mark.parametrize("test_case", load_test_data("error_tests.json"), ids=lambda c: c["name"])
@pytest.mark.parametrize("language", ["swift", "python"])
def test_rejected_declarations(test_case, language):
    """Invalid declarations fail with the expected error kind and no output."""
    with pytest.raises(ObservableUserDefaultError) as exc_info:
        _generate(test_case["declaration"], language)

    assert exc_info.value.kind.value == test_case["error"]
    assert str(exc_info.value) == exc_info.value.kind.description


@pytest.mark.parametrize("test_case", load_test_data("declaration_tests.json"), ids=lambda c: c["name"])
def test_generation_is_deterministic(test_case):
    """Generating twice for the same input gives identical text."""
    for language in ("swift", "python"):
        assert _generate(test_case["declaration"], language) == _generate(test_case["declaration"], language)


if __name__ == "__main__":
    pytest.main([__file__])
