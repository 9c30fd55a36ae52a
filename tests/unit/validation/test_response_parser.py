"""Tests for LLM reply parsing."""

import pytest

from apps.analyzer.validation.exceptions import ResponseParseError
from apps.analyzer.validation.response_parser import check_analysis_shape, extract_analysis


class TestExtractAnalysis:
    """Tests for extract_analysis."""

    def test_object_inside_prose_and_fence(self, sample_llm_reply: str, sample_analysis: dict) -> None:
        assert extract_analysis(sample_llm_reply) == sample_analysis

    def test_bare_object(self) -> None:
        assert extract_analysis('{"intentions": []}') == {"intentions": []}

    def test_no_braces(self) -> None:
        with pytest.raises(ResponseParseError) as exc_info:
            extract_analysis("Désolé, je ne peux pas répondre.")

        assert str(exc_info.value) == "No JSON found in response"

    def test_greedy_span_spans_two_objects(self) -> None:
        """First "{" to last "}" is decoded as one span."""
        with pytest.raises(ResponseParseError) as exc_info:
            extract_analysis('{"a": 1} and then {"b": 2}')

        assert "Invalid JSON" in str(exc_info.value)

    def test_invalid_json(self) -> None:
        with pytest.raises(ResponseParseError):
            extract_analysis('{"intentions": [,]}')

    def test_trailing_comma_not_repaired(self) -> None:
        with pytest.raises(ResponseParseError):
            extract_analysis('{"intentions": [],}')

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_rejected(self, literal: str) -> None:
        with pytest.raises(ResponseParseError) as exc_info:
            extract_analysis(f'{{"intentions": [], "x": {literal}}}')

        assert str(exc_info.value).startswith("Invalid JSON in response")
        assert literal in str(exc_info.value)

    def test_nan_inside_string_is_kept(self) -> None:
        assert extract_analysis('{"x": "NaN"}') == {"x": "NaN"}


class TestCheckAnalysisShape:
    """Tests for the non-fatal shape check."""

    def test_valid_analysis_has_no_issues(self, sample_analysis: dict) -> None:
        assert check_analysis_shape(sample_analysis) == []

    def test_missing_sections_are_warnings(self) -> None:
        issues = check_analysis_shape({"intentions": []})

        assert issues
        assert all(issue.severity.value == "warning" for issue in issues)
        assert all(issue.code == "ANALYSIS_SHAPE" for issue in issues)

    def test_location_points_to_field(self, sample_analysis: dict) -> None:
        sample_analysis["intentions"][0]["exemples"] = "not a list"

        issues = check_analysis_shape(sample_analysis)

        assert [issue.location for issue in issues] == ["intentions/0/exemples"]
