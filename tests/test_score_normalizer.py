"""Tests for model output normalisation and delta computation."""

import pytest

from app.core.schemas_score import ScoreResult
from app.core.score_errors import (
    IncompleteOutputError,
    InvalidStructuredOutputError,
    MalformedOutputError,
)
from app.core.score_normalizer import (
    apply_iteration_delta,
    normalize_complexity,
    normalize_score,
    normalize_score_fields,
    normalize_score_output,
    normalize_string_list,
    parse_model_json,
    require_complete,
    verdict_label,
)


class TestNormalizeScore:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (7, 7),
            (13, 10),
            (0, 1),
            (-4, 1),
            (6.5, 7),
            ("8", 8),
            (" 3.2 ", 3),
            (True, 1),
        ],
    )
    def test_clamps_into_range(self, value, expected):
        assert normalize_score(value) == expected

    @pytest.mark.parametrize(
        "value", [None, "high", "", [7], {"value": 7}, float("nan"), float("inf"), 10**400, -(10**400)]
    )
    def test_non_finite_defaults_to_five(self, value):
        assert normalize_score(value) == 5


class TestNormalizeComplexity:
    @pytest.mark.parametrize("value", ["Low", "Medium", "High"])
    def test_literals_pass_through(self, value):
        assert normalize_complexity(value) == value

    @pytest.mark.parametrize("value", ["medium", "HIGH", " Low", "Very High", None, 2])
    def test_anything_else_is_medium(self, value):
        assert normalize_complexity(value) == "Medium"


class TestNormalizeStringList:
    def test_trims_and_drops_empty_entries_in_order(self):
        value = ["  first ", "", "   ", "second", None, {"x": 1}, ["nested"], "third"]
        assert normalize_string_list(value) == ["first", "second", "third"]

    def test_scalar_entries_are_stringified(self):
        assert normalize_string_list(["a", 3, 4.5, True, "b"]) == ["a", "3", "4.5", "true", "b"]

    @pytest.mark.parametrize("value", [None, "a risk", {"a": "b"}, 5])
    def test_non_list_is_empty(self, value):
        assert normalize_string_list(value) == []


class TestParseModelJson:
    def test_invalid_json(self):
        with pytest.raises(MalformedOutputError) as exc_info:
            parse_model_json("not json")
        assert exc_info.value.message == "AI returned invalid JSON"

    def test_valid_json(self):
        assert parse_model_json('{"a": 1}') == {"a": 1}


class TestNormalizeScoreOutput:
    def test_round_trip_in_range_output(self, valid_model_output):
        result = normalize_score_output(valid_model_output)

        assert result.score_out_of_10 == valid_model_output["score_out_of_10"]
        assert result.complexity == valid_model_output["complexity"]
        assert result.summary == valid_model_output["summary"]
        assert result.risks == valid_model_output["risks"]
        assert result.costs_effort == valid_model_output["costs_effort"]
        assert result.verdict == valid_model_output["verdict"]
        assert result.iteration_delta is None

    def test_trims_text_fields(self, valid_model_output):
        valid_model_output["summary"] = "  Padded summary.  "
        valid_model_output["verdict"] = "\nBUILD\nNext steps:\n1) a\n2) b\n3) c  "
        result = normalize_score_output(valid_model_output)
        assert result.summary == "Padded summary."
        assert result.verdict.startswith("BUILD")
        assert not result.verdict.endswith(" ")

    def test_out_of_range_fields_are_corrected_not_rejected(self, valid_model_output):
        valid_model_output.update(score_out_of_10=13, complexity="medium", risks="none")
        result = normalize_score_output(valid_model_output)
        assert result.score_out_of_10 == 10
        assert result.complexity == "Medium"
        assert result.risks == []

    def test_missing_score_defaults_to_five(self, valid_model_output):
        del valid_model_output["score_out_of_10"]
        assert normalize_score_output(valid_model_output).score_out_of_10 == 5

    @pytest.mark.parametrize("parsed", [[1, 2], "text", 7, None, True])
    def test_non_object_is_rejected(self, parsed):
        with pytest.raises(InvalidStructuredOutputError) as exc_info:
            normalize_score_output(parsed)
        assert exc_info.value.message == "AI returned invalid structured output"

    @pytest.mark.parametrize("field", ["summary", "verdict"])
    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_essential_text_is_incomplete(self, valid_model_output, field, value):
        valid_model_output[field] = value
        with pytest.raises(IncompleteOutputError) as exc_info:
            normalize_score_output(valid_model_output)
        assert exc_info.value.message == "AI returned incomplete structured output"

    def test_missing_summary_key_is_incomplete(self, valid_model_output):
        del valid_model_output["summary"]
        with pytest.raises(IncompleteOutputError):
            normalize_score_output(valid_model_output)

    def test_field_pass_does_not_reject_empty_text(self):
        result = normalize_score_fields({})
        assert result.summary == ""
        assert result.verdict == ""
        assert result.score_out_of_10 == 5
        assert result.complexity == "Medium"
        with pytest.raises(IncompleteOutputError):
            require_complete(result)

    def test_normalising_twice_is_a_no_op(self, valid_model_output):
        valid_model_output.update(score_out_of_10=0.4, complexity="nope", risks=[" a ", ""])
        once = normalize_score_output(valid_model_output)
        twice = normalize_score_output(once.model_dump())
        assert twice == once

    def test_result_is_a_validated_model(self, valid_model_output):
        result = normalize_score_output(valid_model_output)
        assert isinstance(result, ScoreResult)
        assert ScoreResult.model_validate(result.model_dump()) == result


class TestIterationDelta:
    @pytest.mark.parametrize("score, previous, delta", [(7, 4, 3), (3, 8, -5), (6, 6, 0)])
    def test_delta_is_exact(self, valid_model_output, score, previous, delta):
        valid_model_output["score_out_of_10"] = score
        result = apply_iteration_delta(normalize_score_output(valid_model_output), previous)
        assert result.iteration_delta == delta

    def test_no_previous_score_means_null_delta(self, valid_model_output):
        result = apply_iteration_delta(normalize_score_output(valid_model_output), None)
        assert result.iteration_delta is None


class TestVerdictLabel:
    @pytest.mark.parametrize(
        "verdict, label",
        [
            ("BUILD. Next steps: ...", "BUILD"),
            ("BUILD ONLY IF you can pre-sell", "BUILD ONLY IF"),
            ("DON'T BUILD. Primary blocker: no buyer.", "DON'T BUILD"),
            ("dont build this", "DON'T BUILD"),
            ("  build only if ...", "BUILD ONLY IF"),
            ("Maybe later", None),
            ("", None),
            (None, None),
        ],
    )
    def test_labels(self, verdict, label):
        assert verdict_label(verdict) == label
