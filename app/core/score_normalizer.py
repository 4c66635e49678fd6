"""Normalisation of untrusted model output into a ScoreResult.

Two passes keep defaulting and rejecting apart:

1. ``normalize_score_fields`` clamps or defaults each field and only rejects
   output that is not a JSON object.
2. ``require_complete`` rejects a result whose summary or verdict is empty.
"""

import json
import math
from typing import Any

from app.core.schemas_score import COMPLEXITY_VALUES, ScoreResult
from app.core.score_errors import (
    IncompleteOutputError,
    InvalidStructuredOutputError,
    MalformedOutputError,
)
from app.core.score_inputs import clamp_score, to_text

DEFAULT_SCORE = 5
DEFAULT_COMPLEXITY = "Medium"

VERDICT_LABELS: tuple[tuple[str, str], ...] = (
    ("DON'T BUILD", "DON'T BUILD"),
    ("DONT BUILD", "DON'T BUILD"),
    ("BUILD ONLY IF", "BUILD ONLY IF"),
    ("BUILD", "BUILD"),
)


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def normalize_score(value: Any) -> int:
    """Coerce to 1-10; anything non-finite defaults to 5."""
    number = _to_number(value)
    if not math.isfinite(number):
        return DEFAULT_SCORE
    return clamp_score(number)


def normalize_complexity(value: Any) -> str:
    """Exact enum literals pass through; everything else becomes Medium."""
    if isinstance(value, str) and value in COMPLEXITY_VALUES:
        return value
    return DEFAULT_COMPLEXITY


def _list_entry(item: Any) -> str:
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, (str, int, float)):
        return to_text(item)
    # None and nested objects carry no usable text
    return ""


def normalize_string_list(value: Any) -> list[str]:
    """Stringify scalar entries, trim, and drop empties, keeping the original order."""
    if not isinstance(value, list):
        return []
    entries = (_list_entry(item) for item in value)
    return [entry for entry in entries if entry]


def parse_model_json(raw_text: str) -> Any:
    """
    Parse the model's text payload.

    Raises:
        MalformedOutputError: If the text is not valid JSON
    """
    try:
        return json.loads(raw_text)
    except (ValueError, TypeError) as e:
        raise MalformedOutputError() from e


def normalize_score_fields(parsed: Any) -> ScoreResult:
    """
    Field pass: clamp and default every field of the parsed output.

    Args:
        parsed: JSON value returned by the model

    Returns:
        ScoreResult with iteration_delta unset; summary/verdict may be empty

    Raises:
        InvalidStructuredOutputError: If parsed is not a JSON object
    """
    if not isinstance(parsed, dict):
        raise InvalidStructuredOutputError()

    return ScoreResult.model_construct(
        score_out_of_10=normalize_score(parsed.get("score_out_of_10")),
        complexity=normalize_complexity(parsed.get("complexity")),
        summary=to_text(parsed.get("summary")),
        risks=normalize_string_list(parsed.get("risks")),
        costs_effort=normalize_string_list(parsed.get("costs_effort")),
        verdict=to_text(parsed.get("verdict")),
        iteration_delta=None,
    )


def require_complete(result: ScoreResult) -> ScoreResult:
    """
    Terminal gate: reject a result whose essential text is empty.

    Raises:
        IncompleteOutputError: If summary or verdict is empty
    """
    if not result.summary or not result.verdict:
        raise IncompleteOutputError()
    return ScoreResult.model_validate(result.model_dump())


def normalize_score_output(parsed: Any) -> ScoreResult:
    """Run both passes over parsed model output."""
    return require_complete(normalize_score_fields(parsed))


def apply_iteration_delta(result: ScoreResult, previous_score: int | None) -> ScoreResult:
    """Set iteration_delta against the previous score, or None without one."""
    delta = None if previous_score is None else result.score_out_of_10 - previous_score
    return result.model_copy(update={"iteration_delta": delta})


def verdict_label(verdict: str | None) -> str | None:
    """
    Derive the leading verdict label, if any.

    Read-side convenience only: the label is requested by the prompt and is
    never enforced when scoring.
    """
    text = to_text(verdict).upper()
    for prefix, label in VERDICT_LABELS:
        if text.startswith(prefix):
            return label
    return None
