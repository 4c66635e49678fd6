"""Request validation and prompt input preparation for idea scoring."""

import math
from typing import Any

from app.core.schemas_score import ScoreRequest
from app.core.score_errors import InvalidRequestError

SCORE_MIN = 1
SCORE_MAX = 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    """Round a finite number and clamp it to the 1-10 scale."""
    return max(SCORE_MIN, min(SCORE_MAX, round_half_up(value)))


def to_text(value: Any) -> str:
    """Stringify and trim; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def parse_previous_score(value: Any) -> int | None:
    """
    Accept a previous score only when it is a finite number.

    Booleans, strings, None and anything else are treated as absent rather
    than rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond float range
        return None
    if not math.isfinite(number):
        return None
    return clamp_score(number)


def parse_score_request(body: Any) -> ScoreRequest:
    """
    Extract a ScoreRequest from an untyped request body.

    Args:
        body: Parsed JSON body of any shape

    Returns:
        ScoreRequest with a trimmed idea and a clamped previous score

    Raises:
        InvalidRequestError: If the idea is missing or blank
    """
    if not isinstance(body, dict):
        body = {}

    idea = to_text(body.get("idea"))
    if not idea:
        raise InvalidRequestError()

    return ScoreRequest(
        idea=idea,
        previous_score=parse_previous_score(body.get("previous_score")),
    )


def build_score_prompt(idea: str) -> str:
    """
    Build the user message for idea scoring.

    Args:
        idea: Validated idea text, embedded verbatim

    Returns:
        User prompt naming the fields the reply must contain
    """
    return (
        "Idea:\n"
        f"{idea}\n\n"
        "Return JSON fields:\n"
        "- summary: 1-2 sentences\n"
        "- risks: 3-8 items (each must say what has to be proven, and how the idea breaks if it is not)\n"
        "- costs_effort: 2-6 items, proportional to a solo-developer MVP\n"
        '- complexity: "Low" | "Medium" | "High"\n'
        "- verdict: label + (if DON'T BUILD include 'Primary blocker: ...') + 'Next steps:' + 3 numbered actions\n"
        "- score_out_of_10: integer 1-10\n"
    )
