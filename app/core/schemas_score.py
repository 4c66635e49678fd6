"""Pydantic schemas for idea scoring."""

from typing import Any, Literal

from pydantic import BaseModel, Field

Complexity = Literal["Low", "Medium", "High"]

COMPLEXITY_VALUES: tuple[str, ...] = ("Low", "Medium", "High")


class ScoreRequest(BaseModel):
    """Validated scoring request."""

    idea: str = Field(..., min_length=1, description="Idea description, trimmed")
    previous_score: int | None = Field(
        default=None, ge=1, le=10, description="Score of the previous iteration, if any"
    )


class ScoreResult(BaseModel):
    """Normalised verdict for one idea."""

    score_out_of_10: int = Field(..., ge=1, le=10, description="Overall score")
    complexity: Complexity = Field(..., description="Build complexity for a solo MVP")
    summary: str = Field(..., description="One or two sentence summary")
    risks: list[str] = Field(default_factory=list, description="What must be proven")
    costs_effort: list[str] = Field(default_factory=list, description="MVP-proportional costs")
    verdict: str = Field(..., description="Label, optional primary blocker, and next steps")
    iteration_delta: int | None = Field(
        default=None, description="score_out_of_10 minus the previous score"
    )


class ScoreResponse(BaseModel):
    """Response body for a successful score."""

    result: ScoreResult


class ErrorResponse(BaseModel):
    """Response body for any failure."""

    error: str


# Strict output schema sent to the model. iteration_delta is computed locally
# and is not part of it.
IDEA_SCORE_JSON_SCHEMA: dict[str, Any] = {
    "name": "idea_score",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "score_out_of_10": {"type": "integer", "minimum": 1, "maximum": 10},
            "complexity": {"type": "string", "enum": list(COMPLEXITY_VALUES)},
            "summary": {"type": "string"},
            "risks": {"type": "array", "items": {"type": "string"}},
            "costs_effort": {"type": "array", "items": {"type": "string"}},
            "verdict": {"type": "string"},
        },
        "required": [
            "score_out_of_10",
            "complexity",
            "summary",
            "risks",
            "costs_effort",
            "verdict",
        ],
    },
}
