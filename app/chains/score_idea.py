"""LLM chain for scoring an early-stage business idea.

Validates the request, builds the prompt, calls the model with a strict JSON
schema, then re-validates the reply locally. The provider-side schema is not
trusted on its own.
"""

import logging
import time
import uuid
from typing import Any

from app.core.config import get_settings
from app.core.llm import get_openai_client
from app.core.llm_usage import log_llm_usage
from app.core.logging import get_logger, log_with_context
from app.core.schemas_score import IDEA_SCORE_JSON_SCHEMA, ScoreResult
from app.core.score_errors import EmptyOutputError, ScoringError, UpstreamError
from app.core.score_inputs import build_score_prompt, parse_score_request
from app.core.score_normalizer import (
    apply_iteration_delta,
    normalize_score_output,
    parse_model_json,
)

logger = get_logger(__name__)


SYSTEM_PROMPT = """You are ValidateAI, a strict and realistic evaluator of early-stage business ideas.

Tone rules:
- Be direct, calm and constructive. No hype, no cheerleading.
- Avoid harsh, mocking or dismissive language.
- Focus on clarity, decision-making and actionable next steps.
- Use British English spelling.

Operating assumptions:
- The MVP is built by a solo developer on a small time and budget envelope, unless the idea says otherwise.
- Prefer off-the-shelf hosted APIs (including hosted AI APIs) over custom machine learning.
- Penalise ideas that need a two-sided marketplace, hardware, or a large pre-existing audience to work.

Scoring rubric (integer 1-10):
1-2: Fundamentally broken; no identifiable problem or user.
3-4: Weak and generic; major gaps in demand, audience or differentiation.
5: Viable but unproven; too many unknowns to proceed without validation.
6-7: Viable with a focused niche and a clear execution path.
8-9: Strong signal with evidence of demand and differentiation.
10: Rare, exceptional opportunity with clear pull from the market.

Scoring guardrails:
- If the idea does not specify (a) a clear niche, (b) a concrete acquisition channel and (c) a specific differentiator, cap the score at 5.
- Only give 6+ if the idea states at least one concrete demand signal: an existing audience, a waitlist, pre-sales, customer interviews, or a proven channel.
- Only give 8+ with strong evidence of both demand and differentiation.

Hard output rules:
- Return ONLY valid JSON that matches the schema.
- The verdict MUST start with exactly one label: BUILD, DON'T BUILD, or BUILD ONLY IF.
- If the label is DON'T BUILD, immediately follow it with one sentence starting with: Primary blocker:
- The verdict MUST include the exact heading: Next steps:
- Next steps MUST list exactly 3 actions, formatted as:
  1) ...
  2) ...
  3) ...
- Each next step must be realistically achievable within 7 days.

Content rules:
- Each risk must state what has to be proven, and why or how the idea breaks if it is not.
- Costs / effort must be realistic and proportional to a solo-developer MVP.
- Do NOT invent large teams, custom AI models, or large budgets unless the idea explicitly states them.
"""


def build_score_messages(idea: str) -> list[dict[str, str]]:
    """Build the system + user conversation for one idea."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_score_prompt(idea)},
    ]


async def call_score_model(
    messages: list[dict[str, str]],
    model: str,
    temperature: float | None = None,
    request_id: str | None = None,
) -> str:
    """
    Call the model once with the strict idea-score schema.

    Args:
        messages: System and user messages
        model: Model identifier
        temperature: Optional sampling temperature
        request_id: Correlation ID for logs

    Returns:
        Raw JSON text produced by the model

    Raises:
        UpstreamError: If the call itself fails
        EmptyOutputError: If the reply carries no usable text
    """
    client = get_openai_client()

    kwargs: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "response_format": {"type": "json_schema", "json_schema": IDEA_SCORE_JSON_SCHEMA},
    }
    if temperature is not None:
        kwargs["temperature"] = temperature

    start = time.monotonic()
    try:
        response = await client.chat.completions.create(**kwargs)
    except Exception as e:
        logger.warning(f"Score model call failed: {type(e).__name__}: {e}")
        raise UpstreamError(str(e)) from e

    duration_ms = int((time.monotonic() - start) * 1000)
    log_llm_usage(
        workflow="score_idea",
        model=getattr(response, "model", None) or model,
        usage=getattr(response, "usage", None),
        duration_ms=duration_ms,
        request_id=request_id,
    )

    try:
        raw_text = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        raw_text = None

    if not isinstance(raw_text, str) or not raw_text.strip():
        raise EmptyOutputError()

    return raw_text


async def score_idea(body: Any) -> ScoreResult:
    """
    Score an idea end to end.

    Validator -> prompt builder -> model invoker -> normaliser -> delta.
    No stage calls back into an earlier one and nothing is retried.

    Args:
        body: Untyped request body ({"idea": ..., "previous_score": ...})

    Returns:
        Complete ScoreResult with iteration_delta set when a previous score was given

    Raises:
        ScoringError: Any failure in the taxonomy; nothing partial is returned
    """
    settings = get_settings()
    request_id = str(uuid.uuid4())

    request = parse_score_request(body)

    log_with_context(
        logger,
        logging.INFO,
        "Scoring idea",
        request_id=request_id,
        model=settings.SCORE_MODEL,
        prompt_version=settings.SCORE_PROMPT_VERSION,
        schema_version=settings.SCORE_SCHEMA_VERSION,
        idea_chars=len(request.idea),
        has_previous=request.previous_score is not None,
    )

    try:
        raw_text = await call_score_model(
            build_score_messages(request.idea),
            model=settings.SCORE_MODEL,
            temperature=settings.SCORE_TEMPERATURE,
            request_id=request_id,
        )
        result = normalize_score_output(parse_model_json(raw_text))
    except ScoringError as e:
        log_with_context(
            logger,
            logging.WARNING,
            "Idea scoring failed",
            request_id=request_id,
            error_kind=type(e).__name__,
        )
        raise

    result = apply_iteration_delta(result, request.previous_score)

    log_with_context(
        logger,
        logging.INFO,
        "Idea scored",
        request_id=request_id,
        score=result.score_out_of_10,
        complexity=result.complexity,
        iteration_delta=result.iteration_delta,
    )
    return result
