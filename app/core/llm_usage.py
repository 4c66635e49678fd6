"""Token and cost logging for model calls."""

import logging

from app.core.logging import get_logger, log_with_context

logger = get_logger(__name__)

# Pricing per 1M tokens: (input, output)
MODEL_PRICING: dict[str, tuple[float, float]] = {
    "gpt-4.1": (2.0, 8.0),
    "gpt-4.1-mini": (0.40, 1.60),
    "gpt-4.1-nano": (0.10, 0.40),
    "gpt-4o": (2.50, 10.0),
    "gpt-4o-mini": (0.15, 0.60),
}


def estimate_cost(model: str, tokens_input: int, tokens_output: int) -> float:
    """Estimate cost in USD based on model pricing. Unknown models cost $0."""
    pricing = MODEL_PRICING.get(model)
    if not pricing:
        # Dated snapshots, e.g. gpt-4.1-mini-2025-04-14
        for key in sorted(MODEL_PRICING, key=len, reverse=True):
            if model.startswith(f"{key}-"):
                pricing = MODEL_PRICING[key]
                break
    if not pricing:
        logger.warning(f"No pricing found for model '{model}', using $0")
        return 0.0

    input_rate, output_rate = pricing
    cost = (tokens_input * input_rate / 1_000_000) + (tokens_output * output_rate / 1_000_000)
    return round(cost, 6)


def log_llm_usage(
    workflow: str,
    model: str,
    usage: object | None,
    duration_ms: int = 0,
    request_id: str | None = None,
) -> None:
    """
    Log token usage for a completed model call. Fire-and-forget.

    Args:
        workflow: Logical workflow name (e.g. "score_idea")
        model: Model identifier that served the call
        usage: Provider usage object exposing prompt_tokens/completion_tokens
        duration_ms: Wall-clock duration of the call
        request_id: Correlation ID for the request
    """
    try:
        tokens_input = int(getattr(usage, "prompt_tokens", 0) or 0)
        tokens_output = int(getattr(usage, "completion_tokens", 0) or 0)
        cost = estimate_cost(model, tokens_input, tokens_output)

        log_with_context(
            logger,
            logging.INFO,
            f"LLM usage: {workflow}",
            request_id=request_id,
            model=model,
            tokens_input=tokens_input,
            tokens_output=tokens_output,
            estimated_cost_usd=cost,
            duration_ms=duration_ms,
        )
    except Exception as e:
        # Never fail the main operation due to logging
        logger.error(f"Failed to log LLM usage: {e}")
