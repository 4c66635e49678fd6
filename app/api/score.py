"""API endpoint for idea scoring."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.chains.score_idea import score_idea
from app.core.logging import get_logger
from app.core.schemas_score import ErrorResponse, ScoreResponse
from app.core.score_errors import ScoringError

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/score",
    response_model=ScoreResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def post_score(request: Request):
    """
    Score an idea against the fixed rubric.

    Body: ``{"idea": str, "previous_score"?: number}``. The body is read
    untyped: an unparseable body is treated as empty and fails as a missing
    idea rather than a schema error.

    Returns:
        ScoreResponse wrapping the normalised result

    Raises:
        ScoringError: Rendered as {"error": ...} by the app's exception handler
    """
    try:
        body = await request.json()
    except ValueError:
        body = {}

    try:
        result = await score_idea(body)
    except ScoringError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while scoring idea")
        return JSONResponse(status_code=500, content={"error": str(e) or "Score failed"})

    return ScoreResponse(result=result)
