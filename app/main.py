"""FastAPI application entry point."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.score_errors import ScoringError

app = FastAPI(
    title="ValidateAI",
    description="Scores early-stage business ideas against a fixed rubric",
    version="0.1.0",
)


@app.exception_handler(ScoringError)
async def scoring_error_handler(request: Request, exc: ScoringError) -> JSONResponse:
    """Render scoring failures as {"error": message}."""
    return JSONResponse(content={"error": exc.message}, status_code=exc.status_code)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


app.include_router(api_router)
