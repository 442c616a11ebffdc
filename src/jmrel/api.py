"""
FastAPI backend for the Jelinski-Moranda estimator.

Provides REST API endpoints for:
- Health check
- Parameter estimation from a list of intervals or free-form text

Run with: uvicorn jmrel.api:app --reload --port 8000
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
import warnings

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import __version__
from .data import EmptySequenceError, IntervalSequence
from .model import JelinskiMorandaModel, json_time
from .parsing import parse_intervals
from .solver import FallbackEstimateWarning, SolverConfig


app = FastAPI(
    title="Jelinski-Moranda Reliability API",
    description="Software reliability estimation from inter-failure intervals",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================================
# Pydantic Models
# ============================================================================

class SolverSettings(BaseModel):
    """Overrides for the root finder configuration."""

    tolerance: float = Field(default=1e-9, gt=0, description="|f(B)| considered zero")
    max_bisections: int = Field(default=200, ge=1, le=10000)
    max_expansions: int = Field(default=1000, ge=0, le=100000)


class EstimateRequest(BaseModel):
    """Request for a parameter estimate. Give either intervals or text."""

    intervals: Optional[List[float]] = Field(default=None, description="Inter-failure intervals")
    text: Optional[str] = Field(default=None, description="Free-form text with the intervals")
    cumulative: bool = Field(default=False, description="Values are cumulative failure times")
    steps: int = Field(default=5, ge=0, le=1000, description="Future intervals to forecast")
    solver: SolverSettings = Field(default_factory=SolverSettings)


class EstimateResponse(BaseModel):
    """Estimate with forecast."""

    estimate: Dict[str, Any]
    predicted_intervals: List[Dict[str, Any]]
    summary: str


# ============================================================================
# Helpers
# ============================================================================

def _build_sequence(request: EstimateRequest) -> IntervalSequence:
    if request.intervals:
        if request.cumulative:
            return IntervalSequence.from_cumulative_times(request.intervals)
        return IntervalSequence(request.intervals)
    return parse_intervals(request.text, cumulative=request.cumulative)


def _solver_config(settings: SolverSettings) -> SolverConfig:
    return SolverConfig(
        tolerance=settings.tolerance,
        max_bisections=settings.max_bisections,
        max_expansions=settings.max_expansions,
    )


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
    }


@app.post("/api/estimate", response_model=EstimateResponse)
async def estimate(request: EstimateRequest):
    """
    Fit the model and return parameters, predictions and a forecast.

    Predicted times, forecast included, are reported as ``{value, never,
    defined}`` objects; an infinite time is ``never: true``.
    """
    try:
        seq = _build_sequence(request)
    except EmptySequenceError as e:
        raise HTTPException(status_code=422, detail=str(e))

    model = JelinskiMorandaModel(_solver_config(request.solver))
    # The fallback message is carried in the response instead
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", FallbackEstimateWarning)
        result = model.fit(seq)

    forecast = model.predict_intervals(request.steps)

    return EstimateResponse(
        estimate=result.to_dict(),
        predicted_intervals=[json_time(x) for x in forecast],
        summary=result.summary(),
    )
