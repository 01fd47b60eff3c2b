"""Correlation API endpoints for food-symptom analysis."""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Body
from sqlalchemy.orm import Session
from pydantic import BaseModel

from flarefood.api.symptom_categories import category_for
from flarefood.config import settings
from flarefood.database import get_db
from flarefood.services.correlation_service import CorrelationService
from flarefood.services.data import DataAccessError, SqlDataSource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/correlations", tags=["correlations"])


class AnalysisRequest(BaseModel):
    """Request model for running correlation analysis."""

    now: datetime | None = None  # End of the analysis window, defaults to current time
    background: bool = False  # Queue on the worker instead of running inline


def _as_utc(moment: datetime) -> datetime:
    """Analysis windows are computed in UTC; naive times are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def serialize_correlation(correlation) -> dict:
    """JSON view of a CorrelationResult or a stored Correlation row."""
    return {
        "food_id": correlation.food.id,
        "food_name": correlation.food.name,
        "symptom_type": correlation.symptom_type.value,
        "symptom_category": category_for(correlation.symptom_type).value,
        "correlation_coefficient": correlation.correlation_coefficient,
        "p_value": correlation.p_value,
        "sample_size": correlation.sample_size,
        "confidence_interval_lower": correlation.confidence_interval_lower,
        "confidence_interval_upper": correlation.confidence_interval_upper,
        "average_delay_hours": correlation.average_delay_hours,
        "delay_standard_deviation": correlation.delay_standard_deviation,
        "last_calculated": correlation.last_calculated.isoformat(),
        "is_significant": correlation.is_significant,
        "strength": correlation.strength.value,
        "direction": correlation.direction.value,
        "description": correlation.formatted_description,
    }


@router.post("/analyze")
def analyze_correlations(
    request: AnalysisRequest | None = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Run correlation analysis over the trailing window and store the results.

    With background=True the run is queued on the worker and this returns
    immediately.
    """
    request = request or AnalysisRequest()
    now = _as_utc(request.now) if request.now else None

    if request.background:
        from flarefood.workers.correlation_worker import run_correlation_analysis

        run_correlation_analysis.send(now.isoformat() if now else None)
        return {"status": "queued"}

    service = CorrelationService.from_settings(SqlDataSource(db))

    try:
        results = service.run_analysis(now=now)
    except DataAccessError as e:
        logger.error("Correlation analysis failed: %s", e)
        raise HTTPException(status_code=503, detail="Correlation analysis failed, please try again later")

    return {
        "status": "completed",
        "total_correlations": len(results),
        "significant_correlations": sum(1 for r in results if r.is_significant),
        "correlations": [serialize_correlation(r) for r in results],
    }


@router.get("")
def list_correlations(significant: bool = False, db: Session = Depends(get_db)):
    """List stored correlations, optionally only the significant ones."""
    source = SqlDataSource(db)

    try:
        if significant:
            correlations = source.fetch_significant_correlations(settings.significance_threshold)
        else:
            correlations = source.fetch_all_correlations()
    except DataAccessError as e:
        logger.error("Failed to list correlations: %s", e)
        raise HTTPException(status_code=503, detail="Failed to load correlations")

    return {"correlations": [serialize_correlation(c) for c in correlations]}


@router.get("/foods/{food_id}")
def food_correlations(food_id: int, db: Session = Depends(get_db)):
    """Stored correlations for a single food."""
    source = SqlDataSource(db)

    try:
        food = source.fetch_food(food_id)
        if not food:
            raise HTTPException(status_code=404, detail="Food not found")
        correlations = source.fetch_correlations_for_food(food_id)
    except DataAccessError as e:
        logger.error("Failed to load correlations for food %s: %s", food_id, e)
        raise HTTPException(status_code=503, detail="Failed to load correlations")

    return {
        "food_id": food.id,
        "food_name": food.name,
        "correlations": [serialize_correlation(c) for c in correlations],
    }
