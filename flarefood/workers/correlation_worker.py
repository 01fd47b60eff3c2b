"""
Dramatiq worker for running correlation analysis off the request path.

A run is all-or-nothing: results are only written once every food and
symptom type pair has been evaluated.
"""
import logging
from datetime import datetime
from typing import Optional

import dramatiq

# Import broker setup (must be before actor definitions)
from flarefood.workers import redis_broker  # noqa: F401
from flarefood.database import SessionLocal
from flarefood.services.correlation_service import CorrelationService
from flarefood.services.data import SqlDataSource

logger = logging.getLogger(__name__)


@dramatiq.actor(max_retries=2, min_backoff=5000, max_backoff=60000)
def run_correlation_analysis(now: Optional[str] = None):
    """
    Run a full correlation analysis and persist the results.

    Args:
        now: ISO-8601 end of the analysis window, defaults to current time
    """
    db = SessionLocal()

    try:
        service = CorrelationService.from_settings(SqlDataSource(db))
        results = service.run_analysis(now=datetime.fromisoformat(now) if now else None)
        logger.info(
            "Correlation analysis finished: %d results, %d significant",
            len(results),
            sum(1 for r in results if r.is_significant),
        )
        return len(results)
    except Exception:
        logger.exception("Correlation analysis failed")
        raise
    finally:
        db.close()
