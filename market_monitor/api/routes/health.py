"""Health check endpoint."""
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.base import BaseScheduler
from fastapi import APIRouter

from market_monitor.api.dependencies import get_connection
from market_monitor.api.schemas import HealthResponse

router = APIRouter()

# Scheduler registered by the application lifespan
job_scheduler: Optional[BaseScheduler] = None


def set_health_dependencies(scheduler: BaseScheduler) -> None:
    global job_scheduler
    job_scheduler = scheduler


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Report database availability and the number of scheduled jobs."""
    try:
        database_available = get_connection().is_available()
    except RuntimeError:
        database_available = False
    return HealthResponse(
        status="healthy" if database_available else "degraded",
        timestamp=datetime.now().isoformat(),
        database_available=database_available,
        scheduled_jobs=len(job_scheduler.get_jobs()) if job_scheduler else 0,
    )
