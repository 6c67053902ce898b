"""Breadth statistic endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends

from market_monitor.api.dependencies import get_statistic_service
from market_monitor.domain.entities import InstrumentType
from market_monitor.domain.results import WebServiceResult
from market_monitor.services.statistic_service import StatisticService

router = APIRouter(prefix="/api/v1", tags=["statistics"])


@router.get("/statistics", response_model=WebServiceResult)
def get_statistics(
    instrument_type: InstrumentType = InstrumentType.STOCK,
    sector_id: Optional[int] = None,
    industry_group_id: Optional[int] = None,
    service: StatisticService = Depends(get_statistic_service)
) -> WebServiceResult:
    """Get the statistics of an instrument type, newest first."""
    return service.get_statistics(instrument_type, sector_id, industry_group_id)


@router.get("/statistics/{statistic_id}", response_model=WebServiceResult)
def get_statistic(
    statistic_id: int,
    service: StatisticService = Depends(get_statistic_service)
) -> WebServiceResult:
    """Get a single statistic."""
    return service.get_statistic(statistic_id)


@router.post("/statistics/update", response_model=WebServiceResult)
def update_statistics(
    instrument_type: InstrumentType = InstrumentType.STOCK,
    service: StatisticService = Depends(get_statistic_service)
) -> WebServiceResult:
    """Recalculate the statistics of an instrument type."""
    return service.update_statistics(instrument_type)
