"""Chart object endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends

from market_monitor.api.dependencies import get_chart_object_service
from market_monitor.api.schemas import HorizontalLineRequest
from market_monitor.domain.entities import StockExchange
from market_monitor.domain.results import WebServiceResult
from market_monitor.services.chart_object_service import ChartObjectService

router = APIRouter(prefix="/api/v1/chart-objects", tags=["chart-objects"])


@router.get("/horizontal-lines", response_model=WebServiceResult)
def get_horizontal_lines(
    symbol: Optional[str] = None,
    stock_exchange: Optional[StockExchange] = None,
    service: ChartObjectService = Depends(get_chart_object_service)
) -> WebServiceResult:
    return service.get_horizontal_lines(symbol, stock_exchange)


@router.get("/horizontal-lines/{line_id}", response_model=WebServiceResult)
def get_horizontal_line(
    line_id: int,
    service: ChartObjectService = Depends(get_chart_object_service)
) -> WebServiceResult:
    return service.get_horizontal_line(line_id)


@router.post("/horizontal-lines", response_model=WebServiceResult)
def add_horizontal_line(
    request: HorizontalLineRequest,
    service: ChartObjectService = Depends(get_chart_object_service)
) -> WebServiceResult:
    return service.add_horizontal_line(request.to_entity())


@router.put("/horizontal-lines", response_model=WebServiceResult)
def update_horizontal_line(
    request: HorizontalLineRequest,
    service: ChartObjectService = Depends(get_chart_object_service)
) -> WebServiceResult:
    return service.update_horizontal_line(request.to_entity())


@router.delete("/horizontal-lines/{line_id}", response_model=WebServiceResult)
def delete_horizontal_line(
    line_id: int,
    service: ChartObjectService = Depends(get_chart_object_service)
) -> WebServiceResult:
    return service.delete_horizontal_line(line_id)
