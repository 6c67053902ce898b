"""Price alert endpoints."""
from fastapi import APIRouter, Depends

from market_monitor.api.dependencies import get_price_alert_service
from market_monitor.api.schemas import PriceAlertRequest
from market_monitor.domain.entities import ConfirmationStatus, TriggerStatus
from market_monitor.domain.results import WebServiceResult
from market_monitor.services.price_alert_service import PriceAlertService

router = APIRouter(prefix="/api/v1", tags=["price-alerts"])


@router.get("/price-alerts", response_model=WebServiceResult)
def get_price_alerts(
    trigger_status: TriggerStatus = TriggerStatus.ALL,
    confirmation_status: ConfirmationStatus = ConfirmationStatus.ALL,
    service: PriceAlertService = Depends(get_price_alert_service)
) -> WebServiceResult:
    return service.get_price_alerts(trigger_status, confirmation_status)


@router.get("/price-alerts/{alert_id}", response_model=WebServiceResult)
def get_price_alert(
    alert_id: int,
    service: PriceAlertService = Depends(get_price_alert_service)
) -> WebServiceResult:
    return service.get_price_alert(alert_id)


@router.post("/price-alerts", response_model=WebServiceResult)
def add_price_alert(
    request: PriceAlertRequest,
    service: PriceAlertService = Depends(get_price_alert_service)
) -> WebServiceResult:
    return service.add_price_alert(request.to_entity())


@router.put("/price-alerts", response_model=WebServiceResult)
def update_price_alert(
    request: PriceAlertRequest,
    service: PriceAlertService = Depends(get_price_alert_service)
) -> WebServiceResult:
    return service.update_price_alert(request.to_entity())


@router.delete("/price-alerts/{alert_id}", response_model=WebServiceResult)
def delete_price_alert(
    alert_id: int,
    service: PriceAlertService = Depends(get_price_alert_service)
) -> WebServiceResult:
    return service.delete_price_alert(alert_id)
