from fastapi import APIRouter, Depends

from reservation_gateway.dependencies.services import get_routing_service
from reservation_gateway.encoding import DecimalJSONResponse, model_payload
from reservation_gateway.schemas.healthcare import (
    ReservationResponse,
    RoutedReservationRequest,
)
from reservation_gateway.services import RoutingService
from reservation_gateway.services.classifier import error_response
from reservation_gateway.services.exceptions import ServiceError

router = APIRouter()


@router.post(
    "/categories/{category}/reserve",
    response_model=ReservationResponse,
    response_class=DecimalJSONResponse,
    responses={404: {"description": "Unknown hospital, doctor or category"}},
)
async def route_reservation(
    category: str,
    req: RoutedReservationRequest,
    service: RoutingService = Depends(get_routing_service),
):
    try:
        result = await service.reserve(category, req)
    except ServiceError as exc:
        return error_response(exc)
    return DecimalJSONResponse(model_payload(result))
