from fastapi import APIRouter, Depends

from reservation_gateway.dependencies.services import get_reservation_service
from reservation_gateway.encoding import DecimalJSONResponse, model_payload
from reservation_gateway.schemas.healthcare import ReservationRequest, ReservationStatus
from reservation_gateway.services import ReservationService
from reservation_gateway.services.classifier import error_response
from reservation_gateway.services.exceptions import ServiceError

router = APIRouter()


@router.post(
    "/categories/{category}/reserve",
    response_model=ReservationStatus,
    response_class=DecimalJSONResponse,
    responses={404: {"description": "Unknown hospital, doctor, category or appointment"}},
)
async def reserve_appointment(
    category: str,
    req: ReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
):
    try:
        result = await service.reserve(category, req)
    except ServiceError as exc:
        return error_response(exc)
    return DecimalJSONResponse(model_payload(result))
