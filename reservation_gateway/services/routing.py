from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping

from reservation_gateway.clients.backend import BackendClient, path_segment
from reservation_gateway.schemas.healthcare import (
    ReservationResponse,
    RoutedReservationRequest,
)
from reservation_gateway.services.exceptions import ServiceError
from reservation_gateway.services.payloads import to_hospital_reservation

logger = logging.getLogger(__name__)


class Hospital(str, Enum):
    GRAND_OAK = "grandoaks"
    CLEMENCY = "clemency"
    PINE_VALLEY = "pinevalley"


_ROUTES = {
    "grandoaks": Hospital.GRAND_OAK,
    "clemency": Hospital.CLEMENCY,
}


def select_hospital(hospital_id: str) -> Hospital:
    """Pick the backend for a hospital id.

    Only exact matches on the known ids are routed by name; every other id,
    including unknown ones, goes to Pine Valley.
    """

    return _ROUTES.get(hospital_id, Hospital.PINE_VALLEY)


class RoutingService:
    """Forwards a reservation to the hospital named in the request."""

    def __init__(self, clients: Mapping[Hospital, BackendClient]) -> None:
        missing = [hospital.value for hospital in Hospital if hospital not in clients]
        if missing:
            raise ValueError(f"No backend client configured for: {', '.join(missing)}")
        self._clients = dict(clients)

    async def reserve(
        self, category: str, request: RoutedReservationRequest
    ) -> ReservationResponse:
        hospital = select_hospital(request.hospital_id)
        client = self._clients[hospital]
        logger.debug(
            "Routing hospital id %r to %s (%s)",
            request.hospital_id,
            hospital.value,
            client.base_url,
        )
        path = f"/categories/{path_segment(category)}/reserve"
        try:
            appointment = await client.post(
                path, to_hospital_reservation(request), ReservationResponse
            )
        except ServiceError as exc:
            logger.error(
                "Reservation via %s failed (category=%s, doctor=%s, patient=%s): %s",
                hospital.value,
                category,
                request.doctor,
                request.patient.name,
                exc,
            )
            raise
        logger.debug(
            "Appointment reserved via %s (category=%s, doctor=%s, patient=%s, appointment=%s)",
            hospital.value,
            category,
            request.doctor,
            request.patient.name,
            appointment.appointment_number,
        )
        return appointment
