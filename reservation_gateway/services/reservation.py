from __future__ import annotations

import logging
from decimal import Decimal

from reservation_gateway.clients.backend import BackendClient, path_segment
from reservation_gateway.schemas.healthcare import (
    Appointment,
    Fee,
    ReservationRequest,
    ReservationStatus,
)
from reservation_gateway.services.exceptions import ServiceError
from reservation_gateway.services.payloads import (
    parse_fee_amount,
    to_hospital_reservation,
    to_payment_request,
)

logger = logging.getLogger(__name__)


class ReservationService:
    """Reserves an appointment, looks up its fee and settles the payment.

    Each step needs the previous step's result, so the calls run one after
    the other and the first failure ends the reservation.
    """

    def __init__(
        self,
        hospital_client: BackendClient,
        payment_client: BackendClient,
    ) -> None:
        self._hospitals = hospital_client
        self._payments = payment_client

    async def reserve(
        self, category: str, request: ReservationRequest
    ) -> ReservationStatus:
        logger.info(
            "Reservation requested for %s with %s (%s)",
            request.patient.name,
            request.doctor,
            category,
        )
        appointment = await self._reserve_appointment(category, request)
        fee = await self._fetch_fee(category, request.hospital_id, appointment)
        amount = self._fee_amount(category, appointment, fee)
        return await self._submit_payment(
            category, appointment, amount, request.patient.card_no
        )

    async def _reserve_appointment(
        self, category: str, request: ReservationRequest
    ) -> Appointment:
        path = (
            f"/{path_segment(request.hospital_id)}/categories/"
            f"{path_segment(category)}/reserve"
        )
        try:
            appointment = await self._hospitals.post(
                path, to_hospital_reservation(request), Appointment
            )
        except ServiceError as exc:
            logger.error(
                "Reserving appointment failed (category=%s, doctor=%s, patient=%s): %s",
                category,
                request.doctor,
                request.patient.name,
                exc,
            )
            raise
        logger.debug(
            "Appointment reserved (category=%s, doctor=%s, patient=%s, appointment=%s)",
            category,
            request.doctor,
            request.patient.name,
            appointment.appointment_number,
        )
        return appointment

    async def _fetch_fee(
        self, category: str, hospital_id: str, appointment: Appointment
    ) -> Fee:
        path = (
            f"/{path_segment(hospital_id)}/categories/appointments/"
            f"{appointment.appointment_number}/fee"
        )
        try:
            fee = await self._hospitals.get(path, Fee)
        except ServiceError as exc:
            logger.error(
                "Fee lookup failed (category=%s, doctor=%s, patient=%s, appointment=%s): %s",
                category,
                appointment.doctor.name,
                appointment.patient.name,
                appointment.appointment_number,
                exc,
            )
            raise
        logger.debug(
            "Fee retrieved (category=%s, doctor=%s, patient=%s, appointment=%s, fee=%s)",
            category,
            fee.doctor_name,
            fee.patient_name,
            appointment.appointment_number,
            fee.actual_fee,
        )
        return fee

    def _fee_amount(self, category: str, appointment: Appointment, fee: Fee) -> Decimal:
        try:
            return parse_fee_amount(fee)
        except ServiceError as exc:
            logger.error(
                "Fee amount could not be parsed (category=%s, doctor=%s, patient=%s, appointment=%s): %s",
                category,
                fee.doctor_name,
                fee.patient_name,
                appointment.appointment_number,
                exc,
            )
            raise

    async def _submit_payment(
        self,
        category: str,
        appointment: Appointment,
        amount: Decimal,
        card_number: str,
    ) -> ReservationStatus:
        payment = to_payment_request(appointment, amount, card_number)
        try:
            status = await self._payments.post("/", payment, ReservationStatus)
        except ServiceError as exc:
            logger.error(
                "Payment failed (category=%s, doctor=%s, patient=%s, appointment=%s): %s",
                category,
                appointment.doctor.name,
                appointment.patient.name,
                appointment.appointment_number,
                exc,
            )
            raise
        logger.debug(
            "Payment settled (category=%s, doctor=%s, patient=%s, appointment=%s, status=%s)",
            category,
            status.doctor_name,
            status.patient,
            status.appointment_no,
            status.status,
        )
        return status
