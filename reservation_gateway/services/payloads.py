"""Builders for the bodies sent to each downstream service.

The card number captured on the inbound patient only ever reaches the
payment call; hospital calls receive the plain patient record.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from reservation_gateway.schemas.healthcare import (
    Appointment,
    Fee,
    HospitalReservation,
    Patient,
    PaymentPatient,
    PaymentRequest,
    ReservationRequest,
    RoutedReservationRequest,
)
from reservation_gateway.services.exceptions import FeeParseError


def _plain_patient(patient: Patient) -> Patient:
    if isinstance(patient, PaymentPatient):
        return patient.without_card()
    return patient


def to_hospital_reservation(
    request: ReservationRequest | RoutedReservationRequest,
) -> HospitalReservation:
    return HospitalReservation(
        patient=_plain_patient(request.patient),
        doctor=request.doctor,
        hospital=request.hospital,
        appointment_date=request.appointment_date,
    )


def parse_fee_amount(fee: Fee) -> Decimal:
    """Return the fee quoted by the hospital as a Decimal."""

    try:
        amount = Decimal(fee.actual_fee.strip())
    except InvalidOperation as exc:
        raise FeeParseError(fee.actual_fee, cause=exc) from exc
    if not amount.is_finite():
        raise FeeParseError(fee.actual_fee)
    return amount


def to_payment_request(
    appointment: Appointment, amount: Decimal, card_number: str
) -> PaymentRequest:
    return PaymentRequest(
        appointment_number=appointment.appointment_number,
        doctor=appointment.doctor,
        patient=_plain_patient(appointment.patient),
        fee=amount,
        confirmed=False,
        card_number=card_number,
    )
