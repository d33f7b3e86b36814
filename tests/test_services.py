import asyncio
from unittest.mock import AsyncMock

import pytest

from reservation_gateway.schemas.healthcare import (
    Appointment,
    Fee,
    HospitalReservation,
    PaymentRequest,
    ReservationRequest,
    ReservationStatus,
    RoutedReservationRequest,
)
from reservation_gateway.services.exceptions import (
    BackendRequestError,
    BackendServiceError,
    FeeParseError,
)
from reservation_gateway.services.reservation import ReservationService
from reservation_gateway.services.routing import (
    Hospital,
    RoutingService,
    select_hospital,
)


def client_stub(name: str = "stub", **methods):
    attrs = {"name": name, "base_url": f"http://{name}.test"}
    attrs.update(methods)
    return type("ClientStub", (), attrs)()


@pytest.fixture
def booked(appointment) -> Appointment:
    return Appointment.model_validate(appointment)


def test_reservation_runs_all_steps_in_order(
    reservation_request, booked, fee, reservation_status
) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    settled = ReservationStatus.model_validate(reservation_status)
    hospital = client_stub(
        "hospital",
        post=AsyncMock(return_value=booked),
        get=AsyncMock(return_value=Fee.model_validate(fee)),
    )
    payment = client_stub("payment", post=AsyncMock(return_value=settled))

    service = ReservationService(hospital, payment)
    response = asyncio.run(service.reserve("surgery", request))

    assert response == settled
    hospital.post.assert_awaited_once_with(
        "/grandoaks/categories/surgery/reserve",
        HospitalReservation(
            patient=request.patient.without_card(),
            doctor=request.doctor,
            hospital=request.hospital,
            appointment_date=request.appointment_date,
        ),
        Appointment,
    )
    hospital.get.assert_awaited_once_with(
        "/grandoaks/categories/appointments/1/fee", Fee
    )
    path, body, model = payment.post.await_args.args
    assert path == "/"
    assert model is ReservationStatus
    assert isinstance(body, PaymentRequest)
    assert body.card_number == reservation_request["patient"]["cardNo"]
    assert body.appointment_number == booked.appointment_number
    assert str(body.fee) == "7000"


def test_reserve_failure_skips_fee_and_payment(reservation_request) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    hospital = client_stub(
        "hospital",
        post=AsyncMock(side_effect=BackendRequestError("unknown doctor", 404)),
        get=AsyncMock(),
    )
    payment = client_stub("payment", post=AsyncMock())

    service = ReservationService(hospital, payment)
    with pytest.raises(BackendRequestError):
        asyncio.run(service.reserve("surgery", request))

    hospital.get.assert_not_awaited()
    payment.post.assert_not_awaited()


def test_fee_failure_skips_payment(reservation_request, booked) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    hospital = client_stub(
        "hospital",
        post=AsyncMock(return_value=booked),
        get=AsyncMock(side_effect=BackendServiceError("fee service down", 503)),
    )
    payment = client_stub("payment", post=AsyncMock())

    service = ReservationService(hospital, payment)
    with pytest.raises(BackendServiceError, match="fee service down"):
        asyncio.run(service.reserve("surgery", request))

    payment.post.assert_not_awaited()


def test_unparseable_fee_skips_payment(reservation_request, booked, fee) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    fee["actualFee"] = "seven thousand"
    hospital = client_stub(
        "hospital",
        post=AsyncMock(return_value=booked),
        get=AsyncMock(return_value=Fee.model_validate(fee)),
    )
    payment = client_stub("payment", post=AsyncMock())

    service = ReservationService(hospital, payment)
    with pytest.raises(FeeParseError):
        asyncio.run(service.reserve("surgery", request))

    payment.post.assert_not_awaited()


def test_payment_failure_is_raised(reservation_request, booked, fee) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    hospital = client_stub(
        "hospital",
        post=AsyncMock(return_value=booked),
        get=AsyncMock(return_value=Fee.model_validate(fee)),
    )
    payment = client_stub(
        "payment",
        post=AsyncMock(side_effect=BackendRequestError("unknown appointment", 404)),
    )

    service = ReservationService(hospital, payment)
    with pytest.raises(BackendRequestError) as excinfo:
        asyncio.run(service.reserve("surgery", request))

    assert excinfo.value.status_code == 404
    payment.post.assert_awaited_once()


def test_failures_are_logged_at_error_level(reservation_request, caplog) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    hospital = client_stub(
        "hospital",
        post=AsyncMock(side_effect=BackendServiceError("connection refused")),
    )
    service = ReservationService(hospital, client_stub("payment"))

    with caplog.at_level("ERROR", logger="reservation_gateway.services.reservation"):
        with pytest.raises(BackendServiceError):
            asyncio.run(service.reserve("surgery", request))

    assert any(
        "thomas collins" in record.getMessage() and "John Doe" in record.getMessage()
        for record in caplog.records
    )


def test_successful_steps_are_traced_at_debug_level(
    reservation_request, booked, fee, reservation_status, caplog
) -> None:
    request = ReservationRequest.model_validate(reservation_request)
    hospital = client_stub(
        "hospital",
        post=AsyncMock(return_value=booked),
        get=AsyncMock(return_value=Fee.model_validate(fee)),
    )
    payment = client_stub(
        "payment",
        post=AsyncMock(return_value=ReservationStatus.model_validate(reservation_status)),
    )
    service = ReservationService(hospital, payment)

    with caplog.at_level("DEBUG", logger="reservation_gateway.services.reservation"):
        asyncio.run(service.reserve("surgery", request))

    traces = [
        record.getMessage()
        for record in caplog.records
        if record.name == "reservation_gateway.services.reservation"
        and record.levelname == "DEBUG"
    ]
    assert [message.split(" (")[0] for message in traces] == [
        "Appointment reserved",
        "Fee retrieved",
        "Payment settled",
    ]
    for message in traces:
        assert "category=surgery" in message
        assert "doctor=thomas collins" in message
        assert "patient=John Doe" in message
        assert "appointment=1" in message
    assert not [record for record in caplog.records if record.levelname == "ERROR"]


@pytest.mark.parametrize(
    ("hospital_id", "expected"),
    [
        ("grandoaks", Hospital.GRAND_OAK),
        ("clemency", Hospital.CLEMENCY),
        ("pinevalley", Hospital.PINE_VALLEY),
        ("unknownhosp", Hospital.PINE_VALLEY),
        ("GrandOaks", Hospital.PINE_VALLEY),
        ("", Hospital.PINE_VALLEY),
    ],
)
def test_select_hospital_falls_back_to_pine_valley(hospital_id, expected) -> None:
    assert select_hospital(hospital_id) is expected


@pytest.mark.parametrize(
    ("hospital_id", "target"),
    [
        ("grandoaks", Hospital.GRAND_OAK),
        ("clemency", Hospital.CLEMENCY),
        ("unknownhosp", Hospital.PINE_VALLEY),
    ],
)
def test_routing_forwards_to_selected_hospital(
    routed_request, booked, hospital_id, target
) -> None:
    routed_request["hospital_id"] = hospital_id
    request = RoutedReservationRequest.model_validate(routed_request)
    clients = {
        hospital: client_stub(hospital.value, post=AsyncMock(return_value=booked))
        for hospital in Hospital
    }

    service = RoutingService(clients)
    response = asyncio.run(service.reserve("surgery", request))

    assert response == booked
    clients[target].post.assert_awaited_once_with(
        "/categories/surgery/reserve",
        HospitalReservation(
            patient=request.patient,
            doctor=request.doctor,
            hospital=request.hospital,
            appointment_date=request.appointment_date,
        ),
        Appointment,
    )
    for hospital, client in clients.items():
        if hospital is not target:
            client.post.assert_not_awaited()


def test_routing_requires_every_hospital() -> None:
    with pytest.raises(ValueError, match="clemency"):
        RoutingService(
            {
                Hospital.GRAND_OAK: client_stub("grandoaks"),
                Hospital.PINE_VALLEY: client_stub("pinevalley"),
            }
        )
