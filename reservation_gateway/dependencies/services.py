from __future__ import annotations

from functools import lru_cache
from typing import Dict, List

from fastapi import Depends

from reservation_gateway.clients.backend import BackendClient
from reservation_gateway.config import get_settings
from reservation_gateway.services import (
    Hospital,
    ReservationService,
    RoutingService,
)


@lru_cache(maxsize=1)
def get_hospital_client_cached() -> BackendClient:
    settings = get_settings()
    return BackendClient(
        "hospital",
        str(settings.hospital_service_url),
        timeout=settings.backend_timeout,
    )


@lru_cache(maxsize=1)
def get_payment_client_cached() -> BackendClient:
    settings = get_settings()
    return BackendClient(
        "payment",
        str(settings.payment_service_url),
        timeout=settings.backend_timeout,
    )


@lru_cache(maxsize=1)
def get_hospital_routes_cached() -> Dict[Hospital, BackendClient]:
    settings = get_settings()
    urls = {
        Hospital.GRAND_OAK: settings.grand_oak_service_url,
        Hospital.CLEMENCY: settings.clemency_service_url,
        Hospital.PINE_VALLEY: settings.pine_valley_service_url,
    }
    return {
        hospital: BackendClient(
            hospital.value, str(url), timeout=settings.backend_timeout
        )
        for hospital, url in urls.items()
    }


def reservation_clients() -> List[BackendClient]:
    return [get_hospital_client_cached(), get_payment_client_cached()]


def routing_clients() -> List[BackendClient]:
    return list(get_hospital_routes_cached().values())


def get_hospital_client() -> BackendClient:
    return get_hospital_client_cached()


def get_payment_client() -> BackendClient:
    return get_payment_client_cached()


def get_reservation_service(
    hospital_client: BackendClient = Depends(get_hospital_client),
    payment_client: BackendClient = Depends(get_payment_client),
) -> ReservationService:
    return ReservationService(hospital_client, payment_client)


def get_routing_service() -> RoutingService:
    return RoutingService(get_hospital_routes_cached())
