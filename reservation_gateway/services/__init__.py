"""Service package public API definitions.

``reservation_gateway.clients.backend`` imports
``reservation_gateway.services.exceptions``, which executes this module
first. The orchestration services import the client, so they are loaded
lazily on attribute access to keep that import chain acyclic.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "Hospital",
    "ReservationService",
    "RoutingService",
    "select_hospital",
]

_SERVICE_MODULES = {
    "Hospital": "routing",
    "ReservationService": "reservation",
    "RoutingService": "routing",
    "select_hospital": "routing",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .reservation import ReservationService as ReservationService
    from .routing import Hospital as Hospital
    from .routing import RoutingService as RoutingService
    from .routing import select_hospital as select_hospital
