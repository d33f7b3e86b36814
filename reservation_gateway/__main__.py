"""Run one of the gateway variants with uvicorn."""

from __future__ import annotations

import argparse

import uvicorn

from reservation_gateway.config import get_settings

_APPS = {
    "reservation": "reservation_gateway.main:app",
    "routing": "reservation_gateway.main:routing_app",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=settings.app_name)
    parser.add_argument(
        "variant",
        nargs="?",
        choices=sorted(_APPS),
        default="reservation",
        help="Which workflow to serve (default: reservation)",
    )
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    uvicorn.run(_APPS[args.variant], host=args.host, port=args.port)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
