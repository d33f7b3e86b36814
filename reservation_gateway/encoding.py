"""JSON encoding that keeps fee amounts as exact decimal numbers."""

from __future__ import annotations

from typing import Any

import simplejson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def dumps(data: Any) -> str:
    return simplejson.dumps(
        data, use_decimal=True, ensure_ascii=False, separators=(",", ":")
    )


def loads(raw: str | bytes) -> Any:
    """Parse JSON, reading every non-integer number as a Decimal."""

    return simplejson.loads(raw, use_decimal=True)


def model_payload(model: BaseModel) -> Any:
    """Aliased python-mode dump; Decimal values stay Decimal."""

    return model.model_dump(by_alias=True)


class DecimalJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return dumps(content).encode("utf-8")
