from fastapi import APIRouter

from reservation_gateway.config import get_settings

router = APIRouter()


@router.get("/health")
def health():
    return {"ok": True, "service": get_settings().app_name}
