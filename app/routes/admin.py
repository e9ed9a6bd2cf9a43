from __future__ import annotations

from fastapi import APIRouter

from app.services.maintenance_service import purge_cache

router = APIRouter(prefix="/admin")


@router.post("/purge")
def purge_endpoint() -> dict:
    return purge_cache()
