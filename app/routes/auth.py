from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from app.schemas.auth import AuthStatus, TokenGrant
from app.services.auth_service import auth_status, logout, store_tokens

router = APIRouter(prefix="/auth")


@router.get("/status", response_model=AuthStatus)
def status_endpoint(user_id: Optional[str] = Query(default=None, alias="userId")) -> AuthStatus:
    return AuthStatus(**auth_status(user_id))


@router.post("/tokens", response_model=AuthStatus)
def tokens_endpoint(grant: TokenGrant) -> AuthStatus:
    return AuthStatus(**store_tokens(grant))


@router.post("/logout")
def logout_endpoint(user_id: str = Query(..., alias="userId")) -> dict:
    return logout(user_id)
