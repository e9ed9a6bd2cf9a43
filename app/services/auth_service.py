"""Token bookkeeping for users whose Google credentials were issued elsewhere."""

from __future__ import annotations

from typing import Dict, Optional

from app.deps import get_tokens
from app.schemas.auth import TokenGrant


def auth_status(user_id: Optional[str]) -> Dict:
    if user_id and get_tokens().get(user_id):
        return {"authenticated": True, "userId": user_id}
    return {"authenticated": False}


def store_tokens(grant: TokenGrant) -> Dict:
    get_tokens().set(grant.user_id, grant.model_dump(exclude={"user_id"}, exclude_none=True))
    return {"authenticated": True, "userId": grant.user_id}


def logout(user_id: str) -> Dict:
    get_tokens().delete(user_id)
    return {"success": True}
