# backend/auth/auth_router.py

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from backend.auth.dependencies import require_user
from backend.auth.identity import IdentityProvider, get_identity_provider
from backend.auth.token_service import create_access_token, expires_in_label
from backend.errors import InvalidApiKeyError, ValidationError

logger = logging.getLogger("backend.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


# ================= ROUTES =================
@router.post("/login")
def login(
    payload: Any = Body(None),
    directory: IdentityProvider = Depends(get_identity_provider),
):
    """Exchange an API key for a signed bearer token."""
    api_key = payload.get("apiKey") if isinstance(payload, dict) else None
    if not api_key or not isinstance(api_key, str):
        raise ValidationError(
            [],
            error="API key required",
            message="Please provide an API key in the request body.",
        )

    user = directory.lookup(api_key)
    if user is None:
        logger.warning("login_rejected")
        raise InvalidApiKeyError(message="The provided API key is not valid.")

    token = create_access_token(user.id)
    logger.info("login_succeeded", extra={"user_id": user.id})

    return {
        "message": "Authentication successful",
        "token": token,
        "user": {"id": user.id, "name": user.name},
        "expiresIn": expires_in_label(),
    }


@router.get("/verify")
def verify(user: dict = Depends(require_user)):
    return {"message": "Token is valid", "user": user}
