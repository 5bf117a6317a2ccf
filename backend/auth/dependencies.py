# backend/auth/dependencies.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header, Request

from backend.auth.token_service import decode_access_token
from backend.errors import AppError, MissingTokenError

logger = logging.getLogger("backend.auth")


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    # "Bearer <token>" or the bare token
    if not authorization:
        return None
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return authorization.strip() or None


def require_user(request: Request, authorization: Optional[str] = Header(None)) -> dict:
    """Decoded claims of the bearer token; rejects the request otherwise."""
    if not authorization:
        raise MissingTokenError(message="No token provided. Please include Authorization header.")

    token = _extract_token(authorization)
    if token is None:
        raise MissingTokenError(message="Invalid token format. Use: Bearer <token>")

    try:
        claims = decode_access_token(token)
    except AppError as exc:
        logger.warning("token_rejected", extra={"path": request.url.path, "reason": exc.error})
        raise

    request.state.user = claims
    return claims


def optional_user(request: Request, authorization: Optional[str] = Header(None)) -> Optional[dict]:
    """Like require_user, but any failure just leaves the request anonymous."""
    token = _extract_token(authorization)
    if token is None:
        return None
    try:
        claims = decode_access_token(token)
    except AppError:
        return None
    request.state.user = claims
    return claims
