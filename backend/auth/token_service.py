# backend/auth/token_service.py

from datetime import datetime, timedelta, timezone
import logging

from jose import jwt, JWTError, ExpiredSignatureError

from backend import config
from backend.errors import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger("backend.auth")


def create_access_token(user_id: int, hours: int = config.TOKEN_EXPIRE_HOURS) -> str:
    now = datetime.now(timezone.utc)
    claims = {"userId": user_id, "iat": now, "exp": now + timedelta(hours=hours)}
    return jwt.encode(claims, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Check signature and expiry; return the claims.

    Raises ExpiredTokenError for a well-signed token past its ``exp`` and
    InvalidTokenError for everything else (bad signature, garbage, no user).
    """
    try:
        claims = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        raise ExpiredTokenError(message="The token has expired. Please login again.")
    except JWTError:
        raise InvalidTokenError(message="The provided token is invalid or malformed.")

    if not isinstance(claims.get("userId"), int):
        raise InvalidTokenError(message="The provided token is invalid or malformed.")
    return claims


def expires_in_label(hours: int = config.TOKEN_EXPIRE_HOURS) -> str:
    return f"{hours}h"
