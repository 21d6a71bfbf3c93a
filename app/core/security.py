# Implements bearer token handling:
# JWT token generation (used by tooling and tests)
# JWT token verification for the actor dependency in app.deps
# Token issuance for real logins lives with the identity provider, not here

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union
import logging

from jose import jwt, JWTError

from app.core.config import settings

logger = logging.getLogger("app")

def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject)}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt

def verify_access_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid token, None otherwise"""
    try:
        # jose rejects expired tokens while decoding
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"JWT verification error: {e}")
        return None

    user_id = payload.get("sub")
    if user_id is None:
        logger.warning("Token payload missing 'sub' field")
        return None

    return user_id
