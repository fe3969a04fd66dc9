"""
Authentication dependencies for FastAPI endpoints.

Resolves the caller from the JWT issued by the web app's login route. The
token travels in the ``auth-token`` cookie or as a Bearer header.
"""
import logging
from typing import Optional

from authlib.jose import JoseError, jwt
from fastapi import Depends, Request
from pydantic import BaseModel

from bizbot.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth-token"


class AuthUser(BaseModel):
    """Caller identity carried in the token claims."""

    user_id: str
    email: Optional[str] = None


# ============================================================================
# JWT Decoding & Validation
# ============================================================================


def decode_jwt_local(token: str, secret: Optional[str] = None) -> Optional[dict]:
    """
    Decode and validate an HS256 JWT locally.

    Returns claims if valid, None if invalid or expired.
    """
    secret = secret or get_settings().jwt_secret

    if not token or not secret:
        return None

    try:
        claims = jwt.decode(token, secret)

        try:
            claims.validate(leeway=0)  # Expiry is exact, as at the issuing login route
            return dict(claims)
        except JoseError as e:
            logger.debug(f"JWT validation failed: {e}")
            return None
    except JoseError as e:
        logger.debug(f"JWT decode failed: {e}")
        return None
    except Exception as e:
        logger.warning(f"Unexpected error decoding JWT: {e}")
        return None


def extract_token(request: Request) -> Optional[str]:
    """Get the raw token from the cookie first, then the Authorization header."""
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if token:
        return token

    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):]

    return None


def get_user_from_request(request: Request, secret: Optional[str] = None) -> Optional[AuthUser]:
    """Resolve the caller, or None when the request carries no valid token."""
    token = extract_token(request)
    if not token:
        return None

    claims = decode_jwt_local(token, secret)
    if not claims or not claims.get("userId"):
        return None

    return AuthUser(user_id=str(claims["userId"]), email=claims.get("email"))


# ============================================================================
# Dependencies
# ============================================================================


async def get_optional_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[AuthUser]:
    """FastAPI dependency: the caller if authenticated, else None."""
    return get_user_from_request(request, settings.jwt_secret)
