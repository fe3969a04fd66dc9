"""
Debug endpoints.

Only served when DEBUG is on. Helps diagnose login problems without exposing
the token itself.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from bizbot.api.dependencies.auth import AUTH_COOKIE_NAME, decode_jwt_local
from bizbot.config.settings import Settings, get_settings

router = APIRouter(tags=["debug"])

TOKEN_PREVIEW_LENGTH = 12

# Values the web app writes into the cookie when clearing it
_PLACEHOLDER_TOKENS = {"undefined", "null", "deleted", ""}


class TokenStatusResponse(BaseModel):
    """State of the auth cookie on the current request."""

    has_token: bool
    token_length: int
    token_preview: Optional[str] = None
    is_valid_format: bool
    jwt_parts: int
    authenticated: bool
    timestamp: datetime


def is_well_formed_token(token: Optional[str]) -> bool:
    """Cheap shape check: three dot-separated parts and not a placeholder value."""
    if not token or token in _PLACEHOLDER_TOKENS:
        return False
    return len(token) > 20 and len(token.split(".")) == 3


@router.get("/debug/token-status", response_model=TokenStatusResponse)
async def token_status(request: Request, settings: Settings = Depends(get_settings)):
    """Show whether the auth cookie is present, well formed and valid."""
    if not settings.debug:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    token = request.cookies.get(AUTH_COOKIE_NAME)
    claims = decode_jwt_local(token, settings.jwt_secret) if token else None

    return TokenStatusResponse(
        has_token=bool(token),
        token_length=len(token) if token else 0,
        token_preview=f"{token[:TOKEN_PREVIEW_LENGTH]}..." if token else None,
        is_valid_format=is_well_formed_token(token),
        jwt_parts=len(token.split(".")) if token else 0,
        authenticated=bool(claims and claims.get("userId")),
        timestamp=datetime.now(timezone.utc),
    )
