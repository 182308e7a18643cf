"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current identity from the request. The bearer token
goes through verify_identity(), the same check the WebSocket
gateway runs on its handshake.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from fastfood.auth.jwt import Identity, InvalidCredential, verify_identity


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
) -> Optional[Identity]:
    """Extract current identity (optional — returns None if no auth)."""
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401,
            detail="Authentication failed: malformed Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verify_identity(token)
    except InvalidCredential as e:
        raise HTTPException(
            status_code=401,
            detail=f"Authentication failed: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    identity: Optional[Identity] = Depends(get_current_user_optional),
) -> Identity:
    """Extract current identity (required — 401 if no auth)."""
    if not identity:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def require_admin(
    identity: Identity = Depends(get_current_user),
) -> Identity:
    """Admin-only routes — 403 for authenticated non-admins."""
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity
