"""Auth API — registration, login, token refresh, profile.

Learn: Routes for user authentication:
- POST /auth/register → create a customer account
- POST /auth/create-admin → create an admin (only when explicitly enabled)
- POST /auth/login → email/password → JWT tokens
- POST /auth/refresh → refresh token → new token pair
- GET /auth/me → current identity + profile
- PATCH /auth/fcm-token → store the push-notification device token

The access token returned here is the same credential the client
passes as ?token= when opening the WebSocket.
"""

import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import get_current_user
from fastfood.auth.jwt import (
    Identity,
    InvalidCredential,
    Role,
    create_access_token,
    create_refresh_token,
    verify_token,
)
from fastfood.config import settings
from fastfood.db.engine import get_db
from fastfood.services.user_service import EmailAlreadyRegisteredError, UserService

router = APIRouter(prefix="/auth")

_EMAIL = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ─── Schemas ─────────────────────────────────────────────


class RegisterRequest(BaseModel):
    email: str = Field(..., pattern=_EMAIL, max_length=255)
    password: str = Field(..., min_length=6)
    name: Optional[str] = Field(None, max_length=100)


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str


class FcmTokenRequest(BaseModel):
    fcm_token: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=UserRead, status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(_svc)):
    """Create a new customer account."""
    try:
        return await svc.register(body.email, body.password, name=body.name)
    except EmailAlreadyRegisteredError:
        raise HTTPException(status_code=409, detail="Email already registered")


@router.post("/create-admin", response_model=UserRead, status_code=201)
async def create_admin(body: RegisterRequest, svc: UserService = Depends(_svc)):
    """Create an admin account. Disabled unless FASTFOOD_ALLOW_ADMIN_CREATION=true."""
    if not settings.allow_admin_creation:
        raise HTTPException(status_code=403, detail="Admin creation is not allowed")
    try:
        return await svc.register(
            body.email, body.password, name=body.name, role=Role.ADMIN
        )
    except EmailAlreadyRegisteredError:
        raise HTTPException(status_code=409, detail="Email already registered")


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, svc: UserService = Depends(_svc)):
    """Login with email and password → JWT tokens."""
    user = await svc.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return TokenResponse(
        access_token=create_access_token(str(user.id), user.role, name=user.name),
        refresh_token=create_refresh_token(str(user.id), user.role),
    )


# ─── Refresh ────────────────────────────────────────────


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, svc: UserService = Depends(_svc)):
    """Exchange a refresh token for a new token pair.

    The role is re-read from the database so promotions and demotions
    apply without a full re-login.
    """
    try:
        payload = verify_token(body.refresh_token)
    except InvalidCredential as e:
        raise HTTPException(status_code=401, detail=str(e))
    if payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Not a refresh token")

    user = await svc.get_user(payload["sub"])
    if not user:
        raise HTTPException(status_code=401, detail="User no longer exists")

    return TokenResponse(
        access_token=create_access_token(str(user.id), user.role, name=user.name),
        refresh_token=create_refresh_token(str(user.id), user.role),
    )


# ─── Current user ───────────────────────────────────────


@router.get("/me")
async def get_me(
    identity: Identity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Get the current authenticated user's info."""
    user = await svc.get_user(identity.subject_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": identity.role.value,
    }


@router.patch("/fcm-token")
async def update_fcm_token(
    body: FcmTokenRequest,
    identity: Identity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Store the device token used for push notifications."""
    user = await svc.set_fcm_token(identity.subject_id, body.fcm_token)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "FCM token updated successfully"}
