"""User service — accounts, credentials and device tokens."""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.jwt import Role
from fastfood.auth.password import hash_password, verify_password
from fastfood.db.models import User


class EmailAlreadyRegisteredError(Exception):
    pass


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_user(self, user_id: str) -> User | None:
        try:
            return await self.db.get(User, uuid.UUID(user_id))
        except ValueError:
            return None

    async def register(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        role: Role = Role.USER,
    ) -> User:
        if await self.get_by_email(email):
            raise EmailAlreadyRegisteredError(f"{email} is already registered")
        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password),
            role=role.value,
        )
        self.db.add(user)
        await self.db.commit()
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if the password matches, else None."""
        user = await self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    async def set_fcm_token(self, user_id: str, fcm_token: str) -> User | None:
        user = await self.get_user(user_id)
        if not user:
            return None
        user.fcm_token = fcm_token
        await self.db.commit()
        return user
