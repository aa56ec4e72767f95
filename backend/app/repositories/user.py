"""
User repository.
"""

import time
from typing import List

import bcrypt

from app.core.constants import ChatConstants, CollectionSlugs
from app.db.store import Record
from app.models.domain import generate_uuid
from app.repositories.base import BaseRepository, translate_store_errors


def hash_password(password: str) -> str:
    """bcrypt hash of a password."""
    salt = bcrypt.gensalt(rounds=ChatConstants.PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


class UserRepository(BaseRepository):
    """Repository for user accounts."""

    collection = CollectionSlugs.USERS

    async def get_user(self, email: str) -> List[Record]:
        """Users with this email, newest first."""
        with translate_store_errors("Failed to get user by email"):
            return await self._find(
                where={"email": {"equals": email}},
                sort="-created_at",
            )

    async def create_user(self, email: str, password: str) -> Record:
        """Create a user, storing only the password hash."""
        hashed = hash_password(password)
        with translate_store_errors("Failed to create user"):
            return await self.store.create(
                self.collection,
                {"email": email, "password": hashed},
            )

    async def create_guest_user(self) -> Record:
        """Create a throwaway account with a random password."""
        email = ChatConstants.GUEST_EMAIL_TEMPLATE.format(
            timestamp=int(time.time() * 1000)
        )
        hashed = hash_password(generate_uuid())
        with translate_store_errors("Failed to create guest user"):
            return await self.store.create(
                self.collection,
                {"email": email, "password": hashed},
            )
