"""
User and agent profile persistence
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from world_property.database.connection import Database
from world_property.models.enums import UserRole
from world_property.models.user import AgentProfile, PublicUser

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, email, name, role, created_at, last_login_at"
PROFILE_COLUMNS = "user_id, company, phone, license_number, bio, created_at, updated_at"


class UserRepository(ABC):

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[PublicUser]:
        """Look up a user by an already normalised email"""

    @abstractmethod
    async def insert(self, email: str, name: str, role: UserRole, now: datetime) -> PublicUser:
        ...

    @abstractmethod
    async def touch(self, user_id: str, name: str, role: UserRole, now: datetime) -> PublicUser:
        """Update name, role and last login time"""

    @abstractmethod
    async def upsert_agent_profile(self, profile: AgentProfile) -> AgentProfile:
        ...


class InMemoryUserRepository(UserRepository):

    def __init__(self):
        self._users: Dict[str, PublicUser] = {}
        self._profiles: Dict[str, AgentProfile] = {}

    async def find_by_email(self, email: str) -> Optional[PublicUser]:
        return next((user for user in self._users.values() if user.email == email), None)

    async def insert(self, email: str, name: str, role: UserRole, now: datetime) -> PublicUser:
        user = PublicUser(
            id=str(uuid.uuid4()), email=email, name=name, role=role,
            created_at=now, last_login_at=now,
        )
        self._users[user.id] = user
        return user

    async def touch(self, user_id: str, name: str, role: UserRole, now: datetime) -> PublicUser:
        user = self._users[user_id].model_copy(update={"name": name, "role": role, "last_login_at": now})
        self._users[user_id] = user
        return user

    async def upsert_agent_profile(self, profile: AgentProfile) -> AgentProfile:
        existing = self._profiles.get(profile.user_id)
        if existing:
            profile = profile.model_copy(update={"created_at": existing.created_at})
        self._profiles[profile.user_id] = profile
        return profile


class PostgresUserRepository(UserRepository):

    def __init__(self, database: Database):
        self.database = database

    async def find_by_email(self, email: str) -> Optional[PublicUser]:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {USER_COLUMNS} FROM users WHERE email = $1", email)
        return PublicUser(**dict(row)) if row else None

    async def insert(self, email: str, name: str, role: UserRole, now: datetime) -> PublicUser:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO users (id, email, name, role, created_at, last_login_at)
                VALUES ($1, $2, $3, $4, $5, $5)
                RETURNING {USER_COLUMNS}
                """,
                str(uuid.uuid4()), email, name, role.value, now,
            )
        return PublicUser(**dict(row))

    async def touch(self, user_id: str, name: str, role: UserRole, now: datetime) -> PublicUser:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE users SET name = $1, role = $2, last_login_at = $3
                WHERE id = $4
                RETURNING {USER_COLUMNS}
                """,
                name, role.value, now, user_id,
            )
        if not row:
            raise RuntimeError("User could not be loaded after update.")
        return PublicUser(**dict(row))

    async def upsert_agent_profile(self, profile: AgentProfile) -> AgentProfile:
        async with self.database.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO agent_profiles ({PROFILE_COLUMNS})
                VALUES ($1, $2, $3, $4, $5, $6, $7)
                ON CONFLICT (user_id) DO UPDATE SET
                    company = EXCLUDED.company,
                    phone = EXCLUDED.phone,
                    license_number = EXCLUDED.license_number,
                    bio = EXCLUDED.bio,
                    updated_at = EXCLUDED.updated_at
                RETURNING {PROFILE_COLUMNS}
                """,
                profile.user_id, profile.company, profile.phone, profile.license_number,
                profile.bio, profile.created_at, profile.updated_at,
            )
        return AgentProfile(**dict(row))
