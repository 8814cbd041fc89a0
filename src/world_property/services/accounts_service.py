"""
Accounts service - user/agent upserts and principal resolution

There are no passwords or sessions: signing in upserts the account and
callers identify themselves with the x-user-email or x-device-id header.
"""

import logging
from typing import Optional

from world_property.models.enums import PrincipalType, UserRole
from world_property.models.user import AgentAccount, AgentProfile, Principal, PublicUser
from world_property.services.base_service import BaseService
from world_property.utils.errors import BadRequestError
from world_property.utils.helpers import normalise_email, normalise_optional, utcnow

logger = logging.getLogger(__name__)


class AccountsService(BaseService):

    async def upsert_user(self, email: str, name: str, role: UserRole = UserRole.USER) -> PublicUser:
        """
        Create a user or refresh an existing one

        An existing agent keeps the agent role even when signing in as a user.
        """
        email = normalise_email(email)
        name = name.strip()
        if not email:
            raise BadRequestError("Email is required.")
        if not name:
            raise BadRequestError("Name is required.")

        users = self.repositories.users
        now = utcnow()
        current = await users.find_by_email(email)

        if current:
            next_role = UserRole.AGENT if current.role == UserRole.AGENT else role
            logger.info(f"Refreshing user {current.id} ({next_role.value})")
            return await users.touch(current.id, name, next_role, now)

        logger.info(f"Creating {role.value} account for {email}")
        return await users.insert(email, name, role, now)

    async def upsert_agent(
        self,
        email: str,
        name: str,
        company: Optional[str] = None,
        phone: Optional[str] = None,
        license_number: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> AgentAccount:
        user = await self.upsert_user(email, name, UserRole.AGENT)
        now = utcnow()
        profile = await self.repositories.users.upsert_agent_profile(
            AgentProfile(
                user_id=user.id,
                company=normalise_optional(company),
                phone=normalise_optional(phone),
                license_number=normalise_optional(license_number),
                bio=normalise_optional(bio),
                created_at=now,
                updated_at=now,
            )
        )
        return AgentAccount(user=user, profile=profile)

    async def resolve_principal(self, user_email: Optional[str], device_id: Optional[str]) -> Principal:
        """Known user email wins over device id; one of them is required"""
        if user_email and user_email.strip():
            user = await self.repositories.users.find_by_email(normalise_email(user_email))
            if user:
                return Principal(type=PrincipalType.USER, id=user.id)

        device_id = normalise_optional(device_id)
        if device_id:
            return Principal(type=PrincipalType.DEVICE, id=device_id)

        raise BadRequestError("Missing session headers. Send x-user-email or x-device-id.")
