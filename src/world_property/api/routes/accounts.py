"""
Sign-in and registration routes

Signing in only upserts the account; there is no session or token.
"""

import logging

from fastapi import APIRouter, Depends

from world_property.api.dependencies import get_accounts_service
from world_property.models.user import (
    AgentRegistrationRequest,
    SignInRequest,
    SignInResponse,
    UserRegistrationRequest,
)
from world_property.services.accounts_service import AccountsService

logger = logging.getLogger(__name__)

auth_router = APIRouter()
users_router = APIRouter()
agents_router = APIRouter()


@auth_router.post("/sign-in", response_model=SignInResponse)
async def sign_in(
    request: SignInRequest,
    accounts: AccountsService = Depends(get_accounts_service),
):
    user = await accounts.upsert_user(request.email, request.name, request.role)
    return SignInResponse(
        email=user.email,
        name=user.name,
        role=user.role,
        last_login_at=user.last_login_at,
    )


@users_router.post("/register")
async def register_user(
    request: UserRegistrationRequest,
    accounts: AccountsService = Depends(get_accounts_service),
):
    user = await accounts.upsert_user(request.email, request.name)
    return {"user": user}


@agents_router.post("/register")
async def register_agent(
    request: AgentRegistrationRequest,
    accounts: AccountsService = Depends(get_accounts_service),
):
    account = await accounts.upsert_agent(
        request.email,
        request.name,
        company=request.company,
        phone=request.phone,
        license_number=request.license_number,
        bio=request.bio,
    )
    logger.info(f"Registered agent {account.user.id}")
    return {"user": account.user, "profile": account.profile}
