"""
FastAPI dependencies shared by the route modules
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from world_property.models.user import Principal
from world_property.repositories import Repositories
from world_property.services.accounts_service import AccountsService
from world_property.services.base_service import ServiceResult
from world_property.services.legal_workflow_service import LegalWorkflowService
from world_property.services.listings_service import ListingsService
from world_property.services.offers_service import OffersService
from world_property.services.preferences_service import PreferencesService
from world_property.services.saved_service import SavedService


def get_repositories(request: Request) -> Repositories:
    repositories = getattr(request.app.state, "repositories", None)
    if repositories is None:
        raise HTTPException(status_code=503, detail="Storage is not ready")
    return repositories


def get_listings_service(repositories: Repositories = Depends(get_repositories)) -> ListingsService:
    return ListingsService(repositories)


def get_accounts_service(repositories: Repositories = Depends(get_repositories)) -> AccountsService:
    return AccountsService(repositories)


def get_saved_service(repositories: Repositories = Depends(get_repositories)) -> SavedService:
    return SavedService(repositories)


def get_legal_workflow_service(repositories: Repositories = Depends(get_repositories)) -> LegalWorkflowService:
    return LegalWorkflowService(repositories)


def get_offers_service(
    repositories: Repositories = Depends(get_repositories),
    legal_workflow: LegalWorkflowService = Depends(get_legal_workflow_service),
) -> OffersService:
    return OffersService(repositories, legal_workflow=legal_workflow)


def get_preferences_service(repositories: Repositories = Depends(get_repositories)) -> PreferencesService:
    return PreferencesService(repositories)


async def get_principal(
    x_user_email: Optional[str] = Header(None),
    x_device_id: Optional[str] = Header(None),
    accounts: AccountsService = Depends(get_accounts_service),
) -> Principal:
    """Who is calling, from the x-user-email or x-device-id header"""
    return await accounts.resolve_principal(x_user_email, x_device_id)


def raise_for_result(result: ServiceResult) -> None:
    """Map a failed ServiceResult onto an HTTPException"""
    if result.success:
        return
    if result.issues:
        raise HTTPException(status_code=result.status_code, detail={"error": result.error, "issues": result.issues})
    raise HTTPException(status_code=result.status_code, detail=result.error)
