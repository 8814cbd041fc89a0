"""
Per-principal preferences routes
"""

from fastapi import APIRouter, Depends

from world_property.api.dependencies import get_preferences_service, get_principal
from world_property.models.user import PreferencesData, PreferencesUpdateRequest, Principal
from world_property.services.preferences_service import PreferencesService

router = APIRouter()


@router.get("", response_model=PreferencesData)
async def get_preferences(
    principal: Principal = Depends(get_principal),
    service: PreferencesService = Depends(get_preferences_service),
):
    return await service.get_preferences(principal)


@router.put("", response_model=PreferencesData)
async def update_preferences(
    request: PreferencesUpdateRequest,
    principal: Principal = Depends(get_principal),
    service: PreferencesService = Depends(get_preferences_service),
):
    return await service.set_display_currency(principal, request.display_currency)
