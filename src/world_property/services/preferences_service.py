"""
Per-principal preferences stored through the key/value repository
"""

import logging

from world_property.config.settings import DEFAULT_DISPLAY_CURRENCY
from world_property.models.user import PreferencesData, Principal
from world_property.services.base_service import BaseService
from world_property.services.fx_service import is_supported_currency, normalise_currency
from world_property.utils.errors import ValidationFailedError

logger = logging.getLogger(__name__)


def preferences_key(principal: Principal) -> str:
    return f"preferences:{principal.key}"


class PreferencesService(BaseService):

    async def get_preferences(self, principal: Principal) -> PreferencesData:
        stored = await self.repositories.kv_store.get(preferences_key(principal))
        if not stored:
            return PreferencesData(display_currency=DEFAULT_DISPLAY_CURRENCY)
        return PreferencesData(**stored)

    async def set_display_currency(self, principal: Principal, currency: str) -> PreferencesData:
        currency = normalise_currency(currency)
        if not is_supported_currency(currency):
            raise ValidationFailedError(
                "Unsupported currency",
                [{"field": "display_currency", "message": f"Unsupported currency: {currency}"}],
            )

        preferences = (await self.get_preferences(principal)).model_copy(update={"display_currency": currency})
        await self.repositories.kv_store.set(preferences_key(principal), preferences.model_dump())
        logger.info(f"Display currency for {principal.key} set to {currency}")
        return preferences
