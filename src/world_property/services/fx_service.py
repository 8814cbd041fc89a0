"""
FX conversion against a fixed rate table
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Dict, List, Optional, Union

from world_property.models.offer import Money

logger = logging.getLogger(__name__)

FX_BASE_CURRENCY = "GBP"

# Units of each currency per one GBP
FX_RATES: Dict[str, float] = {
    "GBP": 1,
    "EUR": 1.17,
    "USD": 1.28,
    "NGN": 1985,
    "ZAR": 23.9,
    "AED": 4.7,
    "CAD": 1.74,
    "AUD": 1.93,
    "CHF": 1.13,
    "SGD": 1.72,
    "JPY": 191.5,
    "INR": 106.4,
    "BRL": 7.1,
    "MXN": 24.6,
    "NZD": 2.08,
}


# Digits after the decimal point in each currency's minor unit
MINOR_UNIT_EXPONENTS: Dict[str, int] = {code: 2 for code in FX_RATES}
MINOR_UNIT_EXPONENTS["JPY"] = 0


def normalise_currency(currency: str) -> str:
    return currency.strip().upper()


def supported_currencies() -> List[str]:
    return list(FX_RATES.keys())


def is_supported_currency(currency: str) -> bool:
    return normalise_currency(currency) in FX_RATES


def convert(
    value: Union[int, float],
    from_currency: str,
    to_currency: str,
    rates: Optional[Dict[str, float]] = None,
) -> Optional[float]:
    """
    Convert an amount between two currencies via the base currency.

    Returns None when the value is not finite or either currency is not in
    the rate table.
    """
    rates = FX_RATES if rates is None else rates
    source = normalise_currency(from_currency)
    target = normalise_currency(to_currency)

    if not math.isfinite(value):
        return None
    if source == target:
        return value

    from_rate = rates.get(source)
    to_rate = rates.get(target)
    if not from_rate or not to_rate:
        return None

    value_in_base = value / from_rate
    return value_in_base * to_rate


def minor_unit_exponent(currency: str) -> int:
    return MINOR_UNIT_EXPONENTS.get(normalise_currency(currency), 2)


def convert_money(money: Money, target_currency: str) -> Optional[Money]:
    """
    Convert a minor-unit amount into the target currency's minor units

    The rate applies to major units, so the amount is scaled down by the
    source exponent, converted, scaled up by the target exponent and
    rounded half to even.
    """
    source = normalise_currency(money.currency_code)
    target = normalise_currency(target_currency)

    from_rate = FX_RATES.get(source)
    to_rate = FX_RATES.get(target)
    if not from_rate or not to_rate:
        logger.warning(f"Cannot convert {money.currency_code} to {target_currency}: unsupported currency")
        return None

    major = Decimal(money.amount_minor).scaleb(-minor_unit_exponent(source))
    if source != target:
        major = major / Decimal(str(from_rate)) * Decimal(str(to_rate))

    amount = major.scaleb(minor_unit_exponent(target)).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    return Money(amount_minor=int(amount), currency_code=target)
