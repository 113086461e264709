"""
Money Utilities - Safe Decimal operations for monetary values.

Shopify returns prices as strings ("19.99"); they are parsed into Decimal
and never go through float.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")

    try:
        if isinstance(value, float):
            # str() keeps the shortest repr, avoiding binary noise
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = Decimal(value.strip())
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")

    return result if result.is_finite() else Decimal("0")


def round_money(value: Union[str, int, float, Decimal]) -> Decimal:
    """Round a monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Union[str, int, float, Decimal], currency: str = "USD") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (USD, EUR, ...)

    Returns:
        "$19.99" for known symbols, "19.99 CAD" otherwise
    """
    formatted = f"{round_money(value):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{formatted}"
    return f"{formatted} {currency}"
