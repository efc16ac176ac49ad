"""
Money helpers: Decimal normalization and display formatting.

Usage:
    from fintrack.utils.money import format_money

    format_money(1500, "USD")       -> "$1,500.00"
    format_money(-20.5, "EUR")      -> "-20.50 EUR"
"""
from decimal import Decimal

_CENT = Decimal("0.01")

# Prefix symbols that render in the PDF core fonts (latin-1)
_CURRENCY_SYMBOL = {
    "USD": "$",
    "GBP": "£",
}


def to_decimal(value) -> Decimal:
    """Normalize a DB aggregate (None / int / float / Decimal) to 2 decimal places"""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_CENT)


def format_money(amount, currency: str = "USD") -> str:
    """
    Format with thousands separators and 2 decimals

    Known currencies get a prefix symbol, others the ISO code as suffix.
    """
    value = to_decimal(amount)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}"

    symbol = _CURRENCY_SYMBOL.get(currency)
    if symbol:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{digits} {currency}"
