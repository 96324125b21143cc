"""
Bill Arithmetic

Pure helpers shared by the ledger, the export and the UI.

DESIGN DECISION: Everything is computed in Decimal and only rounded when
formatted for display. Shares like 10/3 are kept at the full precision of
the decimal context, so summing them gives back the item price up to the
last digit of that precision.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Union

from billsplit.errors import InvalidTaxRateError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a form value to Decimal.

    Floats go through str() so 19.99 becomes Decimal("19.99").
    Raises ValueError for anything that is not a number.
    """
    if isinstance(value, bool):
        raise ValueError("Booleans are not amounts")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    raise ValueError(f"Unsupported amount type: {type(value).__name__}")


def to_tax_rate(rate: Number) -> Decimal:
    """Convert a tax rate, rejecting anything non-finite."""
    try:
        value = to_decimal(rate)
    except ValueError as e:
        raise InvalidTaxRateError("Please enter a valid tax rate", field="tax_rate") from e
    if not value.is_finite():
        raise InvalidTaxRateError("Please enter a valid tax rate", field="tax_rate")
    return value


def apply_tax(amount: Number, tax_rate_percent: Number) -> Decimal:
    """
    Add tax to an amount: amount + amount * rate / 100.

    The rate is not clamped. Negative rates work as discounts; range checks
    are the UI's job.
    """
    base = to_decimal(amount)
    rate = to_tax_rate(tax_rate_percent)
    return base + base * (rate / HUNDRED)


def format_currency(amount: Number) -> str:
    """
    Format as US dollars with two decimals: $1,234.56 / -$5.00.

    Rounds half away from zero, like browser currency formatting.
    Precision grows with the amount, so very large prices still format.
    """
    value = to_decimal(amount)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        return f"{sign}${abs(value):,.2f}"


def format_tax_rate(rate: Number) -> str:
    """Format a percentage without trailing zeros: 8.5%, 10%."""
    value = to_tax_rate(rate)
    if value == value.to_integral_value():
        return f"{value.quantize(Decimal(1)):f}%"
    return f"{value.normalize():f}%"
