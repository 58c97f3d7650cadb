from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import TypeAlias

# Use where optimal type is `float`, but other types are also acceptable (and will be converted to `float`)
FloatLike: TypeAlias = float | int | str | Decimal

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Precision of every `Money` amount
AMOUNT_QUANTUM = Decimal("0.01")


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def round_amount(value: float) -> float:
    """Rounds $value to two decimal places using ROUND_HALF_UP.

    Rounding works on the shortest decimal representation of the float, so
    `0.235` becomes `0.24` even though its binary value is slightly below it.
    Non-finite values (inf, nan) are returned unchanged. Large magnitudes are
    quantized with enough precision to keep all their digits.

    Args:
        value: Amount to round.

    Returns:
        Rounded amount as `float`.
    """
    decimal_value = as_decimal(value)
    if not decimal_value.is_finite():
        return float(value)

    # Precision must cover every integer digit plus the two decimals
    with localcontext() as context:
        context.prec = max(28, decimal_value.adjusted() + 3)
        return float(decimal_value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP))
