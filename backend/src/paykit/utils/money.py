"""Rounding helpers for monetary amounts in major currency units."""
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from paykit.exceptions import InvalidInput

AMOUNT_PRECISION = 2

_QUANTUM = Decimal(1).scaleb(-AMOUNT_PRECISION)


def round_amount(amount: float | int | Decimal) -> float:
    """
    Round an amount to 2 decimal places, halves away from zero.

    Goes through the decimal string form so that values like 2.675 round the
    way they read instead of the way their binary approximation does.

    Args:
        amount: Amount in major currency units

    Returns:
        Rounded amount as float

    Raises:
        InvalidInput: If amount is not a finite number

    Examples:
        >>> round_amount(2.675)
        2.68
        >>> round_amount(-0.125)
        -0.13
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidInput(f"Amount must be a number, got {amount!r}") from e

    if not value.is_finite():
        raise InvalidInput(f"Amount must be finite, got {amount!r}")

    rounded = value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    # Normalize -0.0 so equality and serialization stay clean
    return float(rounded) + 0.0


def coerce_amount(value: object, label: str = "Amount") -> float:
    """
    Convert a numeric input to a finite float.

    Args:
        value: Incoming number (int, float, Decimal or numeric string)
        label: Name used in error messages

    Returns:
        The value as float

    Raises:
        InvalidInput: If value is null, boolean, non-numeric, NaN or infinite
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{label} must be a number, got {value!r}")

    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{label} must be a number, got {value!r}") from e

    if not math.isfinite(number):
        raise InvalidInput(f"{label} must be finite, got {value!r}")

    return number
