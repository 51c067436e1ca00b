from typing import Optional

from .units import BitUnit
from .exceptions import ConversionOverflowException

MAX_AMOUNT = pow(2, 64) - 1
"""amounts and conversion results are limited to the unsigned 64-bit range"""


def _check_range(value: int) -> int:
    if value > MAX_AMOUNT:
        raise ConversionOverflowException(value, MAX_AMOUNT)
    return value


def _validate_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(
                f'Amount must be an integer, received: {type(amount)}'
            )


def _convert_unsigned(
            amount: int,
            from_unit: BitUnit,
            to_unit: BitUnit
        ) -> int:
    _check_range(amount)
    # ratios between decimal and binary scales are truncated too, so
    # KILOBYTE to KIBIBYTE divides by 1 and MEGABIT to KIBIBYTE multiplies
    # by 122
    if from_unit.scale < to_unit.scale:
        return amount // (to_unit.scale // from_unit.scale)
    elif from_unit.scale > to_unit.scale:
        return _check_range(amount * (from_unit.scale // to_unit.scale))
    else:
        return amount


def convert(
            amount: int,
            from_unit: BitUnit,
            to_unit: BitUnit
        ) -> Optional[int]:
    """Convert an integer amount between units

    The ratio between the two scales is truncated to an integer before it is
    applied, as is the result of any division.

    Returns None for negative amounts. Raises ConversionOverflowException if
    the amount or the result does not fit in an unsigned 64-bit integer.
    """
    _validate_amount(amount)
    if amount < 0:
        return None
    return _convert_unsigned(amount, from_unit, to_unit)
