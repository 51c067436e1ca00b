import regex

from ..units import BitUnit, BitUnitFamily
from ..exceptions import UnknownUnitException
from .exceptions import ConfigurationException

AMOUNT_PATTERN = regex.compile(
        r'(?P<sign>-)?(?P<digits>\d{1,3}(?:(?P<separator>[,_])\d{3})'
        r'(?:(?P=separator)\d{3})*|\d+)'
    )
"""digits, optionally grouped in thousands with a consistent , or _"""


def parse_amount(value: str) -> int:
    match = AMOUNT_PATTERN.fullmatch(value.strip())
    if match is None:
        raise ConfigurationException(
                f'Invalid amount: {value!r}, expected a whole number'
            )
    digits = regex.sub(r'[,_]', '', match.group('digits'))
    amount = int(digits)
    return -amount if match.group('sign') else amount


def parse_unit(value: str, option: str) -> BitUnit:
    if isinstance(value, BitUnit):
        return value
    try:
        return BitUnit.parse(value)
    except UnknownUnitException as error:
        raise ConfigurationException(
                f'{error} (--{option}), expected a unit name such as '
                '"kilobyte" or an abbreviation such as "kB"'
            ) from error


def parse_family(value: str, option: str) -> BitUnitFamily:
    if isinstance(value, BitUnitFamily):
        return value
    try:
        return BitUnitFamily.parse(value)
    except UnknownUnitException as error:
        valid = ', '.join(family.label for family in BitUnitFamily)
        raise ConfigurationException(
                f'{error} (--{option}), expected one of: {valid}'
            ) from error
