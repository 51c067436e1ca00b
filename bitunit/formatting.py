import locale
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from typing import Optional

from .units import BitUnit, BitUnitFamily
from .conversion import convert
from .logging import log


@dataclass(frozen=True)
class NumberFormat:
    minimum_fraction_digits: int = 0
    maximum_fraction_digits: int = 2
    decimal_separator: str = '.'
    grouping_separator: str = ','
    grouping: bool = False
    grouping_size: int = 3

    def __post_init__(self):
        if self.minimum_fraction_digits < 0 \
                or self.maximum_fraction_digits < 0:
            raise ValueError('Fraction digit counts must not be negative')
        if self.minimum_fraction_digits > self.maximum_fraction_digits:
            raise ValueError(
                    'The minimum number of fraction digits cannot exceed '
                    'the maximum'
                )
        if self.grouping and self.grouping_size < 1:
            raise ValueError('Grouping size must be at least 1')

    @classmethod
    def from_locale(cls, **overrides) -> 'NumberFormat':
        """Build a format from the numeric conventions of the current
        locale, as set with locale.setlocale"""
        conventions = locale.localeconv()
        grouping = conventions.get('grouping') or []
        separator = conventions.get('thousands_sep') or ''
        grouping_size = grouping[0] if len(grouping) else 0
        options = {
                'decimal_separator': conventions.get('decimal_point') or '.',
                'grouping': len(separator) > 0
                and 0 < grouping_size < locale.CHAR_MAX,
            }
        if options['grouping']:
            options['grouping_separator'] = separator
            options['grouping_size'] = grouping_size
        options.update(overrides)
        return cls(**options)

    def _group(self, digits: str) -> str:
        groups = []
        while len(digits) > self.grouping_size:
            groups.insert(0, digits[-self.grouping_size:])
            digits = digits[:-self.grouping_size]
        groups.insert(0, digits)
        return self.grouping_separator.join(groups)

    def format(self, value: float) -> str:
        number = Decimal(repr(float(value)))
        with localcontext() as context:
            context.prec = max(number.adjusted(), 0) \
                + self.maximum_fraction_digits + 3
            rounded = number.quantize(
                    Decimal(1).scaleb(-self.maximum_fraction_digits),
                    rounding=ROUND_HALF_EVEN
                )
        integer, _, fraction = f'{rounded:f}'.partition('.')
        sign = ''
        if integer.startswith('-'):
            sign = '-'
            integer = integer[1:]
        fraction = fraction.rstrip('0') \
            .ljust(self.minimum_fraction_digits, '0')
        if self.grouping:
            integer = self._group(integer)
        if len(fraction):
            return f'{sign}{integer}{self.decimal_separator}{fraction}'
        return f'{sign}{integer}'


@dataclass(frozen=True)
class ScaledAmount:
    value: float
    unit: BitUnit

    def format(self, number_format: Optional[NumberFormat] = None) -> str:
        if number_format is None:
            number_format = NumberFormat()
        return f'{number_format.format(self.value)} {self.unit.abbreviation}'

    def __str__(self) -> str:
        return self.format()


def greatest_common_unit(
            source_unit: BitUnit,
            target_family: BitUnitFamily
        ) -> BitUnit:
    if source_unit.family is target_family:
        return source_unit
    return target_family.base_unit


def scale(
            amount: int,
            source_unit: BitUnit = BitUnit.BIT,
            target_family: BitUnitFamily = BitUnitFamily.DECIMAL_BIT
        ) -> Optional[ScaledAmount]:
    """Express an amount in the largest unit of the target family that keeps
    the value at or above 1, stopping at the family's largest unit"""
    common_unit = greatest_common_unit(source_unit, target_family)
    converted = convert(amount, source_unit, common_unit)
    if converted is None:
        return None
    units = target_family.units
    step_size = target_family.step_size
    index = units.index(common_unit)
    value = float(converted)
    while value >= step_size and index < len(units) - 1:
        value /= step_size
        index += 1
    if value >= step_size:
        log.debug(
                f'{amount} {source_unit.abbreviation} exceeds the largest '
                f'{target_family.label} unit, rendering as '
                f'{units[index].abbreviation}'
            )
    return ScaledAmount(value, units[index])


def format_amount(
            amount: int,
            source_unit: BitUnit = BitUnit.BIT,
            target_family: BitUnitFamily = BitUnitFamily.DECIMAL_BIT,
            number_format: Optional[NumberFormat] = None
        ) -> Optional[str]:
    """Render an amount as a human readable string such as "1.5 MiB"

    Returns None for negative amounts.
    """
    scaled = scale(amount, source_unit, target_family)
    if scaled is None:
        return None
    return scaled.format(number_format)
