import locale
from typing import Any, Dict, Optional

from ..formatting import NumberFormat, format_amount
from ..units import BitUnitFamily
from ..logging import log
from .amounts import parse_unit, parse_family
from .command import AmountCommand, READ_STDIN
from .config import Option
from .exceptions import ConfigurationException


class FormatCommand(AmountCommand):

    name = 'format'
    description = 'Format amounts of information as human readable text. ' \
        'Each amount is expressed in the largest unit of the target family ' \
        'that keeps its value at or above one, up to the peta-scale unit ' \
        'of that family.'
    options = (
        Option(
            'source-unit',
            'The unit of the amounts being formatted, as a name (byte) or an '
            'abbreviation (B). Defaults to bit.',
            short_name='s',
            default='bit',
            metavar='UNIT'
        ),
        Option(
            'target-family',
            'The family of units to express the amounts in. Defaults to '
            'decimal-bit.',
            short_name='t',
            default=BitUnitFamily.DECIMAL_BIT.label,
            choices=[family.label for family in BitUnitFamily],
            metavar='FAMILY'
        ),
        Option(
            'minimum-fraction-digits',
            'The minimum number of digits after the decimal separator. '
            'Defaults to 0.',
            default=0,
            value_type=int,
            metavar='DIGITS'
        ),
        Option(
            'maximum-fraction-digits',
            'The maximum number of digits after the decimal separator. '
            'Values are rounded half to even. Defaults to 2.',
            default=2,
            value_type=int,
            metavar='DIGITS'
        ),
        Option(
            'grouping',
            'Separate thousands in the integer part of values.',
            default=False,
            flag=True
        ),
        Option(
            'use-locale',
            'Use the decimal and grouping separators of the current locale '
            '(as set by LC_NUMERIC or LC_ALL).',
            default=False,
            flag=True
        ),
        READ_STDIN
    )
    examples = (
        (
            'Display a number of bits in the largest fitting decimal bit unit',
            'bitunit format 1500000'
        ),
        (
            'Display a byte count using binary byte units (KiB, MiB, ...)',
            'bitunit format --source-unit B --target-family binary-byte 1536'
        ),
        (
            'Always display two fraction digits',
            'bitunit format --minimum-fraction-digits 2 999'
        )
    )

    def prepare(self) -> None:
        self.source_unit = parse_unit(self.config.source_unit, 'source-unit')
        self.target_family = parse_family(
                self.config.target_family,
                'target-family'
            )
        self.number_format = self.create_number_format()

    def create_number_format(self) -> NumberFormat:
        options: Dict[str, Any] = {
                'minimum_fraction_digits':
                    self.config.minimum_fraction_digits,
                'maximum_fraction_digits':
                    self.config.maximum_fraction_digits
            }
        # the locale decides grouping unless it was asked for explicitly
        if not self.config.use_locale or self.config.is_specified('grouping'):
            options['grouping'] = self.config.grouping
        try:
            if self.config.use_locale:
                return self.create_locale_number_format(options)
            return NumberFormat(**options)
        except ValueError as error:
            raise ConfigurationException(str(error)) from error

    def create_locale_number_format(
                self,
                options: Dict[str, Any]
            ) -> NumberFormat:
        try:
            locale.setlocale(locale.LC_NUMERIC, '')
        except locale.Error as error:
            log.warning(
                    'Unable to load the numeric conventions of the current '
                    f'locale, using defaults: {error}'
                )
            return NumberFormat(**options)
        return NumberFormat.from_locale(**options)

    def process(self, amount: int) -> Optional[str]:
        return format_amount(
                amount,
                self.source_unit,
                self.target_family,
                self.number_format
            )
