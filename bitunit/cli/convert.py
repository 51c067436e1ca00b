from typing import Optional

from ..conversion import convert
from ..logging import log
from .amounts import parse_unit
from .command import AmountCommand, READ_STDIN
from .config import Option
from .exceptions import ConfigurationException


class ConvertCommand(AmountCommand):

    name = 'convert'
    description = 'Convert whole amounts between units of information. ' \
        'Results are whole numbers: converting into a larger unit drops ' \
        'any remainder.'
    options = (
        Option(
            'from-unit',
            'The unit of the amounts being converted, as a name (kibibyte) '
            'or an abbreviation (KiB). Defaults to bit.',
            short_name='f',
            default='bit',
            metavar='UNIT'
        ),
        Option(
            'to-unit',
            'The unit to convert the amounts to, as a name (megabit) or an '
            'abbreviation (Mb).',
            short_name='t',
            metavar='UNIT'
        ),
        READ_STDIN
    )
    examples = (
        (
            'Convert 1500 bits to kilobits (the remainder is dropped)',
            'bitunit convert --to-unit kb 1500'
        ),
        (
            'Convert several amounts of mebibytes to bytes',
            'bitunit convert --from-unit MiB --to-unit B 1 16 1,024'
        )
    )

    def prepare(self) -> None:
        if self.config.to_unit is None:
            raise ConfigurationException(
                    'A target unit must be specified with --to-unit'
                )
        self.from_unit = parse_unit(self.config.from_unit, 'from-unit')
        self.to_unit = parse_unit(self.config.to_unit, 'to-unit')

    def process(self, amount: int) -> Optional[str]:
        result = convert(amount, self.from_unit, self.to_unit)
        if result is None:
            return None
        log.debug(
                f'{amount} {self.from_unit.abbreviation} = '
                f'{result} {self.to_unit.abbreviation}'
            )
        return str(result)
