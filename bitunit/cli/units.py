from typing import List, Sequence

from ..units import BitUnit, BitUnitFamily
from .amounts import parse_family
from .command import Command
from .config import Option

COLUMNS = ('Unit', 'Abbreviation', 'Bits', 'Family')
COLUMN_SEPARATOR = '  '


def format_table(rows: Sequence[Sequence[str]]) -> List[str]:
    widths = [
            max(len(row[index]) for row in rows)
            for index in range(len(rows[0]))
        ]
    lines = []
    for row in rows:
        cells = []
        for index, cell in enumerate(row):
            # right align the numeric column
            if index == 2:
                cells.append(cell.rjust(widths[index]))
            else:
                cells.append(cell.ljust(widths[index]))
        lines.append(COLUMN_SEPARATOR.join(cells).rstrip())
    return lines


class UnitsCommand(Command):

    name = 'units'
    description = 'List the supported units with their abbreviations and ' \
        'sizes in bits.'
    options = (
        Option(
            'family',
            'Only list the units used when formatting amounts in the given '
            'family, smallest first.',
            short_name='F',
            choices=[family.label for family in BitUnitFamily],
            configurable=False,
            metavar='FAMILY'
        ),
    )
    examples = (
        (
            'List the binary byte units',
            'bitunit units --family binary-byte'
        ),
    )

    def get_units(self) -> Sequence[BitUnit]:
        if self.config.family is None:
            return list(BitUnit)
        return parse_family(self.config.family, 'family').units

    def invoke(self) -> int:
        rows = [COLUMNS]
        for unit in self.get_units():
            rows.append((
                    unit.label,
                    unit.abbreviation,
                    str(unit.scale),
                    unit.family.label
                ))
        for line in format_table(rows):
            print(line)
        return 0
