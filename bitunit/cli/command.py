import argparse
from typing import ClassVar, Optional, Sequence, Tuple

from ..exceptions import ConversionOverflowException
from ..logging import log
from .amounts import parse_amount
from .config import Config, Option
from .exceptions import ConfigurationException
from .io import IoManager


READ_STDIN = Option(
        'read-stdin',
        'Read whitespace separated amounts from stdin. By default amounts '
        'are read from stdin when none are passed as arguments and stdin is '
        'not a terminal.',
        flag=True
    )


class Command:

    name: ClassVar[str]
    description: ClassVar[str]
    options: ClassVar[Sequence[Option]] = ()
    examples: ClassVar[Sequence[Tuple[str, str]]] = ()
    """pairs of (description, command line) listed in the help text"""

    def __init__(self, config: Config):
        self.config = config

    @classmethod
    def get_section(cls) -> str:
        return cls.name.upper()

    @classmethod
    def format_examples(cls) -> Optional[str]:
        if not cls.examples:
            return None
        lines = ['examples:']
        for description, command_line in cls.examples:
            lines.append(f'  {description}')
            lines.append(f'    {command_line}')
        return '\n'.join(lines)

    @classmethod
    def add_parser(
                cls,
                subparsers,
                shared: argparse.ArgumentParser
            ) -> argparse.ArgumentParser:
        parser = subparsers.add_parser(
                cls.name,
                parents=[shared],
                help=cls.description,
                description=cls.description,
                epilog=cls.format_examples(),
                formatter_class=argparse.RawDescriptionHelpFormatter
            )
        group = parser.add_argument_group(f'{cls.name} options')
        for option in cls.options:
            option.add_to_parser(group)
        return parser

    def prepare(self) -> None:
        pass

    def invoke(self) -> int:
        raise NotImplementedError()


class AmountCommand(Command):
    """A command that prints one result for each amount given as an
    argument or read from stdin"""

    @classmethod
    def add_parser(
                cls,
                subparsers,
                shared: argparse.ArgumentParser
            ) -> argparse.ArgumentParser:
        parser = super().add_parser(subparsers, shared)
        parser.add_argument(
                'amounts',
                nargs='*',
                metavar='AMOUNT',
                help='A whole number, optionally grouped in thousands with '
                     '"," or "_".'
            )
        return parser

    def process(self, amount: int) -> Optional[str]:
        """Return the text to print for the amount, or None if the amount
        is negative"""
        raise NotImplementedError()

    def invoke(self) -> int:
        failures = 0
        processed = 0
        io_manager = IoManager(self.config.read_stdin, self.config.amounts)
        for value in io_manager.get_entries():
            amount = parse_amount(value)
            try:
                result = self.process(amount)
            except ConversionOverflowException as error:
                log.error(f'Unable to {self.name} {value}: {error}')
                failures += 1
                continue
            if result is None:
                log.error(f'Unable to {self.name} {value}: amounts must not '
                          'be negative')
                failures += 1
                continue
            print(result)
            processed += 1
        if processed == 0 and failures == 0:
            raise ConfigurationException(
                    'At least one amount must be specified'
                )
        return 1 if failures else 0
