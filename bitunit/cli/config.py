from __future__ import annotations

import argparse
import os
from configparser import ConfigParser, Error as IniError
from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, \
        Sequence, Tuple, Type

from ..version import __version__
from ..logging import log
from .exceptions import ConfigurationException

if TYPE_CHECKING:
    from .command import Command


PROGRAM = 'bitunit'
GLOBAL_INI_PATH = '/etc/bitunit/bitunit.ini'
USER_INI_PATH = '~/.config/bitunit/bitunit.ini'


class Source(Enum):
    DEFAULT = 'default'
    INI = 'ini'
    CLI = 'cli'


@dataclass(frozen=True)
class Option:
    """A command line option that can also be given a default in the INI
    file, where it is spelled in snake_case"""

    name: str
    description: str
    short_name: Optional[str] = None
    default: Any = None
    value_type: Callable[[str], Any] = str
    flag: bool = False
    choices: Optional[Sequence[Any]] = None
    configurable: bool = True
    metavar: Optional[str] = None

    @property
    def property_name(self) -> str:
        return self.name.replace('-', '_')

    def add_to_parser(self, parser) -> None:
        names = [f'--{self.name}']
        if self.short_name is not None:
            names.insert(0, f'-{self.short_name}')
        # unset options stay off the namespace so INI values can fill them
        arguments: Dict[str, Any] = {
                'dest': self.property_name,
                'help': self.description,
                'default': argparse.SUPPRESS
            }
        if self.flag:
            arguments['action'] = argparse.BooleanOptionalAction
        else:
            arguments['type'] = self.value_type
            arguments['choices'] = self.choices
            arguments['metavar'] = self.metavar
        parser.add_argument(*names, **arguments)

    def parse_ini_value(self, value: str) -> Any:
        if self.flag:
            try:
                return ConfigParser.BOOLEAN_STATES[value.strip().lower()]
            except KeyError:
                raise ConfigurationException(
                        f'Invalid value for {self.property_name}: {value!r}, '
                        'expected a boolean such as "yes" or "no"'
                    ) from None
        try:
            parsed = self.value_type(value)
        except ValueError as error:
            raise ConfigurationException(
                    f'Invalid value for {self.property_name}: {value!r}'
                ) from error
        if self.choices is not None and parsed not in self.choices:
            raise ConfigurationException(
                    f'Invalid value for {self.property_name}: {value!r}, '
                    'expected one of: '
                    + ', '.join(str(choice) for choice in self.choices)
                )
        return parsed


GLOBAL_OPTIONS = (
    Option(
        'configuration',
        'Path to an INI file of option defaults '
        f'(default: {USER_INI_PATH}).',
        short_name='c',
        default=USER_INI_PATH,
        configurable=False,
        metavar='PATH'
    ),
    Option(
        'verbose',
        'Log where option defaults were read from.',
        short_name='v',
        default=False,
        flag=True
    ),
    Option(
        'debug',
        'Log each conversion step and report errors with a full traceback.',
        short_name='d',
        default=False,
        flag=True
    ),
    Option(
        'quiet',
        'Only log errors.',
        short_name='q',
        default=False,
        flag=True
    ),
    Option(
        'color',
        'Color log messages by level. Enabled by default when stderr is a '
        'terminal and NO_COLOR is not set.',
        default=None,
        flag=True,
        configurable=False
    )
)


class Config(SimpleNamespace):

    def __init__(
                self,
                command: str,
                amounts: List[str],
                ini_path: Optional[str] = None
            ):
        super().__init__(command=command, amounts=amounts, ini_path=ini_path)
        self.sources: Dict[str, Source] = {}

    def set(self, option: Option, value: Any, source: Source) -> None:
        setattr(self, option.property_name, value)
        self.sources[option.property_name] = source

    def is_specified(self, name: str) -> bool:
        return self.sources.get(name, Source.DEFAULT) is not Source.DEFAULT

    def values(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.sources}


def build_parser(
            commands: Dict[str, Type['Command']]
        ) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
            prog=PROGRAM,
            description='Convert amounts of information between units and '
                        'format them as human readable text.'
        )
    parser.add_argument(
            '--version',
            action='version',
            version=f'%(prog)s {__version__}'
        )
    shared = argparse.ArgumentParser(add_help=False)
    group = shared.add_argument_group('global options')
    for option in GLOBAL_OPTIONS:
        option.add_to_parser(group)
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    for command in commands.values():
        command.add_parser(subparsers, shared)
    return parser


def load_ini(
            path: str,
            explicit: bool = False
        ) -> Tuple[ConfigParser, Optional[str]]:
    """Read the system wide INI file followed by the user's, returning the
    parser and the path of the user file if one was read"""
    ini = ConfigParser()
    try:
        ini.read(GLOBAL_INI_PATH, encoding='utf-8')
        path = os.path.expanduser(path)
        with open(path, encoding='utf-8') as file:
            ini.read_file(file, path)
    except FileNotFoundError:
        if explicit:
            raise ConfigurationException(
                    f'Configuration file not found: {path}'
                ) from None
        return ini, None
    except IniError as error:
        raise ConfigurationException(
                f'Unable to parse configuration file: {error}'
            ) from error
    return ini, path


def _warn_unknown_settings(
            ini: ConfigParser,
            section: str,
            options: Sequence[Option]
        ) -> None:
    # DEFAULT keys may belong to other commands
    if not ini.has_section(section):
        return
    known = {option.property_name for option in options if option.configurable}
    defaults = ini.defaults()
    for key in ini.options(section):
        if key not in known and key not in defaults:
            log.warning(f'Ignoring unknown setting {key!r} in [{section}]')


def _get_ini_value(
            ini: ConfigParser,
            section: str,
            option: Option
        ) -> Optional[str]:
    if not option.configurable:
        return None
    if not ini.has_section(section):
        section = ini.default_section
    return ini.get(section, option.property_name, fallback=None)


def resolve_config(
            namespace: argparse.Namespace,
            command: Type['Command']
        ) -> Config:
    """Layer command line values over INI values over option defaults"""
    cli_values = vars(namespace)
    ini, ini_path = load_ini(
            cli_values.get('configuration', USER_INI_PATH),
            explicit='configuration' in cli_values
        )
    options = [*GLOBAL_OPTIONS, *command.options]
    _warn_unknown_settings(ini, command.get_section(), options)
    config = Config(command.name, cli_values.get('amounts', []), ini_path)
    for option in options:
        if option.property_name in cli_values:
            config.set(option, cli_values[option.property_name], Source.CLI)
            continue
        value = _get_ini_value(ini, command.get_section(), option)
        if value is not None:
            config.set(option, option.parse_ini_value(value), Source.INI)
        else:
            config.set(option, option.default, Source.DEFAULT)
    return config
