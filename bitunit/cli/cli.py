import logging
import sys
from typing import Dict, List, Optional, Type

from ..logging import log, configure_logging, supports_color
from .command import Command
from .config import Config, build_parser, resolve_config
from .convert import ConvertCommand
from .format import FormatCommand
from .units import UnitsCommand

COMMANDS: Dict[str, Type[Command]] = {
        command.name: command
        for command in (ConvertCommand, FormatCommand, UnitsCommand)
    }


class ExceptionHandler:

    def __init__(self):
        self.debug = False

    def process_exception(self, exception: BaseException) -> int:
        if isinstance(exception, SystemExit):
            raise exception
        if isinstance(exception, KeyboardInterrupt):
            return 130
        if self.debug:
            raise exception
        print(f'Error: {exception}', file=sys.stderr)
        return 1


def get_log_level(config: Config) -> int:
    if config.debug:
        return logging.DEBUG
    if config.quiet:
        return logging.ERROR
    if config.verbose:
        return logging.INFO
    return logging.WARNING


def run(args: Optional[List[str]], exception_handler: ExceptionHandler) -> int:
    # warnings about the INI file are logged before the options are known
    configure_logging(logging.WARNING)
    parser = build_parser(COMMANDS)
    namespace = parser.parse_args(args)
    exception_handler.debug = getattr(namespace, 'debug', False)
    if namespace.command is None:
        parser.print_help()
        return 0
    command = COMMANDS[namespace.command]
    config = resolve_config(namespace, command)
    exception_handler.debug = config.debug
    colored = config.color if config.color is not None \
        else supports_color(sys.stderr)
    configure_logging(get_log_level(config), colored)
    if config.ini_path is not None:
        log.info(f'Read option defaults from {config.ini_path}')
    log.debug(f'Loaded configuration: {config.values()}')
    instance = command(config)
    instance.prepare()
    return instance.invoke()


def invoke_cli(args: Optional[List[str]] = None) -> int:
    exception_handler = ExceptionHandler()
    try:
        return run(args, exception_handler)
    except BaseException as exception:  # noqa: B036
        return exception_handler.process_exception(exception)


def main():
    sys.exit(invoke_cli())


if __name__ == '__main__':
    main()
