import logging

LEVEL_COLORS = {
        logging.DEBUG: 36,
        logging.WARNING: 33,
        logging.ERROR: 31,
        logging.CRITICAL: 31
    }


def colorize(text: str, color: int) -> str:
    return f'\x1b[{color}m{text}\x1b[0m'


class LevelFormatter(logging.Formatter):
    """Marks anything other than INFO with its level, by color on terminals
    and with a level name prefix elsewhere"""

    def __init__(self, colored: bool = False):
        super().__init__('%(message)s')
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        color = LEVEL_COLORS.get(record.levelno)
        if self.colored and color is not None:
            return colorize(message, color)
        return f'{record.levelname}: {message}'
