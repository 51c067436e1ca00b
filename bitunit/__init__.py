from .version import __version__
from .exceptions import BitUnitException, ConversionOverflowException, \
        UnknownUnitException
from .units import BitUnit, BitUnitFamily, abbreviation, family
from .conversion import convert, MAX_AMOUNT
from .formatting import NumberFormat, ScaledAmount, scale, format_amount

__all__ = [
        '__version__',
        'BitUnitException',
        'ConversionOverflowException',
        'UnknownUnitException',
        'BitUnit',
        'BitUnitFamily',
        'abbreviation',
        'family',
        'convert',
        'MAX_AMOUNT',
        'NumberFormat',
        'ScaledAmount',
        'scale',
        'format_amount'
    ]
