from enum import Enum
from typing import Dict, Tuple

from .exceptions import UnknownUnitException

BITS_PER_BYTE = 8
DECIMAL_STEP = 1000
BINARY_STEP = 1024


def _normalize_name(name: str) -> str:
    return name.strip().upper().replace('-', '_').replace(' ', '_')


class BitUnitFamily(Enum):
    DECIMAL_BIT = (DECIMAL_STEP, False)
    DECIMAL_BYTE = (DECIMAL_STEP, True)
    BINARY_BIT = (BINARY_STEP, False)
    BINARY_BYTE = (BINARY_STEP, True)

    def __init__(
                self,
                step_size: int,
                byte_based: bool
            ):
        self.step_size = step_size
        self.byte_based = byte_based

    @property
    def base_unit(self) -> 'BitUnit':
        return BitUnit.BYTE if self.byte_based else BitUnit.BIT

    @property
    def units(self) -> Tuple['BitUnit', ...]:
        """the ladder of units for this family, smallest first"""
        return _ladders[self]

    @property
    def largest_unit(self) -> 'BitUnit':
        return self.units[-1]

    @property
    def label(self) -> str:
        return self.name.lower().replace('_', '-')

    @classmethod
    def parse(cls, name: str) -> 'BitUnitFamily':
        try:
            return cls[_normalize_name(name)]
        except KeyError:
            raise UnknownUnitException(name, 'unit family') from None


class BitUnit(Enum):
    BIT = (1, 'b', BitUnitFamily.DECIMAL_BIT)
    KILOBIT = (pow(10, 3), 'kb', BitUnitFamily.DECIMAL_BIT)
    MEGABIT = (pow(10, 6), 'Mb', BitUnitFamily.DECIMAL_BIT)
    GIGABIT = (pow(10, 9), 'Gb', BitUnitFamily.DECIMAL_BIT)
    TERABIT = (pow(10, 12), 'Tb', BitUnitFamily.DECIMAL_BIT)
    PETABIT = (pow(10, 15), 'Pb', BitUnitFamily.DECIMAL_BIT)

    BYTE = (BITS_PER_BYTE, 'B', BitUnitFamily.DECIMAL_BYTE)
    KILOBYTE = (BITS_PER_BYTE * pow(10, 3), 'kB', BitUnitFamily.DECIMAL_BYTE)
    MEGABYTE = (BITS_PER_BYTE * pow(10, 6), 'MB', BitUnitFamily.DECIMAL_BYTE)
    GIGABYTE = (BITS_PER_BYTE * pow(10, 9), 'GB', BitUnitFamily.DECIMAL_BYTE)
    TERABYTE = (BITS_PER_BYTE * pow(10, 12), 'TB', BitUnitFamily.DECIMAL_BYTE)
    PETABYTE = (BITS_PER_BYTE * pow(10, 15), 'PB', BitUnitFamily.DECIMAL_BYTE)

    KIBIBIT = (pow(2, 10), 'Kib', BitUnitFamily.BINARY_BIT)
    MEBIBIT = (pow(2, 20), 'Mib', BitUnitFamily.BINARY_BIT)
    GIBIBIT = (pow(2, 30), 'Gib', BitUnitFamily.BINARY_BIT)
    TEBIBIT = (pow(2, 40), 'Tib', BitUnitFamily.BINARY_BIT)
    PEBIBIT = (pow(2, 50), 'Pib', BitUnitFamily.BINARY_BIT)

    KIBIBYTE = (BITS_PER_BYTE * pow(2, 10), 'KiB', BitUnitFamily.BINARY_BYTE)
    MEBIBYTE = (BITS_PER_BYTE * pow(2, 20), 'MiB', BitUnitFamily.BINARY_BYTE)
    GIBIBYTE = (BITS_PER_BYTE * pow(2, 30), 'GiB', BitUnitFamily.BINARY_BYTE)
    TEBIBYTE = (BITS_PER_BYTE * pow(2, 40), 'TiB', BitUnitFamily.BINARY_BYTE)
    PEBIBYTE = (BITS_PER_BYTE * pow(2, 50), 'PiB', BitUnitFamily.BINARY_BYTE)

    def __init__(
                self,
                scale: int,
                abbreviation: str,
                family: BitUnitFamily
            ):
        self.scale = scale
        self.abbreviation = abbreviation
        self.family = family

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, name: str) -> 'BitUnit':
        """Look up a unit by abbreviation (case-sensitive, "Mb" and "MB" are
        different units) or by name (case-insensitive)"""
        stripped = name.strip()
        try:
            return _abbreviations[stripped]
        except KeyError:
            pass
        try:
            return cls[_normalize_name(stripped)]
        except KeyError:
            raise UnknownUnitException(name) from None


def _build_ladder(family: BitUnitFamily) -> Tuple[BitUnit, ...]:
    members = {family.base_unit}
    members.update(unit for unit in BitUnit if unit.family is family)
    return tuple(sorted(members, key=lambda unit: unit.scale))


_ladders: Dict[BitUnitFamily, Tuple[BitUnit, ...]] = {
        family: _build_ladder(family) for family in BitUnitFamily
    }

_abbreviations: Dict[str, BitUnit] = {
        unit.abbreviation: unit for unit in BitUnit
    }


def abbreviation(unit: BitUnit) -> str:
    return unit.abbreviation


def family(unit: BitUnit) -> BitUnitFamily:
    return unit.family
