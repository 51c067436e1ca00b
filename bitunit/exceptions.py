class BitUnitException(Exception):
    pass


class ConversionOverflowException(BitUnitException, OverflowError):

    def __init__(self, value: int, limit: int):
        self.value = value
        self.limit = limit
        super().__init__(
                f'Value {value} exceeds the maximum supported amount of '
                f'{limit}'
            )


class UnknownUnitException(BitUnitException, ValueError):

    def __init__(self, name: str, kind: str = 'unit'):
        self.name = name
        self.kind = kind
        super().__init__(f'Unrecognized {kind}: {name!r}')
