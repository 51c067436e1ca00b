import sys
from typing import Iterator, List, Optional, TextIO


class IoManager:

    def __init__(
                self,
                read_stdin: Optional[bool],
                arguments: List[str],
                stream: Optional[TextIO] = None
            ):
        self.read_stdin = read_stdin
        self.arguments = arguments
        self.stream = stream if stream is not None else sys.stdin

    def should_read_stdin(self) -> bool:
        if self.stream is None or self.read_stdin is False:
            return False
        if self.read_stdin is None:
            # explicit arguments take the place of piped input
            return len(self.arguments) == 0 and not self.stream.isatty()
        return True

    def read_entries(self) -> Iterator[str]:
        """Yield the whitespace separated entries of the input stream"""
        for line in self.stream:
            yield from line.split()

    def get_entries(self) -> Iterator[str]:
        yield from self.arguments
        if self.should_read_stdin():
            yield from self.read_entries()
