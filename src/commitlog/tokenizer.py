"""Split commit messages into classified lines."""
import collections
import enum
import re
from dataclasses import dataclass
from typing import Deque, Iterable, Iterator, Optional

_LINE_BREAK = re.compile(r'\r\n|\n')


class LineTokenKind(enum.Enum):
    CONTENT = 'content'
    BLANK = 'blank'
    END = 'end'


@dataclass(frozen=True)
class LineToken:
    kind: LineTokenKind
    line_number: int
    value: Optional[str] = None

    def __post_init__(self) -> None:
        if self.line_number < 1:
            raise ValueError(
                f"Line numbers start at 1, received: {self.line_number}"
            )

    @classmethod
    def content(cls, value: str, line_number: int) -> 'LineToken':
        return cls(LineTokenKind.CONTENT, line_number, value)

    @classmethod
    def blank(cls, line_number: int) -> 'LineToken':
        return cls(LineTokenKind.BLANK, line_number, '')

    @classmethod
    def end(cls, line_number: int) -> 'LineToken':
        return cls(LineTokenKind.END, line_number)

    def __str__(self) -> str:
        return f"({self.line_number}, {self.kind.value}, {self.value!r})"


def tokenize_lines(
    text: str, whitespace_lines_are_blank: bool = True
) -> Iterator[LineToken]:
    """Lazily yield one token per line of ``text``.

    Both ``\\n`` and ``\\r\\n`` end a line.  The final line does not need
    a line break.  The sequence always finishes with a single END token
    whose line number is one past the last line.

    """
    line_number = 1
    position = 0
    for match in _LINE_BREAK.finditer(text):
        yield _classify(
            text[position : match.start()],
            line_number,
            whitespace_lines_are_blank,
        )
        line_number += 1
        position = match.end()
    if position < len(text):
        yield _classify(
            text[position:], line_number, whitespace_lines_are_blank
        )
        line_number += 1
    yield LineToken.end(line_number)


def _classify(
    line: str, line_number: int, whitespace_lines_are_blank: bool
) -> LineToken:
    if not line or (whitespace_lines_are_blank and not line.strip()):
        return LineToken.blank(line_number)
    return LineToken.content(line, line_number)


class TokenStream:
    """Buffered lookahead over a line token iterator.

    The END token is sticky: peeking past it or popping it always
    returns the same END token.

    """

    def __init__(self, tokens: Iterable[LineToken]) -> None:
        self._tokens = iter(tokens)
        self._buffer: Deque[LineToken] = collections.deque()
        self._end: Optional[LineToken] = None

    def peek(self, lookahead: int = 0) -> LineToken:
        while len(self._buffer) <= lookahead:
            if self._end is not None:
                return self._end
            token = next(self._tokens)
            self._buffer.append(token)
            if token.kind is LineTokenKind.END:
                self._end = token
        return self._buffer[lookahead]

    def pop(self) -> LineToken:
        token = self.peek()
        if token.kind is not LineTokenKind.END:
            self._buffer.popleft()
        return token

    def test(self, kind: LineTokenKind, lookahead: int = 0) -> bool:
        return self.peek(lookahead).kind is kind

    def accept(self, kind: LineTokenKind) -> Optional[LineToken]:
        if self.test(kind):
            return self.pop()
        return None

    def at_end(self) -> bool:
        return self.test(LineTokenKind.END)

    def __iter__(self) -> Iterator[LineToken]:
        # Drains everything up to, but not including, the END token.
        while not self.at_end():
            yield self.pop()
