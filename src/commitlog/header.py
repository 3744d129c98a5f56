"""Parser for the first line of a commit message.

The grammar is::

    header := type [ "(" scope ")" ] [ "!" ] ":" " " description

The line is split into :class:`HeaderToken` values first so that errors
can point at the exact column where the input stopped matching.

"""
import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional

from commitlog.errors import HeaderParseError
from commitlog.model import CommitType, ParsedHeader
from commitlog.tokenizer import LineToken, LineTokenKind


class HeaderTokenKind(enum.Enum):
    STRING = 'string'
    OPEN_PAREN = '('
    CLOSE_PAREN = ')'
    COLON = ':'
    SPACE = ' '
    EXCLAMATION_MARK = '!'
    EOL = 'end of line'


_SINGLE_CHAR_TOKENS = {
    '(': HeaderTokenKind.OPEN_PAREN,
    ')': HeaderTokenKind.CLOSE_PAREN,
    ':': HeaderTokenKind.COLON,
    ' ': HeaderTokenKind.SPACE,
    '!': HeaderTokenKind.EXCLAMATION_MARK,
}


@dataclass(frozen=True)
class HeaderToken:
    kind: HeaderTokenKind
    value: Optional[str]
    line_number: int
    column_number: int

    def __str__(self) -> str:
        if self.kind is HeaderTokenKind.EOL:
            return 'end of line'
        return repr(self.value)


def tokenize_header(line: LineToken) -> Iterator[HeaderToken]:
    if line.kind is not LineTokenKind.CONTENT:
        raise ValueError(
            f"Expected a {LineTokenKind.CONTENT.value} line token, "
            f"received: {line}"
        )
    text = line.value or ''
    line_number = line.line_number
    start = 0
    for index, char in enumerate(text):
        kind = _SINGLE_CHAR_TOKENS.get(char)
        if kind is None:
            continue
        if index > start:
            yield HeaderToken(
                HeaderTokenKind.STRING,
                text[start:index],
                line_number,
                start + 1,
            )
        yield HeaderToken(kind, char, line_number, index + 1)
        start = index + 1
    if start < len(text):
        yield HeaderToken(
            HeaderTokenKind.STRING, text[start:], line_number, start + 1
        )
    yield HeaderToken(HeaderTokenKind.EOL, None, line_number, len(text) + 1)


class HeaderParser:
    def __init__(self, line: LineToken) -> None:
        self._line = line
        self._tokens: List[HeaderToken] = []
        self._position = 0

    def parse(self) -> ParsedHeader:
        if self._line.kind is not LineTokenKind.CONTENT:
            raise HeaderParseError(
                'Expected the commit message header on the first line',
                self._line.line_number,
                1,
            )
        self._tokens = list(tokenize_header(self._line))
        self._position = 0

        type_token = self._match(HeaderTokenKind.STRING)
        if any(ch.isspace() for ch in type_token.value or ''):
            raise HeaderParseError(
                'The commit type must not contain whitespace',
                type_token.line_number,
                type_token.column_number,
            )
        scope = None
        if self._accept(HeaderTokenKind.OPEN_PAREN):
            scope = self._match(HeaderTokenKind.STRING).value
            self._match(HeaderTokenKind.CLOSE_PAREN)
        is_breaking_change = self._accept(HeaderTokenKind.EXCLAMATION_MARK)
        self._match(HeaderTokenKind.COLON)
        self._match(HeaderTokenKind.SPACE)

        description_start = self._current
        parts = []
        while self._current.kind is not HeaderTokenKind.EOL:
            parts.append(self._advance().value)
        description = ''.join(parts)
        if not description.strip():
            raise HeaderParseError(
                'The description must not be empty',
                description_start.line_number,
                description_start.column_number,
            )
        return ParsedHeader(
            type=CommitType(type_token.value),
            description=description,
            scope=scope,
            is_breaking_change=is_breaking_change,
        )

    @property
    def _current(self) -> HeaderToken:
        # The EOL token is always last, running past it keeps returning it.
        return self._tokens[min(self._position, len(self._tokens) - 1)]

    def _advance(self) -> HeaderToken:
        token = self._current
        self._position += 1
        return token

    def _accept(self, kind: HeaderTokenKind) -> bool:
        if self._current.kind is kind:
            self._advance()
            return True
        return False

    def _match(self, kind: HeaderTokenKind) -> HeaderToken:
        token = self._current
        if token.kind is not kind:
            expected = (
                'a string'
                if kind is HeaderTokenKind.STRING
                else repr(kind.value)
            )
            raise HeaderParseError(
                f"Unexpected {token}, expected {expected}",
                token.line_number,
                token.column_number,
            )
        return self._advance()


def parse_header(line: LineToken) -> ParsedHeader:
    return HeaderParser(line).parse()
