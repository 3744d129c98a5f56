"""Parse commit messages following the Conventional Commits format.

Parsing happens in layers.  :func:`tokenize_lines` splits the message
into content and blank lines.  The first line is handed to the header
parser, which has its own tokenizer.  The remaining lines are grouped
into blank-line separated blocks: the trailing blocks that start with a
footer line are the footers, everything before them is the body.

See https://www.conventionalcommits.org for the format.

"""
from typing import List

from commitlog.footers import find_footer_start, scan_footers
from commitlog.header import parse_header
from commitlog.model import ParsedMessage
from commitlog.tokenizer import (
    LineToken,
    LineTokenKind,
    TokenStream,
    tokenize_lines,
)


class CommitMessageParser:
    def __init__(self, message: str) -> None:
        if message is None:
            raise TypeError('The commit message must be a string, not None')
        self._message = message

    def parse(self) -> ParsedMessage:
        stream = TokenStream(tokenize_lines(self._message))
        header = parse_header(stream.pop())
        # A single blank line separates the header from the rest.
        stream.accept(LineTokenKind.BLANK)
        blocks = self._read_blocks(stream)
        footer_start = find_footer_start(blocks)
        body = [self._paragraph(block) for block in blocks[:footer_start]]
        footers = scan_footers(blocks[footer_start:])
        return ParsedMessage(header=header, body=body, footers=footers)

    def _read_blocks(self, stream: TokenStream) -> List[List[LineToken]]:
        blocks: List[List[LineToken]] = []
        current: List[LineToken] = []
        for token in stream:
            if token.kind is LineTokenKind.BLANK:
                if current:
                    blocks.append(current)
                    current = []
            else:
                current.append(token)
        if current:
            blocks.append(current)
        return blocks

    def _paragraph(self, block: List[LineToken]) -> str:
        return ''.join(f'{token.value}\n' for token in block)


def parse_commit_message(message: str) -> ParsedMessage:
    """Parse ``message`` into a :class:`ParsedMessage`.

    Raises :class:`commitlog.errors.HeaderParseError` if the first line
    is not a valid Conventional Commits header.  Body and footer content
    never causes a failure: anything that is not a well formed trailing
    footer block is returned as body text.

    """
    return CommitMessageParser(message).parse()
