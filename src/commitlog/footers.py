"""Recognize the trailer block at the end of a commit message.

A footer line is either ``key: value`` or ``key #value``.  ``key`` is a
single word that may contain hyphens, or the literal ``BREAKING CHANGE``.
Footers are only accepted as a trailing run of blank-line separated
blocks where every block starts with a footer line.  Lines inside such a
block that are not footer lines continue the value of the footer above
them.

"""
import re
from typing import List, Optional, Sequence

from commitlog import constants
from commitlog.model import Footer, FooterName
from commitlog.tokenizer import LineToken

FOOTER_LINE = re.compile(
    r'^(?P<key>%s|[\w-]+)(?:: (?P<value>.*)|(?P<hash_value> #.*))$'
    % re.escape(constants.BREAKING_CHANGE_FOOTER)
)


def match_footer_line(line: str) -> Optional[Footer]:
    """Return the footer described by ``line``, or None."""
    match = FOOTER_LINE.match(line)
    if match is None:
        return None
    value = match.group('value')
    if value is None:
        # Keep the '#' so "Closes #12" gives "#12".
        value = match.group('hash_value')[1:]
        if not value[1:].strip():
            return None
    elif not value.strip():
        return None
    return Footer(FooterName(match.group('key')), value)


def is_footer_line(line: str) -> bool:
    return match_footer_line(line) is not None


def find_footer_start(blocks: Sequence[Sequence[LineToken]]) -> int:
    """Return the index of the first block belonging to the footers.

    If no trailing block starts with a footer line, ``len(blocks)`` is
    returned and every block is body text.

    """
    start = len(blocks)
    while start > 0 and is_footer_line(blocks[start - 1][0].value or ''):
        start -= 1
    return start


def scan_footers(blocks: Sequence[Sequence[LineToken]]) -> List[Footer]:
    footers: List[Footer] = []
    current: Optional[Footer] = None
    for block in blocks:
        for line in block:
            text = line.value or ''
            footer = match_footer_line(text)
            if footer is not None:
                if current is not None:
                    footers.append(current)
                current = footer
            elif current is None:
                raise ValueError(
                    f"Footer block must start with a footer line, "
                    f"line {line.line_number} does not: {text!r}"
                )
            else:
                current = Footer(current.name, f'{current.value}\n{text}')
    if current is not None:
        footers.append(current)
    return footers
