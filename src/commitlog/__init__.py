"""Build changelogs from Conventional Commits."""
from commitlog.errors import HeaderParseError, InvalidIdentifierError
from commitlog.model import (
    CommitType,
    Footer,
    FooterName,
    ParsedHeader,
    ParsedMessage,
)
from commitlog.parser import CommitMessageParser, parse_commit_message

__all__ = [
    'CommitMessageParser',
    'CommitType',
    'Footer',
    'FooterName',
    'HeaderParseError',
    'InvalidIdentifierError',
    'ParsedHeader',
    'ParsedMessage',
    'parse_commit_message',
]
