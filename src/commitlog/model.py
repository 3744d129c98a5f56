from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from commitlog import constants
from commitlog.errors import InvalidIdentifierError

# "BREAKING CHANGE" equals "breaking-change" and "Breaking Change" equals
# "BREAKING CHANGE", but "Breaking Change" does not equal
# "breaking-change".  All of them share one hash key.
_BREAKING_CHANGE_HASH_KEYS = {
    constants.BREAKING_CHANGE_FOOTER.lower(): (
        constants.BREAKING_CHANGE_TOKEN
    ),
}


def _require_text(value: Optional[str], what: str) -> None:
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidIdentifierError(
            f"The {what} must be a non-blank string, received: {value!r}"
        )


@dataclass(frozen=True, eq=False)
class CommitType:
    value: str

    def __post_init__(self) -> None:
        _require_text(self.value, 'commit type')

    @property
    def key(self) -> str:
        return self.value.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommitType):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class FooterName:
    value: str

    def __post_init__(self) -> None:
        _require_text(self.value, 'footer name')

    @property
    def key(self) -> str:
        return self.value.lower()

    @property
    def is_breaking_change(self) -> bool:
        # The spelling with a space must be upper case, the hyphenated
        # one may use any case.
        return (
            self.value == constants.BREAKING_CHANGE_FOOTER
            or self.key == constants.BREAKING_CHANGE_TOKEN
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FooterName):
            return NotImplemented
        if self.is_breaking_change and other.is_breaking_change:
            return True
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(_BREAKING_CHANGE_HASH_KEYS.get(self.key, self.key))

    def __str__(self) -> str:
        return self.value


BREAKING_CHANGE = FooterName(constants.BREAKING_CHANGE_FOOTER)


@dataclass(frozen=True)
class Footer:
    name: FooterName
    value: str

    def __post_init__(self) -> None:
        _require_text(self.value, f'value of footer "{self.name}"')

    def to_dict(self) -> Dict[str, str]:
        return {'name': str(self.name), 'value': self.value}


@dataclass(frozen=True)
class ParsedHeader:
    type: CommitType
    description: str
    scope: Optional[str] = None
    is_breaking_change: bool = False

    def __post_init__(self) -> None:
        _require_text(self.description, 'description')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': str(self.type),
            'scope': self.scope,
            'is_breaking_change': self.is_breaking_change,
            'description': self.description,
        }


@dataclass(frozen=True)
class ParsedMessage:
    header: ParsedHeader
    body: Tuple[str, ...] = ()
    footers: Tuple[Footer, ...] = ()

    def __post_init__(self) -> None:
        # Callers may hand in lists; store them immutably.
        object.__setattr__(self, 'body', tuple(self.body))
        object.__setattr__(self, 'footers', tuple(self.footers))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'header': self.header.to_dict(),
            'body': list(self.body),
            'footers': [footer.to_dict() for footer in self.footers],
        }


@dataclass(frozen=True)
class GitCommit:
    sha: str
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class ChangeLogEntry:
    sha: str
    type: CommitType
    summary: str
    scope: Optional[str] = None
    is_breaking_change: bool = False
    body: Tuple[str, ...] = ()
    footers: Tuple[Footer, ...] = ()
    breaking_change_descriptions: Tuple[str, ...] = ()

    @classmethod
    def from_parsed(
        cls, commit: GitCommit, parsed: ParsedMessage
    ) -> 'ChangeLogEntry':
        breaking = tuple(
            footer.value
            for footer in parsed.footers
            if footer.name.is_breaking_change
        )
        footers = tuple(
            footer
            for footer in parsed.footers
            if not footer.name.is_breaking_change
        )
        return cls(
            sha=commit.sha,
            type=parsed.header.type,
            summary=parsed.header.description,
            scope=parsed.header.scope,
            is_breaking_change=parsed.header.is_breaking_change,
            body=parsed.body,
            footers=footers,
            breaking_change_descriptions=breaking,
        )

    @property
    def contains_breaking_changes(self) -> bool:
        return self.is_breaking_change or bool(
            self.breaking_change_descriptions
        )

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def scope_prefix(self) -> str:
        if self.scope:
            return f'**{self.scope}:** '
        return ''


@dataclass
class ReleaseChanges:
    title: str
    entries: List[ChangeLogEntry] = field(default_factory=list)

    @property
    def entries_by_type(self) -> List[Tuple[str, List[ChangeLogEntry]]]:
        """Group entries by commit type, in order of first appearance."""
        groups: Dict[CommitType, List[ChangeLogEntry]] = {}
        for entry in self.entries:
            groups.setdefault(entry.type, []).append(entry)
        return [
            (commit_type.key, entries)
            for commit_type, entries in groups.items()
        ]

    @property
    def breaking_changes(self) -> List[Tuple[ChangeLogEntry, str]]:
        """Return ``(entry, description)`` pairs for breaking changes.

        Entries flagged only through the ``!`` marker use their summary
        as the description.

        """
        result = []
        for entry in self.entries:
            if entry.breaking_change_descriptions:
                for description in entry.breaking_change_descriptions:
                    result.append((entry, description))
            elif entry.is_breaking_change:
                result.append((entry, entry.summary))
        return result


@dataclass
class ChangeLogSettings:
    include_types: List[str] = field(
        default_factory=lambda: list(constants.DEFAULT_INCLUDE_TYPES)
    )
    tag_prefix: str = constants.DEFAULT_TAG_PREFIX
    type_titles: Dict[str, str] = field(
        default_factory=lambda: dict(constants.DEFAULT_TYPE_TITLES)
    )
    current_version: Optional[str] = None

    @property
    def included_commit_types(self) -> Sequence[CommitType]:
        return [CommitType(name) for name in self.include_types]

    def to_dict(self) -> Dict[str, Any]:
        return {
            key.replace('_', '-'): value
            for key, value in asdict(self).items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChangeLogSettings':
        kwargs = {key.replace('-', '_'): value for key, value in data.items()}
        return cls(**kwargs)
