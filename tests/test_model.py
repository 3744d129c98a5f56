import pytest

from commitlog import model
from commitlog.errors import InvalidIdentifierError


@pytest.mark.parametrize(
    'left,right', [
        ('fixes', 'fixes'),
        ('fixes', 'Fixes'),
        ('reviewed', 'Reviewed'),
        ('breaking-change', 'BREAKING-CHANGE'),
        # Only the exact upper case spelling with a space is an alias.
        ('breaking-change', 'BREAKING CHANGE'),
        ('BREAKING-CHANGE', 'BREAKING CHANGE'),
        ('Breaking-Change', 'BREAKING CHANGE'),
        # Spaced spellings fall back to case-insensitive comparison.
        ('BREAKING CHANGE', 'Breaking Change'),
        ('breaking change', 'Breaking Change'),
    ]
)
def test_footer_names_are_equal(left, right):
    left_name = model.FooterName(left)
    right_name = model.FooterName(right)
    assert left_name == right_name
    assert right_name == left_name
    assert hash(left_name) == hash(right_name)
    assert not left_name != right_name


@pytest.mark.parametrize(
    'left,right', [
        ('fixes', 'closes'),
        ('reviewed', 'Reviewed-By'),
        ('breaking-change', 'Breaking Change'),
        ('breaking-change', 'breaking change'),
    ]
)
def test_footer_names_are_not_equal(left, right):
    left_name = model.FooterName(left)
    right_name = model.FooterName(right)
    assert left_name != right_name
    assert not left_name == right_name


@pytest.mark.parametrize(
    'value,is_breaking', [
        ('BREAKING CHANGE', True),
        ('breaking-change', True),
        ('BREAKING-CHANGE', True),
        ('Breaking Change', False),
        ('fixes', False),
    ]
)
def test_footer_name_is_breaking_change(value, is_breaking):
    assert model.FooterName(value).is_breaking_change == is_breaking


def test_footer_name_keeps_original_spelling():
    assert str(model.FooterName('Reviewed-by')) == 'Reviewed-by'
    assert str(model.BREAKING_CHANGE) == 'BREAKING CHANGE'


def test_commit_types_are_case_insensitive():
    assert model.CommitType('feat') == model.CommitType('FEAT')
    assert hash(model.CommitType('feat')) == hash(model.CommitType('Feat'))
    assert model.CommitType('feat') != model.CommitType('fix')
    assert str(model.CommitType('FEAT')) == 'FEAT'


def test_identity_types_do_not_compare_to_strings():
    assert model.CommitType('feat') != 'feat'
    assert model.FooterName('fixes') != model.CommitType('fixes')


@pytest.mark.parametrize('value', ['', '   ', '\t\n', None])
def test_commit_type_rejects_blank_values(value):
    with pytest.raises(InvalidIdentifierError):
        model.CommitType(value)


@pytest.mark.parametrize('value', ['', '   ', None])
def test_footer_name_rejects_blank_values(value):
    with pytest.raises(InvalidIdentifierError):
        model.FooterName(value)


@pytest.mark.parametrize('value', ['', '  ', None])
def test_footer_rejects_blank_values(value):
    with pytest.raises(InvalidIdentifierError):
        model.Footer(model.FooterName('fixes'), value)


def test_invalid_identifier_error_is_a_value_error():
    with pytest.raises(ValueError):
        model.CommitType(' ')


def test_footer_equality_uses_name_rules():
    assert model.Footer(model.FooterName('BREAKING CHANGE'), 'x') == (
        model.Footer(model.FooterName('breaking-change'), 'x')
    )
    assert model.Footer(model.FooterName('fixes'), 'x') != (
        model.Footer(model.FooterName('fixes'), 'X')
    )


@pytest.mark.parametrize('description', ['', '   ', None])
def test_header_requires_description(description):
    with pytest.raises(InvalidIdentifierError):
        model.ParsedHeader(
            type=model.CommitType('feat'), description=description
        )


def test_parsed_message_freezes_sequences():
    message = model.ParsedMessage(
        header=model.ParsedHeader(
            type=model.CommitType('feat'), description='Thing'
        ),
        body=['First\n'],
        footers=[model.Footer(model.FooterName('fixes'), '#1')],
    )
    assert message.body == ('First\n',)
    assert message.footers == (model.Footer(model.FooterName('fixes'), '#1'),)
    assert message.to_dict() == {
        'header': {
            'type': 'feat',
            'scope': None,
            'is_breaking_change': False,
            'description': 'Thing',
        },
        'body': ['First\n'],
        'footers': [{'name': 'fixes', 'value': '#1'}],
    }


def _parsed(header_breaking=False, footers=()):
    return model.ParsedMessage(
        header=model.ParsedHeader(
            type=model.CommitType('feat'),
            description='Add thing',
            scope='core',
            is_breaking_change=header_breaking,
        ),
        footers=[
            model.Footer(model.FooterName(name), value)
            for name, value in footers
        ],
    )


def test_entry_separates_breaking_change_footers():
    commit = model.GitCommit(sha='abcdef1234567890', message='unused')
    entry = model.ChangeLogEntry.from_parsed(
        commit,
        _parsed(
            footers=[
                ('Reviewed-by', 'someone'),
                ('BREAKING CHANGE', 'Removed the old flag'),
                ('breaking-change', 'Renamed the API'),
            ]
        ),
    )
    assert entry.breaking_change_descriptions == (
        'Removed the old flag',
        'Renamed the API',
    )
    assert entry.footers == (
        model.Footer(model.FooterName('Reviewed-by'), 'someone'),
    )
    assert not entry.is_breaking_change
    assert entry.contains_breaking_changes
    assert entry.short_sha == 'abcdef1'
    assert entry.scope_prefix == '**core:** '


def test_entry_breaking_change_from_header_marker():
    commit = model.GitCommit(sha='abc', message='unused')
    entry = model.ChangeLogEntry.from_parsed(
        commit, _parsed(header_breaking=True)
    )
    assert entry.contains_breaking_changes
    assert entry.breaking_change_descriptions == ()


def test_release_groups_entries_by_type():
    def entry(sha, commit_type, breaking=False, descriptions=()):
        return model.ChangeLogEntry(
            sha=sha,
            type=model.CommitType(commit_type),
            summary=f'summary {sha}',
            is_breaking_change=breaking,
            breaking_change_descriptions=descriptions,
        )

    release = model.ReleaseChanges(
        title='1.0.0',
        entries=[
            entry('1', 'fix'),
            entry('2', 'feat', breaking=True),
            entry('3', 'FIX', descriptions=('first', 'second')),
        ],
    )
    grouped = release.entries_by_type
    assert [name for name, _ in grouped] == ['fix', 'feat']
    assert [e.sha for e in grouped[0][1]] == ['1', '3']
    assert [
        (e.sha, description) for e, description in release.breaking_changes
    ] == [('2', 'summary 2'), ('3', 'first'), ('3', 'second')]


def test_settings_round_trip_through_dict():
    settings = model.ChangeLogSettings(
        include_types=['feat'], tag_prefix='release-'
    )
    data = settings.to_dict()
    assert data['include-types'] == ['feat']
    assert data['tag-prefix'] == 'release-'
    assert model.ChangeLogSettings.from_dict(data) == settings
