import collections
import json
import logging
import os
from dataclasses import fields
from typing import IO, Any, Dict, Iterable, List, Optional

import jinja2

from commitlog import git, model
from commitlog.constants import DEFAULT_CONFIG_FILENAME, UNRELEASED_TITLE
from commitlog.errors import CommitMessageParseError, ValidationError
from commitlog.parser import parse_commit_message

LOG = logging.getLogger(__name__)


def parse_commits(
    commits: Iterable[model.GitCommit],
) -> List[model.ChangeLogEntry]:
    entries = []
    for commit in commits:
        try:
            parsed = parse_commit_message(commit.message)
        except CommitMessageParseError as e:
            LOG.debug(
                "Ignoring commit '%s', the commit message could not be "
                "parsed: %s",
                commit.sha,
                e,
            )
            continue
        entries.append(model.ChangeLogEntry.from_parsed(commit, parsed))
    return entries


def filter_entries(
    entries: Iterable[model.ChangeLogEntry],
    settings: model.ChangeLogSettings,
) -> List[model.ChangeLogEntry]:
    # Breaking changes are always reported, whatever their type.
    included = set(settings.included_commit_types)
    return [
        entry
        for entry in entries
        if entry.type in included or entry.contains_breaking_changes
    ]


def count_types(entries: Iterable[model.ChangeLogEntry]) -> Dict[str, int]:
    counts: Dict[model.CommitType, int] = collections.Counter(
        entry.type for entry in entries
    )
    return {
        commit_type.key: count
        for commit_type, count in sorted(
            counts.items(), key=lambda item: (-item[1], item[0].key)
        )
    }


def validate_settings(data: Any) -> None:
    if not isinstance(data, dict):
        raise ValidationError(['The settings must be a JSON object.'])
    known = {
        field.name.replace('_', '-')
        for field in fields(model.ChangeLogSettings)
    }
    errors = []
    for key in data:
        if key not in known:
            errors.append(
                f'Unknown setting "{key}", must be one of: '
                f'{", ".join(sorted(known))}'
            )
    include_types = data.get('include-types', [])
    if not isinstance(include_types, list) or not all(
        isinstance(name, str) and name.strip() for name in include_types
    ):
        errors.append(
            'The "include-types" value must be a list of non-empty strings.'
        )
    for key in ('tag-prefix', 'current-version'):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f'The "{key}" value must be a string.')
    titles = data.get('type-titles', {})
    if not isinstance(titles, dict) or not all(
        isinstance(value, str) for value in titles.values()
    ):
        errors.append(
            'The "type-titles" value must map commit types to strings.'
        )
    if errors:
        raise ValidationError(errors)


def load_settings(
    repo_dir: str, config_file: Optional[str] = None
) -> model.ChangeLogSettings:
    if config_file is None:
        config_file = os.path.join(repo_dir, DEFAULT_CONFIG_FILENAME)
        if not os.path.isfile(config_file):
            LOG.debug("No settings file found at %s", config_file)
            return model.ChangeLogSettings()
    LOG.info("Loading settings from %s", config_file)
    with open(config_file) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError([f'{config_file} is not valid JSON: {e}'])
    validate_settings(data)
    settings = model.ChangeLogSettings.from_dict(data)
    # Titles are looked up by the normalized commit type.
    titles = dict(model.ChangeLogSettings().type_titles)
    titles.update(
        {key.lower(): value for key, value in settings.type_titles.items()}
    )
    settings.type_titles = titles
    return settings


def build_releases(
    repo_dir: str, settings: model.ChangeLogSettings
) -> List[model.ReleaseChanges]:
    """Collect the changes for every version tag, oldest first.

    Commits after the newest tag are included as an extra release when
    ``settings.current_version`` is set.

    """
    tags = git.list_version_tags(repo_dir, settings.tag_prefix)
    releases = []
    previous_tag = None
    for version, tag in tags:
        rev_range = tag if previous_tag is None else f'{previous_tag}..{tag}'
        releases.append(
            _load_release(repo_dir, str(version), rev_range, settings)
        )
        previous_tag = tag
    if settings.current_version is not None:
        rev_range = 'HEAD' if previous_tag is None else f'{previous_tag}..HEAD'
        title = settings.current_version or UNRELEASED_TITLE
        releases.append(_load_release(repo_dir, title, rev_range, settings))
    return releases


def _load_release(
    repo_dir: str,
    title: str,
    rev_range: str,
    settings: model.ChangeLogSettings,
) -> model.ReleaseChanges:
    commits = git.read_commits(repo_dir, rev_range)
    entries = filter_entries(parse_commits(commits), settings)
    LOG.info(
        "Release %s: %s of %s commits included",
        title,
        len(entries),
        len(commits),
    )
    return model.ReleaseChanges(title=title, entries=entries)


def render_changes(
    releases: List[model.ReleaseChanges],
    out: IO[str],
    template_contents: str,
    settings: Optional[model.ChangeLogSettings] = None,
) -> None:
    if settings is None:
        settings = model.ChangeLogSettings()
    context = {
        'releases': list(reversed(releases)),
        'titles': settings.type_titles,
    }
    template = jinja2.Template(template_contents)
    result = template.render(**context)
    out.write(result)
