import logging
import subprocess
from typing import List, Optional, Tuple

from packaging.version import InvalidVersion, Version

from commitlog.errors import GitError
from commitlog.model import GitCommit

LOG = logging.getLogger(__name__)

# What git prints for the %x00 and %x1e escapes in the log format.
_FIELD_SEP = '\x00'
_RECORD_SEP = '\x1e'


def run_git(repo_dir: str, *args: str) -> str:
    command = ['git', '-C', repo_dir] + list(args)
    LOG.debug("Running: %s", ' '.join(command))
    result = subprocess.run(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        encoding='utf-8',
    )
    if result.returncode != 0:
        raise GitError(command, result.stderr)
    return result.stdout


def read_commits(repo_dir: str, rev_range: str = 'HEAD') -> List[GitCommit]:
    output = run_git(
        repo_dir,
        'log',
        '--format=%H%x00%B%x1e',
        rev_range,
    )
    commits = []
    for record in output.split(_RECORD_SEP):
        record = record.lstrip('\n')
        if not record:
            continue
        sha, message = record.split(_FIELD_SEP, 1)
        commits.append(GitCommit(sha=sha, message=message))
    return commits


def list_version_tags(
    repo_dir: str, tag_prefix: str = 'v'
) -> List[Tuple[Version, str]]:
    output = run_git(repo_dir, 'tag', '--list')
    versions = []
    for tag in output.splitlines():
        tag = tag.strip()
        version = parse_tag_version(tag, tag_prefix)
        if version is None:
            LOG.debug("Ignoring tag '%s', not a version tag.", tag)
            continue
        versions.append((version, tag))
    return sorted(versions)


def parse_tag_version(tag: str, tag_prefix: str) -> Optional[Version]:
    if not tag or not tag.startswith(tag_prefix):
        return None
    try:
        return Version(tag[len(tag_prefix) :])
    except InvalidVersion:
        return None
