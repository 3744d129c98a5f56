import argparse
import json
import logging
import sys
from importlib import metadata
from typing import Callable, Optional

from commitlog import core, git
from commitlog.constants import DEFAULT_RENDER_TEMPLATE
from commitlog.errors import (
    CommitMessageParseError,
    GitError,
    ValidationError,
)
from commitlog.parser import parse_commit_message

SUB_CMD_FUNC = Callable[[argparse.Namespace], int]
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s %(message)s'


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def cmd_parse(args: argparse.Namespace) -> int:
    if args.message is not None:
        message = args.message
    elif args.file is not None:
        with open(args.file, encoding='utf-8') as f:
            message = f.read()
    else:
        message = sys.stdin.read()
    try:
        parsed = parse_commit_message(message)
    except CommitMessageParseError as e:
        sys.stderr.write(f"Not a conventional commit: {e}")
        sys.stderr.write("\n")
        return 1
    print(json.dumps(parsed.to_dict(), indent=2))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    try:
        settings = core.load_settings(args.repo, args.config)
    except ValidationError as e:
        sys.stderr.write(str(e))
        sys.stderr.write("\n")
        return 1
    if args.tag_prefix is not None:
        settings.tag_prefix = args.tag_prefix
    if args.current_version is not None:
        settings.current_version = args.current_version
    if args.template:
        with open(args.template) as f:
            template_contents = f.read()
    else:
        template_contents = DEFAULT_RENDER_TEMPLATE
    try:
        releases = core.build_releases(args.repo, settings)
    except GitError as e:
        sys.stderr.write(str(e))
        sys.stderr.write("\n")
        return 1
    core.render_changes(releases, sys.stdout, template_contents, settings)
    return 0


def cmd_types(args: argparse.Namespace) -> int:
    try:
        commits = git.read_commits(args.repo, args.rev_range)
    except GitError as e:
        sys.stderr.write(str(e))
        sys.stderr.write("\n")
        return 1
    entries = core.parse_commits(commits)
    for type_name, count in core.count_types(entries).items():
        print(f"{type_name}: {count}")
    skipped = len(commits) - len(entries)
    if skipped:
        print(f"(not conventional: {skipped})")
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '--version', action='version', version=metadata.version(__package__)
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='count',
        default=0,
        help='Increase log output, can be repeated.',
    )
    subparser = parser.add_subparsers()

    parse = subparser.add_parser('parse')
    parse.set_defaults(func=cmd_parse)
    source = parse.add_mutually_exclusive_group()
    source.add_argument('-m', '--message', help='The commit message.')
    source.add_argument(
        '-f',
        '--file',
        help='Read the commit message from a file instead of stdin.',
    )

    render = subparser.add_parser('render')
    render.set_defaults(func=cmd_render)
    render.add_argument(
        '--repo', default='.', help='The location of the git repository.'
    )
    render.add_argument(
        '-t', '--template', help='A jinja2 template to render with.'
    )
    render.add_argument(
        '-c',
        '--config',
        help=(
            'Settings file to use.  Defaults to .commitlog.json in the '
            'repository if present.'
        ),
    )
    render.add_argument(
        '--tag-prefix', help='Prefix of the tags that mark releases.'
    )
    render.add_argument(
        '--current-version',
        help=(
            'Include commits after the last release under this version. '
            'An empty string uses the "Unreleased" title.'
        ),
    )

    types = subparser.add_parser('types')
    types.set_defaults(func=cmd_types)
    types.add_argument(
        '--repo', default='.', help='The location of the git repository.'
    )
    types.add_argument(
        '--rev-range', default='HEAD', help='The commits to inspect.'
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if not hasattr(args, 'func'):
        parser.print_help()
        return 0
    else:
        handler: SUB_CMD_FUNC = args.func
        return handler(args)


if __name__ == '__main__':
    sys.exit(main())
