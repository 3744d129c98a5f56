FEATURE_TYPE = 'feat'
BUG_FIX_TYPE = 'fix'

# The only footer key that may contain a space.  It must be upper case.
BREAKING_CHANGE_FOOTER = 'BREAKING CHANGE'
BREAKING_CHANGE_TOKEN = 'breaking-change'

DEFAULT_INCLUDE_TYPES = [FEATURE_TYPE, BUG_FIX_TYPE]
DEFAULT_TAG_PREFIX = 'v'
DEFAULT_CONFIG_FILENAME = '.commitlog.json'
DEFAULT_TYPE_TITLES = {
    FEATURE_TYPE: 'New Features',
    BUG_FIX_TYPE: 'Bug Fixes',
}
UNRELEASED_TITLE = 'Unreleased'

DEFAULT_RENDER_TEMPLATE = """\
=========
CHANGELOG
=========

{% for release in releases %}
{{ release.title }}
{{ '=' * release.title|length }}
{%- if release.breaking_changes %}

Breaking Changes
{% for entry, description in release.breaking_changes %}
* {{ entry.scope_prefix }}{{ description -}}
{% endfor %}
{%- endif %}
{% for type_name, entries in release.entries_by_type %}
{{ titles.get(type_name, type_name) }}
{% for entry in entries %}
* {{ entry.scope_prefix }}{{ entry.summary }} ({{ entry.short_sha }})
{%- endfor %}
{% endfor %}
{% endfor %}
"""
