"""Common literal values used across docs_provider.

These constants keep the documentation tree geometry in one place so the
provider, the CLI, and tests agree on filenames without drifting. Intended for
internal use within the docs_provider package.

Examples
--------
>>> from docs_provider import _constants
>>> _constants.META_FILENAME
'meta.json'
>>> _constants.DOCS_DIRNAME
'docs'
"""

META_FILENAME = "meta.json"
DOCS_DIRNAME = "docs"
PATH_SEPARATOR = "/"
