"""Common literal values used across documenter_index.

These constants keep the generator's variable name, record field order, and
default paths centralized so the codec, validators, CLI, and tests can import
the same values without drifting. Intended for internal use within the
documenter_index package.

Examples
--------
>>> from documenter_index import _constants
>>> _constants.DEFAULT_VARIABLE
'documenterSearchIndex'
>>> _constants.RECORD_FIELDS[0]
'location'
"""

DEFAULT_VARIABLE = "documenterSearchIndex"
DOCS_KEY = "docs"
RECORD_FIELDS = ("location", "page", "title", "text", "category")
ANCHOR_SEPARATOR = "#"
DEFAULT_CONFIG_PATH = "config/indexes.yaml"
DEFAULT_REPORT_OUTPUT = "public/search-report.html"
DEFAULT_TIMEOUT = 30.0
