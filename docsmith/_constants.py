"""Common literal values used across docsmith.

These constants keep output filenames and theme asset names centralized so the
builder, templates, and tests can import the same values without drifting.
Intended for internal use within the docsmith package.

Examples
--------
>>> from docsmith import _constants
>>> _constants.SEARCH_INDEX_FILENAME
'search-index.json'
>>> "tabs.js" in _constants.THEME_SCRIPTS
True
"""

SEARCH_INDEX_FILENAME = "search-index.json"
SEARCH_CONFIG_FILENAME = "search-config.json"
HIGHLIGHT_CSS_FILENAME = "highlight.css"
STYLESHEET_FILENAME = "styles.css"
INDEX_FILENAME = "index.html"
DOCS_OUTPUT_SUBDIR = "docs"
IMAGES_OUTPUT_SUBDIR = "images"
VERSIONED_SIDEBARS_DIR = "versioned_sidebars"
VERSION_DIR_TEMPLATE = "version-{version}"
VERSION_SIDEBAR_TEMPLATE = "version-{version}-sidebars.json"
THEME_SCRIPTS = (
    "search.js",
    "copy-code.js",
    "toc.js",
    "dark-mode.js",
    "line-numbers.js",
    "tabs.js",
)
FUSE_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/fuse.js@7.0.0/dist/fuse.basic.min.js"
ROOT_CATEGORY_LABEL = "Getting Started"
