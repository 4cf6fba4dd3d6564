"""Sphinx configuration for erlterm documentation."""

import sys
from pathlib import Path

# -- Path setup --------------------------------------------------------------
# Add the source directory so autodoc can import modules without requiring
# the package to be installed.

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from erlterm import __version__

project = "erlterm"
author = "erlterm contributors"
copyright = "2026, erlterm contributors"

version = __version__
release = version

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx_autodoc_typehints",
]

master_doc = "index"
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]
language = "en"

# -- Autodoc -----------------------------------------------------------------

autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_typehints_format = "short"
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}

autodoc_mock_imports = ["orjson"]

# -- sphinx-autodoc-typehints ------------------------------------------------

always_use_bars_union = True
typehints_defaults = "braces"

# -- Intersphinx -------------------------------------------------------------

intersphinx_mapping = {
    "python": ("https://docs.python.org/3.13", None),
}

# -- HTML output -------------------------------------------------------------

html_theme = "furo"
html_title = f"erlterm {version}"
