# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import sys
from pathlib import Path

# autodoc imports the package straight from the source tree
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

project = 'unitgroups'
copyright = '2025, Parneet Sidhu'
author = 'Parneet Sidhu'
html_title = 'unitgroups Docs'

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
    'sphinx_copybutton',
    "myst_parser"
]

autodoc_member_order = "bysource"

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']


# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output

html_theme = "furo"

html_theme_options = {
    # Show project name at top of the sidebar
    "sidebar_hide_name": False,

    # Handy keyboard nav (j/k) through the sidebar
    "navigation_with_keys": True,

    # Buttons above the content ("View source")
    "top_of_page_buttons": ["view"],

    # Theme colors
    "light_css_variables": {
        "color-brand-primary": "#2980b9",
        "color-brand-content": "#1f4e79",
    },
    "dark_css_variables": {
        "color-brand-primary": "#9b59b6",
        "color-brand-content": "#bfb3ff",
    },
}


source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
