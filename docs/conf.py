# Configuration file for the Sphinx documentation builder.
#
# For the full list of options, see:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# -- Path setup --------------------------------------------------------------

# Add project root to sys.path so autodoc can import the Django apps
sys.path.insert(0, os.path.abspath(".."))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "diveclub.settings")

import django
django.setup()

# -- Project information -----------------------------------------------------

project = "Dive Club Activities"
author = "Dive Club Board"
release = "1.0"
version = "1.0.0"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",      # API documentation from docstrings
    "sphinx.ext.viewcode",     # Links to highlighted source code
    "sphinx.ext.napoleon",     # NumPy style docstrings
]

templates_path = []
exclude_patterns = ["_build"]

language = "en"

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"

# -- Autodoc settings --------------------------------------------------------

autodoc_member_order = "bysource"
autodoc_typehints = "description"
napoleon_numpy_docstring = True
napoleon_google_docstring = False
