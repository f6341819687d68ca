#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: CC0-1.0

from importlib.metadata import version as get_version

from packaging.version import parse as parse_version

project = "borrowcell"
author = "borrowcell contributors"
copyright = "2026 borrowcell contributors"

v = parse_version(get_version("borrowcell"))
version = v.base_version
release = v.public

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx_rtd_theme",
]

autodoc_class_signature = "separated"
autodoc_member_order = "bysource"
autodoc_default_options = {
    "exclude-members": "__init_subclass__,__class_getitem__,__weakref__",
    "show-inheritance": True,
}

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "wrapt": ("https://wrapt.readthedocs.io/en/latest/", None),
}

html_theme = "sphinx_rtd_theme"
