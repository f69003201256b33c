# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the webapits documentation."""

project = "webapits"
author = "webapits Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

html_theme = "alabaster"
