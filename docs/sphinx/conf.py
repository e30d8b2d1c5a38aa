# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the genconf documentation."""

project = "genconf"
author = "genconf Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
