# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner and parser for the configuration language."""

from genconf.errors import ConfigSyntaxError
from genconf.parser.parser import parse

__all__ = [
    "parse",
    "ConfigSyntaxError",
]
