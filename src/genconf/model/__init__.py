# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Element tree model shared by configurations and specifications."""

from genconf.model.elements import (
    ROOT_NAME,
    Directive,
    Element,
    ElementBase,
    NamedSection,
    Root,
    Section,
    UnnamedSection,
    make_root,
)

__all__ = [
    "ROOT_NAME",
    "Directive",
    "Element",
    "ElementBase",
    "NamedSection",
    "Root",
    "Section",
    "UnnamedSection",
    "make_root",
]
