# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Element tree produced by the parser: directives and sections."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

ROOT_NAME = "__root__"

# Values of the `kind` discriminator.
ElementKind = Literal["directive", "unnamed_section", "named_section"]


class ElementBase(BaseModel):
    """Attributes shared by every configuration element.

    Attributes:
        name: The directive or section name.
        line: 1-based line where the element starts; 0 for the synthesized root.
    """

    name: str
    line: int = _Field(default=0, ge=0)


class Directive(ElementBase):
    """A single ``name value...`` line."""

    kind: Literal["directive"] = "directive"
    arguments: list[str] = _Field(min_length=1)

    def argument(self, index: int) -> str:
        """Return the argument at *index*."""
        return self.arguments[index]

    def has_multiple_args(self) -> bool:
        """Return True if the directive has more than one argument."""
        return len(self.arguments) > 1

    @property
    def value(self) -> str:
        """The only argument of the directive.

        Raises:
            ValueError: If the directive carries more than one argument.
        """
        if self.has_multiple_args():
            raise ValueError(f"{self.name}: directive has {len(self.arguments)} arguments at line {self.line}")
        return self.arguments[0]


class Section(ElementBase):
    """Behavior shared by unnamed and named sections.

    Every multiplicity question about a section goes through
    :meth:`count_elements`: children carrying the name are counted,
    optionally restricted to one element kind, and optionally with all named
    sections of that name counted as one element.

    Attributes:
        children: Contained elements in source order.
        multiple: Names that must be treated as occurring multiple times even
            if only one element carries them. Set by the verifier.
    """

    children: list[Element] = _Field(default_factory=list)
    multiple: set[str] = _Field(default_factory=set)

    def children_named(self, name: str, kind: ElementKind | None = None) -> list[Element]:
        """Return all children called *name* (of the given *kind*, if any), in source order."""
        return [child for child in self.children if child.name == name and (kind is None or child.kind == kind)]

    def names(self) -> list[str]:
        """Return the distinct child names in order of first appearance."""
        return list(dict.fromkeys(child.name for child in self.children))

    def count_elements(self, name: str, bundle_named_sections: bool = False, kind: ElementKind | None = None) -> int:
        """Count the children called *name*.

        With *bundle_named_sections*, all named sections sharing the name
        count as a single element. With *kind*, only children of that kind
        are counted.
        """
        count = 0
        counted_named_section = False
        for child in self.children_named(name, kind):
            if bundle_named_sections and child.kind == "named_section":
                if counted_named_section:
                    continue
                counted_named_section = True
            count += 1
        return count

    def is_multiple(self, name: str, bundle_named_sections: bool = False) -> bool:
        """Return True if more than one child is called *name*. Ignores the override set."""
        return self.count_elements(name, bundle_named_sections) > 1

    def make_multiple(self, name: str) -> None:
        """Mark *name* as multiple even if it occurs only once."""
        self.multiple.add(name)

    def is_marked_multiple(self, name: str, bundle_named_sections: bool = False) -> bool:
        """Return True if consumers should see a collection for *name*."""
        return name in self.multiple or self.is_multiple(name, bundle_named_sections)


class UnnamedSection(Section):
    """A ``<name> ... </name>`` block. Also used for the synthesized root."""

    kind: Literal["unnamed_section"] = "unnamed_section"

    @property
    def is_root(self) -> bool:
        return self.name == ROOT_NAME and self.line == 0


class NamedSection(Section):
    """A ``<name argument> ... </name>`` block."""

    kind: Literal["named_section"] = "named_section"
    argument: str


# Any element of the tree; the `kind` discriminator keeps the variant closed.
Element = Annotated[
    Directive | UnnamedSection | NamedSection,
    _Field(discriminator="kind"),
]

Root = UnnamedSection


def make_root(children: list[Element] | None = None) -> UnnamedSection:
    """Create the synthesized root section that every parse returns."""
    return UnnamedSection(name=ROOT_NAME, line=0, children=children or [])


# Resolve forward references for the self-referential section models.
Section.model_rebuild()
UnnamedSection.model_rebuild()
NamedSection.model_rebuild()
