# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only, collection-like views over verified element trees.

A view presents a section's children keyed by name: a name carried by a
single element maps to that element, a name carried by several elements
(or marked multiple by the verifier) maps to a tuple. Named sections can
additionally be grouped into a mapping keyed by their argument.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from genconf.model.elements import Directive, NamedSection, Section

# ###############
# Public Interface
# ###############


class DirectiveMode(enum.Enum):
    """How a view presents directives.

    OBJECT returns the Directive itself. VALUES returns a tuple of its
    arguments. AUTO returns the bare argument for single-argument directives
    and a tuple otherwise.
    """

    OBJECT = "object"
    VALUES = "values"
    AUTO = "auto"


class ConfigView:
    """Read-only view of a section.

    Args:
        section: The section to present.
        hash_named_sections: Group named sections into a mapping from
            argument to view.
        directives: How directives are presented.
    """

    def __init__(
        self,
        section: Section,
        *,
        hash_named_sections: bool = True,
        directives: DirectiveMode = DirectiveMode.OBJECT,
    ) -> None:
        self._section = section
        self._hash_named_sections = hash_named_sections
        self._directives = directives

    @property
    def section(self) -> Section:
        """The wrapped section."""
        return self._section

    @property
    def name(self) -> str:
        return self._section.name

    @property
    def argument(self) -> str | None:
        """The argument of a named section, None for unnamed sections."""
        if isinstance(self._section, NamedSection):
            return self._section.argument
        return None

    def names(self) -> list[str]:
        """Distinct child names in order of first appearance."""
        return self._section.names()

    def has(self, name: str) -> bool:
        return any(child.name == name for child in self._section.children)

    def get(self, name: str) -> ViewItem | tuple[ViewItem, ...] | None:
        """Look up the children called *name*.

        Returns:
            None if no child has the name; the single item if exactly one
            does and the name is not marked multiple; otherwise a tuple of
            items in source order. Grouped named sections form one mapping
            item, placed after the other items.
        """
        items: list[ViewItem] = []
        grouped: dict[str, ConfigView] = {}
        for child in self._section.children_named(name):
            if child.kind == "directive":
                items.append(self._present_directive(child))
            elif child.kind == "named_section" and self._hash_named_sections:
                grouped[child.argument] = self._child_view(child)
            else:
                items.append(self._child_view(child))
        if grouped:
            items.append(MappingProxyType(grouped))

        if not items:
            return None
        if not self._section.is_marked_multiple(name, bundle_named_sections=self._hash_named_sections):
            return items[0]
        return tuple(items)

    def value(self, name: str) -> str:
        """Return the only argument of the only directive called *name*.

        Raises:
            KeyError: If there is no such directive.
            ValueError: If there are several, or it has several arguments.
        """
        matches = self._section.children_named(name, kind="directive")
        if not matches:
            raise KeyError(name)
        if len(matches) > 1 or name in self._section.multiple:
            raise ValueError(f"{name}: directive occurs multiple times, use get()")
        return matches[0].value

    def to_dict(self) -> dict[str, Any]:
        """Return a plain snapshot of the section built from dicts, lists and strings."""
        return {name: _plain(self.get(name)) for name in self.names()}

    def __repr__(self) -> str:
        return f"ConfigView({self._section.name!r}, names={self.names()!r})"

    def _child_view(self, section: Section) -> ConfigView:
        return ConfigView(section, hash_named_sections=self._hash_named_sections, directives=self._directives)

    def _present_directive(self, directive: Directive) -> Directive | str | tuple[str, ...]:
        if self._directives is DirectiveMode.VALUES:
            return tuple(directive.arguments)
        if self._directives is DirectiveMode.AUTO:
            if directive.has_multiple_args():
                return tuple(directive.arguments)
            return directive.value
        return directive


# A single value returned by ConfigView.get().
ViewItem = Directive | str | tuple[str, ...] | ConfigView | Mapping[str, ConfigView]


# ################
# Implementation
# ################


def _plain(item: Any) -> Any:
    if isinstance(item, ConfigView):
        return item.to_dict()
    if isinstance(item, Directive):
        return item.arguments[0] if not item.has_multiple_args() else list(item.arguments)
    if isinstance(item, Mapping):
        return {key: _plain(value) for key, value in item.items()}
    if isinstance(item, tuple) and all(isinstance(part, str) for part in item):
        return list(item)
    if isinstance(item, tuple):
        return [_plain(part) for part in item]
    return item
