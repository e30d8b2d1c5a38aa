# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Verification of configuration trees against specification trees.

The verifier walks a configuration section and the spec section describing
it in lock-step. At each nesting level it:

- builds the table of allowed elements from the spec's declarations,
  resolving ``*SectionRef`` declarations against the top-level
  ``MetaSection`` blocks of the root spec;
- looks up every configuration element, honouring Single/Multi
  cardinality and marking names declared Multi but used once as multiple;
- checks directive arguments against their declared patterns;
- enforces ``RequiredDirectives`` and ``RequiredSections``.

Verification is fail-fast: the first violation raises. The spec tree is
never modified; the configuration tree only gains multiplicity marks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from genconf.errors import (
    ArgumentCountError,
    ArgumentPatternError,
    DuplicateSectionError,
    MissingRequiredError,
    MultiplicityError,
    SpecCompileError,
    UnknownElementError,
)
from genconf.model.elements import Directive, Element, NamedSection, Section, UnnamedSection
from genconf.parser.parser import parse
from genconf.spec.keywords import (
    REQUIRED_DIRECTIVES,
    REQUIRED_SECTIONS,
    Declaration,
    DeclarationKind,
    declaration_of,
    meta_sections,
)
from genconf.spec.patterns import ETC, OPTIONAL, is_marker, pattern_matches

if TYPE_CHECKING:
    from genconf.spec.loader import CompiledSpec

# ###############
# Public Interface
# ###############

AllowedElements = dict[str, dict[DeclarationKind, Declaration]]


def verify(config: Section, spec: Section, *, root_spec: Section | None = None) -> None:
    """Verify that *config* conforms to *spec*.

    Args:
        config: The configuration section to check (usually a parse root).
        spec: The spec section describing the allowed content of *config*.
        root_spec: The spec document whose top-level ``MetaSection`` blocks
            resolve ``*SectionRef`` declarations. Defaults to *spec*.

    Raises:
        UnknownElementError: An element has no declaration at its level.
        MultiplicityError: An element declared single occurs more than once.
        DuplicateSectionError: Two named sections share name and argument.
        ArgumentCountError: A directive has too few or too many arguments.
        ArgumentPatternError: A directive argument fails its pattern.
        MissingRequiredError: A required directive or section is absent. Its
            line is None when the element is missing at the top level.
        SpecCompileError: The spec itself is broken (dangling reference or
            malformed pattern); cannot happen for compiled specs.
    """
    _Verifier(root_spec if root_spec is not None else spec).verify_section(config, spec)


def parse_and_verify(text: str, spec: CompiledSpec) -> UnnamedSection:
    """Parse configuration text and verify it against a compiled spec.

    Returns:
        The verified root section.

    Raises:
        ConfigSyntaxError: If the text cannot be parsed.
        VerificationError: If the configuration violates the spec.
    """
    config = parse(text)
    verify(config, spec.root)
    return config


def allowed_elements(spec: Section) -> AllowedElements:
    """Build the table of elements allowed directly inside *spec*.

    Keys are element names; each value maps a declaration kind to the
    declaration. Section references stay unresolved until a matching
    section is verified, so recursive MetaSections never expand eagerly.
    """
    table: AllowedElements = {}
    for child in spec.children:
        declaration = declaration_of(child)
        if declaration is not None:
            table.setdefault(declaration.name, {})[declaration.kind] = declaration
    return table


# ################
# Implementation
# ################


class _Level:
    """One nesting level whose children are being verified."""

    def __init__(self, config: Section, spec: Section, allowed: AllowedElements) -> None:
        self.config = config
        self.spec = spec
        self.allowed = allowed
        self.pending = iter(config.children)
        self.seen_directives: set[str] = set()
        self.seen_sections: set[str] = set()
        self.named_lines: dict[tuple[str, str], int] = {}


class _Verifier:
    """Verifies configuration sections against one root spec."""

    def __init__(self, root_spec: Section) -> None:
        self._metas = meta_sections(root_spec)
        # Allowed-element tables keyed by the id() of their spec section; the
        # spec tree is not mutated while a verification runs.
        self._tables: dict[int, AllowedElements] = {}

    def verify_section(self, config: Section, spec: Section) -> None:
        """Check *config* and every section below it, depth first.

        Levels are kept on an explicit stack, so the nesting depth is not
        bounded by the interpreter's recursion limit. A level's required
        elements are checked once all of its children are done.
        """
        levels = [_Level(config, spec, self._allowed(spec))]
        while levels:
            level = levels[-1]
            element = next(level.pending, None)
            if element is None:
                _check_required(level.config, level.spec, level.seen_directives, level.seen_sections)
                levels.pop()
                continue
            nested = self._check_element(level, element)
            if nested is not None:
                section, section_spec = nested
                levels.append(_Level(section, section_spec, self._allowed(section_spec)))

    def _check_element(self, level: _Level, element: Element) -> tuple[Section, Section] | None:
        """Check one child of *level*; for a section, return it with the spec of its body."""
        config = level.config
        allowed = level.allowed
        if element.kind == "directive":
            declaration = self._lookup(
                config, element, allowed, DeclarationKind.SINGLE_DIRECTIVE, DeclarationKind.MULTI_DIRECTIVE
            )
            _check_arguments(element, declaration)
            level.seen_directives.add(element.name)
            return None
        if element.kind == "unnamed_section":
            declaration = self._lookup(
                config, element, allowed, DeclarationKind.SINGLE_SECTION, DeclarationKind.MULTI_SECTION
            )
        elif element.kind == "named_section":
            declaration = allowed.get(element.name, {}).get(DeclarationKind.NAMED_SECTION)
            if declaration is None:
                raise _unknown(element)
            _check_unique_argument(element, level.named_lines)
        else:
            raise AssertionError(f"unexpected element kind {element.kind!r}")
        level.seen_sections.add(element.name)
        return element, self._section_spec(declaration)

    def _allowed(self, spec: Section) -> AllowedElements:
        key = id(spec)
        if key not in self._tables:
            self._tables[key] = allowed_elements(spec)
        return self._tables[key]

    def _lookup(
        self,
        config: Section,
        element: Directive | UnnamedSection,
        allowed: AllowedElements,
        single: DeclarationKind,
        multi: DeclarationKind,
    ) -> Declaration:
        """Find the declaration for a directive or unnamed section.

        An element that occurs more than once needs a Multi declaration. A
        single occurrence prefers the Single declaration and otherwise falls
        back to Multi, in which case the name is marked multiple.
        """
        record = allowed.get(element.name, {})
        occurrences = config.children_named(element.name, kind=element.kind)

        if len(occurrences) > 1:
            declaration = record.get(multi)
            if declaration is not None:
                return declaration
            if single in record:
                second = occurrences[1]
                raise MultiplicityError(
                    f"{element.name}: specified {len(occurrences)} times but allowed only once"
                    f" (second occurrence at line {second.line})",
                    element.name,
                    second.line,
                )
            raise _unknown(element)

        declaration = record.get(single)
        if declaration is None:
            declaration = record.get(multi)
            if declaration is not None:
                config.make_multiple(element.name)
        if declaration is None:
            raise _unknown(element)
        return declaration

    def _section_spec(self, declaration: Declaration) -> Section:
        """Return the spec section describing a declared section's content."""
        if declaration.element.kind == "directive":
            meta = self._metas.get(declaration.meta) if declaration.meta is not None else None
            if meta is None:
                raise SpecCompileError(
                    f"MetaSection for reference {declaration.meta} not found at line {declaration.element.line}",
                    declaration.element.line,
                )
            return meta
        return declaration.element


def _unknown(element: Directive | UnnamedSection | NamedSection) -> UnknownElementError:
    return UnknownElementError(
        f"{element.name}: unknown element at line {element.line}",
        element.name,
        element.line,
    )


def _check_unique_argument(element: NamedSection, named_lines: dict[tuple[str, str], int]) -> None:
    key = (element.name, element.argument)
    if key in named_lines:
        raise DuplicateSectionError(
            f"{element.name}: section with argument '{element.argument}' at line {element.line}"
            f" already defined at line {named_lines[key]}",
            element.name,
            element.line,
        )
    named_lines[key] = element.line


def _check_arguments(directive: Directive, declaration: Declaration) -> None:
    """Match a directive's arguments against the declared pattern list.

    ``optional`` permits the actual arguments to stop (or to run past the
    declared patterns) from that point on. ``etc`` repeats the preceding
    pattern for all remaining arguments and ends the check.
    """
    arguments = directive.arguments
    patterns = declaration.patterns
    optional_seen = False
    position = 0

    for index, pattern in enumerate(patterns):
        if pattern == ETC:
            if index == 0 or is_marker(patterns[index - 1]):
                raise SpecCompileError(
                    f"{declaration.name}: 'etc' must follow a pattern at line {declaration.element.line}",
                    declaration.element.line,
                )
            for value in arguments[position:]:
                _check_value(directive, declaration, patterns[index - 1], value)
            return

        if pattern == OPTIONAL:
            optional_seen = True
            continue

        if position >= len(arguments):
            if optional_seen:
                return
            raise ArgumentCountError(
                f"{directive.name}: too few arguments at line {directive.line}",
                directive.name,
                directive.line,
            )

        _check_value(directive, declaration, pattern, arguments[position])
        position += 1

    if position < len(arguments) and not optional_seen:
        raise ArgumentCountError(
            f"{directive.name}: too many arguments at line {directive.line}",
            directive.name,
            directive.line,
        )


def _check_value(directive: Directive, declaration: Declaration, pattern: str, value: str) -> None:
    try:
        matched = pattern_matches(pattern, value)
    except ValueError as exc:
        raise SpecCompileError(
            f"{declaration.name}: {exc} at line {declaration.element.line}",
            declaration.element.line,
        ) from exc
    if not matched:
        raise ArgumentPatternError(
            f"{directive.name}: invalid argument '{value}' at line {directive.line}",
            directive.name,
            value,
            directive.line,
        )


def _check_required(config: Section, spec: Section, seen_directives: set[str], seen_sections: set[str]) -> None:
    """Ensure every name listed in RequiredDirectives/RequiredSections appeared.

    The error carries the opening line of *config*. At the top level it carries
    no line, since the synthesized root does not start on a source line.
    """
    where = "" if config.line == 0 else f" in section <{config.name}> at line {config.line}"
    line = config.line or None
    for required in spec.children:
        if required.kind != "directive":
            continue
        if required.name == REQUIRED_DIRECTIVES:
            for name in required.arguments:
                if name not in seen_directives:
                    raise MissingRequiredError(f"Required directive {name} not specified{where}", name, line)
        elif required.name == REQUIRED_SECTIONS:
            for name in required.arguments:
                if name not in seen_sections:
                    raise MissingRequiredError(f"Required section {name} not specified{where}", name, line)
