# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for the configuration language.

Converts configuration (or specification) text into an element tree rooted
at a synthesized ``__root__`` section. Open sections are kept on an explicit
stack, so nesting depth is not bounded by the interpreter's recursion limit.
"""

from genconf.errors import ConfigSyntaxError
from genconf.model.elements import (
    Directive,
    Element,
    NamedSection,
    UnnamedSection,
    make_root,
)
from genconf.parser.lexer import Scanner, Token

# ###############
# Public Interface
# ###############


def parse(source: str) -> UnnamedSection:
    """Parse configuration text into an element tree.

    Args:
        source: The full text of a configuration or specification file.

    Returns:
        The synthesized root section (name ``__root__``, line 0) holding the
        top-level elements in source order.

    Raises:
        ConfigSyntaxError: If the text is not valid configuration syntax.
    """
    return _Parser(source).parse()


# ################
# Implementation
# ################


class _Parser:
    """Recursive-descent parser over a single source text."""

    def __init__(self, source: str) -> None:
        self._scanner = Scanner(source)

    def parse(self) -> UnnamedSection:
        """Parse the whole input and return the root section."""
        root = make_root()
        # Innermost open section last; the root is never popped.
        open_sections: list[UnnamedSection | NamedSection] = [root]
        sc = self._scanner
        while True:
            current = open_sections[-1]
            sc.skip_horizontal()
            if sc.at_end():
                if current is not root:
                    raise ConfigSyntaxError(
                        f"Unterminated section <{current.name}> opened at line {current.line}",
                        sc.line,
                        sc.column,
                    )
                return root
            if sc.check_literal("</"):
                if current is root:
                    raise sc.error("Closing tag without matching opening section")
                self._parse_closing_tag(current)
                self._expect_line_end(f"closing tag of section <{current.name}>")
                open_sections.pop()
                continue
            if sc.check_literal("<"):
                section = self._parse_opening(current)
                open_sections.append(section)
                continue
            element = self._parse_element()
            if element is not None:
                current.children.append(element)

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def _parse_element(self) -> Element | None:
        """Parse a directive line. Blank lines and comments produce None."""
        sc = self._scanner
        if sc.match_line_end():
            return None
        if sc.match_literal("#"):
            # Comments commit: the rest of the line belongs to the comment.
            sc.skip_rest_of_line()
            self._expect_line_end("comment")
            return None
        directive = self._parse_directive()
        if directive is None:
            raise sc.error(f"Expected directive, section or comment, got {sc.describe_current()}")
        self._expect_line_end(f"directive '{directive.name}'")
        return directive

    def _expect_line_end(self, after: str) -> None:
        sc = self._scanner
        if not sc.match_line_end():
            raise sc.error(f"Expected end of line after {after}, got {sc.describe_current()}")

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def _parse_directive(self) -> Directive | None:
        """Parse: identifier ['='] argument-list. Returns None if no identifier follows."""
        sc = self._scanner
        name_tok = sc.match_identifier()
        if name_tok is None:
            return None
        mark = sc.mark()
        if sc.match_literal("="):
            # "name = value"; a lone "=" is itself a bare argument.
            arguments = self._parse_argument_list(name_tok)
            if arguments is None:
                sc.reset(mark)
                arguments = self._parse_argument_list(name_tok)
        else:
            arguments = self._parse_argument_list(name_tok)
        if arguments is None:
            raise sc.error(f"Expected argument for directive '{name_tok.value}', got {sc.describe_current()}")
        return Directive(name=name_tok.value, arguments=arguments, line=name_tok.line)

    def _parse_argument_list(self, name_tok: Token) -> list[str] | None:
        """Parse arguments separated by whitespace and/or single commas.

        Returns None if not even one argument follows.
        """
        sc = self._scanner
        first = sc.match_argument()
        if first is None:
            return None
        arguments = [first.value]
        while not sc.at_line_end():
            if sc.match_literal(","):
                arg = sc.match_argument()
                if arg is None:
                    raise sc.error(f"Expected argument after ',' in directive '{name_tok.value}'")
            else:
                arg = sc.match_argument()
                if arg is None:
                    raise sc.error(
                        f"Unexpected {sc.describe_current()} in arguments of directive '{name_tok.value}'"
                    )
            arguments.append(arg.value)
        return arguments

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _parse_opening(self, parent: UnnamedSection | NamedSection) -> UnnamedSection | NamedSection:
        """Parse the opening line of an unnamed (``<name>``) or named (``<name arg>``) section.

        The new section is appended to *parent*; its body is parsed by the
        caller. The rule commits as soon as the opening tag is recognised. Any
        failure after that point is a hard syntax error; no other alternative
        is tried.
        """
        sc = self._scanner
        start = sc.mark()
        opening = self._parse_opening_tag()
        if opening is None:
            sc.reset(start)
            raise sc.error("Malformed section opening tag")

        name_tok, arg_tok = opening
        section: UnnamedSection | NamedSection
        if arg_tok is None:
            section = UnnamedSection(name=name_tok.value, line=start.line)
        else:
            section = NamedSection(name=name_tok.value, argument=arg_tok.value, line=start.line)

        if not sc.match_line_end():
            raise sc.error(f"Expected end of line after opening tag of section <{section.name}>")
        parent.children.append(section)
        return section

    def _parse_opening_tag(self) -> tuple[Token, Token | None] | None:
        """Parse ``<identifier>`` or ``<identifier argument>``.

        Returns the name token and the optional argument token, or None if
        the text does not form an opening tag.
        """
        sc = self._scanner
        if not sc.match_literal("<"):
            return None
        name_tok = sc.match_identifier()
        if name_tok is None:
            return None
        if sc.match_literal(">"):
            return name_tok, None
        arg_tok = sc.match_argument()
        if arg_tok is None:
            return None
        if not sc.match_literal(">"):
            raise sc.error(f"Expected '>' to close opening tag of section <{name_tok.value}>")
        return name_tok, arg_tok

    def _parse_closing_tag(self, section: UnnamedSection | NamedSection) -> None:
        """Parse ``</name>`` and check that it closes *section*."""
        sc = self._scanner
        sc.match_literal("<")
        if not sc.match_literal("/"):
            raise sc.error(f"Expected '/' in closing tag of section <{section.name}>")
        close_tok = sc.match_identifier()
        if close_tok is None or close_tok.value != section.name:
            found = close_tok.value if close_tok is not None else sc.describe_current()
            raise sc.error(
                f"Expected </{section.name}> to close section opened at line {section.line}, got {found!r}"
            )
        if not sc.match_literal(">"):
            raise sc.error(f"Expected '>' in closing tag of section <{section.name}>")
