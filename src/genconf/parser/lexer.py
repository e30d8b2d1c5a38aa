# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner primitives for the configuration language.

Newlines are structurally significant, so the text is not tokenized up
front. Instead the parser asks the scanner for the construct it expects at
the current position (an identifier, an argument, a literal) and the
scanner skips horizontal whitespace before each attempt.
"""

import enum
import re
from dataclasses import dataclass

from genconf.errors import ConfigSyntaxError

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """Kinds of lexemes the scanner can produce."""

    IDENTIFIER = "IDENTIFIER"
    BARE = "BARE"
    QUOTED = "QUOTED"


@dataclass(frozen=True)
class Token:
    """A lexeme with its source location.

    Attributes:
        type: The kind of lexeme.
        value: The raw text, or the unquoted content for QUOTED tokens.
        line: 1-based line number where the lexeme starts.
        column: 1-based column number where the lexeme starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


@dataclass(frozen=True)
class Mark:
    """A saved scanner position used to backtrack uncommitted alternatives."""

    pos: int
    line: int
    column: int


class Scanner:
    """Cursor over configuration text with 1-based line and column tracking."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    def mark(self) -> Mark:
        """Return the current position so that it can be restored later."""
        return Mark(self._pos, self._line, self._column)

    def reset(self, mark: Mark) -> None:
        """Rewind to a position previously returned by :meth:`mark`."""
        self._pos = mark.pos
        self._line = mark.line
        self._column = mark.column

    def error(self, message: str) -> ConfigSyntaxError:
        """Build a syntax error located at the current position."""
        return ConfigSyntaxError(message, self._line, self._column)

    # ------------------------------------------------------------------
    # Character access
    # ------------------------------------------------------------------

    def at_end(self) -> bool:
        """Return True if all input has been consumed."""
        return self._pos >= len(self._source)

    def current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def describe_current(self) -> str:
        """Return a printable description of the current character."""
        ch = self.current()
        if ch == "":
            return "end of input"
        if ch == "\n":
            return "end of line"
        return repr(ch)

    # ------------------------------------------------------------------
    # Whitespace, newlines, comments
    # ------------------------------------------------------------------

    def skip_horizontal(self) -> None:
        """Skip spaces, tabs and carriage returns, never newlines."""
        while not self.at_end() and self.current() in _HORIZONTAL_WHITESPACE:
            self._advance()

    def at_line_end(self) -> bool:
        """Skip horizontal whitespace and report whether a line ends here.

        End of input also counts as the end of a line.
        """
        self.skip_horizontal()
        return self.at_end() or self.current() == "\n"

    def match_line_end(self) -> bool:
        """Consume the end of the current line if nothing else remains on it."""
        if not self.at_line_end():
            return False
        if not self.at_end():
            self._advance()
        return True

    def skip_rest_of_line(self) -> None:
        """Consume everything up to, but not including, the next newline."""
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = len(self._source)
        self._consume(end - self._pos)

    # ------------------------------------------------------------------
    # Lexemes
    # ------------------------------------------------------------------

    def check_literal(self, text: str) -> bool:
        """Skip horizontal whitespace and report whether *text* follows."""
        self.skip_horizontal()
        return self._source.startswith(text, self._pos)

    def match_literal(self, text: str) -> bool:
        """Consume *text* if it follows the skipped horizontal whitespace."""
        if not self.check_literal(text):
            return False
        self._consume(len(text))
        return True

    def match_identifier(self) -> Token | None:
        """Consume an identifier (``[a-zA-Z][a-zA-Z0-9_-]*``) if one follows."""
        self.skip_horizontal()
        return self._match_pattern(_IDENTIFIER, TokenType.IDENTIFIER)

    def match_argument(self) -> Token | None:
        """Consume a quoted or bare argument if one follows.

        Raises:
            ConfigSyntaxError: If a quoted argument is not closed on its line.
        """
        self.skip_horizontal()
        if not self.at_end() and self.current() in _QUOTES:
            return self._scan_quoted()
        return self._match_pattern(_BARE_ARGUMENT, TokenType.BARE)

    # ################
    # Implementation
    # ################

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _consume(self, count: int) -> str:
        start = self._pos
        for _ in range(count):
            self._advance()
        return self._source[start : self._pos]

    def _match_pattern(self, pattern: re.Pattern[str], token_type: TokenType) -> Token | None:
        match = pattern.match(self._source, self._pos)
        if match is None:
            return None
        line, col = self._line, self._column
        return Token(token_type, self._consume(match.end() - match.start()), line, col)

    def _scan_quoted(self) -> Token:
        """Scan a single- or double-quoted argument.

        A backslash before the delimiter or before another backslash yields
        that character; other backslash sequences are kept verbatim.
        """
        line, col = self._line, self._column
        delimiter = self._advance()
        chars: list[str] = []
        while not self.at_end():
            ch = self.current()
            if ch == delimiter:
                self._advance()
                return Token(TokenType.QUOTED, "".join(chars), line, col)
            if ch == "\n":
                break
            if ch == "\\" and self._pos + 1 < len(self._source):
                following = self._source[self._pos + 1]
                if following in (delimiter, "\\"):
                    self._advance()
                    chars.append(self._advance())
                    continue
            chars.append(self._advance())
        raise ConfigSyntaxError("Unterminated quoted argument", line, col)


_HORIZONTAL_WHITESPACE = " \t\r"
_QUOTES = "\"'"
_IDENTIFIER = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]*")
_BARE_ARGUMENT = re.compile(r"[^\s,<>]+")
