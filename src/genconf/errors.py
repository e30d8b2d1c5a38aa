# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy shared by the parser, spec loader, and verifier."""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class GenconfError(Exception):
    """Base class for every error raised by genconf.

    Attributes:
        message: Human-readable description of the error.
        line: 1-based source line the error refers to, or None.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line


class ConfigSyntaxError(GenconfError):
    """Raised when text does not conform to the configuration grammar.

    Attributes:
        column: 1-based column where the offending construct starts.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}", line)
        self.column = column


class SpecCompileError(GenconfError):
    """Raised when a specification cannot be compiled.

    Covers syntax errors in the spec text, violations of the bootstrap
    grammar, and broken references between spec declarations.

    Attributes:
        cause: The underlying error, if the failure was detected by the
            parser or the verifier.
    """

    def __init__(self, message: str, line: int | None = None, cause: GenconfError | None = None) -> None:
        super().__init__(message, line)
        self.cause = cause


class VerificationError(GenconfError):
    """Base class for configurations that violate their specification.

    Attributes:
        name: Name of the offending directive or section.
    """

    def __init__(self, message: str, name: str, line: int | None = None) -> None:
        super().__init__(message, line)
        self.name = name


class UnknownElementError(VerificationError):
    """A directive or section has no declaration at its nesting level."""


class MultiplicityError(VerificationError):
    """An element declared as single occurs more than once."""


class DuplicateSectionError(VerificationError):
    """Two named sections share both name and argument."""


class ArgumentCountError(VerificationError):
    """A directive has too few or too many arguments."""


class ArgumentPatternError(VerificationError):
    """A directive argument does not match its declared pattern.

    Attributes:
        value: The rejected argument.
    """

    def __init__(self, message: str, name: str, value: str, line: int | None = None) -> None:
        super().__init__(message, name, line)
        self.value = value


class MissingRequiredError(VerificationError):
    """A required directive or section never appeared.

    ``line`` is the opening line of the enclosing section, or None when the
    element is missing at the top level.
    """
