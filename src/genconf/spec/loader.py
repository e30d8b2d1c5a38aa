# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of specification text into a verified spec tree."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from genconf.errors import GenconfError, SpecCompileError
from genconf.model.elements import NamedSection, UnnamedSection
from genconf.parser.parser import parse
from genconf.spec.bootstrap import bootstrap_tree
from genconf.spec.integrity import verify_spec_integrity
from genconf.spec.keywords import meta_sections
from genconf.verification.verifier import parse_and_verify, verify

# ###############
# Public Interface
# ###############


class CompiledSpec:
    """A specification that passed bootstrap verification and integrity checks.

    The spec tree is shared by every verification that uses it and must not
    be modified.
    """

    def __init__(self, root: UnnamedSection) -> None:
        self._root = root
        self._meta_sections = MappingProxyType(meta_sections(root))

    @property
    def root(self) -> UnnamedSection:
        """The root section of the spec tree."""
        return self._root

    @property
    def meta_sections(self) -> Mapping[str, NamedSection]:
        """Top-level MetaSection blocks keyed by name."""
        return self._meta_sections

    def meta_section(self, name: str) -> NamedSection:
        """Return the MetaSection called *name*.

        Raises:
            KeyError: If no such MetaSection is declared.
        """
        return self._meta_sections[name]

    def parse(self, text: str) -> UnnamedSection:
        """Parse configuration text and verify it against this spec."""
        return parse_and_verify(text, self)

    def parse_file(self, path: Path) -> UnnamedSection:
        """Read a UTF-8 configuration file and verify it against this spec.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        return self.parse(path.read_text(encoding="utf-8"))

    def __repr__(self) -> str:
        return f"CompiledSpec(declarations={len(self._root.children)}, meta_sections={sorted(self._meta_sections)})"


def compile_spec(text: str) -> CompiledSpec:
    """Compile specification text.

    Steps:
    1. Parse the built-in bootstrap spec (once per process).
    2. Parse *text*.
    3. Verify the parsed spec against the bootstrap spec.
    4. Check the referential integrity of the parsed spec.

    Args:
        text: Specification text in the configuration language.

    Returns:
        The compiled spec, ready to verify configuration data.

    Raises:
        SpecCompileError: If any step fails. Errors raised by the parser or
            the verifier are available as ``cause``.
    """
    try:
        spec_root = parse(text)
        verify(spec_root, bootstrap_tree())
    except SpecCompileError:
        raise
    except GenconfError as exc:
        raise SpecCompileError(f"Invalid grammar specification: {exc}", exc.line, cause=exc) from exc
    verify_spec_integrity(spec_root)
    return CompiledSpec(spec_root)


def load_spec(path: Path) -> CompiledSpec:
    """Read and compile a UTF-8 specification file.

    Raises:
        SpecCompileError: If the file cannot be read, is not valid UTF-8, or
            does not compile.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecCompileError(f"Cannot read spec file '{path}': {exc}") from exc
    return compile_spec(text)
