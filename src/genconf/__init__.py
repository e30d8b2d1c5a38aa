# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsing and spec-driven verification of Apache-style configuration files."""

from genconf.errors import (
    ArgumentCountError,
    ArgumentPatternError,
    ConfigSyntaxError,
    DuplicateSectionError,
    GenconfError,
    MissingRequiredError,
    MultiplicityError,
    SpecCompileError,
    UnknownElementError,
    VerificationError,
)
from genconf.model import Directive, Element, NamedSection, Root, Section, UnnamedSection
from genconf.parser import parse

# genconf.spec must be imported before genconf.verification: the spec loader
# and the verifier depend on each other through the package initializers.
from genconf.spec import CompiledSpec, compile_spec, load_spec, verify_spec_integrity
from genconf.verification import parse_and_verify, verify
from genconf.views import ConfigView, DirectiveMode

__all__ = [
    "ArgumentCountError",
    "ArgumentPatternError",
    "CompiledSpec",
    "ConfigSyntaxError",
    "ConfigView",
    "Directive",
    "DirectiveMode",
    "DuplicateSectionError",
    "Element",
    "GenconfError",
    "MissingRequiredError",
    "MultiplicityError",
    "NamedSection",
    "Root",
    "Section",
    "SpecCompileError",
    "UnknownElementError",
    "UnnamedSection",
    "VerificationError",
    "compile_spec",
    "load_spec",
    "parse",
    "parse_and_verify",
    "verify",
    "verify_spec_integrity",
]
