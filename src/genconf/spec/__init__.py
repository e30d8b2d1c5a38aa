# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Specification language: bootstrap spec, integrity checks, and compilation."""

from genconf.spec.bootstrap import BOOTSTRAP_SPEC, bootstrap_tree
from genconf.spec.integrity import verify_spec_integrity
from genconf.spec.loader import CompiledSpec, compile_spec, load_spec

__all__ = [
    "BOOTSTRAP_SPEC",
    "CompiledSpec",
    "bootstrap_tree",
    "compile_spec",
    "load_spec",
    "verify_spec_integrity",
]
