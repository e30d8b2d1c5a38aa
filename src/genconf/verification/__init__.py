# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Verification of configuration trees against specifications."""

from genconf.verification.verifier import allowed_elements, parse_and_verify, verify

__all__ = [
    "allowed_elements",
    "parse_and_verify",
    "verify",
]
