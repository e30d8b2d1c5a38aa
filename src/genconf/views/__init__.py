# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only views over verified element trees."""

from genconf.views.projection import ConfigView, DirectiveMode, ViewItem

__all__ = [
    "ConfigView",
    "DirectiveMode",
    "ViewItem",
]
