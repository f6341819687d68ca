#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

"""
Helpers the package uses for its own needs: the :data:`MISSING` marker for
empty storage slots and :func:`export` for the public namespace.
"""

from ._exports import (
    export as export,
)
from ._markers import (
    MISSING as MISSING,
    MissingType as MissingType,
)

# prepare for external use
export(globals())
