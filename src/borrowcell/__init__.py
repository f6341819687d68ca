#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

"""
Runtime-checked borrowing for Python

This package provides a single owned storage slot, :class:`Cell`, whose value
may be accessed either through any number of read-only
:class:`SharedHandle` objects or through exactly one read-write
:class:`ExclusiveHandle`, never both at once. The access state is tracked
with an atomically updated counter, so the guarantee holds across threads:

* a shared borrow while an exclusive handle is live is a violation
* an exclusive borrow while any other handle is live is a violation
* releasing a handle that does not match the access state is a violation
* releasing or destroying a cell while it is borrowed is a violation
* using a handle after its release is a violation

Violations are programming errors. By default they abort the process after
logging a diagnostic with a stack trace; set the ``BORROWCELL_POLICY``
environment variable to ``raise`` to get exceptions instead (for tests), or
to ``probe`` to turn them into invalid memory reads for external analyzers.
"""

__author__: str = "borrowcell contributors"
__version__: str = "0.1.0"

from . import (  # noqa: F401
    meta,
)
from ._cell import (
    Cell as Cell,
)
from ._decorator import (
    borrowing as borrowing,
)
from ._functions import (
    borrow_exclusive as borrow_exclusive,
    borrow_shared as borrow_shared,
    release as release,
)
from ._handles import (
    ExclusiveHandle as ExclusiveHandle,
    SharedHandle as SharedHandle,
)
from ._policy import (
    AliasingViolation as AliasingViolation,
    BorrowError as BorrowError,
    UseAfterRelease as UseAfterRelease,
    ViolationPolicy as ViolationPolicy,
    current_policy as current_policy,
)
from ._state import (
    BorrowState as BorrowState,
)

# prepare for external use
meta.export(globals())
