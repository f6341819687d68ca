#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Final, Literal

if sys.version_info >= (3, 11):
    from typing import final
else:
    from typing_extensions import final

# An enum member is the only kind of singleton that type checkers can narrow
# on with `is` (see the "Support for singleton types in unions" section in
# PEP 484), so the marker is a one-member enum.


@final
class MissingType(enum.Enum):
    """
    A singleton class for :data:`MISSING`; mimics :data:`~types.NoneType`.

    Marks an empty storage slot, so that :data:`None` stays a legal value for
    a cell to own.
    """

    MISSING = object()

    def __repr__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __str__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __bool__(self, /) -> Literal[False]:
        return False


MISSING: Final[Literal[MissingType.MISSING]] = MissingType.MISSING
