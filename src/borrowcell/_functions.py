#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Union

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if TYPE_CHECKING:
    from ._cell import Cell
    from ._handles import ExclusiveHandle, SharedHandle

_T = TypeVar("_T", default=object)


def borrow_shared(cell: Cell[_T], /) -> SharedHandle[_T]:
    """
    Same as ``cell.borrow_shared()``.
    """

    return cell.borrow_shared()


def borrow_exclusive(cell: Cell[_T], /) -> ExclusiveHandle[_T]:
    """
    Same as ``cell.borrow_exclusive()``.
    """

    return cell.borrow_exclusive()


def release(
    obj: Union[Cell[_T], SharedHandle[_T], ExclusiveHandle[_T]],
    /,
) -> None:
    """
    Release a cell, a shared handle or an exclusive handle.

    Example:
      >>> from borrowcell import Cell
      >>> cell = Cell('value')
      >>> handle = borrow_shared(cell)
      >>> release(handle)
      >>> release(cell)
      >>> cell.empty
      True
    """

    obj.release()
