#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from inspect import iscoroutinefunction
from typing import TYPE_CHECKING, Any, TypeVar

from wrapt import decorator

if sys.version_info >= (3, 9):
    from collections.abc import Callable
else:
    from typing import Callable

if TYPE_CHECKING:
    from ._cell import Cell

_CallableT = TypeVar("_CallableT", bound=Callable[..., Any])


def borrowing(
    cell: Cell[Any],
    /,
    *,
    exclusive: bool = False,
) -> Callable[[_CallableT], _CallableT]:
    """
    Borrow from *cell* for the duration of each call to the decorated
    function.

    The handle is passed as the first positional argument (after ``self``
    for methods) and is released when the call returns or raises. Works for
    both regular and coroutine functions; for the latter, the borrow spans
    the whole coroutine.

    Example:
      >>> from borrowcell import Cell
      >>> counter = Cell(0)
      >>> @borrowing(counter, exclusive=True)
      ... def increment(handle, step=1):
      ...     handle.value += step
      ...     return handle.value
      >>> increment()
      1
      >>> increment(step=2)
      3
      >>> counter.count
      0
    """

    if exclusive:
        borrow = cell.borrow_exclusive
    else:
        borrow = cell.borrow_shared

    @decorator
    async def _async_borrowing(wrapped, instance, args, kwargs, /):
        with borrow() as handle:
            return await wrapped(handle, *args, **kwargs)

    @decorator
    def _sync_borrowing(wrapped, instance, args, kwargs, /):
        with borrow() as handle:
            return wrapped(handle, *args, **kwargs)

    def _borrowing(wrapped):
        if iscoroutinefunction(wrapped):
            return _async_borrowing(wrapped)
        else:
            return _sync_borrowing(wrapped)

    return _borrowing
