#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any, Generic, NoReturn

from ._handles import ExclusiveHandle, SharedHandle
from ._policy import check, violation
from ._state import AccessState, BorrowState
from .meta import MISSING, MissingType

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

_T = TypeVar("_T", default=object)


class Cell(Generic[_T]):
    """
    A single owned value that is lent out either to any number of shared
    handles or to exactly one exclusive handle, never both.

    The cell keeps an access count: ``0`` when nothing is borrowed, ``n`` while
    ``n`` shared handles are live, ``-1`` while an exclusive handle is live.
    Any operation whose precondition on the count does not hold is a
    violation and is reported through the process-wide policy (see
    :func:`current_policy`).

    Example:
      >>> cell = Cell(5)
      >>> with cell.borrow_exclusive() as handle:
      ...     handle.value *= 2
      >>> with cell.borrow_shared() as a, cell.borrow_shared() as b:
      ...     a.value + b.value
      20
      >>> cell.release()
      >>> cell.empty
      True
    """

    __slots__ = (
        "__weakref__",
        "_state",
    )

    def __new__(cls, /, value: _T | MissingType = MISSING) -> Self:
        """
        Create a cell owning *value*, or an empty one if it is omitted.
        """

        self = object.__new__(cls)

        self._state = AccessState(value)

        return self

    def __del__(self, /) -> None:
        state = getattr(self, "_state", None)

        if state is not None:
            count = state.count

            check(
                count == 0,
                f"cell destroyed while borrowed (access count {count})",
            )

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}; a cell is the single owner"
        raise TypeError(msg)

    def __copy__(self, /) -> NoReturn:
        msg = f"cannot copy {self!r}; use move() to transfer ownership"
        raise TypeError(msg)

    def __deepcopy__(self, /, memo: dict[int, Any]) -> NoReturn:
        msg = f"cannot copy {self!r}; use move() to transfer ownership"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        state = self._state
        value = state.value
        count = state.count

        if value is MISSING:
            object_repr = f"{cls_repr}()"
        else:
            object_repr = f"{cls_repr}({value!r})"

        if count > 0:
            extra = f"shared={count}"
        elif count < 0:
            extra = "exclusive"
        elif value is MISSING:
            extra = "empty"
        else:
            extra = "neutral"

        return f"<{object_repr} at {id(self):#x} [{extra}]>"

    def _lock_neutral(self, action: str, /) -> AccessState[_T]:
        # a transient exclusive borrow, so that no handle can be created while
        # the owner touches the slot
        state = self._state

        count = state.acquire_exclusive()

        check(
            count == 0,
            f"cannot {action} a borrowed cell (access count {count})",
        )

        return state

    def set(self, /, value: _T) -> None:
        """
        Store *value*, dropping the previous contents.

        Only legal while nothing is borrowed.
        """

        state = self._lock_neutral("set the value of")
        state.release_exclusive(value)

    def get(self, /) -> _T:
        """
        Return the owned value directly.

        Only legal while nothing is borrowed; the caller must not keep using
        the result once it starts lending the cell out.
        """

        state = self._state

        count = state.acquire_shared()

        try:
            check(
                count == 0,
                f"cannot access a borrowed cell (access count {count})",
            )

            value = state.value
        finally:
            if count >= 0:
                state.release_shared()

        check(value is not MISSING, "cannot access an empty cell")

        return value

    def borrow_shared(self, /) -> SharedHandle[_T]:
        """
        Return a new read-only handle to the value.

        A violation if an exclusive handle is live or the cell is empty.
        """

        state = self._state

        count = state.acquire_shared()

        check(
            count >= 0,
            "cannot share a cell while it is borrowed as exclusive",
        )

        value = state.value

        if value is MISSING:
            state.release_shared()

            violation("cannot borrow an empty cell")

        return SharedHandle._new(state, value)

    def borrow_exclusive(self, /) -> ExclusiveHandle[_T]:
        """
        Return the only read-write handle to the value.

        The value leaves the cell until the handle is released. A violation if
        any other handle is live or the cell is empty.
        """

        state = self._state

        count = state.acquire_exclusive()

        if count > 0:
            msg = (
                "cannot borrow a cell as exclusive while it is borrowed as"
                f" shared ({count} live handle(s))"
            )
            violation(msg)

        check(count == 0, "cannot borrow a cell as exclusive twice")

        value = state.value

        if value is MISSING:
            state.release_exclusive()

            violation("cannot borrow an empty cell")

        state.value = MISSING

        return ExclusiveHandle._new(state, value)

    def release(self, /) -> None:
        """
        Drop the owned value, leaving the cell empty.

        Only legal while nothing is borrowed. Releasing an empty cell does
        nothing.
        """

        state = self._lock_neutral("release")
        state.release_exclusive(MISSING)

    def move(self, /) -> Self:
        """
        Transfer the owned value to a new cell, leaving this one empty.

        Only legal while nothing is borrowed.
        """

        state = self._lock_neutral("move")

        try:
            value = state.value
        finally:
            state.release_exclusive(MISSING)

        return self.__class__(value)

    @property
    def count(self, /) -> int:
        """
        The current access count.
        """

        return self._state.count

    @property
    def state(self, /) -> BorrowState:
        """
        The current access count as a :class:`BorrowState`.
        """

        return self._state.state

    @property
    def empty(self, /) -> bool:
        """
        Whether the cell holds no value.

        Also true while the value is lent to an exclusive handle.
        """

        return self._state.value is MISSING
