#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any, Generic, NoReturn

from ._policy import UseAfterRelease, check, violation
from .meta import MISSING

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if sys.version_info >= (3, 11):
    from typing import final
else:
    from typing_extensions import final

if TYPE_CHECKING:
    from types import TracebackType

    from ._state import AccessState
    from .meta import MissingType

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

_T = TypeVar("_T", default=object)


def _pop(states: list[AccessState[_T]], /) -> AccessState[_T] | None:
    try:
        return states.pop()
    except IndexError:
        return None


def _peek(states: list[AccessState[_T]], /) -> AccessState[_T] | None:
    try:
        return states[0]
    except IndexError:
        return None


def _object_repr(handle: SharedHandle[Any] | ExclusiveHandle[Any]) -> str:
    cls = handle.__class__
    cls_repr = f"{cls.__module__}.{cls.__qualname__}"

    value = handle._value

    if handle._state and value is not MISSING:
        object_repr = f"{cls_repr}({value!r})"
        extra = "live"
    else:
        object_repr = f"{cls_repr}()"
        extra = "released"

    return f"<{object_repr} at {id(handle):#x} [{extra}]>"


@final
class SharedHandle(Generic[_T]):
    """
    A read-only view of a cell's value.

    Any number of shared handles may be live at once, as long as no exclusive
    handle is. Obtained through :meth:`Cell.borrow_shared` or
    :meth:`SharedHandle.clone`, and released exactly once: explicitly, on
    leaving a :keyword:`with` block, or when garbage collected.

    Read-only means the handle cannot rebind the value; a mutable object can
    still be changed in place through it.

    Example:
      >>> from borrowcell import Cell
      >>> cell = Cell([1, 2, 3])
      >>> with cell.borrow_shared() as a, cell.borrow_shared() as b:
      ...     cell.count
      ...     a.value is b.value
      2
      True
      >>> cell.count
      0
    """

    __slots__ = (
        "__weakref__",
        "_state",
        "_value",
    )

    # at most one element; popping it is the atomic "release" step
    _state: list[AccessState[_T]]
    _value: _T | MissingType

    def __new__(cls, /, *args: Any, **kwargs: Any) -> NoReturn:
        msg = (
            f"cannot create '{cls.__module__}.{cls.__qualname__}' instances"
            "; use Cell.borrow_shared() instead"
        )
        raise TypeError(msg)

    @classmethod
    def _new(cls, state: AccessState[_T], value: _T, /) -> Self:
        self = object.__new__(cls)

        self._state = [state]
        self._value = value

        return self

    def __init_subclass__(cls, /, **kwargs: Any) -> NoReturn:
        bcs = SharedHandle
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __del__(self, /) -> None:
        if getattr(self, "_state", None):
            self._release(strict=False)

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}; use clone() for another shared view"
        raise TypeError(msg)

    def __copy__(self, /) -> NoReturn:
        msg = f"cannot copy {self!r}; use clone() for another shared view"
        raise TypeError(msg)

    def __deepcopy__(self, /, memo: dict[int, Any]) -> NoReturn:
        msg = f"cannot copy {self!r}; use clone() for another shared view"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        return _object_repr(self)

    def __enter__(self, /) -> Self:
        check(
            bool(self._state),
            "cannot enter a released shared handle",
            UseAfterRelease,
        )

        return self

    async def __aenter__(self, /) -> Self:
        return self.__enter__()

    def __exit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self._release(strict=False)

    async def __aexit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self._release(strict=False)

    def _release(self, /, *, strict: bool) -> None:
        state = _pop(self._state)

        if state is None:
            if strict:
                violation("the shared handle has already been released")

            return

        self._value = MISSING

        count = state.release_shared()

        check(
            count > 0,
            f"cannot release a shared borrow (access count {count})",
        )

    def release(self, /) -> None:
        """
        End this shared borrow.

        Releasing the same handle twice is a violation, as is a release that
        finds no shared borrow on the counter.
        """

        self._release(strict=True)

    def get(self, /) -> _T:
        """
        Return the borrowed value.
        """

        value = self._value

        check(
            value is not MISSING,
            "cannot read through a released shared handle",
            UseAfterRelease,
        )

        return value

    def clone(self, /) -> SharedHandle[_T]:
        """
        Return another shared handle to the same value.

        Goes through the access counter, so the new handle is accounted for
        before it is returned.
        """

        state = _peek(self._state)

        if state is None:
            violation(
                "cannot clone a released shared handle",
                UseAfterRelease,
            )

        value = self._value

        count = state.acquire_shared()

        if count <= 0:
            if count == 0:
                state.release_shared()

            msg = f"cannot clone a shared borrow (access count {count})"
            violation(msg)

        return self._new(state, value)

    def move(self, /) -> SharedHandle[_T]:
        """
        Transfer this borrow to a new handle and invalidate this one.
        """

        value = self._value

        state = _pop(self._state)

        if state is None:
            violation(
                "cannot move from a released shared handle",
                UseAfterRelease,
            )

        self._value = MISSING

        return self._new(state, value)

    @property
    def value(self, /) -> _T:
        """
        The borrowed value (read-only).
        """

        return self.get()

    @property
    def released(self, /) -> bool:
        """
        Whether this handle no longer holds a borrow.
        """

        return not self._state


@final
class ExclusiveHandle(Generic[_T]):
    """
    A read-write view of a cell's value.

    While it is live, no other handle to the same cell may exist, and the
    cell itself does not hold the value. On release, the (possibly replaced)
    value is put back into the cell.

    Example:
      >>> from borrowcell import Cell
      >>> cell = Cell(1)
      >>> with cell.borrow_exclusive() as handle:
      ...     handle.value += 1
      >>> cell.get()
      2
    """

    __slots__ = (
        "__weakref__",
        "_state",
        "_value",
    )

    _state: list[AccessState[_T]]
    _value: _T | MissingType

    def __new__(cls, /, *args: Any, **kwargs: Any) -> NoReturn:
        msg = (
            f"cannot create '{cls.__module__}.{cls.__qualname__}' instances"
            "; use Cell.borrow_exclusive() instead"
        )
        raise TypeError(msg)

    @classmethod
    def _new(cls, state: AccessState[_T], value: _T, /) -> Self:
        self = object.__new__(cls)

        self._state = [state]
        self._value = value

        return self

    def __init_subclass__(cls, /, **kwargs: Any) -> NoReturn:
        bcs = ExclusiveHandle
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __del__(self, /) -> None:
        if getattr(self, "_state", None):
            self._release(strict=False)

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __copy__(self, /) -> NoReturn:
        msg = f"cannot copy {self!r}"
        raise TypeError(msg)

    def __deepcopy__(self, /, memo: dict[int, Any]) -> NoReturn:
        msg = f"cannot copy {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        return _object_repr(self)

    def __enter__(self, /) -> Self:
        check(
            bool(self._state),
            "cannot enter a released exclusive handle",
            UseAfterRelease,
        )

        return self

    async def __aenter__(self, /) -> Self:
        return self.__enter__()

    def __exit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self._release(strict=False)

    async def __aexit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self._release(strict=False)

    def _release(self, /, *, strict: bool) -> None:
        state = _pop(self._state)

        if state is None:
            if strict:
                violation("the exclusive handle has already been released")

            return

        value = self._value
        self._value = MISSING

        count = state.release_exclusive(value)

        check(
            count == -1,
            f"cannot release an exclusive borrow (access count {count})",
        )

    def release(self, /) -> None:
        """
        End this exclusive borrow and return the value to the cell.
        """

        self._release(strict=True)

    def get(self, /) -> _T:
        check(
            bool(self._state),
            "cannot read through a released exclusive handle",
            UseAfterRelease,
        )

        return self._value

    def set(self, /, value: _T) -> None:
        """
        Replace the borrowed value; the cell receives it on release.
        """

        check(
            bool(self._state),
            "cannot write through a released exclusive handle",
            UseAfterRelease,
        )

        self._value = value

    def move(self, /) -> ExclusiveHandle[_T]:
        """
        Transfer this borrow to a new handle and invalidate this one.
        """

        value = self._value

        state = _pop(self._state)

        if state is None:
            violation(
                "cannot move from a released exclusive handle",
                UseAfterRelease,
            )

        self._value = MISSING

        return self._new(state, value)

    @property
    def value(self, /) -> _T:
        """
        The borrowed value (read-write).
        """

        return self.get()

    @value.setter
    def value(self, /, value: _T) -> None:
        self.set(value)

    @property
    def released(self, /) -> bool:
        return not self._state
