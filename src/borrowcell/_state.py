#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from _thread import allocate_lock
from typing import TYPE_CHECKING, Any, Generic, NoReturn

from .meta import MISSING, MissingType

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if sys.version_info >= (3, 11):
    from typing import final
else:
    from typing_extensions import final

if TYPE_CHECKING:
    from _thread import LockType

_T = TypeVar("_T", default=object)


@final
class BorrowState(enum.Enum):
    """
    The typed view of an access counter.

    Example:
      >>> BorrowState.of(0)
      borrowcell.BorrowState.NEUTRAL
      >>> BorrowState.of(2)
      borrowcell.BorrowState.SHARED
      >>> BorrowState.of(-1)
      borrowcell.BorrowState.EXCLUSIVE
    """

    NEUTRAL = "neutral"
    SHARED = "shared"
    EXCLUSIVE = "exclusive"

    def __repr__(self, /) -> str:
        cls = self.__class__

        return f"{cls.__module__}.{cls.__qualname__}.{self._name_}"

    @classmethod
    def of(cls, count: int, /) -> BorrowState:
        if count == 0:
            return cls.NEUTRAL

        if count > 0:
            return cls.SHARED

        if count == -1:
            return cls.EXCLUSIVE

        msg = f"{count!r} is not a valid access count"
        raise ValueError(msg)


@final
class AccessState(Generic[_T]):
    """
    An access counter together with the storage slot it guards.

    The counter is ``0`` when nothing is borrowed, ``n > 0`` while ``n``
    shared handles are live and ``-1`` while an exclusive handle is live.
    Each ``acquire_*``/``release_*`` method is a single compare-and-update:
    the counter only changes if the expected precondition holds, and the
    value observed before the update is returned either way so that the
    caller can report a mismatch.
    """

    __slots__ = (
        "__weakref__",
        "_count",
        "_lock",
        "value",
    )

    _count: int
    _lock: LockType
    value: _T | MissingType

    def __init__(self, /, value: _T | MissingType = MISSING) -> None:
        # a raw `_thread` lock, since third-party patchers may replace the
        # ones from the threading module
        self._lock = allocate_lock()
        self._count = 0

        self.value = value

    def __init_subclass__(cls, /, **kwargs: Any) -> NoReturn:
        bcs = AccessState
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        return f"<{cls_repr} object count={self._count!r} at {id(self):#x}>"

    def acquire_shared(self, /) -> int:
        with self._lock:
            count = self._count

            if count >= 0:
                self._count = count + 1

        return count

    def release_shared(self, /) -> int:
        with self._lock:
            count = self._count

            if count > 0:
                self._count = count - 1

        return count

    def acquire_exclusive(self, /) -> int:
        with self._lock:
            count = self._count

            if count == 0:
                self._count = -1

        return count

    def release_exclusive(self, /, value: _T | MissingType = MISSING) -> int:
        # the slot is written only if the release is legal, and before the
        # counter allows new borrows
        with self._lock:
            count = self._count

            if count == -1:
                self.value = value
                self._count = 0

        return count

    @property
    def count(self, /) -> int:
        return self._count

    @property
    def state(self, /) -> BorrowState:
        return BorrowState.of(self._count)
