#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import os
import sys
import warnings

from logging import Logger, getLogger, shutdown
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from typing import NoReturn

if sys.version_info >= (3, 11):
    from typing import final
else:
    from typing_extensions import final

LOGGER: Final[Logger] = getLogger(__name__)


class BorrowError(RuntimeError):
    """
    Base class for errors raised under the ``raise`` policy.
    """


class AliasingViolation(BorrowError):
    """
    An access state precondition does not hold: an exclusive borrow while
    another handle is live, a shared borrow during an exclusive one, a
    release that does not match the counter, or destruction of a borrowed
    cell.
    """


class UseAfterRelease(BorrowError):
    """
    A handle was used after its release (or after it was moved from).
    """


@final
class ViolationPolicy(enum.Enum):
    """
    What happens when a violation is detected.
    """

    FATAL = "fatal"
    PROBE = "probe"
    RAISE = "raise"

    def __repr__(self, /) -> str:
        cls = self.__class__

        return f"{cls.__module__}.{cls.__qualname__}.{self._name_}"


def _read_policy() -> ViolationPolicy:
    name = os.getenv("BORROWCELL_POLICY", "").strip().lower()

    if not name:
        return ViolationPolicy.FATAL

    try:
        policy = ViolationPolicy(name)
    except ValueError:
        warnings.warn(
            f"unknown BORROWCELL_POLICY value {name!r}, using 'fatal'",
            RuntimeWarning,
            stacklevel=2,
        )

        return ViolationPolicy.FATAL

    if policy is ViolationPolicy.PROBE:
        warnings.warn(
            "BORROWCELL_POLICY=probe turns violations into invalid memory"
            " reads and must not be used in production",
            RuntimeWarning,
            stacklevel=2,
        )

    return policy


# fixed for the lifetime of the process
_POLICY: Final[ViolationPolicy] = _read_policy()


def current_policy() -> ViolationPolicy:
    """
    Return the violation policy selected for the current process.

    The policy is read from the ``BORROWCELL_POLICY`` environment variable
    (``fatal``, ``probe`` or ``raise``; ``fatal`` by default) when the package
    is first imported, and cannot be changed afterwards.

    Example:
      >>> current_policy() in set(ViolationPolicy)
      True
    """

    return _POLICY


def _fatal(message: str, category: type[BorrowError], /) -> NoReturn:
    LOGGER.critical(
        "%s: %s",
        category.__name__,
        message,
        stack_info=True,
        stacklevel=3,
    )

    # flush every handler before the process goes away
    shutdown()
    sys.stderr.flush()

    os.abort()


def _probe(message: str, category: type[BorrowError], /) -> NoReturn:
    import ctypes
    import faulthandler

    if not faulthandler.is_enabled():
        faulthandler.enable()

    # strlen(NULL): an unconditional read of address zero
    ctypes.string_at(0)

    # not reached where the read faults
    raise category(message)


def _raise(message: str, category: type[BorrowError], /) -> NoReturn:
    raise category(message)


if _POLICY is ViolationPolicy.RAISE:
    _report = _raise
elif _POLICY is ViolationPolicy.PROBE:
    _report = _probe
else:
    _report = _fatal


def violation(
    message: str,
    category: type[BorrowError] = AliasingViolation,
    /,
) -> NoReturn:
    """
    Report a violation through the selected policy.

    The unconditional form of :func:`check`, for branches that undo a counter
    update first or that rely on it not returning.

    Never returns normally: the process is aborted (``fatal``), crashed
    (``probe``), or *category* is raised (``raise``).
    """

    _report(message, category)


def check(
    condition: bool,
    message: str,
    category: type[BorrowError] = AliasingViolation,
    /,
) -> None:
    """
    Report a violation unless *condition* is true.
    """

    if not condition:
        _report(message, category)
