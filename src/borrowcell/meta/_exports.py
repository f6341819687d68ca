#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from types import FunctionType, ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import MutableMapping
    else:
        from typing import MutableMapping


def _issubmodule(module_name: str | None, package_name: str, /) -> bool:
    return module_name is not None and (
        module_name == package_name
        or module_name.startswith(f"{package_name}.")
    )


def _export_one(package_name: str, name: str, value: object, /) -> None:
    # Only classes and plain functions are touched: enum members, loggers and
    # other singletons may expose a read-only `__module__`.

    if isinstance(value, (type, FunctionType)):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        if isinstance(value, type):
            for attr_name, attr_value in {**vars(value)}.items():
                if attr_name.startswith("_"):
                    continue

                if isinstance(attr_value, FunctionType):
                    attr_value.__qualname__ = f"{name}.{attr_name}"
                    attr_value.__module__ = package_name

        value.__qualname__ = name
        value.__module__ = package_name


def export(
    package_namespace: ModuleType | MutableMapping[str, object],
    /,
) -> None:
    """
    Prepare *package_namespace* for external use.

    Every public member re-exported from a private submodule
    (``package._impl``) is updated to look as if it were defined directly in
    the package, so that representations and tracebacks show
    ``package.Name`` instead of ``package._impl.Name``. Also builds
    :keyword:`__all__ <import>` from the public non-module names.

    Typical usage: ``export(globals())`` at the end of ``__init__.py``.
    """

    if TYPE_CHECKING:
        return

    if isinstance(package_namespace, ModuleType):
        package_name = package_namespace.__name__
        package_namespace = vars(package_namespace)
    else:
        package_name = package_namespace["__name__"]

    public_names = []

    for name, value in {**package_namespace}.items():
        if name.startswith("_"):
            continue

        if isinstance(value, ModuleType):
            continue

        _export_one(package_name, name, value)

        public_names.append(name)

    package_namespace["__all__"] = tuple(sorted(public_names))
