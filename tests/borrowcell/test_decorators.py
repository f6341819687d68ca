#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 borrowcell contributors
# SPDX-License-Identifier: 0BSD

import asyncio

import pytest

import borrowcell

from borrowcell import AliasingViolation, borrowing


def test_shared():
    cell = borrowcell.Cell([1, 2, 3])

    @borrowing(cell)
    def total(handle, /, start=0):
        assert isinstance(handle, borrowcell.SharedHandle)
        assert cell.count == 1

        return sum(handle.value, start)

    assert total() == 6
    assert total(start=4) == 10
    assert total.__name__ == "total"
    assert cell.count == 0


def test_exclusive():
    cell = borrowcell.Cell(0)

    @borrowing(cell, exclusive=True)
    def increment(handle, /, step=1):
        assert isinstance(handle, borrowcell.ExclusiveHandle)
        assert cell.count == -1

        handle.value += step

    increment()
    increment(step=2)

    assert cell.get() == 3
    assert cell.count == 0


def test_release_on_error():
    cell = borrowcell.Cell(0)

    @borrowing(cell, exclusive=True)
    def fail(handle, /):
        handle.value = 1

        raise LookupError

    with pytest.raises(LookupError):
        fail()

    assert cell.count == 0
    assert cell.get() == 1


def test_nested_exclusive():
    cell = borrowcell.Cell(0)

    @borrowing(cell, exclusive=True)
    def outer(handle, /):
        inner()

    @borrowing(cell, exclusive=True)
    def inner(handle, /):
        pass

    with pytest.raises(AliasingViolation):
        outer()

    assert cell.count == 0


def test_method():
    cell = borrowcell.Cell({})

    class Registry:
        @borrowing(cell, exclusive=True)
        def add(self, handle, /, key, value):
            assert isinstance(self, Registry)

            handle.value[key] = value

    Registry().add("key", "value")

    assert cell.get() == {"key": "value"}


def test_coroutine_function():
    cell = borrowcell.Cell(0)

    @borrowing(cell, exclusive=True)
    async def increment(handle, /):
        await asyncio.sleep(0)

        assert cell.count == -1

        handle.value += 1

    async def main():
        await increment()
        await increment()

    asyncio.run(main())

    assert cell.get() == 2
    assert cell.count == 0
