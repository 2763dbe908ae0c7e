# tests/core/test_result.py
"""Testes das formas de resultado (Ok/Err/NonEmptyList)."""

import dataclasses

import pytest

from orderflow.core.result import Err, NonEmptyList, Ok


def test_ok_and_err_flags():
    assert Ok(1).is_ok is True
    assert Err("x").is_ok is False


def test_ok_is_immutable():
    ok = Ok(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ok.value = 2  # type: ignore[misc]


def test_non_empty_list_rejects_empty():
    with pytest.raises(ValueError):
        NonEmptyList([])


def test_non_empty_list_preserves_order_and_head():
    items = NonEmptyList(["a", "b", "c"])
    assert list(items) == ["a", "b", "c"]
    assert items.head == "a"
    assert len(items) == 3
    assert isinstance(items, tuple)


def test_non_empty_list_accepts_generators():
    items = NonEmptyList(x * 2 for x in range(3))
    assert tuple(items) == (0, 2, 4)
