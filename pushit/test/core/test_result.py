"""Tests for pushit.core.result module."""

import pytest

from pushit.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    def test_value_and_flags(self) -> None:
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap(self) -> None:
        assert Ok("v1.2.3").unwrap() == "v1.2.3"

    def test_map(self) -> None:
        assert Ok(" 1.2.3\n").map(str.strip) == Ok("1.2.3")


class TestErr:
    def test_error_and_flags(self) -> None:
        result = Err("boom")
        assert result.error == "boom"
        assert result.is_ok() is False
        assert result.is_err() is True

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_map_is_noop(self) -> None:
        result: Result[int, str] = Err("boom")
        assert result.map(lambda v: v + 1) == Err("boom")


def test_type_guards() -> None:
    assert is_ok(Ok(1))
    assert not is_ok(Err(1))
    assert is_err(Err(1))
    assert not is_err(Ok(1))


def test_pattern_matching() -> None:
    match Ok("master"):
        case Ok(value):
            assert value == "master"
        case Err(_):
            pytest.fail("expected Ok")
