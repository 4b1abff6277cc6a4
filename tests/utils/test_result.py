import pytest

from yamf.utils.result import Err, Ok, UnwrapError, is_err, is_ok, propagate_result


def test_ok():
    result = Ok(1)
    assert result.is_ok() and not result.is_err()
    assert is_ok(result) and not is_err(result)
    assert result.ok() == 1 and result.err() is None
    assert result.unwrap() == 1
    assert result.unwrap_or(2) == 1
    assert result.unwrap_or_raise() == 1
    assert result.map(lambda x: x + 1) == Ok(2)
    assert result.map_err(str) == Ok(1)
    assert result.and_then(lambda x: Err(x)) == Err(1)
    with pytest.raises(UnwrapError):
        result.unwrap_err()


def test_err():
    error = ValueError('bad')
    result = Err(error)
    assert result.is_err() and not result.is_ok()
    assert result.err() is error and result.ok() is None
    assert result.unwrap_or(2) == 2
    assert result.map(lambda x: x + 1) is result
    assert result.map_err(str) == Err('bad')
    with pytest.raises(UnwrapError) as exc_info:
        result.unwrap()
    assert exc_info.value.result is result
    with pytest.raises(ValueError):
        result.unwrap_or_raise()


def test_propagate_result():
    @propagate_result
    def add(a, b):
        return Ok(a.unwrap_or_propagate() + b.unwrap_or_propagate())

    assert add(Ok(1), Ok(2)) == Ok(3)
    assert add(Err('a'), Err('b')) == Err('a')
    assert add(Ok(1), Err('b')) == Err('b')


def test_equality():
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    assert Err('x') == Err('x')
    assert len({Ok(1), Ok(1), Err(1)}) == 2
