"""
Tests for Ok and Errors result values.
"""
import pytest
from sqlfield.exceptions import ConversionFailed, FieldConversionError
from sqlfield.exceptions import TextDecodingError, UnexpectedNull
from sqlfield.ok import Errors, Ok, left


@pytest.fixture
def failed():
    return ConversionFailed('TEXT', 'int', 'need an int')


@pytest.fixture
def null_error():
    return UnexpectedNull('NULL', 'int', 'need an int')


def test_ok_map_and_unwrap():
    """Ok carries the converted value"""
    result = Ok(2).map(lambda v: v * 2)
    assert result == Ok(4)
    assert result.is_ok
    assert result.unwrap() == 4


def test_errors_map_is_noop(failed):
    """Mapping a failure keeps it unchanged"""
    errors = left(failed)
    assert errors.map(lambda v: v * 2) is errors
    assert not errors.is_ok
    assert errors.causes == (failed,)


def test_errors_require_a_cause():
    """A failure without a cause is not allowed"""
    with pytest.raises(ValueError):
        Errors([])


def test_alternative(failed, null_error):
    """The first success wins; failures accumulate their causes"""
    assert (Ok(1) | Ok(2)) == Ok(1)
    assert (Ok(1) | left(failed)) == Ok(1)
    assert (left(failed) | Ok(2)) == Ok(2)

    combined = left(failed) | left(null_error)
    assert combined == Errors([failed, null_error])


def test_unwrap_raises_group(failed):
    """unwrap raises every cause as an exception group"""
    decoding = TextDecodingError('utf-8', 'invalid start byte at position 0')
    errors = Errors([failed, decoding])

    with pytest.raises(FieldConversionError) as exc_info:
        errors.unwrap()

    group = exc_info.value
    assert isinstance(group, ExceptionGroup)
    assert list(group.exceptions) == [failed, decoding]

    matched, rest = group.split(ConversionFailed)
    assert isinstance(matched, FieldConversionError)
    assert list(matched.exceptions) == [failed]
    assert list(rest.exceptions) == [decoding]


def test_unwrap_with_except_star(failed):
    """Callers can handle individual causes with except*"""
    caught = []
    try:
        left(failed).unwrap()
    except* ConversionFailed as group:
        caught.extend(group.exceptions)
    assert caught == [failed]
