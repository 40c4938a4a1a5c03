"""
Storage value fixtures shared by converter tests.
"""
import pytest
from sqlfield.types import SQLBlob, SQLFloat, SQLInteger, SQLNull, SQLText


@pytest.fixture(scope='module')
def storage_values():
    """Return one storage value of each storage class"""
    return {
        'null': SQLNull(),
        'integer': SQLInteger(42),
        'float': SQLFloat(3.5),
        'text': SQLText('hello'),
        'blob': SQLBlob(b'\x01\x02\x03'),
    }


@pytest.fixture(scope='module')
def integer_values():
    """Integers at the edges of each fixed width"""
    return [
        0,
        1,
        -1,
        127,
        -128,
        32767,
        -32768,
        2147483647,
        -2147483648,
        9223372036854775807,   # Max int64
        -9223372036854775808,  # Min int64
    ]
