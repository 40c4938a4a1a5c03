"""
Storage values delivered by the SQLite driver.

Every column value in a result row is exactly one of five storage classes:

- SQLNull: the absence of a value
- SQLInteger: a 64-bit signed integer
- SQLFloat: a double precision float
- SQLText: unicode text, possibly still in its encoded driver buffer
- SQLBlob: a byte sequence, possibly a view into a driver buffer

Nothing is coerced here. Interpreting a storage value as a Python type is the
job of the converters in sqlfield.adapters.
"""
from dataclasses import dataclass
from typing import Any, ClassVar

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

BYTES_TYPES = (bytes, bytearray, memoryview)


@dataclass(frozen=True, slots=True)
class SQLNull:
    """SQL NULL"""

    storage_class: ClassVar[str] = 'NULL'


@dataclass(frozen=True, slots=True)
class SQLInteger:
    """64-bit signed integer"""

    value: int
    storage_class: ClassVar[str] = 'INTEGER'

    def __post_init__(self):
        if not isinstance(self.value, int):
            raise TypeError(f'SQLInteger requires an int, got {type(self.value).__name__}')
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise OverflowError(f'{self.value} does not fit in a 64-bit integer')


@dataclass(frozen=True, slots=True)
class SQLFloat:
    """Double precision float"""

    value: float
    storage_class: ClassVar[str] = 'REAL'


@dataclass(frozen=True, slots=True)
class SQLText:
    """Text value.

    Drivers running with a raw text factory hand over the encoded buffer
    instead of a str; decoding happens in the text converters.
    """

    value: str | bytes | bytearray | memoryview
    storage_class: ClassVar[str] = 'TEXT'


@dataclass(frozen=True, slots=True)
class SQLBlob:
    """Binary value, either owned bytes or a view into a driver buffer"""

    value: bytes | bytearray | memoryview
    storage_class: ClassVar[str] = 'BLOB'


SQLData = SQLNull | SQLInteger | SQLFloat | SQLText | SQLBlob

SQL_DATA_TYPES = (SQLNull, SQLInteger, SQLFloat, SQLText, SQLBlob)


class Null:
    """Explicit SQL NULL marker.

    Use as a conversion target for columns that must be NULL.

    >>> Null() is NULL
    True
    >>> bool(NULL)
    False
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NULL'

    def __bool__(self) -> bool:
        return False


NULL = Null()


def storage_class(data: SQLData) -> str:
    """Return the storage class name of a storage value.

    >>> storage_class(SQLInteger(1))
    'INTEGER'
    >>> storage_class(SQLNull())
    'NULL'
    """
    return data.storage_class


def column_affinity(decltype: str | None) -> str:
    """Determine the column affinity of a declared column type.

    Follows the SQLite rules, applied in order.

    >>> column_affinity('BIGINT')
    'INTEGER'
    >>> column_affinity('VARCHAR(255)')
    'TEXT'
    >>> column_affinity('DOUBLE PRECISION')
    'REAL'
    >>> column_affinity('')
    'BLOB'
    >>> column_affinity('DATETIME')
    'NUMERIC'
    """
    name = (decltype or '').upper()
    if 'INT' in name:
        return 'INTEGER'
    if 'CHAR' in name or 'CLOB' in name or 'TEXT' in name:
        return 'TEXT'
    if 'BLOB' in name or not name:
        return 'BLOB'
    if 'REAL' in name or 'FLOA' in name or 'DOUB' in name:
        return 'REAL'
    return 'NUMERIC'


def to_sql_data(value: Any, raw_text: bool = False) -> SQLData:
    """Wrap a raw value returned by the sqlite3 module as a storage value.

    With the default text factory sqlite3 returns bytes only for BLOB
    values. Byte strings are treated as undecoded text only when `raw_text`
    is set, i.e. the connection uses `text_factory=bytes`.

    >>> to_sql_data(None)
    SQLNull()
    >>> to_sql_data(True)
    SQLInteger(value=1)
    >>> to_sql_data(b'abc')
    SQLBlob(value=b'abc')
    >>> to_sql_data(b'abc', raw_text=True)
    SQLText(value=b'abc')
    """
    if value is None:
        return SQLNull()
    if isinstance(value, bool):
        return SQLInteger(int(value))
    if isinstance(value, int):
        return SQLInteger(value)
    if isinstance(value, float):
        return SQLFloat(value)
    if isinstance(value, str):
        return SQLText(value)
    if isinstance(value, BYTES_TYPES):
        if raw_text:
            return SQLText(value)
        return SQLBlob(value)
    raise TypeError(f'Unsupported storage value type: {type(value).__name__}')


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
