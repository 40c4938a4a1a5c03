"""
Field representation.

A Field is one decoded column value plus a handle on the result it came
from. The handle is only used to look up the declared column type for error
messages, and it is a weak reference: a Field never keeps a result (or the
driver buffers behind it) alive.

Fields are built by the row decoder immediately before a conversion and are
consumed by exactly one converter. Do not store them.
"""
import logging
import weakref
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from sqlfield.cache import SchemaCache
from sqlfield.types import SQLData, column_affinity, storage_class, to_sql_data

logger = logging.getLogger(__name__)

RAW_TEXT_FACTORIES = (bytes, bytearray)


class ResultInfo:
    """Column metadata for one result set.

    Args:
        names: Column names in result order
        decltypes: Declared column types in result order, None where the
            column is an expression without a declared type
        text_factory: text_factory of the connection that produced the rows
    """

    __slots__ = ('names', 'decltypes', 'text_factory', '__weakref__')

    def __init__(self, names: Sequence[str],
                 decltypes: Sequence[str | None] | None = None,
                 text_factory: Any = str) -> None:
        self.names = tuple(names)
        self.decltypes = tuple(decltypes) if decltypes is not None else (None,) * len(self.names)
        if len(self.decltypes) != len(self.names):
            raise ValueError('names and decltypes must have the same length')
        self.text_factory = text_factory

    def column_typename(self, column: int) -> str | None:
        """Return the declared type of a column, or None if it has none.
        """
        if 0 <= column < len(self.decltypes):
            return self.decltypes[column]
        return None

    def affinity(self, column: int) -> str | None:
        decltype = self.column_typename(column)
        return column_affinity(decltype) if decltype else None

    def raw_text(self, column: int) -> bool:
        """Whether bytes in this column are undecoded text.

        Only connections whose text factory returns bytes deliver text that
        way, and then only TEXT affinity columns are read as text. Any other
        bytes value is a BLOB.
        """
        return self.text_factory in RAW_TEXT_FACTORIES and self.affinity(column) == 'TEXT'

    @classmethod
    def from_cursor(cls, cursor: Any, table: str | None = None) -> 'ResultInfo':
        """Build column metadata from an executed sqlite3 cursor.

        sqlite3 does not expose declared types in cursor.description, so they
        are read from the table schema when a table name is given.

        Args:
            cursor: sqlite3 cursor after execute()
            table: Optional table the result columns come from

        Returns
            ResultInfo instance
        """
        names = [d[0] for d in (cursor.description or [])]
        text_factory = cursor.connection.text_factory
        if table is None:
            return cls(names, text_factory=text_factory)
        declared = table_decltypes(cursor.connection, table)
        return cls(names, [declared.get(name.lower()) for name in names], text_factory)

    def __repr__(self) -> str:
        return f'ResultInfo(names={self.names!r}, decltypes={self.decltypes!r})'


def _as_str(value: str | bytes) -> str:
    # schema text arrives as bytes on connections using text_factory=bytes
    return value.decode() if isinstance(value, bytes) else value


def table_decltypes(connection: Any, table: str) -> dict[str, str]:
    """Declared column types of a table, keyed by lowercase column name.

    Results are cached per connection.
    """
    cache = SchemaCache.get_instance()
    declared = cache.get(connection, table)
    if declared is not None:
        logger.debug(f'Cache hit for table_info({table})')
        return declared

    quoted = table.replace('"', '""')
    rows = connection.execute(f'PRAGMA table_info("{quoted}")').fetchall()
    declared = {_as_str(row[1]).lower(): _as_str(row[2]) for row in rows if row[2]}
    cache.set(connection, table, declared)
    return declared


def forget_schema(connection: Any) -> None:
    """Drop cached declared types of a connection.

    Call after altering a table, or when closing a connection that should not
    wait for its cache entries to expire.
    """
    SchemaCache.get_instance().invalidate(connection)


class Field:
    """One column value with its result context.
    """

    __slots__ = ('_value', '_column', '_result')

    def __init__(self, value: SQLData, column: int = 0,
                 result: ResultInfo | None = None) -> None:
        self._value = value
        self._column = column
        self._result = weakref.ref(result) if result is not None else None

    @property
    def value(self) -> SQLData:
        return self._value

    @property
    def column(self) -> int:
        return self._column

    @property
    def result(self) -> ResultInfo | None:
        """The originating result, or None once it has been discarded.
        """
        return self._result() if self._result is not None else None

    @property
    def typename(self) -> str:
        """Declared type name of the column.

        Falls back to the storage class of the value when the column has no
        declared type or the result is gone.
        """
        result = self.result
        if result is not None:
            name = result.column_typename(self._column)
            if name:
                return name
        return storage_class(self._value)

    def __repr__(self) -> str:
        return f'Field({self._value!r}, column={self._column})'


def fields(row: Iterable[Any], result: ResultInfo | None = None) -> Iterator[Field]:
    """Yield one Field per column of a raw sqlite3 row.
    """
    for column, value in enumerate(row):
        raw_text = result.raw_text(column) if result is not None else False
        yield Field(to_sql_data(value, raw_text), column, result)
