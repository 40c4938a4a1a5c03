"""
Decoding real sqlite3 results through fields.
"""
import datetime

import pytest
from sqlfield import from_field
from sqlfield.exceptions import ConversionFailed
from sqlfield.field import ResultInfo, fields
from sqlfield.ok import Errors, Ok

ROW_TYPES = [int, str, float | None, datetime.datetime, datetime.date, bytes | None, str | None]


def decode(cursor, table=None, types=ROW_TYPES):
    """Convert every row of an executed cursor"""
    result = ResultInfo.from_cursor(cursor, table)
    return [
        [from_field(field, target) for field, target in zip(fields(row, result), types)]
        for row in cursor.fetchall()
    ]


def test_result_info_from_cursor(sqlite_conn):
    """Declared types are read from the table schema"""
    cursor = sqlite_conn.execute('SELECT id, name, created FROM test_table')

    result = ResultInfo.from_cursor(cursor, 'test_table')

    assert result.names == ('id', 'name', 'created')
    assert result.decltypes == ('INTEGER', 'TEXT', 'DATETIME')
    assert result.text_factory is str


def test_decode_rows(sqlite_conn):
    """Rows with valid data convert to the requested types"""
    cursor = sqlite_conn.execute('SELECT * FROM test_table ORDER BY id')

    alice, bob, _ = decode(cursor, 'test_table')

    assert alice == [
        Ok(1),
        Ok('Alice'),
        Ok(10.5),
        Ok(datetime.datetime(2021, 3, 4, 10, 11, 12, 500000)),
        Ok(datetime.date(1990, 1, 2)),
        Ok(b'\x01\x02\x03'),
        Ok(None),
    ]
    assert bob == [
        Ok(2),
        Ok('Bob'),
        Ok(None),
        Ok(datetime.datetime(2021, 3, 4, 10, 11, 12)),
        Ok(datetime.date(1985, 12, 31)),
        Ok(None),
        Ok('café'),
    ]


def test_decode_errors_report_declared_type(sqlite_conn):
    """Failures carry the declared column type"""
    cursor = sqlite_conn.execute("SELECT * FROM test_table WHERE name = 'Charlie'")

    (charlie,) = decode(cursor, 'test_table')

    assert charlie[2] == Ok(30.0)
    assert charlie[3] == Errors([
        ConversionFailed('DATETIME', 'datetime.datetime', "couldn't parse timestamp field"),
    ])
    assert charlie[4] == Errors([
        ConversionFailed('DATE', 'datetime.date', "couldn't parse date field"),
    ])
    assert charlie[5] == Ok(b'')


def test_blob_column_is_not_text(sqlite_conn):
    cursor = sqlite_conn.execute("SELECT payload FROM test_table WHERE name = 'Alice'")

    (row,) = decode(cursor, 'test_table', [str])

    assert row == [Errors([ConversionFailed('BLOB', 'str', 'expecting text column type')])]


def test_blob_stored_in_text_column(sqlite_conn):
    """A BLOB value keeps its storage class whatever the declared type"""
    sqlite_conn.execute("INSERT INTO test_table (name, note) VALUES ('Dora', X'FF01')")
    cursor = sqlite_conn.execute("SELECT note FROM test_table WHERE name = 'Dora'")

    (row,) = decode(cursor, 'test_table', [bytes])
    assert row == [Ok(b'\xff\x01')]

    cursor = sqlite_conn.execute("SELECT note FROM test_table WHERE name = 'Dora'")
    (row,) = decode(cursor, 'test_table', [str])
    assert row == [Errors([ConversionFailed('VARCHAR(40)', 'str', 'expecting text column type')])]


def test_expression_columns(sqlite_conn):
    """Columns without a declared type report their storage class"""
    cursor = sqlite_conn.execute("SELECT 1 + 1, 'x' || 'y', 2.5")

    (row,) = decode(cursor, types=[str, int, int])

    assert row == [
        Errors([ConversionFailed('INTEGER', 'str', 'expecting text column type')]),
        Errors([ConversionFailed('TEXT', 'int', 'need an int')]),
        Errors([ConversionFailed('REAL', 'int', 'need an int')]),
    ]


def test_bytes_text_factory(sqlite_bytes_conn):
    """Undecoded text in TEXT columns is decoded by the converters"""
    cursor = sqlite_bytes_conn.execute('SELECT name, note FROM test_table ORDER BY id')

    rows = decode(cursor, 'test_table', [str, str | None])

    assert rows == [
        [Ok('Alice'), Ok(None)],
        [Ok('Bob'), Ok('café')],
        [Ok('Charlie'), Ok('plain')],
    ]


@pytest.mark.parametrize('value', [0, -1, 2 ** 63 - 1, -2 ** 63])
def test_integer_round_trip(sqlite_conn, value):
    """64-bit integers survive the database round trip"""
    cursor = sqlite_conn.execute('SELECT ?', (value,))

    (row,) = decode(cursor, types=[int])

    assert row == [Ok(value)]
