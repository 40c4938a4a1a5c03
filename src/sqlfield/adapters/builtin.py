"""
Built-in field converters.

A Python numeric type is compatible with a SQLite storage value only if it
can represent that value exactly. Integers are narrowed to fixed-width numpy
types only when in range, a double accepts an integer only when the integer
survives the round trip, and single precision floats never accept integers.
Nothing is truncated or rounded silently.

Text and blob payloads may be views into driver buffers; every converter
returns an owned copy.

Timestamps are parsed from `YYYY-MM-DD HH:MM:SS[.ffffff]` and returned naive.
No UTC offset is accepted, and fractional seconds longer than the configured
number of digits (at most microseconds) are rejected rather than rounded.
"""
import datetime
import decimal
import logging
import math
import re

import numpy as np
import pandas as pd
from dateutil.parser import isoparser

from sqlfield.adapters.registry import FieldConverter, create_simple_converter
from sqlfield.exceptions import Incompatible, TextDecodingError
from sqlfield.field import Field
from sqlfield.ok import Errors, Ok, Result
from sqlfield.options import ConversionOptions
from sqlfield.types import NULL, Null, SQLBlob, SQLFloat, SQLInteger, SQLNull
from sqlfield.types import SQLText

logger = logging.getLogger(__name__)

NEED_INT = 'need an int'
NEED_FLOAT = 'need a float'
NEED_NUMBER = 'need a number'
EXPECT_TEXT = 'expecting text column type'
EXPECT_BLOB = 'expecting blob column type'

TIMESTAMP_PATTERN = re.compile(
    r'(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?', re.ASCII)
DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)
DECIMAL_PATTERN = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)

_isoparser = isoparser(sep=' ')

NUMPY_INT_TYPES = (np.int8, np.int16, np.int32, np.int64)


def parse_timestamp(text: str, fraction_digits: int = 6) -> datetime.datetime:
    """Parse a `YYYY-MM-DD HH:MM:SS[.ffffff]` timestamp.

    >>> parse_timestamp('2021-03-04 10:11:12.5')
    datetime.datetime(2021, 3, 4, 10, 11, 12, 500000)
    >>> parse_timestamp('2021-03-04 10:11:12')
    datetime.datetime(2021, 3, 4, 10, 11, 12)

    Raises
        ValueError: text is not a valid timestamp
    """
    match = TIMESTAMP_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f'Invalid timestamp format: {text!r}')
    if int(match.group(4)) > 23:
        raise ValueError(f'Hour out of range: {text!r}')
    fraction = match.group(7)
    if fraction is not None and len(fraction) > fraction_digits:
        raise ValueError(f'More than {fraction_digits} fractional digits: {text!r}')
    return _isoparser.isoparse(text)


def parse_date(text: str) -> datetime.date:
    """Parse a `YYYY-MM-DD` date.

    >>> parse_date('2021-03-04')
    datetime.date(2021, 3, 4)

    Raises
        ValueError: text is not a valid date
    """
    if DATE_PATTERN.fullmatch(text) is None:
        raise ValueError(f'Invalid date format: {text!r}')
    return _isoparser.parse_isodate(text)


class TextConverter(FieldConverter):
    """Converts text columns; subclasses turn the decoded str into their type.
    """

    def decode(self, field: Field, options: ConversionOptions) -> Result:
        """Decode the text payload of a field into an owned str.
        """
        payload = field.value.value
        if isinstance(payload, str):
            return Ok(payload)
        try:
            return Ok(bytes(payload).decode(options.encoding, options.encoding_errors))
        except UnicodeDecodeError as exc:
            failed = self.fail(field, f'text is not valid {options.encoding}')
            return Errors(failed.causes + (TextDecodingError.from_unicode_error(exc),))

    def from_text(self, text: str, field: Field, options: ConversionOptions) -> Result:
        return Ok(text)

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLText):
            decoded = self.decode(field, options)
            if not decoded.is_ok:
                return decoded
            return self.from_text(decoded.value, field, options)
        return self.reject(field, EXPECT_TEXT)


class CharsConverter(TextConverter):
    """Text as a list of characters"""

    def from_text(self, text: str, field: Field, options: ConversionOptions) -> Result:
        return Ok(list(text))


class TimestampConverter(TextConverter):
    """Text timestamps as naive datetimes, or pandas Timestamps"""

    def from_text(self, text: str, field: Field, options: ConversionOptions) -> Result:
        try:
            value = parse_timestamp(text, options.fraction_digits)
        except ValueError as e:
            logger.debug(f'Timestamp parse failed: {e}')
            return self.fail(field, "couldn't parse timestamp field")
        if self.python_type is pd.Timestamp:
            return Ok(pd.Timestamp(value))
        return Ok(value)


class DateConverter(TextConverter):
    """Text dates as datetime.date"""

    def from_text(self, text: str, field: Field, options: ConversionOptions) -> Result:
        try:
            return Ok(parse_date(text))
        except ValueError as e:
            logger.debug(f'Date parse failed: {e}')
            return self.fail(field, "couldn't parse date field")


class NullConverter(FieldConverter):
    """Accepts only NULL"""

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLNull):
            return Ok(NULL)
        return self.fail(field, 'data is not null')


class BoundedIntConverter(FieldConverter):
    """Integers narrowed to a fixed-width numpy type when in range"""

    def __init__(self, python_type, type_name=None):
        super().__init__(python_type, type_name)
        info = np.iinfo(python_type)
        self.min, self.max = int(info.min), int(info.max)

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLInteger):
            value = field.value.value
            if self.min <= value <= self.max:
                return Ok(self.python_type(value))
            return self.fail(field, f'{value} is out of range for {self.type_name}')
        return self.reject(field, NEED_INT)


class BoolConverter(FieldConverter):
    """Integers 0 and 1 as bool"""

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLInteger):
            value = field.value.value
            if value in {0, 1}:
                return Ok(bool(value))
            return self.fail(field, f'{value} is not a boolean')
        return self.reject(field, NEED_INT)


class DoubleConverter(FieldConverter):
    """Floats, and integers a double holds exactly"""

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLFloat):
            return Ok(self.python_type(field.value.value))
        if isinstance(field.value, SQLInteger):
            value = field.value.value
            if float(value) == value:
                return Ok(self.python_type(value))
            return self.fail(field, f'{value} cannot be represented exactly as a double')
        return self.reject(field, NEED_FLOAT)


class SingleConverter(FieldConverter):
    """Floats a single precision float holds exactly"""

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLFloat):
            value = field.value.value
            with np.errstate(over='ignore'):
                single = np.float32(value)
            if float(single) == value or math.isnan(value):
                return Ok(single)
            return self.fail(field, f'{value!r} cannot be represented exactly as a float32')
        if isinstance(field.value, SQLInteger):
            return self.fail(field, NEED_FLOAT, Incompatible)
        return self.reject(field, NEED_FLOAT)


class DecimalConverter(TextConverter):
    """Integers, floats and numeric text as exact decimals.

    Text must be a plain numeric literal: no surrounding whitespace,
    underscores, NaN or Infinity.
    """

    def from_text(self, text: str, field: Field, options: ConversionOptions) -> Result:
        if DECIMAL_PATTERN.fullmatch(text) is None:
            return self.fail(field, "couldn't parse decimal field")
        return Ok(decimal.Decimal(text))

    def convert(self, field: Field, options: ConversionOptions) -> Result:
        if isinstance(field.value, SQLInteger | SQLFloat):
            return Ok(decimal.Decimal(field.value.value))
        if isinstance(field.value, SQLText):
            return super().convert(field, options)
        return self.reject(field, NEED_NUMBER)


def builtin_converters() -> list[FieldConverter]:
    """Create the built-in converters.
    """
    converters = [
        NullConverter(Null, 'Null'),
        create_simple_converter('Int', int, SQLInteger, NEED_INT, type_name='int'),
        BoolConverter(bool, 'bool'),
        DoubleConverter(float, 'float'),
        DoubleConverter(np.float64, 'numpy.float64'),
        SingleConverter(np.float32, 'numpy.float32'),
        DecimalConverter(decimal.Decimal, 'decimal.Decimal'),
        TextConverter(str, 'str'),
        CharsConverter(list[str], 'list[str]'),
        create_simple_converter('Bytes', bytes, SQLBlob, EXPECT_BLOB, type_name='bytes'),
        TimestampConverter(datetime.datetime, 'datetime.datetime'),
        TimestampConverter(pd.Timestamp, 'pandas.Timestamp'),
        DateConverter(datetime.date, 'datetime.date'),
    ]
    converters.extend(
        BoundedIntConverter(dtype, f'numpy.{dtype.__name__}') for dtype in NUMPY_INT_TYPES
    )
    return converters


def register_builtin_converters(registry) -> None:
    """Register every built-in converter with a registry.
    """
    for converter in builtin_converters():
        registry.register(converter)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
