"""
Conversion of SQLite column values to Python types.

Each column of a result row arrives as a Field holding one of five storage
values (NULL, INTEGER, REAL, TEXT, BLOB). from_field converts it to the
requested Python type and returns Ok(value) or Errors(causes):

    result = sqlfield.from_field(field, int | None)
    value = result.unwrap()

Any type can become a target by implementing a `from_field` classmethod or
by registering a FieldConverter.
"""
__version__ = '0.1.0'

from sqlfield.adapters import ConverterRegistry, FieldConverter, FieldParser
from sqlfield.adapters import FromField, create_simple_converter, from_field
from sqlfield.adapters import register_converter
from sqlfield.diagnostics import return_error, type_name
from sqlfield.exceptions import ConversionFailed, ConverterNotFound
from sqlfield.exceptions import FieldConversionError, FieldError, Incompatible
from sqlfield.exceptions import ResultError, TextDecodingError, UnexpectedNull
from sqlfield.field import Field, ResultInfo, fields, forget_schema
from sqlfield.ok import Errors, Ok, Result
from sqlfield.options import ConversionOptions
from sqlfield.types import NULL, Null, SQLBlob, SQLData, SQLFloat, SQLInteger
from sqlfield.types import SQLNull, SQLText, to_sql_data

__all__ = [
    'from_field',
    'register_converter',
    'ConverterRegistry',
    'FieldConverter',
    'FieldParser',
    'FromField',
    'create_simple_converter',
    'return_error',
    'type_name',
    'Field',
    'ResultInfo',
    'fields',
    'forget_schema',
    'Ok',
    'Errors',
    'Result',
    'ConversionOptions',
    'SQLData',
    'SQLNull',
    'SQLInteger',
    'SQLFloat',
    'SQLText',
    'SQLBlob',
    'Null',
    'NULL',
    'to_sql_data',
    'FieldError',
    'ResultError',
    'Incompatible',
    'UnexpectedNull',
    'ConversionFailed',
    'TextDecodingError',
    'ConverterNotFound',
    'FieldConversionError',
]
