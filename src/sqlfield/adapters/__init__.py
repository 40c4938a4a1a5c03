"""
Field converters.

- registry: the FromField protocol, FieldConverter base class and the
  ConverterRegistry that resolves a target type to its converter
- builtin: converters for numeric, text, binary, temporal and NULL targets

Conversion principles:
1. Every converter handles all five storage classes explicitly
2. Numeric targets accept only values they represent exactly
3. Converters return owned data, never views into the field payload
"""
from sqlfield.adapters.builtin import builtin_converters, parse_date
from sqlfield.adapters.builtin import parse_timestamp
from sqlfield.adapters.registry import ConverterRegistry, FieldConverter
from sqlfield.adapters.registry import FieldParser, FromField
from sqlfield.adapters.registry import create_simple_converter, from_field
from sqlfield.adapters.registry import register_converter
