"""
Error construction for failed conversions.

Every failure carries the declared SQL type of the column, the name of the
requested Python type and a message. return_error fills in the first two so
converters only need to say what went wrong.
"""
import logging
import typing
from collections.abc import Callable
from typing import Any

from sqlfield.exceptions import ResultError
from sqlfield.field import Field
from sqlfield.ok import Errors, left

logger = logging.getLogger(__name__)


def type_name(target: Any) -> str:
    """Name of a conversion target as used in error messages.

    Strings are names already. Classes may declare `field_type_name`;
    otherwise generic aliases use their own spelling and classes their
    qualified name.

    >>> type_name(int)
    'int'
    >>> type_name(list[str])
    'list[str]'
    >>> type_name('numpy.int16')
    'numpy.int16'
    """
    if isinstance(target, str):
        return target
    declared = getattr(target, 'field_type_name', None)
    if isinstance(declared, str):
        return declared
    if typing.get_origin(target) is not None:
        return str(target).replace('typing.', '')
    module = getattr(target, '__module__', 'builtins')
    qualname = getattr(target, '__qualname__', repr(target))
    return qualname if module == 'builtins' else f'{module}.{qualname}'


def field_typename(field: Field) -> str:
    """Declared SQL type name of the column a field came from.
    """
    return field.typename


def return_error(make_error: Callable[[str, str, str], ResultError],
                 target: Any, field: Field, message: str) -> Errors:
    """Build a failed result for a conversion.

    Args:
        make_error: One of Incompatible, UnexpectedNull, ConversionFailed
        target: Requested type, or the name a converter declares for it
        field: Field being converted
        message: What went wrong

    Returns
        Errors holding the populated error
    """
    error = make_error(field_typename(field), type_name(target), message)
    logger.debug(f'Field conversion failed: {error}')
    return left(error)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
