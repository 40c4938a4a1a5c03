"""
Result values returned by field converters.

A conversion produces either Ok(value) or Errors(causes). Failures are data:
nothing is raised until a caller asks for it with unwrap().

>>> Ok(1).map(str)
Ok(value='1')
>>> Ok(1) | Ok(2)
Ok(value=1)
"""
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlfield.exceptions import FieldConversionError, FieldError

T = TypeVar('T')
U = TypeVar('U')


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful conversion"""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> 'Ok[U]':
        return Ok(fn(self.value))

    def __or__(self, other: 'Result') -> 'Ok[T]':
        return self

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Errors:
    """A failed conversion with one or more causes.

    Combining two failures with `|` keeps the causes of both, so a caller
    trying several targets in turn sees why each one was rejected.
    """

    causes: tuple[FieldError, ...]

    def __init__(self, causes: Iterable[FieldError]) -> None:
        causes = tuple(causes)
        if not causes:
            raise ValueError('Errors requires at least one cause')
        object.__setattr__(self, 'causes', causes)

    @property
    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> 'Errors':
        return self

    def __or__(self, other: 'Result') -> 'Result':
        if isinstance(other, Ok):
            return other
        return Errors(self.causes + other.causes)

    def unwrap(self):
        """Raise every cause as a FieldConversionError group.
        """
        raise FieldConversionError('field conversion failed', list(self.causes))


Result = Ok | Errors


def left(error: FieldError) -> Errors:
    """Wrap a single cause as a failed result.
    """
    return Errors((error,))


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
