"""
Conversion capability and converter registry.

A Python type becomes a valid decode target in one of two ways:

1. It implements the FromField protocol: a `from_field` classmethod taking a
   Field and returning Ok or Errors. No registration is needed.
2. A FieldConverter for it is registered with the ConverterRegistry. This is
   how built-in and third-party types (int, str, datetime, numpy scalars)
   are supported.

Optional targets (`T | None`) and unions of several targets are resolved
structurally from their members and never need their own converter.

Every converter must handle all five storage classes explicitly and must
return owned data: nothing it returns may reference the Field or a buffer
view inside it.
"""
import logging
import threading
import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from sqlfield import diagnostics
from sqlfield.diagnostics import return_error
from sqlfield.exceptions import ConversionFailed, ConverterNotFound
from sqlfield.exceptions import UnexpectedNull
from sqlfield.field import Field
from sqlfield.ok import Ok, Result
from sqlfield.options import ConversionOptions
from sqlfield.types import SQLNull

logger = logging.getLogger(__name__)

FieldParser = Callable[[Field], Result]


@runtime_checkable
class FromField(Protocol):
    """A type that converts itself from a field."""

    @classmethod
    def from_field(cls, field: Field) -> Result:
        """Convert a field to an instance of this type.

        Returns Ok with the value, or Errors with one or more causes.
        Implementations must not keep a reference to the field or to its
        payload after returning.
        """
        ...


class FieldConverter(ABC):
    """Base class for registered converters.

    Subclasses implement convert() and decide what to do with every storage
    class. There is no fallback behaviour.
    """

    def __init__(self, python_type: Any, type_name: str | None = None) -> None:
        self.python_type = python_type
        self.type_name = type_name or diagnostics.type_name(python_type)

    @abstractmethod
    def convert(self, field: Field, options: ConversionOptions) -> Result:
        """Convert a field, returning Ok or Errors.
        """

    def fail(self, field: Field, message: str, make_error=ConversionFailed) -> Result:
        """Return a failed conversion to this converter's type.
        """
        return return_error(make_error, self.type_name, field, message)

    def reject(self, field: Field, message: str) -> Result:
        """Reject a storage class this converter does not accept.

        NULL becomes UnexpectedNull, anything else ConversionFailed.
        """
        if isinstance(field.value, SQLNull):
            return self.fail(field, message, UnexpectedNull)
        return self.fail(field, message)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.type_name})'


def create_simple_converter(name: str, python_type: Any, accepts: type,
                            message: str,
                            transform: Callable[[Any], Any] | None = None,
                            type_name: str | None = None) -> FieldConverter:
    """Factory function for converters that accept a single storage class.

    Args:
        name: Converter name (used for the class name)
        python_type: Python type the converter produces
        accepts: Storage class accepted (SQLInteger, SQLText, ...)
        message: Rejection message for every other storage class
        transform: Builds the Python value from the storage payload
        type_name: Name of the Python type for error messages

    Returns
        A FieldConverter instance
    """
    transform = transform or python_type

    class SimpleConverter(FieldConverter):
        def convert(self, field: Field, options: ConversionOptions) -> Result:
            if isinstance(field.value, accepts):
                return Ok(transform(field.value.value))
            return self.reject(field, message)

    SimpleConverter.__name__ = f'{name}Converter'
    SimpleConverter.__qualname__ = f'{name}Converter'
    return SimpleConverter(python_type, type_name)


def _union_members(target: Any) -> tuple[Any, ...] | None:
    """Members of a union target, or None if the target is not a union.
    """
    if typing.get_origin(target) in {typing.Union, types.UnionType}:
        return typing.get_args(target)
    return None


class ConverterRegistry:
    """Registry of field converters keyed by target type.

    The shared instance returned by get_instance() has the built-in
    converters registered. Registration is expected at startup; conversions
    only read the registry and may run from any thread.
    """

    _instance = None
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'ConverterRegistry':
        """Get singleton instance.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls.create_default()
        return cls._instance

    @classmethod
    def create_default(cls, options: ConversionOptions | None = None) -> 'ConverterRegistry':
        """Create a registry with the built-in converters registered.
        """
        from sqlfield.adapters.builtin import register_builtin_converters

        registry = cls(options)
        register_builtin_converters(registry)
        return registry

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self._converters: dict[Any, FieldConverter] = {}
        self.options = options or ConversionOptions()

    def configure(self, options: ConversionOptions) -> None:
        """Replace the conversion options.
        """
        self.options = options

    def register(self, converter: FieldConverter) -> None:
        """Register a converter for its python_type, replacing any existing one.
        """
        with self._lock:
            if converter.python_type in self._converters:
                logger.warning(f'Replacing field converter for {converter.type_name}')
            self._converters[converter.python_type] = converter
        logger.debug(f'Registered {converter!r}')

    def unregister(self, python_type: Any) -> None:
        """Remove the converter for a type. Missing types are ignored.
        """
        with self._lock:
            self._converters.pop(python_type, None)

    def get_converter(self, target: Any) -> FieldConverter | None:
        """Find the registered converter for a target type.
        """
        return self._converters.get(target)

    def __contains__(self, target: Any) -> bool:
        return target in self._converters

    def convert(self, field: Field, target: Any) -> Result:
        """Convert a field to the requested target type.

        Args:
            field: Field to convert
            target: Python type, `T | None`, or a union of types

        Returns
            Ok with the converted value, or Errors

        Raises
            ConverterNotFound: nothing knows how to produce the target
        """
        members = _union_members(target)
        if members is not None:
            return self._convert_union(field, members)

        converter = self._converters.get(target)
        if converter is not None:
            return converter.convert(field, self.options)

        if isinstance(target, type) and isinstance(target, FromField):
            return target.from_field(field)

        raise ConverterNotFound(diagnostics.type_name(target))

    def _convert_union(self, field: Field, members: tuple[Any, ...]) -> Result:
        """NULL satisfies an optional union, otherwise try each member in order.
        """
        rest = tuple(m for m in members if m is not type(None))
        if len(rest) < len(members) and isinstance(field.value, SQLNull):
            return Ok(None)

        result = self.convert(field, rest[0])
        for member in rest[1:]:
            if result.is_ok:
                break
            result = result | self.convert(field, member)
        return result


def from_field(field: Field, target: Any) -> Result:
    """Convert a field using the shared registry.
    """
    return ConverterRegistry.get_instance().convert(field, target)


def register_converter(converter: FieldConverter) -> None:
    """Register a converter with the shared registry.
    """
    ConverterRegistry.get_instance().register(converter)
