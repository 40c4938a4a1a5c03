"""
Field conversion exception classes.

Conversion failures are returned as data (see sqlfield.ok) rather than
raised. The classes below are the causes carried by a failed conversion;
FieldConversionError groups them when a caller chooses to raise.
"""


class FieldError(Exception):
    """Base class for all field conversion errors.
    """

    def _key(self) -> tuple:
        return self.args

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))


class ResultError(FieldError):
    """Error converting a SQL value to a Python value.

    Carries the declared SQL type of the column, the name of the requested
    Python type and a human-readable message.
    """

    def __init__(self, sql_type: str, python_type: str, message: str) -> None:
        super().__init__(sql_type, python_type, message)
        self.sql_type = sql_type
        self.python_type = python_type
        self.message = message

    def __str__(self) -> str:
        return (f'{type(self).__name__}: cannot convert {self.sql_type} '
                f'to {self.python_type}: {self.message}')

    def __repr__(self) -> str:
        return (f'{type(self).__name__}(sql_type={self.sql_type!r}, '
                f'python_type={self.python_type!r}, message={self.message!r})')


class Incompatible(ResultError):
    """The SQL and Python types are not compatible.
    """


class UnexpectedNull(ResultError):
    """A SQL NULL was encountered when the Python type did not permit it.
    """


class ConversionFailed(ResultError):
    """The SQL value could not be parsed or represented as a Python value.

    Also used for low-level mismatches between column metadata and the
    actual storage value in a row.
    """


class TextDecodingError(FieldError):
    """A text buffer could not be decoded with the configured encoding.
    """

    def __init__(self, encoding: str, reason: str) -> None:
        super().__init__(encoding, reason)
        self.encoding = encoding
        self.reason = reason

    @classmethod
    def from_unicode_error(cls, exc: UnicodeDecodeError) -> 'TextDecodingError':
        err = cls(exc.encoding, f'{exc.reason} at position {exc.start}')
        err.__cause__ = exc
        return err

    def __str__(self) -> str:
        return f'TextDecodingError: cannot decode text as {self.encoding}: {self.reason}'


class ConverterNotFound(FieldError, LookupError):
    """No converter is registered for the requested Python type.
    """

    def __init__(self, python_type: str) -> None:
        super().__init__(python_type)
        self.python_type = python_type

    def __str__(self) -> str:
        return f'No field converter registered for {self.python_type}'


class FieldConversionError(ExceptionGroup):
    """Raised by Errors.unwrap() with every cause of a failed conversion.
    """

    def derive(self, excs):
        return FieldConversionError(self.message, excs)
