import codecs
import json
import logging
import pathlib
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

__all__ = ['ConversionOptions']

ENCODING_ERRORS = {'strict', 'replace', 'ignore', 'backslashreplace', 'surrogateescape'}


@dataclass
class ConversionOptions:
    """Options

    - encoding: codec used to decode text delivered as raw bytes (default: utf-8)
    - encoding_errors: codec error handler (default: strict)
    - fraction_digits: maximum fractional-second digits accepted in
      timestamps, between 1 and 6 (default: 6)
    """
    encoding: str = 'utf-8'
    encoding_errors: str = 'strict'
    fraction_digits: int = 6

    def __post_init__(self):
        try:
            codec = codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f'Unknown encoding: {self.encoding}') from e
        # bytes.decode refuses bytes-to-bytes codecs such as hex or base64
        if not codec._is_text_encoding:
            raise ValueError(f'{codec.name} is not a text encoding')
        self.encoding = codec.name
        if self.encoding_errors not in ENCODING_ERRORS:
            raise ValueError(f'encoding_errors must be one of: {sorted(ENCODING_ERRORS)}')
        if not 1 <= self.fraction_digits <= 6:
            raise ValueError('fraction_digits must be between 1 and 6')

    @classmethod
    def from_file(cls, config_file) -> 'ConversionOptions':
        """Load options from a JSON file"""
        with pathlib.Path(config_file).open() as f:
            config = json.load(f)

        if not isinstance(config, dict):
            raise ValueError(f'Expected a JSON object in {config_file}')

        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f'Unknown conversion options: {sorted(unknown)}')

        options = cls(**config)
        logger.info(f'Loaded conversion options from {config_file}')
        return options
