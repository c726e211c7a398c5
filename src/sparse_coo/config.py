import codecs
from typing import Literal
from dataclasses import dataclass

from .matrix_errors import InvalidConfigError


@dataclass
class MatrixIOConfig:
    """
    Configuration for reading and writing matrix files.

    Controls how the text coordinate format is encoded on disk and in
    which order stored elements are emitted.
    """

    element_order: Literal['sorted', 'insertion'] = 'sorted'
    """Order of the (row, col, value) lines when serializing:
    - 'sorted': ascending (row, col), reproducible regardless of how the matrix was built
    - 'insertion': the order elements were first stored
    """

    encoding: str = 'utf-8'
    """Text encoding used for load and save."""

    atomic_save: bool = True
    """Whether to write through a temporary file moved into place on success,
    so an interrupted save never leaves a partial output file."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        ELEMENT_ORDERS = ['sorted', 'insertion']

        if self.element_order not in ELEMENT_ORDERS:
            raise InvalidConfigError('element_order', self.element_order, ELEMENT_ORDERS)
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise InvalidConfigError('encoding', self.encoding)
