"""
Sparse integer matrices stored as coordinate dictionaries.

Load and save a plain-text coordinate format, and add, subtract or multiply
matrices without ever building a dense copy.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrix
from .matrix_io import parse_matrix, format_matrix, load_matrix, save_matrix
from .matrix_utils import add, subtract, multiply, apply_operation, to_dense, from_dense, to_scipy, to_dataframe, from_dataframe
from .config import MatrixIOConfig
from .matrix_errors import (SparseMatrixError, MatrixFormatError, MatrixOperationError, SourceNotFoundError,
                            MalformedHeaderError, MalformedEntryError, UndecodableSourceError, DimensionMismatchError,
                            InvalidOperationChoiceError, InvalidConfigError)

__all__ = [
    "SparseMatrix",
    "parse_matrix",
    "format_matrix",
    "load_matrix",
    "save_matrix",
    "add",
    "subtract",
    "multiply",
    "apply_operation",
    "to_dense",
    "from_dense",
    "to_scipy",
    "to_dataframe",
    "from_dataframe",
    "MatrixIOConfig",
    "SparseMatrixError",
    "MatrixFormatError",
    "MatrixOperationError",
    "SourceNotFoundError",
    "MalformedHeaderError",
    "MalformedEntryError",
    "UndecodableSourceError",
    "DimensionMismatchError",
    "InvalidOperationChoiceError",
    "InvalidConfigError",
]
