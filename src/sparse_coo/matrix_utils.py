import numpy as np
import pandas as pd
from scipy import sparse as sp
from typing import Callable, Optional

from .constants import OPERATION_MENU, MatrixOperation, FrameColumn
from .matrix_errors import InvalidOperationChoiceError
from .sparse_matrix import SparseMatrix


def add(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Element-wise sum of two equally shaped matrices."""
    return a.add(b)


def subtract(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Element-wise difference ``a - b`` of two equally shaped matrices."""
    return a.subtract(b)


def multiply(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Matrix product ``a @ b``."""
    return a.multiply(b)


OPERATIONS: dict[str, Callable[[SparseMatrix, SparseMatrix], SparseMatrix]] = {
    MatrixOperation.ADDITION: add,
    MatrixOperation.SUBTRACTION: subtract,
    MatrixOperation.MULTIPLICATION: multiply,
}


def resolve_operation(choice: str) -> str:
    """
    Map a menu code to its operation name.

    Args:
        choice: Menu code such as 'a'. Case and surrounding whitespace are ignored.

    Returns:
        One of the MatrixOperation names.

    Raises:
        InvalidOperationChoiceError: If the code is not in OPERATION_MENU.
    """
    code = choice.strip().lower() if isinstance(choice, str) else choice
    if code not in OPERATION_MENU:
        raise InvalidOperationChoiceError(choice, list(OPERATION_MENU.keys()))
    return OPERATION_MENU[code]


def apply_operation(choice: str, a: SparseMatrix, b: SparseMatrix) -> tuple[str, SparseMatrix]:
    """
    Run the operation selected by a menu code.

    Returns:
        Tuple of (operation name, result matrix).
    """
    operation = resolve_operation(choice)
    return operation, OPERATIONS[operation](a, b)


def to_dense(matrix: SparseMatrix) -> np.ndarray:
    """Materialize the matrix as a dense int64 array of shape (rows, cols)."""
    dense = np.zeros((matrix.rows, matrix.cols), dtype=np.int64)
    for (i, j), v in matrix.items():
        dense[i, j] = v
    return dense


def from_dense(array) -> SparseMatrix:
    """Build a SparseMatrix from a 2D integer array, storing only the nonzero cells."""
    array = np.asarray(array)
    if array.ndim != 2:
        raise ValueError(f"Expected a 2D array, got {array.ndim} dimensions")
    if array.size > 0 and not np.issubdtype(array.dtype, np.integer):
        raise TypeError(f"Expected an integer array, got dtype {array.dtype}")

    matrix = SparseMatrix(array.shape[0], array.shape[1])
    rows, cols = np.nonzero(array)
    for i, j in zip(rows, cols):
        matrix.set_element(int(i), int(j), int(array[i, j]))
    return matrix


def to_scipy(matrix: SparseMatrix) -> sp.coo_matrix:
    """Convert to a scipy COO matrix with the same shape and stored elements."""
    items = matrix.items()
    rows = np.fromiter((k[0] for k, _ in items), dtype=np.int64, count=len(items))
    cols = np.fromiter((k[1] for k, _ in items), dtype=np.int64, count=len(items))
    data = np.fromiter((v for _, v in items), dtype=np.int64, count=len(items))
    return sp.coo_matrix((data, (rows, cols)), shape=matrix.shape)


def to_dataframe(matrix: SparseMatrix) -> pd.DataFrame:
    """Stored elements as a DataFrame with columns row, col, value, sorted by coordinate."""
    records = [(i, j, v) for (i, j), v in matrix.sorted_items()]
    df = pd.DataFrame(records, columns=[FrameColumn.ROW, FrameColumn.COL, FrameColumn.VALUE])
    return df.astype(np.int64)


def from_dataframe(df: pd.DataFrame, rows: Optional[int] = None, cols: Optional[int] = None) -> SparseMatrix:
    """
    Build a SparseMatrix from a DataFrame with columns row, col, value.

    Args:
        df: One row per element. Later rows overwrite earlier ones at the same coordinate.
        rows: Declared row count. Defaults to the extent of the data.
        cols: Declared column count. Defaults to the extent of the data.
    """
    for col in [FrameColumn.ROW, FrameColumn.COL, FrameColumn.VALUE]:
        assert col in df.columns, f"Column \"{col}\" not found in DataFrame"

    matrix = SparseMatrix(rows or 0, cols or 0)
    for i, j, v in df[[FrameColumn.ROW, FrameColumn.COL, FrameColumn.VALUE]].itertuples(index=False):
        matrix.set_element(int(i), int(j), int(v))
    return matrix
