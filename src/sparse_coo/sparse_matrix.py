import operator
from dataclasses import dataclass, field

from .constants import MatrixOperation
from .matrix_errors import DimensionMismatchError


@dataclass(eq=False)
class SparseMatrix:
    """
    Integer matrix that stores only explicitly set elements.

    Elements live in ``data_store``, keyed by ``(row, col)``. Any coordinate
    without a stored value reads as 0. ``rows`` and ``cols`` are the declared
    dimensions; setting an element beyond them grows the matrix.
    """

    rows: int = 0
    cols: int = 0
    data_store: dict[tuple[int, int], int] = field(default_factory=dict)

    def __post_init__(self):
        self.rows = operator.index(self.rows)
        self.cols = operator.index(self.cols)
        if self.rows < 0 or self.cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {self.rows}x{self.cols}")
        if self.data_store:
            # route through set_element so dimensions cover the initial data
            initial = self.data_store
            self.data_store = {}
            for (i, j), v in initial.items():
                self.set_element(i, j, v)

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def nnz(self) -> int:
        """Number of stored elements."""
        return len(self.data_store)

    def get_element(self, row: int, col: int) -> int:
        """Get the value at position (row, col), or 0 if nothing is stored there.

        Coordinates outside the declared dimensions are not an error, they simply
        read as 0.
        """
        return self.data_store.get((row, col), 0)

    def set_element(self, row: int, col: int, value: int) -> None:
        """Store a value at position (row, col), overwriting any previous value.

        Grows ``rows``/``cols`` when the coordinate lies beyond them. Zeros are
        stored as given.

        Args:
            row: Non-negative row index.
            col: Non-negative column index.
            value: Integer value to store.
        """
        row = operator.index(row)
        col = operator.index(col)
        value = operator.index(value)
        if row < 0 or col < 0:
            raise IndexError(f"Matrix indices must be non-negative, got ({row}, {col})")

        if row >= self.rows:
            self.rows = row + 1
        if col >= self.cols:
            self.cols = col + 1
        self.data_store[(row, col)] = value

    def add_at(self, row: int, col: int, value: int) -> None:
        """Add a value to the element at position (row, col)."""
        self.set_element(row, col, self.get_element(row, col) + value)

    def __getitem__(self, key) -> int:
        """Returns the value at position (i, j).

        Args:
            key: A (row, col) tuple, as in ``m[i, j]``. Anything else raises KeyError.

        Returns:
            The value at position (i, j), or 0 if not found.
        """
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        return self.get_element(i, j)

    def __setitem__(self, key, value: int) -> None:
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        self.set_element(i, j, value)

    def __contains__(self, key) -> bool:
        """True if an element is stored at position (i, j)."""
        if isinstance(key, tuple) and len(key) == 2:
            return key in self.data_store
        return False

    def __len__(self) -> int:
        return len(self.data_store)

    def __iter__(self):
        """Allows iteration over the stored coordinates."""
        return iter(self.data_store.keys())

    def keys(self):
        return self.data_store.keys()

    def values(self):
        return self.data_store.values()

    def items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns a list of ((row, col), value) pairs in insertion order."""
        return list(self.data_store.items())

    def sorted_items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns a list of ((row, col), value) pairs in ascending (row, col) order."""
        return sorted(self.data_store.items())

    def copy(self) -> 'SparseMatrix':
        """Returns an independent copy of the matrix."""
        result = SparseMatrix(self.rows, self.cols)
        result.data_store = self.data_store.copy()
        return result

    def _check_same_shape(self, other: 'SparseMatrix', operation: str) -> None:
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatchError(operation, self.shape, other.shape)

    def add(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Adds two sparse matrices of the same shape.

        Args:
            other: The SparseMatrix to add.

        Returns:
            New SparseMatrix holding the element-wise sum.

        Raises:
            DimensionMismatchError: If the shapes differ.
        """
        self._check_same_shape(other, MatrixOperation.ADDITION)

        result = self.copy()
        for (i, j), v in other.items():
            result.add_at(i, j, v)
        return result

    def subtract(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Subtracts another sparse matrix of the same shape from this one.

        Coordinates stored only in ``other`` come out negated.

        Raises:
            DimensionMismatchError: If the shapes differ.
        """
        self._check_same_shape(other, MatrixOperation.SUBTRACTION)

        result = self.copy()
        for (i, j), v in other.items():
            result.add_at(i, j, -v)
        return result

    def multiply(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Multiplies this matrix by ``other`` (self @ other).

        Walks the stored elements of ``self`` only, so the cost is proportional to
        ``nnz(self) * other.cols`` rather than to the dense product. The result
        holds no stored zeros: zero products are skipped and sums that cancel
        to zero are dropped.

        Args:
            other: Right-hand SparseMatrix, with ``other.rows == self.cols``.

        Returns:
            New SparseMatrix of shape ``(self.rows, other.cols)``.

        Raises:
            DimensionMismatchError: If the inner dimensions differ.
        """
        if self.cols != other.rows:
            raise DimensionMismatchError(MatrixOperation.MULTIPLICATION, self.shape, other.shape)

        sums: dict[tuple[int, int], int] = {}
        for (row, col), value in self.items():
            if value == 0:
                continue
            for k in range(other.cols):
                other_value = other.get_element(col, k)
                if other_value != 0:
                    sums[(row, k)] = sums.get((row, k), 0) + value * other_value

        result = SparseMatrix(self.rows, other.cols)
        for (row, k), v in sums.items():
            if v != 0:
                result.set_element(row, k, v)
        return result

    def __add__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.multiply(other)

    def __eq__(self, other) -> bool:
        """Value equality: same shape and same value at every coordinate, absent == 0."""
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        for key in self.data_store.keys() | other.data_store.keys():
            if self.get_element(*key) != other.get_element(*key):
                return False
        return True

    def __repr__(self) -> str:
        if not self.data_store:
            return f"SparseMatrix(rows={self.rows}, cols={self.cols}, {{}})"
        items_str = ", ".join(f"{k}: {v}" for k, v in self.sorted_items())
        return f"SparseMatrix(rows={self.rows}, cols={self.cols}, {{{items_str}}})"

    def __str__(self) -> str:
        from .matrix_io import format_matrix
        return format_matrix(self)

    @classmethod
    def from_file(cls, path: str, config=None) -> 'SparseMatrix':
        """Load a matrix from a text coordinate file. See ``matrix_io.load_matrix``."""
        from .matrix_io import load_matrix
        return load_matrix(path, config=config)

    def save_to_file(self, path: str, config=None) -> None:
        """Save this matrix to a text coordinate file. See ``matrix_io.save_matrix``."""
        from .matrix_io import save_matrix
        save_matrix(self, path, config=config)
