import pytest
import os
import sys
import numpy as np
import pandas as pd

# Add the src directory to Python path to import local sparse_coo
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_coo import (SparseMatrix, add, subtract, multiply, apply_operation, load_matrix,
                        to_dense, from_dense, to_scipy, to_dataframe, from_dataframe,
                        InvalidOperationChoiceError, DimensionMismatchError)
from sparse_coo.matrix_utils import resolve_operation
from test_utils import data_path, random_sparse_matrix, validate_dense


@pytest.fixture
def file_matrices() -> tuple[SparseMatrix, SparseMatrix]:
    """The two 2x2 example matrices stored under tests/data."""
    return load_matrix(data_path('matrix_a.txt')), load_matrix(data_path('matrix_b.txt'))


class TestFreeFunctions:

    def test_add(self, file_matrices):
        a, b = file_matrices
        validate_dense(add(a, b), [[4, 4], [0, 2]])

    def test_subtract(self, file_matrices):
        a, b = file_matrices
        validate_dense(subtract(a, b), [[-2, -4], [0, 2]])

    def test_multiply(self, file_matrices):
        a, b = file_matrices
        validate_dense(multiply(a, b), [[3, 4], [0, 0]])

    def test_multiply_matches_scipy(self):
        rng = np.random.default_rng(42)
        a = random_sparse_matrix(rng, 15, 11, density=0.15)
        b = random_sparse_matrix(rng, 11, 13, density=0.15)
        expected = (to_scipy(a) @ to_scipy(b)).toarray()
        validate_dense(multiply(a, b), expected)


class TestApplyOperation:

    @pytest.mark.parametrize("choice, expected", [
        ('a', 'addition'),
        ('b', 'subtraction'),
        ('c', 'multiplication'),
        (' C ', 'multiplication'),
    ])
    def test_resolve(self, choice, expected):
        assert resolve_operation(choice) == expected

    def test_apply(self, file_matrices):
        a, b = file_matrices
        operation, result = apply_operation('a', a, b)
        assert operation == 'addition'
        assert result == a + b

    def test_invalid_choice(self, file_matrices):
        a, b = file_matrices
        with pytest.raises(InvalidOperationChoiceError) as exc_info:
            apply_operation('d', a, b)
        assert exc_info.value.choice == 'd'
        assert exc_info.value.valid_choices == ['a', 'b', 'c']

    def test_dimension_error_propagates(self):
        with pytest.raises(DimensionMismatchError):
            apply_operation('c', SparseMatrix(2, 3), SparseMatrix(2, 3))


class TestConversions:

    def test_dense_round_trip(self):
        dense = np.array([[0, 3, 0], [-1, 0, 0]])
        m = from_dense(dense)
        assert m.shape == (2, 3)
        assert len(m) == 2
        np.testing.assert_array_equal(to_dense(m), dense)

    def test_from_dense_rejects_floats(self):
        with pytest.raises(TypeError):
            from_dense(np.array([[1.5, 0.0]]))

    def test_from_dense_rejects_1d(self):
        with pytest.raises(ValueError):
            from_dense(np.array([1, 2, 3]))

    def test_to_scipy(self, file_matrices):
        a, _ = file_matrices
        coo = to_scipy(a)
        assert coo.shape == (2, 2)
        assert coo.nnz == 2
        np.testing.assert_array_equal(coo.toarray(), to_dense(a))

    def test_dataframe_round_trip(self):
        m = SparseMatrix(4, 4)
        m.set_element(3, 0, 2)
        m.set_element(1, 2, -5)
        df = to_dataframe(m)
        assert list(df.columns) == ['row', 'col', 'value']
        assert df.values.tolist() == [[1, 2, -5], [3, 0, 2]]
        assert from_dataframe(df, rows=4, cols=4) == m

    def test_from_dataframe_default_extent(self):
        df = pd.DataFrame({'row': [0, 2], 'col': [1, 0], 'value': [7, 8]})
        m = from_dataframe(df)
        assert m.shape == (3, 2)

    def test_empty_dataframe(self):
        df = to_dataframe(SparseMatrix(2, 2))
        assert len(df) == 0
        assert from_dataframe(df, rows=2, cols=2) == SparseMatrix(2, 2)
