import os
import sys
import time
import numpy as np

# Add the src directory to Python path to import local sparse_coo
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from sparse_coo import SparseMatrix, save_matrix, load_matrix, to_dense, to_scipy


def random_matrix(rng: np.random.Generator, rows: int, cols: int, nnz: int) -> SparseMatrix:
    m = SparseMatrix(rows, cols)
    for _ in range(nnz):
        m.set_element(int(rng.integers(rows)), int(rng.integers(cols)), int(rng.integers(-50, 50)) or 1)
    return m


def sparse_vs_dense(size: int = 400, nnz: int = 2000, output_dir: str = '.'):
    """Multiply two random sparse matrices, check against scipy, and time the dense product."""
    rng = np.random.default_rng(0)
    a = random_matrix(rng, size, size, nnz)
    b = random_matrix(rng, size, size, nnz)

    st = time.time()
    print(f"Sparse multiplication of two {size}x{size} matrices ({a.nnz} and {b.nnz} stored)")
    product = a @ b
    print(f"  took: {time.time() - st} seconds")

    st = time.time()
    print("Dense multiplication")
    dense_product = to_dense(a) @ to_dense(b)
    print(f"  took: {time.time() - st} seconds")

    assert np.array_equal(to_dense(product), dense_product)
    assert np.array_equal(to_dense(product), (to_scipy(a) @ to_scipy(b)).toarray())
    print(f"Result has {product.nnz} stored elements")

    output_file = os.path.join(output_dir, 'product.txt')
    save_matrix(product, output_file)
    assert load_matrix(output_file) == product
    print(f"Saved to {output_file}")


if __name__ == '__main__':
    sparse_vs_dense()
