"""
Interactive driver: load two matrix files, apply an operation, save the result.

Usage
-----
    sparse-coo [--verbose] [--order {sorted,insertion}]
"""

import sys
import time
import logging
import argparse

from .config import MatrixIOConfig
from .constants import OPERATION_MENU
from .matrix_errors import SparseMatrixError
from .matrix_io import load_matrix, save_matrix
from .matrix_utils import apply_operation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sparse-coo",
                                     description="Add, subtract or multiply two sparse matrix files.")
    parser.add_argument("--verbose", action="store_true", help="print timing for each step")
    parser.add_argument("--order", choices=['sorted', 'insertion'], default='sorted',
                        help="order of element lines in the output file")
    return parser


def print_menu() -> None:
    print("Menu :")
    for code, name in OPERATION_MENU.items():
        print(f"{code}: {name}")


def run_session(config: MatrixIOConfig, verbose: bool = False) -> None:
    """
    One prompt/response exchange. Nothing is written until the result is computed
    and an output path is given.
    """
    print_menu()

    st = time.time()
    matrix_file_path1 = input("Enter the file path for the first matrix: ")
    matrix1 = load_matrix(matrix_file_path1, config)

    matrix_file_path2 = input("Enter the file path for the second matrix: ")
    matrix2 = load_matrix(matrix_file_path2, config)
    if verbose:
        print(f"  loaded {matrix1.rows}x{matrix1.cols} ({matrix1.nnz} stored) and "
              f"{matrix2.rows}x{matrix2.cols} ({matrix2.nnz} stored)")
        print(f"  took: {time.time() - st} seconds")

    choice = input("Choose an option (a, b, or c): ")
    st = time.time()
    operation, result_matrix = apply_operation(choice, matrix1, matrix2)
    print(f"Output of {operation}........\n")
    if verbose:
        print(f"  took: {time.time() - st} seconds")

    output_file_path = input("Enter the file path to save the result: ")
    st = time.time()
    save_matrix(result_matrix, output_file_path, config)
    print(f"Output file saved to {output_file_path}")
    if verbose:
        print(f"  took: {time.time() - st} seconds")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    config = MatrixIOConfig(element_order=args.order)
    try:
        config.validate()
        run_session(config, verbose=args.verbose)
    except SparseMatrixError as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nAborted.")
        return 130
    except EOFError:
        print("\nAborted.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
