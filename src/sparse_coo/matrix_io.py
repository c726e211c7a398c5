"""
Text codec for sparse matrices.

The on-disk format is two header lines followed by one coordinate tuple per
stored element::

    rows=3
    cols=4
    (0, 1, 5)
    (2, 3, -7)

Blank lines between entries are ignored. Any other line that does not start
with a well-formed ``(row, col, value)`` tuple is an error.
"""

import os
import logging
import tempfile
from typing import Optional

from .config import MatrixIOConfig
from .constants import ROWS_KEY, COLS_KEY, ENTRY_OPEN, ENTRY_CLOSE, ENTRY_SEPARATOR
from .matrix_errors import MalformedHeaderError, MalformedEntryError, SourceNotFoundError, UndecodableSourceError
from .sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
DEFAULT_SOURCE = "<string>"


class _EntryTokenError(Exception):
    """Internal signal carrying where tokenizing an entry line stopped."""

    def __init__(self, column: int, expected: str):
        self.column = column
        self.expected = expected
        super().__init__(f"expected {expected} at column {column}")


def _scan_int(text: str, pos: int, signed: bool, what: str) -> tuple[int, int]:
    """Read an integer starting at ``pos``. Returns (value, position after it)."""
    start = pos
    if signed and text[pos:pos + 1] == "-":
        pos += 1
    digits_start = pos
    while pos < len(text) and text[pos] in DIGITS:
        pos += 1
    if pos == digits_start:
        raise _EntryTokenError(start + 1, what)
    try:
        value = int(text[start:pos])
    except ValueError:
        # over the interpreter's int string conversion limit
        raise _EntryTokenError(start + 1, f"{what} with fewer digits") from None
    return value, pos


def _expect(text: str, pos: int, token: str) -> int:
    if text[pos:pos + len(token)] != token:
        raise _EntryTokenError(pos + 1, f"'{token}'")
    return pos + len(token)


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def tokenize_entry(line: str) -> tuple[int, int, int]:
    """
    Split a trimmed data line into its (row, col, value) integers.

    The tuple must begin at the first character. Whitespace is allowed only
    after each comma, and anything after the closing parenthesis is ignored.

    Raises:
        _EntryTokenError: with the 1-based column of the first unexpected character.
    """
    pos = _expect(line, 0, ENTRY_OPEN)
    row, pos = _scan_int(line, pos, signed=False, what="row index")
    pos = _expect(line, pos, ENTRY_SEPARATOR)
    pos = _skip_whitespace(line, pos)
    col, pos = _scan_int(line, pos, signed=False, what="column index")
    pos = _expect(line, pos, ENTRY_SEPARATOR)
    pos = _skip_whitespace(line, pos)
    value, pos = _scan_int(line, pos, signed=True, what="value")
    _expect(line, pos, ENTRY_CLOSE)
    return row, col, value


def _parse_dimension(line: str, key: str, source: str) -> int:
    """Parse a ``key=<digits>`` header line, tolerating anything after the digits."""
    text = line.strip()
    prefix = f"{key}="
    if not text.startswith(prefix):
        raise MalformedHeaderError(source, f"expected '{prefix}<n>', got {text!r}")
    end = len(prefix)
    while end < len(text) and text[end] in DIGITS:
        end += 1
    if end == len(prefix):
        raise MalformedHeaderError(source, f"expected '{prefix}<n>', got {text!r}")
    try:
        return int(text[len(prefix):end])
    except ValueError:
        raise MalformedHeaderError(source, f"{key} value too long: {end - len(prefix)} digits") from None


def parse_matrix(content: str, source: str = DEFAULT_SOURCE) -> SparseMatrix:
    """
    Parse the text coordinate format into a SparseMatrix.

    Args:
        content: Full text of a matrix file.
        source: Name used in error messages, usually the file path.

    Returns:
        The populated matrix. Dimensions come from the header and grow if an
        entry lies beyond them.

    Raises:
        MalformedHeaderError: If there are fewer than two lines or the rows=/cols= lines are invalid.
        MalformedEntryError: On the first non-blank data line that is not a coordinate tuple.
    """
    lines = content.split('\n')
    if len(lines) < 2:
        raise MalformedHeaderError(source, "not enough lines for matrix dimensions, expected 'rows=X' and 'cols=Y'")

    total_rows = _parse_dimension(lines[0], ROWS_KEY, source)
    total_cols = _parse_dimension(lines[1], COLS_KEY, source)
    matrix = SparseMatrix(total_rows, total_cols)

    for line_idx in range(2, len(lines)):
        line = lines[line_idx].strip()
        if line == "":
            continue
        try:
            row, col, value = tokenize_entry(line)
        except _EntryTokenError as e:
            raise MalformedEntryError(source, line_idx + 1, line, column=e.column, expected=e.expected) from None
        matrix.set_element(row, col, value)

    return matrix


def format_matrix(matrix: SparseMatrix, config: Optional[MatrixIOConfig] = None) -> str:
    """
    Serialize a matrix to the text coordinate format, without a trailing newline.

    Every stored element is emitted, including explicitly stored zeros.
    """
    if config is None:
        config = MatrixIOConfig()
    config.validate()

    if config.element_order == 'sorted':
        items = matrix.sorted_items()
    else:
        items = matrix.items()

    lines = [f"{ROWS_KEY}={matrix.rows}", f"{COLS_KEY}={matrix.cols}"]
    lines.extend(f"({row}, {col}, {value})" for (row, col), value in items)
    return "\n".join(lines)


def load_matrix(path: str, config: Optional[MatrixIOConfig] = None) -> SparseMatrix:
    """
    Read and parse a matrix file.

    Raises:
        SourceNotFoundError: If ``path`` does not exist.
        MalformedHeaderError, MalformedEntryError: If the content is not valid.
        UndecodableSourceError: If the file is not text in ``config.encoding``.
    """
    if config is None:
        config = MatrixIOConfig()
    config.validate()

    try:
        with open(path, 'r', encoding=config.encoding) as f:
            content = f.read()
    except FileNotFoundError:
        raise SourceNotFoundError(str(path)) from None
    except UnicodeDecodeError as e:
        raise UndecodableSourceError(str(path), config.encoding, e.start) from None

    matrix = parse_matrix(content, source=str(path))
    logger.debug(f"Loaded {matrix.rows}x{matrix.cols} matrix with {matrix.nnz} stored elements from {path}")
    return matrix


def _output_mode(path: str) -> int:
    """Mode a plainly opened file would get: the existing file's, else 0o666 less the umask."""
    if os.path.exists(path):
        return os.stat(path).st_mode & 0o7777
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_matrix(matrix: SparseMatrix, path: str, config: Optional[MatrixIOConfig] = None) -> None:
    """
    Write a matrix to ``path`` in the text coordinate format.

    With ``config.atomic_save`` (the default) the text goes to a temporary file in
    the destination directory which replaces ``path`` only once fully written.
    """
    if config is None:
        config = MatrixIOConfig()
    content = format_matrix(matrix, config)

    if not config.atomic_save:
        with open(path, 'w', encoding=config.encoding) as f:
            f.write(content)
    else:
        out_dir = os.path.dirname(os.path.abspath(path))
        fd, tmp_path = tempfile.mkstemp(dir=out_dir, prefix='.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding=config.encoding) as f:
                f.write(content)
            os.chmod(tmp_path, _output_mode(path))
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    logger.debug(f"Saved {matrix.rows}x{matrix.cols} matrix with {matrix.nnz} stored elements to {path}")
