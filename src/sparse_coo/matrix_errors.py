class SparseMatrixError(Exception):
    """Base class for all sparse_coo errors."""
    pass

class MatrixFormatError(SparseMatrixError, ValueError):
    """Base class for errors in the text coordinate format."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(message)

class MatrixOperationError(SparseMatrixError, ValueError):
    """Base class for arithmetic and operation-selection errors."""
    pass



class SourceNotFoundError(SparseMatrixError, FileNotFoundError):
    """Raised when a matrix file to be loaded does not exist."""

    def __init__(self, source: str):
        self.source = source
        message = f"File not found: {source}"
        super().__init__(message)


class MalformedHeaderError(MatrixFormatError):
    """Raised when the rows=/cols= header lines are missing or invalid."""

    def __init__(self, source: str, detail: str):
        self.detail = detail
        message = f"Invalid dimension header in {source}: {detail}"
        super().__init__(source, message)


class UndecodableSourceError(MatrixFormatError):
    """Raised when a matrix file is not valid text in the configured encoding."""

    def __init__(self, source: str, encoding: str, position: int = None):
        self.encoding = encoding
        self.position = position
        message = f"File {source} is not valid {encoding} text"
        if position is not None:
            message += f" (undecodable byte at offset {position})"
        super().__init__(source, message)


class MalformedEntryError(MatrixFormatError):
    """Raised when a non-blank data line is not a (row, col, value) tuple."""

    def __init__(self, source: str, line_number: int, raw_line: str, column: int = None, expected: str = None):
        self.line_number = line_number
        self.raw_line = raw_line
        self.column = column
        self.expected = expected
        message = f"Invalid format at line {line_number} in {source}: {raw_line}"
        if column is not None and expected is not None:
            message += f" (expected {expected} at column {column})"
        super().__init__(source, message)


class DimensionMismatchError(MatrixOperationError):
    """Raised when operand shapes are incompatible for an arithmetic operation."""

    def __init__(self, operation: str, shape_a: tuple[int, int], shape_b: tuple[int, int]):
        self.operation = operation
        self.shape_a = shape_a
        self.shape_b = shape_b

        if operation == "multiplication":
            message = (f"Cannot perform {operation}: first matrix has {shape_a[1]} columns "
                       f"but second matrix has {shape_b[0]} rows "
                       f"({shape_a[0]}x{shape_a[1]} vs {shape_b[0]}x{shape_b[1]})")
        else:
            message = (f"Matrices must have the same dimensions for {operation}: "
                       f"{shape_a[0]}x{shape_a[1]} vs {shape_b[0]}x{shape_b[1]}")
        super().__init__(message)


class InvalidOperationChoiceError(MatrixOperationError):
    """Raised when a menu code does not name a known operation."""

    def __init__(self, choice: str, valid_choices: list = None):
        self.choice = choice
        self.valid_choices = valid_choices
        if valid_choices is None:
            message = f"Invalid option '{choice}'."
        else:
            message = f"Invalid option '{choice}'. Must be one of: {valid_choices}"
        super().__init__(message)


class InvalidConfigError(SparseMatrixError, ValueError):
    """Raised when a MatrixIOConfig field holds an unsupported value."""

    def __init__(self, field: str, value, valid_values: list = None):
        self.field = field
        self.value = value
        self.valid_values = valid_values
        if valid_values is None:
            message = f"Invalid value for {field}: {value!r}"
        else:
            message = f"Invalid value for {field}: {value!r}. Must be one of: {valid_values}"
        super().__init__(message)
