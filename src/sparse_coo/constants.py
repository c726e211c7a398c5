ROWS_KEY = "rows"
COLS_KEY = "cols"

ENTRY_OPEN = "("
ENTRY_CLOSE = ")"
ENTRY_SEPARATOR = ","


class MatrixOperation:
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"


# menu code -> operation name, in the order the driver prints them
OPERATION_MENU = {
    'a': MatrixOperation.ADDITION,
    'b': MatrixOperation.SUBTRACTION,
    'c': MatrixOperation.MULTIPLICATION,
}


class FrameColumn:
    ROW = "row"
    COL = "col"
    VALUE = "value"
