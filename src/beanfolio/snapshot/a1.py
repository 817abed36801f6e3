"""A1 notation helpers."""


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s). 0=A, 25=Z, 26=AA, etc."""
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def cell_reference(row_index: int, col_index: int) -> str:
    """Build an A1 reference from 0-based row and column indices."""
    return f"{index_to_col_letter(col_index)}{row_index + 1}"
