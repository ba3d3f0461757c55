"""Format a table into text for print.

the `tabulate` function takes a :class:`tinyframe.frame.Table` and formats it into a text table.
It will truncate long strings, format floats to 2 decimal places, and limit the number of rows to display.
Columns with a numeric DType are aligned to the right, all the others to the left.
The function is used to display dataframes when they are printed.

Example:

    >>> from tinyframe.frame import create_table
    >>> table = create_table({
    ...     "Product": ["Videogame", "Laptop", "Laptop"],
    ...     "Quantity": [8, 8, 17],
    ...     "Price": [66.5, 138.72, 77.46],
    ... })
    >>> print(tabulate(table))
    Product   | Quantity |  Price
    --------- | -------- | ------
    Videogame |        8 |  66.50
    Laptop    |        8 | 138.72
    Laptop    |       17 |  77.46
"""

from typing import Any

from ..storage.dtypes import DType, is_numeric_dtype
from .typecheck import is_null


def tabulate(table: Any, max_rows: int = 20) -> str:
    """Format a Table into a text table.

    Any object exposing ``column_names``, ``dtypes``, ``row_count``
    and ``column(name)`` like a Table does can be formatted.

    Will produce a string like::

        Product   | Quantity | Price |  Total
        --------- | -------- | ----- | ------
        Videogame |        8 | 66.50 | 532.00
        Laptop    |        8 | 38.72 | 309.76
        Laptop    |        7 | 77.46 | 542.22
    """
    cols = table.column_names
    values = [table.column(c).slice(0, max_rows).to_list() for c in cols]
    rows = [[format_value(v) for v in row] for row in zip(*values)]
    right = [is_numeric_dtype(table.dtypes.get(c, DType.STR)) for c in cols]

    widths = column_widths(cols, rows)
    header = [format_row(cols, widths, right)]
    separator = [format_row(["-" * w for w in widths], widths, right)]
    textrows = [format_row(row, widths, right) for row in rows]

    text = "\n".join(header + separator + textrows)
    if table.row_count > max_rows:
        text += f"\n... and {table.row_count - max_rows} more rows"
    return text


def column_widths(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Width of each column, enough for the header and every cell."""
    widths = [len(c) for c in cols]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    return widths


def format_row(cells: list[str], widths: list[int], right: list[bool]) -> str:
    """Pad each cell to the width of its column and join them."""
    return " | ".join(
        cell.rjust(width) if align_right else cell.ljust(width)
        for cell, width, align_right in zip(cells, widths, right)
    )


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    This function will format floats to 2 decimal places,
    print missing values as ``null`` and truncate long strings.
    """
    if is_null(v):
        return "null"
    elif isinstance(v, float):
        return f"{v:.2f}"
    elif isinstance(v, bool):
        return "true" if v else "false"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
