"""
Render a 3x3 grid of cells into column-aligned text.

Strategy: render each cell, take the widest cell of each column as that
column's width, pad every cell with trailing spaces to its column width,
then join cells with two spaces and rows with a newline.
"""
from ..exceptions import MalformedGridError
from .cells import display_width, render_cell

GRID_SIZE = 3
COLUMN_SEPARATOR = '  '
ROW_SEPARATOR = '\n'


def check_grid(grid) -> list:
    """Return the rows of grid, raising MalformedGridError unless it is 3x3."""
    try:
        rows = list(grid)
    except TypeError:
        raise MalformedGridError('Grid must be a sequence of rows') from None

    if len(rows) != GRID_SIZE:
        raise MalformedGridError(f"Grid must have {GRID_SIZE} rows, got {len(rows)}")

    for index, row in enumerate(rows):
        if isinstance(row, str) or not hasattr(row, '__len__'):
            raise MalformedGridError(f"Row {index} is not a sequence of cells")
        if len(row) != GRID_SIZE:
            raise MalformedGridError(
                f"Row {index} must have {GRID_SIZE} cells, got {len(row)}"
            )

    return rows


def rendered_cells(grid) -> list[list[str]]:
    """Return the unpadded rendered string of every cell, row-major."""
    return [[render_cell(cell) for cell in row] for row in check_grid(grid)]


def _widths(cells: list[list[str]]) -> list[int]:
    return [
        max(display_width(row[column]) for row in cells)
        for column in range(GRID_SIZE)
    ]


def column_widths(grid) -> list[int]:
    """Return the padding target width of each column."""
    return _widths(rendered_cells(grid))


def pad_cell(text: str, width: int) -> str:
    """Pad text with trailing spaces up to width display units."""
    return text + ' ' * (width - display_width(text))


def render(grid) -> str:
    """
    Serialize a grid into its aligned 3-line text form.

    Args:
        grid: 3 rows of 3 cells (Country or EMPTY).

    Returns:
        The grid text, without a trailing newline.

    Raises:
        MalformedGridError: if the grid is not 3x3 or holds a non-cell.
    """
    cells = rendered_cells(grid)
    widths = _widths(cells)

    lines = [
        COLUMN_SEPARATOR.join(
            pad_cell(text, widths[column]) for column, text in enumerate(row)
        )
        for row in cells
    ]
    return ROW_SEPARATOR.join(lines)
