"""
Validation and parsing of grid text.

Validation reports every defect it finds in one pass so a caller can list
all of them at once. Cells are located by splitting each line on runs of
two or more spaces; column offsets are measured with display_width.
"""
import re
from dataclasses import dataclass
from typing import Optional

from ..exceptions import MalformedGridError
from .cells import EMPTY, SENTINEL, Country, display_width
from .formatter import COLUMN_SEPARATOR, GRID_SIZE, rendered_cells

RULE_MARKDOWN = 'markdown'
RULE_TRAILING_NEWLINE = 'trailing_newline'
RULE_LINE_COUNT = 'line_count'
RULE_LEADING_WHITESPACE = 'leading_whitespace'
RULE_SEPARATOR = 'separator'
RULE_EMPTY_CELL = 'empty_cell'
RULE_CELL_FORMAT = 'cell_format'
RULE_COLUMN_WIDTH = 'column_width'
RULE_CONTENT = 'content'

# A cell is words joined by single spaces
CELL_PATTERN = re.compile(r'[^ \t]+(?: [^ \t]+)*')

SENTINEL_EMOJI, _, SENTINEL_DASH = SENTINEL.partition(' ')


@dataclass(frozen=True)
class ContractViolation:
    """One broken formatting rule; row and column are 0-based or None."""
    rule: str
    row: Optional[int]
    column: Optional[int]
    message: str

    def __str__(self):
        where = []
        if self.row is not None:
            where.append(f"row {self.row}")
        if self.column is not None:
            where.append(f"column {self.column}")
        prefix = f"[{self.rule}] {', '.join(where)}: " if where else f"[{self.rule}] "
        return prefix + self.message


def split_cells(line: str) -> list[tuple[str, int]]:
    """Return (cell text, display offset) for each cell found in line."""
    return [
        (match.group(), display_width(line[:match.start()]))
        for match in CELL_PATTERN.finditer(line)
    ]


def _cell_problem(text: str) -> Optional[tuple[str, str]]:
    if text == SENTINEL:
        return None

    emoji, _, name = text.partition(' ')
    if text in (SENTINEL_EMOJI, SENTINEL_DASH) or name == SENTINEL_DASH:
        return RULE_EMPTY_CELL, f"empty cell must be {SENTINEL!r}, got {text!r}"
    if not name or display_width(emoji) != 1:
        return RULE_CELL_FORMAT, f"expected 'emoji name', got {text!r}"
    return None


def _check_line(index: int, line: str, violations: list) -> Optional[list]:
    """Check the structure of one line; return its cells if it has 3."""
    if line.strip().startswith('```'):
        violations.append(ContractViolation(
            RULE_MARKDOWN, index, None, 'markdown fence is not allowed'
        ))
        return None

    if '\t' in line:
        violations.append(ContractViolation(
            RULE_SEPARATOR, index, None, 'tab used instead of spaces'
        ))
        return None

    if line.startswith(' '):
        violations.append(ContractViolation(
            RULE_LEADING_WHITESPACE, index, None, 'line starts with whitespace'
        ))

    cells = split_cells(line)
    if len(cells) != GRID_SIZE:
        violations.append(ContractViolation(
            RULE_SEPARATOR, index, None,
            f"expected {GRID_SIZE} cells separated by two spaces, found {len(cells)}"
        ))
        return None

    for column, (text, _) in enumerate(cells):
        problem = _cell_problem(text)
        if problem:
            violations.append(ContractViolation(problem[0], index, column, problem[1]))

    if line.startswith(' '):
        return None
    return cells


def _padded_widths(line: str, cells: list) -> list[Optional[int]]:
    """Width each cell occupies, separator excluded; None for an unpadded last cell."""
    starts = [start for _, start in cells]
    widths = [
        starts[column + 1] - starts[column] - len(COLUMN_SEPARATOR)
        for column in range(GRID_SIZE - 1)
    ]
    # The final cell may have lost its padding to whitespace trimming
    if line.endswith(' '):
        widths.append(display_width(line) - starts[-1])
    else:
        widths.append(None)
    return widths


def validate(text: str, expected_grid=None) -> list[ContractViolation]:
    """
    Check text against the grid formatting contract.

    Args:
        text: Candidate grid text, e.g. a recognizer's output.
        expected_grid: Optional grid whose rendered cells the text should hold.

    Returns:
        Every violation found, in line order. Empty when text conforms.
    """
    violations: list[ContractViolation] = []

    if text.endswith('\n'):
        violations.append(ContractViolation(
            RULE_TRAILING_NEWLINE, None, None, 'text must not end with a newline'
        ))
        text = text.rstrip('\n')

    lines = text.split('\n')
    if len(lines) != GRID_SIZE:
        violations.append(ContractViolation(
            RULE_LINE_COUNT, None, None,
            f"expected {GRID_SIZE} lines, found {len(lines)}"
        ))

    rows = {}
    for index, line in enumerate(lines):
        cells = _check_line(index, line, violations)
        if cells is not None:
            rows[index] = cells

    padded = {index: _padded_widths(lines[index], cells) for index, cells in rows.items()}
    # With a line missing, over-padding cannot be told apart from misalignment
    complete = len(lines) == GRID_SIZE and len(rows) == GRID_SIZE
    if rows:
        column_widths = []
        for column in range(GRID_SIZE):
            widths = [display_width(cells[column][0]) for cells in rows.values()]
            if not complete:
                widths += [w[column] for w in padded.values() if w[column] is not None]
            column_widths.append(max(widths))

        for index in rows:
            for column, width in enumerate(padded[index]):
                if width is not None and width != column_widths[column]:
                    violations.append(ContractViolation(
                        RULE_COLUMN_WIDTH, index, column,
                        f"cell occupies {width} columns, column width is "
                        f"{column_widths[column]}"
                    ))

    if expected_grid is not None:
        expected = rendered_cells(expected_grid)
        for index, cells in rows.items():
            if index >= GRID_SIZE:
                continue
            for column, (cell_text, _) in enumerate(cells):
                if cell_text != expected[index][column]:
                    violations.append(ContractViolation(
                        RULE_CONTENT, index, column,
                        f"expected {expected[index][column]!r}, got {cell_text!r}"
                    ))

    violations.sort(key=lambda v: -1 if v.row is None else v.row)
    return violations


def is_valid(text: str) -> bool:
    """Return True when text satisfies the formatting contract."""
    return not validate(text)


def parse_cell(text: str):
    """Turn one cell's text back into EMPTY or a Country."""
    if text == SENTINEL:
        return EMPTY
    emoji, _, name = text.partition(' ')
    if name == SENTINEL_DASH:
        raise MalformedGridError(f"Not a valid empty cell: {text!r}")
    try:
        return Country(emoji, name)
    except ValueError as e:
        raise MalformedGridError(f"Not a valid cell: {text!r} ({e})") from e


def parse_grid(text: str) -> list[list]:
    """
    Parse grid text back into a grid of cells.

    Padding is ignored, so well-formed but misaligned text still parses.

    Raises:
        MalformedGridError: if text is not 3 lines of 3 well-formed cells.
    """
    lines = text.strip('\n').split('\n')
    if len(lines) != GRID_SIZE:
        raise MalformedGridError(f"Expected {GRID_SIZE} lines, found {len(lines)}")

    grid = []
    for index, line in enumerate(lines):
        cells = split_cells(line)
        if len(cells) != GRID_SIZE:
            raise MalformedGridError(
                f"Line {index} has {len(cells)} cells, expected {GRID_SIZE}"
            )
        grid.append([parse_cell(cell_text) for cell_text, _ in cells])
    return grid
