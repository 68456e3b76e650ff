"""Grid text formatting contract: rendering, validation and parsing."""

from .cells import EMPTY, SENTINEL, Country, EmptyCell, display_width
from .formatter import column_widths, render
from .validator import ContractViolation, is_valid, parse_grid, validate

__all__ = [
    'EMPTY',
    'SENTINEL',
    'Country',
    'EmptyCell',
    'display_width',
    'column_widths',
    'render',
    'ContractViolation',
    'is_valid',
    'parse_grid',
    'validate',
]
