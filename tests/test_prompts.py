"""Tests for the grid extraction prompt."""
from flaggrid.grid_format import SENTINEL, render, validate
from flaggrid.prompts import EXAMPLE_GRID, get_grid_prompt


def test_prompt_names_sentinel():
    assert f'"{SENTINEL}"' in get_grid_prompt()


def test_prompt_example_is_well_formed():
    example = render(EXAMPLE_GRID)

    assert example in get_grid_prompt()
    assert validate(example) == []


def test_prompt_forbids_markdown():
    assert 'Do NOT add any extra explanations' in get_grid_prompt()
