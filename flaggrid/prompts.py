"""
Prompt templates for grid extraction.
"""
from .grid_format import EMPTY, SENTINEL, Country, render

EXAMPLE_GRID = [
    [Country('🇬🇧', 'UK'), Country('🇨🇦', 'Canada'), Country('🇯🇵', 'Japan')],
    [Country('🇺🇸', 'United States'), EMPTY, Country('🇫🇷', 'France')],
    [Country('🇮🇹', 'Italy'), Country('🇩🇪', 'Germany'), Country('🇲🇽', 'Mexico')],
]

GRID_EXTRACTION_PROMPT = """You are an expert OCR and image analysis tool. Your task is to analyze an image containing a 3x3 grid of countries and format the output with perfect column alignment.

Follow these instructions precisely:
1. The image contains a 3x3 grid.
2. Each cell in the grid might contain a country's flag and its name, or it might be empty.
3. Your output MUST be a plain text representation of this 3x3 grid.
4. For each cell that contains a country, extract its flag as a single emoji character and the country's name. Combine them as "emoji name".
5. For each cell that is empty, you MUST represent it as "{sentinel}".
6. Maintain the exact 3x3 structure using newlines to separate the three rows.

7. **Column Alignment is CRITICAL.** All columns must be perfectly aligned vertically and must never overlap. To achieve this:
   a. After identifying the content for all 9 cells, determine the maximum character length for each of the three columns, counting each flag emoji as one character. For example, if the first column has "🇬🇧 UK", "{sentinel}", and "🇺🇸 United States", the column length is determined by "🇺🇸 United States".
   b. Pad the text in each cell with trailing spaces so that every cell in the same column has the exact same character length (equal to the maximum length for that column).
   c. Join the padded cells in each row with exactly two spaces between columns.

8. Do NOT add any extra explanations, titles, or markdown formatting like ```. Your entire response should be only the 9-cell grid text.

Example of perfectly aligned output (cells to the left of a longer entry are padded with trailing spaces so the next column starts at the same position on every line):
{example}
"""


def get_grid_prompt() -> str:
    """Return the grid extraction prompt with its worked example."""
    return GRID_EXTRACTION_PROMPT.format(
        sentinel=SENTINEL,
        example=render(EXAMPLE_GRID),
    )
