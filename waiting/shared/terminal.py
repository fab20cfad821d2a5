"""Terminal geometry and display-width measurement."""

import shutil
import unicodedata
from typing import Optional

from rich.cells import cell_len, get_character_cell_size

# Columns assumed when the terminal size cannot be determined
DEFAULT_COLUMNS = 40


def terminal_width() -> Optional[int]:
    """Return the terminal column count, or None when it is unknown."""
    columns = shutil.get_terminal_size(fallback=(0, 0)).columns
    return columns if columns > 0 else None


def text_width(text: str) -> int:
    """Number of terminal columns ``text`` occupies."""
    return cell_len(text)


def char_width(char: str) -> Optional[int]:
    """Column width of a single character.

    Control characters have no defined width and return None.
    """
    if unicodedata.category(char) == 'Cc':
        return None
    return get_character_cell_size(char)
