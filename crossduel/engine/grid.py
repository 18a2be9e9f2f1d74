"""Grid layout and rendering utilities."""

import logging
from typing import Dict, Tuple, List, Sequence

from .errors import GridIntegrityError
from .models import (
    GRID_SIZE,
    MAX_WORDS_PER_AXIS,
    MAX_WORD_LENGTH,
    ORIGIN,
    ORIGIN_MARKER,
    BoardView,
    Coordinate,
    HintCell,
    SolutionGrid,
    WordCandidate,
    WordEntry,
)

logger = logging.getLogger(__name__)


def is_spacer(coordinate: Tuple[int, int]) -> bool:
    """Row 8 and column 8 pad the grid and never hold words."""
    row, col = coordinate
    return row == GRID_SIZE - 1 or col == GRID_SIZE - 1


def in_bounds(coordinate: Tuple[int, int]) -> bool:
    row, col = coordinate
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def lay_out_words(
    horizontal: Sequence[WordCandidate],
    vertical: Sequence[WordCandidate],
) -> Tuple[Dict[Tuple[int, int], str], List[WordEntry], List[WordEntry]]:
    """
    Write horizontal then vertical words into a fresh letter map.

    Horizontal word i goes to row i+1 from column 1, vertical word i to
    column i+1 from row 1. Words are truncated to 7 letters and empty
    words leave their row/column unused. Where a vertical letter meets a
    different horizontal letter the horizontal letter stays and the
    vertical entry's text is rewritten to match it.

    Returns:
        (letters, horizontal_entries, vertical_entries)
    """
    letters: Dict[Tuple[int, int], str] = {ORIGIN: ORIGIN_MARKER}
    horizontal_entries: List[WordEntry] = []
    vertical_entries: List[WordEntry] = []

    for i, candidate in enumerate(horizontal[:MAX_WORDS_PER_AXIS]):
        row = i + 1
        text = candidate.word[:MAX_WORD_LENGTH]
        if not text:
            logger.debug("Skipping empty horizontal word at row %d", row)
            continue

        for j, letter in enumerate(text):
            letters[(row, j + 1)] = letter

        horizontal_entries.append(WordEntry(
            text=text,
            hint=candidate.hint or candidate.word,
            axis='H',
            start=Coordinate(row, 1),
        ))
        logger.debug("Placed horizontal word %s in row %d", text, row)

    for i, candidate in enumerate(vertical[:MAX_WORDS_PER_AXIS]):
        col = i + 1
        text = list(candidate.word[:MAX_WORD_LENGTH])
        if not text:
            logger.debug("Skipping empty vertical word at column %d", col)
            continue

        for j, letter in enumerate(text):
            cell = (j + 1, col)
            existing = letters.get(cell)
            if existing is not None and existing != letter:
                logger.debug("Conflict at %s: H:%s V:%s, keeping %s", cell, existing, letter, existing)
                text[j] = existing
            else:
                letters[cell] = letter

        resolved = "".join(text)
        if resolved != candidate.word[:MAX_WORD_LENGTH]:
            logger.debug("Rewrote vertical word %s to %s", candidate.word, resolved)

        vertical_entries.append(WordEntry(
            text=resolved,
            hint=candidate.hint or candidate.word,
            axis='V',
            start=Coordinate(1, col),
        ))

    return letters, horizontal_entries, vertical_entries


def build_hint_cells(
    horizontal: List[WordEntry],
    vertical: List[WordEntry],
) -> List[HintCell]:
    """Hint cells along row 0 for vertical words and column 0 for horizontal words."""
    cells = [
        HintCell(coordinate=Coordinate(0, w.start.col), hint=w.hint, axis='V', slot=w.slot)
        for w in vertical
    ]
    cells.extend(
        HintCell(coordinate=Coordinate(w.start.row, 0), hint=w.hint, axis='H', slot=w.slot)
        for w in horizontal
    )
    return cells


def check_integrity(grid: SolutionGrid, entries: List[WordEntry]) -> None:
    """Raise GridIntegrityError if any entry disagrees with the grid."""
    for entry in entries:
        actual = "".join(grid.letter_at(cell) or "" for cell in entry.cells)
        if actual != entry.text:
            raise GridIntegrityError(
                f"Word {entry.word_id} reads '{actual}' on the grid"
            )


def render_grid(letters: Dict[Tuple[int, int], str]) -> str:
    """Render a letter map as 9 lines of 9 characters ('.' for empty)."""
    lines = [
        ''.join(letters.get((row, col), '.') for col in range(GRID_SIZE))
        for row in range(GRID_SIZE)
    ]
    return '\n'.join(lines)


def render_solution(grid: SolutionGrid) -> str:
    """Render the solution grid. Debug output only."""
    return render_grid(grid.letters)


def render_view(view: BoardView) -> str:
    """
    Render a redacted board for a terminal.

    Hint cells show their arrow, playable cells show a placed letter
    (lowercase while pending) or '_', other cells are blank.
    """
    header = "   " + " ".join(str(col) for col in range(GRID_SIZE - 1))
    lines = [header]
    for row in range(GRID_SIZE - 1):
        symbols = []
        for col in range(GRID_SIZE - 1):
            cell = view.cell(row, col)
            if cell.kind == 'origin':
                symbols.append(ORIGIN_MARKER)
            elif cell.kind == 'hint':
                symbols.append(cell.arrow or ' ')
            elif cell.kind == 'playable':
                if cell.letter:
                    symbols.append(cell.letter.lower() if cell.pending else cell.letter)
                else:
                    symbols.append('_')
            else:
                symbols.append(' ')
        lines.append(f"{row}  " + " ".join(symbols))
    return '\n'.join(lines)
