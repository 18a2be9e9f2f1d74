"""Redacted export of a session for the presentation layer."""

from typing import Dict, Optional, Tuple

from .grid import is_spacer
from .models import (
    GRID_SIZE,
    ORIGIN,
    BoardView,
    CellView,
    Coordinate,
    GameSession,
    WordView,
)


def redact(session: GameSession, pending: Optional[Dict[Tuple[int, int], str]] = None) -> BoardView:
    """
    Build the public board view of a session.

    The view tells which cells belong to which word slot and carries hints,
    placed letters and scores. Solution letters never appear in it.

    Args:
        session: The session to export
        pending: Letters placed this turn but not yet submitted, by coordinate
    """
    pending = pending or {}
    hints = {tuple(h.coordinate): h for h in session.hint_cells}

    cells = []
    for row in range(GRID_SIZE):
        line = []
        for col in range(GRID_SIZE):
            coordinate = Coordinate(row, col)
            if coordinate == ORIGIN:
                cell = CellView(coordinate=coordinate, kind='origin')
            elif is_spacer(coordinate):
                cell = CellView(coordinate=coordinate, kind='spacer')
            elif coordinate in hints:
                hint = hints[coordinate]
                cell = CellView(
                    coordinate=coordinate,
                    kind='hint',
                    hint=hint.hint,
                    short_hint=hint.short_hint,
                    arrow=hint.arrow,
                )
            else:
                cell = CellView(coordinate=coordinate, kind='blank')
            line.append(cell)
        cells.append(line)

    for word in session.words:
        last = word.length - 1
        for i, (row, col) in enumerate(word.cells):
            cell = cells[row][col]
            cell.kind = 'playable'
            if word.axis == 'H':
                cell.horizontal_slot = word.slot
                cell.horizontal_index = i
                cell.word_end_right = i == last
            else:
                cell.vertical_slot = word.slot
                cell.vertical_index = i
                cell.word_end_bottom = i == last

    for (row, col), letter in session.filled.items():
        cells[row][col].letter = letter
    for (row, col), letter in pending.items():
        cells[row][col].letter = letter
        cells[row][col].pending = True

    words = [
        WordView(
            slot=word.slot,
            axis=word.axis,
            start=word.start,
            length=word.length,
            hint=word.hint,
            completed=word.word_id in session.completed_words,
        )
        for word in session.words
    ]

    return BoardView(
        cells=cells,
        words=words,
        scores=[player.score for player in session.players],
        current_player_index=session.current_player_index,
        completed_slots=[w.slot for w in words if w.completed],
    )
