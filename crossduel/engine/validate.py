"""
Move validation for a crossword duel.

A move is the set of letters the current player placed this turn. It is
accepted only if every letter matches the solution; an accepted move
scores each word it completes (one point per letter) exactly once.
"""

from typing import Dict, List, Sequence, Tuple

from .models import (
    Coordinate,
    GameSession,
    MoveError,
    MoveResult,
    PlacementRecord,
    WordEntry,
)


def check_placements(session: GameSession, placements: Sequence[PlacementRecord]) -> List[Coordinate]:
    """Return the coordinates whose placed letter differs from the solution, in placement order."""
    mismatched: List[Coordinate] = []

    for placement in placements:
        solution = session.solution.letter_at(placement.target)
        if solution is None or placement.letter.upper() != solution:
            target = Coordinate(*placement.target)
            if target not in mismatched:
                mismatched.append(target)

    return mismatched


def find_completed_words(
    session: GameSession,
    placements: Sequence[PlacementRecord],
) -> List[WordEntry]:
    """
    Words touched by the placements that are now fully filled and not yet scored.

    Completion is judged against everything on the board: letters from
    earlier turns plus this turn's placements.
    """
    board: Dict[Tuple[int, int], str] = dict(session.filled)
    for placement in placements:
        board[tuple(placement.target)] = placement.letter

    touched = set()
    for placement in placements:
        for word in session.words_at(placement.target):
            touched.add(word.word_id)

    completed: List[WordEntry] = []
    for word in session.words:
        if word.word_id not in touched or word.word_id in session.completed_words:
            continue
        if all(cell in board for cell in word.cells):
            completed.append(word)

    return completed


def validate(session: GameSession, placements: Sequence[PlacementRecord]) -> MoveResult:
    """
    Validate a submitted move and apply it to the session if accepted.

    On acceptance the placed letters are committed to ``session.filled``,
    newly completed words are added to ``session.completed_words`` and the
    current player's score grows by their lengths. The current player is
    not advanced here. A rejected move leaves the session untouched.

    Returns:
        MoveResult with ``accepted`` False and a NO_LETTERS_PLACED or
        WRONG_LETTERS error, or ``accepted`` True with the score delta
        and completed word ids.
    """
    player_index = session.current_player_index

    if not placements:
        return MoveResult(
            accepted=False,
            player_index=player_index,
            errors=[MoveError(code="NO_LETTERS_PLACED", message="No letters placed")],
        )

    mismatched = check_placements(session, placements)
    if mismatched:
        cells = ", ".join(f"({c.row},{c.col})" for c in mismatched)
        return MoveResult(
            accepted=False,
            player_index=player_index,
            errors=[MoveError(
                code="WRONG_LETTERS",
                message=f"Wrong letters at {cells}",
                coordinates=mismatched,
            )],
            mismatched_coordinates=mismatched,
        )

    completed = find_completed_words(session, placements)

    for placement in placements:
        session.filled[tuple(placement.target)] = placement.letter

    score_delta = sum(word.length for word in completed)
    for word in completed:
        session.completed_words.add(word.word_id)
    session.players[player_index].score += score_delta

    return MoveResult(
        accepted=True,
        player_index=player_index,
        score_delta=score_delta,
        completed_word_ids=[word.word_id for word in completed],
    )
