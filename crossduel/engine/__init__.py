"""Grid construction and move validation for crossword duels."""

from .builder import build_session, build_fixed_session, select_words, normalize_candidates
from .validate import validate, check_placements, find_completed_words
from .view import redact
from .models import (
    Coordinate,
    WordCandidate,
    WordEntry,
    HintCell,
    PlacementRecord,
    PlayerState,
    SolutionGrid,
    GameSession,
    MoveError,
    MoveResult,
    BoardView,
    CellView,
    WordView,
)
from .errors import CrossduelError, InsufficientWordsError, WordSourceUnavailable, GridIntegrityError
from .parsing import parse_move, parse_word_list
from .grid import lay_out_words, render_grid, render_solution, render_view
from .wordbank import WORD_BANK, FIXED_HORIZONTAL, FIXED_VERTICAL

__all__ = [
    # Building
    "build_session",
    "build_fixed_session",
    "select_words",
    "normalize_candidates",
    # Validation
    "validate",
    "check_placements",
    "find_completed_words",
    "redact",
    # Models
    "Coordinate",
    "WordCandidate",
    "WordEntry",
    "HintCell",
    "PlacementRecord",
    "PlayerState",
    "SolutionGrid",
    "GameSession",
    "MoveError",
    "MoveResult",
    "BoardView",
    "CellView",
    "WordView",
    # Errors
    "CrossduelError",
    "InsufficientWordsError",
    "WordSourceUnavailable",
    "GridIntegrityError",
    # Parsing
    "parse_move",
    "parse_word_list",
    # Grid utilities
    "lay_out_words",
    "render_grid",
    "render_solution",
    "render_view",
    # Word bank
    "WORD_BANK",
    "FIXED_HORIZONTAL",
    "FIXED_VERTICAL",
]
