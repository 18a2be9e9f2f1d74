"""Data models for the crossword duel engine."""

from typing import Dict, List, Optional, Literal, NamedTuple, Set, Tuple
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


GRID_SIZE = 9  # origin row/column + 7 word cells + spacer
MAX_WORDS_PER_AXIS = 7
MAX_WORD_LENGTH = 7
ORIGIN_MARKER = "0"
SHORT_HINT_LIMIT = 8

Axis = Literal['H', 'V']
CellKind = Literal['origin', 'hint', 'playable', 'blank', 'spacer']


class Coordinate(NamedTuple):
    """A (row, col) cell position on the 9x9 grid."""
    row: int
    col: int


ORIGIN = Coordinate(0, 0)


class WordCandidate(BaseModel):
    """A word offered to the grid builder, optionally with its hint."""
    word: str
    hint: Optional[str] = None


class WordEntry(BaseModel):
    """A word placed on the grid along one axis."""
    text: str = Field(..., min_length=1, max_length=MAX_WORD_LENGTH)
    hint: str = ""
    axis: Axis
    start: Coordinate

    @model_validator(mode='after')
    def _check_bounds(self) -> "WordEntry":
        row, col = self.start
        if self.axis == 'H':
            if not (1 <= row <= MAX_WORDS_PER_AXIS and col >= 1 and col + len(self.text) - 1 <= MAX_WORD_LENGTH):
                raise ValueError(f"Horizontal word '{self.text}' at {self.start} leaves the word area")
        else:
            if not (1 <= col <= MAX_WORDS_PER_AXIS and row >= 1 and row + len(self.text) - 1 <= MAX_WORD_LENGTH):
                raise ValueError(f"Vertical word '{self.text}' at {self.start} leaves the word area")
        return self

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def cells(self) -> List[Coordinate]:
        row, col = self.start
        if self.axis == 'H':
            return [Coordinate(row, col + i) for i in range(self.length)]
        return [Coordinate(row + i, col) for i in range(self.length)]

    @property
    def word_id(self) -> str:
        """Identifier built from text, axis and start, e.g. ``H:WIND@6,1``."""
        return f"{self.axis}:{self.text}@{self.start.row},{self.start.col}"

    @property
    def slot(self) -> str:
        """Public slot label (``H6``, ``V3``) that does not reveal the text."""
        index = self.start.row if self.axis == 'H' else self.start.col
        return f"{self.axis}{index}"


class HintCell(BaseModel):
    """Non-playable decoration cell holding a word's hint."""
    coordinate: Coordinate
    hint: str
    axis: Axis
    slot: str

    @property
    def arrow(self) -> str:
        return "↓" if self.axis == 'V' else "→"

    @property
    def short_hint(self) -> str:
        if len(self.hint) > SHORT_HINT_LIMIT:
            return self.hint[:SHORT_HINT_LIMIT - 2] + "..."
        return self.hint


class PlacementRecord(BaseModel):
    """One letter dragged onto the grid during the current turn."""
    letter: str = Field(..., min_length=1)
    target: Coordinate
    rack_index: Optional[int] = Field(None, ge=0)

    @field_validator('letter')
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()


class PlayerState(BaseModel):
    """A player's rack and score."""
    rack: List[str] = Field(default_factory=list)
    score: int = Field(default=0, ge=0)


class SolutionGrid(BaseModel):
    """The answer key: one letter per claimed cell, plus the origin marker."""
    model_config = ConfigDict(frozen=True)

    letters: Dict[Tuple[int, int], str] = Field(default_factory=dict)

    def letter_at(self, coordinate: Tuple[int, int]) -> Optional[str]:
        """Solution letter at a cell, or None for the origin and unclaimed cells."""
        if tuple(coordinate) == ORIGIN:
            return None
        return self.letters.get(tuple(coordinate))


class GameSession(BaseModel):
    """
    Complete state of one duel.

    The solution grid and word lists are fixed once built; only
    ``filled``, ``completed_words``, scores, racks and the current
    player change during play.
    """
    solution: SolutionGrid
    horizontal_words: List[WordEntry] = Field(default_factory=list)
    vertical_words: List[WordEntry] = Field(default_factory=list)
    hint_cells: List[HintCell] = Field(default_factory=list)
    completed_words: Set[str] = Field(default_factory=set)
    current_player_index: int = Field(default=0, ge=0, le=1)
    players: List[PlayerState] = Field(
        default_factory=lambda: [PlayerState(), PlayerState()],
        min_length=2,
        max_length=2,
    )
    filled: Dict[Tuple[int, int], str] = Field(default_factory=dict)
    strategy: Literal['fixed', 'dynamic'] = 'fixed'

    @property
    def words(self) -> List[WordEntry]:
        return self.horizontal_words + self.vertical_words

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def is_complete(self) -> bool:
        """True once every word on both axes has been completed."""
        words = self.words
        return bool(words) and all(w.word_id in self.completed_words for w in words)

    def words_at(self, coordinate: Tuple[int, int]) -> List[WordEntry]:
        """Words (horizontal first) whose cells include the coordinate."""
        coordinate = Coordinate(*coordinate)
        return [w for w in self.words if coordinate in w.cells]


class MoveError(BaseModel):
    """A single reason a move or move command was rejected."""
    code: str
    message: str
    coordinates: List[Coordinate] = Field(default_factory=list)


class MoveResult(BaseModel):
    """Outcome of validating one submitted move."""
    accepted: bool
    player_index: int = 0
    errors: List[MoveError] = Field(default_factory=list)
    mismatched_coordinates: List[Coordinate] = Field(default_factory=list)
    score_delta: int = 0
    completed_word_ids: List[str] = Field(default_factory=list)

    @property
    def reason(self) -> Optional[str]:
        return self.errors[0].code if self.errors else None


class CellView(BaseModel):
    """Public view of one cell. Never carries a solution letter."""
    coordinate: Coordinate
    kind: CellKind
    hint: Optional[str] = None
    short_hint: Optional[str] = None
    arrow: Optional[str] = None
    letter: Optional[str] = None  # letter placed by a player
    pending: bool = False
    horizontal_slot: Optional[str] = None
    horizontal_index: Optional[int] = None
    vertical_slot: Optional[str] = None
    vertical_index: Optional[int] = None
    word_end_right: bool = False
    word_end_bottom: bool = False


class WordView(BaseModel):
    """Public view of one word slot."""
    slot: str
    axis: Axis
    start: Coordinate
    length: int
    hint: str
    completed: bool = False


class BoardView(BaseModel):
    """Redacted board handed to the presentation layer."""
    cells: List[List[CellView]] = Field(default_factory=list)
    words: List[WordView] = Field(default_factory=list)
    scores: List[int] = Field(default_factory=list)
    current_player_index: int = 0
    completed_slots: List[str] = Field(default_factory=list)

    def cell(self, row: int, col: int) -> CellView:
        return self.cells[row][col]
