import json
import logging
import random
import time
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Optional, Any, Callable, Tuple
from pydantic import BaseModel, Field, ConfigDict

from .game import LetterBag
from .models import Phase, TurnResult, GameConfig, DuelResult
from .sources import WordSource, create_source, load_candidates, safe_hint_lookup
from ..engine.builder import build_session, build_fixed_session
from ..engine.grid import in_bounds, render_solution
from ..engine.models import BoardView, Coordinate, GameSession, MoveResult, PlacementRecord, PlayerState
from ..engine.validate import validate
from ..engine.view import redact

logger = logging.getLogger(__name__)


class Duel(BaseModel):
    """
    Turn management for a two-player crossword duel.

    Owns the session, the letters placed during the current turn and the
    per-turn state machine:

        AWAITING_PLACEMENTS -> submit -> accepted: next player, AWAITING_PLACEMENTS
                                      -> wrong letters: SHOWING_ERROR
        SHOWING_ERROR -> revert_mismatches -> AWAITING_PLACEMENTS (same player)

    The duel becomes COMPLETE once every word is completed.

    Attributes:
        config: Duel configuration
        session: Engine state (solution, words, scores, racks)
        bag: Letter bag dealing racks
        pending: Letters placed this turn, not yet submitted
        phase: Current turn state
        last_result: Result of the most recent submit
        turn_history: History of submits and passes
        current_turn: Number of completed turns
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    session: GameSession
    bag: LetterBag = Field(default_factory=LetterBag)
    pending: List[PlacementRecord] = Field(default_factory=list)
    phase: Phase = "AWAITING_PLACEMENTS"
    last_result: Optional[MoveResult] = None
    turn_history: List[TurnResult] = Field(default_factory=list)
    current_turn: int = 0
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        word_source: Optional[WordSource] = None,
        **config_kwargs: Any
    ) -> "Duel":
        """
        Factory method to build the grid and deal both racks.

        Args:
            config: Optional GameConfig instance
            word_source: Word source for the dynamic strategy (defaults to the one named in the config)
            **config_kwargs: Config parameters if config not provided

        Returns:
            A Duel ready for player 1's first move
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        if config.strategy == "dynamic":
            source = word_source or create_source(config)
            candidates = load_candidates(source)
            session = build_session(
                candidates,
                rng=random.Random(config.seed),
                hint_lookup=safe_hint_lookup(source),
            )
        else:
            session = build_fixed_session()

        bag = LetterBag(rack_size=config.rack_size, seed=config.seed)
        duel = cls(config=config, session=session, bag=bag)
        duel.setup()
        return duel

    def setup(self) -> None:
        """Clear the board, deal fresh racks, reset scores and start with player 1."""
        self.session.filled = {}
        self.session.completed_words = set()
        self.session.players = [PlayerState(rack=self.bag.deal_rack()) for _ in range(2)]
        self.session.current_player_index = 0
        self.pending = []
        self.phase = "AWAITING_PLACEMENTS"
        self.last_result = None
        self.turn_history = []
        self.current_turn = 0
        self.started_at = datetime.now()
        logger.debug("Duel set up with %s grid", self.session.strategy)

    @property
    def current_player(self) -> PlayerState:
        return self.session.current_player

    @property
    def is_complete(self) -> bool:
        return self.phase == "COMPLETE"

    def _require_phase(self, phase: Phase, action: str) -> None:
        if self.phase != phase:
            raise ValueError(f"Cannot {action} while {self.phase}")

    def pending_at(self, coordinate: Tuple[int, int]) -> Optional[PlacementRecord]:
        for placement in self.pending:
            if tuple(placement.target) == tuple(coordinate):
                return placement
        return None

    def place_letter(self, rack_index: int, coordinate: Tuple[int, int]) -> PlacementRecord:
        """
        Move a letter from the current player's rack onto the grid.

        A letter already pending on that cell goes back to the rack.

        Args:
            rack_index: Index of the letter in the current rack
            coordinate: Target (row, col)

        Returns:
            The PlacementRecord for this letter

        Raises:
            ValueError: If not awaiting placements, the index is not in the rack,
                or the coordinate is off the grid
        """
        self._require_phase("AWAITING_PLACEMENTS", "place letters")

        rack = self.current_player.rack
        if not 0 <= rack_index < len(rack):
            raise ValueError(f"No letter at rack index {rack_index} (rack has {len(rack)})")

        target = Coordinate(*coordinate)
        if not in_bounds(target):
            raise ValueError(f"Coordinate {tuple(target)} is off the grid")

        replaced = self.pending_at(target)
        if replaced is not None:
            self.pending.remove(replaced)

        letter = rack.pop(rack_index)
        if replaced is not None:
            rack.append(replaced.letter)

        placement = PlacementRecord(letter=letter, target=target, rack_index=rack_index)
        self.pending.append(placement)
        logger.debug("Placed %s on %s from rack index %d", letter, tuple(target), rack_index)
        return placement

    def withdraw_letter(self, coordinate: Tuple[int, int]) -> str:
        """
        Take a pending letter back into the current player's rack.

        Raises:
            ValueError: If not awaiting placements or no letter is pending there
        """
        self._require_phase("AWAITING_PLACEMENTS", "withdraw letters")

        placement = self.pending_at(coordinate)
        if placement is None:
            raise ValueError(f"No pending letter at {tuple(coordinate)}")

        self.pending.remove(placement)
        self.current_player.rack.append(placement.letter)
        return placement.letter

    def submit_move(self) -> MoveResult:
        """
        Validate the pending letters as the current player's move.

        Accepted moves score, clear the pending letters and pass the turn.
        Moves with wrong letters switch to SHOWING_ERROR until
        ``revert_mismatches`` is called. An empty move changes nothing.
        """
        self._require_phase("AWAITING_PLACEMENTS", "submit a move")

        player_index = self.session.current_player_index
        placements = list(self.pending)
        rack_before = list(self.current_player.rack)

        result = validate(self.session, placements)
        self.last_result = result

        if not result.accepted:
            if result.reason == "WRONG_LETTERS":
                self.phase = "SHOWING_ERROR"
            logger.debug("Move rejected: %s", result.errors[0].message)
            self.turn_history.append(TurnResult(
                player_index=player_index,
                turn_number=self.current_turn,
                action="SUBMIT",
                placements=placements,
                result=result,
                rack_before=rack_before,
                rack_after=list(self.current_player.rack),
            ))
            return result

        logger.debug("Move accepted: +%d for player %d", result.score_delta, player_index + 1)
        refilled = self._advance_turn()
        self.turn_history.append(TurnResult(
            player_index=player_index,
            turn_number=self.current_turn - 1,
            action="SUBMIT",
            placements=placements,
            result=result,
            rack_before=rack_before,
            rack_after=list(self.session.players[player_index].rack),
            refilled=refilled,
        ))
        return result

    def revert_mismatches(self) -> List[Coordinate]:
        """
        Clear the wrong letters of a rejected move after the grace window.

        Mismatched letters go back to the rack; correct letters stay
        pending and the same player continues.

        Returns:
            The coordinates that were cleared
        """
        self._require_phase("SHOWING_ERROR", "revert a move")

        mismatched = set(self.last_result.mismatched_coordinates)
        cleared: List[Coordinate] = []
        for placement in list(self.pending):
            if placement.target in mismatched:
                self.pending.remove(placement)
                self.current_player.rack.append(placement.letter)
                cleared.append(placement.target)

        self.phase = "AWAITING_PLACEMENTS"
        return cleared

    def wait_and_revert(self, sleep: Callable[[float], None] = time.sleep) -> List[Coordinate]:
        """Wait out the configured grace window, then revert the wrong letters."""
        self._require_phase("SHOWING_ERROR", "revert a move")
        sleep(self.config.revert_delay_seconds)
        return self.revert_mismatches()

    def pass_turn(self) -> TurnResult:
        """Give up the current move: pending letters return to the rack and the turn passes."""
        self._require_phase("AWAITING_PLACEMENTS", "pass")

        player_index = self.session.current_player_index
        rack_before = list(self.current_player.rack)
        for placement in self.pending:
            self.current_player.rack.append(placement.letter)

        refilled = self._advance_turn()
        turn = TurnResult(
            player_index=player_index,
            turn_number=self.current_turn - 1,
            action="PASS",
            rack_before=rack_before,
            rack_after=list(self.session.players[player_index].rack),
            refilled=refilled,
        )
        self.turn_history.append(turn)
        return turn

    def _advance_turn(self) -> bool:
        """Switch players, clear pending letters and refill an empty rack. Returns True on refill."""
        self.pending = []
        self.current_turn += 1

        if self.session.is_complete:
            self.phase = "COMPLETE"
            logger.debug("All words completed")
            return False

        self.session.current_player_index = 1 - self.session.current_player_index
        self.phase = "AWAITING_PLACEMENTS"

        if not self.current_player.rack:
            self.current_player.rack = self.bag.deal_rack()
            return True
        return False

    def get_view(self) -> BoardView:
        """Redacted board including this turn's pending letters."""
        pending = {tuple(p.target): p.letter for p in self.pending}
        return redact(self.session, pending)

    def winner_index(self) -> Optional[int]:
        """Index of the leading player once complete; None while playing or on a draw."""
        if not self.is_complete:
            return None
        first, second = (p.score for p in self.session.players)
        if first == second:
            return None
        return 0 if first > second else 1

    def get_state(self) -> Dict:
        """
        Get the current duel state as a dictionary.

        Racks are included; solution letters are not.
        """
        return {
            "phase": self.phase,
            "current_turn": self.current_turn,
            "current_player": self.session.current_player_index,
            "strategy": self.session.strategy,
            "scores": [p.score for p in self.session.players],
            "racks": [list(p.rack) for p in self.session.players],
            "pending": [p.model_dump() for p in self.pending],
            "completed_slots": self.get_view().completed_slots,
        }

    def get_result(self) -> DuelResult:
        """
        Get the duel summary.

        Returns:
            DuelResult with scores, completed words and turn history
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        player_ids = [f"p{i + 1}" for i in range(2)]
        winner = self.winner_index()

        return DuelResult(
            config=self.config,
            strategy=self.session.strategy,
            is_complete=self.is_complete,
            winner=player_ids[winner] if winner is not None else None,
            is_draw=self.is_complete and winner is None,
            scores={pid: p.score for pid, p in zip(player_ids, self.session.players)},
            player_names=dict(zip(player_ids, self.config.player_names)),
            completed_words=sorted(self.session.completed_words) if self.is_complete else self.get_view().completed_slots,
            total_turns=self.current_turn,
            turn_history=self.turn_history,
            solution=render_solution(self.session.solution).split('\n') if self.is_complete else None,
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the duel result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)
