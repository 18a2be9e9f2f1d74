"""
Pydantic models for the environment layer.

This module contains the configuration, turn and result models used by the
duel orchestrator and the word sources. The main logic classes (Duel,
LetterBag, LLMClient, word sources) remain in their respective files.
"""

from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, Field, ConfigDict

from ..engine.models import MoveResult, PlacementRecord


# Type aliases
Role = Literal["system", "user", "assistant"]
Action = Literal["SUBMIT", "PASS"]
Phase = Literal["AWAITING_PLACEMENTS", "SHOWING_ERROR", "COMPLETE"]
Strategy = Literal["fixed", "dynamic"]
SourceName = Literal["bank", "dwds", "llm"]


class Message(BaseModel):
    """Represents a single message in the conversation."""
    role: Role
    content: str


class LLMSourceConfig(BaseModel):
    """Configuration for the LLM word source."""
    model_config = ConfigDict(extra='allow')

    model: str = "gpt-4o-mini"
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    # Additional kwargs are allowed and passed to LiteLLM


class GameConfig(BaseModel):
    """Configuration for a duel."""
    seed: Optional[int] = None
    strategy: Strategy = "fixed"
    source: SourceName = "bank"
    fetch_timeout: float = Field(default=5.0, gt=0)
    revert_delay_seconds: float = Field(default=3.0, ge=0)
    rack_size: int = Field(default=5, ge=1)
    player_names: List[str] = Field(
        default_factory=lambda: ["Player 1", "Player 2"],
        min_length=2,
        max_length=2,
    )
    llm: LLMSourceConfig = Field(default_factory=LLMSourceConfig)


class TurnResult(BaseModel):
    """Result of a single submit or pass."""
    player_index: int
    turn_number: int
    action: Action
    placements: List[PlacementRecord] = Field(default_factory=list)
    result: Optional[MoveResult] = None
    rack_before: List[str] = Field(default_factory=list)
    rack_after: List[str] = Field(default_factory=list)
    refilled: bool = False


class DuelResult(BaseModel):
    """Summary of a duel, suitable for saving as JSON."""
    config: GameConfig
    strategy: Strategy = "fixed"
    is_complete: bool = False
    winner: Optional[str] = None
    is_draw: bool = False
    scores: Dict[str, int] = Field(default_factory=dict)
    player_names: Dict[str, str] = Field(default_factory=dict)
    completed_words: List[str] = Field(default_factory=list)  # word ids once complete, slots before
    total_turns: int = 0
    turn_history: List[TurnResult] = Field(default_factory=list)
    solution: Optional[List[str]] = None  # only once the duel is complete
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
