"""Turn management and word sourcing for crossword duels."""

from .models import (
    Message,
    Role,
    Action,
    Phase,
    TurnResult,
    LLMSourceConfig,
    GameConfig,
    DuelResult,
)
from .llm_client import LLMClient
from .game import LetterBag, ALPHABET, RACK_SIZE
from .sources import (
    WordSource,
    StaticWordSource,
    DwdsWordSource,
    LLMWordSource,
    create_source,
    load_candidates,
    safe_hint_lookup,
)
from .duel import Duel

__all__ = [
    "Message",
    "Role",
    "Action",
    "Phase",
    "TurnResult",
    "LLMSourceConfig",
    "GameConfig",
    "DuelResult",
    "LLMClient",
    "LetterBag",
    "ALPHABET",
    "RACK_SIZE",
    "WordSource",
    "StaticWordSource",
    "DwdsWordSource",
    "LLMWordSource",
    "create_source",
    "load_candidates",
    "safe_hint_lookup",
    "Duel",
]
