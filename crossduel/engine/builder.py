"""
Grid construction for a crossword duel.

Two build strategies are available and equally valid:

1. Dynamic: external candidate words are normalized, topped up from the
   word bank when needed, shuffled, and laid out 7 across / 7 down.
2. Fixed: the built-in fallback word set is laid out in a fixed order.

The dynamic path always degrades to the fixed one when it cannot gather
enough usable words.
"""

import logging
import random
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .errors import InsufficientWordsError
from .grid import build_hint_cells, check_integrity, lay_out_words, render_solution
from .models import MAX_WORDS_PER_AXIS, GameSession, SolutionGrid, WordCandidate
from .wordbank import FIXED_HORIZONTAL, FIXED_VERTICAL, bank_candidates, bank_hint

logger = logging.getLogger(__name__)

WORDS_PER_BUILD = 2 * MAX_WORDS_PER_AXIS
# Fewer usable external words than one full axis means the source is not
# worth mixing in; the fixed grid is used instead.
MIN_CANDIDATE_WORDS = MAX_WORDS_PER_AXIS

HintLookup = Callable[[str], Optional[str]]
Candidate = Union[str, WordCandidate]


def normalize_candidates(candidates: Optional[Iterable[Candidate]]) -> List[WordCandidate]:
    """Uppercase, strip and deduplicate candidates, dropping empty or non-alphabetic words."""
    usable: List[WordCandidate] = []
    seen = set()

    for candidate in candidates or []:
        if isinstance(candidate, str):
            candidate = WordCandidate(word=candidate)

        word = candidate.word.strip().upper()
        if not word or not word.isalpha() or word in seen:
            continue

        seen.add(word)
        usable.append(WordCandidate(word=word, hint=candidate.hint))

    return usable


def select_words(
    candidates: Optional[Iterable[Candidate]],
    rng: random.Random,
) -> Tuple[List[WordCandidate], List[WordCandidate]]:
    """
    Pick 7 horizontal and 7 vertical words at random.

    Raises:
        InsufficientWordsError: If fewer than 7 usable candidates were given,
            or the bank cannot top the pool up to 14 words.
    """
    pool = normalize_candidates(candidates)

    if len(pool) < MIN_CANDIDATE_WORDS:
        raise InsufficientWordsError(
            f"Only {len(pool)} usable words (need at least {MIN_CANDIDATE_WORDS})"
        )

    if len(pool) < WORDS_PER_BUILD:
        logger.debug("Not enough words: %d. Adding words from the word bank.", len(pool))
        pool = normalize_candidates(pool + bank_candidates())

    if len(pool) < WORDS_PER_BUILD:
        raise InsufficientWordsError(
            f"Only {len(pool)} words after adding the word bank (need {WORDS_PER_BUILD})"
        )

    rng.shuffle(pool)
    selected = pool[:WORDS_PER_BUILD]
    return selected[:MAX_WORDS_PER_AXIS], selected[MAX_WORDS_PER_AXIS:]


def resolve_hint(candidate: WordCandidate, hint_lookup: Optional[HintLookup] = None) -> str:
    """Candidate hint, then external lookup, then bank hint, then the word itself."""
    if candidate.hint:
        return candidate.hint
    if hint_lookup is not None:
        hint = hint_lookup(candidate.word)
        if hint:
            return hint
    return bank_hint(candidate.word) or candidate.word


def assemble_session(
    horizontal: List[WordCandidate],
    vertical: List[WordCandidate],
    strategy: str = "dynamic",
) -> GameSession:
    """Lay out the chosen words and wrap them in a fresh session."""
    letters, horizontal_entries, vertical_entries = lay_out_words(horizontal, vertical)
    solution = SolutionGrid(letters=letters)
    check_integrity(solution, horizontal_entries + vertical_entries)

    logger.debug("Solution grid (%s):\n%s", strategy, render_solution(solution))

    return GameSession(
        solution=solution,
        horizontal_words=horizontal_entries,
        vertical_words=vertical_entries,
        hint_cells=build_hint_cells(horizontal_entries, vertical_entries),
        strategy=strategy,
    )


def build_fixed_session() -> GameSession:
    """Build the session from the built-in fallback word set."""
    logger.debug("Creating fixed grid as fallback")
    return assemble_session(list(FIXED_HORIZONTAL), list(FIXED_VERTICAL), strategy="fixed")


def build_session(
    candidates: Optional[Iterable[Candidate]] = None,
    rng: Optional[random.Random] = None,
    hint_lookup: Optional[HintLookup] = None,
    dynamic: bool = True,
    fallback: Callable[[], GameSession] = build_fixed_session,
) -> GameSession:
    """
    Build the initial session for a duel.

    Args:
        candidates: External candidate words (strings or WordCandidate), may be empty
        rng: Random source for word selection; seed it for reproducible builds
        hint_lookup: Optional callable returning a hint for a word; must not raise
        dynamic: False opts out of dynamic sourcing and uses the fallback
        fallback: Builds the fixed session

    Returns:
        A GameSession with solution grid, word entries and hint cells
    """
    if not dynamic:
        return fallback()

    rng = rng or random.Random()

    try:
        horizontal, vertical = select_words(candidates, rng)
    except InsufficientWordsError as e:
        logger.warning("Using fixed grid: %s", e)
        return fallback()

    horizontal = [WordCandidate(word=c.word, hint=resolve_hint(c, hint_lookup)) for c in horizontal]
    vertical = [WordCandidate(word=c.word, hint=resolve_hint(c, hint_lookup)) for c in vertical]

    return assemble_session(horizontal, vertical, strategy="dynamic")
