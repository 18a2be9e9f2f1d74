"""Parsing of move commands and word-list responses."""

import re
from typing import List, Tuple

from .models import Coordinate, MoveError, WordCandidate


# LETTER@ROW,COL, e.g. "W@6,1"
PLACEMENT_PATTERN = re.compile(r'^([A-ZÄÖÜ])@(\d+),(\d+)$', re.IGNORECASE)
# WORD|hint, WORD - hint, or a bare WORD, optionally numbered ("3. WORD|hint")
WORD_LINE_PATTERN = re.compile(
    r'^(?:\d+[.)]\s*)?([A-Za-zÄÖÜäöüß]+)\s*(?:[|:\-–]\s*(.+))?$'
)


def parse_move(command: str) -> Tuple[List[Tuple[str, Coordinate]], List[MoveError]]:
    """
    Parse a move command into (letter, coordinate) pairs with error collection.

    Placements are separated by whitespace or semicolons: ``W@6,1 I@6,2``.

    Returns a tuple of (placements, errors).
    """
    placements: List[Tuple[str, Coordinate]] = []
    errors: List[MoveError] = []

    tokens = [t for t in re.split(r'[\s;]+', command.strip()) if t]
    if not tokens:
        errors.append(MoveError(code="EMPTY_MOVE", message="Move command is empty"))
        return placements, errors

    for token in tokens:
        match = PLACEMENT_PATTERN.match(token)
        if not match:
            errors.append(MoveError(
                code="INVALID_PLACEMENT",
                message=f"Invalid placement '{token}' (expected LETTER@ROW,COL)",
            ))
            continue

        placements.append((
            match.group(1).upper(),
            Coordinate(int(match.group(2)), int(match.group(3))),
        ))

    return placements, errors


def extract_words_content(text: str) -> str:
    """Extract content from between <words> and </words> tags."""
    match = re.search(r'<words>(.*?)</words>', text, re.DOTALL)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_word_list(text: str) -> List[WordCandidate]:
    """Parse one word per line, each optionally followed by its hint."""
    candidates: List[WordCandidate] = []

    for line in extract_words_content(text).split('\n'):
        line = line.strip().lstrip('-*').strip()
        if not line:
            continue

        match = WORD_LINE_PATTERN.match(line)
        if not match:
            continue

        hint = match.group(2).strip() if match.group(2) else None
        candidates.append(WordCandidate(word=match.group(1).upper(), hint=hint or None))

    return candidates
