"""Built-in German word bank and the fixed fallback word set."""

from typing import Dict, List, Optional

from .models import WordCandidate


# Word bank with static hints, used to supplement external words and as
# the static word source.
WORD_BANK: Dict[str, str] = {
    "HAUS": "Wohnen",
    "KATZE": "Tier",
    "BLUME": "Pflanze",
    "WAGEN": "Fahrzeug",
    "STUHL": "Möbel",
    "TISCH": "Einrichtung",
    "MAUS": "Nager",
    "HUND": "Freund",
    "BUCH": "Lesen",
    "BALL": "Sport",
    "BAUM": "Wald",
    "BROT": "Essen",
    "UFER": "Wasser",
    "SEIL": "Klettern",
    "BOOT": "Segeln",
    "MOND": "Himmel",
}

# Fixed fallback grid, rows 1..7 from column 1. Horizontal letters win at
# intersections, so the vertical words below are rewritten during layout
# (column 1 reads TASTE, column 5 MRTEE, and so on).
FIXED_HORIZONTAL: List[WordCandidate] = [
    WordCandidate(word="TRAUM", hint="Schlaf"),
    WordCandidate(word="ALTAR", hint="Kirche"),
    WordCandidate(word="STERT", hint="Ende"),
    WordCandidate(word="TENKE", hint="Denken"),
    WordCandidate(word="ENDE", hint="Schluss"),
    WordCandidate(word="WIND", hint="Luft"),
    WordCandidate(word="SEE", hint="Wasser"),
]

FIXED_VERTICAL: List[WordCandidate] = [
    WordCandidate(word="TOREN", hint="Narren"),
    WordCandidate(word="RASTE", hint="Pause"),
    WordCandidate(word="ALTEN", hint="Senioren"),
    WordCandidate(word="UTEND", hint="Wütend"),
    WordCandidate(word="MARKE", hint="Marke"),
    WordCandidate(word="ORTE", hint="Plätze"),
    WordCandidate(word="KATZS", hint="Tier"),
]


def bank_hint(word: str) -> Optional[str]:
    """Return the static hint for a bank word, or None."""
    return WORD_BANK.get(word.upper())


def bank_candidates() -> List[WordCandidate]:
    """All bank words as candidates, with their hints."""
    return [WordCandidate(word=word, hint=hint) for word, hint in WORD_BANK.items()]
