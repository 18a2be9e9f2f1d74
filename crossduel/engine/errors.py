"""Exception hierarchy for grid construction and word sourcing."""


class CrossduelError(Exception):
    """Base exception for engine failures."""


class InsufficientWordsError(CrossduelError):
    """Raised when too few usable candidate words are available for a dynamic grid."""


class WordSourceUnavailable(CrossduelError):
    """Raised when an external word or hint source cannot be reached or parsed."""


class GridIntegrityError(CrossduelError):
    """Raised when a word entry disagrees with the solution grid after layout."""
