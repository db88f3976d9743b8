"""Custom exception hierarchy for the crossword engine."""


class CrosswordError(Exception):
    """Base exception for engine failures."""


class WordSourceError(CrosswordError):
    """Raised when a word source fails or yields malformed entries."""


class CatalogLoadError(WordSourceError):
    """Raised when the vocabulary catalog cannot be read."""


class ValidationError(CrosswordError):
    """Raised when the puzzle integrity checks fail."""


class SlotPlacementError(CrosswordError):
    """Raised when a word cannot be written at the requested position."""
