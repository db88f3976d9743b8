"""Crossword engine for a vocabulary-learning application.

This package exposes the public API surface via:

- ``vocab_crossword.engine.generator.generate_puzzle``: lays out and trims a puzzle.
- ``vocab_crossword.engine.reveal.apply_difficulty_reveal``: pre-fills letters.
- ``vocab_crossword.engine.session.PuzzleSession``: the interactive fill-in session.
- ``vocab_crossword.data.sources``: word sources supplying ``{word, clue}`` pairs.
"""

from .core.models import Candidate, Cell, Puzzle, Word
from .engine.generator import GeneratorConfig, GridBuilder, generate_puzzle, generate_puzzle_with_report
from .engine.placeholder import PlaceholderSpec
from .engine.reveal import RevealPlanner, apply_difficulty_reveal, apply_reveal
from .engine.session import PuzzleSession

__all__ = [
    "Candidate",
    "Cell",
    "Puzzle",
    "Word",
    "GeneratorConfig",
    "GridBuilder",
    "generate_puzzle",
    "generate_puzzle_with_report",
    "PlaceholderSpec",
    "RevealPlanner",
    "apply_reveal",
    "apply_difficulty_reveal",
    "PuzzleSession",
]

__version__ = "0.1.0"
