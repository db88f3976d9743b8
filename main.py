"""CLI entrypoint for the vocabulary crossword engine."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from vocab_crossword.core.constants import (DEFAULT_GRID_SIZE, DIFFICULTY_LEVELS, ArrowKey,
                                            Direction, PlaceholderPosition)
from vocab_crossword.core.models import BuildResult, Candidate
from vocab_crossword.data.sources import (CatalogWordSource, GeminiWordSource, SampleWordSource,
                                          UserWordListSource, WordSource, merge_word_sources)
from vocab_crossword.engine.generator import generate_puzzle_with_report
from vocab_crossword.engine.placeholder import (DESKTOP_LIMITS, MOBILE_LIMITS, PlaceholderSpec,
                                                compute_placeholder_size)
from vocab_crossword.engine.reveal import RevealPlanner
from vocab_crossword.engine.session import PuzzleSession
from vocab_crossword.utils.logger import configure_logging
from vocab_crossword.utils.pretty import format_clues, format_puzzle, pretty_print_puzzle, print_puzzle_stats

PLAY_HELP = (
    "Commands: <row> <col> select (again to toggle direction) | <letter> type | "
    "- backspace | ! hint | clear | left right up down move | drop <row> <col> <letter> | "
    "clues | solution | quit"
)
MOVE_COMMANDS = {"left": ArrowKey.LEFT, "right": ArrowKey.RIGHT, "up": ArrowKey.UP, "down": ArrowKey.DOWN}


def parse_image_size(value: str) -> tuple[int, int]:
    try:
        width, _, height = value.lower().partition("x")
        return int(width), int(height)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate and play vocabulary crosswords",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit candidates (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD or WORD:Clue entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--catalog", type=Path, help="JSON vocabulary catalog of techniques and katas")
    parser.add_argument("--grade", type=str, help="Restrict --catalog to one grade id")
    parser.add_argument(
        "--topic",
        type=str,
        help="Built-in sample topic, or the LLM topic when combined with --llm",
    )
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Ask Gemini for vocabulary about --topic (requires GEMINI_API_KEY)",
    )
    parser.add_argument("--limit", type=int, default=80, help="Maximum number of candidates")
    parser.add_argument("--grid-size", type=int, default=DEFAULT_GRID_SIZE, help="Working grid size")
    parser.add_argument("--placeholder-rows", type=int, help="Placeholder block height")
    parser.add_argument("--placeholder-cols", type=int, help="Placeholder block width")
    parser.add_argument(
        "--image-size",
        type=parse_image_size,
        metavar="WxH",
        help="Size the placeholder from an image's pixel dimensions",
    )
    parser.add_argument("--mobile", action="store_true", help="Use the smaller mobile placeholder limits")
    parser.add_argument(
        "--placeholder-position",
        type=str,
        choices=[p.value for p in PlaceholderPosition],
        default=PlaceholderPosition.CENTER.value,
        help="Placeholder layout mode",
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        choices=[d.level for d in DIFFICULTY_LEVELS],
        default=3,
        help="1 (Beginner, 80%% revealed) to 5 (Expert, nothing revealed)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--play", action="store_true", help="Solve the puzzle in the terminal")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def resolve_placeholder(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Optional[PlaceholderSpec]:
    position = PlaceholderPosition(args.placeholder_position)
    explicit = args.placeholder_rows is not None or args.placeholder_cols is not None
    if explicit and args.image_size:
        parser.error("--image-size cannot be combined with --placeholder-rows/--placeholder-cols")
    if args.image_size:
        limits = MOBILE_LIMITS if args.mobile else DESKTOP_LIMITS
        width, height = args.image_size
        return compute_placeholder_size(width, height, limits, position)
    if explicit:
        if args.placeholder_rows is None or args.placeholder_cols is None:
            parser.error("--placeholder-rows and --placeholder-cols must be given together")
        return PlaceholderSpec(args.placeholder_rows, args.placeholder_cols, position)
    return None


def collect_candidates(args: argparse.Namespace, parser: argparse.ArgumentParser) -> List[Candidate]:
    entries: List[str] = list(args.words or [])
    primary: Optional[WordSource] = None
    fallbacks: List[WordSource] = []

    if entries:
        primary = UserWordListSource(entries)
    if args.words_file:
        fallbacks.append(UserWordListSource.from_file(args.words_file))
    if args.catalog:
        fallbacks.append(CatalogWordSource(args.catalog, grade=args.grade))
    if args.llm:
        if not args.topic:
            parser.error("--llm requires --topic")
        fallbacks.append(GeminiWordSource(args.topic))
    elif args.topic:
        fallbacks.append(SampleWordSource(args.topic, seed=args.seed))

    if primary is None and not fallbacks:
        parser.error("provide --words, --words-file, --catalog or --topic")
    return merge_word_sources(primary, fallbacks, args.limit)


def play(session: PuzzleSession, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    """Line-oriented solving loop; ends when solved, on ``quit`` or at EOF."""

    print(PLAY_HELP, file=stdout)
    while not session.is_solved:
        print(format_puzzle(session.puzzle, cursor=session.selected_cell), file=stdout)
        word = session.active_word
        status = f"{session.progress_percent}% solved, direction {session.current_direction.value}"
        if word is not None:
            status += f" | {word.number} {word.direction.value}: {word.clue}"
        print(status, file=stdout)

        line = stdin.readline()
        if not line:
            break
        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()
        if command == "quit":
            break
        if command == "clues":
            print(format_clues(session.puzzle.words, Direction.ACROSS), file=stdout)
            print(format_clues(session.puzzle.words, Direction.DOWN), file=stdout)
        elif command == "solution":
            print(format_puzzle(session.puzzle, show_solution=True), file=stdout)
        elif command == "clear":
            session.clear()
        elif command == "drop" and len(parts) == 4 and parts[1].isdigit() and parts[2].isdigit():
            session.drop_letter(int(parts[1]), int(parts[2]), parts[3])
        elif len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit():
            session.select_cell(int(parts[0]), int(parts[1]))
        elif command == "-":
            session.backspace()
        elif command == "!":
            session.hint()
        elif command in MOVE_COMMANDS:
            session.move(MOVE_COMMANDS[command])
        elif len(command) == 1:
            session.input_letter(command)
        else:
            print(PLAY_HELP, file=stdout)

    if session.is_solved:
        print(format_puzzle(session.puzzle), file=stdout)
        print("Solved!", file=stdout)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    try:
        placeholder = resolve_placeholder(args, parser)
    except ValueError as exc:
        parser.error(str(exc))
    candidates = collect_candidates(args, parser)

    rng = random.Random(args.seed)
    result = generate_puzzle_with_report(candidates, args.grid_size, placeholder, rng=rng)
    if result.puzzle is None:
        print("Not enough content: at least 3 words of 3-20 letters are needed.", file=sys.stderr)
        return 1

    puzzle = RevealPlanner(rng).apply_difficulty_reveal(result.puzzle, args.difficulty)
    print_puzzle_stats(BuildResult(puzzle=puzzle, dropped=result.dropped))

    if args.output:
        args.output.write_text(
            json.dumps(puzzle.to_jsonable(), ensure_ascii=False, indent=2), encoding="utf-8"
        )

    if args.play:
        play(PuzzleSession(puzzle))
    else:
        print(file=sys.stdout)
        pretty_print_puzzle(puzzle)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
