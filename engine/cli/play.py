#!/usr/bin/env python3
"""
Terminal four-in-a-row client.

Play against the AI or watch AI vs AI games.
"""

from __future__ import annotations
import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from connectfour.core.bitboard import BOARD_WIDTH, BOARD_HEIGHT, SYMBOLS, Cell
from connectfour.core.state import IllegalMoveError
from connectfour.ai.negamax import SearchConfig, RefinementMode, SEARCH_DEPTH, NUM_THREADS
from connectfour.game import GameSession

# First AI stone when the AI opens
AI_OPENING = (4, 0)


def print_board(session: GameSession) -> None:
    """Print the board, row 0 at the bottom, last move highlighted."""
    GREEN = '\033[92m'
    RESET = '\033[0m'

    grid = session.board.to_array()
    last = session.last_move() if grid.any() else None

    print()
    print("  +" + "-" * (BOARD_WIDTH * 2 + 1) + "+")
    for y in range(BOARD_HEIGHT - 1, -1, -1):
        line = f"{y} |"
        for x in range(BOARD_WIDTH):
            sym = SYMBOLS[Cell(int(grid[y, x]))]
            if (x, y) == last:
                line += f" {GREEN}{sym}{RESET}"
            else:
                line += f" {sym}"
        line += " |"
        print(line)
    print("  +" + "-" * (BOARD_WIDTH * 2 + 1) + "+")
    print("    " + " ".join(str(x) for x in range(BOARD_WIDTH)))
    print()


def parse_user_move(session: GameSession, input_str: str) -> int | str | None:
    """Parse user input into a column, a command, or None if invalid."""
    input_str = input_str.strip().lower()

    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'

    try:
        column = int(input_str)
    except ValueError:
        print(f"Invalid input: {input_str!r}. Enter a column number 0-{BOARD_WIDTH - 1}")
        return None

    if session.first_empty_row(column) is None:
        print(f"Column {column} is full or off the board")
        return None
    return column


def report_result(session: GameSession, human_player: int | None) -> None:
    print_board(session)
    winner = session.winner()
    if winner is None:
        print("It's a draw!")
    elif human_player is None:
        print(f"Player {winner + 1} wins!")
    elif winner == human_player:
        print("Congratulations! You win!")
    else:
        print("AI wins. Better luck next time!")


def play_human_vs_ai(config: SearchConfig, human_first: bool = False) -> None:
    """Play a game: human (x) vs AI (o)."""
    human_player = 0
    session = GameSession(config)

    if not human_first:
        session.place_human_stone(*AI_OPENING, 1 - human_player)

    print(f"\n=== Four in a row ({BOARD_WIDTH}x{BOARD_HEIGHT}) ===")
    print("You are x. Enter a column number to drop a stone, 'q' to quit.")

    belief = 0
    while not session.is_over():
        print_board(session)
        print(f"If you play optimally: {belief}")

        while True:
            try:
                user_input = input("> ").strip()
            except EOFError:
                return

            result = parse_user_move(session, user_input)
            if result == 'quit':
                print("Thanks for playing!")
                return
            elif result == 'help':
                print(f"Enter a column 0-{BOARD_WIDTH - 1}; the stone drops to its lowest empty row")
            elif result is not None:
                row = session.first_empty_row(result)
                try:
                    session.place_human_stone(result, row, human_player)
                except IllegalMoveError as e:
                    print(e)
                    continue
                break

        if session.is_over():
            break

        print(f"AI thinking (depth {config.depth}, {config.num_threads} threads)...")
        step = session.compute_ai_move()
        if step is None:
            break
        belief = step.belief
        print(f"AI plays: column {step.x} (row {step.y}), {step.nodes} nodes")

    report_result(session, human_player)


def watch_ai_vs_ai(config: SearchConfig, delay: float = 0.5) -> None:
    """Watch AI play against itself."""
    session = GameSession(config)
    session.place_human_stone(*AI_OPENING, 1)

    print("\n=== AI vs AI ===")
    print(f"Depth {config.depth}, {config.num_threads} threads, {config.refinement.value} refinement")

    move_count = 1
    while not session.is_over():
        print_board(session)
        player = session.current_player
        step = session.compute_ai_move()
        if step is None:
            break
        move_count += 1
        print(f"Move {move_count}, Player {player + 1}: column {step.x} "
              f"(belief {step.belief}, {step.nodes} nodes)")
        time.sleep(delay)

    report_result(session, None)


def build_config(args: argparse.Namespace) -> SearchConfig:
    return SearchConfig(
        depth=args.depth,
        num_threads=args.threads,
        trim=args.trim,
        executor=args.executor,
        refinement=RefinementMode(args.mode),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Four-in-a-row terminal client')
    parser.add_argument('--depth', type=int, default=SEARCH_DEPTH, help='Search depth in plies')
    parser.add_argument('--threads', type=int, default=NUM_THREADS, help='Root workers')
    parser.add_argument('--trim', type=int, default=None,
                        help='Search only the N best-ordered moves (default: all)')
    parser.add_argument('--mode', choices=[m.value for m in RefinementMode],
                        default=RefinementMode.SINGLE.value, help='Depth refinement mode')
    parser.add_argument('--executor', choices=['thread', 'process'], default='thread',
                        help='Run root workers as threads or processes')
    parser.add_argument('--human-first', action='store_true', help='Human plays the first stone')
    parser.add_argument('--watch', action='store_true', help='Watch AI vs AI')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log search details')
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)
    if args.watch:
        watch_ai_vs_ai(config)
    else:
        play_human_vs_ai(config, args.human_first)


if __name__ == '__main__':
    main()
