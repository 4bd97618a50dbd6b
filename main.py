"""Main entry point for Chain Reaction."""

import argparse

from factory.chain_factory import ChainFactory
from game.constants import GRID_COLS, GRID_ROWS, MAX_EXPLOSIONS_PER_TURN, MAX_PLAYERS
from game.player_config import parse_player_spec

DEFAULT_PLAYER_SPECS = ("heuristic", "heuristic", "off", "off")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Chain Reaction",
        epilog="""
Player Configuration:
  Use --player1 .. --player4 to configure each seat with the format:
    TYPE[:PARAM=VALUE,PARAM=VALUE,...]

  Types:
    heuristic       - Scores placements and picks among the best (default)
    random          - Random legal placement
    human           - Reads coordinates such as c5 from the keyboard
    off             - Seat not in use (at least two seats must play)

  Parameters:
    top_k=N         - Heuristic picks uniformly among the N best moves (default: 3)
    jitter=X        - Upper bound of random noise added to scores (default: 3.0)
    seed=N          - Random seed for this player
    name=TEXT       - Display name

  Examples:
    --player1 human
    --player2 heuristic:top_k=1,jitter=0
    --player3 random:seed=7
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    for n in range(1, MAX_PLAYERS + 1):
        default = DEFAULT_PLAYER_SPECS[n - 1]
        parser.add_argument(
            f"--player{n}",
            type=str,
            default=default,
            metavar="SPEC",
            help=f"Player {n} configuration (default: {default}). See --help for format.",
        )
    parser.add_argument(
        "--rows", type=int, default=GRID_ROWS, help=f"Grid rows (default: {GRID_ROWS})"
    )
    parser.add_argument(
        "--cols", type=int, default=GRID_COLS, help=f"Grid columns (default: {GRID_COLS})"
    )
    parser.add_argument(
        "--max-explosions",
        type=int,
        default=MAX_EXPLOSIONS_PER_TURN,
        help=f"Explosion limit per placement (default: {MAX_EXPLOSIONS_PER_TURN}, replays use the recorded limit)",
    )
    parser.add_argument(
        "--replay", type=str, help="Path to transcript/notation file (grid size and explosion limit auto-detected)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible games (ignored if --replay is used)",
    )
    parser.add_argument(
        "--transcript-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log game actions to chainlog_<seed>.txt in DIR (default: current directory, ignored if --replay is used)",
    )
    parser.add_argument(
        "--notation-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log game moves in compact notation to chainlog_<seed>_notation.txt in DIR",
    )
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Continue with configured play after replay ends (only with --replay)",
    )
    parser.add_argument(
        "--games", type=int, help="Number of games to play (default: play indefinitely)"
    )
    parser.add_argument(
        "--transcript-screen",
        action="store_true",
        help="Output transcript format game actions to screen",
    )
    parser.add_argument(
        "--notation-screen",
        action="store_true",
        help="Output compact notation to screen",
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Print the grid and explosion log after every placement",
    )
    parser.add_argument(
        "--move-delay",
        type=float,
        default=0.0,
        metavar="SECONDS",
        help="Pause between turns (default: 0)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Track and report statistics for each game",
    )
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    try:
        player_configs = [
            parse_player_spec(getattr(args, f"player{n}")) for n in range(1, MAX_PLAYERS + 1)
        ]
    except ValueError as e:
        parser.error(f"Invalid player configuration: {e}")
        return

    if args.partial and args.replay is None:
        parser.error("--partial requires --replay")

    factory = ChainFactory()
    try:
        controller = factory.create_controller(
            rows=args.rows,
            cols=args.cols,
            max_explosions=args.max_explosions,
            replay_file=args.replay,
            seed=args.seed,
            log_to_file=args.transcript_file,
            log_to_screen=args.transcript_screen,
            log_notation_to_file=args.notation_file,
            log_notation_to_screen=args.notation_screen,
            partial_replay=args.partial,
            max_games=args.games,
            show_board=args.show_board,
            move_duration=args.move_delay,
            track_statistics=args.stats,
            player_configs=player_configs,
            prompt=input,
        )
    except ValueError as e:
        parser.error(str(e))
        return
    controller.run()

    if args.stats:
        controller.print_statistics()


if __name__ == "__main__":
    main()
