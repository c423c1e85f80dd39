import argparse
import sys
from pathlib import Path
from typing import List, Optional

try:
    from .cli import setup_cli_parsers, track_cli
    from .clipboard import ClipboardError
    from .config import HISTORY_FILE # Import the history file path
except ImportError as e:
    print(f"Error importing ClipPal modules: {e}", file=sys.stderr)
    print("Ensure you are running this from the project root or have installed the package.", file=sys.stderr)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ClipPal: Track clipboard history and recopy past entries.",
        prog="clippal" # Set the program name for help messages
    )

    parser.add_argument(
        '--history-path',
        action='store_true', # Make it a flag
        help='Show the path to the history file and exit'
    )
    parser.add_argument(
        '--history-file',
        type=Path,
        default=None,
        help=f'Use this history file instead of {HISTORY_FILE}'
    )

    # Setup subparsers for CLI commands (history, select, tui, track)
    setup_cli_parsers(parser)
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for the ClipPal application."""
    args = build_parser().parse_args(argv)

    # Handle --history-path argument first
    if args.history_path:
        print(args.history_file or HISTORY_FILE)
        sys.exit(0) # Exit successfully after printing the path

    # No sub-command means background tracking
    func = getattr(args, 'func', None) or track_cli

    try:
        func(args)
    except (ClipboardError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
