"""Main CLI entry point for tile-search."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def _add_search_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--algorithm', '-a',
        choices=['uc', 'astar'],
        help='Search algorithm (default: from configuration, astar)'
    )
    parser.add_argument(
        '--heuristic',
        choices=['zero', 'misplaced', 'manhattan'],
        help='A* heuristic (default: from configuration, manhattan)'
    )
    parser.add_argument(
        '--workers', '-w',
        type=int,
        help='Worker threads for the frontier duplicate scan (default: 1)'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='tile-search',
        description='Uniform Cost and A* search with a strict expanded list for sliding-tile puzzles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tile-search solve 123456078 123456780              # A* with Manhattan distance
  tile-search solve 123456078 123456780 -a uc        # Uniform Cost search
  tile-search batch problems.txt --threads 4         # Solve many instances
  tile-search config show                            # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Configuration override (e.g., search.duplicate_scan.workers=4); repeatable'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a single puzzle',
        description='Solve a single puzzle given its initial and goal encodings'
    )
    solve_parser.add_argument('initial', type=str, help='Initial state, e.g. 123456078 or 1,2,3,...,0')
    solve_parser.add_argument('goal', type=str, help='Goal state in the same encoding')
    _add_search_options(solve_parser)

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Solve multiple puzzles',
        description='Solve puzzles listed in a text file (INITIAL GOAL per line) or a JSON list'
    )
    batch_parser.add_argument('input_path', type=str, help='Problem file')
    _add_search_options(batch_parser)
    batch_parser.add_argument(
        '--threads', '-j',
        type=int,
        default=1,
        help='Number of searches run concurrently (default: 1)'
    )
    batch_parser.add_argument(
        '--max-tasks',
        type=int,
        help='Maximum number of problems to solve'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate the configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'batch':
            return commands.batch_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
