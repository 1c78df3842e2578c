"""Command-line interface for tile-search.

This module provides CLI commands for solving single puzzles and batches.
"""

from .main import main_cli
from .commands import solve_command, batch_command, config_command
from .utils import setup_logging, load_problems, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'batch_command',
    'config_command',
    'setup_logging',
    'load_problems',
    'save_results'
]
