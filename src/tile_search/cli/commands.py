"""CLI command implementations."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Tuple

from omegaconf import OmegaConf

from tile_search.config import load_config, validate_config, ConfigValidationError
from tile_search.core.data_models import InvalidStateError, PuzzleState, is_solvable
from tile_search.search.engine import GraphSearcher
from tile_search.search.heuristics import UnknownHeuristicError
from tile_search.search.models import SearchConfig, SearchResult

from .utils import (
    load_problems, save_results, format_report, create_result_summary, print_summary
)

logger = logging.getLogger(__name__)


def build_search_config(args) -> SearchConfig:
    """Merge the configuration file, ``--config`` overrides and CLI flags.

    Falls back to built-in defaults when no ``conf`` directory is available
    (e.g. a non-editable install).
    """
    overrides = list(getattr(args, 'config', None) or [])
    try:
        cfg = load_config(overrides=overrides)
    except FileNotFoundError as e:
        logger.warning(f"{e}; using built-in defaults")
        cfg = OmegaConf.create({})
        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
            validate_config(cfg)

    if not getattr(args, 'quiet', False) and getattr(args, 'verbose', 0) == 0:
        level = OmegaConf.select(cfg, 'logging.level', default=None)
        if level:
            logging.getLogger().setLevel(str(level).upper())

    config = SearchConfig.from_config(cfg)
    if getattr(args, 'algorithm', None):
        config.algorithm = args.algorithm
    if getattr(args, 'heuristic', None):
        config.heuristic = args.heuristic
    if getattr(args, 'workers', None):
        config.scan_workers = args.workers
    return config


def run_search(initial: str, goal: str, config: SearchConfig) -> SearchResult:
    """Parse both encodings and run one search with its own searcher."""
    initial_state = PuzzleState.from_string(initial)
    goal_state = PuzzleState.from_string(goal)
    if not is_solvable(initial_state, goal_state):
        logger.warning(f"{initial} -> {goal} has mismatched parity; "
                       f"the search will exhaust the reachable states")
    searcher = GraphSearcher(config.algorithm, config.heuristic, config)
    return searcher.search(initial_state, goal_state)


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        config = build_search_config(args)
        result = run_search(args.initial, args.goal, config)
    except (InvalidStateError, UnknownHeuristicError, ConfigValidationError) as e:
        logger.error(f"Solve failed: {e}")
        return 1

    output = result.to_dict()
    output.update({
        'initial': args.initial,
        'goal': args.goal,
        'timestamp': time.time()
    })

    print(format_report(result))

    if args.output:
        save_results(output, args.output)
        logger.info(f"Results saved to {args.output}")

    return 0


def _solve_problem(index: int, initial: str, goal: str,
                   config: SearchConfig) -> Tuple[int, Dict[str, Any]]:
    try:
        result = run_search(initial, goal, config)
        entry = result.to_dict()
    except InvalidStateError as e:
        logger.error(f"Problem {index} ({initial} -> {goal}) is invalid: {e}")
        entry = {'success': False, 'error': str(e), 'path_length': 0,
                 'statistics': {'elapsed_time': 0.0, 'state_expansions': 0}}
    entry.update({'index': index, 'initial': initial, 'goal': goal})
    return index, entry


def batch_command(args) -> int:
    """Handle batch command.

    Each problem gets its own searcher; nothing is shared between searches.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        config = build_search_config(args)
        problems = load_problems(args.input_path, args.max_tasks)
    except (FileNotFoundError, ValueError, ConfigValidationError) as e:
        logger.error(f"Batch failed: {e}")
        return 1

    if not problems:
        logger.error(f"No problems found in {args.input_path}")
        return 1

    logger.info(f"Solving {len(problems)} problems with {max(1, args.threads)} thread(s)")

    results: List[Optional[Dict[str, Any]]] = [None] * len(problems)
    with ThreadPoolExecutor(max_workers=max(1, args.threads)) as executor:
        futures = [
            executor.submit(_solve_problem, i, initial, goal, config)
            for i, (initial, goal) in enumerate(problems)
        ]
        for future in as_completed(futures):
            index, entry = future.result()
            results[index] = entry
            status = "solved" if entry.get('success') else "unsolved"
            print(f"[{index + 1}/{len(problems)}] {entry['initial']} -> {entry['goal']}: "
                  f"{status}, length {entry['path_length']}")

    summary = create_result_summary(results)
    print_summary(summary)

    if args.output:
        save_results({'summary': summary, 'results': results}, args.output)
        logger.info(f"Results saved to {args.output}")

    return 0


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    overrides = list(getattr(args, 'config', None) or [])
    if args.config_action == 'show':
        try:
            config = load_config(overrides=overrides, validate=False)
        except FileNotFoundError as e:
            print(f"Configuration not found: {e}")
            return 1
        print("Current Configuration:")
        print("=" * 50)
        print(OmegaConf.to_yaml(config, resolve=True))
        return 0

    elif args.config_action == 'validate':
        try:
            config = load_config(overrides=overrides, validate=False)
            validate_config(config)
        except ConfigValidationError as e:
            print(f"Configuration validation failed: {e}")
            return 1
        except FileNotFoundError as e:
            print(f"Configuration not found: {e}")
            return 1
        print("Configuration is valid")
        return 0

    else:
        print("Unknown config action")
        return 1
