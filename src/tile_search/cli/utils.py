"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from tile_search.search.models import SearchResult


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    logging.getLogger().setLevel(level)

    # Hydra is chatty at INFO
    logging.getLogger('hydra').setLevel(logging.WARNING)


def load_problems(file_path: Union[str, Path],
                  max_problems: Optional[int] = None) -> List[Tuple[str, str]]:
    """Load (initial, goal) pairs from a problem file.

    Two formats are accepted: a JSON list of ``{"initial": ..., "goal": ...}``
    objects, or plain text with one ``INITIAL GOAL`` pair per line where blank
    lines and lines starting with ``#`` are ignored.

    Args:
        file_path: Path to the problem file
        max_problems: Maximum number of pairs to return

    Returns:
        List of (initial, goal) encodings

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Problem file not found: {file_path}")

    problems: List[Tuple[str, str]] = []
    if file_path.suffix.lower() == '.json':
        try:
            with open(file_path, 'r') as f:
                data = json.load(f)
            for entry in data:
                problems.append((_encoding(entry['initial']), _encoding(entry['goal'])))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}")
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid problem entry in {file_path}: {e}")
    else:
        with open(file_path, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                parts = line.split()
                if len(parts) != 2:
                    raise ValueError(
                        f"Line {line_num} of {file_path}: expected 'INITIAL GOAL', got {line!r}"
                    )
                problems.append((parts[0], parts[1]))

    return problems[:max_problems] if max_problems else problems


def _encoding(value: Any) -> str:
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True)
        else:
            json.dump(results, f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60
        return f"{hours}h {minutes}m {secs:.1f}s"


def format_report(result: SearchResult) -> str:
    """Render the statistics report of one search run."""
    stats = result.statistics
    name = result.algorithm if result.heuristic is None else f"{result.algorithm} ({result.heuristic})"
    rows = [
        ("Algorithm", name),
        ("Status", result.status.value),
        ("Path", result.path or "-"),
        ("Path length", result.path_length),
        ("State expansions", stats.state_expansions),
        ("Max frontier size", stats.max_frontier_size),
        ("Deletions from middle of heap", stats.deletions_from_middle_of_heap),
        ("Local loops avoided", stats.local_loops_avoided),
        ("Attempted re-expansions", stats.attempted_reexpansions),
        ("Running time", format_duration(stats.elapsed_time)),
    ]
    return "\n".join(f"{label + ':':<31} {value}" for label, value in rows)


def create_result_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Create summary statistics from batch results.

    Args:
        results: List of ``SearchResult.to_dict()`` entries

    Returns:
        Summary statistics dictionary
    """
    if not results:
        return {
            'total_problems': 0,
            'solved': 0,
            'unsolved': 0,
            'total_expansions': 0,
            'average_path_length': 0.0,
            'total_time': 0.0,
            'max_time': 0.0
        }

    solved = [r for r in results if r.get('success', False)]
    times = [r['statistics']['elapsed_time'] for r in results]

    return {
        'total_problems': len(results),
        'solved': len(solved),
        'unsolved': len(results) - len(solved),
        'total_expansions': sum(r['statistics']['state_expansions'] for r in results),
        'average_path_length': (sum(r['path_length'] for r in solved) / len(solved)) if solved else 0.0,
        'total_time': sum(times),
        'max_time': max(times)
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print batch processing summary."""
    print("\n" + "=" * 60)
    print("BATCH SUMMARY")
    print("=" * 60)
    print(f"Problems:            {summary['total_problems']}")
    print(f"Solved:              {summary['solved']}")
    print(f"Unsolved:            {summary['unsolved']}")
    print(f"Total expansions:    {summary['total_expansions']}")
    print(f"Average path length: {summary['average_path_length']:.2f}")
    print(f"Total search time:   {format_duration(summary['total_time'])}")
    print(f"Slowest search:      {format_duration(summary['max_time'])}")
