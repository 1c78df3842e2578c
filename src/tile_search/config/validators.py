"""Configuration validation for tile-search."""

import logging

from omegaconf import DictConfig

logger = logging.getLogger(__name__)

VALID_ALGORITHMS = ('uc', 'astar')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_logging_config(config.get('logging', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")

    logger.debug("Configuration validation passed")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    # Imported here so the validators stay importable without the search package
    from tile_search.search.heuristics import HEURISTICS

    algorithm = search_config.get('algorithm', 'astar')
    if algorithm not in VALID_ALGORITHMS:
        raise ConfigValidationError(
            f"search.algorithm must be one of {list(VALID_ALGORITHMS)}, got {algorithm}"
        )

    heuristic = search_config.get('heuristic', 'manhattan')
    if heuristic not in HEURISTICS:
        raise ConfigValidationError(
            f"search.heuristic must be one of {sorted(HEURISTICS)}, got {heuristic}"
        )

    log_interval = search_config.get('log_interval', 10000)
    if not isinstance(log_interval, int) or log_interval < 0:
        raise ConfigValidationError(
            f"search.log_interval must be a non-negative integer, got {log_interval}"
        )

    scan_config = search_config.get('duplicate_scan', {})
    if scan_config:
        workers = scan_config.get('workers', 1)
        if not isinstance(workers, int) or workers < 1 or workers > 64:
            raise ConfigValidationError(
                f"duplicate_scan.workers must be integer between 1 and 64, got {workers}"
            )

        min_size = scan_config.get('min_parallel_size', 256)
        if not isinstance(min_size, int) or min_size < 1:
            raise ConfigValidationError(
                f"duplicate_scan.min_parallel_size must be positive integer, got {min_size}"
            )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section.

    Args:
        logging_config: Logging configuration section
    """
    if not logging_config:
        return

    level = str(logging_config.get('level', 'WARNING')).upper()
    if level not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {list(VALID_LOG_LEVELS)}, got {level}"
        )
