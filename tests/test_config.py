"""Tests for configuration management."""

import pytest
from omegaconf import OmegaConf

from tile_search.config import (
    ConfigManager, ConfigValidationError, default_config_dir, get_parameter,
    load_config, validate_config
)
from tile_search.config import config_manager
from tile_search.config.config_manager import get_config
from tile_search.config.validators import validate_logging_config, validate_search_config
from tile_search.search.models import SearchConfig


@pytest.fixture
def config_dir(tmp_path):
    """Minimal config directory mirroring the shipped layout."""
    (tmp_path / "config.yaml").write_text(
        "search:\n"
        "  algorithm: astar\n"
        "  heuristic: manhattan\n"
        "  log_interval: 500\n"
        "  duplicate_scan:\n"
        "    workers: 1\n"
        "    min_parallel_size: 256\n"
        "logging:\n"
        "  level: INFO\n"
    )
    return tmp_path


class TestConfigManager:
    """Test loading and updating configurations."""

    def test_load_config(self, config_dir):
        """Test loading a config directory."""
        manager = ConfigManager(config_dir)
        cfg = manager.load_config()

        assert cfg.search.algorithm == 'astar'
        assert cfg.search.log_interval == 500
        assert manager.get_config() is cfg
        assert get_config() is cfg

    def test_overrides(self, config_dir):
        """Test Hydra overrides at load time."""
        cfg = load_config(overrides=['search.algorithm=uc', 'search.duplicate_scan.workers=4'],
                          config_dir=config_dir)

        assert cfg.search.algorithm == 'uc'
        assert cfg.search.duplicate_scan.workers == 4

    def test_invalid_override_fails_validation(self, config_dir):
        """Test invalid override fails validation."""
        with pytest.raises(ConfigValidationError):
            load_config(overrides=['search.heuristic=euclidean'], config_dir=config_dir)

    def test_validation_can_be_skipped(self, config_dir):
        """Test validation can be skipped."""
        cfg = load_config(overrides=['search.algorithm=dfs'], config_dir=config_dir,
                          validate=False)
        assert cfg.search.algorithm == 'dfs'

    def test_missing_directory(self, tmp_path):
        """Test missing directory."""
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "missing")

    def test_configuration_is_fixed_after_loading(self):
        """Test that overrides are only applied at load time."""
        assert not hasattr(ConfigManager, 'update_config')
        assert not hasattr(config_manager, 'ConfigContext')

    def test_parameters_require_loaded_config(self, config_dir):
        """Test parameters require loaded config."""
        manager = ConfigManager(config_dir)
        with pytest.raises(RuntimeError):
            manager.get_parameter('search.algorithm')

    def test_get_parameter_default(self, config_dir):
        """Test get parameter default."""
        manager = ConfigManager(config_dir)
        manager.load_config()
        assert manager.get_parameter('search.missing', default=7) == 7

    def test_global_parameter(self, config_dir):
        """Test global parameter."""
        load_config(overrides=['search.algorithm=uc'], config_dir=config_dir)
        assert get_parameter('search.algorithm') == 'uc'
        assert get_parameter('search.missing', default=3) == 3

    def test_shipped_config_is_valid(self):
        """Test shipped config is valid."""
        assert (default_config_dir() / "config.yaml").exists()
        cfg = load_config(config_dir=default_config_dir())

        assert cfg.search.algorithm in ('uc', 'astar')
        assert cfg.logging.level == 'WARNING'


class TestValidators:
    """Test section validators on in-memory configs."""

    def test_valid_config(self):
        """Test valid config."""
        validate_config(OmegaConf.create({
            'search': {'algorithm': 'uc', 'heuristic': 'zero', 'log_interval': 0},
            'logging': {'level': 'debug'},
        }))

    def test_empty_sections_are_accepted(self):
        """Test empty sections are accepted."""
        validate_search_config(OmegaConf.create({}))
        validate_logging_config(OmegaConf.create({}))

    @pytest.mark.parametrize("search", [
        {'algorithm': 'bfs'},
        {'heuristic': 'euclidean'},
        {'log_interval': -1},
        {'log_interval': 'often'},
        {'duplicate_scan': {'workers': 0}},
        {'duplicate_scan': {'workers': 65}},
        {'duplicate_scan': {'min_parallel_size': 0}},
    ])
    def test_invalid_search_section(self, search):
        """Test invalid search section."""
        with pytest.raises(ConfigValidationError):
            validate_config(OmegaConf.create({'search': search}))

    def test_invalid_log_level(self):
        """Test invalid log level."""
        with pytest.raises(ConfigValidationError):
            validate_config(OmegaConf.create({'logging': {'level': 'LOUD'}}))


class TestSearchConfig:
    """Test building SearchConfig from loaded configs."""

    def test_from_config(self, config_dir):
        """Test building SearchConfig from a loaded config."""
        cfg = load_config(overrides=['search.algorithm=uc',
                                     'search.duplicate_scan.min_parallel_size=8'],
                          config_dir=config_dir)
        search_config = SearchConfig.from_config(cfg)

        assert search_config.algorithm == 'uc'
        assert search_config.heuristic == 'manhattan'
        assert search_config.min_parallel_size == 8
        assert search_config.scan_workers == 1
        assert search_config.log_interval == 500

    def test_missing_keys_use_defaults(self):
        """Test missing keys use defaults."""
        search_config = SearchConfig.from_config({'search': {'heuristic': 'misplaced'}})

        assert search_config.algorithm == 'astar'
        assert search_config.heuristic == 'misplaced'
        assert search_config.scan_workers == 1
