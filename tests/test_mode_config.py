"""
Tests for mode configuration.

Tests cover:
- .env loading never overrides the environment
- Value parsing helpers
- Frozen, validated config models with overrides
"""

import os

import pytest
from pydantic import ValidationError

from games.NumberStructures.config import load_config as load_structures_config
from games.StackBalance.config import StackBalanceConfig, load_config as load_stack_config
from zen.modes import palette
from zen.modes.config import ModeConfig, load_env_file, parse_bool, parse_color, parse_floats


class TestEnvFile:

    def test_loads_missing_keys_only(self, tmp_path, monkeypatch):
        monkeypatch.setenv('ZEN_TEST_KEPT', 'env')
        monkeypatch.delenv('ZEN_TEST_NEW', raising=False)
        env_file = tmp_path / '.env'
        env_file.write_text("# comment\nZEN_TEST_KEPT=file\nZEN_TEST_NEW = 42\n\nnot a pair\n")
        load_env_file(env_file)
        assert os.environ['ZEN_TEST_KEPT'] == 'env'
        assert os.environ['ZEN_TEST_NEW'] == '42'

    def test_missing_file(self, tmp_path):
        load_env_file(tmp_path / 'nope.env')


class TestParsing:

    def test_color(self):
        assert parse_color('10, 20,30') == (10, 20, 30)
        assert parse_color('bad', (1, 2, 3)) == (1, 2, 3)
        assert parse_color('1,2', (1, 2, 3)) == (1, 2, 3)

    @pytest.mark.parametrize("value,expected", [('true', True), ('YES', True), ('1', True), ('off', False)])
    def test_bool(self, value, expected):
        assert parse_bool(value) is expected

    def test_floats(self):
        assert parse_floats('1, 1,2.5,') == [1.0, 1.0, 2.5]


class TestModels:

    def test_defaults(self):
        config = ModeConfig()
        assert config.max_dt == 0.1
        assert config.stone_radius > 0

    def test_colour_defaults_come_from_palette(self):
        config = ModeConfig(palette='river')
        assert config.palette == 'river'
        assert config.text_color == palette.TEXT
        assert len(config.background_color) == 3

    def test_frozen(self):
        config = ModeConfig()
        with pytest.raises(ValidationError):
            config.max_dt = 1.0

    def test_overrides(self):
        config = load_stack_config(platform_width=320)
        assert isinstance(config, StackBalanceConfig)
        assert config.platform_width == 320

    def test_invalid_override(self):
        with pytest.raises(ValidationError):
            load_stack_config(platform_width=-1)

    def test_structures_defaults(self):
        config = load_structures_config()
        assert config.spacing > 0
        assert config.initial_left_value == 3
        assert config.initial_right_value == 5
