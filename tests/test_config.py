"""Tests for configuration classes."""

import logging
import os
from unittest.mock import patch

from config import AppConfig, GameConfig, config


class TestGameConfig:
    def test_starting_credit(self):
        assert GameConfig().starting_credit == 100
        assert config.game.starting_credit == 100


class TestAppConfig:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            app = AppConfig()

        assert app.debug is False
        assert app.log_level == logging.WARNING
        assert app.effective_log_level == logging.WARNING

    def test_debug_from_env(self):
        with patch.dict(os.environ, {"BLACKJACK_DEBUG": "TRUE"}):
            app = AppConfig()

        assert app.debug is True
        assert app.effective_log_level == logging.DEBUG

    def test_log_level_by_name(self):
        with patch.dict(os.environ, {"BLACKJACK_LOG_LEVEL": "info"}):
            assert AppConfig().log_level == logging.INFO

    def test_log_level_by_number(self):
        with patch.dict(os.environ, {"BLACKJACK_LOG_LEVEL": "10"}):
            assert AppConfig().log_level == 10

    def test_unknown_log_level_falls_back_to_warning(self):
        with patch.dict(os.environ, {"BLACKJACK_LOG_LEVEL": "chatty"}):
            assert AppConfig().log_level == logging.WARNING
