"""
Unit tests for settings and logging setup.
"""

import random
import sys

from loguru import logger

from config import Settings, get_settings
from src.quizbank import QuestionBank, configure_logging


class TestSettings:
    """Environment overrides."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.default_scoring == "all_or_nothing"
        assert settings.shuffle_seed is None
        assert settings.shuffle_pool_in_place is True
        assert settings.flag_multiple_answers_worth is True
        assert settings.log_level == "WARNING"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("QUIZBANK_SHUFFLE_SEED", "42")
        monkeypatch.setenv("QUIZBANK_SHUFFLE_POOL_IN_PLACE", "false")

        settings = get_settings()

        assert settings.shuffle_seed == 42
        assert settings.shuffle_pool_in_place is False

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_seed_makes_sessions_reproducible(self, monkeypatch):
        monkeypatch.setenv("QUIZBANK_SHUFFLE_SEED", "42")

        def session_prompts():
            bank = QuestionBank()
            for i in range(10):
                bank.add_single_answer(f"Q{i}", None, "yes", ["no"], None, 1)
            return [q.prompt for q in bank.generate_session(5).questions]

        assert session_prompts() == session_prompts()

    def test_bank_arguments_override_settings(self, monkeypatch):
        monkeypatch.setenv("QUIZBANK_SHUFFLE_POOL_IN_PLACE", "false")
        bank = QuestionBank(rng=random.Random(0), shuffle_pool_in_place=True)

        assert bank.shuffle_pool_in_place is True


class TestLogging:
    """Loguru sink configuration."""

    def restore_default_sink(self):
        logger.remove()
        logger.add(sys.__stderr__, level="WARNING")

    def test_configure_logging_filters_below_level(self, capsys):
        try:
            configure_logging("ERROR")
            logger.warning("quiet message")
            logger.error("loud message")
            err = capsys.readouterr().err
        finally:
            self.restore_default_sink()

        assert "loud message" in err
        assert "quiet message" not in err

    def test_configure_logging_uses_settings_level(self, capsys, monkeypatch):
        monkeypatch.setenv("QUIZBANK_LOG_LEVEL", "DEBUG")
        try:
            sink_id = configure_logging()
            logger.debug("debug message")
            err = capsys.readouterr().err
        finally:
            self.restore_default_sink()

        assert isinstance(sink_id, int)
        assert "debug message" in err

    def test_configure_logging_adds_file_sink(self, tmp_path, monkeypatch):
        log_path = tmp_path / "quizbank.log"
        monkeypatch.setenv("QUIZBANK_LOG_FILE", str(log_path))
        try:
            configure_logging("INFO")
            logger.info("written to file")
            logger.debug("below level")
        finally:
            self.restore_default_sink()

        content = log_path.read_text(encoding="utf-8")
        assert "written to file" in content
        assert "below level" not in content
