"""
Unit tests for logging setup.

Run with: pytest test/test_logging_config.py
"""

import logging

from skylattice.logging_config import configure_logging
from skylattice.planning.graph import AxisRange, build_grid_sync


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_explicit_level(self):
        logger = configure_logging("debug")
        assert logger.name == "skylattice"
        assert logger.level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("SKYLATTICE_LOG_LEVEL", "WARNING")
        assert configure_logging().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging("chatty").level == logging.INFO

    def test_handler_added_once(self):
        logger = configure_logging("INFO")
        configure_logging("INFO")

        ours = [h for h in logger.handlers if getattr(h, "_skylattice", False)]
        assert len(ours) == 1

    def test_fetch_failures_are_logged(self, caplog):
        def broken(lat, lon):
            raise RuntimeError("boom")

        with caplog.at_level(logging.WARNING, logger="skylattice"):
            build_grid_sync(AxisRange(0, 0), AxisRange(0, 0), AxisRange(0, 0), 1,
                            broken, broken)

        messages = [r.getMessage() for r in caplog.records]
        assert any("Weather fetch failed" in m for m in messages)
        assert any("Traffic fetch failed" in m for m in messages)
