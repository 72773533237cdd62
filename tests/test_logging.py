"""
Structured logger output.
"""

import logging

from excusegen.util.logging import StructuredLogger, excerpt


def test_excerpt_truncates_long_text():
    assert excerpt("short") == "short"
    assert excerpt("x" * 60) == "x" * 50 + "..."
    assert excerpt(None) == ""


def test_generation_log_truncates_excuse_text(caplog):
    log = StructuredLogger("excusegen.test")
    with caplog.at_level(logging.INFO, logger="excusegen.test"):
        log.log_generation("adjust", "started", {"original_excuse": "y" * 80, "situation": "Late to work"})

    assert "generation.adjust" in caplog.text
    assert "y" * 50 + "..." in caplog.text
    assert "y" * 51 not in caplog.text


def test_failed_operations_log_at_error_level(caplog):
    log = StructuredLogger("excusegen.test")
    with caplog.at_level(logging.INFO, logger="excusegen.test"):
        log.log_favorite("add", "abc", "device_1", status="failed")
        log.log_rating("abc", 4, 4.3333, 3)

    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.ERROR, logging.INFO]
    assert "'average_rating': 4.33" in caplog.text
