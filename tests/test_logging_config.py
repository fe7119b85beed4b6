from __future__ import annotations

import logging

from hotel_booking_api.app.core.logging_config import NOISY_LOGGERS, setup_logging


def test_upload_libraries_are_quieted() -> None:
    setup_logging("INFO")
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_debug_level_lets_upload_libraries_through() -> None:
    setup_logging("debug")
    try:
        assert logging.getLogger("urllib3").level == logging.DEBUG
    finally:
        setup_logging("INFO")
