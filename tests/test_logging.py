from __future__ import annotations

import logging

import pytest

from busypy.logging import LOG_LEVEL_ENV, configure_logging, level_from_env


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", logging.WARNING), ("debug", logging.DEBUG), (" INFO ", logging.INFO), ("chatty", logging.WARNING)],
)
def test_level_from_env(value: str, expected: int, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, value)
    assert level_from_env() == expected


def test_configure_logging_sets_package_level() -> None:
    package_logger = logging.getLogger("busypy")
    previous = package_logger.level
    try:
        configure_logging(logging.DEBUG)
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger("busypy.scan.scanner").isEnabledFor(logging.DEBUG)
    finally:
        package_logger.setLevel(previous)
