from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from prediction_pump.integration.logging_setup import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_console_handler_and_level() -> None:
    logger = setup_logging(logging.DEBUG)
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_repeated_setup_does_not_duplicate_handlers() -> None:
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_file_output(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "pricing.log"
    logger = setup_logging(logging.INFO, log_file=log_file, console_output=False)
    logging.getLogger("prediction_pump.integration.market_quotes").info("hello %d", 7)
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "| INFO     | prediction_pump.integration.market_quotes | hello 7" in text


def test_no_outputs_gets_null_handler() -> None:
    logger = setup_logging(console_output=False)
    assert [type(h) for h in logger.handlers] == [logging.NullHandler]
