import logging

import pytest

from symdiff.config import SymDiffConfig, parse_log_level
from symdiff.logging_system import LogLevel, get_logger, set_log_level


def test_defaults():
    config = SymDiffConfig.from_env({})
    assert config.log_level is LogLevel.MINIMAL
    assert config.log_to_file is False
    assert config.log_file_path is None


def test_from_env_reads_level_and_file(tmp_path):
    log_file = tmp_path / "symdiff.log"
    config = SymDiffConfig.from_env({
        "SYMDIFF_LOG_LEVEL": "verbose",
        "SYMDIFF_LOG_FILE": str(log_file),
    })
    assert config.log_level is LogLevel.VERBOSE
    assert config.log_to_file is True

    logger = config.apply()
    assert get_logger() is logger
    logger.debug("hello from the test")
    for handler in logger.logger.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text()
    for handler in list(logger.logger.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
    set_log_level(LogLevel.MINIMAL)


@pytest.mark.parametrize("text, level", [("3", LogLevel.DETAILED), ("silent", LogLevel.SILENT), ("Moderate", LogLevel.MODERATE)])
def test_parse_log_level(text, level):
    assert parse_log_level(text) is level


def test_parse_log_level_rejects_unknown():
    with pytest.raises(ValueError):
        parse_log_level("loud")


def test_reconfiguring_closes_previous_file_handler(tmp_path):
    first = SymDiffConfig.from_env({"SYMDIFF_LOG_FILE": str(tmp_path / "first.log")}).apply()
    file_handlers = [h for h in first.logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].stream is not None

    second = SymDiffConfig.from_env({}).apply()
    assert file_handlers[0].stream is None
    assert not any(isinstance(h, logging.FileHandler) for h in second.logger.handlers)
    set_log_level(LogLevel.MINIMAL)
