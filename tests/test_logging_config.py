import io
import logging

from vttsuite.utils.logging_config import (
    ColoredFormatter,
    get_logger,
    level_from_flags,
    set_log_level,
    setup_logging,
)


def test_level_from_flags() -> None:
    assert level_from_flags() == logging.WARNING
    assert level_from_flags(verbose=True) == logging.INFO
    assert level_from_flags(verbose=True, debug=True) == logging.DEBUG


def test_module_loggers_use_the_package_logger(tmp_path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(logging.INFO, log_file=log_file, stream=stream)

    get_logger("vttsuite.core.vtt_reader").info("parsed 3 cues")
    get_logger("vttsuite.core.vtt_reader").debug("hidden")

    assert "parsed 3 cues" in stream.getvalue()
    assert "hidden" not in stream.getvalue()
    assert "parsed 3 cues" in log_file.read_text(encoding="utf-8")


def test_setup_logging_replaces_handlers() -> None:
    first = setup_logging(logging.INFO, stream=io.StringIO())
    second = setup_logging(logging.INFO, stream=io.StringIO())

    assert first is second
    assert len(second.handlers) == 1


def test_set_log_level() -> None:
    logger = setup_logging(logging.WARNING, stream=io.StringIO())
    set_log_level(logger, logging.DEBUG)

    assert logger.level == logging.DEBUG
    assert all(handler.level == logging.DEBUG for handler in logger.handlers)


def test_colored_formatter_leaves_record_untouched() -> None:
    record = logging.makeLogRecord({"levelname": "ERROR", "levelno": logging.ERROR, "msg": "boom"})
    text = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[31mERROR\033[0m" in text
    assert record.levelname == "ERROR"
