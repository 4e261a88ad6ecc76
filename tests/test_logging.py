import logging

from insight_core.utils.logging import get_logger


def test_get_logger_is_idempotent():
    a = get_logger("insight_test.idempotent")
    b = get_logger("insight_test.idempotent")
    assert a is b
    assert len(a.handlers) == 1
    assert a.level == logging.WARNING


def test_verbose_flag_enables_debug(monkeypatch):
    monkeypatch.setenv("INSIGHT_LOG_VERBOSE", "1")
    logger = get_logger("insight_test.verbose")
    assert logger.level == logging.DEBUG


def test_file_handler(tmp_path):
    path = tmp_path / "logs" / "insight.log"
    logger = get_logger("insight_test.file", file_path=path)
    logger.warning("written to file")
    for h in logger.handlers:
        h.flush()
    assert path.exists()
    assert "written to file" in path.read_text(encoding="utf-8")


def test_console_format_names_logger_only_when_verbose(monkeypatch):
    quiet = get_logger("insight_test.quiet_format")
    monkeypatch.setenv("INSIGHT_LOG_VERBOSE", "yes")
    loud = get_logger("insight_test.loud_format")

    record = logging.LogRecord("insight_core.x", logging.WARNING, __file__, 1, "stale quote", None, None)
    assert quiet.handlers[0].formatter._fmt == "[%(levelname).1s] %(message)s"
    assert "%(name)s" in loud.handlers[0].formatter._fmt
    assert logging.Formatter(loud.handlers[0].formatter._fmt).format(record) == "[W] insight_core.x: stale quote"
