import logging

from wellbeing_analysis.logging_utils import PermaLogger, setup_logging


def test_null_handler_only_by_default(tmp_path):
    log = PermaLogger(log_dir=tmp_path, console=False, file=False)
    handlers = log.get_logger().handlers
    assert handlers and all(isinstance(h, logging.NullHandler) for h in handlers)
    assert not any(tmp_path.iterdir())


def test_file_logging_opt_in(tmp_path):
    log = PermaLogger(log_file_name="t.log", log_dir=tmp_path, console=False, file=True, level="DEBUG")
    logging.getLogger("wellbeing_analysis.orchestrator").info("scored one text")
    for h in log.get_logger().handlers:
        h.flush()
    content = (tmp_path / "t.log").read_text(encoding="utf-8")
    assert "scored one text" in content
    assert f"session={log.session_id}" in content


def test_handlers_are_not_duplicated(tmp_path):
    PermaLogger(log_dir=tmp_path, console=True, file=False)
    PermaLogger(log_dir=tmp_path, console=True, file=False)
    logger = logging.getLogger("wellbeing_analysis")
    assert sum(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in logger.handlers) == 1


def test_set_log_level(tmp_path):
    log = PermaLogger(log_dir=tmp_path, console=False, file=False)
    log.set_log_level("error")
    assert log.get_logger().level == logging.ERROR
    log.set_log_level("bogus")
    assert log.get_logger().level == logging.INFO


def test_setup_logging_verbosity(monkeypatch):
    monkeypatch.delenv("PERMA_LOG_LEVEL", raising=False)
    logger = setup_logging(2)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
