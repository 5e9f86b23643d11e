import logging

from utils.logger import setup_logger


def test_setup_is_idempotent():
    first = setup_logger("pair_finder.test", level=logging.INFO)
    second = setup_logger("pair_finder.test", level=logging.DEBUG)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG
    assert second.handlers[0].level == logging.DEBUG


def test_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logger("pair_finder.file_test", log_file=str(log_file))
    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text()

    setup_logger("pair_finder.file_test", log_file=str(log_file))
    assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1
