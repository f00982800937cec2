import logging

from tesserax.utils.logging_config import setup_logging


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "tesserax.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    assert logger.name == "tesserax"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("tesserax.core.puzzle").debug("Applied Lx")
    for handler in logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in text
    assert "tesserax.core.puzzle - DEBUG - Applied Lx" in text

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_reconfiguring_closes_previous_file(tmp_path):
    first = tmp_path / "first.log"
    logger = setup_logging(logging.INFO, log_file=str(first))
    file_handler = logger.handlers[1]
    logger = setup_logging(logging.WARNING)
    assert file_handler not in logger.handlers
    assert file_handler.stream is None
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
