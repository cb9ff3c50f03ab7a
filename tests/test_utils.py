import logging

from py_hmmtag.utils import create_logger


def test_create_logger_updates_verbosity():
    logger = create_logger("verbosity_check", verbose=False)
    assert [h.level for h in logger.handlers] == [logging.INFO]
    logger = create_logger("verbosity_check", verbose=True)
    assert [h.level for h in logger.handlers] == [logging.DEBUG]
    assert len(logger.handlers) == 1
