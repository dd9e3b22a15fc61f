import logging

from stats_analyzer.observability.logging import setup_logging


def test_setup_logging_configures_root_once():
    setup_logging()
    root = logging.getLogger()
    handlers = list(root.handlers)
    setup_logging()
    assert root.handlers == handlers
    assert logging.getLogger("uvicorn.access").propagate is True
