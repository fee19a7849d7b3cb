import logging

import pytest


@pytest.fixture(autouse=True)
def _detach_run_log_handlers():
    # setup_logging attaches a FileHandler per run; drop them between tests
    yield
    logger = logging.getLogger("winrepair")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
