import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_blasiussuite_logging():
    """Drop handlers attached by ``logger.setup`` so each test sees fresh streams."""
    yield
    root = logging.getLogger("blasiussuite")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
