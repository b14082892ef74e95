from __future__ import annotations

import logging
import sys
import threading

import pytest


@pytest.fixture
def restore_logging():
    """Undo setup_logging(): drop its handlers and hooks after the test."""
    root = logging.getLogger()
    level = root.level
    hooks = (sys.excepthook, threading.excepthook)
    yield root
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) or type(h) is logging.StreamHandler:
            root.removeHandler(h)
            h.close()
    if hasattr(root, "_oe_logging_configured"):
        del root._oe_logging_configured
    root.setLevel(level)
    logging.captureWarnings(False)
    sys.excepthook, threading.excepthook = hooks
