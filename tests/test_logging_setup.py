from __future__ import annotations

import logging
import sys
import threading

from othello_engine.logging_setup import set_level, setup_logging


def _file_handlers(root):
    return [h for h in root.handlers if isinstance(h, logging.FileHandler)]


def test_setup_is_idempotent(tmp_path, restore_logging):
    root = restore_logging
    log_path = tmp_path / "engine.log"
    setup_logging(log_path=log_path, level="DEBUG")
    setup_logging(log_path=tmp_path / "other.log", level="ERROR")
    handlers = _file_handlers(root)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(log_path)
    assert root.level == logging.DEBUG
    assert not (tmp_path / "other.log").exists()


def test_setup_installs_hooks_and_writes_file(tmp_path, restore_logging):
    log_path = tmp_path / "engine.log"
    setup_logging(log_path=log_path)
    assert sys.excepthook is not sys.__excepthook__
    assert threading.excepthook is not threading.__excepthook__
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        sys.excepthook(*sys.exc_info())
    for h in _file_handlers(restore_logging):
        h.flush()
    text = log_path.read_text(encoding="utf-8")
    assert "CRITICAL" in text and "RuntimeError: boom" in text


def test_set_level_accepts_names(restore_logging):
    set_level("warning")
    assert restore_logging.level == logging.WARNING
    set_level("not-a-level")
    assert restore_logging.level == logging.INFO
