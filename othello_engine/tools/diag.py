from __future__ import annotations

import logging
import os
import pathlib
import time

import orjson

CONFIG_HOME = pathlib.Path(os.path.expanduser("~/.othello_engine"))
CONFIG_PATH = CONFIG_HOME / "config.toml"
DEFAULTS_PATH = pathlib.Path(__file__).resolve().parents[1] / "config" / "defaults.toml"


def ensure_config(path: pathlib.Path | None = None) -> bool:
    """Create the user config from the packaged defaults. Returns True if created."""
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text(DEFAULTS_PATH.read_text(encoding="utf-8"), encoding="utf-8")
        logging.getLogger(__name__).info("Initialised configuration at %s", path)
        return True
    return False


def log_event(module: str, event: str, **kwargs) -> None:
    """Structured event logging through the central logger.

    Emits a single JSON line via the Python logging system so it reaches the
    log file configured by logging_setup.setup_logging().
    """
    logger = logging.getLogger(f"event.{module}")
    if not logger.isEnabledFor(logging.INFO):
        return
    payload = {"ts": time.time(), "module": module, "event": event}
    payload.update(kwargs)
    try:
        line = orjson.dumps(payload).decode("utf-8")
    except TypeError:
        logging.getLogger("event").exception("failed to log event: %s", {"module": module, "event": event})
        return
    logger.info(line)
