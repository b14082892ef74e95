from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

from .engine.board import Side
from .engine.eval import EvalWeights
from .engine.strength import profile_for_level
from .errors import InvalidSize
from .tools.diag import CONFIG_PATH, DEFAULTS_PATH

logger = logging.getLogger(__name__)

_SIDES = {"first": Side.FIRST, "black": Side.FIRST, "second": Side.SECOND, "white": Side.SECOND, "none": None}


def _read_toml(path: pathlib.Path) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(path: pathlib.Path | None = None) -> Dict[str, Any]:
    """Packaged defaults overlaid with the user file (if it exists)."""
    cfg = _read_toml(DEFAULTS_PATH)
    path = path or CONFIG_PATH
    if path.exists():
        try:
            cfg = _merge(cfg, _read_toml(path))
        except tomllib.TOMLDecodeError:
            logger.exception("Ignoring unreadable config file %s", path)
    return cfg


def parse_side(value: Any) -> Optional[Side]:
    if value is None or isinstance(value, Side):
        return value
    try:
        return _SIDES[str(value).strip().lower()]
    except KeyError:
        raise ValueError(f"unknown side {value!r}; expected first, second or none") from None


@dataclass
class SelfPlaySettings:
    games: int = 10
    workers: int = 1
    random_opening_plies: int = 4
    first_level: int = 2
    second_level: int = 2


@dataclass
class EngineSettings:
    board_size: int = 8
    difficulty: int = 1
    human_side: Optional[Side] = Side.FIRST
    weights: EvalWeights = field(default_factory=EvalWeights)
    log_level: str = "INFO"
    selfplay: SelfPlaySettings = field(default_factory=SelfPlaySettings)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "EngineSettings":
        engine = cfg.get("engine", {}) or {}
        session = cfg.get("session", {}) or {}
        sp = cfg.get("selfplay", {}) or {}
        settings = cls(
            board_size=int(engine.get("board_size", 8)),
            difficulty=int(engine.get("difficulty", 1)),
            human_side=parse_side(session.get("human_side", "first")),
            weights=EvalWeights.from_config(cfg.get("eval")),
            log_level=str((cfg.get("logging", {}) or {}).get("level", "INFO")),
            selfplay=SelfPlaySettings(
                **{k: int(v) for k, v in sp.items() if k in SelfPlaySettings.__dataclass_fields__}
            ),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.board_size < 2 or self.board_size % 2:
            raise InvalidSize(f"board_size must be even and >= 2, got {self.board_size}")
        profile_for_level(self.difficulty)
        profile_for_level(self.selfplay.first_level)
        profile_for_level(self.selfplay.second_level)


def load_settings(path: pathlib.Path | None = None) -> EngineSettings:
    return EngineSettings.from_config(load_config(path))
