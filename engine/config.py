"""Game settings loaded from a JSON config file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from ai.sampling_ai import Difficulty

DEFAULT_CONFIG_PATH = Path("configs/game_config.json")


class GameConfig:
    """Container for game settings loaded from config file."""

    def __init__(self, payload: Optional[Dict[str, object]] = None) -> None:
        payload = payload or {}
        self.difficulty = Difficulty.parse(payload.get("difficulty", Difficulty.MEDIUM.value))
        seed = payload.get("seed")
        self.seed = None if seed is None else int(seed)
        self.opponent_delay_ms = int(payload.get("opponent_delay_ms", 500))
        if self.opponent_delay_ms < 0:
            raise ValueError("opponent_delay_ms must be non-negative.")
        self.log_level = str(payload.get("log_level", "INFO")).upper()

    @classmethod
    def from_json(cls, path: str | Path) -> "GameConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "GameConfig":
        """Load path if given, else the default file when it exists, else defaults."""
        if path is not None:
            return cls.from_json(path)
        if DEFAULT_CONFIG_PATH.is_file():
            return cls.from_json(DEFAULT_CONFIG_PATH)
        return cls()
