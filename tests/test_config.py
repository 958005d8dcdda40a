import json
import tempfile
import unittest
from pathlib import Path

from ai.sampling_ai import Difficulty
from engine.config import GameConfig


class GameConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = GameConfig()
        self.assertIs(config.difficulty, Difficulty.MEDIUM)
        self.assertIsNone(config.seed)
        self.assertEqual(config.opponent_delay_ms, 500)
        self.assertEqual(config.log_level, "INFO")

    def test_payload_values(self):
        config = GameConfig({"difficulty": "Hard", "seed": "42", "opponent_delay_ms": 0, "log_level": "debug"})
        self.assertIs(config.difficulty, Difficulty.HARD)
        self.assertEqual(config.seed, 42)
        self.assertEqual(config.opponent_delay_ms, 0)
        self.assertEqual(config.log_level, "DEBUG")

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            GameConfig({"difficulty": "grandmaster"})
        with self.assertRaises(ValueError):
            GameConfig({"opponent_delay_ms": -1})

    def test_from_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "game.json"
            path.write_text(json.dumps({"difficulty": "easy", "seed": 7}), encoding="utf-8")
            config = GameConfig.from_json(path)
            self.assertIs(config.difficulty, Difficulty.EASY)
            self.assertEqual(config.seed, 7)
            self.assertIs(GameConfig.load(str(path)).difficulty, Difficulty.EASY)

    def test_shipped_config_parses(self):
        path = Path(__file__).resolve().parent.parent / "configs" / "game_config.json"
        config = GameConfig.from_json(path)
        self.assertIs(config.difficulty, Difficulty.MEDIUM)
        self.assertEqual(config.opponent_delay_ms, 500)


if __name__ == "__main__":
    unittest.main()
