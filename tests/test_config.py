import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from turret import config


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "radar_config.json"
        self.patcher = patch("turret.config.CFG_PATH", self.path)
        self.patcher.start()

    def tearDown(self):
        self.patcher.stop()
        self.tmp.cleanup()

    def test_first_load_writes_defaults(self):
        cfg = config.load()
        self.assertEqual(cfg["poll_ms"], 100)
        self.assertEqual(cfg["decay"], "frame")
        self.assertTrue(self.path.exists())
        self.assertEqual(json.loads(self.path.read_text())["host"], cfg["host"])

    def test_missing_keys_get_defaults(self):
        self.path.write_text(json.dumps({"host": "http://10.0.0.7/"}))
        cfg = config.load()
        self.assertEqual(cfg["host"], "http://10.0.0.7")
        self.assertEqual(cfg["timeout"], 2.0)

    def test_invalid_values_fall_back(self):
        self.path.write_text(json.dumps({"decay": "sometimes", "poll_ms": 0}))
        with self.assertLogs(level="WARNING"):
            cfg = config.load()
        self.assertEqual(cfg["decay"], "frame")
        self.assertEqual(cfg["poll_ms"], 100)

    def test_save_round_trip(self):
        cfg = config.load()
        cfg["decay"] = "time"
        config.save(cfg)
        self.assertEqual(config.load()["decay"], "time")


if __name__ == "__main__":
    unittest.main()
