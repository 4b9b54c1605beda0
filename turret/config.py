"""
turret.config
=============

Tiny helper that loads / saves *radar_config.json* and injects sensible
defaults for any missing keys.
"""

from __future__ import annotations
import json
import logging
from turret.constants import CFG_PATH, POLL_INTERVAL_MS

_DEFAULT = {
    # device
    "host": "http://192.168.4.1",
    "poll_ms": POLL_INTERVAL_MS,
    "timeout": 2.0,                   # seconds, per request

    # visuals
    "decay": "frame",                 # "frame"  or  "time"
    "window": [540, 470],
    "fullscreen": False,

    # intrusion log export, relative to the project root
    "export_dir": "log",
}


def load() -> dict:
    try:
        with open(CFG_PATH) as fh:
            return _normalise({**_DEFAULT, **json.load(fh)})
    except FileNotFoundError:
        save(_DEFAULT)
        return dict(_DEFAULT)


def save(cfg: dict) -> None:
    CFG_PATH.write_text(json.dumps(cfg, indent=2))


def _normalise(cfg: dict) -> dict:
    """Fall back to defaults for values the client cannot run with."""
    if cfg["decay"] not in ("frame", "time"):
        logging.warning(f"Unknown decay mode '{cfg['decay']}', using 'frame'")
        cfg["decay"] = "frame"
    if not isinstance(cfg["poll_ms"], (int, float)) or cfg["poll_ms"] <= 0:
        logging.warning(f"Invalid poll_ms {cfg['poll_ms']!r}, using {POLL_INTERVAL_MS}")
        cfg["poll_ms"] = POLL_INTERVAL_MS
    cfg["host"] = str(cfg["host"]).rstrip("/")
    return cfg
