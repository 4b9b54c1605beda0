"""
turret.logs
===========

The intrusion log is kept on the turret; the client only ever holds the
text it fetched.  Export writes that text to disk untouched.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import List

from turret.constants import LOG_DIR


def export_logs(text: str, directory: Path = LOG_DIR) -> Path:
    """Write `text` verbatim to `<dir>/<date>_radar_logs_<time>.csv`; returns the path."""
    now = dt.datetime.now()
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{now.date().isoformat()}_radar_logs_{now.strftime('%H%M%S')}.csv"
    path.write_text(text)
    return path


def log_lines(text: str) -> List[str]:
    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]
