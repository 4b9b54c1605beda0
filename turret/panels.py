"""
turret.panels
=============

State behind the CONFIG and LOGS dialogs, kept apart from the pygame
drawing so the rules can be exercised without a window.

Rules
-----
• Opening a dialog starts a fetch; until it answers the dialog shows
  defaults (CONFIG) or "Loading..." (LOGS).
• SAVE and RESET close CONFIG straight away, whatever the request does.
• RESET and WIPE only ask; nothing is sent until `confirm()`.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from turret.commands import CommandDispatcher
from turret.constants import LOG_DIR
from turret.logs import export_logs, log_lines
from turret.state import ConfigSnapshot

LOADING = "Loading..."
CLEARED = "[CLEARED]"


class Confirmable:
    """Holds at most one question waiting for a yes/no."""

    def __init__(self) -> None:
        self.question: Optional[str] = None
        self._action: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self.question is not None

    def ask(self, question: str, action: Callable[[], None]) -> None:
        self.question, self._action = question, action

    def confirm(self) -> None:
        action = self._action
        self.cancel()
        if action is not None:
            action()

    def cancel(self) -> None:
        self.question = self._action = None


class ConfigPanel(Confirmable):
    def __init__(self, dispatcher: CommandDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self.visible = False
        self.snapshot = ConfigSnapshot()

    def open(self) -> None:
        self.visible = True
        self.snapshot = ConfigSnapshot()
        self.dispatcher.fetch_config(self._loaded)

    def close(self) -> None:
        self.visible = False
        self.cancel()

    def _loaded(self, snap: ConfigSnapshot) -> None:
        # late answer after the dialog was closed: drop it
        if self.visible:
            self.snapshot = snap

    def save(self) -> None:
        self.dispatcher.save_config(self.snapshot)
        self.close()

    def reset(self) -> None:
        self.ask("Reset to defaults?", self._do_reset)

    def _do_reset(self) -> None:
        self.dispatcher.reset_config()
        self.close()


class LogPanel(Confirmable):
    def __init__(self, dispatcher: CommandDispatcher, export_dir: Path = LOG_DIR) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self.export_dir = export_dir
        self.visible = False
        self.text = LOADING
        self.scroll = 0
        self.status: Optional[str] = None       # one-line feedback under the text

    def open(self) -> None:
        self.visible = True
        self.text, self.scroll, self.status = LOADING, 0, None
        self.dispatcher.fetch_logs(self._loaded)

    def close(self) -> None:
        self.visible = False
        self.cancel()

    def _loaded(self, text: str) -> None:
        if self.visible:
            self.text = text

    @property
    def lines(self) -> List[str]:
        return log_lines(self.text)

    def scroll_by(self, rows: int, page: int) -> None:
        top = max(0, len(self.lines) - page)
        self.scroll = max(0, min(top, self.scroll + rows))

    def wipe(self) -> None:
        self.ask("Delete all logs?", self._do_wipe)

    def _do_wipe(self) -> None:
        self.dispatcher.clear_logs()
        self.text, self.scroll = CLEARED, 0

    def export(self) -> Optional[Path]:
        try:
            path = export_logs(self.text, self.export_dir)
        except OSError as e:
            logging.error(f"Log export failed: {e}")
            self.status = "EXPORT FAILED"
            return None
        logging.info(f"Logs exported to {path}")
        self.status = f"SAVED {path.name}"
        return path
