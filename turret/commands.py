"""
turret.commands
===============

Operator actions.  Each call queues exactly one request and returns at once;
nothing here waits for, or checks, what the turret did with it.  The
result of a control command only shows up when a later `/status` poll
reflects it.

Fetches (`/get_config`, `/get_logs`) hand their result to a callback on
the GUI thread during `pump()`.  A failed fetch is logged and the callback
is simply never called.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from turret.device import DeviceLink, RequestPool
from turret.state import ConfigSnapshot, Mode


class CommandDispatcher:
    def __init__(self, link: DeviceLink, workers: int = 2) -> None:
        self.link = link
        self.pool = RequestPool("command", workers)

    def pump(self) -> int:
        return self.pool.drain()

    def stop(self) -> None:
        self.pool.stop()

    # ───────────────────────── control
    def toggle(self) -> None:
        self._send("/toggle")

    def set_mode(self, mode: int) -> None:
        if mode not in list(Mode):
            raise ValueError(f"mode must be 0-3, got {mode!r}")
        self._send("/mode", {"m": int(mode)})

    # ───────────────────────── device config
    def fetch_config(self, on_result: Callable[[ConfigSnapshot], None]) -> None:
        def done(payload: Any, error: Optional[Exception]) -> None:
            if error is not None:
                logging.warning(f"Config fetch failed: {error}")
                return
            try:
                snap = ConfigSnapshot.from_payload(payload)
            except ValueError as e:
                logging.warning(f"Config fetch returned bad payload: {e}")
                return
            on_result(snap)

        self.pool.submit(lambda: self.link.get_json("/get_config"), done)

    def save_config(self, snap: ConfigSnapshot) -> None:
        self._send("/save_config", snap.to_params())

    def reset_config(self) -> None:
        self._send("/reset_config")

    # ───────────────────────── intrusion log
    def fetch_logs(self, on_result: Callable[[str], None]) -> None:
        def done(text: Any, error: Optional[Exception]) -> None:
            if error is not None:
                logging.warning(f"Log fetch failed: {error}")
                return
            on_result(text)

        self.pool.submit(lambda: self.link.get_text("/get_logs"), done)

    def clear_logs(self) -> None:
        self._send("/clear_logs")

    # ───────────────────────── helpers
    def _send(self, path: str, params: Optional[dict] = None) -> None:
        logging.debug(f"-> {path} {params or ''}")
        self.pool.submit(lambda: self.link.send(path, params))
