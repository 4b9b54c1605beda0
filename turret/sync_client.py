"""
turret.sync_client
==================

Keeps the local `ViewState` in step with the turret by polling `/status`.

Polls are time-driven: `update()` fires a request whenever the interval has
elapsed, whether or not the previous one has answered.  At most `workers`
requests are outstanding; a tick that finds them all busy is skipped, so a
dead device never builds up a backlog.  Responses are applied in the order
they arrive, so a slow reply can briefly overwrite a newer
one (last write wins; there is no sequence number on `/status`).

Every applied response, good or bad, ends with one `on_update(view)` call
after the state is fully merged.  The GUI hangs its render pass there.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from turret.constants import POLL_INTERVAL_MS
from turret.decay import DecayBuffer
from turret.device import DeviceError, DeviceLink, RequestPool
from turret.state import ViewState, parse_status


class SyncClient:
    def __init__(self, link: DeviceLink,
                 view: Optional[ViewState] = None,
                 buffer: Optional[DecayBuffer] = None,
                 interval: float = POLL_INTERVAL_MS / 1000,
                 on_update: Optional[Callable[[ViewState], None]] = None,
                 workers: int = 4) -> None:
        self.link = link
        self.view = view if view is not None else ViewState()
        self.buffer = buffer if buffer is not None else DecayBuffer()
        self.interval = interval
        self.on_update = on_update
        self.workers = workers
        self.pool = RequestPool("status", workers)
        self._next_poll = 0.0

    # ───────────────────────────────────────────── lifecycle
    def start(self) -> None:
        """One best-effort clock sync, then polling begins on the next `update()`."""
        ts = int(time.time())
        self.pool.submit(lambda: self._time_sync(ts))
        self._next_poll = time.monotonic()

    def stop(self) -> None:
        self.pool.stop()

    def _time_sync(self, ts: int) -> None:
        try:
            self.link.send("/time_sync", {"ts": ts})
        except DeviceError as e:
            logging.debug(f"Time sync skipped: {e}")

    # ───────────────────────────────────────────── per-frame
    def update(self, now: Optional[float] = None) -> int:
        """
        Issue a poll if one is due, then apply every response that has come
        back since the last call.  Returns the number of responses applied.
        """
        now = time.monotonic() if now is None else now
        if now >= self._next_poll:
            self.poll()
            self._next_poll += self.interval
            if self._next_poll <= now:          # fell behind (window drag etc.)
                self._next_poll = now + self.interval
        return self.pool.drain()

    def poll(self) -> None:
        # every worker already busy: skip this tick rather than queue behind them
        if self.pool.pending >= self.workers:
            return
        self.pool.submit(lambda: self.link.get_json("/status"), self.handle_status)

    # ───────────────────────────────────────────── merge
    def handle_status(self, payload: Any, error: Optional[Exception]) -> None:
        """Merge one `/status` outcome into the view, then notify."""
        if error is None:
            try:
                self._apply(payload)
            except ValueError as e:
                error = e
        if error is not None:
            self._mark_offline(error)

        if self.on_update is not None:
            self.on_update(self.view)

    def _apply(self, payload: Any) -> None:
        report = parse_status(payload)          # raises before anything changes
        view = self.view

        if not view.connected:
            logging.info("Turret connected")
        view.connected = True
        if report.angle is not None:
            view.scan_angle = report.angle
        view.mode = report.mode
        view.running = report.running
        if report.max_range:
            view.max_range = report.max_range

        if report.distance > 0:
            self.buffer.record(view.scan_angle, report.distance)
        if report.intrusion is not None:
            view.last_detection = report.intrusion

    def _mark_offline(self, error: Exception) -> None:
        if self.view.connected:
            logging.warning(f"Turret connection lost: {error}")
        else:
            logging.debug(f"Status poll failed: {error}")
        self.view.connected = False
