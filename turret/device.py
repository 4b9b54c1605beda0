"""
turret.device
=============

HTTP access to the turret controller plus the background workers that
keep every request off the pygame thread.

`DeviceLink` issues plain GETs with query-string parameters.  Anything that
goes wrong on the way (no route, timeout, non-2xx, body that is not JSON)
comes back as a single `DeviceError`.

`RequestPool` is a handful of daemon threads draining a job queue.  Finished
jobs land on a second queue and are handed to their callbacks only when the
GUI thread calls `drain()`, so callbacks never race the renderer.
"""
from __future__ import annotations

import logging
import threading
import time
from queue import Empty, Queue
from typing import Any, Callable, Dict, Optional

import requests


class DeviceError(Exception):
    """Transport failure or malformed response from the turret."""


class DeviceLink:
    def __init__(self, host: str, timeout: float = 2.0) -> None:
        self.host = host.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.host}{path}"
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DeviceError(f"GET {path} failed: {e}") from e
        return response

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self._get(path, params)
        try:
            return response.json()
        except ValueError as e:
            raise DeviceError(f"GET {path} returned invalid JSON: {e}") from e

    def get_text(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        return self._get(path, params).text

    def send(self, path: str, params: Optional[Dict[str, Any]] = None) -> None:
        """GET whose body is ignored."""
        self._get(path, params)


class RequestPool:
    """
    Runs blocking jobs on `workers` daemon threads.

    Several jobs can be in flight at once and they finish in whatever order
    the network allows; completions are delivered in arrival order.
    """

    def __init__(self, name: str, workers: int = 2) -> None:
        self.name = name
        self.jobs: Queue = Queue()
        self.done: Queue = Queue()
        self._stop = threading.Event()
        self._threads = [
            threading.Thread(target=self._worker_loop, name=f"{name}-{i}", daemon=True)
            for i in range(workers)
        ]
        for t in self._threads:
            t.start()

    def submit(self, job: Callable[[], Any],
               on_done: Optional[Callable[[Any, Optional[Exception]], None]] = None) -> None:
        """Queue `job`; `on_done(result, error)` runs later inside `drain()`."""
        self.jobs.put_nowait((job, on_done))

    def drain(self) -> int:
        """Deliver every finished job on the calling thread; returns how many."""
        handled = 0
        while True:
            try:
                on_done, result, error = self.done.get_nowait()
            except Empty:
                return handled
            on_done(result, error)
            handled += 1

    @property
    def pending(self) -> int:
        """Jobs submitted but not yet finished (queued or running)."""
        return self.jobs.unfinished_tasks

    def join(self) -> None:
        """Block until every submitted job has run (not delivered)."""
        self.jobs.join()

    def stop(self, timeout: float = 0.5) -> None:
        """Signal the workers and wait at most `timeout` in total; a worker
        stuck in a request is a daemon and is left behind."""
        self._stop.set()
        deadline = time.monotonic() + timeout
        for t in self._threads:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            t.join(timeout=remaining)

    # ───────────────────────── background worker threads
    def _worker_loop(self) -> None:
        while not self._stop.is_set():
            try:
                job, on_done = self.jobs.get(timeout=0.2)
            except Empty:
                continue
            try:
                try:
                    result, error = job(), None
                except DeviceError as e:
                    result, error = None, e
                    if on_done is None:
                        logging.warning(f"{self.name}: {e}")
                if on_done is not None:
                    self.done.put_nowait((on_done, result, error))
            finally:
                self.jobs.task_done()
