"""
turret.decay
============

Short-lived detection markers.  Every poll that reports a distance drops a
`Detection` in here with `life = 1.0`; each render pass ages them and the
dead ones fall out.  There is no count cap, the decay rate is the limit.
"""
from __future__ import annotations

from typing import List, Optional

from turret.constants import DECAY_STEP
from turret.state import Detection


class DecayBuffer:
    def __init__(self, step: float = DECAY_STEP) -> None:
        self.step = step
        self._items: List[Detection] = []

    def record(self, angle: float, distance: float) -> Detection:
        det = Detection(angle, distance)
        self._items.append(det)
        return det

    def tick(self, step: Optional[float] = None) -> None:
        """Age every entry by `step` (default: fixed per-frame step) and drop the dead."""
        step = self.step if step is None else step
        for det in self._items:
            det.life -= step
        self._items = [d for d in self._items if d.life > 0]

    def snapshot(self) -> List[Detection]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
