"""
turret.state
============

Plain data records shared by the sync client, renderer and UI binder.

`ViewState` is the single mutable snapshot of the remote turret.  Only the
sync client writes it; everything else reads it once per frame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

from turret import constants as C


class Mode(IntEnum):
    SENTRY = 0
    STEALTH = 1
    AGGRESSIVE = 2
    PARTY = 3


# mode → (badge name, colour)
MODE_STYLE: Dict[Mode, Tuple[str, Tuple[int, int, int]]] = {
    Mode.SENTRY:     ("sentry", C.GREEN),
    Mode.STEALTH:    ("stealth", C.GRAY),
    Mode.AGGRESSIVE: ("aggressive", C.RED),
    Mode.PARTY:      ("party", C.MAGENTA),
}
UNKNOWN_STYLE = ("unknown", C.GREEN)


def mode_style(index) -> Tuple[str, Tuple[int, int, int]]:
    """(name, colour) for a mode index; unrecognized indices get the default."""
    try:
        return MODE_STYLE[Mode(index)]
    except (ValueError, TypeError):
        return UNKNOWN_STYLE


@dataclass
class ViewState:
    scan_angle: float = 90.0
    max_range: float = C.DEFAULT_RANGE
    mode: int = Mode.SENTRY
    running: bool = False
    connected: bool = False
    last_detection: Optional[Tuple[float, float]] = None   # (distance, angle)


@dataclass
class Detection:
    angle: float
    distance: float
    life: float = 1.0


# ───────────────────────────────────────────────────────── /status payload
@dataclass(frozen=True)
class StatusReport:
    """One decoded `/status` response; `None` marks an omitted field."""
    angle: Optional[float]
    max_range: Optional[float]
    mode: float
    running: bool
    distance: float
    intrusion: Optional[Tuple[float, float]]               # (distance, angle)


def _number(payload: Dict[str, Any], key: str) -> Optional[float]:
    val = payload.get(key)
    if val is None:
        return None
    # bool is an int subclass; the device never sends it for numeric fields
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValueError(f"field {key!r} is not numeric: {val!r}")
    try:
        finite = math.isfinite(val)
    except OverflowError:                 # int too large for a float
        finite = False
    if not finite:
        raise ValueError(f"field {key!r} is not finite: {val!r}")
    return val


def _mode_index(val: Optional[float]) -> float:
    # non-integral indices stay as-is and fall through to the unknown style
    if val is None:
        return Mode.SENTRY
    return int(val) if float(val).is_integer() else val


def parse_status(payload: Any) -> StatusReport:
    """
    Decode a `/status` JSON object.

    Omitted fields are tolerated: `a` and `r` come back as `None` so the
    caller can keep its previous values, `mode` defaults to 0, `running`
    to False, `d` to 0.  The last-intrusion pair is only reported when both
    halves are present and the distance is positive.

    Raises
    ------
    ValueError
        payload is not an object or a field is not a finite number.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"status payload is not an object: {type(payload).__name__}")

    mode = _number(payload, "mode")
    running = _number(payload, "running")
    dist = _number(payload, "d")
    li_a, li_d = _number(payload, "li_a"), _number(payload, "li_d")

    return StatusReport(
        angle=_number(payload, "a"),
        max_range=_number(payload, "r"),
        mode=_mode_index(mode),
        running=running == 1,
        distance=dist or 0,
        intrusion=(li_d, li_a) if li_a is not None and li_d is not None and li_d > 0 else None,
    )


# ───────────────────────────────────────────────────────── device config
# field → (min, max, slider step, ± button delta)
CONFIG_BOUNDS: Dict[str, Tuple[int, int, int, int]] = {
    "max_distance": (10, 200, 1, 5),
    "lock_time_ms": (500, 5000, 100, 100),
    "min_angle":    (0, 80, 1, 5),
    "max_angle":    (100, 180, 1, 5),
}


@dataclass
class ConfigSnapshot:
    """Device scan settings as shown in the CONFIG dialog."""
    max_distance: int = 50
    lock_time_ms: int = 2000
    min_angle: int = 15
    max_angle: int = 165

    @classmethod
    def from_payload(cls, payload: Any) -> "ConfigSnapshot":
        """Build from a `/get_config` object (`dst`, `lck`, `min`, `max`)."""
        if not isinstance(payload, dict):
            raise ValueError(f"config payload is not an object: {type(payload).__name__}")
        snap = cls()
        for attr, key in (("max_distance", "dst"), ("lock_time_ms", "lck"),
                          ("min_angle", "min"), ("max_angle", "max")):
            val = _number(payload, key)
            if val is not None:
                setattr(snap, attr, int(val))
        return snap.clamped()

    def clamped(self) -> "ConfigSnapshot":
        return replace(self, **{f: _clamp(f, getattr(self, f)) for f in CONFIG_BOUNDS})

    def adjust(self, name: str, direction: int) -> None:
        """Nudge a field by its ± delta (`direction` is +1 or -1)."""
        delta = CONFIG_BOUNDS[name][3]
        setattr(self, name, _clamp(name, getattr(self, name) + direction * delta))

    def set_fraction(self, name: str, frac: float) -> None:
        """Slider position in [0, 1] → value snapped to the slider step."""
        lo, hi, step, _ = CONFIG_BOUNDS[name]
        frac = max(0.0, min(1.0, frac))
        setattr(self, name, _clamp(name, lo + round(frac * (hi - lo) / step) * step))

    def fraction(self, name: str) -> float:
        lo, hi, _, _ = CONFIG_BOUNDS[name]
        return (getattr(self, name) - lo) / (hi - lo)

    def to_params(self) -> Dict[str, int]:
        """Query parameters for `/save_config`."""
        return {"d": self.max_distance, "l": self.lock_time_ms,
                "mn": self.min_angle, "mx": self.max_angle}


def _clamp(name: str, value: int) -> int:
    lo, hi, _, _ = CONFIG_BOUNDS[name]
    return max(lo, min(hi, int(value)))

