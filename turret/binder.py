"""
turret.binder
=============

What the header, mode bar and footer should say for a given `ViewState`.
"""
from __future__ import annotations

from typing import Optional, Tuple

from turret import constants as C
from turret.state import Mode, ViewState, mode_style

# mode bar, left → right
MODE_BUTTONS = [(Mode.SENTRY, "SENTRY"), (Mode.STEALTH, "STEALTH"),
                (Mode.AGGRESSIVE, "AGGRO"), (Mode.PARTY, "PARTY")]


def badge(view: ViewState) -> Tuple[str, Tuple[int, int, int]]:
    if not view.connected:
        return "OFFLINE", C.RED
    name, colour = mode_style(view.mode)
    return name.upper(), colour


def toggle_label(view: ViewState) -> Tuple[str, bool]:
    """(button text, highlighted)"""
    return ("STOP", True) if view.running else ("START", False)


def selected_mode(view: ViewState) -> Optional[int]:
    return view.mode if view.mode in [m for m, _ in MODE_BUTTONS] else None


def footer_text(view: ViewState) -> str:
    if view.last_detection is None:
        return "READY"
    dist, angle = view.last_detection
    return f"LAST: {dist:g}cm @ {angle:g}°"
