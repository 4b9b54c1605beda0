"""
turret.renderer
===============

Draws the half-disc radar onto its own fixed-size surface.

Output depends only on the `ViewState` and the decay buffer passed in; the
one side effect is a single `buffer.tick()` per `draw()`, which ages the
detection markers before they are painted.

Angles are turret degrees (0 = right, 90 = straight ahead, 180 = left).
Screen y grows downward, so every angle is negated on the way to pixels.
"""
from __future__ import annotations

import math
from typing import List, Optional, Tuple

import pygame

from turret import constants as C
from turret.decay import DecayBuffer
from turret.state import ViewState, mode_style

Point = Tuple[float, float]


# ───────────────────────────────────────────────────────── geometry helpers
def polar_to_xy(origin: Point, radius: float, deg: float) -> Point:
    rad = -math.radians(deg)
    return origin[0] + radius * math.cos(rad), origin[1] + radius * math.sin(rad)


def marker_radius(life: float) -> float:
    """4 px when fresh, growing to 8 px as the marker dies."""
    return C.MARKER_BASE + (1 - life) * C.MARKER_BASE


def marker_position(origin: Point, radius: float, max_range: float,
                    angle: float, distance: float) -> Optional[Point]:
    """Pixel position of a detection, or None when it falls off the display."""
    if max_range <= 0:
        max_range = C.DEFAULT_RANGE
    dist = distance / max_range * radius
    if dist <= 0 or dist > radius:
        return None
    return polar_to_xy(origin, dist, angle)


class Renderer:
    def __init__(self, size: Tuple[int, int]) -> None:
        self.surface = pygame.Surface(size)
        self.markers: List[Tuple[Point, float, int]] = []   # last frame: (pos, radius, alpha)
        self.sweep_colour = C.GREEN
        self.offline_shown = False
        self._layout(size)

    def resize(self, size: Tuple[int, int]) -> None:
        if tuple(size) != self.surface.get_size():
            self.surface = pygame.Surface(size)
            self._layout(size)

    def _layout(self, size: Tuple[int, int]) -> None:
        w, h = size
        self.origin: Point = (w / 2, h - C.ORIGIN_LIFT)
        self.radius: float = h - C.RADIUS_PAD

    # ───────────────────────────────────────────── full redraw
    def draw(self, view: ViewState, buffer: DecayBuffer,
             step: Optional[float] = None) -> pygame.Surface:
        colour = self.sweep_colour = mode_style(view.mode)[1]

        self.surface.fill(C.BLACK)
        self._draw_grid()
        self._draw_sweep(view.scan_angle, colour)

        buffer.tick(step)
        self.markers = []
        for det in buffer.snapshot():
            self._draw_marker(view.max_range, det.angle, det.distance, det.life)

        self.offline_shown = not view.connected
        if self.offline_shown:
            self._draw_offline()
        return self.surface

    # ───────────────────────────────────────────── layers
    def _draw_grid(self) -> None:
        cx, cy = self.origin
        for i in range(1, C.GRID_RINGS + 1):
            r = self.radius * i / C.GRID_RINGS
            rect = pygame.Rect(0, 0, 2 * r, 2 * r)
            rect.center = (cx, cy)
            pygame.draw.arc(self.surface, C.GRID, rect, 0, math.pi, 1)

        for deg in C.REF_ANGLES:
            pygame.draw.line(self.surface, C.GRID, self.origin,
                             polar_to_xy(self.origin, self.radius, deg), 1)

    def _draw_sweep(self, angle: float, colour) -> None:
        pygame.draw.line(self.surface, colour, self.origin,
                         polar_to_xy(self.origin, self.radius, angle), 2)

        # glow wedge: screen angles [-a - lead, -a + trail] as a polygon fan
        start = -math.radians(angle) - C.GLOW_LEAD
        end = -math.radians(angle) + C.GLOW_TRAIL
        steps = 8
        cx, cy = self.origin
        pts = [self.origin] + [
            (cx + self.radius * math.cos(start + (end - start) * i / steps),
             cy + self.radius * math.sin(start + (end - start) * i / steps))
            for i in range(steps + 1)
        ]
        glow = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        pygame.draw.polygon(glow, colour + (C.GLOW_ALPHA,), pts)
        self.surface.blit(glow, (0, 0))

    def _draw_marker(self, max_range: float, angle: float,
                     distance: float, life: float) -> None:
        pos = marker_position(self.origin, self.radius, max_range, angle, distance)
        if pos is None:
            return
        r = marker_radius(life)
        alpha = int(255 * life)
        self.markers.append((pos, r, alpha))
        size = int(2 * r) + 2
        dot = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(dot, C.DETECT + (alpha,), (size / 2, size / 2), r)
        self.surface.blit(dot, (pos[0] - size / 2, pos[1] - size / 2))

    def _draw_offline(self) -> None:
        cx, cy = self.origin
        label = C.ALERT_FONT.render("DISCONNECTED", True, C.RED)
        self.surface.blit(label, label.get_rect(center=(cx, cy - 40)))
