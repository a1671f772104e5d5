"""
Pointer Sources

Where the raw sun target comes from each frame. The simulation only sees
`current_pointer_position()`; choosing between touch and mouse, or replaying
a scripted path for headless recording, is up to the source.

Sources:
- FixedPointer:      always the same point
- PathPointer:       replays a list of points, then holds the last one
- OrbitPointer:      circles a centre point
- SweepPointer:      eased back-and-forth between two points
- TouchMousePointer: first active touch, else the mouse
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from .vector import Vec2


def ease_in_out_sine(t: float) -> float:
    """Sinusoidal ease in/out on [0, 1]"""
    return -(np.cos(np.pi * t) - 1) / 2


class PointerSource:
    """Anything that can report the current pointer position"""

    def current_pointer_position(self) -> Vec2:
        raise NotImplementedError


class FixedPointer(PointerSource):
    """Pointer parked at one spot"""

    def __init__(self, x: float, y: float):
        self.position = Vec2(x, y)

    def current_pointer_position(self) -> Vec2:
        return self.position.copy()


class PathPointer(PointerSource):
    """Replays recorded positions, one per call, holding the last"""

    def __init__(self, points: Sequence[Tuple[float, float]]):
        if not points:
            raise ValueError("PathPointer needs at least one point")
        self.points = [Vec2(float(x), float(y)) for x, y in points]
        self.index = 0

    def current_pointer_position(self) -> Vec2:
        point = self.points[min(self.index, len(self.points) - 1)]
        self.index += 1
        return point.copy()


class OrbitPointer(PointerSource):
    """
    Pointer circling a centre point.

    One full revolution takes `period` calls; angular progress within each
    revolution is eased so the sun lingers at the top and bottom.
    """

    def __init__(self, center: Vec2, radius: float, period: int = 120,
                 start_angle: float = -np.pi / 2, eased: bool = True):
        self.center = center
        self.radius = radius
        self.period = max(1, int(period))
        self.start_angle = start_angle
        self.eased = eased
        self.tick = 0

    def current_pointer_position(self) -> Vec2:
        t = (self.tick % self.period) / self.period
        if self.eased:
            t = ease_in_out_sine(t)
        self.tick += 1
        angle = self.start_angle + t * 2 * np.pi
        return self.center + Vec2.from_angle(angle, self.radius)


class SweepPointer(PointerSource):
    """Pointer easing from `start` to `end` and back every `period` calls"""

    def __init__(self, start: Vec2, end: Vec2, period: int = 120):
        self.start = start
        self.end = end
        self.period = max(2, int(period))
        self.tick = 0

    def current_pointer_position(self) -> Vec2:
        phase = (self.tick % self.period) / self.period
        self.tick += 1
        # 0 -> 1 -> 0 over one period
        t = 1 - abs(2 * phase - 1)
        return self.start.lerp(self.end, ease_in_out_sine(t))


class TouchMousePointer(PointerSource):
    """
    Touch wins over mouse.

    The host layer pushes raw input with `set_mouse()` / `set_touches()`.
    """

    def __init__(self, mouse: Optional[Vec2] = None):
        self.mouse = mouse.copy() if mouse is not None else Vec2()
        self.touches: List[Vec2] = []

    def set_mouse(self, x: float, y: float):
        self.mouse = Vec2(x, y)

    def set_touches(self, touches: Sequence[Tuple[float, float]]):
        self.touches = [Vec2(float(x), float(y)) for x, y in touches]

    def current_pointer_position(self) -> Vec2:
        if self.touches:
            return self.touches[0].copy()
        return self.mouse.copy()


def create_pointer(kind: str, width: int, height: int, period: int = 120) -> PointerSource:
    """
    Build a scripted pointer sized for a canvas.

    Args:
        kind: 'orbit', 'sweep' or 'fixed'
        width, height: Canvas size
        period: Frames per orbit/sweep cycle
    """
    center = Vec2(width / 2, height / 2)
    if kind == 'orbit':
        return OrbitPointer(center, radius=min(width, height) * 0.4, period=period)
    elif kind == 'sweep':
        return SweepPointer(Vec2(width * 0.1, height * 0.15), Vec2(width * 0.9, height * 0.85), period=period)
    elif kind == 'fixed':
        return FixedPointer(width / 2, height * 0.2)
    raise ValueError(f"Unknown pointer motion '{kind}'. Available: orbit, sweep, fixed")
