"""
Time-of-Day Sky

The sun's height on the canvas doubles as a clock: top of the screen is
morning, the bottom quarter is night. This module maps sun height to the
background gradient colours and to the sun's own look (colour, rays, glow).

Pure colour math, no drawing.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Tuple

Color = Tuple[int, int, int]          # RGB 0-255


def hex_to_rgb(value: str) -> Color:
    """'#FFEB3B' -> (255, 235, 59)"""
    value = value.lstrip('#')
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color(c1: Color, c2: Color, t: float) -> Color:
    """Linear RGB blend, t clamped to [0, 1]"""
    t = float(np.clip(t, 0.0, 1.0))
    return (
        int(round(c1[0] + (c2[0] - c1[0]) * t)),
        int(round(c1[1] + (c2[1] - c1[1]) * t)),
        int(round(c1[2] + (c2[2] - c1[2]) * t))
    )


# =============================================================================
# Palette
# =============================================================================

@dataclass
class SkyPalette:
    """Top/bottom gradient colours for each part of the day"""
    morning: Tuple[Color, Color] = ((255, 223, 186), (255, 255, 255))      # Light orange / white
    afternoon: Tuple[Color, Color] = ((135, 206, 250), (255, 255, 255))    # Light blue / white
    evening: Tuple[Color, Color] = ((255, 165, 0), (75, 0, 130))           # Orange / purple
    night: Tuple[Color, Color] = ((0, 0, 100), (0, 0, 25))                 # Dark blue / darker blue


@dataclass
class SunStyle:
    day_color: Color = field(default_factory=lambda: hex_to_rgb('#FFEB3B'))
    night_color: Color = (255, 255, 255)
    ray_length: float = 30.0
    glow_min: float = 50.0
    glow_max: float = 100.0
    glow_alpha_max: float = 100.0


@dataclass
class SunAppearance:
    color: Color
    ray_length: float
    glow_size: float = 0.0
    glow_alpha: float = 0.0

    @property
    def is_night(self) -> bool:
        return self.glow_alpha > 0.0


# Night starts when the sun is in the bottom quarter
NIGHT_THRESHOLD = 0.75


def time_of_day(sun_y: float, height: float) -> float:
    """Sun height mapped to [0, 1]: 0 = top (morning), 1 = bottom (night)"""
    if height <= 0:
        return 0.0
    return float(np.clip(sun_y / height, 0.0, 1.0))


def background_colors(t: float, palette: SkyPalette = None) -> Tuple[Color, Color]:
    """
    Gradient (top, bottom) for a time of day.

    Each quarter blends one stage into the next:
        [0, .25)   morning   -> afternoon
        [.25, .5)  afternoon -> evening
        [.5, .75)  evening   -> night
        [.75, 1]   night
    """
    palette = palette or SkyPalette()

    if t < 0.25:
        start, end, local = palette.morning, palette.afternoon, t * 4
    elif t < 0.5:
        start, end, local = palette.afternoon, palette.evening, (t - 0.25) * 4
    elif t < 0.75:
        start, end, local = palette.evening, palette.night, (t - 0.5) * 4
    else:
        return palette.night

    return (
        lerp_color(start[0], end[0], local),
        lerp_color(start[1], end[1], local)
    )


def sun_appearance(sun_y: float, height: float, style: SunStyle = None) -> SunAppearance:
    """Sun colour, ray length and glow for its current height"""
    style = style or SunStyle()
    t = time_of_day(sun_y, height)

    if t <= NIGHT_THRESHOLD:
        return SunAppearance(color=style.day_color, ray_length=style.ray_length)

    u = (t - NIGHT_THRESHOLD) * 4
    return SunAppearance(
        color=lerp_color(style.day_color, style.night_color, u),
        ray_length=lerp(style.ray_length, 0.0, u),
        glow_size=lerp(style.glow_min, style.glow_max, u),
        glow_alpha=lerp(0.0, style.glow_alpha_max, u)
    )


def vertical_gradient(width: int, height: int, top: Color, bottom: Color) -> np.ndarray:
    """HxWx4 uint8 RGBA array blending `top` into `bottom` row by row"""
    if height <= 1:
        t = np.zeros((max(height, 0), 1), dtype=np.float32)
    else:
        t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]

    top_arr = np.array(top, dtype=np.float32)
    bottom_arr = np.array(bottom, dtype=np.float32)
    rows = top_arr + (bottom_arr - top_arr) * t             # (H, 3)

    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = np.round(rows).astype(np.uint8)[:, None, :]
    pixels[:, :, 3] = 255
    return pixels
