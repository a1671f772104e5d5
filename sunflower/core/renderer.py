"""
Flower Renderer

Draws one FrameSnapshot into an RGBA numpy array with Pillow.

Layer order (bottom to top):
    1. Sky gradient (time of day from sun height)
    2. Leaves along the stem
    3. Stem segments, alternating colours
    4. Petals around the tip
    5. Flower head and centre
    6. Sun glow, disc and rays
"""

import numpy as np
from PIL import Image, ImageDraw
from dataclasses import dataclass, field
from typing import List, Tuple

from .vector import Vec2
from .simulation import FrameSnapshot
from .sky import (
    Color, SkyPalette, SunStyle, hex_to_rgb,
    time_of_day, background_colors, sun_appearance, vertical_gradient,
)


@dataclass
class RenderStyle:
    """Sizes and colours of everything that isn't sky"""
    stem_colors: List[Color] = field(default_factory=lambda: [hex_to_rgb('#FF61A5'), hex_to_rgb('#2FB2FF')])
    stem_width: int = 10

    leaf_color: Color = field(default_factory=lambda: hex_to_rgb('#34A853'))
    leaf_size: Tuple[float, float] = (20, 10)
    leaf_offset: float = 15

    petal_color: Color = field(default_factory=lambda: hex_to_rgb('#FF61A5'))
    petal_count: int = 8
    petal_size: float = 30
    petal_radius: float = 40

    head_color: Color = field(default_factory=lambda: hex_to_rgb('#FF61A5'))
    head_size: float = 60
    center_color: Color = field(default_factory=lambda: hex_to_rgb('#FFD700'))
    center_size: float = 30

    sun_size: float = 50
    ray_count: int = 12
    ray_width: int = 3

    sky: SkyPalette = field(default_factory=SkyPalette)
    sun: SunStyle = field(default_factory=SunStyle)


# =============================================================================
# Geometry helpers
# =============================================================================

def leaf_positions(joints: List[Vec2], offset: float = 15) -> List[Vec2]:
    """
    Leaf centres: midpoints of every other segment starting at segment 1,
    pushed right on i % 4 == 1 and left otherwise.
    """
    leaves = []
    for i in range(1, len(joints) - 1, 2):
        mid = joints[i].lerp(joints[i + 1], 0.5)
        side = offset if i % 4 == 1 else -offset
        leaves.append(Vec2(mid.x + side, mid.y))
    return leaves


def petal_positions(center: Vec2, count: int = 8, radius: float = 40) -> List[Vec2]:
    return [
        center + Vec2.from_angle(2 * np.pi / count * i, radius)
        for i in range(count)
    ]


def sun_rays(center: Vec2, inner: float, length: float, count: int = 12) -> List[Tuple[Vec2, Vec2]]:
    """(start, end) of each ray; empty when length is zero"""
    if length <= 0:
        return []
    rays = []
    for i in range(count):
        angle = 2 * np.pi / count * i
        rays.append((
            center + Vec2.from_angle(angle, inner),
            center + Vec2.from_angle(angle, inner + length)
        ))
    return rays


def _ellipse_box(center: Vec2, w: float, h: float) -> List[float]:
    return [center.x - w / 2, center.y - h / 2, center.x + w / 2, center.y + h / 2]


# =============================================================================
# Renderer
# =============================================================================

class FlowerRenderer:
    """
    Example:
        renderer = FlowerRenderer()
        pixels = renderer.render(sim.tick(pointer))   # HxWx4 uint8
    """

    def __init__(self, style: RenderStyle = None):
        self.style = style or RenderStyle()

    def render(self, snapshot: FrameSnapshot) -> np.ndarray:
        return np.array(self.render_image(snapshot))

    def render_image(self, snapshot: FrameSnapshot) -> Image.Image:
        style = self.style
        w, h = snapshot.width, snapshot.height

        t = time_of_day(snapshot.sun.y, h)
        top, bottom = background_colors(t, style.sky)
        img = Image.fromarray(vertical_gradient(w, h, top, bottom))
        draw = ImageDraw.Draw(img)

        self._draw_leaves(draw, snapshot.joints)
        self._draw_stem(draw, snapshot.joints)
        self._draw_flower(draw, snapshot.tip)
        img = self._draw_sun(img, snapshot.sun, h)

        return img

    def _draw_leaves(self, draw: ImageDraw.ImageDraw, joints: List[Vec2]):
        lw, lh = self.style.leaf_size
        for leaf in leaf_positions(joints, self.style.leaf_offset):
            draw.ellipse(_ellipse_box(leaf, lw, lh), fill=self.style.leaf_color)

    def _draw_stem(self, draw: ImageDraw.ImageDraw, joints: List[Vec2]):
        colors = self.style.stem_colors
        for i in range(len(joints) - 1):
            draw.line(
                [joints[i].to_tuple(), joints[i + 1].to_tuple()],
                fill=colors[i % len(colors)],
                width=self.style.stem_width
            )

    def _draw_flower(self, draw: ImageDraw.ImageDraw, tip: Vec2):
        style = self.style
        for petal in petal_positions(tip, style.petal_count, style.petal_radius):
            draw.ellipse(_ellipse_box(petal, style.petal_size, style.petal_size), fill=style.petal_color)
        draw.ellipse(_ellipse_box(tip, style.head_size, style.head_size), fill=style.head_color)
        draw.ellipse(_ellipse_box(tip, style.center_size, style.center_size), fill=style.center_color)

    def _draw_sun(self, img: Image.Image, sun: Vec2, height: int) -> Image.Image:
        style = self.style
        look = sun_appearance(sun.y, height, style.sun)

        if look.glow_alpha > 0:
            # Translucent glow needs its own layer
            overlay = Image.new('RGBA', img.size, (0, 0, 0, 0))
            ImageDraw.Draw(overlay).ellipse(
                _ellipse_box(sun, look.glow_size, look.glow_size),
                fill=(255, 255, 255, int(round(look.glow_alpha)))
            )
            img = Image.alpha_composite(img, overlay)

        draw = ImageDraw.Draw(img)
        draw.ellipse(_ellipse_box(sun, style.sun_size, style.sun_size), fill=look.color)
        for start, end in sun_rays(sun, style.sun_size / 2, look.ray_length, style.ray_count):
            draw.line([start.to_tuple(), end.to_tuple()], fill=look.color, width=style.ray_width)

        return img
