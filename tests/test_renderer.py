import unittest

import numpy as np

from sunflower.core.vector import Vec2
from sunflower.core.config import SceneConfig
from sunflower.core.simulation import Simulation, FrameSnapshot
from sunflower.core.sky import background_colors, time_of_day, sun_appearance
from sunflower.core.renderer import (
    FlowerRenderer, RenderStyle, leaf_positions, petal_positions, sun_rays,
)


def make_snapshot(sun, width=200, height=150):
    joints = [Vec2(150, 140 - i * 10) for i in range(9)]
    return FrameSnapshot(
        frame=1,
        joints=joints,
        sun=sun,
        anchor=joints[0],
        gap=10.0,
        stretch=0.2,
        width=width,
        height=height,
    )


class TestGeometry(unittest.TestCase):
    def test_leaf_positions_alternate_sides(self):
        joints = [Vec2(0, -i * 10.0) for i in range(10)]
        leaves = leaf_positions(joints, offset=15)

        self.assertEqual(len(leaves), 4)
        self.assertEqual([leaf.x for leaf in leaves], [15, -15, 15, -15])
        # Midpoints of segments 1, 3, 5, 7
        self.assertEqual([leaf.y for leaf in leaves], [-15, -35, -55, -75])

    def test_leaf_positions_short_chain(self):
        self.assertEqual(leaf_positions([Vec2(0, 0), Vec2(0, 10)]), [])

    def test_petal_positions_ring(self):
        center = Vec2(100, 100)
        petals = petal_positions(center, count=8, radius=40)
        self.assertEqual(len(petals), 8)
        for petal in petals:
            self.assertAlmostEqual(petal.distance_to(center), 40)
        self.assertAlmostEqual(petals[0].x, 140)
        self.assertAlmostEqual(petals[0].y, 100)

    def test_sun_rays(self):
        rays = sun_rays(Vec2(0, 0), inner=25, length=30, count=12)
        self.assertEqual(len(rays), 12)
        for start, end in rays:
            self.assertAlmostEqual(start.length, 25)
            self.assertAlmostEqual(end.length, 55)

    def test_no_rays_at_night(self):
        self.assertEqual(sun_rays(Vec2(0, 0), inner=25, length=0), [])


class TestFlowerRenderer(unittest.TestCase):
    def setUp(self):
        self.renderer = FlowerRenderer()

    def test_output_shape(self):
        pixels = self.renderer.render(make_snapshot(Vec2(20, 20)))
        self.assertEqual(pixels.shape, (150, 200, 4))
        self.assertEqual(pixels.dtype, np.uint8)
        self.assertTrue(np.all(pixels[:, :, 3] == 255))

    def test_layers(self):
        style = RenderStyle()
        snapshot = make_snapshot(Vec2(20, 20))
        pixels = self.renderer.render(snapshot)

        tip = snapshot.tip
        np.testing.assert_array_equal(pixels[int(tip.y), int(tip.x), :3], style.center_color)
        np.testing.assert_array_equal(pixels[20, 20, :3], style.sun.day_color)

        top, _ = background_colors(time_of_day(20, 150), style.sky)
        np.testing.assert_array_equal(pixels[0, 199, :3], top)

    def test_night_glow(self):
        snapshot = make_snapshot(Vec2(40, 148))
        pixels = self.renderer.render(snapshot)
        self.assertEqual(pixels.shape, (150, 200, 4))
        look = sun_appearance(148, 150)
        self.assertTrue(look.is_night)
        np.testing.assert_array_equal(pixels[148, 40, :3], look.color)

    def test_renders_simulation_frames(self):
        sim = Simulation(SceneConfig(width=160, height=120, segment_count=6, base_segment_length=20))
        for _ in range(5):
            snapshot = sim.tick(Vec2(80, 20))
        pixels = self.renderer.render(snapshot)
        self.assertEqual(pixels.shape, (120, 160, 4))


if __name__ == '__main__':
    unittest.main()
