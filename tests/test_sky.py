import unittest

import numpy as np

from sunflower.core.sky import (
    SkyPalette, SunStyle, NIGHT_THRESHOLD, hex_to_rgb, lerp_color,
    time_of_day, background_colors, sun_appearance, vertical_gradient,
)


class TestColorHelpers(unittest.TestCase):
    def test_hex_to_rgb(self):
        self.assertEqual(hex_to_rgb('#FFEB3B'), (255, 235, 59))
        self.assertEqual(hex_to_rgb('34A853'), (52, 168, 83))

    def test_lerp_color_clamps(self):
        self.assertEqual(lerp_color((0, 0, 0), (100, 200, 40), 0.25), (25, 50, 10))
        self.assertEqual(lerp_color((0, 0, 0), (100, 200, 40), -1), (0, 0, 0))
        self.assertEqual(lerp_color((0, 0, 0), (100, 200, 40), 3), (100, 200, 40))


class TestTimeOfDay(unittest.TestCase):
    def test_maps_height_to_unit_range(self):
        self.assertEqual(time_of_day(0, 600), 0.0)
        self.assertEqual(time_of_day(300, 600), 0.5)
        self.assertEqual(time_of_day(900, 600), 1.0)
        self.assertEqual(time_of_day(-10, 600), 0.0)

    def test_stage_boundaries(self):
        palette = SkyPalette()
        self.assertEqual(background_colors(0.0), palette.morning)
        self.assertEqual(background_colors(0.25), palette.afternoon)
        self.assertEqual(background_colors(0.5), palette.evening)
        self.assertEqual(background_colors(0.75), palette.night)
        self.assertEqual(background_colors(1.0), palette.night)

    def test_blends_within_stage(self):
        top, bottom = background_colors(0.375)
        # Halfway from afternoon to evening
        self.assertEqual(bottom, lerp_color((255, 255, 255), (75, 0, 130), 0.5))
        self.assertEqual(top, lerp_color((135, 206, 250), (255, 165, 0), 0.5))


class TestSunAppearance(unittest.TestCase):
    def test_day_sun(self):
        look = sun_appearance(100, 600)
        self.assertEqual(look.color, hex_to_rgb('#FFEB3B'))
        self.assertEqual(look.ray_length, 30.0)
        self.assertFalse(look.is_night)

    def test_threshold_is_still_day(self):
        look = sun_appearance(600 * NIGHT_THRESHOLD, 600)
        self.assertFalse(look.is_night)

    def test_night_sun_at_bottom(self):
        style = SunStyle()
        look = sun_appearance(600, 600, style)
        self.assertEqual(look.color, (255, 255, 255))
        self.assertAlmostEqual(look.ray_length, 0.0)
        self.assertAlmostEqual(look.glow_size, style.glow_max)
        self.assertAlmostEqual(look.glow_alpha, style.glow_alpha_max)
        self.assertTrue(look.is_night)

    def test_night_fades_in(self):
        look = sun_appearance(525, 600)     # t = 0.875, halfway into night
        self.assertAlmostEqual(look.ray_length, 15.0)
        self.assertAlmostEqual(look.glow_size, 75.0)
        self.assertAlmostEqual(look.glow_alpha, 50.0)


class TestVerticalGradient(unittest.TestCase):
    def test_shape_and_end_rows(self):
        pixels = vertical_gradient(8, 5, (0, 0, 100), (0, 0, 20))
        self.assertEqual(pixels.shape, (5, 8, 4))
        self.assertEqual(pixels.dtype, np.uint8)
        np.testing.assert_array_equal(pixels[0, 0], [0, 0, 100, 255])
        np.testing.assert_array_equal(pixels[-1, -1], [0, 0, 20, 255])
        np.testing.assert_array_equal(pixels[2, 3], [0, 0, 60, 255])


if __name__ == '__main__':
    unittest.main()
