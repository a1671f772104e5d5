import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from sunflower.core.exporter import FrameExporter


def solid_frames(count, size=(12, 16)):
    frames = []
    for i in range(count):
        frame = np.zeros((size[0], size[1], 4), dtype=np.uint8)
        frame[:, :, 0] = 40 * i
        frame[:, :, 3] = 255
        frames.append(frame)
    return frames


class TestFrameExporter(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.root = Path(self.tmpdir.name)

    def test_png(self):
        path = FrameExporter.to_png(solid_frames(2)[1], self.root / 'out' / 'frame.png')

        self.assertTrue(path.exists())
        with Image.open(path) as img:
            self.assertEqual(img.size, (16, 12))
            self.assertEqual(img.mode, 'RGBA')
            self.assertEqual(img.getpixel((0, 0)), (40, 0, 0, 255))

    def test_gif(self):
        path = FrameExporter.to_gif(solid_frames(4), self.root / 'anim.gif', fps=25)

        with Image.open(path) as img:
            self.assertEqual(img.n_frames, 4)
            self.assertEqual(img.size, (16, 12))
            self.assertEqual(img.info['duration'], 40)

    def test_gif_empty(self):
        with self.assertRaises(ValueError):
            FrameExporter.to_gif([], self.root / 'empty.gif')

    def test_frames(self):
        paths = FrameExporter.to_frames(solid_frames(3), self.root / 'frames')

        self.assertEqual([p.name for p in paths], ['frame_0000.png', 'frame_0001.png', 'frame_0002.png'])
        self.assertTrue(all(p.exists() for p in paths))

    def test_frames_empty(self):
        with self.assertRaises(ValueError):
            FrameExporter.to_frames([], self.root / 'frames')
        self.assertFalse((self.root / 'frames').exists())


if __name__ == '__main__':
    unittest.main()
