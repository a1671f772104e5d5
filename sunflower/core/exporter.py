"""
Frame Exporter - Writes rendered frames to PNG / GIF
"""

import logging
from PIL import Image
import numpy as np
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def _to_image(frame: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(frame).astype(np.uint8))


class FrameExporter:
    """Exports rendered RGBA frames (HxWx4 uint8 arrays)"""

    @classmethod
    def to_png(cls, frame: np.ndarray, path: str | Path) -> Path:
        """Export a single frame to PNG"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        _to_image(frame).save(path, 'PNG')

        return path

    @classmethod
    def to_gif(
        cls,
        frames: List[np.ndarray],
        path: str | Path,
        fps: int = 30,
        loop: int = 0
    ) -> Path:
        """Export frames to an animated GIF"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not frames:
            raise ValueError("No frames to export")

        # GIF delays are whole milliseconds
        duration = max(1, int(round(1000 / max(fps, 1))))

        # Sky is opaque, so a plain adaptive palette per frame is enough
        images = [
            _to_image(frame).convert('RGB').convert('P', palette=Image.Palette.ADAPTIVE, colors=256)
            for frame in frames
        ]

        images[0].save(
            path,
            save_all=True,
            append_images=images[1:],
            duration=duration,
            loop=loop,
            disposal=2
        )

        logger.info(f"Wrote {len(images)} frames to {path}")
        return path

    @classmethod
    def to_frames(
        cls,
        frames: List[np.ndarray],
        directory: str | Path,
        prefix: str = "frame"
    ) -> List[Path]:
        """Export frames as individual numbered PNGs"""
        if not frames:
            raise ValueError("No frames to export")

        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        paths = []
        for i, frame in enumerate(frames):
            frame_path = directory / f"{prefix}_{i:04d}.png"
            cls.to_png(frame, frame_path)
            paths.append(frame_path)

        logger.info(f"Wrote {len(paths)} PNG frames to {directory}")
        return paths
