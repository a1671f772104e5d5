"""
Scene Configuration

Everything the simulation needs to know at startup, with the original
sketch's values as defaults. Only `gap` changes during a session (the slider).
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Tuple
from dataclasses import dataclass, asdict, fields

from .vector import Vec2
from .motion import MotionConfig

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Canvas, chain and motion settings for one session"""

    # Canvas
    width: int = 800
    height: int = 600
    anchor_margin: float = 50.0     # Base sits this far above the bottom edge
    fps: int = 60

    # Chain
    segment_count: int = 10
    base_segment_length: float = 50.0

    # Sun motion
    stiffness: float = 0.4
    damping: float = 0.6

    # Gap slider
    min_gap: float = 50.0
    max_gap: float = 200.0
    gap: float = 50.0

    def validate(self) -> 'SceneConfig':
        """Raise ValueError on settings the simulation can't run with"""
        if self.segment_count < 2:
            raise ValueError(f"segment_count must be at least 2, got {self.segment_count}")
        if self.base_segment_length <= 0:
            raise ValueError(f"base_segment_length must be positive, got {self.base_segment_length}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.min_gap > self.max_gap:
            raise ValueError(f"min_gap ({self.min_gap}) is larger than max_gap ({self.max_gap})")
        return self

    @property
    def gap_range(self) -> Tuple[float, float]:
        return (self.min_gap, self.max_gap)

    def clamp_gap(self, value: float) -> float:
        return min(max(value, self.min_gap), self.max_gap)

    def anchor(self, width: float = None, height: float = None) -> Vec2:
        """Stem base: horizontal centre, `anchor_margin` above the bottom"""
        width = self.width if width is None else width
        height = self.height if height is None else height
        return Vec2(width / 2, height - self.anchor_margin)

    def motion_config(self) -> MotionConfig:
        return MotionConfig(stiffness=self.stiffness, damping=self.damping)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SceneConfig':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(data) - valid_fields
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered).validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> 'SceneConfig':
        """Load a config file; missing keys keep their defaults"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

        logger.info(f"Loaded scene config from {path}")
        return cls.from_dict(data)

    def to_yaml(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Saved scene config to {path}")
        return path
