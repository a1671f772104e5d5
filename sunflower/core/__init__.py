"""
Sunflower - Core
"""

from .vector import Vec2, UP
from .motion import MotionConfig, MotionState, MotionController
from .chain import Chain, ChainSolver, stretch_factor
from .config import SceneConfig
from .simulation import Simulation, SimulationState, FrameSnapshot
from .input import (
    PointerSource, FixedPointer, PathPointer, OrbitPointer, SweepPointer,
    TouchMousePointer, create_pointer,
)
from .loop import FrameLoop
from .sky import (
    SkyPalette, SunStyle, SunAppearance,
    time_of_day, background_colors, sun_appearance, lerp_color, hex_to_rgb,
)
from .renderer import FlowerRenderer, RenderStyle, leaf_positions, petal_positions, sun_rays
from .exporter import FrameExporter
from .presets import (
    ScenePreset, PresetManager, BUILTIN_PRESETS,
    get_preset_manager, get_preset, list_presets,
)
from .preview import PreviewConfig, PreviewWindow, preview_scene, check_pygame_available

__all__ = [
    # Geometry
    'Vec2', 'UP',
    # Motion
    'MotionConfig', 'MotionState', 'MotionController',
    # IK
    'Chain', 'ChainSolver', 'stretch_factor',
    # Scene
    'SceneConfig', 'Simulation', 'SimulationState', 'FrameSnapshot', 'FrameLoop',
    # Input
    'PointerSource', 'FixedPointer', 'PathPointer', 'OrbitPointer', 'SweepPointer',
    'TouchMousePointer', 'create_pointer',
    # Sky & rendering
    'SkyPalette', 'SunStyle', 'SunAppearance',
    'time_of_day', 'background_colors', 'sun_appearance', 'lerp_color', 'hex_to_rgb',
    'FlowerRenderer', 'RenderStyle', 'leaf_positions', 'petal_positions', 'sun_rays',
    'FrameExporter',
    # Presets
    'ScenePreset', 'PresetManager', 'BUILTIN_PRESETS',
    'get_preset_manager', 'get_preset', 'list_presets',
    # Live preview
    'PreviewConfig', 'PreviewWindow', 'preview_scene', 'check_pygame_available',
]
