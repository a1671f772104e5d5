"""
Sunflower - A stem that reaches for the sun, solved with FABRIK
"""

from .core import (
    Vec2, MotionController, MotionConfig, Chain, ChainSolver, stretch_factor,
    SceneConfig, Simulation, FrameLoop, FlowerRenderer, FrameExporter,
    create_pointer, get_preset,
)

__version__ = "0.1.0"
__all__ = [
    'Vec2',
    'MotionController',
    'MotionConfig',
    'Chain',
    'ChainSolver',
    'stretch_factor',
    'SceneConfig',
    'Simulation',
    'FrameLoop',
    'FlowerRenderer',
    'FrameExporter',
    'build_scene',
    'record',
    'animate',
]


def build_scene(preset: str = None, config_path: str = None, **overrides) -> SceneConfig:
    """
    Resolve a scene config from a YAML file, a preset and explicit overrides.

    Later sources win: config file, then preset, then overrides. None-valued
    overrides are ignored.
    """
    from dataclasses import replace

    config = SceneConfig.from_yaml(config_path) if config_path else SceneConfig()

    if preset:
        scene_preset = get_preset(preset)
        if scene_preset is None:
            raise ValueError(f"Unknown preset: {preset}")
        config = scene_preset.apply_to_config(config)

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        config = replace(config, **overrides)
        if 'gap' in overrides:
            config.gap = config.clamp_gap(config.gap)

    return config.validate()


def record(config: SceneConfig = None, frames: int = 120, motion: str = 'orbit',
           warmup: int = 0, period: int = None) -> list:
    """
    Run the scene headless and return rendered RGBA frames.

    Args:
        config: Scene settings (defaults if None)
        frames: Number of frames to keep
        motion: Scripted pointer: 'orbit', 'sweep' or 'fixed'
        warmup: Ticks run before recording starts
        period: Frames per pointer cycle (default: all recorded frames)
    """
    config = config or SceneConfig()
    sim = Simulation(config)
    pointer = create_pointer(motion, config.width, config.height, period=period or frames)
    loop = FrameLoop(sim, pointer)
    renderer = FlowerRenderer()
    return [renderer.render(snapshot) for snapshot in loop.record(frames, skip=warmup)]


def animate(
    output_path: str,
    frames: int = 120,
    motion: str = 'orbit',
    format: str = 'gif',
    preset: str = None,
    config_path: str = None,
    **overrides
):
    """
    Record the scene and export it.

    Args:
        output_path: GIF/PNG file, or directory for 'frames'
        frames: Number of animation frames
        motion: Scripted pointer motion ('orbit', 'sweep', 'fixed')
        format: Output format ('gif', 'frames', 'png')
        preset: Optional preset name
        config_path: Optional YAML scene config
        **overrides: SceneConfig fields (gap, width, height, fps, ...)

    Returns:
        Path to the output file, or list of paths for 'frames'
    """
    if format not in ('gif', 'frames', 'png'):
        raise ValueError(f"Unknown format: {format}")
    if frames < 1:
        raise ValueError(f"frames must be at least 1, got {frames}")

    config = build_scene(preset=preset, config_path=config_path, **overrides)
    rendered = record(config, frames=frames, motion=motion)

    if format == 'gif':
        return FrameExporter.to_gif(rendered, output_path, fps=config.fps)
    elif format == 'frames':
        return FrameExporter.to_frames(rendered, output_path)
    else:
        return FrameExporter.to_png(rendered[-1], output_path)
