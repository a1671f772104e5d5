"""
Stem Simulation

Owns the whole mutable state of the scene (chain, sun motion, anchor, gap,
canvas size) and advances it one frame per `tick()`:

    pointer -> MotionController -> clamp to canvas -> stretch factor
            -> ChainSolver (forward, backward, gap) -> FrameSnapshot
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from .vector import Vec2
from .motion import MotionController, MotionState
from .chain import Chain, ChainSolver, stretch_factor
from .config import SceneConfig

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """All per-session mutable state, passed around instead of globals"""
    chain: Chain
    motion: MotionState
    anchor: Vec2
    gap: float
    width: int
    height: int
    frame: int = 0


@dataclass
class FrameSnapshot:
    """Read-only view of one tick, handed to the renderer"""
    frame: int
    joints: List[Vec2]
    sun: Vec2
    anchor: Vec2
    gap: float
    stretch: float
    width: int
    height: int
    pointer: Vec2 = field(default_factory=Vec2)

    @property
    def tip(self) -> Vec2:
        return self.joints[-1]

    def joint_tuples(self) -> List[Tuple[float, float]]:
        return [j.to_tuple() for j in self.joints]


class Simulation:
    """
    Sun-following stem.

    Example:
        sim = Simulation(SceneConfig())
        for _ in range(120):
            snapshot = sim.tick(pointer.current_pointer_position())
            renderer.render(snapshot)
    """

    def __init__(self, config: SceneConfig = None, solver: ChainSolver = None):
        self.config = (config or SceneConfig()).validate()
        self.solver = solver or ChainSolver()
        self.state = self._initial_state()
        self.controller = MotionController(self.config.motion_config(), state=self.state.motion)
        self._last_stretch = 1.0

    def _initial_state(self) -> SimulationState:
        cfg = self.config
        chain = Chain.collinear(cfg.segment_count, cfg.base_segment_length, y=cfg.height / 2)
        # Sun starts on the last link
        motion = MotionState(position=chain.tip.copy())
        return SimulationState(
            chain=chain,
            motion=motion,
            anchor=cfg.anchor(),
            gap=cfg.clamp_gap(cfg.gap),
            width=cfg.width,
            height=cfg.height,
        )

    # -------------------------------------------------------------------------
    # Collaborator inputs
    # -------------------------------------------------------------------------

    @property
    def gap(self) -> float:
        return self.state.gap

    def set_gap(self, value: float) -> float:
        """Slider input; clamped to the configured range"""
        self.state.gap = self.config.clamp_gap(value)
        return self.state.gap

    def resize(self, width: int, height: int):
        """Canvas resized: keep joints, move the anchor"""
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.state.width = width
        self.state.height = height
        self.state.anchor = self.config.anchor(width, height)
        logger.debug(f"Canvas resized to {width}x{height}, anchor {self.state.anchor.to_tuple()}")

    def reset(self):
        """Back to the startup layout"""
        self.state = self._initial_state()
        self.controller.state = self.state.motion

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    @property
    def sun(self) -> Vec2:
        return self.state.motion.position

    @property
    def joints(self) -> List[Vec2]:
        return self.state.chain.joints

    def tick(self, pointer: Vec2) -> FrameSnapshot:
        """Advance one frame toward the pointer and return the result"""
        state = self.state

        self.controller.step(pointer)
        state.motion.position = state.motion.position.clamped(0, 0, state.width, state.height)
        sun = state.motion.position

        stretch = stretch_factor(sun, state.anchor, len(state.chain), state.chain.segment_length)
        self.solver.solve(state.chain, state.anchor, sun, stretch, state.gap)
        self._last_stretch = stretch

        state.frame += 1
        return self.snapshot(pointer)

    def snapshot(self, pointer: Vec2 = None) -> FrameSnapshot:
        state = self.state
        return FrameSnapshot(
            frame=state.frame,
            joints=[j.copy() for j in state.chain.joints],
            sun=state.motion.position.copy(),
            anchor=state.anchor.copy(),
            gap=state.gap,
            stretch=self._last_stretch,
            width=state.width,
            height=state.height,
            pointer=pointer.copy() if pointer is not None else state.motion.position.copy(),
        )
