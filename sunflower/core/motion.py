"""
Second-Order Motion Controller

Turns a raw, possibly jittery pointer position into a smoothed follower
position with inertia, so the stem tip drifts after the sun instead of
snapping to it.

Fixed timestep: one `step()` per frame. Damping is applied multiplicatively to
the updated velocity, and acceleration is an impulse rebuilt every tick.
"""

from dataclasses import dataclass, field

from .vector import Vec2


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class MotionConfig:
    """Spring parameters (dimensionless, per frame)"""
    stiffness: float = 0.4      # Fraction of the offset turned into force each tick
    damping: float = 0.6        # Velocity multiplier (< 1 bleeds energy)

    # Presets
    @classmethod
    def default(cls) -> 'MotionConfig':
        """The original sun: quick, slight overshoot"""
        return cls(stiffness=0.4, damping=0.6)

    @classmethod
    def lazy(cls) -> 'MotionConfig':
        """Slow drift, no visible overshoot"""
        return cls(stiffness=0.1, damping=0.5)

    @classmethod
    def snappy(cls) -> 'MotionConfig':
        """Almost follows the pointer 1:1"""
        return cls(stiffness=0.8, damping=0.4)

    @classmethod
    def bouncy(cls) -> 'MotionConfig':
        """Springy, rings a few times before settling"""
        return cls(stiffness=0.3, damping=0.85)


@dataclass
class MotionState:
    """Position, velocity and acceleration of the smoothed point"""
    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    acceleration: Vec2 = field(default_factory=Vec2)


# =============================================================================
# Controller
# =============================================================================

class MotionController:
    """
    Damped spring follower.

    Example:
        controller = MotionController(MotionConfig.default(), start=Vec2(450, 300))

        # Each frame
        sun = controller.step(pointer.current_pointer_position())
    """

    def __init__(self, config: MotionConfig = None, start: Vec2 = None, state: MotionState = None):
        self.config = config or MotionConfig.default()
        if state is None:
            state = MotionState(position=start.copy() if start is not None else Vec2())
        self.state = state

    @property
    def position(self) -> Vec2:
        return self.state.position

    @property
    def velocity(self) -> Vec2:
        return self.state.velocity

    def reset(self, position: Vec2):
        """Teleport to a position and drop all momentum"""
        self.state.position = position.copy()
        self.state.velocity = Vec2()
        self.state.acceleration = Vec2()

    def step(self, raw_target: Vec2) -> Vec2:
        """
        Advance one tick toward `raw_target` and return the new position.

        The target is not validated or clamped; that is the caller's job.
        """
        state = self.state
        force = (raw_target - state.position) * self.config.stiffness
        state.acceleration = state.acceleration + force
        state.velocity = (state.velocity + state.acceleration) * self.config.damping
        state.position = state.position + state.velocity
        state.acceleration = Vec2()
        return state.position

    def is_settled(self, target: Vec2, threshold: float = 0.01) -> bool:
        """Check if the follower has come to rest on `target`"""
        dist = (self.state.position - target).length
        speed = self.state.velocity.length
        return dist < threshold and speed < threshold
