"""
FABRIK Chain Solver

Forward And Backward Reaching Inverse Kinematics for a planar chain of
fixed-length segments: the stem.

One call to `ChainSolver.solve()` runs exactly one FABRIK iteration:
    1. Forward pass  - pin the last joint on the target, walk back to the base
    2. Backward pass - pin joint 0 on the anchor, walk out to the tip
    3. Gap adjust    - slide the second-to-last joint so the final pair sits
                       at the user-chosen gap, leaving the tip where it is

There is no convergence loop. The target moves smoothly from frame to frame,
so continuity across frames does the work that extra iterations would.
"""

from dataclasses import dataclass, field
from typing import List

from .vector import Vec2, UP


# =============================================================================
# Chain
# =============================================================================

@dataclass
class Chain:
    """
    Ordered joints of the stem.

    Joint 0 is the base, joint N-1 the end-effector (flower head).
    """
    joints: List[Vec2] = field(default_factory=list)
    segment_length: float = 50.0     # Rest length L of every segment

    @classmethod
    def collinear(cls, count: int, segment_length: float, y: float, start_x: float = 0.0) -> 'Chain':
        """Joints laid out left to right on a horizontal line, L apart"""
        joints = [Vec2(start_x + i * segment_length, y) for i in range(count)]
        return cls(joints=joints, segment_length=segment_length)

    def __len__(self) -> int:
        return len(self.joints)

    @property
    def base(self) -> Vec2:
        return self.joints[0]

    @property
    def tip(self) -> Vec2:
        return self.joints[-1]

    @property
    def rest_length(self) -> float:
        """Total rest reach used by the stretch factor (N * L)"""
        return len(self.joints) * self.segment_length

    def segment_lengths(self) -> List[float]:
        """Current distance between each consecutive pair"""
        return [
            self.joints[i].distance_to(self.joints[i + 1])
            for i in range(len(self.joints) - 1)
        ]

    def copy(self) -> 'Chain':
        return Chain(joints=[j.copy() for j in self.joints], segment_length=self.segment_length)


def stretch_factor(position: Vec2, anchor: Vec2, segment_count: int, segment_length: float) -> float:
    """
    Uniform segment scale so the chain's reach matches the target distance.

    Ratio of |position - anchor| to the rest length N * L. Not clamped: a
    target beyond natural reach over-stretches every segment.
    """
    rest = segment_count * segment_length
    if rest <= 0.0:
        return 0.0
    return position.distance_to(anchor) / rest


# =============================================================================
# Solver
# =============================================================================

class ChainSolver:
    """Single-iteration FABRIK with a hard base pin and a tip gap adjustment."""

    def __init__(self, fallback_direction: Vec2 = None):
        """
        Args:
            fallback_direction: Direction used when two joints coincide
                                (default: straight up on screen)
        """
        self.fallback_direction = fallback_direction if fallback_direction is not None else UP.copy()

    def forward_pass(self, chain: Chain, target: Vec2, stretch: float) -> Chain:
        """
        Reach for the target from the tip.

        The last joint lands exactly on `target`; each earlier joint is placed
        `L * stretch` from its successor, along the direction it already lies
        in. The anchor is ignored here.
        """
        joints = chain.joints
        length = chain.segment_length * stretch

        joints[-1] = target.copy()
        for i in range(len(joints) - 2, -1, -1):
            direction = (joints[i] - joints[i + 1]).with_length(length, self.fallback_direction)
            joints[i] = joints[i + 1] + direction

        return chain

    def backward_pass(self, chain: Chain, anchor: Vec2, stretch: float) -> Chain:
        """
        Reach for the anchor from the base.

        Joint 0 is pinned on `anchor` exactly; each later joint is placed
        `L * stretch` from its predecessor.
        """
        joints = chain.joints
        length = chain.segment_length * stretch

        joints[0] = anchor.copy()
        for i in range(1, len(joints)):
            direction = (joints[i] - joints[i - 1]).with_length(length, self.fallback_direction)
            joints[i] = joints[i - 1] + direction

        return chain

    @staticmethod
    def adjust_gap(chain: Chain, desired_gap: float) -> Chain:
        """
        Set the distance between the last two joints to `desired_gap`.

        Only the second-to-last joint moves, along the line through both
        joints. Coincident joints are left untouched.
        """
        joints = chain.joints
        if len(joints) < 2:
            return chain

        last = joints[-1]
        penultimate = joints[-2]
        offset = last - penultimate
        current = offset.length
        if current > 0.0:
            joints[-2] = penultimate - offset * ((desired_gap - current) / current)

        return chain

    def solve(
        self,
        chain: Chain,
        anchor: Vec2,
        target: Vec2,
        stretch: float = 1.0,
        desired_gap: float = None
    ) -> Chain:
        """
        Run one FABRIK iteration in place and return the chain.

        Args:
            chain: Joints carried over from the previous frame (mutated)
            anchor: Fixed base position
            target: End-effector target
            stretch: Segment scale (see `stretch_factor`)
            desired_gap: Final pair distance; skipped when None

        Returns:
            The same chain object with updated joints
        """
        if len(chain) == 0:
            return chain

        self.forward_pass(chain, target, stretch)
        self.backward_pass(chain, anchor, stretch)

        if desired_gap is not None:
            self.adjust_gap(chain, desired_gap)

        return chain
