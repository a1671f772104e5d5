"""
Frame Loop

Explicit scheduling of `Simulation.tick()`: strictly sequential, one tick per
frame, no overlap. The headless loop below records snapshots; the pygame
window in `preview` runs its own display-synced loop on the same contract.
"""

import logging
from typing import Callable, Iterator, List, Optional

from .input import PointerSource
from .simulation import Simulation, FrameSnapshot

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Drives a simulation from a pointer source.

    Example:
        loop = FrameLoop(Simulation(config), create_pointer('orbit', 800, 600))
        snapshots = loop.record(240)
    """

    def __init__(
        self,
        simulation: Simulation,
        pointer: PointerSource,
        gap_source: Optional[Callable[[int], float]] = None
    ):
        """
        Args:
            simulation: The scene to advance
            pointer: Raw target feed
            gap_source: Optional per-frame gap feed (frame index -> gap)
        """
        self.simulation = simulation
        self.pointer = pointer
        self.gap_source = gap_source
        self.running = False

    def step(self) -> FrameSnapshot:
        """One frame: read inputs, tick"""
        if self.gap_source is not None:
            self.simulation.set_gap(self.gap_source(self.simulation.state.frame))
        return self.simulation.tick(self.pointer.current_pointer_position())

    def run(self, frame_count: int) -> Iterator[FrameSnapshot]:
        """Yield `frame_count` snapshots; `stop()` ends the loop early"""
        self.running = True
        try:
            for _ in range(frame_count):
                if not self.running:
                    break
                yield self.step()
        finally:
            self.running = False

    def record(self, frame_count: int, skip: int = 0) -> List[FrameSnapshot]:
        """
        Run and collect snapshots.

        Args:
            frame_count: Snapshots to keep
            skip: Warm-up frames ticked but not kept
        """
        for _ in self.run(skip):
            pass
        snapshots = list(self.run(frame_count))
        logger.debug(f"Recorded {len(snapshots)} frames (skipped {skip})")
        return snapshots

    def stop(self):
        self.running = False
