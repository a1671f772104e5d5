"""
Live Preview Window

Interactive sunflower: the sun follows the mouse (or the first touch), the
stem bends after it, and the slider at the bottom-left sets the gap between
the last two joints.

Controls:
    SPACE / click   - Start (the scene waits until started), then play/pause
    UP/DOWN         - Nudge the gap
    R               - Reset the stem
    S               - Save current frame as PNG
    I               - Toggle info overlay
    ESC/Q           - Quit

Requires: pygame (pip install pygame)
"""

import logging
import numpy as np
from typing import Dict, Optional, Tuple
from dataclasses import dataclass
from pathlib import Path

# Try to import pygame
try:
    import pygame
    from pygame.locals import *
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False
    pygame = None

from .vector import Vec2
from .input import TouchMousePointer
from .config import SceneConfig
from .simulation import Simulation, FrameSnapshot
from .renderer import FlowerRenderer
from .exporter import FrameExporter

logger = logging.getLogger(__name__)


# =============================================================================
# Preview Configuration
# =============================================================================

@dataclass
class PreviewConfig:
    """Configuration for the preview window"""
    window_title: str = "Sunflower"
    show_info: bool = True
    start_paused: bool = True

    # Gap slider (bottom-left, like the original page)
    slider_x: int = 20
    slider_bottom: int = 50
    slider_width: int = 160
    slider_height: int = 14
    gap_step: float = 10.0

    # Optional soundtrack, started with the scene
    audio_path: Optional[str] = None


# =============================================================================
# Pointer
# =============================================================================

class PygamePointer(TouchMousePointer):
    """Mouse/touch pointer fed from pygame events"""

    def __init__(self, mouse: Optional[Vec2] = None):
        super().__init__(mouse)
        self._fingers: Dict[int, Tuple[float, float]] = {}

    def handle_event(self, event, size: Tuple[int, int]):
        if event.type == pygame.MOUSEMOTION:
            self.set_mouse(*event.pos)
        elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            # Finger coordinates are normalised to the window
            self._fingers[event.finger_id] = (event.x * size[0], event.y * size[1])
            self.set_touches(list(self._fingers.values()))
        elif event.type == pygame.FINGERUP:
            self._fingers.pop(event.finger_id, None)
            self.set_touches(list(self._fingers.values()))


# =============================================================================
# Preview Window
# =============================================================================

class PreviewWindow:
    """
    Real-time sunflower window.

    Example:
        PreviewWindow(SceneConfig()).run()
    """

    def __init__(self, scene: SceneConfig = None, config: PreviewConfig = None,
                 renderer: FlowerRenderer = None):
        if not PYGAME_AVAILABLE:
            raise ImportError(
                "pygame is required for preview. Install with: pip install pygame"
            )

        self.scene = scene or SceneConfig()
        self.config = config or PreviewConfig()
        self.simulation = Simulation(self.scene)
        self.renderer = renderer or FlowerRenderer()
        self.pointer = PygamePointer(self.simulation.sun)

        # State
        self.started = not self.config.start_paused
        self.playing = self.started
        self.dragging_slider = False
        self.last_snapshot: FrameSnapshot = self.simulation.snapshot()
        self.last_frame: Optional[np.ndarray] = None

        self._init_pygame()

    def _init_pygame(self):
        pygame.init()
        pygame.display.set_caption(self.config.window_title)

        self.screen = pygame.display.set_mode(
            (self.scene.width, self.scene.height),
            pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def run(self):
        """Run the window until closed; one simulation tick per display frame"""
        running = True

        while running:
            self.clock.tick(self.scene.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    self._handle_mouse_down(event)
                elif event.type == pygame.MOUSEBUTTONUP:
                    self.dragging_slider = False
                elif event.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                    self.simulation.resize(event.w, event.h)

                if event.type in (pygame.MOUSEMOTION, pygame.FINGERDOWN,
                                  pygame.FINGERMOTION, pygame.FINGERUP):
                    self.pointer.handle_event(event, self.screen.get_size())
                    if self.dragging_slider and event.type == pygame.MOUSEMOTION:
                        self._set_gap_from_slider(event.pos[0])

            if self.playing:
                self.last_snapshot = self.simulation.tick(self.pointer.current_pointer_position())

            self._render()
            pygame.display.flip()

        self._stop_audio()
        pygame.quit()

    def _start(self):
        if self.started:
            return
        self.started = True
        self.playing = True
        self._play_audio()
        logger.info("Scene started")

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def _handle_key(self, key: int) -> bool:
        """Handle keyboard input. Returns False to quit."""
        if key in (K_ESCAPE, K_q):
            return False

        elif key == K_SPACE:
            if not self.started:
                self._start()
            else:
                self.playing = not self.playing

        elif key == K_UP:
            self.simulation.set_gap(self.simulation.gap + self.config.gap_step)
        elif key == K_DOWN:
            self.simulation.set_gap(self.simulation.gap - self.config.gap_step)

        elif key == K_r:
            self.simulation.reset()
            self.simulation.resize(*self.screen.get_size())
            self.pointer = PygamePointer(self.simulation.sun)

        elif key == K_s:
            self._save_frame()
        elif key == K_i:
            self.config.show_info = not self.config.show_info

        return True

    def _handle_mouse_down(self, event):
        if event.button != 1:
            return
        if not self.started:
            self._start()
            return
        if self._slider_rect().inflate(0, 12).collidepoint(event.pos):
            self.dragging_slider = True
            self._set_gap_from_slider(event.pos[0])

    # -------------------------------------------------------------------------
    # Gap slider
    # -------------------------------------------------------------------------

    def _slider_rect(self):
        height = self.screen.get_height()
        return pygame.Rect(
            self.config.slider_x,
            height - self.config.slider_bottom,
            self.config.slider_width,
            self.config.slider_height
        )

    def _set_gap_from_slider(self, mouse_x: int):
        rect = self._slider_rect()
        t = float(np.clip((mouse_x - rect.x) / rect.width, 0.0, 1.0))
        lo, hi = self.scene.gap_range
        self.simulation.set_gap(lo + (hi - lo) * t)

    def _draw_slider(self):
        rect = self._slider_rect()
        lo, hi = self.scene.gap_range
        t = 0.0 if hi == lo else (self.simulation.gap - lo) / (hi - lo)

        pygame.draw.rect(self.screen, (80, 80, 80), rect, border_radius=7)
        fill = rect.copy()
        fill.width = int(rect.width * t)
        pygame.draw.rect(self.screen, (100, 180, 255), fill, border_radius=7)
        knob_x = rect.x + int(rect.width * t)
        pygame.draw.circle(self.screen, (240, 240, 240), (knob_x, rect.centery), rect.height // 2 + 3)
        self._render_text(f"Gap: {self.simulation.gap:.0f}", (rect.right + 12, rect.y - 2))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render(self):
        self.last_frame = self.renderer.render(self.last_snapshot)
        h, w = self.last_frame.shape[:2]
        surface = pygame.image.frombuffer(self.last_frame.tobytes(), (w, h), 'RGBA')
        self.screen.blit(surface, (0, 0))

        self._draw_slider()

        if self.config.show_info:
            self._render_info()

        if not self.started:
            self._render_start_prompt()

    def _render_info(self):
        snap = self.last_snapshot
        lines = [
            f"Frame: {snap.frame}",
            f"Stretch: {snap.stretch:.2f}",
            f"Sun: ({snap.sun.x:.0f}, {snap.sun.y:.0f})",
            "PLAYING" if self.playing else "PAUSED",
        ]
        y = 10
        for line in lines:
            self._render_text(line, (self.screen.get_width() - 160, y))
            y += 20

    def _render_start_prompt(self):
        w, h = self.screen.get_size()
        overlay = pygame.Surface((w, h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 120))
        self.screen.blit(overlay, (0, 0))
        text = "Click or press SPACE to start"
        self._render_text(text, (w // 2 - self.font.size(text)[0] // 2, h // 2), color=(255, 255, 255))

    def _render_text(self, text: str, pos: Tuple[int, int], color: Tuple[int, int, int] = (30, 30, 30)):
        shadow = self.font.render(text, True, (255, 255, 255))
        self.screen.blit(shadow, (pos[0] + 1, pos[1] + 1))
        self.screen.blit(self.font.render(text, True, color), pos)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def _save_frame(self):
        if self.last_frame is None:
            return
        path = FrameExporter.to_png(self.last_frame, Path(f"sunflower_{self.last_snapshot.frame:05d}.png"))
        print(f"Saved: {path}")

    def _play_audio(self):
        if not self.config.audio_path:
            return
        try:
            pygame.mixer.init()
            pygame.mixer.music.load(self.config.audio_path)
            pygame.mixer.music.play(-1)
        except pygame.error as e:
            logger.warning(f"Could not play audio {self.config.audio_path}: {e}")

    def _stop_audio(self):
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()


# =============================================================================
# Convenience Functions
# =============================================================================

def preview_scene(scene: SceneConfig = None, audio_path: Optional[str] = None,
                  title: str = "Sunflower") -> None:
    """Open the live window for a scene"""
    if not PYGAME_AVAILABLE:
        print("Preview requires pygame. Install with: pip install pygame")
        print("Alternatively, record a GIF and view it in an external program.")
        return

    config = PreviewConfig(window_title=title, audio_path=audio_path)
    PreviewWindow(scene, config).run()


def check_pygame_available() -> bool:
    """Check if pygame is available for preview"""
    return PYGAME_AVAILABLE
