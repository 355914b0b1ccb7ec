import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass
import os

import plinko as P
from plinko.engine import PlinkoEngine
from plinko.geometry import fit_board

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


Color = Tuple[int, int, int]


@dataclass
class AppearanceConfig:
    """Colours and drawing options. Affect pixels, never physics."""
    bg_color: Color = P.BG_COLOR
    peg_color: Color = P.PEG_COLOR
    wall_color: Color = P.WALL_COLOR
    divider_color: Color = P.DIVIDER_COLOR
    text_color: Color = P.TEXT_COLOR
    ball_color: Color = P.BALL_COLOR
    ball_rim_color: Color = P.BALL_RIM_COLOR
    labels: bool = True
    show_settled: bool = True
    fps: int = P.FPS


class Renderer:
    """Draws an engine's geometry and balls; maps input events onto the engine."""

    def __init__(self, engine: PlinkoEngine, config: Optional[AppearanceConfig] = None):
        self.engine = engine
        self.config = config or AppearanceConfig()
        self._font = None
        self._font_size = 0
        self._display_initialized = False

    def _get_font(self, scale: float):
        size = max(8, int(16 * scale))
        if self._font is None or size != self._font_size:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, size)
            self._font_size = size
        return self._font

    def draw(self, surface: pygame.Surface):
        geo = self.engine.geometry
        cfg = self.config
        surface.fill(cfg.bg_color)

        peg_r = max(1, int(round(geo.peg_radius)))
        for x, y in geo.pegs:
            pygame.draw.circle(surface, cfg.peg_color, (int(x), int(y)), peg_r)

        for seg in geo.walls:
            pygame.draw.line(surface, cfg.wall_color, (seg.x1, seg.y1), (seg.x2, seg.y2), 4)

        bottom = geo.slot_y + geo.slot_height
        for x in geo.dividers:
            pygame.draw.line(surface, cfg.divider_color, (x, geo.slot_y), (x, bottom), 3)

        if cfg.labels:
            font = self._get_font(geo.scale)
            for cx, label in zip(geo.bin_centers(), geo.bin_labels):
                text = font.render(label, True, cfg.text_color)
                rect = text.get_rect(center=(int(cx), int(geo.slot_y + 20 * geo.scale)))
                surface.blit(text, rect)

        for view in self.engine.balls_for_render(include_settled=cfg.show_settled):
            centre = (int(view.x), int(view.y))
            r = max(1, int(round(view.radius)))
            pygame.draw.circle(surface, cfg.ball_rim_color, centre, r)
            pygame.draw.circle(surface, cfg.ball_color, centre, max(1, r - 2))

    def render(self) -> np.ndarray:
        """Render current state → (H, W, 3) uint8."""
        board = self.engine.board
        surface = pygame.Surface((int(board.width), int(board.height)))
        self.draw(surface)
        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    def _board_offset(self, screen: pygame.Surface) -> int:
        return max(0, (screen.get_width() - int(self.engine.board.width)) // 2)

    def handle_event(self, event) -> bool:
        """Apply one input event. Returns False when the window should close."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
            return False
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            self.engine.spawn_ball()
        elif event.type == pygame.VIDEORESIZE:
            self.engine.on_layout_changed(fit_board(event.w, event.h))
        return True

    def play(self, window_size: Tuple[int, int] = (480, 800), max_frames: Optional[int] = None):
        """Interactive window: click or touch to drop a ball. Press Q to exit."""
        if not self._display_initialized:
            pygame.init()
            self._display_initialized = True

        screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        pygame.display.set_caption('Plinko')
        clock = pygame.time.Clock()
        self.engine.on_layout_changed(fit_board(*window_size))

        running = True
        frames = 0
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                if event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)

            self.engine.tick()

            board = self.engine.board
            frame = pygame.Surface((int(board.width), int(board.height)))
            self.draw(frame)
            screen.fill(self.config.bg_color)
            screen.blit(frame, (self._board_offset(screen), 0))
            pygame.display.flip()

            frames += 1
            if max_frames is not None and frames >= max_frames:
                running = False
            clock.tick(self.config.fps)

        pygame.quit()
        self._display_initialized = False

