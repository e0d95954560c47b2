from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Dict, Optional

import pygame

from config_io import load_optional_config
from config_parsing import parse_game_config, parse_generator_config
from game_types import Step
from generate_maps import generate_next_map
from map_io import load_random_map
from rendering import GameRenderer
from session import GameSession, HintOutcome, MoveOutcome
from utils import format_elapsed

logger = logging.getLogger(__name__)

KEY_STEPS: Dict[int, Step] = {
    pygame.K_UP: (0, -1),
    pygame.K_DOWN: (0, 1),
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
}

KEY_HINTS: Dict[int, str] = {
    pygame.K_b: "bfs",
    pygame.K_a: "astar",
}

HINT_MESSAGES = {
    HintOutcome.NO_POINTS: "Not enough points!",
    HintOutcome.NO_TREASURE: "No treasures left!",
    HintOutcome.NO_PATH: "No path to the nearest treasure.",
}


class Game:
    """Top-level game orchestration (map loading, loop, input, render)."""

    def __init__(self, cfg_path: Optional[Path]) -> None:
        cfg = load_optional_config(cfg_path)
        self.config = parse_game_config(cfg)
        self.generator_config = parse_generator_config(cfg)
        self.maps_dir = Path(self.config.maps_dir)
        self.rng = random.Random()

        self._load_session()
        self._init_pygame()

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame, renderer, window and clock."""
        pygame.init()
        self.renderer = GameRenderer(
            self.session.grid.size, self.config.cell_size, self.config.palette
        )
        self._apply_display_mode()
        self.clock = pygame.time.Clock()

    def _apply_display_mode(self) -> None:
        self.screen = pygame.display.set_mode(self.renderer.window_size())
        pygame.display.set_caption(self.config.title)

    def _generate_map(self) -> Path:
        return generate_next_map(self.maps_dir, self.generator_config, self.rng)

    def _load_session(self) -> None:
        """Load a random map (generating one if needed) and start a fresh session."""
        grid = load_random_map(
            self.maps_dir,
            self.rng,
            generate=self._generate_map,
            prefix=self.generator_config.map_prefix,
        )
        self.session = GameSession(grid, self.config)
        self.started_at = time.monotonic()
        self.finished_at: Optional[float] = None
        self.status = ""

    def _reload(self) -> None:
        self._load_session()
        if self.session.grid.size != self.renderer.grid_size:
            self.renderer = GameRenderer(
                self.session.grid.size, self.config.cell_size, self.config.palette
            )
            self._apply_display_mode()

    # ----------------------------
    # Input
    # ----------------------------

    def _handle_move(self, dx: int, dy: int) -> None:
        outcome = self.session.move(dx, dy)
        s = self.session
        if outcome == MoveOutcome.BOUNDARY:
            self.status = "Map boundary!"
        elif outcome == MoveOutcome.WALL:
            self.status = f"Wall hit! -{self.config.wall_penalty} points"
        elif outcome == MoveOutcome.TREASURE:
            self.status = f"Treasure found! {s.treasures_found}/{s.treasures_total}"
        elif outcome == MoveOutcome.WON:
            if self.finished_at is None:
                self.finished_at = time.monotonic()
            self.status = f"You won! Final score: {s.score} (R: new map)"
        else:
            self.status = ""

    def _handle_hint(self, algorithm: str) -> None:
        outcome = self.session.hint(algorithm)
        if outcome == HintOutcome.SHOWN:
            self.status = f"{'BFS' if algorithm == 'bfs' else 'A*'} hint (-{self.config.hint_cost})"
        else:
            self.status = HINT_MESSAGES[outcome]

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False
        if key in KEY_STEPS:
            self._handle_move(*KEY_STEPS[key])
        elif key in KEY_HINTS:
            self._handle_hint(KEY_HINTS[key])
        elif key == pygame.K_r:
            self._reload()
        return True

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN and not self._handle_keydown(e.key):
                return False
        return True

    # ----------------------------
    # Loop
    # ----------------------------

    def _elapsed(self) -> str:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return format_elapsed(end - self.started_at)

    def run(self) -> None:
        """Run the main game loop."""
        running = True
        while running:
            self.clock.tick(60)
            running = self._handle_events()
            self.renderer.render_frame(self.screen, self.session, self._elapsed(), self.status)
        pygame.quit()
