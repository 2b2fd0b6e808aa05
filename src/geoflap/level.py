# src/geoflap/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple
import pygame
from .config import (
    OBSTACLE_W, LONG_OBSTACLE_W, WALL_MARGIN, PRUNE_X,
    COLOR_OBSTACLE, COLOR_LONG
)
from .player import Ship
from .progression import Progression, Tuning

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A top wall and a bottom wall with a vertical gap between them."""
    x: float
    width: float
    top_h: float          # height of the top wall; the gap starts here
    gap: float
    long: bool = False
    passed: bool = False

    @property
    def gap_bottom(self) -> float:
        return self.top_h + self.gap

    def update(self, speed: float):
        self.x -= speed

    def overlaps(self, left: float, right: float) -> bool:
        return right > self.x and left < self.x + self.width

    def blocks(self, y: float) -> bool:
        """True if y is outside the gap. The gap edges themselves are safe."""
        return y < self.top_h or y > self.gap_bottom

    def hits(self, ship: Ship) -> bool:
        left, right = ship.span
        return self.overlaps(left, right) and self.blocks(ship.y)

    def try_pass(self, ship_x: float) -> bool:
        """Mark as passed the first time x goes behind the ship. True only on that frame."""
        if self.passed or self.x >= ship_x:
            return False
        self.passed = True
        return True

    def rects(self, height: int) -> Tuple[pygame.Rect, pygame.Rect]:
        top = pygame.Rect(int(self.x), 0, int(self.width), int(self.top_h))
        bottom_y = int(self.gap_bottom)
        bot = pygame.Rect(int(self.x), bottom_y, int(self.width), max(0, height - bottom_y))
        return top, bot


class ObstacleStream:
    """
    Endless stream of obstacles scrolling left.
    Spawning is driven by scrolled distance, not frame count, so spacing
    stays constant as the scroll speed ramps up.
    """
    def __init__(self, rng: random.Random, width: int, height: int, tuning: Tuning):
        self.rng = rng
        self.width = width
        self.height = height
        self.tuning = tuning
        self.obstacles: List[Obstacle] = []
        self.distance = 0.0   # scrolled px since last spawn

    def has_long(self) -> bool:
        return any(o.long for o in self.obstacles)

    def _should_spawn_long(self, progress: Progression) -> bool:
        if not (progress.hard_mode and progress.wave_mode):
            return False
        # At most one long obstacle alive at a time
        if self.has_long():
            return False
        return self.rng.random() < self.tuning.long_chance

    def _rand_top(self) -> float:
        gap = self.tuning.gap
        hi = max(WALL_MARGIN, self.height - gap - WALL_MARGIN)
        return self.rng.uniform(WALL_MARGIN, hi)

    def try_spawn(self, distance: float, progress: Progression) -> Optional[Obstacle]:
        """Accumulate scrolled distance; spawn at the right edge once the threshold is met."""
        self.distance += distance
        if self.distance < self.tuning.spawn_distance:
            return None
        self.distance = 0.0

        is_long = self._should_spawn_long(progress)
        obs = Obstacle(
            x=float(self.width),
            width=float(LONG_OBSTACLE_W if is_long else OBSTACLE_W),
            top_h=self._rand_top(),
            gap=float(self.tuning.gap),
            long=is_long,
        )
        self.obstacles.append(obs)
        if is_long:
            logger.debug("Long obstacle spawned (top=%.1f, score=%d)", obs.top_h, progress.score)
        return obs

    def update(self, speed: float):
        for obs in self.obstacles:
            obs.update(speed)

    def prune(self) -> int:
        """Drop obstacles that are far enough behind the player to never matter again."""
        before = len(self.obstacles)
        self.obstacles = [o for o in self.obstacles if o.x >= PRUNE_X]
        removed = before - len(self.obstacles)
        if removed:
            logger.debug("Pruned %d obstacle(s)", removed)
        return removed

    def draw(self, surf: pygame.Surface):
        for obs in self.obstacles:
            color = COLOR_LONG if obs.long else COLOR_OBSTACLE
            for r in obs.rects(self.height):
                pygame.draw.rect(surf, color, r)
