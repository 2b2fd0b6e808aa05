# src/geoflap/stars.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Tuple
import pygame
from .config import (
    STAR_COUNT, DISTANT_STAR_COUNT, DISTANT_STAR_SIZE, NEAR_STAR_SIZE,
    DISTANT_STAR_SPEED, NEAR_STAR_SPEED, COLOR_DISTANT_STAR, COLOR_NEAR_STAR
)


@dataclass
class Star:
    x: float
    y: float
    size: float
    speed: float
    color: Tuple[int, int, int]
    distant: bool


class StarField:
    """Parallax background. Purely decorative: stars never touch gameplay state."""

    def __init__(self, rng: random.Random, width: int, height: int,
                 count: int = STAR_COUNT, distant: int = DISTANT_STAR_COUNT):
        self.rng = rng
        self.width = width
        self.height = height
        self.stars: List[Star] = [self._make_star(i < distant) for i in range(count)]

    def _make_star(self, distant: bool) -> Star:
        size_max = DISTANT_STAR_SIZE if distant else NEAR_STAR_SIZE
        return Star(
            x=self.rng.random() * self.width,
            y=self.rng.random() * self.height,
            size=self.rng.random() * size_max,
            speed=DISTANT_STAR_SPEED if distant else NEAR_STAR_SPEED,
            color=COLOR_DISTANT_STAR if distant else COLOR_NEAR_STAR,
            distant=distant,
        )

    def update(self, speed_scale: float):
        """Scroll every star; ones that leave the left edge wrap to the right at a new height."""
        for s in self.stars:
            s.x -= s.speed * speed_scale
            if s.x < 0:
                s.x = float(self.width)
                s.y = self.rng.random() * self.height

    def draw(self, surf: pygame.Surface):
        for s in self.stars:
            side = max(1, int(s.size))
            pygame.draw.rect(surf, s.color, (int(s.x), int(s.y), side, side))
