# src/geoflap/player.py
from __future__ import annotations
import math
import pygame
from dataclasses import dataclass
from typing import List, Tuple
from .config import (
    PLAYER_X, HITBOX_HALF_W, GRAVITY, FLAP_IMPULSE,
    WAVE_SPEED, FLAP_TILT_PER_VY, FLAP_MAX_TILT, WAVE_TILT,
    COLOR_SHIP, COLOR_FLAP, COLOR_WAVE
)
from .progression import Progression

# Arrow outline around the ship's centre, nose pointing +x
_SHIP_SHAPE: Tuple[Tuple[float, float], ...] = ((20, 0), (-20, -12), (-10, 0), (-20, 12))


@dataclass
class Ship:
    """
    Player ship at a fixed x; only y moves.
    Two control laws, picked from the progression snapshot each frame:
    - flap: gravity accumulates into vy, a flap overwrites vy upward
    - wave: vy is forced to +/- WAVE_SPEED from the hold state
    """
    x: float
    y: float
    vy: float = 0.0
    angle: float = 0.0

    @classmethod
    def spawn(cls, height: int) -> "Ship":
        return cls(x=float(PLAYER_X), y=height / 2)

    @property
    def span(self) -> Tuple[float, float]:
        """Horizontal collision span (narrower than the drawn ship)."""
        return self.x - HITBOX_HALF_W, self.x + HITBOX_HALF_W

    def flap(self):
        self.vy = FLAP_IMPULSE

    def update(self, progress: Progression, height: float) -> bool:
        """Advance one frame. Returns False once the ship has left [0, height]."""
        if progress.wave_mode:
            self.vy = -WAVE_SPEED if progress.holding else WAVE_SPEED
            self.angle = -WAVE_TILT if progress.holding else WAVE_TILT
        else:
            self.vy += GRAVITY
            self.angle = max(-FLAP_MAX_TILT, min(FLAP_MAX_TILT, self.vy * FLAP_TILT_PER_VY))

        self.y += self.vy
        return 0.0 <= self.y <= height

    def outline(self) -> List[Tuple[float, float]]:
        c, s = math.cos(self.angle), math.sin(self.angle)
        return [(self.x + px * c - py * s, self.y + px * s + py * c) for px, py in _SHIP_SHAPE]

    def draw(self, surf: pygame.Surface, wave_mode: bool):
        pts = self.outline()
        glow = COLOR_WAVE if wave_mode else COLOR_FLAP
        pygame.draw.polygon(surf, glow, pts, width=4)
        pygame.draw.polygon(surf, COLOR_SHIP, pts)
