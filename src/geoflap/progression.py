# src/geoflap/progression.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from .config import (
    INITIAL_SCROLL_SPEED, SCROLL_ACCEL, MAX_SCROLL_SPEED, HARD_MODE_SPEED_BOOST,
    MODE_PERIOD, HARD_MODE_SCORE, LONG_OBSTACLE_CHANCE, GAP_H, SPAWN_DISTANCE
)

logger = logging.getLogger(__name__)


def is_wave_score(score: int, period: int = MODE_PERIOD) -> bool:
    """Wave mode is on for every odd block of `period` points (10-19, 30-39, ...)."""
    return (score // period) % 2 == 1


@dataclass(frozen=True)
class Tuning:
    """Difficulty knobs for one run. Defaults come from config."""
    initial_speed: float = INITIAL_SCROLL_SPEED
    acceleration: float = SCROLL_ACCEL
    max_speed: float = MAX_SCROLL_SPEED
    hard_mode_boost: float = HARD_MODE_SPEED_BOOST
    mode_period: int = MODE_PERIOD
    hard_mode_score: int = HARD_MODE_SCORE
    long_chance: float = LONG_OBSTACLE_CHANCE
    gap: float = GAP_H
    spawn_distance: float = SPAWN_DISTANCE

    def __post_init__(self):
        if self.initial_speed <= 0:
            raise ValueError(f"initial_speed must be > 0, got {self.initial_speed}")
        if self.max_speed < self.initial_speed:
            raise ValueError("max_speed must be >= initial_speed")
        if self.acceleration < 0 or self.hard_mode_boost < 0:
            raise ValueError("acceleration and hard_mode_boost must be >= 0")
        if self.mode_period <= 0:
            raise ValueError(f"mode_period must be > 0, got {self.mode_period}")
        if not 0.0 <= self.long_chance <= 1.0:
            raise ValueError(f"long_chance must be in [0, 1], got {self.long_chance}")
        if self.gap <= 0 or self.spawn_distance <= 0:
            raise ValueError("gap and spawn_distance must be > 0")


@dataclass
class Progression:
    """
    Per-run difficulty state:
    - speed ramps every frame up to the cap and never goes down
    - wave_mode is recomputed from score each frame
    - hard_mode latches once and stays on until the next run
    """
    speed: float
    score: int = 0
    frames: int = 0
    wave_mode: bool = False
    hard_mode: bool = False
    holding: bool = False

    @classmethod
    def fresh(cls, tuning: Tuning) -> "Progression":
        return cls(speed=tuning.initial_speed)

    @property
    def mode_name(self) -> str:
        return "WAVE" if self.wave_mode else "FLAP"

    def tick(self, tuning: Tuning):
        self.frames += 1
        self.speed = min(tuning.max_speed, self.speed + tuning.acceleration)

    def latch_hard_mode(self, tuning: Tuning) -> bool:
        """OFF -> ON once score reaches the threshold. Returns True only on the transition."""
        if self.hard_mode or self.score < tuning.hard_mode_score:
            return False
        self.hard_mode = True
        self.speed = min(tuning.max_speed, self.speed + tuning.hard_mode_boost)
        logger.info("Hard mode on at score %d (speed %.2f)", self.score, self.speed)
        return True

    def refresh_mode(self, tuning: Tuning) -> bool:
        wave = is_wave_score(self.score, tuning.mode_period)
        if wave == self.wave_mode:
            return False
        self.wave_mode = wave
        logger.info("Mode -> %s at score %d", self.mode_name, self.score)
        return True

    def add_point(self) -> int:
        self.score += 1
        return self.score
