# src/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from src.geoflap.config import HEIGHT, WIDTH, WAVE_SPEED
from src.geoflap.level import Obstacle
from src.geoflap.run import RunState

OBS_SIZE = 9
MAX_VY_OBS = 20.0   # flap-mode vy is unbounded; clip for normalization

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_obstacle(state: RunState) -> Optional[Obstacle]:
    """Nearest obstacle whose trailing edge is not yet behind the ship's hitbox."""
    left, _ = state.ship.span
    ahead = [o for o in state.stream.obstacles if o.x + o.width >= left]
    return min(ahead, key=lambda o: o.x) if ahead else None


def build_observation(state: RunState) -> np.ndarray:
    """
    Returns (9,) float32:
    [y_norm, vy_norm, wave, hard, speed_norm,
     next_dx_norm, gap_top_norm, gap_bottom_norm, next_long]
    With no obstacle ahead: dx=1, gap spans the whole screen, long=0.
    """
    p = state.progress
    ship = state.ship
    h = float(state.height or HEIGHT)
    w = float(state.width or WIDTH)

    y_norm = _clamp01(ship.y / h)
    vy_norm = max(-1.0, min(1.0, ship.vy / max(MAX_VY_OBS, WAVE_SPEED)))
    speed_norm = _clamp01(p.speed / state.tuning.max_speed)

    obs = next_obstacle(state)
    if obs is None:
        dx, top, bottom, long_flag = 1.0, 0.0, 1.0, 0.0
    else:
        dx = _clamp01((obs.x - ship.x) / w) if obs.x > ship.x else 0.0
        top = _clamp01(obs.top_h / h)
        bottom = _clamp01(obs.gap_bottom / h)
        long_flag = 1.0 if obs.long else 0.0

    return np.array([
        y_norm, vy_norm,
        1.0 if p.wave_mode else 0.0,
        1.0 if p.hard_mode else 0.0,
        speed_norm, dx, top, bottom, long_flag,
    ], dtype=np.float32)
