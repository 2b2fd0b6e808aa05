# src/geoflap/run.py
"""
One run of the game as an explicit state object.

The host calls `start_run()` once, then `step(state)` once per display frame
while `state.active` is True. Input goes through `hold_start` / `hold_end`.
`step` returns the notices the presentation layer should react to.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from .config import WIDTH, HEIGHT, BANNER_FRAMES, TAUNTS, COLOR_FLAP, COLOR_WAVE
from .level import ObstacleStream
from .player import Ship
from .progression import Progression, Tuning
from .stars import StarField

logger = logging.getLogger(__name__)


class NoticeType(Enum):
    SCORE = auto()
    MODE_CHANGED = auto()
    HARD_MODE = auto()
    GAME_OVER = auto()


@dataclass
class Notice:
    type: NoticeType
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Banner:
    """Transient mode banner; the presentation layer drops it once expired."""
    text: str
    mode: str
    color: tuple
    expires_at: int   # frame number

    def expired(self, frame: int) -> bool:
        return frame >= self.expires_at


@dataclass
class RunState:
    tuning: Tuning
    rng: random.Random
    progress: Progression
    ship: Ship
    stream: ObstacleStream
    stars: StarField
    width: int = WIDTH
    height: int = HEIGHT
    seed: Optional[int] = None
    active: bool = True
    banner: Optional[Banner] = None
    death_cause: Optional[str] = None   # "out_of_bounds" | "collision" | None
    taunt: Optional[str] = None


def start_run(tuning: Optional[Tuning] = None, seed: Optional[int] = None,
              width: int = WIDTH, height: int = HEIGHT) -> RunState:
    """Fresh state for a new run: score 0, initial speed, flap mode, hard mode off."""
    tuning = tuning or Tuning()
    if seed is None:
        seed = random.randrange(0, 2**32 - 1)
    rng = random.Random(seed)
    state = RunState(
        tuning=tuning,
        rng=rng,
        progress=Progression.fresh(tuning),
        ship=Ship.spawn(height),
        stream=ObstacleStream(rng, width, height, tuning),
        stars=StarField(rng, width, height),
        width=width,
        height=height,
        seed=seed,
    )
    logger.info("Run started (seed=%d, speed=%.2f)", seed, state.progress.speed)
    return state


def hold_start(state: RunState):
    """Thrust pressed. Only the rising edge flaps, and only in flap mode."""
    p = state.progress
    if p.holding:
        return
    p.holding = True
    if state.active and not p.wave_mode:
        state.ship.flap()


def hold_end(state: RunState):
    state.progress.holding = False


def clear_expired_banner(state: RunState) -> Optional[Banner]:
    if state.banner is not None and state.banner.expired(state.progress.frames):
        state.banner = None
    return state.banner


def _mode_notice(state: RunState) -> Notice:
    p = state.progress
    banner = Banner(
        text="WAVE MODE: HOLD" if p.wave_mode else "FLAP MODE: TAP",
        mode=p.mode_name,
        color=COLOR_WAVE if p.wave_mode else COLOR_FLAP,
        expires_at=p.frames + BANNER_FRAMES,
    )
    state.banner = banner
    return Notice(NoticeType.MODE_CHANGED, {
        "mode": banner.mode,
        "color": banner.color,
        "banner": banner.text,
        "expires_at": banner.expires_at,
    })


def _terminate(state: RunState, cause: str, notices: List[Notice]) -> List[Notice]:
    state.active = False
    state.death_cause = cause
    state.taunt = state.rng.choice(TAUNTS)
    score = state.progress.score
    logger.info("Run over: %s at score %d (frame %d)", cause, score, state.progress.frames)
    notices.append(Notice(NoticeType.GAME_OVER, {
        "score": score,
        "taunt": state.taunt,
        "cause": cause,
    }))
    return notices


def step(state: RunState) -> List[Notice]:
    """Advance the run by one frame. No-op once the run is over."""
    notices: List[Notice] = []
    if not state.active:
        return notices

    tuning = state.tuning
    p = state.progress

    # 1) background
    state.stars.update(p.speed / tuning.initial_speed)

    # 2) frame counter + speed ramp
    p.tick(tuning)

    # 3) hard-mode latch and mode switch
    if p.latch_hard_mode(tuning):
        notices.append(Notice(NoticeType.HARD_MODE, {"score": p.score}))
    if p.refresh_mode(tuning):
        notices.append(_mode_notice(state))

    # 4) ship; must be final before obstacles are tested
    if not state.ship.update(p, state.height):
        return _terminate(state, "out_of_bounds", notices)

    # 5) spawn
    state.stream.try_spawn(p.speed, p)

    # 6) obstacles: move, collide, score, prune
    state.stream.update(p.speed)
    for obs in state.stream.obstacles:
        if obs.hits(state.ship):
            return _terminate(state, "collision", notices)
        if obs.try_pass(state.ship.x):
            notices.append(Notice(NoticeType.SCORE, {"score": p.add_point()}))
    state.stream.prune()

    return notices
