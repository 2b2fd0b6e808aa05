# src/tests/run_tests.py
"""
Frame loop checks: ordering, termination, scoring, notices, run reset.

Usage (from repo root):
  python -m pytest src/tests/run_tests.py
"""
import pytest

from src.geoflap.config import TAUNTS, HEIGHT, BANNER_FRAMES
from src.geoflap.level import Obstacle
from src.geoflap.progression import Tuning
from src.geoflap.run import (
    NoticeType, start_run, step, hold_start, hold_end, clear_expired_banner
)


def types(notices):
    return [n.type for n in notices]


def test_start_run_is_fresh():
    state = start_run(seed=42)
    p = state.progress
    assert state.active
    assert (p.score, p.frames, p.speed) == (0, 0, 6.0)
    assert not p.wave_mode and not p.hard_mode and not p.holding
    assert state.stream.obstacles == [] and state.stream.distance == 0.0
    assert len(state.stars.stars) == 80
    assert sum(1 for s in state.stars.stars if s.distant) == 50
    assert state.ship.y == HEIGHT / 2
    assert state.banner is None and state.death_cause is None


def test_falling_out_of_the_world_ends_the_run():
    state = start_run(seed=1)
    notices = []
    while state.active:
        notices = step(state)
    # y_n = 270 + 0.25 * n * (n + 1) first exceeds 540 at n = 33
    assert state.progress.frames == 33
    assert state.death_cause == "out_of_bounds"
    assert state.progress.speed == pytest.approx(6.0 + 33 * 0.0006)
    assert types(notices)[-1] == NoticeType.GAME_OVER
    over = notices[-1].data
    assert over["score"] == 0 and over["cause"] == "out_of_bounds"
    assert over["taunt"] in TAUNTS and state.taunt == over["taunt"]

    # inactive: stepping is a no-op
    assert step(state) == []
    assert state.progress.frames == 33


def test_obstacle_collision_ends_the_run():
    state = start_run(seed=1)
    state.stream.obstacles.append(Obstacle(x=190.0, width=70.0, top_h=300.0, gap=165.0))
    notices = step(state)
    assert not state.active
    assert state.death_cause == "collision"
    assert notices[-1].type == NoticeType.GAME_OVER
    assert notices[-1].data["cause"] == "collision"


def test_collision_uses_the_ship_position_after_this_frame():
    state = start_run(seed=1)
    # before the move y=270 is above the gap; after gravity y=270.5 is inside it
    state.stream.obstacles.append(Obstacle(x=190.0, width=70.0, top_h=270.25, gap=165.0))
    step(state)
    assert state.active
    assert state.ship.y == pytest.approx(270.5)


def test_passing_an_obstacle_scores_once():
    state = start_run(seed=1)
    state.stream.obstacles.append(Obstacle(x=205.0, width=70.0, top_h=200.0, gap=165.0))
    notices = step(state)
    assert state.active
    assert state.progress.score == 1
    assert NoticeType.SCORE in types(notices)
    assert notices[types(notices).index(NoticeType.SCORE)].data == {"score": 1}

    notices = step(state)
    assert state.active
    assert state.progress.score == 1
    assert NoticeType.SCORE not in types(notices)


def test_mode_switch_emits_banner_that_expires():
    state = start_run(seed=1)
    state.progress.score = 10
    notices = step(state)
    assert state.progress.wave_mode
    assert types(notices) == [NoticeType.MODE_CHANGED]
    data = notices[0].data
    assert data["mode"] == "WAVE"
    assert data["banner"] == "WAVE MODE: HOLD"
    assert data["expires_at"] == 1 + BANNER_FRAMES
    # not holding in wave mode -> forced down
    assert state.ship.vy == 7.0

    assert clear_expired_banner(state) is not None
    state.progress.frames = BANNER_FRAMES
    assert clear_expired_banner(state) is not None
    state.progress.frames = BANNER_FRAMES + 1
    assert clear_expired_banner(state) is None
    assert state.banner is None


def test_hard_mode_latches_for_the_rest_of_the_run():
    state = start_run(seed=1)
    state.progress.score = 20
    notices = step(state)
    assert types(notices) == [NoticeType.HARD_MODE]
    assert state.progress.hard_mode
    assert state.progress.speed == pytest.approx(6.0 + 0.0006 + 1.5)

    state.progress.score = 3          # hypothetical drop
    notices = step(state)
    assert NoticeType.HARD_MODE not in types(notices)
    assert state.progress.hard_mode


def test_new_run_resets_everything():
    old = start_run(seed=5)
    old.progress.score = 25
    old.progress.hard_mode = True
    old.progress.speed = 10.5
    old.stream.obstacles.append(Obstacle(x=400.0, width=450.0, top_h=100.0, gap=165.0, long=True))
    old.stream.distance = 300.0
    old.active = False

    state = start_run(seed=5)
    assert state is not old
    assert state.progress.speed == 6.0
    assert not state.progress.hard_mode
    assert state.progress.score == 0
    assert state.stream.obstacles == [] and state.stream.distance == 0.0
    assert state.active


def test_flap_only_on_rising_edge_in_flap_mode():
    state = start_run(seed=1)
    hold_start(state)
    assert state.progress.holding and state.ship.vy == -9.0

    state.ship.vy = 0.0
    hold_start(state)                 # still held: no new flap
    assert state.ship.vy == 0.0

    hold_end(state)
    assert not state.progress.holding
    hold_start(state)
    assert state.ship.vy == -9.0


def test_hold_in_wave_mode_only_sets_flag():
    state = start_run(seed=1)
    state.progress.wave_mode = True
    state.ship.vy = 3.0
    hold_start(state)
    assert state.progress.holding
    assert state.ship.vy == 3.0


def test_hold_after_death_does_not_flap():
    state = start_run(seed=1)
    state.active = False
    hold_start(state)
    assert state.progress.holding
    assert state.ship.vy == 0.0


def test_speed_never_decreases_across_a_run():
    state = start_run(tuning=Tuning(acceleration=0.01, max_speed=7.0), seed=9)
    last = state.progress.speed
    while state.active:
        # keep the ship alive and the lane clear to get a long run
        state.ship.y, state.ship.vy = HEIGHT / 2, 0.0
        state.stream.obstacles.clear()
        step(state)
        assert last <= state.progress.speed <= 7.0
        last = state.progress.speed
        if state.progress.frames >= 400:
            break
    assert state.active
    assert state.progress.speed == 7.0
