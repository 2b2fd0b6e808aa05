# src/tests/progression_tests.py
"""
Progression state machine checks.

Usage (from repo root):
  python -m pytest src/tests/progression_tests.py
"""
import math
import pytest

from src.geoflap.progression import Progression, Tuning, is_wave_score


def test_wave_mode_is_pure_function_of_score():
    for score in range(0, 200):
        assert is_wave_score(score) == (math.floor(score / 10) % 2 == 1)
    assert not is_wave_score(0) and not is_wave_score(9)
    assert is_wave_score(10) and is_wave_score(19)
    assert not is_wave_score(20) and is_wave_score(35)


def test_speed_ramp_is_monotonic_and_capped():
    tuning = Tuning()
    p = Progression.fresh(tuning)
    assert p.speed == tuning.initial_speed == 6.0
    last = p.speed
    for _ in range(20_000):
        p.tick(tuning)
        assert p.speed >= last
        assert p.speed <= tuning.max_speed
        last = p.speed
    assert p.speed == tuning.max_speed
    assert p.frames == 20_000


def test_hard_mode_latches_once_and_stays_on():
    tuning = Tuning()
    p = Progression.fresh(tuning)
    p.score = 19
    assert not p.latch_hard_mode(tuning)
    assert not p.hard_mode

    p.score = 20
    assert p.latch_hard_mode(tuning)
    assert p.hard_mode
    assert p.speed == pytest.approx(6.0 + tuning.hard_mode_boost)

    # no second transition, even if score could go back down
    assert not p.latch_hard_mode(tuning)
    p.score = 3
    assert not p.latch_hard_mode(tuning)
    assert p.hard_mode


def test_hard_mode_boost_respects_cap():
    tuning = Tuning(max_speed=7.0)
    p = Progression(speed=6.8, score=tuning.hard_mode_score)
    assert p.latch_hard_mode(tuning)
    assert p.speed == 7.0


def test_refresh_mode_reports_transitions_only():
    tuning = Tuning()
    p = Progression.fresh(tuning)
    assert not p.refresh_mode(tuning)          # score 0 -> flap, no change
    p.score = 10
    assert p.refresh_mode(tuning) and p.wave_mode and p.mode_name == "WAVE"
    assert not p.refresh_mode(tuning)
    p.score = 20
    assert p.refresh_mode(tuning) and not p.wave_mode and p.mode_name == "FLAP"


def test_thresholds_are_configurable():
    tuning = Tuning(hard_mode_score=5, mode_period=3)
    p = Progression.fresh(tuning)
    p.score = 5
    assert p.latch_hard_mode(tuning)
    assert p.refresh_mode(tuning) and p.wave_mode   # 5 // 3 == 1


@pytest.mark.parametrize("kwargs", [
    {"long_chance": 1.5},
    {"long_chance": -0.1},
    {"max_speed": 5.0},
    {"initial_speed": 0.0},
    {"gap": 0},
    {"spawn_distance": -1},
    {"mode_period": 0},
])
def test_invalid_tuning_rejected(kwargs):
    with pytest.raises(ValueError):
        Tuning(**kwargs)
