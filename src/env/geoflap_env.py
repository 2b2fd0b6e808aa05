# src/env/geoflap_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.geoflap.config import WIDTH, HEIGHT, FPS
from src.geoflap.progression import Tuning
from src.geoflap.run import RunState, NoticeType, start_run, step, hold_start, hold_end
from src.geoflap.render import draw_scene
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH


class GeoFlapEnv(gym.Env):
    """
    Geometry Flap Gymnasium environment (vector observations).
    - One sim step = one 60 Hz game frame.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = release, 1 = hold (a flap fires on the release -> hold edge).
    - Observation: shape (9,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 tuning: Optional[Tuning] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.tuning = tuning or Tuning()

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(round(FPS * time_limit_seconds / self.frame_skip))

        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.state: Optional[RunState] = None
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Derive the run seed from the env RNG so unseeded resets still follow reset(seed=...)
        run_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        self.state = start_run(self.tuning, seed=run_seed, width=WIDTH, height=HEIGHT)
        self.timestep = 0

        obs = build_observation(self.state)
        info = {"seed": run_seed, "score": 0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "Call reset() before step()"
        state = self.state

        if int(action) == 1:
            hold_start(state)
        else:
            hold_end(state)

        score_before = state.progress.score
        for _ in range(self.frame_skip):
            notices = step(state)
            if any(n.type == NoticeType.GAME_OVER for n in notices):
                break

        # Reward: +1 per decision survived, +5 per obstacle passed, -1 on death
        passed = state.progress.score - score_before
        reward = (1.0 if state.active else -1.0) + 5.0 * passed

        self.timestep += 1
        terminated = not state.active
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = build_observation(state)
        info = {
            "score": state.progress.score,
            "frames": state.progress.frames,
            "speed": state.progress.speed,
            "wave_mode": state.progress.wave_mode,
            "hard_mode": state.progress.hard_mode,
            "death_cause": state.death_cause,
            "timestep": self.timestep,
            "seed": state.seed,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Geometry Flap - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))

        draw_scene(self.screen, self.state)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
