"""
Playback configuration.

Values can be given directly or read from the environment:

    TALKIE_SPEED         base reveal rate, glyphs per second
    TALKIE_SPEED_FACTOR  fast-forward multiplier while confirm is held
    TALKIE_TICK          fixed tick length in seconds
"""

from __future__ import annotations

import math
import os
from typing import Mapping

DEFAULT_GLYPHS_PER_SEC = 14.0
DEFAULT_SPEED_FACTOR = 10.0
DEFAULT_FIXED_TIMESTEP = 0.125

ENV_SPEED = "TALKIE_SPEED"
ENV_SPEED_FACTOR = "TALKIE_SPEED_FACTOR"
ENV_TICK = "TALKIE_TICK"


class TalkieConfig:
    """Configuration for dialogue playback and its host loop."""

    def __init__(
        self,
        glyphs_per_sec: float = DEFAULT_GLYPHS_PER_SEC,
        speed_factor: float = DEFAULT_SPEED_FACTOR,
        fixed_timestep: float = DEFAULT_FIXED_TIMESTEP,
        max_frame_skip: int = 5,
        max_frame_time: float | None = None,
    ):
        if not (math.isfinite(glyphs_per_sec) and glyphs_per_sec > 0):
            raise ValueError(f"glyphs_per_sec must be positive, got {glyphs_per_sec}")
        if not (math.isfinite(speed_factor) and speed_factor >= 1):
            raise ValueError(f"speed_factor must be >= 1, got {speed_factor}")
        if not (math.isfinite(fixed_timestep) and fixed_timestep > 0):
            raise ValueError(f"fixed_timestep must be positive, got {fixed_timestep}")
        if max_frame_skip < 1:
            raise ValueError(f"max_frame_skip must be >= 1, got {max_frame_skip}")
        if max_frame_time is None:
            max_frame_time = fixed_timestep * max_frame_skip
        elif max_frame_time < fixed_timestep:
            raise ValueError("max_frame_time must be at least one fixed_timestep")

        self.glyphs_per_sec = float(glyphs_per_sec)
        self.speed_factor = float(speed_factor)
        self.fixed_timestep = float(fixed_timestep)
        self.max_frame_skip = max_frame_skip
        self.max_frame_time = float(max_frame_time)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> TalkieConfig:
        """
        Build a config from TALKIE_* variables.

        Unset variables fall back to the defaults; keyword overrides win
        over both.

        Raises:
            ValueError: If a variable is set but is not a number
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        for name, key in (
            (ENV_SPEED, "glyphs_per_sec"),
            (ENV_SPEED_FACTOR, "speed_factor"),
            (ENV_TICK, "fixed_timestep"),
        ):
            raw = env.get(name)
            if raw is None or not raw.strip():
                continue
            try:
                kwargs[key] = float(raw)
            except ValueError:
                raise ValueError(f"invalid {name}: {raw!r}") from None
        kwargs.update(overrides)
        return cls(**kwargs)

    def __repr__(self) -> str:
        return (
            f"TalkieConfig(glyphs_per_sec={self.glyphs_per_sec}, "
            f"speed_factor={self.speed_factor}, "
            f"fixed_timestep={self.fixed_timestep})"
        )
