"""
Fixed timestep accumulator.

Frames arrive with variable durations; playback runs on a fixed tick so
reveal timing does not depend on frame rate. Leftover frame time stays in
the accumulator for the next frame.
"""

from __future__ import annotations

from typing import Iterator


class FixedTimestep:
    """
    Splits variable frame times into fixed ticks.

    Usage:
        stepper = FixedTimestep(0.125)
        for dt in stepper.advance(frame_time):
            machine.tick(dt, input_handler)
    """

    def __init__(
        self,
        step: float,
        max_steps: int = 5,
        max_frame_time: float = 0.25,
    ):
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        self.step = step
        self.max_steps = max_steps
        self.max_frame_time = max_frame_time
        self._accumulator = 0.0

    @property
    def accumulator(self) -> float:
        """Frame time not yet consumed by a tick."""
        return self._accumulator

    @property
    def alpha(self) -> float:
        """Interpolation factor (0-1) between the last tick and the next."""
        return self._accumulator / self.step

    def advance(self, frame_time: float) -> Iterator[float]:
        """
        Add a frame's duration and yield one fixed dt per due tick.

        Args:
            frame_time: Seconds since the previous frame
        """
        if frame_time < 0:
            raise ValueError(f"frame_time must not be negative, got {frame_time}")

        # Prevent spiral of death
        self._accumulator += min(frame_time, self.max_frame_time)

        steps = 0
        while self._accumulator >= self.step:
            self._accumulator -= self.step
            steps += 1
            yield self.step

            if steps >= self.max_steps:
                self._accumulator = 0.0
                break

    def reset(self) -> None:
        self._accumulator = 0.0
