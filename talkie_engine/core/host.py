"""
Pygame host loop for a playback machine.

The Host owns the window, pumps pygame events into an InputHandler, runs
the machine on a fixed tick, and hands the latest Billboard to a render
callback once per frame. Painting is entirely up to that callback.

Usage:
    def render(screen, billboard):
        ...  # draw billboard.speaker_name, billboard.visible_text, ...

    host = Host(machine, render, TalkieConfig.from_env())
    host.run()
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

import pygame

from talkie_engine.core.config import TalkieConfig
from talkie_engine.core.timestep import FixedTimestep
from talkie_engine.input.handler import InputHandler

if TYPE_CHECKING:
    from talkie.systems.playback import PlaybackMachine, Billboard

logger = logging.getLogger(__name__)

RenderCallback = Callable[["pygame.Surface", "Billboard"], None]


class Host:
    """Runs a PlaybackMachine inside a pygame window."""

    def __init__(
        self,
        machine: PlaybackMachine,
        render: RenderCallback,
        config: TalkieConfig | None = None,
        title: str = "Talkie",
        size: tuple[int, int] = (800, 600),
        target_fps: int = 60,
    ):
        self.machine = machine
        self.render = render
        self.config = config or TalkieConfig()
        self.title = title
        self.size = size
        self.target_fps = target_fps

        self.input = InputHandler()
        self.timestep = FixedTimestep(
            self.config.fixed_timestep,
            max_steps=self.config.max_frame_skip,
            max_frame_time=self.config.max_frame_time,
        )

        self.screen = None
        self._clock = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Create the window."""
        pygame.init()
        self.screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption(self.title)
        self._clock = pygame.time.Clock()
        self._running = True
        logger.info("Host started (%s, tick=%ss)", self.title, self.config.fixed_timestep)

    def quit(self) -> None:
        """Request shutdown at the end of the current frame."""
        self._running = False

    def step(self, frame_time: float) -> Billboard:
        """
        Run one frame: events, due ticks, render.

        Args:
            frame_time: Seconds since the previous frame

        Returns:
            The billboard that was rendered
        """
        self._process_events()

        for dt in self.timestep.advance(frame_time):
            self.machine.tick(dt, self.input)

        billboard = self.machine.billboard
        self.render(self.screen, billboard)
        pygame.display.flip()
        return billboard

    def run(self) -> None:
        """Start the window and loop until quit() or the window closes."""
        self.start()
        current = time.perf_counter()
        try:
            while self._running:
                now = time.perf_counter()
                frame_time = now - current
                current = now

                self.step(frame_time)
                self._clock.tick(self.target_fps)
        finally:
            self._shutdown()

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.WINDOWFOCUSLOST:
                # Keys released while unfocused never report KEYUP
                self.input.release_all()
            else:
                self.input.process_event(event)

    def _shutdown(self) -> None:
        logger.info("Host stopped")
        pygame.quit()
