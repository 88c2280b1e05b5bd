"""
Edge detection for logical actions.

An ActionTracker remembers a single bit (whether the action was held on
the previous tick) and turns the current held state into press edges:

    prev  now    press_begin  pressed  press_end
    no    yes    yes          yes      no
    yes   yes    no           yes      no
    yes   no     no           no       yes
    no    no     no           no       no

update() must be called exactly once per tick per action. Calling it more
or less often desynchronizes edges from the real input; the tracker has
no way to notice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from talkie_engine.core.actions import Action
from talkie_engine.input.handler import ActionSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeEvents:
    """Edges for one action on one tick."""
    press_begin: bool = False
    pressed: bool = False
    press_end: bool = False


NO_EDGES = EdgeEvents()


class ActionTracker:
    """Edge detector for a single action."""

    def __init__(self, action: Action):
        self.action = action
        self._was_held = False
        self._edges = NO_EDGES

    @property
    def edges(self) -> EdgeEvents:
        """Edges computed by the most recent update()."""
        return self._edges

    @property
    def press_begin(self) -> bool:
        return self._edges.press_begin

    @property
    def pressed(self) -> bool:
        return self._edges.pressed

    @property
    def press_end(self) -> bool:
        return self._edges.press_end

    def update(self, is_held: bool) -> EdgeEvents:
        """Feed this tick's held state and return the resulting edges."""
        was_held = self._was_held
        self._was_held = is_held

        if is_held:
            self._edges = EdgeEvents(press_begin=not was_held, pressed=True)
            if not was_held:
                logger.debug("%s=down", self.action.name.lower())
        elif was_held:
            self._edges = EdgeEvents(press_end=True)
            logger.debug("%s=up", self.action.name.lower())
        else:
            self._edges = NO_EDGES
        return self._edges

    def reset(self) -> None:
        self._was_held = False
        self._edges = NO_EDGES


class ActionTrackerSet:
    """
    One tracker per action, updated together from an ActionSource.

    Usage:
        trackers = ActionTrackerSet(Action)
        trackers.update(input_handler)
        if trackers.press_begin(Action.CONFIRM):
            ...
    """

    def __init__(self, actions: Iterable[Action] = Action):
        self._trackers = {action: ActionTracker(action) for action in actions}

    def __contains__(self, action: Action) -> bool:
        return action in self._trackers

    def __getitem__(self, action: Action) -> ActionTracker:
        return self._trackers[action]

    def update(self, source: ActionSource) -> dict[Action, EdgeEvents]:
        """Update every tracker once from the source's current held state."""
        return {
            action: tracker.update(bool(source.is_held(action)))
            for action, tracker in self._trackers.items()
        }

    def edges(self, action: Action) -> EdgeEvents:
        return self._trackers[action].edges

    def press_begin(self, action: Action) -> bool:
        return self._trackers[action].press_begin

    def pressed(self, action: Action) -> bool:
        return self._trackers[action].pressed

    def press_end(self, action: Action) -> bool:
        return self._trackers[action].press_end

    def reset(self) -> None:
        for tracker in self._trackers.values():
            tracker.reset()
