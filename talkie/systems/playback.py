"""
Playback system - drives a Dialogue through its passages one tick at a time.

States:
    LOADING   no document yet; ticks do nothing
    PLAYBACK  revealing the current passage, or advancing past a finished one
    PROMPT    passage finished, waiting for a fresh confirm press
    CHOICE    group finished with choices, waiting for up/down/confirm
    GOTO      a jump is pending; applied at the start of the next tick

Each tick the host passes the elapsed seconds and something that answers
is_held(action). The machine updates its press-edge trackers, runs the
current state, and returns a Billboard describing what to paint.

Pending jumps are resolved before the wrap/advance check, so a goto always
wins over the "loop back to the start" rule for the tick it applies on.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from talkie_engine.core.actions import Action
from talkie_engine.core.config import TalkieConfig
from talkie_engine.core.events import EventBus
from talkie_engine.input.handler import ActionSource, NOTHING_HELD
from talkie_engine.input.tracker import ActionTrackerSet
from talkie.components.playback import PlaybackCursor, ChoiceMenu
from talkie.dialogue.errors import UnknownLabelError
from talkie.dialogue.goto import GotoRequest, resolve_label
from talkie.dialogue.model import Dialogue, PassageGroup
from talkie.dialogue.reveal import calc_glyphs_to_reveal, effective_rate

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    """State of the playback machine."""
    LOADING = auto()
    PLAYBACK = auto()
    PROMPT = auto()
    CHOICE = auto()
    GOTO = auto()


class DialogueEvent(Enum):
    """Events published on the machine's EventBus."""
    STATE_CHANGED = auto()      # previous, current
    PASSAGE_STARTED = auto()    # group_index, passage_index
    PASSAGE_COMPLETED = auto()  # group_index, passage_index
    CHOICE_OPENED = auto()      # labels
    CHOICE_SELECTED = auto()    # index, label, goto
    GOTO_RESOLVED = auto()      # label, group_index
    DIALOGUE_WRAPPED = auto()   # playback looped back to the first group


@dataclass(frozen=True)
class Billboard:
    """
    Everything a host needs to paint one frame.

    Attributes:
        state: Machine state after the tick
        speaker_name: Speaker of the passage on screen ("" if none)
        speaker_visible: Whether to show the speaker tab at all
        visible_text: Revealed prefix of the current passage
        is_choice_menu_active: Whether a choice menu is open
        choice_labels: Labels of the open menu, in order
        selected_choice_index: Highlighted option of the open menu
        awaiting_confirm: Whether to show the "press to continue" cursor
    """
    state: PlaybackState = PlaybackState.LOADING
    speaker_name: str = ""
    speaker_visible: bool = False
    visible_text: str = ""
    is_choice_menu_active: bool = False
    choice_labels: tuple[str, ...] = ()
    selected_choice_index: int = 0
    awaiting_confirm: bool = False


class PlaybackMachine:
    """
    The dialogue playback state machine.

    Owns the PlaybackCursor and the press-edge trackers; nothing else
    writes them. The Dialogue is only read.

    Usage:
        machine = PlaybackMachine(TalkieConfig.from_env())
        machine.load(load_dialogue("intro.toml"))

        # once per fixed tick
        billboard = machine.tick(dt, input_handler)
    """

    def __init__(
        self,
        config: TalkieConfig | None = None,
        event_bus: EventBus | None = None,
        dialogue: Dialogue | None = None,
    ):
        self.config = config or TalkieConfig()
        self.event_bus = event_bus or EventBus()

        self.cursor = PlaybackCursor(glyphs_per_sec=self.config.glyphs_per_sec)
        self._trackers = ActionTrackerSet(Action)

        self._state = PlaybackState.LOADING
        self._dialogue: Optional[Dialogue] = None
        self._goto: Optional[GotoRequest] = None
        self._choice_menu: Optional[ChoiceMenu] = None

        # What is currently on screen
        self._speaker: Optional[str] = None
        self._visible_text = ""
        self._billboard = Billboard()

        if dialogue is not None:
            self.load(dialogue)

    # Properties

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def dialogue(self) -> Optional[Dialogue]:
        return self._dialogue

    @property
    def choice_menu(self) -> Optional[ChoiceMenu]:
        """The open menu while in CHOICE, else None."""
        return self._choice_menu

    @property
    def pending_goto(self) -> Optional[GotoRequest]:
        return self._goto

    @property
    def trackers(self) -> ActionTrackerSet:
        return self._trackers

    @property
    def billboard(self) -> Billboard:
        """The billboard produced by the most recent tick or transition."""
        return self._billboard

    # Control

    def load(self, dialogue: Dialogue) -> None:
        """
        Start playback of a document from its first passage.

        This is the LOADING -> PLAYBACK transition; calling it again
        restarts with the new document.
        """
        self._dialogue = dialogue
        self.cursor.move_to(0, 0)
        self.cursor.fast_forward = False
        self._goto = None
        self._choice_menu = None
        self._speaker = None
        self._visible_text = ""
        self._trackers.reset()

        logger.info(
            "Dialogue loaded: %d groups, %d passages", len(dialogue), dialogue.passage_count
        )
        self._set_state(PlaybackState.PLAYBACK)
        self._billboard = self._build_billboard()

    def goto(self, label: str | None) -> None:
        """
        Queue a jump to the group with the given id (None: continue on).

        The jump is applied on the next tick; an unknown label is reported
        there.
        """
        if self._dialogue is None:
            raise RuntimeError("cannot goto before a dialogue is loaded")

        logger.debug("goto requested: %s", label if label is not None else "next")
        self._goto = GotoRequest(label)
        self._choice_menu = None
        self._set_state(PlaybackState.GOTO)
        self._billboard = self._build_billboard()

    def tick(self, dt: float, actions: ActionSource = NOTHING_HELD) -> Billboard:
        """
        Advance the machine by one tick.

        Args:
            dt: Seconds elapsed since the previous tick
            actions: Current held state of the logical actions

        Returns:
            The billboard to paint

        Raises:
            ValueError: If dt is negative or not finite
            UnknownLabelError: If a pending goto names no group. The
                request stays pending and the machine stays in GOTO.
        """
        if not (dt >= 0 and math.isfinite(dt)):
            raise ValueError(f"dt must be non-negative, got {dt}")

        # Exactly once per tick, whatever the state
        self._trackers.update(actions)

        state = self._state
        if state is PlaybackState.PLAYBACK:
            self._playback(dt)
        elif state is PlaybackState.PROMPT:
            self._prompt()
        elif state is PlaybackState.CHOICE:
            self._choice()
        elif state is PlaybackState.GOTO:
            self._apply_goto()
            self._set_state(PlaybackState.PLAYBACK)
            self._playback(dt)

        self._billboard = self._build_billboard()
        return self._billboard

    # States

    def _playback(self, dt: float) -> None:
        if self._goto is not None:
            self._apply_goto()

        cursor = self.cursor
        group, text = self._current()

        if cursor.revealed_glyph_count < len(text):
            if cursor.revealed_glyph_count == 0 and cursor.carryover_seconds is None:
                self.event_bus.publish(
                    DialogueEvent.PASSAGE_STARTED,
                    group_index=cursor.passage_group_index,
                    passage_index=cursor.passage_index,
                )

            cursor.fast_forward = self._trackers.pressed(Action.CONFIRM)
            since = (cursor.carryover_seconds or 0.0) + dt
            rate = effective_rate(
                cursor.glyphs_per_sec, cursor.fast_forward, self.config.speed_factor
            )
            count, leftover = calc_glyphs_to_reveal(since, rate)

            cursor.revealed_glyph_count = min(len(text), cursor.revealed_glyph_count + count)
            cursor.carryover_seconds = leftover

            self._speaker = group.speaker
            self._visible_text = text[:cursor.revealed_glyph_count]

            if cursor.revealed_glyph_count == len(text):
                self.event_bus.publish(
                    DialogueEvent.PASSAGE_COMPLETED,
                    group_index=cursor.passage_group_index,
                    passage_index=cursor.passage_index,
                )
        else:
            self._advance(group)

    def _advance(self, group: PassageGroup) -> None:
        """Move past a fully revealed passage and stop for the player."""
        cursor = self.cursor
        last_passage = cursor.passage_index == group.last_passage_index
        last_group = cursor.passage_group_index == self._dialogue.last_group_index

        if last_passage and last_group:
            logger.debug("end of dialogue, back to the start")
            cursor.move_to(0, 0)
            self.event_bus.publish(DialogueEvent.DIALOGUE_WRAPPED)
        elif not last_passage:
            cursor.move_to(cursor.passage_group_index, cursor.passage_index + 1)
        else:
            cursor.move_to(cursor.passage_group_index + 1, 0)

        if last_passage and group.has_choices:
            self._choice_menu = ChoiceMenu(choices=group.choices)
            self._set_state(PlaybackState.CHOICE)
            self.event_bus.publish(
                DialogueEvent.CHOICE_OPENED, labels=self._choice_menu.labels
            )
        else:
            self._set_state(PlaybackState.PROMPT)

    def _prompt(self) -> None:
        if self._trackers.press_begin(Action.CONFIRM):
            self._set_state(PlaybackState.PLAYBACK)

    def _choice(self) -> None:
        menu = self._choice_menu
        assert menu is not None, "CHOICE state without a menu"

        if self._trackers.press_begin(Action.CONFIRM):
            choice = menu.selected
            self.event_bus.publish(
                DialogueEvent.CHOICE_SELECTED,
                index=menu.selected_index,
                label=choice.label,
                goto=choice.goto,
            )
            self._goto = GotoRequest(choice.goto)
            self._choice_menu = None
            self._set_state(PlaybackState.GOTO)
            return

        if self._trackers.press_begin(Action.UP):
            menu.select_prev()
        if self._trackers.press_begin(Action.DOWN):
            menu.select_next()

    # Helpers

    def _apply_goto(self) -> None:
        """Consume the pending goto, moving the cursor if it names a group."""
        request = self._goto
        if request is None:
            return

        if not request.is_jump:
            logger.debug("goto=next")
            self.cursor.carryover_seconds = None
        else:
            try:
                index = resolve_label(self._dialogue, request.label)
            except UnknownLabelError:
                logger.error("goto to unknown passage group: %r", request.label)
                raise
            logger.debug("goto=%s (group %d)", request.label, index)
            self.cursor.move_to(index, 0)
            self.event_bus.publish(
                DialogueEvent.GOTO_RESOLVED, label=request.label, group_index=index
            )

        self._goto = None

    def _current(self) -> tuple[PassageGroup, str]:
        cursor = self.cursor
        groups = self._dialogue.passage_groups
        assert cursor.passage_group_index < len(groups), "group index out of range"
        group = groups[cursor.passage_group_index]
        assert cursor.passage_index < len(group.passages), "passage index out of range"
        return group, group.passages[cursor.passage_index]

    def _set_state(self, new_state: PlaybackState) -> None:
        previous = self._state
        if new_state is previous:
            return
        self._state = new_state
        logger.debug("%s -> %s", previous.name, new_state.name)
        self.event_bus.publish(
            DialogueEvent.STATE_CHANGED, previous=previous, current=new_state
        )

    def _build_billboard(self) -> Billboard:
        menu = self._choice_menu if self._state is PlaybackState.CHOICE else None
        speaker = self._speaker or ""
        return Billboard(
            state=self._state,
            speaker_name=speaker,
            speaker_visible=bool(speaker),
            visible_text=self._visible_text,
            is_choice_menu_active=menu is not None,
            choice_labels=menu.labels if menu else (),
            selected_choice_index=menu.selected_index if menu else 0,
            awaiting_confirm=self._state is PlaybackState.PROMPT,
        )
