import sys
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from talkie_engine.core.actions import Action
from talkie_engine.core.config import TalkieConfig
from talkie_engine.core.timestep import FixedTimestep
from talkie_engine.input.handler import ActionSnapshot, NOTHING_HELD
from talkie.dialogue import DialogueError, load_dialogue
from talkie.systems import PlaybackMachine, DialogueEvent


def simulate(dialogue, config, seconds, logger):
    """Play the dialogue headlessly, pressing confirm on every other tick."""
    machine = PlaybackMachine(config)
    machine.event_bus.subscribe(
        DialogueEvent.PASSAGE_COMPLETED,
        lambda e: logger.info(
            f"passage ({e['group_index']}, {e['passage_index']}): "
            f"{dialogue[e['group_index']].passages[e['passage_index']]!r}"
        ),
    )
    machine.event_bus.subscribe(
        DialogueEvent.CHOICE_OPENED,
        lambda e: logger.info(f"choices: {list(e['labels'])}"),
    )
    machine.load(dialogue)

    timestep = FixedTimestep(config.fixed_timestep, config.max_frame_skip, config.max_frame_time)
    frame_time = 1.0 / 60
    elapsed = 0.0
    ticks = 0
    while elapsed < seconds:
        for dt in timestep.advance(frame_time):
            actions = ActionSnapshot.of(Action.CONFIRM) if ticks % 2 else NOTHING_HELD
            machine.tick(dt, actions)
            ticks += 1
        elapsed += frame_time

    logger.info(f"Simulated {ticks} ticks, ended in {machine.state.name}")


def main():
    parser = argparse.ArgumentParser(description="Check a dialogue script")
    parser.add_argument("path", nargs="?", default="assets/dialogue/sample.toml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument(
        "--simulate", type=float, metavar="SECONDS", default=0.0,
        help="Play the script headlessly for this long",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    logger = logging.getLogger("DialogueVerification")

    try:
        config = TalkieConfig.from_env()

        logger.info(f"Loading {args.path}...")
        dialogue = load_dialogue(args.path)

        for index, group in enumerate(dialogue):
            logger.info(
                f"group {index}: id={group.id} speaker={group.speaker} "
                f"passages={len(group.passages)} "
                f"choices={len(group.choices) if group.choices else 0}"
            )

        missing = dialogue.unresolved_gotos()
        for label in missing:
            logger.warning(f"choice jumps to unknown group id {label!r}")

        if args.simulate > 0:
            simulate(dialogue, config, args.simulate, logger)

        if missing:
            logger.error("VERIFICATION FAILED: unresolved gotos")
            sys.exit(1)

        logger.info("VERIFICATION SUCCESSFUL: dialogue loaded and validated.")

    except (DialogueError, ValueError) as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
