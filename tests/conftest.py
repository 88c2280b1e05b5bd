import os
import sys
import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch

# Ensure talkie modules can be imported
sys.path.append(os.getcwd())

SAMPLE_PATH = Path(__file__).parent.parent / "assets" / "dialogue" / "sample.toml"

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.quit'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.mixer'), \
         patch('pygame.joystick'), \
         patch('pygame.key'), \
         patch('pygame.mouse'), \
         patch('pygame.Surface'):

        # Setup specific mock behaviors if needed
        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)
        pygame.joystick.get_count.return_value = 0

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from talkie_engine.core.events import EventBus
    return EventBus()

@pytest.fixture
def config():
    """Default playback config."""
    from talkie_engine.core.config import TalkieConfig
    return TalkieConfig()

@pytest.fixture
def sample_dialogue():
    """The bundled sample script, parsed."""
    from talkie.dialogue.parser import load_dialogue
    return load_dialogue(SAMPLE_PATH)
