"""
Talkie engine - the host side of dialogue playback.

Provides:
- Logical input actions and pygame bindings
- Held-state input handling and press-edge tracking
- Event bus
- Fixed timestep tick loop
- Configuration
"""
