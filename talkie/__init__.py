"""
Talkie - visual-novel style dialogue presentation.

Provides:
- Dialogue (script model, parsing, reveal timing, goto resolution)
- Components (play-head cursor, choice menu; pydantic models)
- Systems (the playback state machine and its Billboard output)
"""
