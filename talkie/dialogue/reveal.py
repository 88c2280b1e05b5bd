"""
Glyph reveal timing.

Turns elapsed time into a whole number of glyphs to reveal, keeping the
fraction of time that was not enough for another glyph. Feeding that
leftover back in with the next delta makes a series of small ticks reveal
the same total as one big tick.

Fast-forward is just a larger rate; there is no separate code path.
"""

from __future__ import annotations

import math


def calc_glyphs_to_reveal(delta_secs: float, glyphs_per_sec: float) -> tuple[int, float]:
    """
    Given some amount of time, work out how many glyphs are due and how
    much of the time went unused.

    Args:
        delta_secs: Elapsed seconds, including any carried-over leftover
        glyphs_per_sec: Reveal rate, must be positive

    Returns:
        (glyph count, leftover seconds) with 0 <= leftover < 1/glyphs_per_sec

    Raises:
        ValueError: If the rate is not positive or the delta is negative
    """
    if not (glyphs_per_sec > 0 and math.isfinite(glyphs_per_sec)):
        raise ValueError(f"glyphs_per_sec must be positive, got {glyphs_per_sec}")
    if not (delta_secs >= 0 and math.isfinite(delta_secs)):
        raise ValueError(f"delta_secs must be non-negative, got {delta_secs}")

    count = math.floor(delta_secs * glyphs_per_sec)
    leftover = delta_secs - count / glyphs_per_sec
    return count, max(0.0, leftover)


def effective_rate(glyphs_per_sec: float, fast_forward: bool, speed_factor: float) -> float:
    """Reveal rate after applying the fast-forward multiplier."""
    return glyphs_per_sec * speed_factor if fast_forward else glyphs_per_sec
