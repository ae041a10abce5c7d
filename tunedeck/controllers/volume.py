"""
Volume Controller - Holds the volume level and pushes it to the player.

The level is kept even while no player exists; it is applied as soon as
one is attached and again on every track load.
"""
import logging
from typing import Optional

from ..config import DEFAULT_VOLUME, VOLUME_STEP

logger = logging.getLogger(__name__)

MIN_VOLUME = 0
MAX_VOLUME = 100


def clamp_volume(level) -> int:
    return max(MIN_VOLUME, min(MAX_VOLUME, int(level)))


class VolumeController:
    """Volume level (0-100) with optional live player."""

    def __init__(self, level: int = DEFAULT_VOLUME):
        self.level = clamp_volume(level)

    def set(self, level, adapter=None) -> int:
        """Set the level, applying it now if a player exists. Returns the clamped level."""
        new_level = clamp_volume(level)
        if new_level != level:
            logger.debug(f'Volume {level} clamped to {new_level}')
        self.level = new_level
        self.apply(adapter)
        return self.level

    def step(self, direction: int, adapter=None) -> int:
        """Move one VOLUME_STEP up (direction > 0) or down."""
        delta = VOLUME_STEP if direction > 0 else -VOLUME_STEP
        return self.set(self.level + delta, adapter)

    def apply(self, adapter: Optional[object]):
        if adapter is not None:
            adapter.set_volume(self.level)
