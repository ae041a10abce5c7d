"""
Render Context - Bundles all state needed for rendering.
"""
from dataclasses import dataclass
from typing import Optional, List

from ..models import Track


@dataclass
class RenderContext:
    """All state needed to render a frame."""
    tracks: List[Track]
    current_index: int
    cursor_index: int
    is_playing: bool
    volume: int
    input_text: str
    player_ready: bool
    bridge_connected: bool = True
    status_message: Optional[str] = None
    status_is_error: bool = False

    @property
    def current_track(self) -> Optional[Track]:
        if 0 <= self.current_index < len(self.tracks):
            return self.tracks[self.current_index]
        return None
