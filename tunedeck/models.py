"""
Tunedeck Data Models - Core data structures.
"""
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Track:
    """One playlist entry. Never mutated once created."""
    id: str
    title: str
    source_url: str

    def to_dict(self) -> dict:
        return {'id': self.id, 'title': self.title, 'url': self.source_url}

    @classmethod
    def from_dict(cls, data: dict) -> 'Track':
        """Build a track from its persisted form. Raises ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError(f'Track entry is not an object: {data!r}')
        track_id = data.get('id')
        title = data.get('title')
        url = data.get('url')
        if not isinstance(track_id, str) or len(track_id) != 11:
            raise ValueError(f'Bad track id: {track_id!r}')
        if not isinstance(title, str) or not isinstance(url, str):
            raise ValueError(f'Bad track fields for {track_id}')
        return cls(id=track_id, title=title, source_url=url)


class Intent(Enum):
    """What the controller wants the player to be doing."""
    STOPPED = 'stopped'
    PLAYING = 'playing'
    PAUSED = 'paused'


class PlayerState(IntEnum):
    """State reported by the external player (numeric codes are the host's)."""
    UNSTARTED = -1
    ENDED = 0
    PLAYING = 1
    PAUSED = 2
    BUFFERING = 3
    CUED = 5

    @classmethod
    def from_code(cls, code) -> Optional['PlayerState']:
        """Translate a host state code, or None if unknown."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            logger.warning(f'Unknown player state code: {code!r}')
            return None


class ControllerState(Enum):
    """Observable controller state, derived from index and intent."""
    IDLE = 'idle'
    READY_PAUSED = 'ready_paused'
    READY_PLAYING = 'ready_playing'


@dataclass
class PlaybackState:
    """Snapshot of what the view needs to show about playback."""
    current_index: int = -1
    intent: Intent = Intent.STOPPED
    volume: int = 70
    player_state: PlayerState = PlayerState.UNSTARTED

    @property
    def is_playing(self) -> bool:
        return self.intent == Intent.PLAYING
