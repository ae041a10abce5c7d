"""
Playlist Repository - The ordered track list and its persistence.

Handles:
- Loading the playlist from the key-value store
- Appending tracks from pasted URLs
- Removing tracks by position
- Saving after every change
"""
import logging
from typing import List, Optional, Tuple

from .youtube import extract_video_id, placeholder_title
from ..config import PLAYLIST_KEY
from ..errors import InvalidUrlError, IndexOutOfRangeError
from ..models import Track
from ..storage import KeyValueStore

logger = logging.getLogger(__name__)


class PlaylistRepository:
    """
    Sole owner of the playlist.

    Duplicates are allowed; each entry is distinct by position.
    """

    def __init__(self, store: KeyValueStore, key: str = PLAYLIST_KEY):
        self.store = store
        self.key = key
        self._tracks: List[Track] = []

    # ============================================
    # LOADING & SAVING
    # ============================================

    def load(self) -> List[Track]:
        """Load the persisted playlist. Anything unreadable becomes empty."""
        raw = self.store.get(self.key)
        tracks: List[Track] = []
        if raw is None:
            logger.info('No saved playlist, starting empty')
        elif not isinstance(raw, list):
            logger.warning(f'Saved playlist is not a list ({type(raw).__name__}), starting empty')
        else:
            for entry in raw:
                try:
                    tracks.append(Track.from_dict(entry))
                except ValueError as e:
                    logger.warning(f'Skipping malformed playlist entry: {e}')
            logger.info(f'Loaded {len(tracks)} tracks')
        self._tracks = tracks
        return list(self._tracks)

    def save(self) -> bool:
        """Persist the playlist. Failures are logged, never raised."""
        ok = self.store.set(self.key, [t.to_dict() for t in self._tracks])
        if not ok:
            logger.warning('Playlist not saved, keeping in-memory copy')
        return ok

    # ============================================
    # MUTATIONS
    # ============================================

    def add(self, url: str) -> Track:
        """Append a track for url. Raises InvalidUrlError if no video id is found."""
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidUrlError(url)
        track = Track(id=video_id, title=placeholder_title(video_id), source_url=url)
        self._tracks.append(track)
        logger.info(f'Added track {video_id} at position {len(self._tracks) - 1}')
        return track

    def remove_at(self, index: int) -> Track:
        """Remove and return the track at index."""
        self.check_index(index)
        track = self._tracks.pop(index)
        logger.info(f'Removed track {track.id} from position {index}')
        return track

    # ============================================
    # ACCESS
    # ============================================

    @property
    def tracks(self) -> Tuple[Track, ...]:
        """Read-only snapshot of the playlist."""
        return tuple(self._tracks)

    def get(self, index: int) -> Optional[Track]:
        if 0 <= index < len(self._tracks):
            return self._tracks[index]
        return None

    def __len__(self) -> int:
        return len(self._tracks)

    def check_index(self, index: int):
        """Raise IndexOutOfRangeError unless index is a valid position."""
        if not isinstance(index, int) or not 0 <= index < len(self._tracks):
            raise IndexOutOfRangeError(index, len(self._tracks))
