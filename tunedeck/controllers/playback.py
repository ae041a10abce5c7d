"""
Playback Controller - Keeps playlist position, play intent and the
external player in step.

Ownership model:
- the repository owns the playlist, the controller only holds an index
- the controller is the only writer of index, intent and volume
- the player is only observed through its state/error events

All methods run on the main loop thread; bridge events are queued and
handed in one at a time, so transitions never interleave.
"""
import logging
from typing import Optional, Tuple

from .adapter import PlayerAdapter
from .volume import VolumeController
from ..api.playlist import PlaylistRepository
from ..config import DEFAULT_VOLUME, ERROR_SKIP_CYCLES
from ..models import ControllerState, Intent, PlaybackState, PlayerState, Track

logger = logging.getLogger(__name__)


class PlaybackController:
    """Playlist player state machine."""

    def __init__(self, repository: PlaylistRepository, volume: int = DEFAULT_VOLUME,
                 error_skip_cycles: int = ERROR_SKIP_CYCLES):
        self.repository = repository
        self.volume_control = VolumeController(volume)
        self.error_skip_cycles = error_skip_cycles
        self.adapter: Optional[PlayerAdapter] = None

        self._current_index = -1
        self._intent = Intent.STOPPED
        self._player_state = PlayerState.UNSTARTED
        self._consecutive_errors = 0

    # ============================================
    # LIFECYCLE
    # ============================================

    def start(self):
        """Load the saved playlist. Nothing is selected until the user asks."""
        self.repository.load()
        self._current_index = -1
        self._intent = Intent.STOPPED
        logger.info(f'Playback controller started with {len(self.repository)} tracks')

    def attach(self, adapter: PlayerAdapter):
        """Take the player handle once it is ready and catch up with current state."""
        if self.adapter is not None and self.adapter is not adapter:
            logger.warning('Replacing existing player adapter')
        self.adapter = adapter
        adapter.bind(self.on_state_changed, self.on_error)
        if self._intent == Intent.PLAYING and self._current_index >= 0:
            logger.info(f'Player attached, resuming track {self._current_index}')
            self._load(self._current_index)
        else:
            self.volume_control.apply(adapter)
            logger.info('Player attached')

    def close(self):
        """Tear down the player handle."""
        if self.adapter is not None:
            self.adapter.destroy()
            self.adapter = None
            logger.info('Player adapter closed')

    # ============================================
    # READ STATE
    # ============================================

    @property
    def playlist(self) -> Tuple[Track, ...]:
        return self.repository.tracks

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_track(self) -> Optional[Track]:
        return self.repository.get(self._current_index)

    @property
    def intent(self) -> Intent:
        return self._intent

    @property
    def volume(self) -> int:
        return self.volume_control.level

    @property
    def player_state(self) -> PlayerState:
        """Last state reported by the player (may lag behind intent)."""
        return self._player_state

    @property
    def is_ready(self) -> bool:
        return self.adapter is not None

    @property
    def state(self) -> ControllerState:
        if self._current_index < 0:
            return ControllerState.IDLE
        if self._intent == Intent.PLAYING:
            return ControllerState.READY_PLAYING
        return ControllerState.READY_PAUSED

    def snapshot(self) -> PlaybackState:
        return PlaybackState(
            current_index=self._current_index,
            intent=self._intent,
            volume=self.volume,
            player_state=self._player_state,
        )

    # ============================================
    # USER INTENTS
    # ============================================

    def add_track(self, url: str) -> Track:
        """Append a track. The first track of an empty playlist starts playing."""
        was_empty = len(self.repository) == 0
        track = self.repository.add(url)
        self.repository.save()
        if was_empty:
            self.select_track(0)
        return track

    def remove_track(self, index: int) -> Track:
        """Remove a track, repairing the current index."""
        self.repository.check_index(index)
        removing_current = index == self._current_index
        if removing_current:
            self._stop()

        track = self.repository.remove_at(index)
        self.repository.save()

        if removing_current:
            if len(self.repository) == 0:
                self._current_index = -1
                logger.info('Playlist empty, idle')
            else:
                self._consecutive_errors = 0
                self._load(0)
        elif index < self._current_index:
            self._current_index -= 1
        return track

    def select_track(self, index: int):
        """Load and play the track at index."""
        self.repository.check_index(index)
        self._consecutive_errors = 0
        self._load(index)

    def toggle_play_pause(self):
        if self._current_index < 0:
            if len(self.repository) > 0:
                self.select_track(0)
            return

        if self._intent == Intent.STOPPED:
            self.select_track(self._current_index)
        elif self._intent == Intent.PLAYING:
            logger.info('Pausing...')
            if self.adapter:
                self.adapter.pause()
            self._intent = Intent.PAUSED
        else:
            logger.info('Resuming...')
            if self.adapter:
                self.adapter.play()
            self._intent = Intent.PLAYING

    def skip_next(self):
        if len(self.repository) == 0:
            return
        self._consecutive_errors = 0
        self._advance()

    def skip_previous(self):
        count = len(self.repository)
        if count == 0:
            return
        self._consecutive_errors = 0
        index = count - 1 if self._current_index <= 0 else self._current_index - 1
        self._load(index)

    def set_volume(self, level) -> int:
        return self.volume_control.set(level, self.adapter)

    def step_volume(self, direction: int) -> int:
        return self.volume_control.step(direction, self.adapter)

    # ============================================
    # PLAYER EVENTS
    # ============================================

    def on_state_changed(self, state: PlayerState):
        self._player_state = state
        if state == PlayerState.PLAYING:
            self._consecutive_errors = 0
        elif state == PlayerState.ENDED:
            if self._current_index < 0 or len(self.repository) == 0:
                return
            logger.info(f'Track {self._current_index} ended, advancing')
            self._advance()

    def on_error(self, code: int):
        logger.warning(f'Player error {code} on track {self._current_index}')
        if self._current_index < 0 or len(self.repository) == 0:
            return

        self._consecutive_errors += 1
        limit = self.error_skip_cycles * len(self.repository)
        if self._consecutive_errors > limit:
            logger.error(f'{self._consecutive_errors} player errors in a row, stopping playback')
            self._stop()
            return
        self._advance()

    # ============================================
    # INTERNAL HELPERS
    # ============================================

    def _advance(self):
        self._load((self._current_index + 1) % len(self.repository))

    def _load(self, index: int):
        track = self.repository.get(index)
        self._current_index = index
        self._intent = Intent.PLAYING
        logger.info(f'Playing track {index}: {track.title}')
        if self.adapter:
            self.adapter.load_and_cue(track.id)
        self.volume_control.apply(self.adapter)

    def _stop(self):
        if self.adapter:
            self.adapter.stop()
        self._intent = Intent.STOPPED
