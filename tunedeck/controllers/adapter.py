"""
Player Adapter - Narrow control surface over the external embed player.

The external player becomes ready at some unpredictable point after the
bridge loads its script. PlayerFactory waits for that one readiness
message, builds the single adapter and hands it over. Until then the
controller simply has no adapter.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..config import PLAYER_CONTAINER, PLAYER_VARS
from ..models import PlayerState

logger = logging.getLogger(__name__)

StateCallback = Callable[[PlayerState], None]
ErrorCallback = Callable[[int], None]


class PlayerAdapter(ABC):
    """Capabilities the playback controller relies on."""

    def __init__(self):
        self._on_state_changed: Optional[StateCallback] = None
        self._on_error: Optional[ErrorCallback] = None

    def bind(self, on_state_changed: StateCallback, on_error: ErrorCallback):
        """Route inbound player events to the given callbacks."""
        self._on_state_changed = on_state_changed
        self._on_error = on_error

    def emit_state(self, state: PlayerState):
        if self._on_state_changed:
            self._on_state_changed(state)

    def emit_error(self, code: int):
        if self._on_error:
            self._on_error(code)

    @abstractmethod
    def load_and_cue(self, video_id: str): ...

    @abstractmethod
    def play(self): ...

    @abstractmethod
    def pause(self): ...

    @abstractmethod
    def stop(self): ...

    @abstractmethod
    def set_volume(self, level: int): ...

    @abstractmethod
    def current_state(self) -> PlayerState: ...

    @abstractmethod
    def destroy(self): ...


class EmbedPlayerAdapter(PlayerAdapter):
    """Adapter over EmbedPlayerAPI (or NullEmbedPlayerAPI in mock mode)."""

    def __init__(self, api):
        super().__init__()
        self.api = api
        self._last_state = PlayerState.UNSTARTED

    def load_and_cue(self, video_id: str):
        logger.debug(f'Player load {video_id}')
        self.api.load_video(video_id)

    def play(self):
        logger.debug('Player play')
        self.api.play()

    def pause(self):
        logger.debug('Player pause')
        self.api.pause()

    def stop(self):
        logger.debug('Player stop')
        self.api.stop()

    def set_volume(self, level: int):
        logger.debug(f'Player volume {level}%')
        self.api.set_volume(level)

    def current_state(self) -> PlayerState:
        """Ask the player; fall back to the last state it reported."""
        code = self.api.state()
        if code is None:
            return self._last_state
        return PlayerState.from_code(code) or self._last_state

    def destroy(self):
        logger.info('Destroying player')
        self.api.destroy()

    def handle_message(self, message: dict):
        """Translate one raw bridge message into an adapter event."""
        kind = message.get('type')
        if kind == 'state_change':
            state = PlayerState.from_code(message.get('data'))
            if state is None:
                return
            self._last_state = state
            self.emit_state(state)
        elif kind == 'error':
            code = message.get('data')
            try:
                code = int(code)
            except (TypeError, ValueError):
                code = -1
            self.emit_error(code)
        else:
            logger.debug(f'Ignoring player message: {kind}')


class PlayerFactory:
    """
    Owns the one-time wiring between the bridge and the controller.

    The first 'ready' message creates the player and the adapter and
    passes the adapter to on_created. Later 'ready' messages are ignored.
    """

    def __init__(self, api, on_created: Callable[[PlayerAdapter], None],
                 container: str = PLAYER_CONTAINER, player_vars: dict = None):
        self.api = api
        self.on_created = on_created
        self.container = container
        self.player_vars = dict(PLAYER_VARS if player_vars is None else player_vars)
        self.adapter: Optional[EmbedPlayerAdapter] = None

    @property
    def is_ready(self) -> bool:
        return self.adapter is not None

    def notify_ready(self) -> Optional[EmbedPlayerAdapter]:
        """Readiness signal. Builds the adapter on first call only."""
        if self.adapter is not None:
            logger.debug('Player already created, ignoring ready signal')
            return self.adapter
        if not self.api.create(self.container, self.player_vars):
            logger.error('Player creation failed, waiting for next ready signal')
            return None
        self.adapter = EmbedPlayerAdapter(self.api)
        logger.info('Player ready')
        self.on_created(self.adapter)
        return self.adapter

    def notify_reconnect(self) -> bool:
        """Event stream came back. Returns True if the existing player may be stale."""
        if self.adapter is None:
            logger.info('Player bridge reconnected, waiting for ready signal')
            return False
        logger.warning('Player bridge reconnected; the player binding may be stale '
                       'and commands can fail until restart')
        return True

    def dispatch(self, message: dict):
        """Handle one message from the bridge event stream."""
        if message.get('type') == 'ready':
            self.notify_ready()
        elif self.adapter is not None:
            self.adapter.handle_message(message)
        else:
            logger.debug(f'Player not ready, dropping {message.get("type")} event')
