"""
Event Listener - WebSocket stream from the embed player bridge.

Messages look like {"type": "ready"}, {"type": "state_change", "data": 1}
or {"type": "error", "data": 150}. They are handed over raw; translating
them is the player adapter's job.
"""
import json
import time
import logging
import threading
from typing import Callable, Optional

import websocket

from ..config import RECONNECT_DELAY

logger = logging.getLogger(__name__)


class PlayerEventListener:
    """Background reader for bridge events."""

    def __init__(self, url: str, on_event: Callable[[dict], None], on_connect: Callable[[], None] = None):
        """
        Args:
            url: Bridge event stream, e.g. ws://localhost:8765/events
            on_event: Receives each parsed message (runs on the listener thread)
            on_connect: Called whenever the stream comes back after a drop
        """
        self.url = url
        self.on_event = on_event
        self.on_connect = on_connect
        self.ws: Optional[websocket.WebSocketApp] = None
        self.thread: Optional[threading.Thread] = None
        self.running = False
        self.connected = False
        self.connections = 0

    def start(self):
        self.running = True
        self.thread = threading.Thread(target=self._loop, daemon=True, name='player-events')
        self.thread.start()
        logger.info(f'Listening for player events on {self.url}')

    def stop(self):
        self.running = False
        if self.ws:
            self.ws.close()
        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout=RECONNECT_DELAY * 2)
        logger.info('Player event listener stopped')

    @property
    def dropped(self) -> bool:
        """True once a working connection has been lost and not yet restored."""
        return self.connections > 0 and not self.connected

    def _loop(self):
        while self.running:
            self._connect_once()
            if self.running:
                time.sleep(RECONNECT_DELAY)

    def _connect_once(self):
        """Open one connection and block until it drops."""
        self.ws = websocket.WebSocketApp(
            self.url,
            on_open=self._on_open,
            on_message=self._on_message,
            on_error=self._on_error,
            on_close=self._on_close,
        )
        try:
            self.ws.run_forever()
        except Exception as e:
            logger.warning(f'Event stream failed: {e}')
        self.connected = False

    # ============================================
    # SOCKET CALLBACKS
    # ============================================

    def _on_open(self, ws):
        self.connected = True
        self.connections += 1
        if self.connections == 1:
            logger.debug('Event stream connected')
            return
        logger.info(f'Event stream reconnected (connection #{self.connections})')
        if self.on_connect:
            self.on_connect()

    def _on_message(self, ws, message: str):
        try:
            data = json.loads(message)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f'Unreadable player event: {e}')
            return
        if not isinstance(data, dict) or 'type' not in data:
            logger.warning(f'Player event without type: {message[:100]}')
            return
        logger.debug(f'Player event: {data}')
        self.on_event(data)

    def _on_error(self, ws, error):
        # The loop reconnects on its own
        if error:
            logger.debug(f'Event stream error: {error}')

    def _on_close(self, ws, close_status, close_msg):
        self.connected = False
        if self.connections:
            logger.debug(f'Event stream closed ({close_status})')
