"""
Tunedeck Application - Main application class.
"""
import time
import queue
import signal
import logging
from typing import Optional

import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FPS,
    PLAYER_URL, PLAYER_WS, STORE_PATH,
    MOCK_MODE, DEFAULT_VOLUME, STATUS_MESSAGE_DURATION,
)
from .api import EmbedPlayerAPI, NullEmbedPlayerAPI, PlaylistRepository
from .controllers import PlaybackController, PlayerFactory
from .handlers import PlayerEventListener, KeyboardHandler
from .storage import KeyValueStore
from .ui import Renderer, RenderContext

logger = logging.getLogger(__name__)


class Dashboard:
    """Main dashboard application (music panel)."""

    def __init__(self, fullscreen: bool = False):
        pygame.init()
        pygame.display.set_caption('Tunedeck')

        self.fullscreen = fullscreen
        self._init_display()
        self._init_components()

    def _init_display(self):
        flags = pygame.DOUBLEBUF
        if self.fullscreen:
            flags |= pygame.FULLSCREEN
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        self.clock = pygame.time.Clock()
        pygame.key.start_text_input()
        try:
            if not pygame.scrap.get_init():
                pygame.scrap.init()
        except pygame.error as e:
            logger.warning(f'Clipboard not available: {e}')
        logger.info(f'Display: {pygame.display.get_driver()} {SCREEN_WIDTH}x{SCREEN_HEIGHT}')

    def _init_components(self):
        """Initialize all application components."""
        self.mock_mode = MOCK_MODE

        # Playlist & playback
        self.store = KeyValueStore(STORE_PATH)
        self.repository = PlaylistRepository(self.store)
        self.controller = PlaybackController(self.repository, volume=DEFAULT_VOLUME)

        # External player (use NullAPI in mock mode)
        self.api = NullEmbedPlayerAPI() if self.mock_mode else EmbedPlayerAPI(PLAYER_URL)
        self.player_factory = PlayerFactory(self.api, on_created=self.controller.attach)

        # Bridge events arrive on the listener thread; the main loop drains them
        self.player_events: 'queue.Queue[dict]' = queue.Queue()
        self.events = PlayerEventListener(PLAYER_WS, self.player_events.put, self._on_ws_reconnect)

        # UI
        self.renderer = Renderer(self.screen)
        self.keyboard = KeyboardHandler(
            self.controller,
            on_message=self.show_message,
            on_quit=self.stop,
            on_fullscreen=self._toggle_fullscreen,
        )

        self.running = True
        self._status_message: Optional[str] = None
        self._status_is_error = False
        self._status_since = 0.0

        # Register signal handlers for graceful shutdown
        signal.signal(signal.SIGTERM, self._handle_signal)
        signal.signal(signal.SIGINT, self._handle_signal)

    def _handle_signal(self, signum, frame):
        """Handle SIGTERM/SIGINT for graceful shutdown."""
        sig_name = 'SIGTERM' if signum == signal.SIGTERM else 'SIGINT'
        logger.info(f'Received {sig_name}, shutting down...')
        self.running = False

    def _on_ws_reconnect(self):
        """Called on the listener thread when the bridge connection comes back."""
        self.player_factory.notify_reconnect()

    def show_message(self, text: str, is_error: bool = False):
        """Show a short status line at the bottom of the panel."""
        self._status_message = text
        self._status_is_error = is_error
        self._status_since = time.time()

    def stop(self):
        self.running = False

    def _toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        self._init_display()
        self.renderer.set_screen(self.screen)
        logger.info(f'Fullscreen: {self.fullscreen}')

    # ============================================
    # MAIN LOOP
    # ============================================

    def start(self):
        """Start the application."""
        logger.info('Starting Tunedeck...')
        self.controller.start()

        if self.mock_mode:
            logger.info('Running in MOCK MODE')
            self.player_factory.notify_ready()
        else:
            if not self.api.is_connected():
                logger.warning(f'Player bridge not reachable at {PLAYER_URL}, will keep retrying')
            self.events.start()

        logger.info('Entering main loop...')
        try:
            while self.running:
                self._handle_events()
                self._drain_player_events()
                self.renderer.draw(self._render_context())
                self.clock.tick(FPS)
        finally:
            self.shutdown()

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            else:
                self.keyboard.handle(event)

    def _drain_player_events(self):
        """Dispatch queued bridge messages, one fully before the next."""
        while True:
            try:
                message = self.player_events.get_nowait()
            except queue.Empty:
                return
            try:
                self.player_factory.dispatch(message)
            except Exception as e:
                logger.error(f'Error handling player event {message}: {e}', exc_info=True)

    def _render_context(self) -> RenderContext:
        if self._status_message and time.time() - self._status_since > STATUS_MESSAGE_DURATION:
            self._status_message = None

        return RenderContext(
            tracks=list(self.controller.playlist),
            current_index=self.controller.current_index,
            cursor_index=self.keyboard.cursor,
            is_playing=self.controller.snapshot().is_playing,
            volume=self.controller.volume,
            input_text=self.keyboard.text,
            player_ready=self.controller.is_ready,
            bridge_connected=self.mock_mode or not self.events.dropped,
            status_message=self._status_message,
            status_is_error=self._status_is_error,
        )

    def shutdown(self):
        """Tear down the player and listener."""
        logger.info('Shutting down...')
        try:
            self.controller.close()
        except Exception as e:
            logger.warning(f'Error closing player: {e}', exc_info=True)
        if not self.mock_mode:
            self.events.stop()
        pygame.quit()
