"""
Keyboard Handler - Turns pygame key/text events into player intents.

Keys:
    typing        Edit the URL field
    Enter         Add the typed URL (or play the highlighted track)
    Space         Play/Pause (when the URL field is empty)
    ← →           Previous / next track
    ↑ ↓           Move the playlist highlight
    Delete        Remove the highlighted track
    PgUp PgDn     Volume up / down
    Ctrl+V        Paste into the URL field
    F11           Toggle fullscreen
    Esc           Quit
"""
import logging
from typing import Callable, Optional

import pygame

from ..errors import TunedeckError

logger = logging.getLogger(__name__)


class KeyboardHandler:
    """Keyboard input for the player panel."""

    def __init__(self, controller,
                 on_message: Callable[[str, bool], None],
                 on_quit: Callable[[], None] = None,
                 on_fullscreen: Callable[[], None] = None):
        """
        Args:
            controller: PlaybackController receiving the intents
            on_message: Shows (text, is_error) to the user
            on_quit: Called on Esc
            on_fullscreen: Called on F11
        """
        self.controller = controller
        self.on_message = on_message
        self.on_quit = on_quit
        self.on_fullscreen = on_fullscreen
        self.text = ''
        self.cursor = 0

    def handle(self, event) -> bool:
        """Handle one pygame event. Returns True if it was used."""
        if event.type == pygame.TEXTINPUT:
            return self._on_text(event.text)
        if event.type == pygame.KEYDOWN:
            return self._on_key(event.key, getattr(event, 'mod', 0))
        return False

    def _on_text(self, text: str) -> bool:
        # Leading whitespace is the Space shortcut, not input
        if not self.text and text.isspace():
            return False
        self.text += text
        return True

    def _on_key(self, key: int, mod: int) -> bool:
        if key == pygame.K_ESCAPE:
            if self.on_quit:
                self.on_quit()
        elif key == pygame.K_F11:
            if self.on_fullscreen:
                self.on_fullscreen()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._submit()
        elif key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif key == pygame.K_v and mod & pygame.KMOD_CTRL:
            self._paste()
        elif key == pygame.K_SPACE and not self.text:
            self._run(self.controller.toggle_play_pause)
        elif key == pygame.K_RIGHT and not self.text:
            self._run(self.controller.skip_next)
        elif key == pygame.K_LEFT and not self.text:
            self._run(self.controller.skip_previous)
        elif key == pygame.K_UP:
            self.move_cursor(-1)
        elif key == pygame.K_DOWN:
            self.move_cursor(1)
        elif key == pygame.K_DELETE:
            self._remove_highlighted()
        elif key == pygame.K_PAGEUP:
            self.controller.step_volume(1)
        elif key == pygame.K_PAGEDOWN:
            self.controller.step_volume(-1)
        else:
            return False
        return True

    def move_cursor(self, delta: int):
        count = len(self.controller.playlist)
        if count == 0:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor + delta, count - 1))

    def _clamp_cursor(self):
        self.move_cursor(0)

    def _submit(self):
        url = self.text.strip()
        if not url:
            if self.controller.playlist:
                self._run(self.controller.select_track, self.cursor)
            return
        track = self._run(self.controller.add_track, url)
        if track is not None:
            self.text = ''
            self.on_message(f'Added {track.title}', False)

    def _remove_highlighted(self):
        if not self.controller.playlist:
            return
        track = self._run(self.controller.remove_track, self.cursor)
        self._clamp_cursor()
        if track is not None:
            self.on_message(f'Removed {track.title}', False)

    def _paste(self):
        try:
            raw = pygame.scrap.get(pygame.SCRAP_TEXT)
        except pygame.error as e:
            logger.debug(f'Clipboard unavailable: {e}')
            return
        if not raw:
            return
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8', errors='ignore')
        clip = raw.replace('\x00', '').strip()
        if clip:
            self.text += clip

    def _run(self, fn, *args) -> Optional[object]:
        """Call an intent, showing user-facing errors instead of raising."""
        try:
            return fn(*args)
        except TunedeckError as e:
            logger.info(f'{fn.__name__} rejected: {e}')
            self.on_message(str(e), True)
            return None
