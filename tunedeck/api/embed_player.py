"""
Embed Player API Client - REST API of the embed player bridge.

The bridge is a small page hosting the video embed player. It accepts
commands over HTTP and reports player events over a WebSocket
(see handlers/events.py).
"""
import logging
from typing import Optional

import requests

from ..config import COMMAND_TIMEOUT, CREATE_TIMEOUT

logger = logging.getLogger(__name__)


class EmbedPlayerAPI:
    """Direct REST API client for the embed player bridge."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'

    def _post(self, path: str, body: Optional[dict] = None, timeout: float = COMMAND_TIMEOUT) -> bool:
        try:
            resp = self.session.post(f'{self.base_url}{path}', json=body, timeout=timeout)
            logger.debug(f'POST {path}: {resp.status_code}')
            if not resp.ok:
                logger.warning(f'{path} failed: {resp.status_code} {resp.text}')
            return resp.ok
        except requests.RequestException as e:
            logger.error(f'{path} error: {e}', exc_info=True)
            return False

    def create(self, container: str, player_vars: dict) -> bool:
        """Create the player inside the given container element."""
        logger.info(f'API create player in #{container}')
        return self._post(
            '/player',
            {'container': container, 'playerVars': player_vars},
            timeout=CREATE_TIMEOUT,
        )

    def load_video(self, video_id: str) -> bool:
        """Load a video by id (the player starts it once buffered)."""
        return self._post('/player/load', {'videoId': video_id})

    def play(self) -> bool:
        return self._post('/player/play')

    def pause(self) -> bool:
        return self._post('/player/pause')

    def stop(self) -> bool:
        return self._post('/player/stop')

    def set_volume(self, level: int) -> bool:
        """Set volume level (0-100)."""
        return self._post('/player/volume', {'volume': level})

    def state(self) -> Optional[int]:
        """Get the player's numeric state code, None if unavailable."""
        try:
            resp = self.session.get(f'{self.base_url}/status', timeout=COMMAND_TIMEOUT)
            if resp.status_code == 204:
                return None
            data = resp.json()
            return data.get('state') if isinstance(data, dict) else None
        except (requests.RequestException, ValueError) as e:
            logger.debug(f'Status request failed: {e}')
            return None

    def destroy(self) -> bool:
        """Tear down the player instance."""
        try:
            resp = self.session.delete(f'{self.base_url}/player', timeout=COMMAND_TIMEOUT)
            logger.debug(f'Destroy: {resp.status_code}')
            return resp.ok
        except requests.RequestException:
            logger.error('Destroy error', exc_info=True)
            return False

    def is_connected(self) -> bool:
        """Check if the bridge is reachable."""
        try:
            resp = self.session.get(f'{self.base_url}/status', timeout=1)
            return resp.status_code in (200, 204)
        except requests.RequestException:
            return False


class NullEmbedPlayerAPI:
    """Stand-in used in mock mode. Accepts every command and fakes the state."""

    def __init__(self):
        self._state = -1  # unstarted
        self.video_id: Optional[str] = None
        self.volume = 100

    def create(self, container: str, player_vars: dict) -> bool:
        logger.info(f'Mock player created in #{container}')
        return True

    def load_video(self, video_id: str) -> bool:
        self.video_id = video_id
        self._state = 1
        return True

    def play(self) -> bool:
        if self.video_id:
            self._state = 1
        return True

    def pause(self) -> bool:
        if self.video_id:
            self._state = 2
        return True

    def stop(self) -> bool:
        self._state = 5 if self.video_id else -1
        return True

    def set_volume(self, level: int) -> bool:
        self.volume = level
        return True

    def state(self) -> Optional[int]:
        return self._state

    def destroy(self) -> bool:
        self.video_id = None
        self._state = -1
        return True

    def is_connected(self) -> bool:
        return True
