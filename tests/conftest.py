"""
Pytest configuration and shared fixtures for Tunedeck tests.
"""
import json
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from tunedeck.api.playlist import PlaylistRepository
from tunedeck.controllers.adapter import PlayerAdapter
from tunedeck.controllers.playback import PlaybackController
from tunedeck.storage import KeyValueStore

URL_A = 'https://www.youtube.com/watch?v=dQw4w9WgXcQ'
URL_B = 'https://youtu.be/9bZkp7q19f0'
URL_C = 'https://www.youtube.com/embed/kJQP7kiw5Fk'
ID_A, ID_B, ID_C = 'dQw4w9WgXcQ', '9bZkp7q19f0', 'kJQP7kiw5Fk'


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after each test."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store_path(temp_dir):
    """Provide path for a temporary dashboard.json file."""
    return temp_dir / 'dashboard.json'


@pytest.fixture
def store(store_path):
    return KeyValueStore(store_path)


@pytest.fixture
def sample_playlist_data():
    """Provide a persisted playlist with three tracks."""
    return [
        {'id': ID_A, 'title': 'YouTube (dQw4w9...)', 'url': URL_A},
        {'id': ID_B, 'title': 'YouTube (9bZkp7...)', 'url': URL_B},
        {'id': ID_C, 'title': 'YouTube (kJQP7k...)', 'url': URL_C},
    ]


@pytest.fixture
def store_with_playlist(store_path, sample_playlist_data):
    """Create a store file holding the sample playlist."""
    store_path.write_text(json.dumps({'musicPlaylist': sample_playlist_data}, indent=2))
    return KeyValueStore(store_path)


@pytest.fixture
def repository(store):
    return PlaylistRepository(store)


@pytest.fixture
def adapter():
    """A player adapter that records every command."""
    return MagicMock(spec=PlayerAdapter)


@pytest.fixture
def controller(store_with_playlist, adapter):
    """Controller with [A, B, C] loaded and a ready player attached."""
    ctrl = PlaybackController(PlaylistRepository(store_with_playlist), volume=70)
    ctrl.start()
    ctrl.attach(adapter)
    adapter.reset_mock()
    return ctrl


@pytest.fixture
def empty_controller(store, adapter):
    """Controller with an empty playlist and a ready player attached."""
    ctrl = PlaybackController(PlaylistRepository(store), volume=70)
    ctrl.start()
    ctrl.attach(adapter)
    adapter.reset_mock()
    return ctrl
