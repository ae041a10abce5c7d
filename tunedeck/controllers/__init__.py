"""
Tunedeck Controllers - Playback state and player control.
"""
from .adapter import PlayerAdapter, EmbedPlayerAdapter, PlayerFactory
from .playback import PlaybackController
from .volume import VolumeController

__all__ = [
    'PlayerAdapter',
    'EmbedPlayerAdapter',
    'PlayerFactory',
    'PlaybackController',
    'VolumeController',
]
