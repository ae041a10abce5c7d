"""
Tunedeck API modules - External player and playlist storage.
"""
from .embed_player import EmbedPlayerAPI, NullEmbedPlayerAPI
from .playlist import PlaylistRepository
from .youtube import extract_video_id, placeholder_title

__all__ = [
    'EmbedPlayerAPI',
    'NullEmbedPlayerAPI',
    'PlaylistRepository',
    'extract_video_id',
    'placeholder_title',
]
