"""
Tunedeck Handlers - Input and event handling.
"""
from .events import PlayerEventListener
from .keyboard import KeyboardHandler

__all__ = ['PlayerEventListener', 'KeyboardHandler']
