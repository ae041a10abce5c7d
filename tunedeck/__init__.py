"""
Tunedeck - Personal dashboard music panel.

Plays a playlist of YouTube links through an external embed player.
"""
__version__ = '0.1.0'
