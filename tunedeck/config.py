"""
Tunedeck Configuration - All constants and settings.
"""
import os
import sys
from pathlib import Path

# ============================================
# SCREEN & DISPLAY
# ============================================

SCREEN_WIDTH = 480
SCREEN_HEIGHT = 640
FPS = 30

# ============================================
# EXTERNAL PLAYER ENDPOINTS
# ============================================

# Bridge page hosting the embed player (REST commands + event stream)
PLAYER_URL = os.environ.get('TUNEDECK_PLAYER_URL', 'http://localhost:8765')
PLAYER_WS = os.environ.get('TUNEDECK_PLAYER_WS', 'ws://localhost:8765/events')

PLAYER_CONTAINER = 'youtube-player'
PLAYER_VARS = {
    'playsinline': 1,
    'controls': 0,
    'disablekb': 1,
}

# Seconds
COMMAND_TIMEOUT = 2
CREATE_TIMEOUT = 10
RECONNECT_DELAY = 1.0

# ============================================
# PATHS
# ============================================

DATA_DIR = Path(os.environ.get('TUNEDECK_DATA_DIR', Path.home() / '.tunedeck'))
STORE_PATH = DATA_DIR / 'dashboard.json'
PLAYLIST_KEY = 'musicPlaylist'

LOG_DIR = DATA_DIR / 'logs'
LOG_FILE = LOG_DIR / 'tunedeck.log'
LOG_MAX_BYTES = 1 * 1024 * 1024  # 1MB per file
LOG_BACKUP_COUNT = 5

# ============================================
# COMMAND LINE FLAGS
# ============================================

MOCK_MODE = '--mock' in sys.argv or '-m' in sys.argv
FULLSCREEN = '--fullscreen' in sys.argv or '-f' in sys.argv

# ============================================
# PLAYBACK
# ============================================

DEFAULT_VOLUME = 70
VOLUME_STEP = 5
# Full passes over the playlist of back-to-back errors before auto-advance gives up
ERROR_SKIP_CYCLES = 1

# ============================================
# COLORS
# ============================================

COLORS = {
    'bg_primary': (13, 13, 13),
    'bg_secondary': (26, 26, 26),
    'bg_elevated': (40, 40, 40),
    'accent': (189, 101, 252),
    'text_primary': (255, 255, 255),
    'text_secondary': (160, 160, 160),
    'text_muted': (96, 96, 96),
    'success': (29, 185, 84),
    'error': (232, 80, 80),
}

# ============================================
# LAYOUT
# ============================================

PADDING = 24
INPUT_HEIGHT = 36
ROW_HEIGHT = 28
VISIBLE_ROWS = 10
STATUS_MESSAGE_DURATION = 3.0  # seconds
