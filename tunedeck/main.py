#!/usr/bin/env python3
"""
Tunedeck - Dashboard music panel

Usage:
    python -m tunedeck              # Windowed
    python -m tunedeck --fullscreen # Fullscreen
    python -m tunedeck --mock       # Mock player (no bridge needed)
"""
import os
import sys
import logging
import platform
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    PLAYER_URL, PLAYER_WS, STORE_PATH, MOCK_MODE, FULLSCREEN,
    LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
)
from .app import Dashboard


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
QUIET_LOGGERS = ('urllib3', 'requests', 'websocket')


def _file_handler() -> Optional[logging.Handler]:
    """Rotating DEBUG log under LOG_DIR, or None if it can't be written."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            LOG_FILE, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8'
        )
    except OSError as e:
        logging.getLogger().warning(f'No log file ({e}), logging to console only')
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging():
    """Console logging at TUNEDECK_LOG_LEVEL plus a rotating debug file."""
    level = getattr(logging, os.environ.get('TUNEDECK_LOG_LEVEL', 'INFO').upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    console.setLevel(level)
    root.addHandler(console)

    file_handler = _file_handler()
    if file_handler:
        root.addHandler(file_handler)
        root.info(f'Logging to: {LOG_FILE}')

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_system_info(logger: logging.Logger):
    """Log system information at startup."""
    logger.info('=' * 50)
    logger.info('TUNEDECK STARTUP')
    logger.info('=' * 50)
    logger.info(f'Python: {sys.version.split()[0]}')
    logger.info(f'Platform: {platform.system()} {platform.release()}')
    logger.info(f'Store: {STORE_PATH}')
    logger.info('=' * 50)


def main():
    """Entry point for Tunedeck."""
    setup_logging()

    logger = logging.getLogger(__name__)
    log_system_info(logger)

    if MOCK_MODE:
        logger.info('Mode: MOCK (no player bridge)')
    else:
        logger.info(f'Player bridge: {PLAYER_URL} / {PLAYER_WS}')
    logger.info(f'Screen: {SCREEN_WIDTH}x{SCREEN_HEIGHT}')
    logger.info(f'Fullscreen: {FULLSCREEN}')

    print()
    print('Controls:')
    print('   Enter       Add pasted URL / play highlighted track')
    print('   Space       Play/Pause')
    print('   ← →         Previous / next track')
    print('   ↑ ↓         Highlight track')
    print('   Delete      Remove highlighted track')
    print('   PgUp PgDn   Volume')
    print('   Esc         Quit')
    print()

    app = Dashboard(fullscreen=FULLSCREEN)
    app.start()


if __name__ == '__main__':
    main()
