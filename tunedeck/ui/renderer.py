"""
Renderer - All drawing logic for the player panel.
"""
import logging
from typing import Dict, Optional

import pygame

from .context import RenderContext
from .helpers import draw_aa_rounded_rect, draw_pause_icon, draw_play_icon, truncate_text
from ..config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, COLORS,
    PADDING, INPUT_HEIGHT, ROW_HEIGHT, VISIBLE_ROWS,
)

logger = logging.getLogger(__name__)


class Renderer:
    """Handles all drawing for the player panel."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen

        # Fonts
        self.font_large = pygame.font.Font(None, 36)
        self.font_medium = pygame.font.Font(None, 28)
        self.font_small = pygame.font.Font(None, 22)

        self._text_cache: Dict[tuple, pygame.Surface] = {}
        self._bg_cache: Optional[pygame.Surface] = None

    def set_screen(self, screen: pygame.Surface):
        """Use a new display surface (after a fullscreen toggle)."""
        self.screen = screen
        self._bg_cache = None

    def draw(self, ctx: RenderContext):
        """Draw one frame."""
        self._draw_background()
        y = PADDING
        y = self._draw_heading(y)
        y = self._draw_input(ctx, y)
        y = self._draw_track_info(ctx, y)
        y = self._draw_volume(ctx, y)
        y = self._draw_controls(ctx, y)
        self._draw_playlist(ctx, y)
        self._draw_footer(ctx)
        pygame.display.flip()

    # ============================================
    # SECTIONS
    # ============================================

    def _draw_background(self):
        if not self._bg_cache:
            self._bg_cache = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
            self._bg_cache.fill(COLORS['bg_primary'])
            # Soft accent glow along the top edge
            for offset in range(120):
                alpha = int(30 * (1 - offset / 120))
                color = (
                    min(255, COLORS['bg_primary'][0] + int(alpha * 0.75)),
                    min(255, COLORS['bg_primary'][1] + int(alpha * 0.4)),
                    min(255, COLORS['bg_primary'][2] + alpha),
                )
                pygame.draw.line(self._bg_cache, color, (0, offset), (SCREEN_WIDTH, offset))
            self._bg_cache = self._bg_cache.convert()
        self.screen.blit(self._bg_cache, (0, 0))

    def _draw_heading(self, y: int) -> int:
        text = self._text('(music)', self.font_large, COLORS['accent'])
        self.screen.blit(text, text.get_rect(midtop=(SCREEN_WIDTH // 2, y)))
        return y + text.get_height() + PADDING // 2

    def _draw_input(self, ctx: RenderContext, y: int) -> int:
        width = SCREEN_WIDTH - 2 * PADDING
        draw_aa_rounded_rect(self.screen, COLORS['bg_elevated'], (PADDING, y, width, INPUT_HEIGHT), 8)

        if ctx.input_text:
            shown = ctx.input_text
            # Keep the end of long URLs visible
            while shown and self.font_small.size(shown + '|')[0] > width - 20:
                shown = shown[1:]
            text = self.font_small.render(shown + '|', True, COLORS['text_primary'])
        else:
            text = self._text('Paste YouTube URL', self.font_small, COLORS['text_muted'])
        self.screen.blit(text, text.get_rect(midleft=(PADDING + 10, y + INPUT_HEIGHT // 2)))
        return y + INPUT_HEIGHT + PADDING

    def _draw_track_info(self, ctx: RenderContext, y: int) -> int:
        track = ctx.current_track
        title = track.title if track else 'No track selected'
        title = truncate_text(self.font_medium, title, SCREEN_WIDTH - 2 * PADDING)
        text = self.font_medium.render(title, True, COLORS['text_primary'])
        self.screen.blit(text, text.get_rect(midtop=(SCREEN_WIDTH // 2, y)))
        return y + text.get_height() + PADDING // 2

    def _draw_volume(self, ctx: RenderContext, y: int) -> int:
        width = SCREEN_WIDTH - 2 * PADDING
        bar_h = 6
        draw_aa_rounded_rect(self.screen, COLORS['bg_elevated'], (PADDING, y, width, bar_h), 3)
        filled = int(width * ctx.volume / 100)
        if filled >= bar_h:
            draw_aa_rounded_rect(self.screen, COLORS['accent'], (PADDING, y, filled, bar_h), 3)

        label = self._text(f'Vol: {ctx.volume}%', self.font_small, COLORS['text_secondary'])
        self.screen.blit(label, label.get_rect(topright=(SCREEN_WIDTH - PADDING, y + bar_h + 4)))
        return y + bar_h + 4 + label.get_height() + PADDING // 2

    def _draw_controls(self, ctx: RenderContext, y: int) -> int:
        size = 44
        center = (SCREEN_WIDTH // 2, y + size // 2)
        color = COLORS['text_primary'] if ctx.tracks else COLORS['text_muted']
        pygame.draw.circle(self.screen, COLORS['bg_elevated'], center, size // 2)
        if ctx.is_playing:
            draw_pause_icon(self.screen, color, center, 16)
        else:
            draw_play_icon(self.screen, color, center, 16)

        for dx, label in ((-70, '<<'), (70, '>>')):
            text = self._text(label, self.font_medium, color)
            self.screen.blit(text, text.get_rect(center=(center[0] + dx, center[1])))
        return y + size + PADDING

    def _draw_playlist(self, ctx: RenderContext, y: int):
        if not ctx.tracks:
            text = self._text('No tracks added', self.font_small, COLORS['text_muted'])
            self.screen.blit(text, text.get_rect(midtop=(SCREEN_WIDTH // 2, y)))
            return

        # Scroll so the highlighted row stays visible
        first = max(0, min(ctx.cursor_index - VISIBLE_ROWS + 1, len(ctx.tracks) - VISIBLE_ROWS))
        first = max(0, min(first, ctx.cursor_index))
        width = SCREEN_WIDTH - 2 * PADDING

        for row, index in enumerate(range(first, min(first + VISIBLE_ROWS, len(ctx.tracks)))):
            track = ctx.tracks[index]
            row_y = y + row * ROW_HEIGHT
            if index == ctx.current_index:
                draw_aa_rounded_rect(self.screen, COLORS['bg_secondary'], (PADDING, row_y, width, ROW_HEIGHT - 4), 6)
            if index == ctx.cursor_index:
                pygame.draw.rect(self.screen, COLORS['accent'], (PADDING - 8, row_y + 4, 3, ROW_HEIGHT - 12))

            color = COLORS['text_primary'] if index == ctx.current_index else COLORS['text_secondary']
            label = truncate_text(self.font_small, f'{index + 1}. {track.title}', width - 16)
            text = self.font_small.render(label, True, color)
            self.screen.blit(text, text.get_rect(midleft=(PADDING + 8, row_y + (ROW_HEIGHT - 4) // 2)))

    def _draw_footer(self, ctx: RenderContext):
        y = SCREEN_HEIGHT - PADDING
        if ctx.status_message:
            color = COLORS['error'] if ctx.status_is_error else COLORS['success']
            message = truncate_text(self.font_small, ctx.status_message, SCREEN_WIDTH - 2 * PADDING)
            text = self.font_small.render(message, True, color)
            self.screen.blit(text, text.get_rect(midbottom=(SCREEN_WIDTH // 2, y)))
        elif not ctx.bridge_connected:
            text = self._text('Player bridge offline', self.font_small, COLORS['error'])
            self.screen.blit(text, text.get_rect(midbottom=(SCREEN_WIDTH // 2, y)))
        elif not ctx.player_ready:
            text = self._text('Connecting to player...', self.font_small, COLORS['text_muted'])
            self.screen.blit(text, text.get_rect(midbottom=(SCREEN_WIDTH // 2, y)))

    # ============================================
    # HELPERS
    # ============================================

    def _text(self, text: str, font: pygame.font.Font, color: tuple) -> pygame.Surface:
        """Render static text, cached by content."""
        key = (text, id(font), color)
        surface = self._text_cache.get(key)
        if surface is None:
            surface = font.render(text, True, color)
            self._text_cache[key] = surface
        return surface
