"""
UI Helpers - Drawing utilities for pygame.
"""
import pygame
import pygame.gfxdraw


def draw_aa_rounded_rect(surface: pygame.Surface, color: tuple, rect: tuple, radius: int):
    """Draw an anti-aliased rounded rectangle using circles for corners."""
    x, y, w, h = rect
    r = min(radius, w // 2, h // 2)

    pygame.draw.rect(surface, color, (x + r, y, w - 2 * r, h))  # horizontal
    pygame.draw.rect(surface, color, (x, y + r, w, h - 2 * r))  # vertical

    corners = [
        (x + r, y + r),
        (x + w - r - 1, y + r),
        (x + r, y + h - r - 1),
        (x + w - r - 1, y + h - r - 1),
    ]
    for cx, cy in corners:
        pygame.gfxdraw.aacircle(surface, int(cx), int(cy), r, color)
        pygame.gfxdraw.filled_circle(surface, int(cx), int(cy), r, color)


def truncate_text(font: pygame.font.Font, text: str, max_width: int) -> str:
    """Shorten text with an ellipsis until it fits max_width pixels."""
    if font.size(text)[0] <= max_width:
        return text
    while text and font.size(text + '...')[0] > max_width:
        text = text[:-1]
    return text + '...'


def draw_play_icon(surface: pygame.Surface, color: tuple, center: tuple, size: int):
    cx, cy = center
    half = size // 2
    points = [(cx - half // 2, cy - half), (cx - half // 2, cy + half), (cx + half, cy)]
    pygame.gfxdraw.aapolygon(surface, points, color)
    pygame.gfxdraw.filled_polygon(surface, points, color)


def draw_pause_icon(surface: pygame.Surface, color: tuple, center: tuple, size: int):
    cx, cy = center
    bar_w = max(2, size // 4)
    gap = max(2, size // 5)
    pygame.draw.rect(surface, color, (cx - gap // 2 - bar_w, cy - size // 2, bar_w, size))
    pygame.draw.rect(surface, color, (cx + gap // 2, cy - size // 2, bar_w, size))
