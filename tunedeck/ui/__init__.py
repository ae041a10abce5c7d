"""
Tunedeck UI - Rendering and visual components.
"""
from .helpers import draw_aa_rounded_rect, truncate_text
from .renderer import Renderer
from .context import RenderContext

__all__ = [
    'draw_aa_rounded_rect',
    'truncate_text',
    'Renderer',
    'RenderContext',
]
