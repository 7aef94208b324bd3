# pathviz/app/theme_skin.py
"""
Visual skin for the viewer (visuals only; no logic)
- Backdrop: dark vertical gradient, cached per window size
- Cells: flat fill per CellType with thin borders
- Right panel: frosted glass underlay (viewer draws buttons/text on top)
- Message pill: status message tinted by outcome
- Legend: colour swatch + label per cell kind
"""

from __future__ import annotations
from typing import Dict, Tuple
import pygame

from pathviz.core.types import CellType

# ---- palette ----
BORDER        = (203, 213, 225)
TEXT_LIGHT    = (230, 235, 240)
ACCENT_GOLD   = (255, 210, 0)

CELL_COLORS: Dict[CellType, Tuple[int, int, int]] = {
    CellType.EMPTY:   (255, 255, 255),
    CellType.START:   ( 34, 197,  94),
    CellType.END:     (239,  68,  68),
    CellType.WALL:    ( 31,  41,  55),
    CellType.PATH:    (250, 204,  21),
    CellType.VISITED: (147, 197, 253),
}

LEGEND = (
    (CellType.START,   "Start"),
    (CellType.END,     "End"),
    (CellType.WALL,    "Wall"),
    (CellType.VISITED, "Visited"),
    (CellType.PATH,    "Path"),
)

# panel colors
PANEL_FILL    = (18, 20, 28, 190)
PANEL_SHADOW  = (0, 0, 0, 140)

# message pills
PILL_SUCCESS  = (22, 101, 52, 230)
PILL_ERROR    = (153, 27, 27, 230)

# caches
_backdrop_by_size: dict[Tuple[int, int], pygame.Surface] = {}

# ---------- helpers ----------
def _rounded_rect(surface: pygame.Surface, rect: pygame.Rect, color, radius=16, width=0):
    pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)

def glass_panel(screen: pygame.Surface, rect: pygame.Rect,
                fill_rgba=PANEL_FILL, shadow_rgba=PANEL_SHADOW):
    if rect.width <= 0 or rect.height <= 0:
        return
    shadow = pygame.Surface((rect.width + 18, rect.height + 18), pygame.SRCALPHA)
    _rounded_rect(shadow, pygame.Rect(9, 9, rect.width, rect.height), shadow_rgba, radius=20)
    screen.blit(shadow, (rect.x - 9, rect.y - 9))
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    _rounded_rect(card, pygame.Rect(0, 0, rect.width, rect.height), fill_rgba, radius=20)
    # subtle top sheen
    hi = pygame.Surface((rect.width, max(18, rect.height // 12)), pygame.SRCALPHA)
    pygame.draw.rect(hi, (255,255,255,18), hi.get_rect(), border_radius=18)
    card.blit(hi, (0,0))
    screen.blit(card, rect.topleft)

def draw_backdrop(screen: pygame.Surface):
    """Gradient backdrop, cached by window size."""
    w, h = screen.get_size()
    key = (w, h)
    if key not in _backdrop_by_size:
        surf = pygame.Surface((w, h))
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(surf, c, (0, y), (w, y))
        _backdrop_by_size.clear()
        _backdrop_by_size[key] = surf
    screen.blit(_backdrop_by_size[key], (0, 0))

def draw_cell(screen: pygame.Surface, rect: pygame.Rect, kind: CellType):
    pygame.draw.rect(screen, CELL_COLORS[kind], rect)
    pygame.draw.rect(screen, BORDER, rect, 1)

def draw_message_pill(screen: pygame.Surface, font: pygame.font.Font, text: str,
                      x: int, y: int, max_w: int, success: bool) -> int:
    """Draw ``text`` in a tinted pill; returns the pill height (0 when empty)."""
    if not text:
        return 0
    surf = font.render(text, True, TEXT_LIGHT)
    pad_x, pad_y = 12, 6
    w = min(max_w, surf.get_width() + pad_x*2)
    h = surf.get_height() + pad_y*2
    pill = pygame.Surface((w, h), pygame.SRCALPHA)
    _rounded_rect(pill, pill.get_rect(), PILL_SUCCESS if success else PILL_ERROR, radius=12)
    screen.blit(pill, (x, y))
    screen.blit(surf, (x + pad_x, y + pad_y), area=pygame.Rect(0, 0, w - pad_x*2, surf.get_height()))
    return h

def draw_legend(screen: pygame.Surface, font: pygame.font.Font, x: int, y: int) -> int:
    """One row of swatches; returns the row height."""
    sw = 16
    cx = x
    for kind, label in LEGEND:
        rect = pygame.Rect(cx, y, sw, sw)
        _rounded_rect(screen, rect, CELL_COLORS[kind], radius=4)
        txt = font.render(label, True, TEXT_LIGHT)
        screen.blit(txt, (cx + sw + 6, y + (sw - txt.get_height()) // 2))
        cx += sw + 6 + txt.get_width() + 14
    return sw
