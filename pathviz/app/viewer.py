# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Grid Pathfinding Viewer: edit a grid, then watch BFS / DFS explore it.

- Mouse:
    click a cell  -> place start / place end / toggle wall (depends on mode)
- Keyboard:
    [SPACE]        -> visualize
    [1]/[2]/[3]    -> mode: set start / set end / draw walls
    [B]/[D]        -> algorithm (BFS / DFS)
    [C]            -> clear path
    [W]            -> clear walls
    [R]            -> reset grid
    arrows         -> rows -/+ (up/down), cols -/+ (left/right)
    [Q]/[ESC]      -> quit

Config: see pathviz.core.config (PATHVIZ_* env vars or --name=value flags).
"""

import sys
from typing import List, Optional, Sequence, Tuple
import logging

import pygame

from pathviz.app import theme_skin as THEME
from pathviz.core.config import AppConfig, resolve_config, configure_logging
from pathviz.core.editor import Session
from pathviz.core.types import Algorithm, Cell, Mode

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 460            # right band: status + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

# Colors
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
TEXT_DIM    = (160,168,180)
ACCENT_GOLD = (255,210,0)

MODE_LABELS = {
    Mode.PLACING_START: "Set Start",
    Mode.PLACING_END:   "Set End",
    Mode.EDITING_WALLS: "Draw Walls",
}
ALGO_LABELS = {
    Algorithm.BREADTH_FIRST: "BFS (Shortest Path)",
    Algorithm.DEPTH_FIRST:   "DFS (Not Optimal)",
}
INSTRUCTIONS = (
    "1. Click a cell to place the start (green)",
    "2. Click again to place the end (red)",
    "3. Draw walls, then press Visualize",
    "BFS always finds the shortest path; DFS may not",
)

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False   # highlight state
        self.enabled = True

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle     = (36, 40, 48, 220)
        bg_hover    = (46, 50, 60, 230)
        bg_active   = (58, 86, 160, 235)
        bg_disabled = (30, 32, 38, 160)
        border_active = (120, 170, 255, 255)

        if not self.enabled:
            bg = bg_disabled
        elif self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)

        # subtle highlight top band
        hi = pygame.Surface((self.rect.width, 14), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))

        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        color = (235,238,242) if self.enabled else (120,124,132)
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False

# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: Session):
        pygame.init()

        self.session = session
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        self.cell_size = self._auto_cell_size()
        grid_px_w = GRID_MARGIN*2 + session.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + session.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 640)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Shortest Path Visualizer")

        # buttons BEFORE layout (so layout can place them)
        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        s = self.session
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // s.cols
        cs_by_h = avail_h // s.rows
        self.cell_size = int(max(8, min(cs_by_w, cs_by_h, 40)))

        grid_plate_w = s.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = s.rows * self.cell_size + 2 * GRID_MARGIN

        # center the grid plate; keep PANEL_W free on the right
        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)

        # right band for controls = everything to the right of canvas_rect
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // self.session.rows))

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        """Grid cell under a window pixel, or None outside the grid."""
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        cell = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return cell if self.session.grid.in_bounds(cell) else None

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.tick(pygame.time.get_ticks())
            self._draw()
            self.clock.tick(60)

    def tick(self, now: int):
        if self.session.playback is not None:
            self.session.tick(now)
            if not self.session.running:
                self._refresh_active_states()

    def _quit(self):
        pygame.quit(); sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                self._handle_mouse(e)

    def _handle_key(self, key: int):
        s = self.session
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key == pygame.K_SPACE:
            self._visualize()
        elif key == pygame.K_1:
            self._switch_mode(Mode.PLACING_START)
        elif key == pygame.K_2:
            self._switch_mode(Mode.PLACING_END)
        elif key == pygame.K_3:
            self._switch_mode(Mode.EDITING_WALLS)
        elif key == pygame.K_b:
            self._switch_algo(Algorithm.BREADTH_FIRST)
        elif key == pygame.K_d:
            self._switch_algo(Algorithm.DEPTH_FIRST)
        elif key == pygame.K_c:
            s.clear_path()
        elif key == pygame.K_w:
            s.clear_walls()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_UP:
            self._resize(-1, 0)
        elif key == pygame.K_DOWN:
            self._resize(+1, 0)
        elif key == pygame.K_LEFT:
            self._resize(0, -1)
        elif key == pygame.K_RIGHT:
            self._resize(0, +1)

    def _handle_mouse(self, e: pygame.event.Event):
        for b in self._buttons:
            if b.handle_mouse(e):
                return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            cell = self.cell_at(e.pos)
            if cell is not None and self.session.click(cell):
                self._refresh_active_states()

    # ---------- actions ----------
    def _visualize(self):
        if self.session.visualize(now=pygame.time.get_ticks()) is not None:
            self._refresh_active_states()

    def _switch_mode(self, mode: Mode):
        if self.session.set_mode(mode):
            self._refresh_active_states()

    def _switch_algo(self, algorithm: Algorithm):
        if self.session.set_algorithm(algorithm):
            self._refresh_active_states()

    def _reset(self):
        if self.session.reset():
            self._refresh_active_states()

    def _resize(self, d_rows: int, d_cols: int):
        s = self.session
        if s.resize(s.rows + d_rows, s.cols + d_cols):
            self._layout(*self.screen.get_size())

    # ---------- drawing ----------
    def _draw(self):
        THEME.draw_backdrop(self.screen)
        self._draw_grid()
        THEME.glass_panel(self.screen, self._right_band.inflate(-12, -12))
        self._draw_status_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        grid = self.session.grid
        for row in range(grid.rows):
            for col in range(grid.cols):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                THEME.draw_cell(self.screen, rect, grid.cells[row][col])

    # ---------- buttons + status ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 20
        y = rb.y + 250  # leaves space for the status card above
        w = max(200, rb.width - 40)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        def row2(left, right):
            nonlocal y
            add(*left[:2], pygame.Rect(x, y, half, h), **left[2])
            add(*right[:2], pygame.Rect(x + half + 8, y, half, h), **right[2])
            y += h + gap

        add("Visualize Path", self._visualize, pygame.Rect(x, y, w, h), store_as="btn_run"); y += h + gap
        row2(("Clear Path", self.session.clear_path, {}),
             ("Clear Walls", self.session.clear_walls, {}))
        add("Reset Grid", self._reset, pygame.Rect(x, y, w, h)); y += h + gap

        # Mode (togglable, three choices)
        third = (w - 16) // 3
        for i, mode in enumerate(Mode):
            add(MODE_LABELS[mode], lambda m=mode: self._switch_mode(m),
                pygame.Rect(x + i * (third + 8), y, third, h),
                togglable=True, store_as=f"btn_mode_{i}")
        y += h + gap

        # Algo (togglable, two choices)
        row2(("BFS", lambda: self._switch_algo(Algorithm.BREADTH_FIRST),
              {"togglable": True, "store_as": "btn_algo_b"}),
             ("DFS", lambda: self._switch_algo(Algorithm.DEPTH_FIRST),
              {"togglable": True, "store_as": "btn_algo_d"}))

        # Dimensions
        row2(("Rows -", lambda: self._resize(-1, 0), {}),
             ("Rows +", lambda: self._resize(+1, 0), {}))
        row2(("Cols -", lambda: self._resize(0, -1), {}),
             ("Cols +", lambda: self._resize(0, +1), {}))
        self._instructions_y = y + 8

        # after any rebuild (e.g., on resize), refresh which ones are active
        self._refresh_active_states()

    def _refresh_active_states(self):
        s = self.session
        if hasattr(self, "btn_run"):
            self.btn_run.enabled = s.can_visualize
        for i, mode in enumerate(Mode):
            btn = getattr(self, f"btn_mode_{i}", None)
            if btn is not None:
                btn.set_active(s.mode is mode)
        if hasattr(self, "btn_algo_b"):
            self.btn_algo_b.set_active(s.algorithm is Algorithm.BREADTH_FIRST)
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(s.algorithm is Algorithm.DEPTH_FIRST)
        for b in self._buttons:
            if b is not getattr(self, "btn_run", None):
                b.enabled = not s.running

    def _draw_status_and_buttons(self):
        rb = self._right_band
        s = self.session

        # ---- STATUS CARD (top) ----
        card_h = 228
        card = pygame.Surface((rb.width - 40, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 20, rb.y + 14))

        x0 = rb.x + 34
        y0 = rb.y + 24

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Shortest Path Visualizer", big=True, color=ACCENT_GOLD)
        line(f"Grid: {s.rows} x {s.cols}")
        line(f"Mode: {MODE_LABELS[s.mode]}")
        line(f"Algo: {ALGO_LABELS[s.algorithm]}")
        line("Running..." if s.running else "Idle", color=TEXT_DIM)
        y0 += THEME.draw_legend(self.screen, self.font_small, x0, y0) + 10
        THEME.draw_message_pill(self.screen, self.font_small, s.message,
                                x0, y0, rb.width - 68, s.message_is_success)

        # ---- BUTTONS ----
        for b in self._buttons:
            b.draw(self.screen, self.font_small)

        # ---- INSTRUCTIONS ----
        y = self._instructions_y
        for text in INSTRUCTIONS:
            surf = self.font_small.render(text, True, TEXT_DIM)
            self.screen.blit(surf, (x0, y))
            y += surf.get_height() + 4

# ---------- main ----------
def make_session(config: AppConfig) -> Session:
    return Session(config.rows, config.cols, config.algorithm, config.delays)

def main(argv: Optional[Sequence[str]] = None, config: Optional[AppConfig] = None):
    config = config or resolve_config(argv)
    configure_logging(config.log_level)
    logger.info("opening %dx%d grid with %s", config.rows, config.cols, config.algorithm.value)
    try:
        viewer = Viewer(make_session(config))
    except pygame.error as ex:
        print(f"Failed to open the viewer: {ex}")
        sys.exit(1)
    viewer.run()

if __name__ == "__main__":
    main()
