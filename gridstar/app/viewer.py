# gridstar/app/viewer.py
#!/usr/bin/env python3
"""
A* Viewer: animates AStarAlgorithm.search one expansion per tick.

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [G]          -> toggle diagonal moves (restarts the search)
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit
"""

import logging
import time
from typing import Dict, Iterator, List, Optional, Tuple

import pygame

from gridstar.core.astar import AStarAlgorithm
from gridstar.core.types import Cell, Grid, StepResult

logger = logging.getLogger(__name__)

PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 40
MIN_CELL_SIZE = 8
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FLOOR_GRAY  = (200,200,200)
WALL_CYAN   = ( 20,110,120)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)
BG_TOP      = (24, 26, 32)
BG_BOTTOM   = (36, 40, 48)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, start: Cell, finish: Cell,
                 engine: AStarAlgorithm, title: str = "gridstar"):
        pygame.init()

        self.grid = grid
        self.start = tuple(start)
        self.finish = tuple(finish)
        self.engine = engine
        self.title = title

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        cs = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.cols * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * cs, 420)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"gridstar - {title}")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self._last_step_t = 0.0
        self._alive = True
        self._reset()

    # ---------- layout ----------
    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(MIN_CELL_SIZE, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(MIN_CELL_SIZE, min(avail_w // self.grid.cols, avail_h // self.grid.rows))

        plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - plate_h) // 2)
        self.canvas_rect = pygame.Rect(0, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    # ---------- search driving ----------
    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.open_set: set = set()
        self.closed_set: set = set()
        self.current: Optional[Cell] = None
        self.path: List[Cell] = []
        self._steps = 0
        self._last_metrics: Dict[str, object] = {}
        self._search: Optional[Iterator[StepResult]] = self.engine.search(self.grid, self.start, self.finish)
        self._refresh_active_states()

    def _do_step(self):
        if self._search is None:
            return
        res = next(self._search, None)
        if res is None:
            self._search = None
            return
        self._steps += 1
        for c in res.closed:
            self.open_set.discard(c)
            self.closed_set.add(c)
        for c in res.opened:
            self.open_set.add(c)
        self.current = res.current
        if res.path is not None:
            self.path = res.path
        if res.metrics:
            self._last_metrics = res.metrics

        if res.status == "done":
            self.state = "Done"; self.running = False; self._search = None
        elif res.status == "no_path":
            self.state = "No path"; self.running = False; self._search = None
        else:
            self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _toggle_diagonal(self):
        # restart first so no search is in flight while the flag changes
        self._search = None
        self.engine.set_allow_diagonal(not self.engine.is_allow_diagonal())
        logger.info("diagonal moves %s", "on" if self.engine.is_allow_diagonal() else "off")
        self._reset()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _quit(self):
        self._alive = False

    # ---------- main loop ----------
    def run(self):
        while self._alive:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key == pygame.K_g:
                    self._toggle_diagonal()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(a + (b - a) * t) for a, b in zip(BG_TOP, BG_BOTTOM))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = self._cell_rect((row, col))
                color = WALL_CYAN if self.grid.is_blocked((row, col)) else FLOOR_GRAY
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        closed_tile = pygame.Surface((cs, cs), pygame.SRCALPHA); closed_tile.fill(NEON_MAG_A)
        open_tile = pygame.Surface((cs, cs), pygame.SRCALPHA); open_tile.fill(NEON_CYAN_A)
        for cell in self.closed_set:
            self.screen.blit(closed_tile, self._cell_rect(cell).topleft)
        for cell in self.open_set:
            self.screen.blit(open_tile, self._cell_rect(cell).topleft)

        if self.current is not None and not self.path:
            pygame.draw.rect(self.screen, ACCENT_GOLD, self._cell_rect(self.current), 2)

        if len(self.path) >= 2:
            pts = [self._cell_rect(c).center for c in self.path]
            glow = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
            pygame.draw.lines(glow, (0, 255, 220, 60), False, pts, 7)
            self.screen.blit(glow, (0,0), special_flags=pygame.BLEND_ADD)
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, 5)

        self._draw_badge(self.start, "S", BLUE)
        self._draw_badge(self.finish, "F", RED)

    def _draw_badge(self, cell: Cell, label: str, color: Tuple[int,int,int]):
        if not self.grid.in_bounds(cell):
            return
        center = self._cell_rect(cell).center
        pygame.draw.circle(self.screen, color, center, max(4, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 36
        gap = 10

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset); y += h + gap
        add("Diagonal Moves", self._toggle_diagonal, togglable=True, store_as="btn_diag"); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        if hasattr(self, "btn_diag"):
            self.btn_diag.set_active(self.engine.is_allow_diagonal())

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self._last_metrics
        line(f"{self.title}: {self.state}", big=True, color=ACCENT_GOLD)
        line(f"Steps: {self._steps}")
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']:.3f}")
        line("-" * 26)
        line(f"Metric: {self.engine.metric.value}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)
