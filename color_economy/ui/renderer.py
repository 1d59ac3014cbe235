# color_economy/ui/renderer.py
from __future__ import annotations
import random
import pygame
from ..sim.config import CREATURE, POPULATION, POLICY
from ..sim.patches import blend_hsl, patch_under

# ---------- Colors / Theme ----------
BG_COLOR     = (14,16,20)
TOPBAR_BG    = (24,26,32)
TOPBAR_LINE  = (54,58,66)
COLLIDE_EDGE = (230,40,40)
CLONE_EDGE   = (240,220,40)
PLAIN_EDGE   = (0,0,0)

# ---------- Layout knobs ----------
TOPBAR_HEIGHT = 100
HUD_PAD_X     = 12
HUD_PAD_Y     = 10

def hsl_to_rgb(color) -> pygame.Color:
    h, s, l = color
    c = pygame.Color(0, 0, 0)
    c.hsla = (h % 360.0, max(0.0, min(100.0, s)), max(0.0, min(100.0, l)), 100)
    return c

def sick_color(color, energy: float):
    """Starving creatures lose saturation."""
    h, s, l = color
    sick = min(1.0, max(0.0, 1.0 - energy / max(CREATURE.base_energy, 1e-9)))
    return (h, s * (1.0 - sick), l)

class Renderer:
    def __init__(self, screen, world_rect: pygame.Rect, font_name="Menlo"):
        self.screen = screen
        self.topbar_height = TOPBAR_HEIGHT
        self.world_rect = pygame.Rect(
            world_rect.x,
            world_rect.y + self.topbar_height,
            world_rect.w,
            max(0, world_rect.h - self.topbar_height)
        )
        self.font = pygame.font.SysFont(font_name, 14)
        self.wiggle = True   # toggled by 'G'

    def resize(self, world_rect: pygame.Rect):
        self.world_rect = pygame.Rect(
            world_rect.x,
            world_rect.y + self.topbar_height,
            world_rect.w,
            max(0, world_rect.h - self.topbar_height)
        )

    # ---------- coordinate helpers ----------
    def world_to_screen(self, live, x, y):
        rx, ry, rw, rh = self.world_rect
        return (rx + (x / live.width) * rw, ry + (y / live.height) * rh)

    def screen_to_world(self, live, sx, sy):
        rx, ry, rw, rh = self.world_rect
        if rw <= 0 or rh <= 0:
            return None
        return ((sx - rx) / rw * live.width, (sy - ry) / rh * live.height)

    # ---------- top bar ----------
    def _draw_topbar(self):
        scr = self.screen.get_rect()
        bar = pygame.Rect(0, 0, scr.w, self.topbar_height)
        pygame.draw.rect(self.screen, TOPBAR_BG, bar)
        pygame.draw.line(self.screen, TOPBAR_LINE, (0, self.topbar_height), (scr.w, self.topbar_height), 1)

    # ---------- world ----------
    def _draw_patches(self, live):
        for p in live.patch_snapshots():
            if len(p.vertices) < 3:
                continue
            pts = [self.world_to_screen(live, x, y) for x, y in p.vertices]
            pygame.draw.polygon(self.screen, hsl_to_rgb(p.color), pts)

    def _draw_creature(self, live, c):
        # blend with the ground it stands on
        color = c.color
        under = patch_under(c.x, c.y, live.patches)
        if under is not None:
            color = blend_hsl(c.color, under.base_color, 0.5)
        color = sick_color(color, c.energy)

        w = CREATURE.wiggle_radius if self.wiggle else 0.0
        pts = []
        for x, y in c.shape:
            if w:
                x += random.uniform(-w, w)
                y += random.uniform(-w, w)
            pts.append(self.world_to_screen(live, x, y))
        if len(pts) < 3:
            pygame.draw.circle(self.screen, hsl_to_rgb(color), self.world_to_screen(live, c.x, c.y), 3)
            return
        pygame.draw.polygon(self.screen, hsl_to_rgb(color), pts)
        if c.colliding:
            pygame.draw.polygon(self.screen, COLLIDE_EDGE, pts, 3)
        elif c.cloning:
            pygame.draw.polygon(self.screen, CLONE_EDGE, pts, 3)
        else:
            pygame.draw.polygon(self.screen, PLAIN_EDGE, pts, 1)

    def draw_world(self, live):
        self._draw_topbar()
        self.screen.set_clip(self.world_rect)
        self._draw_patches(live)
        for c in live.creature_snapshots():
            self._draw_creature(live, c)
        self.screen.set_clip(None)
        pygame.draw.rect(self.screen, (70,75,85), self.world_rect, 2)

    def draw_hud(self, live, sim_speed, paused, rec_enabled):
        s = live.stats()
        lines = [
            f"Tick: {s['tick']}   Population: {s['n']} (cap {POPULATION.max_population})   "
            f"Predators: {s['predators']} | Prey: {s['herbivores']}   {'PAUSED' if paused else ''}",
            f"Avg creature energy: {s['energy_frac'] * CREATURE.max_energy_threshold:.1f}/{CREATURE.max_energy_threshold:.0f}   "
            f"Avg plant energy: {s['resource_frac'] * 100:.1f}/100   "
            f"Biodiversity: {s['distinct_types']}   Vertex variation: {s['vertex_std']:.1f}",
            f"Start: {POPULATION.initial_creatures}  Pred birth: {POPULATION.predator_birth_rate:.1f}  "
            f"Prey birth: {POPULATION.prey_birth_rate:.1f}  Diversity: {CREATURE.diversity:.1f}  "
            f"Speed: {sim_speed} ticks/frame  Collision: {POLICY.collision}  Patches: {POLICY.patch_color}  "
            f"{'REC ON' if rec_enabled else 'REC OFF'}",
            "Controls:",
            " Space Pause   R Reset   [ ] SimSpeed   1/2 pred birth   3/4 prey birth   5/6 diversity   7/8 start creatures",
            " K collision policy   P patch policy   G wiggle   V record   C clear record   S save NPZ   Click replace   Esc quit",
        ]
        x = HUD_PAD_X
        y = HUD_PAD_Y
        for i, line in enumerate(lines):
            col = (225,225,235) if i < 3 else (170,175,185)
            self.screen.blit(self.font.render(line, True, col), (x, y))
            y += 15
