# color_economy/ui/app.py
from __future__ import annotations
import pygame
from .renderer import Renderer, BG_COLOR
from .recorder import Recorder
from .csv_writer import TickCsvLogger
from ..sim.live import LiveSim
from ..sim.config import SIM, CREATURE, POPULATION, POLICY, PATCH_COLOR_POLICIES, COLLISION_POLICIES, set_initial_creatures
from ..sim.engine import get_collision_policy
from ..sim.patches import get_patch_color_policy


def _next(options, current):
    i = options.index(current) if current in options else -1
    return options[(i + 1) % len(options)]

def _step(value, delta, lo, hi):
    return round(min(hi, max(lo, value + delta)), 2)

def run_ui(seed: int = SIM.seed):
    pygame.init()
    pygame.display.set_caption("ColorEconomy: Live")
    W, H = 1280, 820
    screen = pygame.display.set_mode((W, H), pygame.RESIZABLE | pygame.SCALED)
    clock = pygame.time.Clock()

    def layout():
        w, h = screen.get_size()
        return pygame.Rect(10, 10, w - 20, h - 20)

    live = LiveSim(seed=seed)
    renderer = Renderer(screen, layout())
    logger = TickCsvLogger()
    recorder = Recorder(enabled=False, stride_ticks=2, world_size=(live.width, live.height))

    paused = False
    sim_speed = 1  # ticks/frame
    running = True

    while running:
        clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(e.size, pygame.RESIZABLE | pygame.SCALED)
                renderer.screen = screen
                renderer.resize(layout())
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                pt = renderer.screen_to_world(live, *e.pos)
                if pt is not None and 0 <= pt[0] <= live.width and 0 <= pt[1] <= live.height:
                    live.replace_within(pt[0], pt[1], CREATURE.click_replacement_radius)
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE: running = False
                elif e.key == pygame.K_SPACE: paused = not paused
                elif e.key == pygame.K_r:
                    live.reset()
                    paused = False
                elif e.key == pygame.K_LEFTBRACKET:
                    sim_speed = max(1, sim_speed - 1)
                elif e.key == pygame.K_RIGHTBRACKET:
                    sim_speed = min(20, sim_speed + 1)
                elif e.key == pygame.K_1:
                    POPULATION.predator_birth_rate = _step(POPULATION.predator_birth_rate, -0.1, 0.1, 3.0)
                elif e.key == pygame.K_2:
                    POPULATION.predator_birth_rate = _step(POPULATION.predator_birth_rate, 0.1, 0.1, 3.0)
                elif e.key == pygame.K_3:
                    POPULATION.prey_birth_rate = _step(POPULATION.prey_birth_rate, -0.1, 0.1, 3.0)
                elif e.key == pygame.K_4:
                    POPULATION.prey_birth_rate = _step(POPULATION.prey_birth_rate, 0.1, 0.1, 3.0)
                elif e.key == pygame.K_5:
                    CREATURE.diversity = _step(CREATURE.diversity, -0.1, 0.0, 1.0)
                elif e.key == pygame.K_6:
                    CREATURE.diversity = _step(CREATURE.diversity, 0.1, 0.0, 1.0)
                elif e.key == pygame.K_7:
                    set_initial_creatures(max(10, POPULATION.initial_creatures - 10))
                elif e.key == pygame.K_8:
                    set_initial_creatures(min(500, POPULATION.initial_creatures + 10))
                elif e.key == pygame.K_k:
                    POLICY.collision = _next(COLLISION_POLICIES, POLICY.collision)
                    live.collision_policy = get_collision_policy()
                elif e.key == pygame.K_p:
                    POLICY.patch_color = _next(PATCH_COLOR_POLICIES, POLICY.patch_color)
                    live.color_policy = get_patch_color_policy()
                elif e.key == pygame.K_g: renderer.wiggle = not renderer.wiggle
                elif e.key == pygame.K_v: recorder.toggle()
                elif e.key == pygame.K_c: recorder.clear()
                elif e.key == pygame.K_s: recorder.save_npz()

        if not paused:
            for _ in range(sim_speed):
                live.tick()
                logger.maybe_append(live)
                recorder.maybe_capture(live)

        screen.fill(BG_COLOR)
        renderer.draw_world(live)
        renderer.draw_hud(live, sim_speed, paused, recorder.enabled)
        pygame.display.flip()

    pygame.quit()
