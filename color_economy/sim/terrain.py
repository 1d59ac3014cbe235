# color_economy/sim/terrain.py
from __future__ import annotations
from typing import List
import math

from .models import Patch, Vec
from .geometry import clip_polygon, polygon_center
from .config import TERRAIN, PATCH
from .rng import RNG
from .patches import display_color


def scatter_seeds(width: float, height: float, n: int, jitter: float) -> List[Vec]:
    """Approximately square grid of n seeds, each nudged by up to `jitter`."""
    if n <= 0:
        return []
    cols = math.ceil(math.sqrt(n))
    rows = math.ceil(n / cols)
    seeds: List[Vec] = []
    for r in range(rows):
        for c in range(cols):
            if len(seeds) >= n:
                break
            x = (c + 0.5) * width / cols + RNG.uniform(-jitter, jitter)
            y = (r + 0.5) * height / rows + RNG.uniform(-jitter, jitter)
            seeds.append((x, y))
    return seeds


def voronoi_cell(seed: Vec, seeds: List[Vec], width: float, height: float) -> List[Vec]:
    """
    Cell of `seed`: the bounds rectangle intersected with the half-plane on
    the seed's side of every bisector. Empty list if clipped away.
    """
    cell: List[Vec] = [(0.0, 0.0), (width, 0.0), (width, height), (0.0, height)]
    for other in seeds:
        if other is seed:
            continue
        nx, ny = seed[0] - other[0], seed[1] - other[1]
        length = math.hypot(nx, ny)
        if length == 0:
            continue
        mid = ((seed[0] + other[0]) / 2.0, (seed[1] + other[1]) / 2.0)
        cell = clip_polygon(cell, mid, (nx / length, ny / length))
        if not cell:
            break
    return cell


def _fit_sides(cell: List[Vec], min_sides: int, max_sides: int) -> List[Vec] | None:
    if len(cell) < min_sides:
        return None
    cell = list(cell)
    while len(cell) > max_sides:
        del cell[RNG.randrange(len(cell))]
    return cell


def new_patch(vertices: List[Vec]) -> Patch:
    hue = RNG.uniform(0.0, 360.0)
    light = RNG.uniform(PATCH.bold_light_min, PATCH.bold_light_max)
    patch = Patch(
        vertices=tuple(vertices),
        center=polygon_center(vertices),
        hue=hue,
        sat=PATCH.bold_saturation,
        light=light,
        resource=PATCH.patch_resource_initial,
        base_color=(hue, PATCH.bold_saturation, light),
    )
    patch.base_color = display_color(patch)
    return patch


def create_patches(width: float = None, height: float = None, n: int = None) -> List[Patch]:
    width = TERRAIN.width if width is None else width
    height = TERRAIN.height if height is None else height
    n = TERRAIN.num_patches if n is None else n

    seeds = scatter_seeds(width, height, n, TERRAIN.seed_jitter)
    patches: List[Patch] = []
    for seed in seeds:
        cell = voronoi_cell(seed, seeds, width, height)
        cell = _fit_sides(cell, TERRAIN.min_patch_sides, TERRAIN.max_patch_sides)
        if cell is None:
            continue
        patches.append(new_patch(cell))
    return patches
