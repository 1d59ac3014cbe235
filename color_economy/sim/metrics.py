# color_economy/sim/metrics.py
from __future__ import annotations
from typing import List, Dict
import math
import os
import csv

from .models import Creature, Patch
from .config import CREATURE

def summarize_tick(tick: int, creatures: List[Creature], patches: List[Patch]) -> Dict[str, float]:
    n = len(creatures)
    herbivores = sum(1 for c in creatures if c.herbivore)
    mean_energy = sum(c.energy for c in creatures) / n if n else 0.0
    verts = [c.num_vertices for c in creatures]
    mean_v = sum(verts) / max(n, 1)
    var_v = sum((v - mean_v) ** 2 for v in verts) / max(n, 1)
    mean_resource = sum(p.resource for p in patches) / len(patches) if patches else 0.0
    return dict(
        tick=tick, n=n, predators=n - herbivores, herbivores=herbivores,
        energy_frac=mean_energy / CREATURE.max_energy_threshold,
        resource_frac=mean_resource / 100.0,
        vertex_std=math.sqrt(var_v),
        distinct_types=len(set(verts)),
    )

def append_csv(path: str, row: Dict[str, float]) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    write_header = not os.path.exists(path)
    with open(path, "a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(row.keys()))
        if write_header:
            w.writeheader()
        w.writerow(row)
