# color_economy/sim/behaviors.py
from __future__ import annotations
from typing import List, Optional
import math

from .models import Creature, Patch, Vec
from .patches import PatchColorPolicy
from .config import CREATURE, PATCH, SEEK

# ---------------- vector helpers ----------------
def _cap_speed(me: Creature) -> None:
    vmax = me.speed * SEEK.max_speed_factor
    spd = math.hypot(me.dx, me.dy)
    if spd <= vmax or spd <= 1e-12:
        return
    f = vmax / spd
    me.dx *= f
    me.dy *= f

def steer_toward(me: Creature, target: Vec) -> None:
    """Small constant acceleration toward the target, not a heading snap."""
    ang = math.atan2(target[1] - me.y, target[0] - me.x)
    me.dx += SEEK.seek_acceleration * math.cos(ang)
    me.dy += SEEK.seek_acceleration * math.sin(ang)
    _cap_speed(me)

# ---------------- diet rules ----------------
def can_graze(me: Creature, patch: Optional[Patch]) -> bool:
    """
    Shape decides diet: a herbivore only grazes patches whose side count is a
    multiple of its own vertex count, and only while resource remains.
    """
    if patch is None or not me.herbivore or me.num_vertices <= 0:
        return False
    return patch.sides % me.num_vertices == 0 and patch.resource > 0

def herbivore_feed(me: Creature, patch: Optional[Patch], color_policy: PatchColorPolicy) -> bool:
    if not can_graze(me, patch):
        return False
    me.energy += CREATURE.herbivore_energy_gain
    patch.resource = max(0.0, patch.resource - PATCH.patch_resource_drain)
    color_policy.on_feed(patch, me)
    return True

# ---------------- seeking ----------------
def best_patch_for(me: Creature, patches: List[Patch], current: Optional[Patch]) -> Optional[Patch]:
    best = None
    best_score = -math.inf
    for p in patches:
        if p is current or not can_graze(me, p):
            continue
        d = math.hypot(p.center[0] - me.x, p.center[1] - me.y)
        score = p.resource - d * SEEK.seek_distance_penalty
        if score > best_score:
            best_score = score
            best = p
    return best

def herbivore_seek_patch(me: Creature, patches: List[Patch], current: Optional[Patch]) -> bool:
    target = best_patch_for(me, patches, current)
    if target is None:
        return False
    steer_toward(me, target.center)
    return True

def nearest_herbivore(me: Creature, others: List[Creature]) -> Optional[Creature]:
    closest = None
    best_d2 = math.inf
    for o in others:
        if o is me or not o.herbivore:
            continue
        d2 = (o.x - me.x) ** 2 + (o.y - me.y) ** 2
        if d2 < best_d2:
            best_d2 = d2
            closest = o
    return closest

def predator_seek_prey(me: Creature, others: List[Creature]) -> bool:
    prey = nearest_herbivore(me, others)
    if prey is None:
        return False
    steer_toward(me, prey.pos())
    return True
