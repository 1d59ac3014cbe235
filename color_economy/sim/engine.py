# color_economy/sim/engine.py
from __future__ import annotations
from typing import List, Optional
import math

from .models import Creature, Patch
from .behaviors import herbivore_feed, herbivore_seek_patch, predator_seek_prey
from .genetics import ClassificationPolicy, spawn_creature
from .patches import PatchColorPolicy, patch_under, patch_energy_boost
from .config import CREATURE, POPULATION, POLICY
from .rng import RNG

TIE_BAND = 1.1   # energies within 10% of each other fight to a draw

# ---------------- motion ----------------
def wrap(v: float, size: float) -> float:
    """Exit one edge, enter the opposite one."""
    if v < 0:
        v += size
    if v > size:
        v -= size
    return v

def integrate(me: Creature, width: float, height: float) -> None:
    me.x = wrap(me.x + me.dx, width)
    me.y = wrap(me.y + me.dy, height)

# ---------------- collisions ----------------
def creatures_collide(a: Creature, b: Creature) -> bool:
    return math.hypot(a.x - b.x, a.y - b.y) < (a.radius + b.radius)

def bounce(a: Creature, b: Creature) -> None:
    """Push the pair apart along the line joining their centers."""
    ang = math.atan2(b.y - a.y, b.x - a.x)
    k = CREATURE.bounce_factor
    a.dx, a.dy = -math.cos(ang) * k, -math.sin(ang) * k
    b.dx, b.dy = math.cos(ang) * k, math.sin(ang) * k

def _transfer(winner: Creature, loser: Creature) -> None:
    winner.energy += CREATURE.predator_energy_gain
    loser.energy -= CREATURE.predator_energy_loss


class CollisionPolicy:
    name = "base"

    def resolve_mixed(self, a: Creature, b: Creature) -> None:
        raise NotImplementedError

    def resolve(self, a: Creature, b: Creature) -> None:
        if a.herbivore != b.herbivore:
            self.resolve_mixed(a, b)
        else:
            bounce(a, b)


class EnergyThresholdCollision(CollisionPolicy):
    """The clearly stronger side feeds on the other; a close match bounces."""
    name = "energy_threshold"

    def resolve_mixed(self, a: Creature, b: Creature) -> None:
        if a.energy > b.energy * TIE_BAND:
            _transfer(a, b)
        elif b.energy > a.energy * TIE_BAND:
            _transfer(b, a)
        else:
            bounce(a, b)


class StrictCollision(CollisionPolicy):
    """The predator always wins."""
    name = "strict"

    def resolve_mixed(self, a: Creature, b: Creature) -> None:
        if a.herbivore:
            _transfer(b, a)
        else:
            _transfer(a, b)


_POLICIES = {
    EnergyThresholdCollision.name: EnergyThresholdCollision,
    StrictCollision.name: StrictCollision,
}

def get_collision_policy(name: str | None = None) -> CollisionPolicy:
    name = POLICY.collision if name is None else name
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(f"unknown collision policy {name!r}") from None


def resolve_collisions(creatures: List[Creature], policy: CollisionPolicy) -> int:
    """O(n^2) scan in list order. Returns the number of colliding pairs."""
    for c in creatures:
        c.colliding = False
    hits = 0
    n = len(creatures)
    for i in range(n):
        a = creatures[i]
        for j in range(i + 1, n):
            b = creatures[j]
            if creatures_collide(a, b):
                a.colliding = True
                b.colliding = True
                policy.resolve(a, b)
                hits += 1
    return hits

# ---------------- reproduction ----------------
def birth_threshold(me: Creature) -> float:
    rate = POPULATION.prey_birth_rate if me.herbivore else POPULATION.predator_birth_rate
    if rate <= 0:
        return math.inf
    return me.max_energy / rate

def maybe_reproduce(me: Creature, classifier: ClassificationPolicy,
                    width: float, height: float) -> Optional[Creature]:
    if me.energy < birth_threshold(me):
        return None
    me.energy /= 2.0
    me.clone_timer = CREATURE.clone_timer_ticks
    j = CREATURE.clone_jitter
    x = wrap(me.x + RNG.uniform(-j, j), width)
    y = wrap(me.y + RNG.uniform(-j, j), height)
    return spawn_creature(classifier, x=x, y=y, parent=me)

# ---------------- population control ----------------
def enforce_population_cap(creatures: List[Creature], cap: int) -> List[Creature]:
    """Drop the lowest-energy excess; survivors keep their list order."""
    excess = len(creatures) - cap
    if excess <= 0:
        return creatures
    order = sorted(range(len(creatures)), key=lambda i: creatures[i].energy)
    dropped = set(order[:excess])
    return [c for i, c in enumerate(creatures) if i not in dropped]

def remove_dead(creatures: List[Creature]) -> List[Creature]:
    return [c for c in creatures if c.energy > 0]

# ---------------- tick ----------------
def step_creatures(
    creatures: List[Creature],
    patches: List[Patch],
    classifier: ClassificationPolicy,
    color_policy: PatchColorPolicy,
    collision_policy: CollisionPolicy,
    width: float,
    height: float,
) -> List[Creature]:
    """
    One creature pass: move, metabolize, graze or hunt, maybe reproduce.
    Then pairwise collisions, the population cap and the dead are removed.
    Offspring join the list immediately but first act next tick.
    """
    for me in list(creatures):
        integrate(me, width, height)

        patch = patch_under(me.x, me.y, patches)
        me.energy -= CREATURE.energy_decay_rate
        me.energy += patch_energy_boost(patch)

        if me.herbivore:
            herbivore_feed(me, patch, color_policy)
            herbivore_seek_patch(me, patches, patch)
        else:
            predator_seek_prey(me, creatures)

        child = maybe_reproduce(me, classifier, width, height)
        if child is not None:
            creatures.append(child)

        if me.clone_timer > 0:
            me.clone_timer -= 1

    resolve_collisions(creatures, collision_policy)
    creatures = enforce_population_cap(creatures, POPULATION.max_population)
    return remove_dead(creatures)
