# color_economy/sim/genetics.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import math

from .models import Creature, Polygon, HSL
from .config import CREATURE, TERRAIN, POLICY
from .rng import RNG


@dataclass(frozen=True)
class Form:
    """What a spawn inherits from its classification: type, vertex count, unit shape."""
    num_vertices: int
    herbivore: bool
    shape: Polygon          # silhouette at radius 1.0
    species: Optional[int] = None


# ---------------- shapes ----------------
def generate_twisted_shape(n: int, radius: float) -> Polygon:
    """Jagged: every vertex at a random angle and distance."""
    pts = []
    for _ in range(n):
        ang = RNG.uniform(0.0, 2.0 * math.pi)
        r = radius * RNG.uniform(0.5, 1.5)
        pts.append((r * math.cos(ang), r * math.sin(ang)))
    return tuple(pts)


def generate_virus_shape(n: int, radius: float) -> Polygon:
    """Round: evenly spaced angles with a little radial jitter."""
    step = 2.0 * math.pi / n
    pts = []
    for i in range(n):
        r = radius * RNG.uniform(0.8, 1.2)
        pts.append((r * math.cos(i * step), r * math.sin(i * step)))
    return tuple(pts)


def _shape_for(n: int, herbivore: bool) -> Polygon:
    return generate_virus_shape(n, 1.0) if herbivore else generate_twisted_shape(n, 1.0)


def _scale(shape: Polygon, k: float) -> Polygon:
    return tuple((x * k, y * k) for x, y in shape)


# ---------------- trait derivation ----------------
def speed_multiplier(n: int) -> float:
    return (CREATURE.max_vertices + 1 - n) / CREATURE.max_vertices

def size_multiplier(n: int) -> float:
    span = CREATURE.max_vertices - CREATURE.min_vertices
    if span <= 0:
        return 1.0
    return 1.0 + (n - CREATURE.min_vertices) / span * 0.5

def effective_max_vertices() -> int:
    lo, hi = CREATURE.min_vertices, CREATURE.max_vertices
    d = max(0.0, min(1.0, CREATURE.diversity))
    return lo + int(round((hi - lo) * d))

def random_color() -> HSL:
    return (float(RNG.randint(0, 359)), 80.0, 60.0)


# ---------------- classification policies ----------------
class ClassificationPolicy:
    name = "base"

    def draw(self) -> Form:
        raise NotImplementedError

    def reroll(self, form: Form) -> Form:
        raise NotImplementedError


class SpeciesRoster(ClassificationPolicy):
    """
    A fixed roster of herbivore (virus) and predator (twisted) silhouettes,
    generated once per run. Spawns pick a type by herbivore_probability and
    then a species uniformly.
    """
    name = "roster"

    def __init__(self, herbivore_count: int = None, predator_count: int = None):
        hc = CREATURE.herbivore_species_count if herbivore_count is None else herbivore_count
        pc = CREATURE.predator_species_count if predator_count is None else predator_count
        self.herbivores: List[Form] = [self._new_form(True, i) for i in range(hc)]
        self.predators: List[Form] = [self._new_form(False, i) for i in range(pc)]

    @staticmethod
    def _new_form(herbivore: bool, species: Optional[int]) -> Form:
        n = RNG.randint(CREATURE.min_vertices, CREATURE.max_vertices)
        return Form(num_vertices=n, herbivore=herbivore, shape=_shape_for(n, herbivore), species=species)

    def draw(self) -> Form:
        herb = RNG.random() < CREATURE.herbivore_probability
        roster = self.herbivores if herb else self.predators
        return roster[RNG.randrange(len(roster))]

    def reroll(self, form: Form) -> Form:
        # type is kept, the silhouette leaves the roster
        n = RNG.randint(CREATURE.min_vertices, effective_max_vertices())
        return Form(num_vertices=n, herbivore=form.herbivore, shape=_shape_for(n, form.herbivore))


class ParametricClassification(ClassificationPolicy):
    """Every spawn rolls its own vertex count; odd counts are herbivores."""
    name = "parametric"

    def draw(self) -> Form:
        n = RNG.randint(CREATURE.min_vertices, effective_max_vertices())
        herb = n % 2 == 1
        return Form(num_vertices=n, herbivore=herb, shape=generate_twisted_shape(n, 1.0))

    def reroll(self, form: Form) -> Form:
        return self.draw()


_POLICIES = {
    SpeciesRoster.name: SpeciesRoster,
    ParametricClassification.name: ParametricClassification,
}

def get_classification_policy(name: str | None = None) -> ClassificationPolicy:
    name = POLICY.classification if name is None else name
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(f"unknown classification policy {name!r}") from None


# ---------------- factory ----------------
def _inherited_form(parent: Creature) -> Form:
    r = parent.radius if parent.radius > 0 else 1.0
    return Form(
        num_vertices=parent.num_vertices,
        herbivore=parent.herbivore,
        shape=_scale(parent.base_shape, 1.0 / r),
        species=parent.species,
    )


def build_creature(form: Form, x: float, y: float) -> Creature:
    """Derive size, speed and a random heading from a form."""
    n = form.num_vertices
    if form.herbivore:
        size_f, speed_f = CREATURE.herbivore_size_factor, CREATURE.herbivore_speed_factor
    else:
        size_f, speed_f = CREATURE.predator_size_factor, CREATURE.predator_speed_factor
    radius = CREATURE.creature_radius * size_multiplier(n) * size_f
    speed = CREATURE.movement_speed * speed_multiplier(n) * speed_f
    return Creature(
        x=x, y=y,
        dx=RNG.uniform(-speed, speed),
        dy=RNG.uniform(-speed, speed),
        num_vertices=n,
        herbivore=form.herbivore,
        base_shape=_scale(form.shape, radius),
        color=random_color(),
        energy=CREATURE.base_energy,
        max_energy=CREATURE.max_energy_threshold,
        radius=radius,
        speed=speed,
        species=form.species,
    )


def spawn_form(policy: ClassificationPolicy, parent: Creature | None = None) -> Form:
    if parent is not None and CREATURE.offspring_inherit_species:
        form = _inherited_form(parent)
    else:
        form = policy.draw()
    if RNG.random() < CREATURE.spawn_mutation_chance:
        form = policy.reroll(form)
    return form


def spawn_creature(
    policy: ClassificationPolicy,
    x: float | None = None,
    y: float | None = None,
    parent: Creature | None = None,
) -> Creature:
    """
    New creature at (x, y), or anywhere in the world when omitted.
    With a parent it inherits color, energy and max_energy.
    """
    if x is None:
        x = RNG.uniform(0.0, TERRAIN.width)
    if y is None:
        y = RNG.uniform(0.0, TERRAIN.height)
    c = build_creature(spawn_form(policy, parent), x, y)
    if parent is not None:
        c.color = parent.color
        c.energy = parent.energy
        c.max_energy = parent.max_energy
    return c
