# color_economy/sim/live.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List

from .models import Creature, Patch, Polygon, HSL
from .config import TERRAIN, CREATURE, POPULATION, validate
from .rng import RNG
from .terrain import create_patches
from .patches import update_patches, get_patch_color_policy, PatchColorPolicy
from .genetics import (
    ClassificationPolicy, get_classification_policy, spawn_form, build_creature, spawn_creature,
)
from .engine import step_creatures, get_collision_policy, CollisionPolicy
from .metrics import summarize_tick


@dataclass(frozen=True)
class CreatureView:
    x: float
    y: float
    shape: Polygon
    color: HSL
    energy: float
    max_energy: float
    herbivore: bool
    colliding: bool
    cloning: bool

@dataclass(frozen=True)
class PatchView:
    vertices: Polygon
    color: HSL
    resource: float


class LiveSim:
    """
    Owns the terrain, the creature list and the patch list.
    Terrain is built once; `tick()` advances everything by one step.
    Readers should only look at state between ticks.
    """
    def __init__(
        self,
        seed: int | None = None,
        width: float | None = None,
        height: float | None = None,
        classifier: ClassificationPolicy | None = None,
        color_policy: PatchColorPolicy | None = None,
        collision_policy: CollisionPolicy | None = None,
    ):
        validate()
        if seed is not None:
            RNG.seed(seed)
        self.width = TERRAIN.width if width is None else float(width)
        self.height = TERRAIN.height if height is None else float(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"world size must be positive, got {self.width}x{self.height}")

        self.classifier = classifier if classifier is not None else get_classification_policy()
        self.color_policy = color_policy if color_policy is not None else get_patch_color_policy()
        self.collision_policy = collision_policy if collision_policy is not None else get_collision_policy()

        self.patches: List[Patch] = create_patches(self.width, self.height)
        self.creatures: List[Creature] = []
        self.tick_count: int = 0
        self.reset()

    # ---------------- lifecycle ----------------
    def spawn(self, x: float | None = None, y: float | None = None) -> Creature:
        if x is None:
            x = RNG.uniform(0.0, self.width)
        if y is None:
            y = RNG.uniform(0.0, self.height)
        return spawn_creature(self.classifier, x=x, y=y)

    def _populate(self) -> None:
        self.creatures = [self.spawn() for _ in range(int(POPULATION.initial_creatures))]

    def reset(self) -> None:
        """New initial population on the same terrain and roster."""
        self._populate()
        self.tick_count = 0

    def tick(self) -> None:
        if not self.creatures and POPULATION.reseed_on_extinction:
            self._populate()
        update_patches(self.patches, self.color_policy)
        self.creatures = step_creatures(
            self.creatures, self.patches,
            self.classifier, self.color_policy, self.collision_policy,
            self.width, self.height,
        )
        self.tick_count += 1

    def replace_within(self, x: float, y: float, radius: float | None = None) -> int:
        """
        Replace every creature centered within `radius` of (x, y) by one new
        configuration. Positions are kept; everything else is regenerated.
        """
        radius = CREATURE.click_replacement_radius if radius is None else radius
        hits = [i for i, c in enumerate(self.creatures)
                if (c.x - x) ** 2 + (c.y - y) ** 2 < radius * radius]
        if not hits:
            return 0
        form = spawn_form(self.classifier)
        color = None
        for i in hits:
            old = self.creatures[i]
            fresh = build_creature(form, old.x, old.y)
            # one configuration, one color
            if color is None:
                color = fresh.color
            fresh.color = color
            self.creatures[i] = fresh
        return len(hits)

    # ---------------- read accessors ----------------
    def creature_snapshots(self) -> List[CreatureView]:
        return [
            CreatureView(
                x=c.x, y=c.y,
                shape=tuple((c.x + px, c.y + py) for px, py in c.base_shape),
                color=c.color, energy=c.energy, max_energy=c.max_energy,
                herbivore=c.herbivore, colliding=c.colliding,
                cloning=c.clone_timer > 0,
            )
            for c in self.creatures
        ]

    def patch_snapshots(self) -> List[PatchView]:
        return [PatchView(vertices=p.vertices, color=p.base_color, resource=p.resource)
                for p in self.patches]

    def stats(self) -> Dict[str, float]:
        return summarize_tick(self.tick_count, self.creatures, self.patches)

