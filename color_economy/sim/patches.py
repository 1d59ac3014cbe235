# color_economy/sim/patches.py
from __future__ import annotations
from typing import List, Optional
import math

from .models import Patch, Splash, Creature, HSL
from .geometry import point_in_polygon, dist
from .config import PATCH, POLICY
from .rng import RNG


# ---------------- color helpers ----------------
def wrap_hue(h: float) -> float:
    """Into [0, 360). `-1e-20 % 360` is 360.0 in float math."""
    h = h % 360.0
    return 0.0 if h >= 360.0 else h


def blend_hsl(c1: HSL, c2: HSL, weight: float) -> HSL:
    """`weight` of c1, the rest of c2; hue travels the short way round."""
    h1, s1, l1 = c1
    h2, s2, l2 = c2
    dh = h2 - h1
    if abs(dh) > 180:
        dh = dh - 360 if dh > 0 else dh + 360
    h = wrap_hue(h1 + (1.0 - weight) * dh)
    return (h, s1 * weight + s2 * (1.0 - weight), l1 * weight + l2 * (1.0 - weight))


def display_color(p: Patch) -> HSL:
    """Hue (+ decaying splash), saturation scaled by resource, lightness."""
    hue = p.hue
    if p.splash is not None:
        hue += p.splash.hue_offset * p.splash.life
    sat = p.sat * (p.resource / 100.0)
    return (wrap_hue(hue), sat, p.light)


def _recover_resource(p: Patch) -> None:
    p.resource = min(100.0, max(0.0, p.resource + PATCH.patch_resource_recovery))


# ---------------- color policies ----------------
class PatchColorPolicy:
    name = "base"

    def update(self, patch: Patch, all_patches: List[Patch]) -> None:
        raise NotImplementedError

    def on_feed(self, patch: Patch, creature: Creature) -> None:
        pass


class DiffusionColorPolicy(PatchColorPolicy):
    """
    Hue diffuses between nearby patches, hue and light drift, and random
    splashes flash a hue offset that fades out. Grazing shows up only as lost
    saturation.
    """
    name = "diffusion"

    def _neighbor_mean_hue(self, patch: Patch, all_patches: List[Patch]) -> Optional[float]:
        sx = sy = 0.0
        count = 0
        for other in all_patches:
            if other is patch:
                continue
            if dist(other.center, patch.center) < PATCH.neighbor_threshold:
                a = math.radians(other.hue)
                sx += math.cos(a)
                sy += math.sin(a)
                count += 1
        if count == 0 or math.hypot(sx, sy) < 1e-9:
            return None
        return math.degrees(math.atan2(sy, sx)) % 360.0

    def update(self, patch: Patch, all_patches: List[Patch]) -> None:
        mean = self._neighbor_mean_hue(patch, all_patches)
        if mean is not None:
            delta = (mean - patch.hue + 540.0) % 360.0 - 180.0
            patch.hue += delta * PATCH.hue_adjustment_factor

        patch.hue += RNG.uniform(-PATCH.hue_random_drift, PATCH.hue_random_drift)
        patch.light += RNG.uniform(-PATCH.light_drift, PATCH.light_drift)
        patch.hue = wrap_hue(patch.hue)
        patch.light = min(PATCH.light_clamp_max, max(PATCH.light_clamp_min, patch.light))

        _recover_resource(patch)

        if patch.splash is None and RNG.random() < PATCH.splash_probability:
            patch.splash = Splash(
                hue_offset=RNG.uniform(-PATCH.splash_max_offset, PATCH.splash_max_offset),
                life=1.0,
            )
        if patch.splash is not None:
            patch.splash.life -= PATCH.splash_life_decay
            if patch.splash.life <= 0:
                patch.splash = None

        patch.base_color = display_color(patch)


class FeedOverlayColorPolicy(PatchColorPolicy):
    """
    A grazed patch takes the grazer's color, then heals back to its own
    color while left alone.
    """
    name = "feed_overlay"

    def update(self, patch: Patch, all_patches: List[Patch]) -> None:
        _recover_resource(patch)
        patch.light = min(PATCH.light_clamp_max, max(PATCH.light_clamp_min, patch.light))
        patch.overlay = min(1.0, patch.overlay + PATCH.overlay_recovery)
        own = display_color(patch)
        if patch.fed_color is None or patch.overlay >= 1.0:
            patch.fed_color = None
            patch.base_color = own
        else:
            patch.base_color = blend_hsl(patch.fed_color, own, 1.0 - patch.overlay)

    def on_feed(self, patch: Patch, creature: Creature) -> None:
        patch.overlay = 0.0
        patch.fed_color = creature.color
        patch.base_color = creature.color


_POLICIES = {
    DiffusionColorPolicy.name: DiffusionColorPolicy,
    FeedOverlayColorPolicy.name: FeedOverlayColorPolicy,
}

def get_patch_color_policy(name: str | None = None) -> PatchColorPolicy:
    name = POLICY.patch_color if name is None else name
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(f"unknown patch color policy {name!r}") from None


# ---------------- world queries ----------------
def patch_under(x: float, y: float, patches: List[Patch]) -> Optional[Patch]:
    for p in patches:
        if point_in_polygon((x, y), p.vertices):
            return p
    return None


def patch_energy_boost(patch: Optional[Patch]) -> float:
    if patch is None:
        return 0.0
    return (patch.light - PATCH.boost_light_pivot) * PATCH.boost_scale


def update_patches(patches: List[Patch], policy: PatchColorPolicy) -> None:
    for p in patches:
        if not p.vertices:
            continue
        policy.update(p, patches)
