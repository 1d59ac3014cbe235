import pytest

from color_economy.sim import config
from color_economy.sim.geometry import polygon_center
from color_economy.sim.models import Creature, Patch
from color_economy.sim.rng import RNG

_SINGLETONS = (
    config.TERRAIN, config.PATCH, config.CREATURE, config.POPULATION,
    config.SEEK, config.POLICY, config.SIM,
)


@pytest.fixture(autouse=True)
def restore_config():
    """Tests tweak the config singletons freely; put them back afterwards."""
    saved = [dict(vars(obj)) for obj in _SINGLETONS]
    RNG.seed(1234)
    yield
    for obj, values in zip(_SINGLETONS, saved):
        vars(obj).clear()
        vars(obj).update(values)


@pytest.fixture
def make_creature():
    def _make(x=0.0, y=0.0, herbivore=True, num_vertices=3, energy=80.0, radius=10.0,
              dx=0.0, dy=0.0, speed=1.0, max_energy=150.0, color=(120.0, 80.0, 60.0)):
        shape = tuple(regular_polygon(0.0, 0.0, radius, num_vertices))
        return Creature(
            x=x, y=y, dx=dx, dy=dy,
            num_vertices=num_vertices, herbivore=herbivore, base_shape=shape,
            color=color, energy=energy, max_energy=max_energy,
            radius=radius, speed=speed,
        )
    return _make


@pytest.fixture
def make_patch():
    def _make(vertices, resource=100.0, hue=0.0, light=70.0):
        vertices = tuple(vertices)
        return Patch(
            vertices=vertices, center=polygon_center(vertices),
            hue=hue, sat=100.0, light=light, resource=resource,
            base_color=(hue, 100.0, light),
        )
    return _make


def regular_polygon(cx, cy, r, n):
    import math
    return [(cx + r * math.cos(2 * math.pi * i / n), cy + r * math.sin(2 * math.pi * i / n))
            for i in range(n)]


@pytest.fixture
def polygon():
    return regular_polygon
