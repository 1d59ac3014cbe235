import math

import pytest

from color_economy.sim import config
from color_economy.sim.behaviors import (
    best_patch_for, can_graze, herbivore_feed, predator_seek_prey, steer_toward,
)
from color_economy.sim.engine import (
    EnergyThresholdCollision, StrictCollision, birth_threshold, creatures_collide,
    enforce_population_cap, get_collision_policy, integrate, maybe_reproduce,
    remove_dead, resolve_collisions, step_creatures, wrap,
)
from color_economy.sim.genetics import SpeciesRoster
from color_economy.sim.patches import DiffusionColorPolicy


def square(x0, y0, s=10.0):
    return [(x0, y0), (x0 + s, y0), (x0 + s, y0 + s), (x0, y0 + s)]


# ---------------- motion ----------------
def test_wrap_is_toroidal():
    assert wrap(-1.0, 800.0) == 799.0
    assert wrap(801.0, 800.0) == 1.0
    assert wrap(400.0, 800.0) == 400.0


def test_integrate_moves_and_wraps(make_creature):
    c = make_creature(x=799.5, y=0.5, dx=1.0, dy=-1.0)
    integrate(c, 800.0, 600.0)
    assert c.x == pytest.approx(0.5)
    assert c.y == pytest.approx(599.5)


# ---------------- collisions ----------------
def test_collision_is_symmetric(make_creature):
    a = make_creature(x=0.0, y=0.0, radius=10.0)
    b = make_creature(x=15.0, y=0.0, radius=10.0)
    far = make_creature(x=25.0, y=0.0, radius=10.0)
    assert creatures_collide(a, b) and creatures_collide(b, a)
    assert not creatures_collide(a, far) and not creatures_collide(far, a)


def test_radius_ten_pair_collides_at_5_not_at_30(make_creature):
    a = make_creature(x=0.0, y=0.0, radius=10.0)
    near = make_creature(x=5.0, y=0.0, radius=10.0)
    far = make_creature(x=30.0, y=0.0, radius=10.0)
    assert resolve_collisions([a, near], EnergyThresholdCollision()) == 1
    assert a.colliding and near.colliding
    assert resolve_collisions([a, far], EnergyThresholdCollision()) == 0
    assert not a.colliding and not far.colliding


def test_one_collision_per_pair_within_radius_sum(make_creature):
    a = make_creature(x=5.0, y=0.0, radius=10.0)
    b = make_creature(x=30.0, y=0.0, radius=10.0)
    c = make_creature(x=20.0, y=0.0, radius=10.0)
    hits = resolve_collisions([a, b], EnergyThresholdCollision())
    assert hits == 0
    assert not a.colliding and not b.colliding
    hits = resolve_collisions([a, b, c], EnergyThresholdCollision())
    assert hits == 2
    assert a.colliding and b.colliding and c.colliding


def test_stronger_side_wins_a_mixed_encounter(make_creature):
    pred = make_creature(x=0.0, herbivore=False, energy=100.0)
    prey = make_creature(x=5.0, herbivore=True, energy=50.0)
    resolve_collisions([pred, prey], EnergyThresholdCollision())
    assert pred.energy == pytest.approx(110.0)
    assert prey.energy == pytest.approx(30.0)


def test_strong_herbivore_beats_weak_predator(make_creature):
    pred = make_creature(x=0.0, herbivore=False, energy=50.0)
    prey = make_creature(x=5.0, herbivore=True, energy=100.0)
    resolve_collisions([pred, prey], EnergyThresholdCollision())
    assert prey.energy == pytest.approx(110.0)
    assert pred.energy == pytest.approx(30.0)


def test_strict_policy_predator_always_wins(make_creature):
    pred = make_creature(x=0.0, herbivore=False, energy=50.0)
    prey = make_creature(x=5.0, herbivore=True, energy=100.0)
    resolve_collisions([prey, pred], StrictCollision())
    assert pred.energy == pytest.approx(60.0)
    assert prey.energy == pytest.approx(80.0)


def test_close_match_bounces(make_creature):
    pred = make_creature(x=0.0, herbivore=False, energy=100.0)
    prey = make_creature(x=5.0, herbivore=True, energy=105.0)
    resolve_collisions([pred, prey], EnergyThresholdCollision())
    assert (pred.energy, prey.energy) == (100.0, 105.0)
    assert pred.dx == pytest.approx(-config.CREATURE.bounce_factor)
    assert prey.dx == pytest.approx(config.CREATURE.bounce_factor)


def test_same_type_bounces(make_creature):
    a = make_creature(x=0.0, y=0.0, herbivore=False, energy=150.0)
    b = make_creature(x=0.0, y=5.0, herbivore=False, energy=20.0)
    resolve_collisions([a, b], EnergyThresholdCollision())
    assert (a.energy, b.energy) == (150.0, 20.0)
    assert a.dy == pytest.approx(-1.0)
    assert b.dy == pytest.approx(1.0)


def test_colliding_flag_is_cleared_each_pass(make_creature):
    a = make_creature(x=0.0)
    b = make_creature(x=5.0)
    resolve_collisions([a, b], EnergyThresholdCollision())
    b.x = 500.0
    resolve_collisions([a, b], EnergyThresholdCollision())
    assert not a.colliding and not b.colliding


def test_unknown_collision_policy_rejected():
    with pytest.raises(ValueError):
        get_collision_policy("sumo")


# ---------------- reproduction ----------------
def test_reproduction_halves_energy_and_adds_one(make_creature):
    config.CREATURE.spawn_mutation_chance = 0.0
    config.CREATURE.energy_decay_rate = 0.0
    parent = make_creature(x=50.0, y=50.0, energy=150.0, max_energy=150.0)
    creatures = [parent]
    creatures = step_creatures(
        creatures, [], SpeciesRoster(), DiffusionColorPolicy(), EnergyThresholdCollision(),
        800.0, 600.0,
    )
    assert len(creatures) == 2
    child = creatures[1]
    assert parent.energy == pytest.approx(75.0)
    assert child.energy == pytest.approx(75.0)
    assert child.num_vertices == parent.num_vertices
    assert parent.clone_timer > 0


def test_birth_rate_scales_threshold(make_creature):
    c = make_creature(herbivore=True, max_energy=150.0)
    config.POPULATION.prey_birth_rate = 2.0
    assert birth_threshold(c) == pytest.approx(75.0)
    config.POPULATION.prey_birth_rate = 0.0
    assert birth_threshold(c) == math.inf
    c.energy = 1e9
    assert maybe_reproduce(c, SpeciesRoster(), 800.0, 600.0) is None


def test_offspring_lands_inside_world(make_creature):
    parent = make_creature(x=0.5, y=0.5, energy=200.0)
    child = maybe_reproduce(parent, SpeciesRoster(), 800.0, 600.0)
    assert 0.0 <= child.x <= 800.0
    assert 0.0 <= child.y <= 600.0


# ---------------- energy and population ----------------
def test_decay_off_terrain(make_creature):
    c = make_creature(x=100.0, y=100.0, energy=80.0)
    step_creatures([c], [], SpeciesRoster(), DiffusionColorPolicy(), EnergyThresholdCollision(),
                   800.0, 600.0)
    assert c.energy == pytest.approx(80.0 - config.CREATURE.energy_decay_rate)


def test_population_cap_keeps_highest_energy_in_order(make_creature):
    creatures = [make_creature(energy=e) for e in (5.0, 1.0, 4.0, 2.0, 3.0)]
    kept = enforce_population_cap(creatures, 3)
    assert [c.energy for c in kept] == [5.0, 4.0, 3.0]
    assert enforce_population_cap(creatures, 10) is creatures


def test_dead_are_removed(make_creature):
    creatures = [make_creature(energy=e) for e in (0.0, -3.0, 0.1)]
    assert [c.energy for c in remove_dead(creatures)] == [0.1]


def test_population_never_exceeds_cap(make_creature):
    config.POPULATION.max_population = 4
    config.CREATURE.energy_decay_rate = 0.0
    creatures = [make_creature(x=100.0 * i + 50.0, y=50.0, energy=150.0) for i in range(4)]
    creatures = step_creatures(
        creatures, [], SpeciesRoster(), DiffusionColorPolicy(), EnergyThresholdCollision(),
        800.0, 600.0,
    )
    assert len(creatures) <= 4


# ---------------- grazing ----------------
def test_feeding_drains_patch(make_creature, make_patch):
    me = make_creature(num_vertices=4, herbivore=True, energy=80.0)
    patch = make_patch(square(0, 0), resource=10.0)
    assert herbivore_feed(me, patch, DiffusionColorPolicy())
    assert patch.resource == pytest.approx(9.5)
    assert me.energy == pytest.approx(80.2)


def test_feeding_requires_resource(make_creature, make_patch):
    me = make_creature(num_vertices=4, herbivore=True, energy=80.0)
    patch = make_patch(square(0, 0), resource=0.0)
    assert not herbivore_feed(me, patch, DiffusionColorPolicy())
    assert me.energy == 80.0
    assert patch.resource == 0.0


def test_feeding_requires_compatible_sides(make_creature, make_patch):
    patch = make_patch(square(0, 0))
    assert can_graze(make_creature(num_vertices=2), patch)
    assert not can_graze(make_creature(num_vertices=3), patch)
    assert not can_graze(make_creature(num_vertices=4, herbivore=False), patch)
    assert not can_graze(make_creature(num_vertices=4), None)


def test_feeding_never_drives_resource_negative(make_creature, make_patch):
    me = make_creature(num_vertices=4)
    patch = make_patch(square(0, 0), resource=0.2)
    herbivore_feed(me, patch, DiffusionColorPolicy())
    assert patch.resource == 0.0


def test_herbivore_seeks_best_scoring_patch(make_creature, make_patch):
    me = make_creature(x=0.0, y=0.0, num_vertices=4)
    near_poor = make_patch(square(10, 0), resource=20.0)
    far_rich = make_patch(square(100, 0), resource=100.0)
    wrong_sides = make_patch([(0, 50), (10, 50), (5, 60)], resource=100.0)
    assert best_patch_for(me, [near_poor, far_rich, wrong_sides], None) is far_rich
    assert best_patch_for(me, [far_rich], far_rich) is None


# ---------------- steering ----------------
def test_predator_steers_toward_nearest_herbivore(make_creature):
    pred = make_creature(x=0.0, y=0.0, herbivore=False)
    near = make_creature(x=10.0, y=0.0, herbivore=True)
    far = make_creature(x=0.0, y=-100.0, herbivore=True)
    other_pred = make_creature(x=1.0, y=1.0, herbivore=False)
    assert predator_seek_prey(pred, [pred, far, near, other_pred])
    assert pred.dx == pytest.approx(config.SEEK.seek_acceleration)
    assert pred.dy == pytest.approx(0.0)


def test_predator_without_prey_keeps_course(make_creature):
    pred = make_creature(herbivore=False, dx=0.3, dy=0.1)
    assert not predator_seek_prey(pred, [pred])
    assert (pred.dx, pred.dy) == (0.3, 0.1)


def test_steering_is_speed_capped(make_creature):
    c = make_creature(speed=1.0, dx=2.0, dy=0.0)
    steer_toward(c, (100.0, 0.0))
    assert math.hypot(c.dx, c.dy) == pytest.approx(config.SEEK.max_speed_factor * c.speed)
