import math

import pytest

from color_economy.sim import config
from color_economy.sim.genetics import (
    ParametricClassification, SpeciesRoster, effective_max_vertices,
    generate_twisted_shape, generate_virus_shape, get_classification_policy,
    size_multiplier, spawn_creature, speed_multiplier,
)


def test_all_herbivores_when_probability_is_one():
    config.CREATURE.herbivore_probability = 1.0
    roster = SpeciesRoster()
    assert all(spawn_creature(roster).herbivore for _ in range(1000))


def test_all_predators_when_probability_is_zero():
    config.CREATURE.herbivore_probability = 0.0
    config.CREATURE.spawn_mutation_chance = 0.0
    roster = SpeciesRoster()
    assert not any(spawn_creature(roster).herbivore for _ in range(500))


def test_parametric_type_follows_vertex_parity():
    policy = ParametricClassification()
    for _ in range(200):
        c = spawn_creature(policy)
        assert c.herbivore == (c.num_vertices % 2 == 1)
        assert c.species is None


def test_zero_diversity_pins_vertex_count():
    config.CREATURE.diversity = 0.0
    assert effective_max_vertices() == config.CREATURE.min_vertices
    policy = ParametricClassification()
    assert {spawn_creature(policy).num_vertices for _ in range(100)} == {config.CREATURE.min_vertices}


def test_vertex_counts_stay_in_bounds():
    for policy in (SpeciesRoster(), ParametricClassification()):
        for _ in range(300):
            c = spawn_creature(policy)
            assert config.CREATURE.min_vertices <= c.num_vertices <= config.CREATURE.max_vertices
            assert len(c.base_shape) == c.num_vertices
            assert c.radius > 0 and c.speed > 0


def test_more_vertices_is_slower_and_bigger():
    lo, hi = config.CREATURE.min_vertices, config.CREATURE.max_vertices
    speeds = [speed_multiplier(n) for n in range(lo, hi + 1)]
    sizes = [size_multiplier(n) for n in range(lo, hi + 1)]
    assert speeds == sorted(speeds, reverse=True)
    assert sizes == sorted(sizes)
    assert size_multiplier(lo) == 1.0
    assert size_multiplier(hi) == pytest.approx(1.5)


def test_herbivores_are_bigger_and_slower_than_matching_predators():
    config.CREATURE.spawn_mutation_chance = 0.0
    roster = SpeciesRoster(herbivore_count=1, predator_count=1)
    herb_form, pred_form = roster.herbivores[0], roster.predators[0]
    config.CREATURE.herbivore_probability = 1.0
    herb = spawn_creature(roster)
    config.CREATURE.herbivore_probability = 0.0
    pred = spawn_creature(roster)
    # normalize away the vertex-count effect
    assert herb.radius / size_multiplier(herb_form.num_vertices) > pred.radius / size_multiplier(pred_form.num_vertices)
    assert herb.speed / speed_multiplier(herb_form.num_vertices) < pred.speed / speed_multiplier(pred_form.num_vertices)


def test_shape_radii():
    for _ in range(50):
        for x, y in generate_virus_shape(6, 10.0):
            assert 8.0 - 1e-9 <= math.hypot(x, y) <= 12.0 + 1e-9
        for x, y in generate_twisted_shape(5, 10.0):
            assert 5.0 - 1e-9 <= math.hypot(x, y) <= 15.0 + 1e-9


def test_virus_shape_angles_are_evenly_spaced():
    shape = generate_virus_shape(4, 1.0)
    angles = [math.atan2(y, x) % (2 * math.pi) for x, y in shape]
    assert angles == pytest.approx([0.0, math.pi / 2, math.pi, 3 * math.pi / 2])


def test_roster_draws_come_from_the_roster():
    config.CREATURE.spawn_mutation_chance = 0.0
    roster = SpeciesRoster()
    assert len(roster.herbivores) == config.CREATURE.herbivore_species_count
    assert len(roster.predators) == config.CREATURE.predator_species_count
    for _ in range(100):
        form = roster.draw()
        pool = roster.herbivores if form.herbivore else roster.predators
        assert any(form is f for f in pool)


def test_roster_reroll_keeps_type():
    roster = SpeciesRoster()
    for form in roster.herbivores + roster.predators:
        fresh = roster.reroll(form)
        assert fresh.herbivore == form.herbivore
        assert fresh.species is None


def test_offspring_inherit_form_without_mutation():
    config.CREATURE.spawn_mutation_chance = 0.0
    roster = SpeciesRoster()
    parent = spawn_creature(roster)
    parent.energy = 42.0
    child = spawn_creature(roster, x=1.0, y=2.0, parent=parent)
    assert (child.x, child.y) == (1.0, 2.0)
    assert child.num_vertices == parent.num_vertices
    assert child.herbivore == parent.herbivore
    assert child.species == parent.species
    assert child.color == parent.color
    assert child.energy == 42.0
    assert child.radius == pytest.approx(parent.radius)
    for (cx, cy), (px, py) in zip(child.base_shape, parent.base_shape):
        assert cx == pytest.approx(px)
        assert cy == pytest.approx(py)


def test_fresh_spawn_has_base_energy_and_position_in_world():
    c = spawn_creature(SpeciesRoster())
    assert c.energy == config.CREATURE.base_energy
    assert c.max_energy == config.CREATURE.max_energy_threshold
    assert 0.0 <= c.x <= config.TERRAIN.width
    assert 0.0 <= c.y <= config.TERRAIN.height


def test_unknown_classification_rejected():
    assert isinstance(get_classification_policy("parametric"), ParametricClassification)
    with pytest.raises(ValueError):
        get_classification_policy("by_color")
