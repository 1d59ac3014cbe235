# color_economy/sim/config.py
from dataclasses import dataclass

# ------------------------------------------------------------
# WORLD / TERRAIN (PATCH GEOMETRY)
# ------------------------------------------------------------
@dataclass(frozen=False)
class TerrainConfig:
    width: float = 1280.0
    height: float = 720.0
    num_patches: int = 100
    min_patch_sides: int = 3
    max_patch_sides: int = 8
    seed_jitter: float = 50.0      # max offset of a seed from its grid slot

# ------------------------------------------------------------
# PATCH COLOR EVOLUTION & FOOD RESOURCE
# ------------------------------------------------------------
@dataclass(frozen=False)
class PatchConfig:
    neighbor_threshold: float = 300.0
    hue_adjustment_factor: float = 0.01
    hue_random_drift: float = 0.5
    light_drift: float = 0.2
    bold_saturation: float = 100.0
    bold_light_min: float = 50.0   # initial lightness range
    bold_light_max: float = 70.0
    light_clamp_min: float = 60.0  # band enforced every tick
    light_clamp_max: float = 90.0
    splash_probability: float = 0.03
    splash_max_offset: float = 30.0
    splash_life_decay: float = 0.02
    patch_resource_initial: float = 100.0
    patch_resource_recovery: float = 0.1
    patch_resource_drain: float = 0.5
    # feed-overlay policy
    overlay_recovery: float = 0.005
    # standing on a bright patch pays, a dark one costs
    boost_light_pivot: float = 60.0
    boost_scale: float = 0.01

# ------------------------------------------------------------
# CREATURES
# ------------------------------------------------------------
@dataclass(frozen=False)
class CreatureConfig:
    min_vertices: int = 3
    max_vertices: int = 8
    base_energy: float = 80.0
    max_energy_threshold: float = 150.0
    energy_decay_rate: float = 0.1
    herbivore_energy_gain: float = 0.2
    predator_energy_gain: float = 10.0
    predator_energy_loss: float = 20.0
    movement_speed: float = 1.0
    creature_radius: float = 15.0
    bounce_factor: float = 1.0
    wiggle_radius: float = 2.0     # render-only jitter of shape points
    spawn_mutation_chance: float = 0.3
    click_replacement_radius: float = 100.0
    herbivore_probability: float = 0.5
    diversity: float = 1.0
    # roster policy
    herbivore_species_count: int = 5
    predator_species_count: int = 5
    # "fat slow prey, lean fast predator"
    herbivore_size_factor: float = 2.0
    herbivore_speed_factor: float = 0.7
    predator_size_factor: float = 0.7
    predator_speed_factor: float = 1.3
    # reproduction
    clone_timer_ticks: int = 20
    clone_jitter: float = 5.0
    offspring_inherit_species: bool = True

# ------------------------------------------------------------
# POPULATION CONTROL
# ------------------------------------------------------------
@dataclass(frozen=False)
class PopulationConfig:
    initial_creatures: int = 100
    max_population: int = 1000     # 10x starting creatures
    predator_birth_rate: float = 1.0
    prey_birth_rate: float = 1.0
    reseed_on_extinction: bool = False

# ------------------------------------------------------------
# SEEKING / STEERING
# ------------------------------------------------------------
@dataclass(frozen=False)
class SeekConfig:
    seek_acceleration: float = 0.05
    seek_distance_penalty: float = 0.1   # resource points per pixel of distance
    max_speed_factor: float = 2.0        # steering never exceeds speed * factor

# ------------------------------------------------------------
# POLICY SELECTION
# ------------------------------------------------------------
@dataclass(frozen=False)
class PolicyConfig:
    classification: str = "roster"        # "roster" | "parametric"
    patch_color: str = "diffusion"        # "diffusion" | "feed_overlay"
    collision: str = "energy_threshold"   # "energy_threshold" | "strict"

# ------------------------------------------------------------
# HEADLESS SETTINGS
# ------------------------------------------------------------
@dataclass(frozen=False)
class SimConfig:
    seed: int = 42
    ticks: int = 2000
    report_every: int = 100
    track_csv: str | None = "runs/stats.csv"
    enable_plot: bool = False

CLASSIFICATION_POLICIES = ("roster", "parametric")
PATCH_COLOR_POLICIES = ("diffusion", "feed_overlay")
COLLISION_POLICIES = ("energy_threshold", "strict")

# ------------------------------------------------------------
# EXPORT SINGLETONS
# ------------------------------------------------------------
TERRAIN = TerrainConfig()
PATCH = PatchConfig()
CREATURE = CreatureConfig()
POPULATION = PopulationConfig()
SEEK = SeekConfig()
POLICY = PolicyConfig()
SIM = SimConfig()


def set_initial_creatures(n: int) -> None:
    """Start-population control: the cap follows at 10x."""
    POPULATION.initial_creatures = max(0, int(n))
    POPULATION.max_population = POPULATION.initial_creatures * 10


def validate() -> None:
    if TERRAIN.width <= 0 or TERRAIN.height <= 0:
        raise ValueError(f"world size must be positive, got {TERRAIN.width}x{TERRAIN.height}")
    if TERRAIN.min_patch_sides < 3 or TERRAIN.min_patch_sides > TERRAIN.max_patch_sides:
        raise ValueError(
            f"invalid patch side bounds [{TERRAIN.min_patch_sides}, {TERRAIN.max_patch_sides}]")
    if CREATURE.min_vertices < 1 or CREATURE.min_vertices > CREATURE.max_vertices:
        raise ValueError(
            f"invalid vertex bounds [{CREATURE.min_vertices}, {CREATURE.max_vertices}]")
    if PATCH.light_clamp_min > PATCH.light_clamp_max:
        raise ValueError("light_clamp_min must not exceed light_clamp_max")
    if POPULATION.max_population < 0:
        raise ValueError("max_population must be >= 0")
    if CREATURE.herbivore_species_count < 1 or CREATURE.predator_species_count < 1:
        raise ValueError("species rosters need at least one entry each")
    if POLICY.classification not in CLASSIFICATION_POLICIES:
        raise ValueError(f"unknown classification policy {POLICY.classification!r}")
    if POLICY.patch_color not in PATCH_COLOR_POLICIES:
        raise ValueError(f"unknown patch color policy {POLICY.patch_color!r}")
    if POLICY.collision not in COLLISION_POLICIES:
        raise ValueError(f"unknown collision policy {POLICY.collision!r}")
