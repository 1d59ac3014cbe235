# color_economy/sim/models.py
from dataclasses import dataclass
from typing import Optional, Tuple

Vec = Tuple[float, float]
Polygon = Tuple[Vec, ...]
HSL = Tuple[float, float, float]   # hue [0,360), saturation %, lightness %

@dataclass
class Splash:
    hue_offset: float
    life: float = 1.0

@dataclass
class Patch:
    vertices: Polygon
    center: Vec
    hue: float
    sat: float
    light: float
    resource: float
    base_color: HSL
    splash: Optional[Splash] = None
    overlay: float = 1.0          # 0 = freshly grazed, 1 = healed
    fed_color: Optional[HSL] = None

    @property
    def sides(self) -> int:
        return len(self.vertices)

@dataclass
class Creature:
    x: float
    y: float
    dx: float
    dy: float
    num_vertices: int
    herbivore: bool
    base_shape: Polygon
    color: HSL
    energy: float
    max_energy: float
    radius: float
    speed: float
    colliding: bool = False
    clone_timer: int = 0
    species: Optional[int] = None   # roster index, None for parametric spawns

    def pos(self) -> Vec:
        return (self.x, self.y)
