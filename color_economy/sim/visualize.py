# color_economy/sim/visualize.py
from __future__ import annotations
import colorsys
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MplPolygon

from .models import HSL
from .live import LiveSim

def hsl_to_rgb01(color: HSL):
    h, s, l = color
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l / 100.0, max(0.0, min(1.0, s / 100.0)))
    return (r, g, b)

def snapshot(live: LiveSim, title: str = "", path: str | None = None):
    fig, ax = plt.subplots(figsize=(8, 8 * live.height / live.width))
    ax.set_xlim(0, live.width)
    ax.set_ylim(live.height, 0)   # screen orientation
    ax.set_aspect("equal")
    for p in live.patch_snapshots():
        ax.add_patch(MplPolygon(p.vertices, closed=True, facecolor=hsl_to_rgb01(p.color),
                                edgecolor="none"))
    for c in live.creature_snapshots():
        edge = "red" if c.colliding else ("yellow" if c.cloning else "black")
        ax.add_patch(MplPolygon(c.shape, closed=True, facecolor=hsl_to_rgb01(c.color),
                                edgecolor=edge, linewidth=1.0))
    stats = live.stats()
    ax.set_title(title or f"Tick {stats['tick']}  N={stats['n']}  "
                          f"pred={stats['predators']} prey={stats['herbivores']}")
    plt.tight_layout()
    if path:
        fig.savefig(path, dpi=120)
        plt.close(fig)
    else:
        plt.show()
