# color_economy/main.py
from __future__ import annotations
import argparse
import sys

from .sim.config import SIM, POLICY, POPULATION, CLASSIFICATION_POLICIES, PATCH_COLOR_POLICIES, COLLISION_POLICIES, set_initial_creatures
from .sim.live import LiveSim
from .sim.metrics import append_csv


def format_stats(s) -> str:
    return (
        f"Tick {s['tick']:5d} | N={s['n']:4d} "
        f"pred={s['predators']:4d} prey={s['herbivores']:4d} "
        f"energy={s['energy_frac']:.2f} plants={s['resource_frac']:.2f} "
        f"types={s['distinct_types']} vstd={s['vertex_std']:.2f}"
    )


def run():
    parser = argparse.ArgumentParser(description="ColorEconomy: herbivores and predators on a living Voronoi terrain")
    parser.add_argument("--ticks", type=int, default=SIM.ticks)
    parser.add_argument("--seed", type=int, default=SIM.seed)
    parser.add_argument("--creatures", type=int, default=None, help="initial population (cap follows at 10x)")
    parser.add_argument("--csv", type=str, default=SIM.track_csv)
    parser.add_argument("--every", type=int, default=SIM.report_every, help="report/log every N ticks")
    parser.add_argument("--plot", action="store_true", default=SIM.enable_plot)
    parser.add_argument("--classification", choices=CLASSIFICATION_POLICIES, default=POLICY.classification)
    parser.add_argument("--patch-color", choices=PATCH_COLOR_POLICIES, default=POLICY.patch_color)
    parser.add_argument("--collision", choices=COLLISION_POLICIES, default=POLICY.collision)
    parser.add_argument("--ui", action="store_true", help="launch real-time UI")
    args = parser.parse_args()

    POLICY.classification = args.classification
    POLICY.patch_color = args.patch_color
    POLICY.collision = args.collision
    if args.creatures is not None:
        set_initial_creatures(args.creatures)

    if args.ui:
        from .ui.app import run_ui
        run_ui(seed=args.seed)
        return

    try:
        live = LiveSim(seed=args.seed)
    except ValueError as e:
        print(f"[sim] invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    print(f"[sim] {len(live.patches)} patches, {len(live.creatures)} creatures "
          f"({POLICY.classification}/{POLICY.patch_color}/{POLICY.collision})")
    every = max(1, args.every)
    for _ in range(args.ticks):
        live.tick()
        if live.tick_count % every == 0:
            summary = live.stats()
            print(format_stats(summary))
            if args.csv:
                append_csv(args.csv, summary)
        if not live.creatures and not POPULATION.reseed_on_extinction:
            print(f"[sim] extinct at tick {live.tick_count}")
            break

    if args.plot:
        from .sim.visualize import snapshot
        snapshot(live)

if __name__ == "__main__":
    run()
