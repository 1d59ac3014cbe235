#!/usr/bin/env python3
"""
Run a simulation, then analyze what it logged.

  UI mode (default): launch the pygame viewer, then analyze only the
  session it just wrote to runs/ui_stats.csv + runs/ui_types.csv.
  Headless mode:     run `color_economy.main` for --ticks into a fresh CSV,
  then analyze that file.

Usage:
  python run_sim_then_analyze.py --outdir reports --tag demo
  python run_sim_then_analyze.py --headless --ticks 3000 --seed 7
"""
import argparse
import os
import subprocess
import sys
import time

ANALYZER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "analyze_stats_csv.py")


def _call(cmd) -> int:
    print("[launcher] Running:", " ".join(cmd))
    return subprocess.call(cmd)


def run_ui(args) -> int:
    ret = _call([sys.executable, "-m", "color_economy.main", "--ui", "--seed", str(args.seed)])
    if ret != 0:
        print(f"[launcher] UI exited with code {ret}", file=sys.stderr)
    if not os.path.exists(args.overall):
        print("[launcher] No UI stats yet; did a log interval pass?")
        return 0
    return _call([
        sys.executable, ANALYZER,
        "--overall", args.overall, "--types", args.types,
        "--outdir", args.outdir, "--tag", args.tag,
        "--session", "latest",
    ])


def run_headless(args) -> int:
    csv_path = os.path.join("runs", f"headless_{time.strftime('%Y%m%d_%H%M%S')}.csv")
    ret = _call([
        sys.executable, "-m", "color_economy.main",
        "--ticks", str(args.ticks), "--seed", str(args.seed),
        "--every", str(args.every), "--csv", csv_path,
    ])
    if ret != 0:
        print(f"[launcher] simulation exited with code {ret}", file=sys.stderr)
        return ret
    if not os.path.exists(csv_path):
        print("[launcher] Population died out before the first report; nothing to analyze.")
        return 0
    return _call([
        sys.executable, ANALYZER,
        "--overall", csv_path, "--types", "",
        "--outdir", args.outdir, "--tag", args.tag,
    ])


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--headless", action="store_true", help="skip the UI and run a fixed number of ticks")
    ap.add_argument("--ticks", type=int, default=2000)
    ap.add_argument("--every", type=int, default=50)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--overall", default="runs/ui_stats.csv")
    ap.add_argument("--types", default="runs/ui_types.csv")
    ap.add_argument("--outdir", default="reports")
    ap.add_argument("--tag", default="")
    args = ap.parse_args()

    sys.exit(run_headless(args) if args.headless else run_ui(args))

if __name__ == "__main__":
    main()
