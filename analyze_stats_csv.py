#!/usr/bin/env python3
"""
Analyze stats CSVs produced by TickCsvLogger (UI) or `color_economy.main --csv`.

Features:
  - --session latest|<id> filters to a single run (so you never need to delete runs/)
  - Saves timestamped CSV exports and PNG plots under --outdir
  - Overall plot:
      (1) Total N, predators, herbivores
      (2) Avg creature energy & avg plant resource (fractions)
      (3) Biodiversity: distinct vertex counts & vertex std-dev
  - Type plot: N per (diet, vertex count) over time
Usage examples:
  python analyze_stats_csv.py --overall runs/ui_stats.csv \
                              --types runs/ui_types.csv \
                              --outdir reports \
                              --tag demo \
                              --session latest
"""
import argparse
import os
import sys
import time
import pandas as pd

# Use non-interactive backend for headless operation
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

OVERALL_NUMERIC = ("tick", "n", "predators", "herbivores", "energy_frac",
                   "resource_frac", "vertex_std", "distinct_types")
TYPE_NUMERIC = ("tick", "num_vertices", "n", "avg_energy", "avg_radius")


# ------------------------- utilities -------------------------
def ensure_dir(p: str) -> None:
    os.makedirs(p, exist_ok=True)

def timestamp(tag: str | None = None) -> str:
    t = time.strftime("%Y%m%d_%H%M%S")
    return f"{t}__{tag}" if tag else t

def exists(path: str | None) -> bool:
    return bool(path and os.path.exists(path))

def _numeric(df: pd.DataFrame, cols) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


# ------------------------- loading ---------------------------
def load_csvs(overall_path: str, types_path: str | None):
    if not exists(overall_path):
        print(
            "\n[ERROR] Overall CSV not found.\n"
            f"  Expected: {overall_path}\n"
            "Hints:\n"
            "  • Run the UI until at least one log interval has passed.\n"
            "  • Or run `python -m color_economy.main --csv runs/stats.csv`.\n",
            file=sys.stderr
        )
        sys.exit(1)

    df_overall = _numeric(pd.read_csv(overall_path), OVERALL_NUMERIC)
    df_types = None
    if types_path and exists(types_path):
        df_types = _numeric(pd.read_csv(types_path), TYPE_NUMERIC)
    return df_overall, df_types


def latest_session_id(df: pd.DataFrame) -> str | None:
    """Return the last session_id in file order (used by --session latest)."""
    if "session_id" not in df.columns or len(df) == 0:
        return None
    s = df["session_id"].dropna()
    return s.iloc[-1] if len(s) else None


def clean_overall(df_overall: pd.DataFrame) -> pd.DataFrame:
    """Average across sessions per tick."""
    keep = [c for c in OVERALL_NUMERIC if c in df_overall.columns and c != "tick"]
    if "tick" not in df_overall.columns:
        return df_overall.copy()
    return df_overall.groupby("tick", as_index=False)[keep].mean().sort_values("tick")


# ------------------------- plotting --------------------------
def plot_overall(df: pd.DataFrame, outdir: str, tag: str | None) -> str:
    ensure_dir(outdir)
    fig, ax = plt.subplots(3, 1, figsize=(10, 11), sharex=True)

    ax[0].plot(df["tick"], df["n"], label="Total N", color="black", linewidth=2.25)
    if "predators" in df.columns:
        ax[0].plot(df["tick"], df["predators"], label="Predators", color="tab:red")
    if "herbivores" in df.columns:
        ax[0].plot(df["tick"], df["herbivores"], label="Herbivores", color="tab:green")
    ax[0].set_ylabel("Count")
    ax[0].legend(loc="best")
    ax[0].grid(alpha=0.25)

    if "energy_frac" in df.columns:
        ax[1].plot(df["tick"], df["energy_frac"], label="Avg creature energy / max")
    if "resource_frac" in df.columns:
        ax[1].plot(df["tick"], df["resource_frac"], label="Avg plant resource / 100")
    ax[1].set_ylabel("Fraction")
    ax[1].set_ylim(bottom=0)
    ax[1].legend(loc="best")
    ax[1].grid(alpha=0.25)

    if "distinct_types" in df.columns:
        ax[2].plot(df["tick"], df["distinct_types"], label="Distinct vertex counts")
    if "vertex_std" in df.columns:
        ax[2].plot(df["tick"], df["vertex_std"], color="tab:purple", label="Vertex std-dev")
    ax[2].set_xlabel("Tick")
    ax[2].set_ylabel("Diversity")
    ax[2].legend(loc="best")
    ax[2].grid(alpha=0.25)

    fig.tight_layout()
    png = os.path.join(outdir, f"overall_trends_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


def plot_types(df_types: pd.DataFrame, outdir: str, tag: str | None) -> str | None:
    needed = {"tick", "diet", "num_vertices", "n"}
    if not needed.issubset(df_types.columns):
        print(f"[WARN] types CSV missing columns {needed - set(df_types.columns)}; skipping type plot.")
        return None
    ensure_dir(outdir)
    g = df_types.groupby(["diet", "num_vertices", "tick"], as_index=False)["n"].mean()
    fig, ax = plt.subplots(figsize=(10, 6))
    for (diet, nv), sub in g.groupby(["diet", "num_vertices"]):
        style = "-" if diet == "herbivore" else "--"
        ax.plot(sub["tick"], sub["n"], style, linewidth=1.6, label=f"{diet} {int(nv)}-gon")
    ax.set_xlabel("Tick")
    ax.set_ylabel("Count")
    ax.legend(loc="best", ncols=2)
    ax.grid(alpha=0.25)
    fig.tight_layout()
    png = os.path.join(outdir, f"type_trends_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


def export_csv(df: pd.DataFrame, outdir: str, base: str, tag: str | None) -> str:
    ensure_dir(outdir)
    path = os.path.join(outdir, f"{base}_{timestamp(tag)}.csv")
    df.to_csv(path, index=False)
    print(f"[OK] Wrote {path}")
    return path


# ------------------------- main ------------------------------
def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--overall", type=str, default="runs/ui_stats.csv",
                    help="Path to overall stats CSV")
    ap.add_argument("--types", type=str, default="runs/ui_types.csv",
                    help="Path to per-type CSV (pass '' to disable)")
    ap.add_argument("--outdir", type=str, default="reports")
    ap.add_argument("--tag", type=str, default="",
                    help="Optional label to append to filenames")
    ap.add_argument("--session", type=str, default="",
                    help="Session ID to analyze; 'latest' picks the most recent session.")
    args = ap.parse_args()
    tag = args.tag or None

    df_overall, df_types = load_csvs(args.overall, args.types or None)

    if args.session:
        if "session_id" not in df_overall.columns:
            print("[WARN] --session provided but overall CSV has no session_id; ignoring.")
        else:
            sid = latest_session_id(df_overall) if args.session == "latest" else args.session
            if sid:
                df_overall = df_overall[df_overall["session_id"] == sid].copy()
                if df_types is not None and "session_id" in df_types.columns:
                    df_types = df_types[df_types["session_id"] == sid].copy()
                print(f"[OK] Filtering analysis to session_id={sid}")
            else:
                print("[WARN] Could not resolve latest session_id; analyzing all data.")

    print(f"[INFO] Overall rows after filter: {len(df_overall)}")
    if len(df_overall) == 0:
        print("[WARN] Nothing to analyze.")
        return

    overall = clean_overall(df_overall)
    export_csv(overall, args.outdir, base="overall_summary", tag=tag)
    plot_overall(overall, args.outdir, tag)

    if df_types is not None and len(df_types) > 0:
        plot_types(df_types, args.outdir, tag)
    else:
        print("[INFO] No per-type rows to plot; skipping type plot.")

    print(f"\nDone. Outputs are in: {args.outdir}")

if __name__ == "__main__":
    main()
