# color_economy/ui/csv_writer.py
from __future__ import annotations
import csv
import os
import uuid
from typing import Iterable, Dict, List, Optional, Tuple
from ..sim.models import Creature
from ..sim.metrics import summarize_tick


class TickCsvLogger:
    """
    Append tick-level UI stats to CSV files every `every` ticks.
    - overall_path: runs/ui_stats.csv
    - types_path:   runs/ui_types.csv  (optional, one row per (diet, vertex count))
    Each run gets its own session_id so you can combine logs safely later.
    """
    def __init__(self,
                 overall_path: str = "runs/ui_stats.csv",
                 types_path: str = "runs/ui_types.csv",
                 enable_types: bool = True,
                 every: int = 50):
        self.overall_path = overall_path
        self.types_path = types_path
        self.enable_types = enable_types
        self.every = max(1, int(every))
        self.session_id = uuid.uuid4().hex[:8]

        for path in (self.overall_path, self.types_path if self.enable_types else None):
            if path and os.path.dirname(path):
                os.makedirs(os.path.dirname(path), exist_ok=True)

        self._overall_header = [
            "session_id","tick","n","predators","herbivores",
            "energy_frac","resource_frac","vertex_std","distinct_types","notes"
        ]
        if self.overall_path and not os.path.exists(self.overall_path):
            with open(self.overall_path, "w", newline="") as f:
                csv.DictWriter(f, fieldnames=self._overall_header).writeheader()

        self._types_header = [
            "session_id","tick","diet","num_vertices","n","avg_energy","avg_radius"
        ]
        if self.enable_types and self.types_path and not os.path.exists(self.types_path):
            with open(self.types_path, "w", newline="") as f:
                csv.DictWriter(f, fieldnames=self._types_header).writeheader()

    @staticmethod
    def _avg(xs: List[float]) -> float:
        return (sum(xs) / len(xs)) if xs else float("nan")

    def _type_rows(self, tick: int, pop: Iterable[Creature]) -> Iterable[Dict]:
        groups: Dict[Tuple[str, int], List[Creature]] = {}
        for c in pop:
            diet = "herbivore" if c.herbivore else "predator"
            groups.setdefault((diet, c.num_vertices), []).append(c)
        for (diet, nv), members in sorted(groups.items()):
            yield dict(
                session_id=self.session_id, tick=tick,
                diet=diet, num_vertices=nv, n=len(members),
                avg_energy=self._avg([c.energy for c in members]),
                avg_radius=self._avg([c.radius for c in members]),
            )

    # ---------------- public API ----------------
    def maybe_append(self, live, notes: Optional[str] = None) -> bool:
        if live.tick_count == 0 or live.tick_count % self.every != 0:
            return False
        self.append_tick(live, notes)
        return True

    def append_tick(self, live, notes: Optional[str] = None):
        """Append one overall row and, if enabled, one row per creature type."""
        if self.overall_path:
            row = dict(session_id=self.session_id,
                       **summarize_tick(live.tick_count, live.creatures, live.patches),
                       notes=(notes or ""))
            with open(self.overall_path, "a", newline="") as f:
                csv.DictWriter(f, fieldnames=self._overall_header).writerow(row)

        if self.enable_types and self.types_path:
            with open(self.types_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=self._types_header)
                for r in self._type_rows(live.tick_count, live.creatures):
                    w.writerow(r)
