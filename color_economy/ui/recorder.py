# color_economy/ui/recorder.py
from __future__ import annotations
import os, time
from typing import Optional
import numpy as np

class Recorder:
    """
    Capture snapshots every `stride_ticks` for offline playback (NPZ).
    Stores: creature pos, vertex count, herbivore mask, energy, tick,
    and per-patch resource.
    """
    def __init__(self, enabled=False, stride_ticks=2, world_size=(1280.0, 720.0)):
        self.enabled = enabled
        self.stride_ticks = max(1, int(stride_ticks))
        self.world_size = tuple(float(v) for v in world_size)
        self._frame = 0
        self.pos_list = []
        self.verts_list = []
        self.herb_list = []
        self.energy_list = []
        self.tick_list = []
        self.resource_list = []
        self.maxN = 0

    def toggle(self): self.enabled = not self.enabled; print(f"[Recorder] {'ON' if self.enabled else 'OFF'}")
    def clear(self):
        self._frame = 0
        self.pos_list.clear(); self.verts_list.clear(); self.herb_list.clear(); self.energy_list.clear()
        self.tick_list.clear(); self.resource_list.clear()
        self.maxN = 0
        print("[Recorder] cleared")

    def maybe_capture(self, live):
        if not self.enabled: return
        self._frame += 1
        if (self._frame % self.stride_ticks) != 0: return

        pop = live.creatures
        N = len(pop); self.maxN = max(self.maxN, N)
        pos = np.zeros((N,2), np.float32)
        verts = np.zeros((N,), np.int16)
        herb = np.zeros((N,), np.bool_)
        energy = np.zeros((N,), np.float32)

        for i, c in enumerate(pop):
            pos[i] = (c.x, c.y)
            verts[i] = c.num_vertices
            herb[i] = c.herbivore
            energy[i] = c.energy

        self.pos_list.append(pos); self.verts_list.append(verts)
        self.herb_list.append(herb); self.energy_list.append(energy)
        self.tick_list.append(live.tick_count)
        self.resource_list.append(np.array([p.resource for p in live.patches], np.float32))

    def save_npz(self, out_path: Optional[str]=None):
        if not self.pos_list:
            print("[Recorder] nothing to save"); return None

        T = len(self.pos_list); maxN = self.maxN
        P = max(len(r) for r in self.resource_list)
        pos    = np.full((T, maxN, 2), np.nan, np.float32)
        verts  = np.zeros((T, maxN), np.int16)
        herb   = np.zeros((T, maxN), np.bool_)
        energy = np.full((T, maxN), np.nan, np.float32)
        count  = np.zeros((T,), np.int32)
        resource = np.full((T, P), np.nan, np.float32)

        for t in range(T):
            N = self.pos_list[t].shape[0]
            count[t] = N
            pos[t, :N] = self.pos_list[t]
            verts[t, :N] = self.verts_list[t]
            herb[t, :N] = self.herb_list[t]
            energy[t, :N] = self.energy_list[t]
            resource[t, :len(self.resource_list[t])] = self.resource_list[t]

        os.makedirs("recordings", exist_ok=True)
        if out_path is None:
            stamp = time.strftime("%Y%m%d_%H%M%S")
            out_path = os.path.join("recordings", f"color_economy_{stamp}.npz")

        np.savez_compressed(
            out_path,
            world_size=np.array(self.world_size, np.float32),
            stride_ticks=np.int32(self.stride_ticks),
            tick=np.array(self.tick_list, np.int64),
            pos=pos, num_vertices=verts, herbivore=herb, energy=energy,
            creature_count=count, patch_resource=resource,
        )
        print(f"[Recorder] saved: {out_path} (T={T}, maxN={maxN})")
        return out_path
