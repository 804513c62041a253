"""
Zone demand/traffic feed. Each read drifts every zone's demand score and traffic
index by uniform(-drift, drift), clamped to [0, 10]. Stands in for live telemetry.
"""

import threading
from dataclasses import replace
from typing import Dict, List, Optional

import numpy as np

from smartride.domain.models import Zone
from smartride.infrastructure.city_registry import CityRegistry

SCORE_MIN = 0.0
SCORE_MAX = 10.0


class ZoneFeed:
    def __init__(self, registry: CityRegistry, rng: Optional[np.random.Generator] = None, drift: float = 0.5):
        self.registry = registry
        self.rng = rng if rng is not None else np.random.default_rng()
        self.drift = drift
        self._state: Dict[str, List[Zone]] = {}
        self._lock = threading.Lock()

    def _drift(self, zones: List[Zone]) -> List[Zone]:
        if not zones:
            return []
        n = len(zones)
        demand = np.array([z.demand_score for z in zones], dtype=float)
        traffic = np.array([z.traffic_index for z in zones], dtype=float)
        demand = np.clip(demand + self.rng.uniform(-self.drift, self.drift, n), SCORE_MIN, SCORE_MAX)
        traffic = np.clip(traffic + self.rng.uniform(-self.drift, self.drift, n), SCORE_MIN, SCORE_MAX)
        return [
            replace(z, demand_score=round(float(d), 2), traffic_index=round(float(t), 2))
            for z, d, t in zip(zones, demand, traffic)
        ]

    def snapshot(self, city_key: str) -> List[Zone]:
        """Drifted zones for a city. Unknown keys read the default city."""
        key = self.registry.get_city_info(city_key).key
        with self._lock:
            current = self._state.get(key) or self.registry.city_zones(key)
            updated = self._drift(current)
            self._state[key] = updated
        return list(updated)

    def all_zones(self) -> List[Zone]:
        zones: List[Zone] = []
        for city in self.registry.list_cities():
            zones.extend(self.snapshot(city.key))
        return zones
