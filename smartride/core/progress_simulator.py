"""
Ride progress simulator for live tracking. Interpolates a position between the
pickup and drop zones from elapsed time and status, with GPS-like jitter.

Non-deterministic: jitter and assumed speed come from the injected
numpy Generator. Seed it for repeatable runs.
"""

import math
from datetime import datetime, timedelta
from typing import List, Optional

import numpy as np

from smartride.domain.constraints import TrackingConfig
from smartride.domain.geo import bearing_deg, interpolate
from smartride.domain.models import GpsPoint, GpsSnapshot, Ride, RideStatus, TrackingSnapshot, Zone
from smartride.domain.validation import normalize_timestamp
from smartride.infrastructure.city_registry import CityRegistry


class RideProgressSimulator:
    def __init__(
        self,
        registry: CityRegistry,
        rng: Optional[np.random.Generator] = None,
        config: Optional[TrackingConfig] = None,
    ):
        self.registry = registry
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config or TrackingConfig()

    def _zones(self, ride: Ride) -> tuple[Optional[Zone], Optional[Zone]]:
        city_key = ride.city or self.registry.resolve_city(ride.pickup_address)
        return (
            self.registry.zone_for_address(ride.pickup_address, city_key),
            self.registry.zone_for_address(ride.drop_address, city_key),
        )

    def _elapsed_min(self, ride: Ride, now: datetime) -> float:
        delta = normalize_timestamp(now) - normalize_timestamp(ride.created_at)
        return max(0.0, delta.total_seconds() / 60.0)

    def progress(self, ride: Ride, now: datetime) -> float:
        """
        accepted:    approach phase, first approach_share of the duration -> [0, approach_progress)
        in_progress: approach_progress + min(rest, elapsed/duration * rest)
        completed:   1
        otherwise:   0
        """
        cfg = self.config
        duration = ride.predicted_duration if ride.predicted_duration and ride.predicted_duration > 0 else cfg.fallback_duration_min
        elapsed = self._elapsed_min(ride, now)
        if ride.status == RideStatus.ACCEPTED:
            window = duration * cfg.approach_share
            return cfg.approach_progress * min(elapsed / window, 0.99)
        if ride.status == RideStatus.IN_PROGRESS:
            rest = 1.0 - cfg.approach_progress
            return cfg.approach_progress + min(rest, elapsed / duration * rest)
        if ride.status == RideStatus.COMPLETED:
            return 1.0
        return 0.0

    def _jitter(self) -> tuple[float, float]:
        j = self.config.gps_jitter_deg
        dlat, dlng = self.rng.uniform(-j, j, size=2)
        return float(dlat), float(dlng)

    def _position(self, pickup: Zone, drop: Zone, fraction: float) -> tuple[float, float]:
        lat, lng = interpolate(pickup.lat, pickup.lng, drop.lat, drop.lng, fraction)
        dlat, dlng = self._jitter()
        return lat + dlat, lng + dlng

    def _speed(self) -> float:
        return float(self.rng.uniform(self.config.min_speed_kmh, self.config.max_speed_kmh))

    def track(self, ride: Ride, now: datetime) -> TrackingSnapshot:
        pickup, drop = self._zones(ride)
        pickup_location = (pickup.lat, pickup.lng) if pickup is not None else None
        moving = ride.status in (RideStatus.ACCEPTED, RideStatus.IN_PROGRESS, RideStatus.COMPLETED)
        if pickup is None or drop is None:
            # Without a route an active ride has no position; otherwise it waits at pickup.
            return TrackingSnapshot(
                status=ride.status,
                progress=0.0,
                driver_location=None if moving else pickup_location,
                eta=None,
                speed=None,
                heading=None,
                pickup_location=pickup_location,
            )

        heading = round(bearing_deg(pickup.lat, pickup.lng, drop.lat, drop.lng), 1)
        snapshot = TrackingSnapshot(
            status=ride.status,
            progress=0.0,
            driver_location=pickup_location,
            eta=None,
            speed=None,
            heading=heading,
            pickup_location=pickup_location,
            drop_location=(drop.lat, drop.lng),
        )
        if not moving:
            return snapshot

        progress = self.progress(ride, now)
        speed = self._speed()
        remaining_km = ride.distance_km * (1 - progress)
        snapshot.progress = round(progress, 3)
        snapshot.driver_location = self._position(pickup, drop, progress)
        snapshot.speed = round(speed, 1)
        snapshot.eta = round(remaining_km / speed * 60, 1)
        return snapshot

    def _trail(self, pickup: Zone, drop: Zone, progress: float, start: datetime, now: datetime) -> List[GpsPoint]:
        """Points every trail_step of progress up to the current one, timestamps spread start..now."""
        step = self.config.trail_step
        n = int(math.floor(progress / step + 1e-9))
        fractions = [k * step for k in range(n + 1)]
        if progress - fractions[-1] > 1e-9:
            fractions.append(progress)
        span = now - start
        points = []
        for f in fractions:
            lat, lng = self._position(pickup, drop, f)
            ts = start + timedelta(seconds=span.total_seconds() * (f / progress))
            points.append(GpsPoint(lat=round(lat, 6), lng=round(lng, 6), timestamp=ts))
        return points

    def gps(self, ride: Ride, now: datetime) -> GpsSnapshot:
        """Like track() plus the coordinate trail and covered/remaining distance."""
        pickup, drop = self._zones(ride)
        tracking = self.track(ride, now)
        if pickup is None or drop is None:
            return GpsSnapshot(
                status=ride.status,
                progress=0.0,
                current_position=tracking.driver_location,
                remaining_km=ride.distance_km,
            )

        progress = tracking.progress
        snapshot = GpsSnapshot(
            status=ride.status,
            progress=progress,
            current_position=tracking.driver_location,
            eta=tracking.eta,
            speed=tracking.speed,
            distance_covered=round(ride.distance_km * progress, 2),
            remaining_km=round(ride.distance_km * (1 - progress), 2),
            heading=tracking.heading,
        )
        if progress > 0:
            start = normalize_timestamp(ride.created_at)
            end = max(normalize_timestamp(now), start)
            snapshot.coordinates = self._trail(pickup, drop, progress, start, end)
        return snapshot
