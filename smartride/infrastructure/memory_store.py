# ==========================================
# IN-MEMORY STORES
# ------------------------------------------
# Volatile stores for rides, notifications,
# driver earnings and ratings. They reset
# when the service restarts. Replace with
# persistent storage in production.
# ==========================================

import itertools
import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from smartride.domain.models import DriverEarning, Notification, Rating, Ride

logger = logging.getLogger(__name__)


class InMemoryRideStore:
    """RideStore with compare-and-set under a single lock."""

    def __init__(self):
        self._rides: Dict[int, Ride] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, ride: Ride) -> Ride:
        with self._lock:
            stored = replace(ride, id=next(self._ids))
            self._rides[stored.id] = stored
        return stored

    def get(self, ride_id: int) -> Optional[Ride]:
        with self._lock:
            return self._rides.get(ride_id)

    def compare_and_set(self, ride_id: int, expected_status: str, ride: Ride) -> bool:
        with self._lock:
            current = self._rides.get(ride_id)
            if current is None or current.status != expected_status:
                return False
            self._rides[ride_id] = ride
            return True

    def list_by_passenger(self, passenger_id: int) -> List[Ride]:
        with self._lock:
            rides = [r for r in self._rides.values() if r.passenger_id == passenger_id]
        return sorted(rides, key=lambda r: (r.created_at, r.id), reverse=True)

    def list_all(self) -> List[Ride]:
        with self._lock:
            rides = list(self._rides.values())
        return sorted(rides, key=lambda r: (r.created_at, r.id), reverse=True)


class InMemoryNotificationSink:
    def __init__(self):
        self._items: Dict[int, Notification] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, notification: Notification) -> Notification:
        with self._lock:
            stored = replace(notification, id=next(self._ids))
            self._items[stored.id] = stored
        return stored

    def list_for_user(self, user_id: int) -> List[Notification]:
        """Newest first."""
        with self._lock:
            items = [n for n in self._items.values() if n.user_id == user_id]
        return sorted(items, key=lambda n: n.id, reverse=True)

    def mark_read(self, notification_id: int) -> Optional[Notification]:
        with self._lock:
            current = self._items.get(notification_id)
            if current is None:
                return None
            updated = replace(current, read=True)
            self._items[notification_id] = updated
        return updated


class InMemoryEarningsSink:
    """Keyed by ride: a second create for the same ride returns the first record."""

    def __init__(self):
        self._by_ride: Dict[int, DriverEarning] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, earning: DriverEarning) -> DriverEarning:
        with self._lock:
            existing = self._by_ride.get(earning.ride_id)
            if existing is not None:
                logger.warning("Earning for ride %s already recorded; keeping id=%s", earning.ride_id, existing.id)
                return existing
            stored = replace(earning, id=next(self._ids))
            self._by_ride[stored.ride_id] = stored
        return stored

    def list_for_driver(self, driver_id: int) -> List[DriverEarning]:
        with self._lock:
            items = [e for e in self._by_ride.values() if e.driver_id == driver_id]
        return sorted(items, key=lambda e: e.id)


class InMemoryRatingStore:
    """Keyed by ride: add() returns None when the ride already has a rating."""

    def __init__(self):
        self._by_ride: Dict[int, Rating] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, rating: Rating) -> Optional[Rating]:
        with self._lock:
            if rating.ride_id in self._by_ride:
                return None
            stored = replace(rating, id=next(self._ids))
            self._by_ride[stored.ride_id] = stored
        return stored

    def get_for_ride(self, ride_id: int) -> Optional[Rating]:
        with self._lock:
            return self._by_ride.get(ride_id)

    def list_for_driver(self, driver_id: int) -> List[Rating]:
        """Newest first."""
        with self._lock:
            items = [r for r in self._by_ride.values() if r.driver_id == driver_id]
        return sorted(items, key=lambda r: r.id, reverse=True)
