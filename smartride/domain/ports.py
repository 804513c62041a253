"""
Collaborator protocols for persistence and side-effect sinks.
In-memory implementations live in smartride.infrastructure.memory_store.
"""

from typing import List, Optional, Protocol

from smartride.domain.models import DriverEarning, Notification, Rating, Ride


class RideStore(Protocol):
    """Ride read/write store with an atomic status compare-and-set."""

    def add(self, ride: Ride) -> Ride:
        """Persist a new ride and return it with its id assigned."""
        ...

    def get(self, ride_id: int) -> Optional[Ride]:
        ...

    def compare_and_set(self, ride_id: int, expected_status: str, ride: Ride) -> bool:
        """Replace the stored ride only if its status is still expected_status."""
        ...

    def list_by_passenger(self, passenger_id: int) -> List[Ride]:
        ...

    def list_all(self) -> List[Ride]:
        ...


class NotificationSink(Protocol):
    """Fire-and-forget notification create, plus the reads the feed needs."""

    def create(self, notification: Notification) -> Notification:
        ...

    def list_for_user(self, user_id: int) -> List[Notification]:
        ...

    def mark_read(self, notification_id: int) -> Optional[Notification]:
        ...


class EarningsSink(Protocol):
    """One earning per completed ride."""

    def create(self, earning: DriverEarning) -> DriverEarning:
        ...

    def list_for_driver(self, driver_id: int) -> List[DriverEarning]:
        ...


class RatingStore(Protocol):
    """At most one rating per ride."""

    def add(self, rating: Rating) -> Optional[Rating]:
        """Store the rating with an id assigned, or return None if the ride is already rated."""
        ...

    def get_for_ride(self, ride_id: int) -> Optional[Rating]:
        ...

    def list_for_driver(self, driver_id: int) -> List[Rating]:
        ...
