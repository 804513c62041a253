"""Live tracking use cases. Reads the ride, delegates to the progress simulator."""

from datetime import datetime
from typing import Optional

from smartride.application.services import Services
from smartride.application.use_cases.book_ride import get_ride
from smartride.domain.models import GpsSnapshot, TrackingSnapshot


def track_ride(services: Services, ride_id: int, now: Optional[datetime] = None) -> TrackingSnapshot:
    ride = get_ride(services, ride_id)
    return services.simulator.track(ride, now or services.clock())


def ride_gps(services: Services, ride_id: int, now: Optional[datetime] = None) -> GpsSnapshot:
    ride = get_ride(services, ride_id)
    return services.simulator.gps(ride, now or services.clock())
