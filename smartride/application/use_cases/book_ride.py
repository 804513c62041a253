"""
Booking use cases: quote a fare, create a pending ride, read ride history.
Orchestrates domain and engine. No FastAPI.
"""

import logging
from datetime import datetime
from typing import List, Optional

from smartride.application.services import Services
from smartride.domain.errors import NotFoundError
from smartride.domain.models import BookingRequest, FareQuote, Ride, RideStatus
from smartride.domain.validation import normalize_timestamp, validate_booking

logger = logging.getLogger(__name__)


def predict_fare(services: Services, request: BookingRequest, now: Optional[datetime] = None) -> FareQuote:
    now = now or services.clock()
    request = validate_booking(request, now)
    return services.engine.quote(
        request.pickup_address,
        request.drop_address,
        request.distance_km,
        simulated_peak=request.simulated_peak,
        simulated_traffic=request.simulated_traffic,
        now=now,
    )


def create_ride(services: Services, request: BookingRequest, now: Optional[datetime] = None) -> Ride:
    """Quote with the full engine and persist the ride as pending."""
    now = now or services.clock()
    request = validate_booking(request, now)
    quote = services.engine.quote(
        request.pickup_address,
        request.drop_address,
        request.distance_km,
        simulated_peak=request.simulated_peak,
        simulated_traffic=request.simulated_traffic,
        now=now,
    )
    ride = services.rides.add(
        Ride(
            id=None,
            passenger_id=request.passenger_id,
            pickup_address=request.pickup_address,
            drop_address=request.drop_address,
            distance_km=quote.distance_km,
            base_fare=quote.base_fare,
            surge_multiplier=quote.surge_multiplier,
            final_fare=quote.final_fare,
            predicted_wait_time=quote.predicted_wait_time,
            predicted_duration=quote.predicted_duration,
            cancellation_prob=quote.cancellation_prob,
            carbon_emissions=quote.carbon_emissions,
            fairness_score=quote.fairness_score,
            created_at=now,
            status=RideStatus.PENDING,
            scheduled_at=request.scheduled_at,
            city=quote.city,
        )
    )
    logger.info(
        "Ride %s created for passenger %s: %s -> %s, %.2f km, fare %.2f",
        ride.id, ride.passenger_id, ride.pickup_address, ride.drop_address, ride.distance_km, ride.final_fare,
    )
    return ride


def get_ride(services: Services, ride_id: int) -> Ride:
    ride = services.rides.get(ride_id)
    if ride is None:
        raise NotFoundError(f"Ride {ride_id} not found")
    return ride


def list_passenger_rides(services: Services, passenger_id: int) -> List[Ride]:
    """Newest first."""
    return services.rides.list_by_passenger(passenger_id)


def list_scheduled_rides(services: Services, passenger_id: int, now: Optional[datetime] = None) -> List[Ride]:
    """Non-cancelled rides scheduled in the future, soonest first."""
    now = normalize_timestamp(now or services.clock())
    rides = [
        r for r in services.rides.list_by_passenger(passenger_id)
        if r.scheduled_at is not None
        and r.status != RideStatus.CANCELLED
        and normalize_timestamp(r.scheduled_at) > now
    ]
    return sorted(rides, key=lambda r: r.scheduled_at)
