"""
Rating use cases: passenger rates a completed ride, reads per ride and per driver.
"""

import logging
from datetime import datetime
from typing import List, Optional

from smartride.application.services import Services
from smartride.application.use_cases.book_ride import get_ride
from smartride.domain.errors import ConflictError, RideError
from smartride.domain.models import DriverRatingSummary, Rating
from smartride.domain.ratings import build_rating, summarize_driver_ratings

logger = logging.getLogger(__name__)


def rate_ride(
    services: Services,
    ride_id: int,
    passenger_id: int,
    stars: int,
    comment: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Rating:
    ride = get_ride(services, ride_id)
    try:
        rating = build_rating(ride, passenger_id, stars, now or services.clock(), comment)
    except RideError as e:
        logger.warning("Rejected rating on ride %s (%s): %s", ride_id, e.kind, e)
        raise

    stored = services.ratings.add(rating)
    if stored is None:
        logger.warning("Ride %s already rated; passenger %s tried again", ride_id, passenger_id)
        raise ConflictError(f"Ride {ride_id} has already been rated")
    logger.info("Ride %s rated %s stars by passenger %s", ride_id, stars, passenger_id)
    return stored


def ride_ratings(services: Services, ride_id: int) -> List[Rating]:
    """Zero or one rating. 404 when the ride itself does not exist."""
    get_ride(services, ride_id)
    rating = services.ratings.get_for_ride(ride_id)
    return [rating] if rating is not None else []


def driver_ratings(services: Services, driver_id: int) -> DriverRatingSummary:
    return summarize_driver_ratings(driver_id, services.ratings.list_for_driver(driver_id))
