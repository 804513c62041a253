"""
Ride lifecycle use cases: accept, driver status updates, passenger cancel.

Each transition is computed by the pure state machine, committed with the store's
compare-and-set on the status it was computed from, and only then are its side
effects (notifications, earnings) emitted. A lost compare-and-set is a conflict:
another request moved the ride first.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from smartride.application.services import Services
from smartride.domain import lifecycle
from smartride.domain.errors import ConflictError, NotFoundError, RideError
from smartride.domain.models import Ride

logger = logging.getLogger(__name__)


def _load(services: Services, ride_id: int) -> Ride:
    ride = services.rides.get(ride_id)
    if ride is None:
        raise NotFoundError(f"Ride {ride_id} not found")
    return ride


def _apply(
    services: Services,
    ride_id: int,
    transition: Callable[[Ride], lifecycle.TransitionOutcome],
    action: str,
) -> Ride:
    ride = _load(services, ride_id)
    try:
        outcome = transition(ride)
    except RideError as e:
        logger.warning("Rejected %s on ride %s (%s): %s", action, ride_id, e.kind, e)
        raise

    if not services.rides.compare_and_set(ride_id, outcome.previous_status, outcome.ride):
        logger.warning("Lost race on %s for ride %s (was %s)", action, ride_id, outcome.previous_status)
        raise ConflictError(f"Ride {ride_id} changed status concurrently; {action} not applied")

    if outcome.earning is not None:
        services.earnings.create(outcome.earning)
    for note in outcome.notifications:
        services.notifications.create(note)

    logger.info("Ride %s: %s -> %s (%s)", ride_id, outcome.previous_status, outcome.ride.status, action)
    return outcome.ride


def accept_ride(services: Services, ride_id: int, driver_id: int, now: Optional[datetime] = None) -> Ride:
    now = now or services.clock()
    return _apply(services, ride_id, lambda r: lifecycle.accept(r, driver_id, now), "accept")


def update_ride_status(
    services: Services,
    ride_id: int,
    driver_id: int,
    new_status: str,
    now: Optional[datetime] = None,
) -> Ride:
    now = now or services.clock()
    return _apply(
        services,
        ride_id,
        lambda r: lifecycle.advance(r, driver_id, new_status, now, services.earnings_policy),
        f"status:{new_status}",
    )


def cancel_ride(services: Services, ride_id: int, passenger_id: int, now: Optional[datetime] = None) -> Ride:
    now = now or services.clock()
    return _apply(services, ride_id, lambda r: lifecycle.cancel(r, passenger_id, now), "cancel")
