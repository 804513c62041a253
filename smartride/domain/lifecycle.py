"""
Ride lifecycle state machine. Pure domain: guards plus the side-effect records
each transition produces. Persisting the outcome is the caller's job.

    pending -> accepted -> in_progress -> completed
    pending | accepted -> cancelled
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from smartride.domain.constraints import EarningsPolicy
from smartride.domain.earnings import build_driver_earning
from smartride.domain.errors import ConflictError, PermissionDeniedError, ValidationError
from smartride.domain.models import DriverEarning, Notification, Ride, RideStatus

# Transitions a driver may request on a ride already assigned to them.
DRIVER_TRANSITIONS = {
    (RideStatus.ACCEPTED, RideStatus.IN_PROGRESS),
    (RideStatus.IN_PROGRESS, RideStatus.COMPLETED),
}

CANCELLABLE_STATUSES = (RideStatus.PENDING, RideStatus.ACCEPTED)

STATUS_MESSAGES = {
    RideStatus.ACCEPTED: ("Driver assigned", "A driver has accepted your ride and is on the way."),
    RideStatus.IN_PROGRESS: ("Ride started", "Your ride is in progress. Enjoy the trip!"),
    RideStatus.COMPLETED: ("Ride complete", "You have arrived. Please rate your driver."),
    RideStatus.CANCELLED: ("Ride cancelled", "The ride has been cancelled."),
}


@dataclass
class TransitionOutcome:
    ride: Ride
    previous_status: str
    notifications: List[Notification] = field(default_factory=list)
    earning: Optional[DriverEarning] = None


def status_notification(ride: Ride, user_id: int, status: str, now: datetime) -> Optional[Notification]:
    """Notification for a status change, or None for unmapped statuses."""
    entry = STATUS_MESSAGES.get(status)
    if entry is None:
        return None
    title, message = entry
    return Notification(
        user_id=user_id,
        type="ride_update",
        title=title,
        message=message,
        ride_id=ride.id,
        created_at=now,
    )


def _notifications(ride: Ride, user_ids: list, status: str, now: datetime) -> List[Notification]:
    out = []
    for uid in user_ids:
        n = status_notification(ride, uid, status, now)
        if n is not None:
            out.append(n)
    return out


def accept(ride: Ride, driver_id: int, now: datetime) -> TransitionOutcome:
    """pending -> accepted. Sets the driver and notifies the passenger."""
    if ride.status != RideStatus.PENDING:
        raise ConflictError(f"Ride {ride.id} cannot be accepted while {ride.status}")
    if ride.driver_id is not None:
        raise ConflictError(f"Ride {ride.id} already has a driver assigned")

    updated = replace(ride, status=RideStatus.ACCEPTED, driver_id=driver_id)
    notes = [
        Notification(
            user_id=ride.passenger_id,
            type="driver_arrival",
            title="Driver assigned",
            message=f"Driver #{driver_id} accepted your ride from {ride.pickup_address}.",
            ride_id=ride.id,
            created_at=now,
        )
    ]
    return TransitionOutcome(ride=updated, previous_status=ride.status, notifications=notes)


def advance(
    ride: Ride,
    driver_id: int,
    new_status: str,
    now: datetime,
    earnings_policy: EarningsPolicy = EarningsPolicy(),
) -> TransitionOutcome:
    """
    Driver-initiated status update. accepted -> in_progress -> completed.
    Requesting "accepted" is the same as accept(). Drivers cannot cancel.
    """
    if new_status not in RideStatus.ALL:
        raise ValidationError(f"Unknown ride status {new_status!r}", field="status")
    if new_status == RideStatus.ACCEPTED:
        return accept(ride, driver_id, now)
    if new_status == RideStatus.CANCELLED:
        raise PermissionDeniedError("Only the passenger can cancel a ride")
    if ride.driver_id is not None and ride.driver_id != driver_id:
        raise PermissionDeniedError(f"Driver {driver_id} is not assigned to ride {ride.id}")
    if (ride.status, new_status) not in DRIVER_TRANSITIONS:
        raise ConflictError(f"Ride {ride.id} cannot move from {ride.status} to {new_status}")

    updated = replace(ride, status=new_status)
    outcome = TransitionOutcome(
        ride=updated,
        previous_status=ride.status,
        notifications=_notifications(updated, [ride.passenger_id], new_status, now),
    )
    if new_status == RideStatus.COMPLETED:
        outcome.earning = build_driver_earning(updated, now, earnings_policy)
    return outcome


def cancel(ride: Ride, passenger_id: int, now: datetime) -> TransitionOutcome:
    """Passenger (owner only) cancels a pending or accepted ride."""
    if ride.passenger_id != passenger_id:
        raise PermissionDeniedError(f"Passenger {passenger_id} does not own ride {ride.id}")
    if ride.status not in CANCELLABLE_STATUSES:
        raise ConflictError(f"Ride {ride.id} cannot be cancelled while {ride.status}")

    updated = replace(ride, status=RideStatus.CANCELLED)
    recipients = [ride.passenger_id]
    if ride.driver_id is not None:
        recipients.append(ride.driver_id)
    return TransitionOutcome(
        ride=updated,
        previous_status=ride.status,
        notifications=_notifications(updated, recipients, RideStatus.CANCELLED, now),
    )
