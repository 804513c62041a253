"""
Booking request validation. Runs before the fare engine, which assumes
non-empty addresses, a finite distance in [0, MAX_DISTANCE_KM] and traffic in
[0, 10].
"""

import math
from dataclasses import replace
from datetime import datetime, timezone

from smartride.domain.errors import ValidationError
from smartride.domain.models import BookingRequest

# Longer than any intra-city trip; keeps fares finite.
MAX_DISTANCE_KM = 5000.0


def normalize_timestamp(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_booking(request: BookingRequest, now: datetime) -> BookingRequest:
    """
    Returns the request with scheduled_at normalized to an aware timestamp.

    Raises:
        ValidationError: on the first malformed field.
    """
    if not request.pickup_address or not request.pickup_address.strip():
        raise ValidationError("Pickup address is required", field="pickup_address")
    if not request.drop_address or not request.drop_address.strip():
        raise ValidationError("Drop address is required", field="drop_address")
    if request.distance_km is None or not math.isfinite(request.distance_km):
        raise ValidationError("Distance must be a finite number", field="distance_km")
    if request.distance_km < 0:
        raise ValidationError("Distance must not be negative", field="distance_km")
    if request.distance_km > MAX_DISTANCE_KM:
        raise ValidationError(f"Distance must not exceed {MAX_DISTANCE_KM:g} km", field="distance_km")
    traffic = request.simulated_traffic
    if traffic is not None and not (math.isfinite(traffic) and 0 <= traffic <= 10):
        raise ValidationError("Traffic index must be between 0 and 10", field="simulated_traffic")

    if request.scheduled_at is None:
        return request
    scheduled_at = normalize_timestamp(request.scheduled_at)
    if scheduled_at <= normalize_timestamp(now):
        raise ValidationError("Scheduled time must be in the future", field="scheduled_at")
    return replace(request, scheduled_at=scheduled_at)
