"""
Passenger ratings of completed rides. Pure functions. No I/O.
One rating per ride is enforced by the rating store.
"""

from datetime import datetime
from typing import List, Optional

from smartride.domain.errors import ConflictError, PermissionDeniedError, ValidationError
from smartride.domain.models import DriverRatingSummary, Rating, Ride, RideStatus

MIN_STARS = 1
MAX_STARS = 5
MAX_COMMENT_LENGTH = 500


def build_rating(
    ride: Ride,
    passenger_id: int,
    stars: int,
    now: datetime,
    comment: Optional[str] = None,
) -> Rating:
    """
    Raises:
        ValidationError: stars outside 1-5 or comment too long.
        PermissionDeniedError: caller is not the ride's passenger.
        ConflictError: ride is not completed.
    """
    if isinstance(stars, bool) or not isinstance(stars, int) or not MIN_STARS <= stars <= MAX_STARS:
        raise ValidationError(f"Stars must be an integer between {MIN_STARS} and {MAX_STARS}", field="stars")
    comment = comment.strip() if comment else None
    if comment and len(comment) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"Comment must be at most {MAX_COMMENT_LENGTH} characters", field="comment")
    if ride.passenger_id != passenger_id:
        raise PermissionDeniedError(f"Passenger {passenger_id} did not take ride {ride.id}")
    if ride.status != RideStatus.COMPLETED:
        raise ConflictError(f"Ride {ride.id} cannot be rated while {ride.status}")

    return Rating(
        ride_id=ride.id,
        passenger_id=passenger_id,
        driver_id=ride.driver_id,
        stars=stars,
        comment=comment or None,
        created_at=now,
    )


def summarize_driver_ratings(driver_id: int, ratings: List[Rating]) -> DriverRatingSummary:
    n = len(ratings)
    return DriverRatingSummary(
        driver_id=driver_id,
        average_stars=round(sum(r.stars for r in ratings) / n, 2) if n else 0.0,
        total_ratings=n,
        ratings=list(ratings),
    )
