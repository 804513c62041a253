"""
Read-side use cases: driver earnings, trip receipts, notification feed, admin stats.
"""

from typing import List, Optional

from smartride.application.services import Services
from smartride.application.use_cases.book_ride import get_ride
from smartride.domain.earnings import summarize_earnings
from smartride.domain.errors import NotFoundError
from smartride.domain.models import AdminStats, DriverEarning, EarningsSummary, Notification, Receipt, RideStatus
from smartride.domain.receipts import build_receipt


def driver_earnings(services: Services, driver_id: int) -> tuple[EarningsSummary, List[DriverEarning]]:
    earnings = services.earnings.list_for_driver(driver_id)
    return summarize_earnings(earnings), earnings


def ride_receipt(services: Services, ride_id: int) -> Receipt:
    """Fare breakdown of a completed ride, priced with its city's rate card."""
    ride = get_ride(services, ride_id)
    city_key = ride.city or services.registry.resolve_city(ride.pickup_address)
    rate_per_km = services.registry.get_city_info(city_key).rate_per_km
    return build_receipt(ride, rate_per_km, services.receipt_policy)


def list_notifications(services: Services, user_id: int) -> List[Notification]:
    return services.notifications.list_for_user(user_id)


def unread_count(services: Services, user_id: int) -> int:
    return sum(1 for n in services.notifications.list_for_user(user_id) if not n.read)


def mark_notification_read(services: Services, notification_id: int) -> Notification:
    updated = services.notifications.mark_read(notification_id)
    if updated is None:
        raise NotFoundError(f"Notification {notification_id} not found")
    return updated


def admin_stats(services: Services, city_key: Optional[str] = None) -> AdminStats:
    """
    Revenue counts every non-cancelled ride. Active drivers are the distinct drivers
    on accepted or in-progress rides. Zone stats come from the drifting feed.
    """
    rides = services.rides.list_all()
    billable = [r for r in rides if r.status != RideStatus.CANCELLED]
    n = len(rides)
    active_drivers = {r.driver_id for r in rides if r.status in RideStatus.ACTIVE and r.driver_id is not None}
    zones = services.zone_feed.snapshot(city_key) if city_key else services.zone_feed.all_zones()
    return AdminStats(
        total_rides=n,
        active_drivers=len(active_drivers),
        revenue=round(sum(r.final_fare for r in billable), 2),
        avg_surge=round(sum(r.surge_multiplier for r in rides) / n, 2) if n else 1.0,
        avg_wait_time=round(sum(r.predicted_wait_time for r in rides) / n, 1) if n else 0.0,
        zone_stats=zones,
    )
