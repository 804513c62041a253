"""
SmartRide driver earnings. Pure functions. No I/O.
"""

from collections import defaultdict
from datetime import datetime

from smartride.domain.constraints import EarningsPolicy
from smartride.domain.models import DriverEarning, EarningsSummary, Ride

_DEFAULT_POLICY = EarningsPolicy()


def build_driver_earning(ride: Ride, now: datetime, policy: EarningsPolicy = _DEFAULT_POLICY) -> DriverEarning:
    """
    commission = fare * commission_rate
    bonus = long_ride_bonus if distance > long_ride_km else 0
    net = fare - commission + bonus
    """
    gross = ride.final_fare
    commission = round(gross * policy.commission_rate, 2)
    bonus = policy.long_ride_bonus if ride.distance_km > policy.long_ride_km else 0.0
    return DriverEarning(
        driver_id=ride.driver_id,
        ride_id=ride.id,
        gross_amount=round(gross, 2),
        commission=commission,
        net_earnings=round(gross - commission + bonus, 2),
        bonus_amount=bonus,
        created_at=now,
    )


def summarize_earnings(earnings: list[DriverEarning]) -> EarningsSummary:
    """Totals plus net earnings per day, oldest day first."""
    total_gross = sum(e.gross_amount for e in earnings)
    total_commission = sum(e.commission for e in earnings)
    total_net = sum(e.net_earnings for e in earnings)
    total_bonus = sum(e.bonus_amount for e in earnings)
    n = len(earnings)

    by_day: dict[str, float] = defaultdict(float)
    for e in earnings:
        by_day[e.created_at.date().isoformat()] += e.net_earnings

    return EarningsSummary(
        total_gross=round(total_gross, 2),
        total_commission=round(total_commission, 2),
        total_net=round(total_net, 2),
        total_bonus=round(total_bonus, 2),
        total_rides=n,
        avg_per_ride=round(total_net / n, 2) if n else 0.0,
        daily_breakdown=[{"day": day, "amount": round(by_day[day], 2)} for day in sorted(by_day)],
    )
