from datetime import timedelta

from smartride.domain.constraints import EarningsPolicy
from smartride.domain.earnings import build_driver_earning, summarize_earnings
from smartride.domain.models import RideStatus
from smartride.infrastructure.memory_store import InMemoryEarningsSink

from conftest import FIXED_NOW


def test_commission_and_net(make_ride):
    ride = make_ride(status=RideStatus.COMPLETED, driver_id=7, final_fare=123.45, distance_km=8)
    earning = build_driver_earning(ride, FIXED_NOW)
    assert earning.gross_amount == 123.45
    assert earning.commission == 24.69
    assert earning.bonus_amount == 0
    assert earning.net_earnings == 98.76


def test_custom_policy(make_ride):
    policy = EarningsPolicy(commission_rate=0.1, long_ride_km=5, long_ride_bonus=50)
    ride = make_ride(status=RideStatus.COMPLETED, driver_id=7, final_fare=100.0, distance_km=8)
    earning = build_driver_earning(ride, FIXED_NOW, policy)
    assert earning.commission == 10.0
    assert earning.net_earnings == 140.0


def test_summary_with_daily_breakdown(make_ride):
    day1 = build_driver_earning(make_ride(id=1, driver_id=7, final_fare=100.0, distance_km=5), FIXED_NOW)
    day1b = build_driver_earning(make_ride(id=2, driver_id=7, final_fare=200.0, distance_km=20), FIXED_NOW)
    day2 = build_driver_earning(make_ride(id=3, driver_id=7, final_fare=50.0, distance_km=3), FIXED_NOW + timedelta(days=1))

    summary = summarize_earnings([day2, day1, day1b])
    assert summary.total_rides == 3
    assert summary.total_gross == 350.0
    assert summary.total_commission == 70.0
    assert summary.total_bonus == 20.0
    assert summary.total_net == 300.0
    assert summary.avg_per_ride == 100.0
    assert summary.daily_breakdown == [
        {"day": "2026-03-02", "amount": 260.0},
        {"day": "2026-03-03", "amount": 40.0},
    ]


def test_empty_summary():
    summary = summarize_earnings([])
    assert summary.total_rides == 0
    assert summary.avg_per_ride == 0.0
    assert summary.daily_breakdown == []


def test_sink_records_once_per_ride(make_ride):
    sink = InMemoryEarningsSink()
    earning = build_driver_earning(make_ride(driver_id=7, status=RideStatus.COMPLETED), FIXED_NOW)
    first = sink.create(earning)
    second = sink.create(earning)
    assert first.id == 1
    assert second == first
    assert sink.list_for_driver(7) == [first]
