from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from smartride.domain.errors import ValidationError
from smartride.domain.validation import MAX_DISTANCE_KM, validate_booking

from conftest import FIXED_NOW


def test_accepts_valid_booking(booking):
    assert validate_booking(booking, FIXED_NOW) == booking


@pytest.mark.parametrize(
    "changes,field",
    [
        ({"pickup_address": ""}, "pickup_address"),
        ({"drop_address": "   "}, "drop_address"),
        ({"distance_km": -1}, "distance_km"),
        ({"simulated_traffic": 15}, "simulated_traffic"),
        ({"simulated_traffic": -0.5}, "simulated_traffic"),
        ({"scheduled_at": FIXED_NOW - timedelta(seconds=1)}, "scheduled_at"),
    ],
)
def test_rejects_bad_fields(booking, changes, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_booking(replace(booking, **changes), FIXED_NOW)
    assert excinfo.value.field == field
    assert excinfo.value.kind == "validation"


def test_zero_distance_allowed(booking):
    assert validate_booking(replace(booking, distance_km=0), FIXED_NOW).distance_km == 0


def test_naive_scheduled_at_is_utc(booking):
    naive = datetime(2026, 3, 2, 12, 0)
    result = validate_booking(replace(booking, scheduled_at=naive), FIXED_NOW)
    assert result.scheduled_at == datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("distance", [float("inf"), float("nan"), 1e308, MAX_DISTANCE_KM + 0.01])
def test_rejects_non_finite_or_huge_distance(booking, distance):
    with pytest.raises(ValidationError) as excinfo:
        validate_booking(replace(booking, distance_km=distance), FIXED_NOW)
    assert excinfo.value.field == "distance_km"


def test_rejects_nan_traffic(booking):
    with pytest.raises(ValidationError) as excinfo:
        validate_booking(replace(booking, simulated_traffic=float("nan")), FIXED_NOW)
    assert excinfo.value.field == "simulated_traffic"


def test_max_distance_allowed(booking):
    assert validate_booking(replace(booking, distance_km=MAX_DISTANCE_KM), FIXED_NOW).distance_km == MAX_DISTANCE_KM
