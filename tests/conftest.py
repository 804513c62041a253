from dataclasses import replace
from datetime import datetime, timezone

import numpy as np
import pytest
from fastapi.testclient import TestClient

from smartride.api.main import create_app
from smartride.application.config import Settings
from smartride.application.services import build_services
from smartride.core.fare_engine import FareQuotationEngine
from smartride.core.progress_simulator import RideProgressSimulator
from smartride.domain.models import BookingRequest, Ride, RideStatus
from smartride.infrastructure.city_registry import CityRegistry

FIXED_NOW = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def registry():
    return CityRegistry()


@pytest.fixture
def engine(registry):
    return FareQuotationEngine(registry)


@pytest.fixture
def simulator(registry):
    return RideProgressSimulator(registry, rng=np.random.default_rng(1234))


@pytest.fixture
def services():
    return build_services(Settings(rng_seed=42), clock=lambda: FIXED_NOW)


@pytest.fixture
def client(services):
    return TestClient(create_app(Settings(rng_seed=42), services=services))


@pytest.fixture
def booking():
    return BookingRequest(
        pickup_address="Connaught Place",
        drop_address="Hauz Khas",
        distance_km=5.0,
        passenger_id=1,
        simulated_peak=False,
        simulated_traffic=2.0,
    )


_BASE_RIDE = Ride(
    id=1,
    passenger_id=1,
    pickup_address="Connaught Place",
    drop_address="Hauz Khas",
    distance_km=9.35,
    base_fare=30,
    surge_multiplier=1.3,
    final_fare=160.55,
    predicted_wait_time=7.0,
    predicted_duration=40.0,
    cancellation_prob=0.41,
    carbon_emissions=1.12,
    fairness_score=7.8,
    created_at=FIXED_NOW,
    status=RideStatus.PENDING,
    city="delhi",
)


@pytest.fixture
def make_ride():
    def _make(**overrides) -> Ride:
        return replace(_BASE_RIDE, **overrides)

    return _make
