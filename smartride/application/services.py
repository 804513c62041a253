"""
Application wiring. Bundles the collaborators the use cases need so callers
(API, tests, debug scripts) can swap any of them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

import numpy as np

from smartride.application.config import (
    DEFAULT_EARNINGS_POLICY,
    DEFAULT_PRICING_POLICY,
    DEFAULT_RECEIPT_POLICY,
    DEFAULT_TRACKING_CONFIG,
    Settings,
)
from smartride.core.fare_engine import FareQuotationEngine
from smartride.core.progress_simulator import RideProgressSimulator
from smartride.domain.constraints import EarningsPolicy, ReceiptPolicy
from smartride.domain.ports import EarningsSink, NotificationSink, RatingStore, RideStore
from smartride.infrastructure.city_registry import CityRegistry
from smartride.infrastructure.memory_store import (
    InMemoryEarningsSink,
    InMemoryNotificationSink,
    InMemoryRatingStore,
    InMemoryRideStore,
)
from smartride.infrastructure.zone_feed import ZoneFeed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Services:
    registry: CityRegistry
    engine: FareQuotationEngine
    simulator: RideProgressSimulator
    zone_feed: ZoneFeed
    rides: RideStore
    notifications: NotificationSink
    earnings: EarningsSink
    ratings: RatingStore
    earnings_policy: EarningsPolicy = DEFAULT_EARNINGS_POLICY
    receipt_policy: ReceiptPolicy = DEFAULT_RECEIPT_POLICY
    clock: Callable[[], datetime] = field(default=utc_now)


def build_services(
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Services:
    """In-memory defaults. One seeded generator feeds both the simulator and the zone feed."""
    settings = settings or Settings()
    rng = np.random.default_rng(settings.rng_seed)
    registry = CityRegistry(default_key=settings.default_city)
    return Services(
        registry=registry,
        engine=FareQuotationEngine(registry, DEFAULT_PRICING_POLICY),
        simulator=RideProgressSimulator(registry, rng=rng, config=DEFAULT_TRACKING_CONFIG),
        zone_feed=ZoneFeed(registry, rng=rng),
        rides=InMemoryRideStore(),
        notifications=InMemoryNotificationSink(),
        earnings=InMemoryEarningsSink(),
        ratings=InMemoryRatingStore(),
        earnings_policy=DEFAULT_EARNINGS_POLICY,
        receipt_policy=DEFAULT_RECEIPT_POLICY,
        clock=clock or utc_now,
    )
