"""
Fare quotation engine. Combines distance, the city rate card, traffic and peak
signals into a FareQuote. Pure: reads registry data and an injected time only.

Assumes validated input (non-negative distance, traffic in [0, 10]).
"""

import logging
from datetime import datetime
from typing import Optional

from smartride.domain.constraints import PricingPolicy
from smartride.domain.geo import distance_km
from smartride.domain.models import FareQuote
from smartride.domain.pricing import (
    calculate_cancellation_prob,
    calculate_carbon,
    calculate_fairness_score,
    calculate_fare,
    compute_surge,
    demand_for,
    demand_supply_ratio,
    is_peak_hour,
    predict_duration,
    predict_wait_time,
)
from smartride.infrastructure.city_registry import CityRegistry

logger = logging.getLogger(__name__)


class FareQuotationEngine:
    def __init__(self, registry: CityRegistry, policy: Optional[PricingPolicy] = None):
        self.registry = registry
        self.policy = policy or PricingPolicy()

    def route_distance(self, city_key: str, pickup: str, drop: str, hint_km: float) -> tuple[float, bool]:
        """
        Haversine distance between the pickup and drop zones when both resolve.
        Otherwise the caller's hint. Returns (distance_km, route_calculated).
        """
        pickup_zone = self.registry.find_zone(city_key, pickup)
        drop_zone = self.registry.find_zone(city_key, drop)
        if pickup_zone is None or drop_zone is None:
            return hint_km, False
        return distance_km(pickup_zone.lat, pickup_zone.lng, drop_zone.lat, drop_zone.lng), True

    def quote(
        self,
        pickup_address: str,
        drop_address: str,
        distance_km_hint: float,
        simulated_peak: Optional[bool] = None,
        simulated_traffic: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> FareQuote:
        policy = self.policy
        city = self.registry.get_city_info(self.registry.resolve_city(pickup_address))

        raw_distance, route_calculated = self.route_distance(city.key, pickup_address, drop_address, distance_km_hint)
        # Everything downstream uses the rounded distance so stored fares can be recomputed.
        distance = round(raw_distance, 2)

        if simulated_peak is not None:
            peak = simulated_peak
        else:
            peak = is_peak_hour(now or datetime.now(), policy)
        traffic = policy.default_traffic if simulated_traffic is None else float(simulated_traffic)

        demand = demand_for(peak, policy)
        ratio = demand_supply_ratio(demand, policy.supply)
        surge = round(compute_surge(ratio, peak, traffic, policy), 2)

        wait = predict_wait_time(demand, policy.supply, policy)
        duration = predict_duration(distance, traffic, policy)

        quote = FareQuote(
            city=city.key,
            distance_km=distance,
            base_fare=city.base_fare,
            rate_per_km=city.rate_per_km,
            surge_multiplier=surge,
            final_fare=round(calculate_fare(city.base_fare, distance, city.rate_per_km, surge), 2),
            predicted_wait_time=round(wait, 1),
            predicted_duration=round(duration, 1),
            carbon_emissions=round(calculate_carbon(distance, policy), 2),
            cancellation_prob=round(calculate_cancellation_prob(wait, surge, policy), 2),
            fairness_score=round(calculate_fairness_score(surge, wait), 1),
            traffic_index=round(traffic, 1),
            is_peak=peak,
            route_calculated=route_calculated,
        )
        logger.debug(
            "Quote %s -> %s in %s: %.2f km surge=%.2f fare=%.2f routed=%s",
            pickup_address, drop_address, city.key, distance, surge, quote.final_fare, route_calculated,
        )
        return quote
