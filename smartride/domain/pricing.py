"""
SmartRide pricing heuristics. Pure functions only. No I/O.
Deterministic formulas, not learned models.
"""

from datetime import datetime

from smartride.domain.constraints import PricingPolicy

_DEFAULT_POLICY = PricingPolicy()


def is_peak_hour(now: datetime, policy: PricingPolicy = _DEFAULT_POLICY) -> bool:
    hour = now.astimezone().hour
    return policy.peak_start_hour <= hour <= policy.peak_end_hour


def demand_for(is_peak: bool, policy: PricingPolicy = _DEFAULT_POLICY) -> float:
    return policy.peak_demand if is_peak else policy.offpeak_demand


def demand_supply_ratio(demand: float, supply: float) -> float:
    """supply == 0 counts as 1 driver."""
    return demand / (supply or 1)


def compute_surge(ratio: float, is_peak: bool, traffic: float, policy: PricingPolicy = _DEFAULT_POLICY) -> float:
    """Start at 1.0 and add each triggered step. Steps stack additively."""
    surge = 1.0
    if ratio > policy.ratio_surge_threshold:
        surge += policy.ratio_surge_step
    if is_peak:
        surge += policy.peak_surge_step
    if traffic > policy.traffic_surge_threshold:
        surge += policy.traffic_surge_step
    return surge


def calculate_fare(base_fare: float, distance: float, rate_per_km: float, surge: float) -> float:
    return (base_fare + distance * rate_per_km) * surge


def predict_wait_time(demand: float, supply: float, policy: PricingPolicy = _DEFAULT_POLICY) -> float:
    ratio = demand_supply_ratio(demand, supply)
    return min(policy.max_wait_min, policy.base_wait_min + ratio * policy.wait_per_ratio_min)


def predict_duration(distance: float, traffic: float, policy: PricingPolicy = _DEFAULT_POLICY) -> float:
    """Minutes. Higher traffic linearly degrades the free-flow speed."""
    effective_speed = policy.free_flow_speed_kmh / (traffic / 2 + 1)
    return (distance / effective_speed) * 60


def calculate_carbon(distance: float, policy: PricingPolicy = _DEFAULT_POLICY) -> float:
    return distance * policy.carbon_kg_per_km


def calculate_cancellation_prob(wait_time: float, surge: float, policy: PricingPolicy = _DEFAULT_POLICY) -> float:
    prob = wait_time * 0.05 + (surge - 1) * 0.2
    return max(0.0, min(policy.max_cancellation_prob, prob))


def calculate_fairness_score(surge: float, wait_time: float) -> float:
    """Higher surge and longer wait lower fairness. Clamped to [1, 10]."""
    score = 10 - (surge - 1) * 5 - wait_time / 10
    return max(1.0, min(10.0, score))
