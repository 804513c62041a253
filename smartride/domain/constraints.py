"""
SmartRide domain parameters. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PricingPolicy:
    peak_start_hour: int = 17
    peak_end_hour: int = 19  # inclusive
    default_traffic: float = 5.0
    peak_demand: float = 150.0  # requests/hour
    offpeak_demand: float = 50.0
    supply: float = 30.0  # available drivers
    # Surge steps, additive
    ratio_surge_threshold: float = 1.5
    ratio_surge_step: float = 0.3
    peak_surge_step: float = 0.15
    traffic_surge_threshold: float = 7.0
    traffic_surge_step: float = 0.1
    # Wait / duration / carbon heuristics
    base_wait_min: float = 2.0
    wait_per_ratio_min: float = 3.0
    max_wait_min: float = 15.0
    free_flow_speed_kmh: float = 30.0
    carbon_kg_per_km: float = 0.12
    max_cancellation_prob: float = 0.9


@dataclass(frozen=True)
class EarningsPolicy:
    commission_rate: float = 0.20
    long_ride_km: float = 15.0  # bonus only strictly above
    long_ride_bonus: float = 20.0


@dataclass(frozen=True)
class TrackingConfig:
    approach_share: float = 0.3  # share of predicted duration spent reaching pickup
    approach_progress: float = 0.2  # progress range mapped to the approach phase
    gps_jitter_deg: float = 0.001
    min_speed_kmh: float = 25.0
    max_speed_kmh: float = 40.0
    trail_step: float = 0.05  # progress between two trail points
    fallback_duration_min: float = 15.0


@dataclass(frozen=True)
class ReceiptPolicy:
    gst_rate: float = 0.05  # on the fare
    platform_fee: float = 5.0  # flat, INR
