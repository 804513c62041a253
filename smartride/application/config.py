"""
Configuración por defecto: políticas de precio, ganancias, recibos y seguimiento,
más los ajustes de ejecución. Un solo lugar para evitar duplicar valores entre
API, motor y tests.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from smartride.domain.constraints import EarningsPolicy, PricingPolicy, ReceiptPolicy, TrackingConfig

DEFAULT_CITY_KEY = "delhi"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_PRICING_POLICY = PricingPolicy(
    peak_start_hour=17,
    peak_end_hour=19,
    default_traffic=5.0,
    peak_demand=150.0,
    offpeak_demand=50.0,
    supply=30.0,
)

DEFAULT_EARNINGS_POLICY = EarningsPolicy(
    commission_rate=0.20,
    long_ride_km=15.0,
    long_ride_bonus=20.0,
)

DEFAULT_RECEIPT_POLICY = ReceiptPolicy(
    gst_rate=0.05,
    platform_fee=5.0,
)

DEFAULT_TRACKING_CONFIG = TrackingConfig(
    approach_share=0.3,
    gps_jitter_deg=0.001,
    min_speed_kmh=25.0,
    max_speed_kmh=40.0,
)


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: tuple = ("*",)
    default_city: str = DEFAULT_CITY_KEY
    rng_seed: Optional[int] = None  # None = fresh entropy on every start


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read SMARTRIDE_* variables; missing or empty ones keep the defaults."""
    env = os.environ if env is None else env

    def get(name: str) -> Optional[str]:
        value = env.get(f"SMARTRIDE_{name}")
        return value.strip() if value and value.strip() else None

    port = get("PORT")
    seed = get("RNG_SEED")
    origins = get("CORS_ORIGINS")
    return Settings(
        host=get("HOST") or DEFAULT_HOST,
        port=int(port) if port else DEFAULT_PORT,
        log_level=(get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) if origins else ("*",),
        default_city=get("DEFAULT_CITY") or DEFAULT_CITY_KEY,
        rng_seed=int(seed) if seed else None,
    )
