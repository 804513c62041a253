"""
SmartRide domain models. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


class RideStatus:
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    ALL = (PENDING, ACCEPTED, IN_PROGRESS, COMPLETED, CANCELLED)
    TERMINAL = (COMPLETED, CANCELLED)
    ACTIVE = (ACCEPTED, IN_PROGRESS)


@dataclass(frozen=True)
class Zone:
    name: str
    lat: float
    lng: float
    demand_score: float = 0.0  # 0-10
    traffic_index: float = 0.0  # 0-10
    available_drivers: int = 0


@dataclass(frozen=True)
class City:
    key: str
    display_name: str
    center_lat: float
    center_lng: float
    base_fare: float
    rate_per_km: float
    zones: tuple = ()
    landmarks: tuple = ()  # address tokens besides the city and zone names


@dataclass(frozen=True)
class BookingRequest:
    pickup_address: str
    drop_address: str
    distance_km: float
    passenger_id: int
    simulated_traffic: Optional[float] = None
    simulated_peak: Optional[bool] = None
    scheduled_at: Optional[datetime] = None


@dataclass(frozen=True)
class FareQuote:
    city: str
    distance_km: float
    base_fare: float
    rate_per_km: float
    surge_multiplier: float
    final_fare: float
    predicted_wait_time: float  # min
    predicted_duration: float  # min
    carbon_emissions: float  # kg CO2
    cancellation_prob: float
    fairness_score: float
    traffic_index: float
    is_peak: bool
    route_calculated: bool


@dataclass(frozen=True)
class Ride:
    id: Optional[int]
    passenger_id: int
    pickup_address: str
    drop_address: str
    distance_km: float
    base_fare: float
    surge_multiplier: float
    final_fare: float
    predicted_wait_time: float
    predicted_duration: float
    cancellation_prob: float
    carbon_emissions: float
    fairness_score: float
    created_at: datetime
    status: str = RideStatus.PENDING
    driver_id: Optional[int] = None
    scheduled_at: Optional[datetime] = None
    city: str = ""


@dataclass(frozen=True)
class DriverEarning:
    driver_id: int
    ride_id: int
    gross_amount: float
    commission: float
    net_earnings: float
    bonus_amount: float
    created_at: datetime
    id: Optional[int] = None


@dataclass(frozen=True)
class Notification:
    user_id: int
    type: str  # "ride_update" | "driver_arrival" | "system"
    title: str
    message: str
    created_at: datetime
    ride_id: Optional[int] = None
    read: bool = False
    id: Optional[int] = None


@dataclass(frozen=True)
class Rating:
    ride_id: int
    passenger_id: int
    driver_id: Optional[int]
    stars: int  # 1-5
    created_at: datetime
    comment: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class ReceiptBreakdown:
    base_fare: float
    distance_charge: float
    surge_multiplier: float
    surge_amount: float
    subtotal: float  # equals the ride's final fare
    gst: float
    platform_fee: float
    total: float


@dataclass(frozen=True)
class Receipt:
    receipt_id: str
    ride_id: int
    date: datetime
    passenger_id: int
    driver_id: Optional[int]
    pickup: str
    drop: str
    distance_km: float
    duration: float  # min
    breakdown: ReceiptBreakdown
    carbon_emissions: float
    fairness_score: float


@dataclass(frozen=True)
class GpsPoint:
    lat: float
    lng: float
    timestamp: datetime


@dataclass
class TrackingSnapshot:
    status: str
    progress: float
    driver_location: Optional[tuple]  # (lat, lng)
    eta: Optional[float]  # min
    speed: Optional[float]  # km/h
    heading: Optional[float]  # degrees
    pickup_location: Optional[tuple] = None
    drop_location: Optional[tuple] = None


@dataclass
class GpsSnapshot:
    status: str
    progress: float
    current_position: Optional[tuple]
    coordinates: List[GpsPoint] = field(default_factory=list)
    eta: Optional[float] = None
    speed: Optional[float] = None
    distance_covered: float = 0.0
    remaining_km: float = 0.0
    heading: Optional[float] = None


@dataclass
class EarningsSummary:
    total_gross: float
    total_commission: float
    total_net: float
    total_bonus: float
    total_rides: int
    avg_per_ride: float
    daily_breakdown: List[dict] = field(default_factory=list)  # [{"day": "YYYY-MM-DD", "amount": float}]


@dataclass
class AdminStats:
    total_rides: int
    active_drivers: int
    revenue: float
    avg_surge: float
    avg_wait_time: float
    zone_stats: List[Zone] = field(default_factory=list)


@dataclass
class DriverRatingSummary:
    driver_id: int
    average_stars: float
    total_ratings: int
    ratings: List[Rating] = field(default_factory=list)
