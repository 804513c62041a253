"""
SmartRide API request/response schemas. Pydantic only in api layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from smartride.domain.ratings import MAX_COMMENT_LENGTH, MAX_STARS, MIN_STARS
from smartride.domain.validation import MAX_DISTANCE_KM


class BookingRequestSchema(BaseModel):
    pickup_address: str = Field(min_length=1)
    drop_address: str = Field(min_length=1)
    distance_km: float = Field(ge=0, le=MAX_DISTANCE_KM, allow_inf_nan=False)
    passenger_id: int
    simulated_traffic: float | None = Field(default=None, ge=0, le=10, allow_inf_nan=False)
    simulated_peak: bool | None = None
    scheduled_at: datetime | None = None  # ISO timestamp, must be in the future


class AcceptRideRequest(BaseModel):
    driver_id: int


class UpdateStatusRequest(BaseModel):
    driver_id: int
    status: str  # "accepted" | "in_progress" | "completed"


class CancelRideRequest(BaseModel):
    passenger_id: int


class RateRideRequest(BaseModel):
    ride_id: int
    passenger_id: int
    stars: int = Field(ge=MIN_STARS, le=MAX_STARS)
    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class FareQuoteSchema(BaseModel):
    city: str
    distance_km: float
    base_fare: float
    rate_per_km: float
    surge_multiplier: float
    final_fare: float
    predicted_wait_time: float
    predicted_duration: float
    carbon_emissions: float
    cancellation_prob: float
    fairness_score: float
    traffic_index: float
    is_peak: bool
    route_calculated: bool


class RideSchema(BaseModel):
    id: int
    passenger_id: int
    driver_id: int | None = None
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
    status: str
    city: str
    scheduled_at: datetime | None = None
    created_at: datetime


class LatLng(BaseModel):
    lat: float
    lng: float


class TrackingSchema(BaseModel):
    status: str
    progress: float
    driver_location: LatLng | None = None
    eta: float | None = None
    speed: float | None = None
    heading: float | None = None
    pickup_location: LatLng | None = None
    drop_location: LatLng | None = None


class GpsPointSchema(BaseModel):
    lat: float
    lng: float
    timestamp: datetime


class GpsSchema(BaseModel):
    status: str
    progress: float
    current_position: LatLng | None = None
    coordinates: list[GpsPointSchema]
    eta: float | None = None
    speed: float | None = None
    distance_covered: float
    remaining_km: float
    heading: float | None = None


class ZoneSchema(BaseModel):
    name: str
    lat: float
    lng: float
    demand_score: float
    traffic_index: float
    available_drivers: int


class CitySchema(BaseModel):
    key: str
    display_name: str
    center: LatLng
    base_fare: float
    rate_per_km: float
    zones: list[ZoneSchema]


class EarningSchema(BaseModel):
    id: int
    driver_id: int
    ride_id: int
    gross_amount: float
    commission: float
    net_earnings: float
    bonus_amount: float
    created_at: datetime


class EarningsSummarySchema(BaseModel):
    total_gross: float
    total_commission: float
    total_net: float
    total_bonus: float
    total_rides: int
    avg_per_ride: float


class DailyAmountSchema(BaseModel):
    day: str
    amount: float


class EarningsResponse(BaseModel):
    summary: EarningsSummarySchema
    earnings: list[EarningSchema]
    daily_breakdown: list[DailyAmountSchema]


class NotificationSchema(BaseModel):
    id: int
    user_id: int
    type: str
    title: str
    message: str
    read: bool
    ride_id: int | None = None
    created_at: datetime


class UnreadCountSchema(BaseModel):
    count: int


class AdminStatsSchema(BaseModel):
    total_rides: int
    active_drivers: int
    revenue: float
    avg_surge: float
    avg_wait_time: float
    zone_stats: list[ZoneSchema]


class RatingSchema(BaseModel):
    id: int
    ride_id: int
    passenger_id: int
    driver_id: int | None = None
    stars: int
    comment: str | None = None
    created_at: datetime


class DriverRatingsSchema(BaseModel):
    driver_id: int
    average_stars: float
    total_ratings: int
    ratings: list[RatingSchema]


class ReceiptBreakdownSchema(BaseModel):
    base_fare: float
    distance_charge: float
    surge_multiplier: float
    surge_amount: float
    subtotal: float
    gst: float
    platform_fee: float
    total: float


class ReceiptSchema(BaseModel):
    receipt_id: str
    ride_id: int
    date: datetime
    passenger_id: int
    driver_id: int | None = None
    pickup: str
    drop: str
    distance_km: float
    duration: float
    breakdown: ReceiptBreakdownSchema
    carbon_emissions: float
    fairness_score: float


class ErrorSchema(BaseModel):
    message: str
    kind: str | None = None
    field: str | None = None
