"""
SmartRide API router. Calls application only. No business logic.
Domain errors propagate to the handlers registered in smartride.api.main.
"""

from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from smartride.api.schemas import (
    AcceptRideRequest,
    AdminStatsSchema,
    BookingRequestSchema,
    CancelRideRequest,
    CitySchema,
    DriverRatingsSchema,
    EarningsResponse,
    ErrorSchema,
    FareQuoteSchema,
    GpsSchema,
    NotificationSchema,
    RateRideRequest,
    RatingSchema,
    ReceiptSchema,
    RideSchema,
    TrackingSchema,
    UnreadCountSchema,
    UpdateStatusRequest,
    ZoneSchema,
)
from smartride.application.services import Services
from smartride.application.use_cases import book_ride, ratings, reports, ride_lifecycle, tracking
from smartride.domain.models import BookingRequest, City, GpsSnapshot, Ride, TrackingSnapshot

# Error bodies the exception handlers in smartride.api.main produce.
ERROR_RESPONSES = {status: {"model": ErrorSchema} for status in (400, 403, 404, 409, 500)}

router = APIRouter(prefix="/api", responses=ERROR_RESPONSES)


def get_services(request: Request) -> Services:
    return request.app.state.services


def _latlng(point: tuple | None) -> dict | None:
    if point is None:
        return None
    return {"lat": point[0], "lng": point[1]}


def _ride(ride: Ride) -> RideSchema:
    return RideSchema.model_validate(asdict(ride))


def _tracking(snapshot: TrackingSnapshot) -> TrackingSchema:
    data = asdict(snapshot)
    for key in ("driver_location", "pickup_location", "drop_location"):
        data[key] = _latlng(data[key])
    return TrackingSchema.model_validate(data)


def _gps(snapshot: GpsSnapshot) -> GpsSchema:
    data = asdict(snapshot)
    data["current_position"] = _latlng(data["current_position"])
    return GpsSchema.model_validate(data)


def _city(city: City) -> CitySchema:
    return CitySchema(
        key=city.key,
        display_name=city.display_name,
        center={"lat": city.center_lat, "lng": city.center_lng},
        base_fare=city.base_fare,
        rate_per_km=city.rate_per_km,
        zones=[ZoneSchema.model_validate(asdict(z)) for z in city.zones],
    )


@router.post("/rides/predict", response_model=FareQuoteSchema)
def post_predict(body: BookingRequestSchema, services: Services = Depends(get_services)) -> FareQuoteSchema:
    """
    POST /api/rides/predict
    Fare quote for a hypothetical ride. Nothing is persisted.
    """
    quote = book_ride.predict_fare(services, BookingRequest(**body.model_dump()))
    return FareQuoteSchema.model_validate(asdict(quote))


@router.post("/rides", response_model=RideSchema, status_code=201)
def post_ride(body: BookingRequestSchema, services: Services = Depends(get_services)) -> RideSchema:
    """
    POST /api/rides
    Books a ride. Pricing is recomputed server-side; the ride starts pending.
    """
    return _ride(book_ride.create_ride(services, BookingRequest(**body.model_dump())))


@router.get("/rides", response_model=list[RideSchema])
def get_rides(user_id: int, services: Services = Depends(get_services)) -> list[RideSchema]:
    """Passenger ride history, newest first."""
    return [_ride(r) for r in book_ride.list_passenger_rides(services, user_id)]


@router.get("/rides/scheduled", response_model=list[RideSchema])
def get_scheduled_rides(user_id: int, services: Services = Depends(get_services)) -> list[RideSchema]:
    return [_ride(r) for r in book_ride.list_scheduled_rides(services, user_id)]


@router.get("/rides/{ride_id}", response_model=RideSchema)
def get_ride(ride_id: int, services: Services = Depends(get_services)) -> RideSchema:
    return _ride(book_ride.get_ride(services, ride_id))


@router.post("/rides/{ride_id}/accept", response_model=RideSchema)
def post_accept(ride_id: int, body: AcceptRideRequest, services: Services = Depends(get_services)) -> RideSchema:
    """
    POST /api/rides/{ride_id}/accept
    Driver accepts a pending ride. 409 if someone else got there first.
    """
    return _ride(ride_lifecycle.accept_ride(services, ride_id, body.driver_id))


@router.patch("/rides/{ride_id}/status", response_model=RideSchema)
def patch_status(ride_id: int, body: UpdateStatusRequest, services: Services = Depends(get_services)) -> RideSchema:
    """
    PATCH /api/rides/{ride_id}/status
    Assigned driver moves the ride: accepted -> in_progress -> completed.
    """
    return _ride(ride_lifecycle.update_ride_status(services, ride_id, body.driver_id, body.status))


@router.post("/rides/{ride_id}/cancel", response_model=RideSchema)
def post_cancel(ride_id: int, body: CancelRideRequest, services: Services = Depends(get_services)) -> RideSchema:
    return _ride(ride_lifecycle.cancel_ride(services, ride_id, body.passenger_id))


@router.get("/rides/{ride_id}/track", response_model=TrackingSchema)
def get_track(ride_id: int, now: datetime | None = None, services: Services = Depends(get_services)) -> TrackingSchema:
    return _tracking(tracking.track_ride(services, ride_id, now))


@router.get("/rides/{ride_id}/gps", response_model=GpsSchema)
def get_gps(ride_id: int, now: datetime | None = None, services: Services = Depends(get_services)) -> GpsSchema:
    return _gps(tracking.ride_gps(services, ride_id, now))


@router.get("/rides/{ride_id}/receipt", response_model=ReceiptSchema)
def get_receipt(ride_id: int, services: Services = Depends(get_services)) -> ReceiptSchema:
    """
    GET /api/rides/{ride_id}/receipt
    Fare breakdown with GST and platform fee. 409 until the ride is completed.
    """
    return ReceiptSchema.model_validate(asdict(reports.ride_receipt(services, ride_id)))


@router.post("/ratings", response_model=RatingSchema, status_code=201)
def post_rating(body: RateRideRequest, services: Services = Depends(get_services)) -> RatingSchema:
    """
    POST /api/ratings
    Passenger rates a completed ride, once.
    """
    rating = ratings.rate_ride(services, body.ride_id, body.passenger_id, body.stars, body.comment)
    return RatingSchema.model_validate(asdict(rating))


@router.get("/ratings/ride/{ride_id}", response_model=list[RatingSchema])
def get_ride_ratings(ride_id: int, services: Services = Depends(get_services)) -> list[RatingSchema]:
    return [RatingSchema.model_validate(asdict(r)) for r in ratings.ride_ratings(services, ride_id)]


@router.get("/ratings/driver/{driver_id}", response_model=DriverRatingsSchema)
def get_driver_ratings(driver_id: int, services: Services = Depends(get_services)) -> DriverRatingsSchema:
    return DriverRatingsSchema.model_validate(asdict(ratings.driver_ratings(services, driver_id)))


@router.get("/cities", response_model=list[CitySchema])
def get_cities(services: Services = Depends(get_services)) -> list[CitySchema]:
    return [_city(c) for c in services.registry.list_cities()]


@router.get("/cities/{key}", response_model=CitySchema)
def get_city(key: str, services: Services = Depends(get_services)) -> CitySchema:
    """Unknown keys return the default city."""
    return _city(services.registry.get_city_info(key))


@router.get("/zones", response_model=list[ZoneSchema])
def get_zones(city: str | None = None, services: Services = Depends(get_services)) -> list[ZoneSchema]:
    """Zones with live-drifting demand and traffic. All cities when city is omitted."""
    zones = services.zone_feed.snapshot(city) if city else services.zone_feed.all_zones()
    return [ZoneSchema.model_validate(asdict(z)) for z in zones]


@router.get("/driver/earnings/{driver_id}", response_model=EarningsResponse)
def get_driver_earnings(driver_id: int, services: Services = Depends(get_services)) -> EarningsResponse:
    summary, earnings = reports.driver_earnings(services, driver_id)
    data = asdict(summary)
    daily = data.pop("daily_breakdown")
    return EarningsResponse(
        summary=data,
        earnings=[asdict(e) for e in earnings],
        daily_breakdown=daily,
    )


@router.get("/notifications/{user_id}", response_model=list[NotificationSchema])
def get_notifications(user_id: int, services: Services = Depends(get_services)) -> list[NotificationSchema]:
    return [NotificationSchema.model_validate(asdict(n)) for n in reports.list_notifications(services, user_id)]


@router.get("/notifications/{user_id}/unread", response_model=UnreadCountSchema)
def get_unread_count(user_id: int, services: Services = Depends(get_services)) -> UnreadCountSchema:
    return UnreadCountSchema(count=reports.unread_count(services, user_id))


@router.patch("/notifications/{notification_id}/read", response_model=NotificationSchema)
def patch_notification_read(notification_id: int, services: Services = Depends(get_services)) -> NotificationSchema:
    return NotificationSchema.model_validate(asdict(reports.mark_notification_read(services, notification_id)))


@router.get("/admin/stats", response_model=AdminStatsSchema)
def get_admin_stats(city: str | None = None, services: Services = Depends(get_services)) -> AdminStatsSchema:
    return AdminStatsSchema.model_validate(asdict(reports.admin_stats(services, city)))
