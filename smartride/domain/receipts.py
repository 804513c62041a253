"""
Trip receipts for completed rides.

    distance_charge = distance * rate_per_km
    subtotal        = final fare = (base + distance_charge) * surge
    surge_amount    = subtotal - (base + distance_charge)
    total           = subtotal + gst + platform_fee
"""

from smartride.domain.constraints import ReceiptPolicy
from smartride.domain.errors import ConflictError
from smartride.domain.models import Receipt, ReceiptBreakdown, Ride, RideStatus

_DEFAULT_POLICY = ReceiptPolicy()


def receipt_id_for(ride_id: int) -> str:
    return f"SR-{ride_id:06d}"


def build_receipt(ride: Ride, rate_per_km: float, policy: ReceiptPolicy = _DEFAULT_POLICY) -> Receipt:
    if ride.status != RideStatus.COMPLETED:
        raise ConflictError(f"Receipt for ride {ride.id} is only available once completed (status {ride.status})")

    distance_charge = round(ride.distance_km * rate_per_km, 2)
    subtotal = round(ride.final_fare, 2)
    surge_amount = max(0.0, round(subtotal - (ride.base_fare + distance_charge), 2))
    gst = round(subtotal * policy.gst_rate, 2)
    breakdown = ReceiptBreakdown(
        base_fare=round(ride.base_fare, 2),
        distance_charge=distance_charge,
        surge_multiplier=ride.surge_multiplier,
        surge_amount=surge_amount,
        subtotal=subtotal,
        gst=gst,
        platform_fee=policy.platform_fee,
        total=round(subtotal + gst + policy.platform_fee, 2),
    )
    return Receipt(
        receipt_id=receipt_id_for(ride.id),
        ride_id=ride.id,
        date=ride.created_at,
        passenger_id=ride.passenger_id,
        driver_id=ride.driver_id,
        pickup=ride.pickup_address,
        drop=ride.drop_address,
        distance_km=ride.distance_km,
        duration=ride.predicted_duration,
        breakdown=breakdown,
        carbon_emissions=ride.carbon_emissions,
        fairness_score=ride.fairness_score,
    )
