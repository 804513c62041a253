"""
SmartRide visual debug. Folium only. No FastAPI. Debug-only.
"""

import folium

from smartride.domain.models import City, GpsSnapshot


def visualize_ride(city: City, snapshot: GpsSnapshot | None = None) -> folium.Map:
    """
    Plot city zones (circles sized by demand), the GPS trail (polyline) and the
    current position (marker). Popups show demand/traffic per zone.
    """
    m = folium.Map(location=(city.center_lat, city.center_lng), zoom_start=11)

    for zone in city.zones:
        folium.CircleMarker(
            location=(zone.lat, zone.lng),
            radius=4 + zone.demand_score,
            color="red" if zone.traffic_index > 7 else "blue",
            fill=True,
            fill_opacity=0.6,
            popup=f"{zone.name}: demand {zone.demand_score:.1f}, traffic {zone.traffic_index:.1f}",
        ).add_to(m)

    if snapshot is None:
        return m

    coords = [(p.lat, p.lng) for p in snapshot.coordinates]
    if len(coords) > 1:
        folium.PolyLine(coords, color="green", weight=4, opacity=0.8).add_to(m)
    if snapshot.current_position is not None:
        eta = f"{snapshot.eta:.1f} min" if snapshot.eta is not None else "n/a"
        folium.Marker(
            snapshot.current_position,
            popup=f"{snapshot.status} {snapshot.progress:.0%}, ETA {eta}",
            icon=folium.Icon(color="green", icon="car", prefix="fa"),
        ).add_to(m)
    return m


if __name__ == "__main__":
    import webbrowser
    from datetime import timedelta
    from pathlib import Path

    from smartride.application.services import build_services
    from smartride.application.use_cases.book_ride import create_ride
    from smartride.application.use_cases.ride_lifecycle import accept_ride, update_ride_status
    from smartride.application.use_cases.tracking import ride_gps
    from smartride.domain.models import BookingRequest

    services = build_services()
    ride = create_ride(services, BookingRequest("Connaught Place", "Hauz Khas", 5.0, passenger_id=1))
    accept_ride(services, ride.id, driver_id=7)
    update_ride_status(services, ride.id, 7, "in_progress")
    snapshot = ride_gps(services, ride.id, now=ride.created_at + timedelta(minutes=ride.predicted_duration / 2))

    out = Path("ride_debug.html").resolve()
    visualize_ride(services.registry.get_city_info(ride.city), snapshot).save(str(out))
    print("Saved", out)
    webbrowser.open(out.as_uri())
