"""
City/zone registry. Static reference data for seven Indian cities, loaded once.

resolve_city is a keyword heuristic, not a geocoder: an address maps to the first
city (registry order) whose key, display name, landmarks or zone names appear in
it. Failing that, a bare fragment of a zone name ("Bandra") picks that zone's
city, the same either-direction rule find_zone uses. Else the default city.
"""

from typing import List, Optional

from smartride.domain.models import City, Zone


def _z(name: str, lat: float, lng: float, demand: float, traffic: float, drivers: int) -> Zone:
    return Zone(name=name, lat=lat, lng=lng, demand_score=demand, traffic_index=traffic, available_drivers=drivers)


INDIAN_CITIES: dict[str, City] = {
    "delhi": City(
        key="delhi",
        display_name="Delhi NCR",
        center_lat=28.6139,
        center_lng=77.2090,
        base_fare=30,
        rate_per_km=10,
        landmarks=("new delhi", "gurgaon", "india gate"),
        zones=(
            _z("Connaught Place", 28.6315, 77.2167, 8.5, 7.2, 15),
            _z("IGI Airport", 28.5562, 77.1000, 9.2, 4.5, 25),
            _z("Cyber City (Gurugram)", 28.4950, 77.0890, 7.8, 6.9, 18),
            _z("Hauz Khas", 28.5494, 77.1960, 6.5, 5.8, 10),
            _z("Noida Sector 18", 28.5700, 77.3200, 6.0, 5.5, 12),
            _z("Dwarka", 28.5921, 77.0460, 4.2, 3.1, 8),
            _z("Saket", 28.5244, 77.2066, 5.9, 5.0, 9),
        ),
    ),
    "mumbai": City(
        key="mumbai",
        display_name="Mumbai",
        center_lat=19.0760,
        center_lng=72.8777,
        base_fare=35,
        rate_per_km=12,
        landmarks=("bombay", "juhu", "dadar"),
        zones=(
            _z("Bandra West", 19.0596, 72.8295, 8.1, 7.9, 14),
            _z("Andheri East", 19.1136, 72.8697, 8.7, 8.3, 16),
            _z("BKC (Bandra Kurla Complex)", 19.0654, 72.8692, 7.6, 7.4, 11),
            _z("Colaba", 18.9067, 72.8147, 6.2, 5.6, 7),
            _z("Powai", 19.1176, 72.9060, 6.8, 6.1, 10),
            _z("Chhatrapati Shivaji Airport", 19.0896, 72.8656, 9.0, 6.4, 22),
            _z("Navi Mumbai", 19.0330, 73.0297, 4.5, 3.8, 9),
        ),
    ),
    "bangalore": City(
        key="bangalore",
        display_name="Bangalore",
        center_lat=12.9716,
        center_lng=77.5946,
        base_fare=28,
        rate_per_km=9,
        landmarks=("bengaluru", "marathahalli", "jayanagar"),
        zones=(
            _z("Koramangala", 12.9352, 77.6245, 8.0, 7.7, 13),
            _z("Whitefield", 12.9698, 77.7499, 7.4, 8.1, 12),
            _z("Electronic City", 12.8456, 77.6603, 6.9, 6.6, 10),
            _z("Indiranagar", 12.9719, 77.6412, 7.2, 6.8, 11),
            _z("MG Road", 12.9716, 77.5946, 7.9, 7.0, 14),
            _z("Kempegowda Airport", 13.1986, 77.7066, 8.8, 3.9, 20),
            _z("HSR Layout", 12.9121, 77.6446, 6.4, 6.0, 9),
        ),
    ),
    "hyderabad": City(
        key="hyderabad",
        display_name="Hyderabad",
        center_lat=17.3850,
        center_lng=78.4867,
        base_fare=25,
        rate_per_km=8,
        landmarks=("cyberabad", "madhapur", "charminar"),
        zones=(
            _z("HITEC City", 17.4435, 78.3772, 8.3, 7.1, 15),
            _z("Gachibowli", 17.4399, 78.3489, 7.5, 6.5, 12),
            _z("Banjara Hills", 17.4239, 78.4499, 6.6, 5.9, 9),
            _z("Jubilee Hills", 17.4312, 78.4098, 6.1, 5.4, 8),
            _z("Shamshabad Airport", 17.2403, 78.4294, 8.6, 3.5, 19),
            _z("Secunderabad", 17.4399, 78.4983, 5.8, 6.2, 10),
            _z("Kondapur", 17.4685, 78.3621, 5.5, 5.1, 7),
        ),
    ),
    "chennai": City(
        key="chennai",
        display_name="Chennai",
        center_lat=13.0827,
        center_lng=80.2707,
        base_fare=26,
        rate_per_km=8,
        landmarks=("madras", "guindy", "mylapore"),
        zones=(
            _z("T Nagar", 13.0418, 80.2341, 7.7, 7.5, 12),
            _z("Anna Nagar", 13.0850, 80.2101, 6.3, 5.7, 9),
            _z("OMR (IT Corridor)", 12.9249, 80.2277, 7.1, 6.8, 13),
            _z("Adyar", 13.0067, 80.2570, 5.9, 5.2, 8),
            _z("Chennai Airport", 12.9941, 80.1709, 8.4, 4.1, 18),
            _z("Velachery", 12.9750, 80.2210, 6.0, 6.3, 10),
            _z("Porur", 13.0358, 80.1561, 4.8, 4.9, 7),
        ),
    ),
    "pune": City(
        key="pune",
        display_name="Pune",
        center_lat=18.5204,
        center_lng=73.8567,
        base_fare=24,
        rate_per_km=7,
        landmarks=("shivajinagar", "kothrud", "hadapsar"),
        zones=(
            _z("Hinjewadi", 18.5912, 73.7389, 7.6, 7.8, 12),
            _z("Koregaon Park", 18.5362, 73.8958, 6.7, 5.6, 9),
            _z("Kharadi", 18.5515, 73.9373, 6.5, 6.2, 10),
            _z("Viman Nagar", 18.5679, 73.9143, 6.2, 5.9, 9),
            _z("Baner", 18.5590, 73.7873, 5.7, 5.3, 8),
            _z("Pune Airport", 18.5822, 73.9197, 8.0, 4.0, 16),
            _z("Magarpatta", 18.5158, 73.9288, 5.4, 5.0, 7),
        ),
    ),
    "kolkata": City(
        key="kolkata",
        display_name="Kolkata",
        center_lat=22.5726,
        center_lng=88.3639,
        base_fare=22,
        rate_per_km=7,
        landmarks=("calcutta", "esplanade", "dum dum"),
        zones=(
            _z("Park Street", 22.5535, 88.3525, 7.3, 6.9, 11),
            _z("Salt Lake", 22.5804, 88.4148, 6.4, 5.5, 10),
            _z("New Town", 22.5854, 88.4746, 5.8, 4.8, 9),
            _z("Howrah", 22.5958, 88.2636, 7.0, 7.6, 12),
            _z("Netaji Airport", 22.6520, 88.4463, 8.2, 3.7, 17),
            _z("Ballygunge", 22.5354, 88.3640, 5.6, 5.2, 8),
            _z("Rajarhat", 22.6211, 88.4564, 5.0, 4.4, 7),
        ),
    ),
}


class CityRegistry:
    """Read-only lookups over a city table. The first entry is the default city."""

    def __init__(self, cities: dict[str, City] | None = None, default_key: str | None = None):
        self._cities = dict(cities if cities is not None else INDIAN_CITIES)
        if not self._cities:
            raise ValueError("City registry needs at least one city")
        self.default_key = default_key if default_key in self._cities else next(iter(self._cities))
        self._tokens = {key: self._city_tokens(city) for key, city in self._cities.items()}

    @staticmethod
    def _city_tokens(city: City) -> tuple:
        tokens = [city.key, city.display_name, *city.landmarks, *(z.name for z in city.zones)]
        return tuple(t.lower() for t in tokens if t)

    def resolve_city(self, address: str) -> str:
        text = (address or "").strip().lower()
        if not text:
            return self.default_key
        for key, tokens in self._tokens.items():
            if any(token in text for token in tokens):
                return key
        for key, city in self._cities.items():
            if any(text in zone.name.lower() for zone in city.zones):
                return key
        return self.default_key

    def get_city_info(self, key: str) -> City:
        return self._cities.get(key) or self._cities[self.default_key]

    def find_zone(self, city_key: str, name: str) -> Optional[Zone]:
        """Substring match in either direction, case-insensitive. First zone wins."""
        needle = (name or "").strip().lower()
        if not needle:
            return None
        for zone in self.get_city_info(city_key).zones:
            zone_name = zone.name.lower()
            if needle in zone_name or zone_name in needle:
                return zone
        return None

    def list_cities(self) -> List[City]:
        return list(self._cities.values())

    def city_zones(self, key: str) -> List[Zone]:
        return list(self.get_city_info(key).zones)

    def zone_for_address(self, address: str, city_key: str | None = None) -> Optional[Zone]:
        """Zone for a free-text address, resolving its city first unless given."""
        return self.find_zone(city_key or self.resolve_city(address), address)
