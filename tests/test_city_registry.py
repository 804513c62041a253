from smartride.domain.models import City, Zone
from smartride.infrastructure.city_registry import INDIAN_CITIES, CityRegistry


def test_seven_cities_with_zones_and_rate_cards():
    assert len(INDIAN_CITIES) == 7
    for city in INDIAN_CITIES.values():
        assert city.zones
        assert city.display_name
        assert city.base_fare > 0 and city.rate_per_km > 0
        for zone in city.zones:
            assert zone.lat > 0 and zone.lng > 0
            assert 0 <= zone.demand_score <= 10
            assert 0 <= zone.traffic_index <= 10


class TestResolveCity:
    def test_by_city_name_case_insensitive(self, registry):
        assert registry.resolve_city("Flat 4, Andheri, MUMBAI") == "mumbai"

    def test_by_landmark(self, registry):
        assert registry.resolve_city("near Charminar") == "hyderabad"

    def test_by_zone_name(self, registry):
        assert registry.resolve_city("Koramangala 5th Block") == "bangalore"
        assert registry.resolve_city("Hauz Khas") == "delhi"

    def test_falls_back_to_default_city(self, registry):
        assert registry.resolve_city("Atlantis Boulevard") == "delhi"
        assert registry.resolve_city("") == "delhi"
        assert registry.resolve_city("   ") == "delhi"

    def test_fragment_of_zone_name(self, registry):
        assert registry.resolve_city("Bandra") == "mumbai"
        assert registry.resolve_city("gachibowli") == "hyderabad"

    def test_token_in_address_beats_zone_fragment(self, registry):
        # "nagar" is part of Indiranagar (Bangalore) but the address names Pune.
        assert registry.resolve_city("Nagar, Pune") == "pune"


class TestFindZone:
    def test_exact(self, registry):
        assert registry.find_zone("delhi", "Hauz Khas").name == "Hauz Khas"

    def test_address_contains_zone_name(self, registry):
        assert registry.find_zone("delhi", "Block B, Connaught Place, New Delhi").name == "Connaught Place"

    def test_zone_name_contains_query(self, registry):
        assert registry.find_zone("mumbai", "bkc").name == "BKC (Bandra Kurla Complex)"

    def test_no_match(self, registry):
        assert registry.find_zone("delhi", "Colaba") is None

    def test_blank_never_matches(self, registry):
        assert registry.find_zone("delhi", "   ") is None

    def test_loose_matching_picks_first_zone_in_order(self, registry):
        # "nagar" is contained in several Chennai zone names; first wins.
        assert registry.find_zone("chennai", "Nagar").name == "T Nagar"


class TestCityInfo:
    def test_known_city(self, registry):
        delhi = registry.get_city_info("delhi")
        assert delhi.display_name == "Delhi NCR"
        assert delhi.base_fare == 30
        assert delhi.rate_per_km == 10

    def test_unknown_city_defaults(self, registry):
        assert registry.get_city_info("atlantis").key == "delhi"
        assert registry.city_zones("atlantis") == list(INDIAN_CITIES["delhi"].zones)

    def test_custom_table_first_entry_is_default(self):
        city = City(key="x", display_name="X", center_lat=1, center_lng=1, base_fare=1, rate_per_km=1,
                    zones=(Zone("Only", 1, 1),))
        registry = CityRegistry({"x": city})
        assert registry.resolve_city("anywhere") == "x"
        assert registry.get_city_info("nope") is city


def test_zone_for_address_resolves_city_first(registry):
    assert registry.zone_for_address("Powai").name == "Powai"
    assert registry.zone_for_address("Mars Colony") is None
