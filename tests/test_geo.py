import pytest

from smartride.domain.geo import bearing_deg, distance_km, interpolate

CONNAUGHT_PLACE = (28.6315, 77.2167)
HAUZ_KHAS = (28.5494, 77.1960)
DELHI_CENTER = (28.6139, 77.2090)
MUMBAI_CENTER = (19.0760, 72.8777)


class TestDistance:
    @pytest.mark.parametrize("point", [CONNAUGHT_PLACE, MUMBAI_CENTER, (0.0, 0.0), (-33.86, 151.2)])
    def test_same_point_is_exactly_zero(self, point):
        assert distance_km(*point, *point) == 0.0

    def test_symmetry(self):
        assert distance_km(*CONNAUGHT_PLACE, *HAUZ_KHAS) == pytest.approx(distance_km(*HAUZ_KHAS, *CONNAUGHT_PLACE))

    def test_connaught_place_to_hauz_khas(self):
        assert 8 < distance_km(*CONNAUGHT_PLACE, *HAUZ_KHAS) < 12

    def test_delhi_to_mumbai(self):
        assert 1000 < distance_km(*DELHI_CENTER, *MUMBAI_CENTER) < 1300


def test_bearing_points_south_west_from_connaught_place_to_hauz_khas():
    heading = bearing_deg(*CONNAUGHT_PLACE, *HAUZ_KHAS)
    assert -180 < heading < -90


def test_interpolate_endpoints_and_midpoint():
    assert interpolate(0, 0, 10, 20, 0) == (0, 0)
    assert interpolate(0, 0, 10, 20, 1) == (10, 20)
    assert interpolate(0, 0, 10, 20, 0.5) == (5, 10)
