from placerank.matching.city import (
    available_cities,
    build_canonical_city_map,
    canonical_city_for,
    canonicalize_city,
    cluster_city_labels,
    extract_city_from_address,
    normalize_city_label,
)
from placerank.recommendations.models import VenueRecord


def _venue(vid, address=None, lat=None, lng=None, city=None):
    return VenueRecord(id=vid, name=f"Lugar {vid}", address=address, lat=lat, lng=lng, city=city)


def test_normalize_city_label_unifies_buenos_aires_variants():
    assert normalize_city_label("Cdad. Autónoma de Buenos Aires") == "CABA"
    assert normalize_city_label("C1414 Ciudad Autónoma de Buenos Aires") == "CABA"
    assert normalize_city_label("Buenos Aires") == "CABA"
    assert normalize_city_label("Capital Federal") == "CABA"


def test_normalize_city_label_drops_postal_codes():
    assert normalize_city_label("1100-213 Lisboa") == "Lisboa"
    assert normalize_city_label("London EC2A 4PY") == "London"
    assert normalize_city_label("  ") == ""
    assert normalize_city_label(None) == ""


def test_extract_city_from_address_uses_segment_before_country():
    assert extract_city_from_address("Av. de Mayo 825, C1084 CABA, Argentina") == "CABA"
    assert extract_city_from_address("Calle Mayor 1, 28013 Madrid, España") == "Madrid"
    assert extract_city_from_address("Arturo M. Bas 69, X5000 Córdoba, Argentina") == "Córdoba"


def test_extract_city_from_address_backs_up_over_province_prefix():
    address = "Ruta 40 km 3, San Carlos de Bariloche, Provincia de Río Negro, Argentina"
    assert extract_city_from_address(address) == "San Carlos de Bariloche"


def test_extract_city_from_address_prefers_postal_locality_over_province():
    address = "Calle 7 776, B1900 La Plata, Buenos Aires, Argentina"
    assert extract_city_from_address(address) == "La Plata"


def test_extract_city_from_address_needs_two_segments():
    assert extract_city_from_address("Solo una parte") is None
    assert extract_city_from_address("") is None
    assert extract_city_from_address(None) is None


def test_cluster_merges_nearby_labels_under_most_frequent():
    points = [("Palermo, CABA", -34.588, -58.430)] * 5 + [("Recoleta, CABA", -34.593, -58.392)] * 2
    mapping = cluster_city_labels(points, radius_km=50.0)
    assert mapping["Palermo, CABA"] == "Palermo, CABA"
    assert mapping["Recoleta, CABA"] == "Palermo, CABA"


def test_cluster_ties_break_by_accent_insensitive_order():
    points = [("Vicente López", -34.527, -58.475), ("Olivos", -34.510, -58.490)]
    mapping = cluster_city_labels(points)
    assert mapping["Vicente López"] == "Olivos"
    assert mapping["Olivos"] == "Olivos"


def test_cluster_keeps_distant_labels_apart():
    points = [("CABA", -34.60, -58.38), ("Córdoba", -31.42, -64.19)]
    mapping = cluster_city_labels(points)
    assert mapping == {"CABA": "CABA", "Córdoba": "Córdoba"}


def test_cluster_labels_without_coordinates_are_singletons():
    points = [("Mendoza", None, None), ("CABA", -34.60, -58.38), ("CABA", -34.61, -58.39)]
    mapping = cluster_city_labels(points)
    assert mapping["Mendoza"] == "Mendoza"
    assert mapping["CABA"] == "CABA"


def test_cluster_merges_transitively():
    # A-B and B-C within 30 km, A-C about 43 km apart.
    points = [
        ("Pilar", -34.46, -58.91),
        ("Pilar", -34.46, -58.91),
        ("Moreno", -34.65, -58.79),
        ("La Matanza", -34.77, -58.62),
    ]
    mapping = cluster_city_labels(points, radius_km=30.0)
    assert set(mapping.values()) == {"Pilar"}


def test_cluster_monotonic_in_radius():
    points = [
        ("CABA", -34.60, -58.38),
        ("La Plata", -34.92, -57.95),
        ("Rosario", -32.95, -60.65),
        ("Rosario", -32.94, -60.64),
    ]
    small = cluster_city_labels(points, radius_km=10.0)
    large = cluster_city_labels(points, radius_km=100.0)
    # Labels merged at the small radius stay merged at the large one.
    for a in small:
        for b in small:
            if small[a] == small[b]:
                assert large[a] == large[b]
    assert large["CABA"] == large["La Plata"]
    assert large["Rosario"] != large["CABA"]


def test_canonicalize_city_passes_unknown_labels_through():
    assert canonicalize_city("Rosario", {"CABA": "CABA"}) == "Rosario"
    assert canonicalize_city(None, {"CABA": "CABA"}) is None


def test_build_map_and_available_cities():
    venues = [
        _venue("1", "Av. de Mayo 825, C1084 CABA, Argentina", -34.6087, -58.3787),
        _venue("2", "Honduras 5000, C1414 Cdad. Autónoma de Buenos Aires, Argentina", -34.58, -58.43),
        _venue("3", "Arturo M. Bas 69, X5000 Córdoba, Argentina", -31.4167, -64.1888),
        _venue("4", city="Ushuaia"),
        _venue("5"),
    ]
    city_map = build_canonical_city_map(venues)
    assert canonical_city_for(venues[1], city_map) == "CABA"
    assert canonical_city_for(venues[3], city_map) == "Ushuaia"
    assert canonical_city_for(venues[4], city_map) is None
    assert available_cities(venues, city_map) == ["CABA", "Córdoba", "Ushuaia"]
