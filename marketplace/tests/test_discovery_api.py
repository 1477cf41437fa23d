from fastapi.testclient import TestClient

from marketplace.app import app

client = TestClient(app)

SANTIAGO = {"lat": "-33.4489", "lng": "-70.6693"}


def _ids(resp):
    return [item["id"] for item in resp.json()]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_categories_ordered_by_kind_then_name():
    resp = client.get("/categories")
    assert resp.status_code == 200
    body = resp.json()
    assert [c["id"] for c in body] == [
        "c-salon", "c-gym", "c-spa", "c-hair", "c-massage", "c-nails",
    ]


# ── Professionals ────────────────────────────────────────────────────────


def test_professionals_returns_array_in_stable_order():
    resp = client.get("/professionals")
    assert resp.status_code == 200
    assert _ids(resp) == ["p1", "p2", "p3", "p4", "p5"]


def test_professionals_ratings_and_fallback_name():
    by_id = {p["id"]: p for p in client.get("/professionals").json()}
    assert by_id["p1"]["rating"] == 4.7
    assert by_id["p1"]["review_count"] == 3
    assert by_id["p4"]["rating"] is None
    assert by_id["p3"]["name"] == "diego"
    assert by_id["p1"]["category"] == {"id": "c-massage", "name": "Massage", "kind": "PROFESSIONAL"}


def test_professionals_without_origin_have_no_distance():
    for item in client.get("/professionals").json():
        assert item["distance_km"] is None


def test_professionals_filter_by_gender_and_tier():
    assert _ids(client.get("/professionals", params={"gender": "FEMALE"})) == ["p1", "p2", "p4"]
    assert _ids(client.get("/professionals", params={"tier": "PREMIUM"})) == ["p1", "p5"]


def test_professionals_filter_by_category():
    resp = client.get("/professionals", params={"categoryId": "c-massage"})
    assert _ids(resp) == ["p1", "p3"]


def test_professionals_radius_keeps_unknown_location():
    resp = client.get("/professionals", params={**SANTIAGO, "rangeKm": "50"})
    assert _ids(resp) == ["p1", "p2", "p3", "p4"]
    by_id = {p["id"]: p for p in resp.json()}
    assert by_id["p4"]["distance_km"] is None
    assert by_id["p1"]["distance_km"] < 5


def test_professionals_min_rating_keeps_unrated():
    resp = client.get("/professionals", params={"minRating": "4"})
    assert _ids(resp) == ["p1", "p4", "p5"]


def test_malformed_numbers_are_ignored():
    resp = client.get("/professionals", params={"rangeKm": "far", "minRating": "lots"})
    assert resp.status_code == 200
    assert _ids(resp) == ["p1", "p2", "p3", "p4", "p5"]


def test_professionals_sorted_by_rating():
    resp = client.get("/professionals", params={"sort": "rating"})
    assert _ids(resp) == ["p1", "p5", "p2", "p3", "p4"]


def test_invalid_coordinate_is_rejected():
    resp = client.get("/professionals", params={"lat": "95", "lng": "0"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "INVALID_COORDINATE"


def test_professional_detail():
    resp = client.get("/professionals/p1")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Valentina Rojas"
    assert body["category"] == "Massage"
    assert body["rating"] == 4.7
    assert body["description"] == "Relaxing and deep tissue massage at home."
    assert [m["type"] for m in body["gallery"]] == ["IMAGE", "VIDEO"]


def test_professional_detail_falls_back_to_bio():
    body = client.get("/professionals/p2").json()
    assert body["description"] == "Stylist with ten years in salons."


def test_professional_detail_not_found():
    assert client.get("/professionals/nobody").status_code == 404
    # establishments are not professionals
    resp = client.get("/professionals/e1")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "NOT_FOUND"


# ── Establishments ───────────────────────────────────────────────────────


def test_establishments_ratings():
    by_id = {e["id"]: e for e in client.get("/establishments").json()}
    assert by_id["e1"]["rating"] == 4.0
    assert by_id["e1"]["review_count"] == 3
    assert by_id["e2"]["rating"] == 2.5
    assert by_id["e3"]["rating"] is None
    assert by_id["e1"]["gallery"] == ["/uploads/e1/1.jpg", "/uploads/e1/2.jpg"]


def test_establishments_radius_and_rating():
    resp = client.get("/establishments", params={**SANTIAGO, "rangeKm": "10"})
    assert _ids(resp) == ["e1", "e2", "e3"]
    resp = client.get("/establishments", params={"minRating": "4"})
    assert _ids(resp) == ["e1", "e3", "e4"]


def test_establishments_ignore_professional_only_filters():
    resp = client.get("/establishments", params={"gender": "FEMALE", "tier": "GOLD"})
    assert _ids(resp) == ["e1", "e2", "e3", "e4"]


def test_establishments_sorted_by_distance():
    resp = client.get("/establishments", params={**SANTIAGO, "sort": "distance"})
    assert _ids(resp) == ["e2", "e1", "e4", "e3"]
    distances = [e["distance_km"] for e in resp.json()]
    assert distances[:3] == sorted(distances[:3])
    assert distances[3] is None


def test_establishment_detail_with_origin():
    resp = client.get("/establishments/e2", params=SANTIAGO)
    assert resp.status_code == 200
    body = resp.json()
    assert body["category"] == "Gym"
    assert body["distance_km"] < 2


def test_establishment_detail_not_found():
    assert client.get("/establishments/p1").status_code == 404
