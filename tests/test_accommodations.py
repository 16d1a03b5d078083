"""
Accommodation filtering: the pure filter and GET /api/accommodations.
"""

import pytest

from stars.models.catalog import ACCOMMODATION_SEED
from stars.services.accommodation_service import filter_accommodations


def names(rows):
    return {r["name"] for r in rows}


class TestFilterAccommodations:

    def test_no_filters_returns_everything(self):
        assert len(filter_accommodations(ACCOMMODATION_SEED)) == 6

    def test_budget_bucket(self):
        result = names(filter_accommodations(ACCOMMODATION_SEED, price_range="budget"))
        assert result == {"Zero-G Capsule"}
        assert "International Space Hub" not in result

    def test_standard_bucket_is_inclusive(self):
        result = names(filter_accommodations(ACCOMMODATION_SEED, price_range="standard"))
        assert result == {"Mars Habitat Suite", "International Space Hub"}

    def test_luxury_and_ultra_buckets(self):
        assert names(filter_accommodations(ACCOMMODATION_SEED, price_range="luxury")) == {"Orbital Luxury Suite"}
        assert names(filter_accommodations(ACCOMMODATION_SEED, price_range="ultra")) == {
            "Lunar Dome Residence", "Saturn Ring View Suite",
        }

    def test_location_substring_is_case_insensitive(self):
        result = names(filter_accommodations(ACCOMMODATION_SEED, location="earth orbit"))
        assert result == {"Orbital Luxury Suite", "International Space Hub", "Zero-G Capsule"}

    def test_amenity_substring(self):
        result = names(filter_accommodations(ACCOMMODATION_SEED, amenity="spa"))
        assert result == {"Orbital Luxury Suite", "Saturn Ring View Suite"}

    def test_filters_intersect(self):
        result = filter_accommodations(ACCOMMODATION_SEED, location="orbit", price_range="standard")
        assert names(result) == {"International Space Hub"}

    def test_all_disables_filters(self):
        rows = filter_accommodations(ACCOMMODATION_SEED, location="all", amenity="all", price_range="all")
        assert len(rows) == 6

    def test_unknown_bucket_raises(self):
        with pytest.raises(ValueError):
            filter_accommodations(ACCOMMODATION_SEED, price_range="cheap")


class TestAccommodationsApi:

    def test_list_is_public(self, client):
        response = client.get("/api/accommodations")
        assert response.status_code == 200
        body = response.json()
        assert len(body) == 6
        assert {"pricePerNight", "amenities", "tier", "image"} <= body[0].keys()

    def test_budget_price_range(self, client):
        response = client.get("/api/accommodations", params={"priceRange": "budget"})
        assert response.status_code == 200
        result = response.json()
        assert [r["name"] for r in result] == ["Zero-G Capsule"]
        assert all(r["pricePerNight"] < 10000 for r in result)

    def test_combined_query(self, client):
        response = client.get("/api/accommodations", params={"location": "saturn", "amenity": "chef"})
        assert [r["name"] for r in response.json()] == ["Saturn Ring View Suite"]

    def test_invalid_price_range_is_400(self, client):
        response = client.get("/api/accommodations", params={"priceRange": "cheap"})
        assert response.status_code == 400
        assert response.json()["errors"]


class TestCatalogApi:

    def test_destinations(self, client):
        response = client.get("/api/destinations")
        assert response.status_code == 200
        ids = [d["id"] for d in response.json()]
        assert ids == ["mercury", "venus", "earth", "mars", "saturn"]
        assert "travelTime" in response.json()[0]

    def test_packages(self, client):
        response = client.get("/api/packages")
        assert response.status_code == 200
        packages = {p["id"]: p for p in response.json()}
        assert packages["basic"]["spacewalk"] is False
        assert packages["ultimate"]["price"] == 750000
        assert packages["premium"]["medicalSupport"] == "Enhanced"

    def test_root_health(self, client):
        assert client.get("/").json()["status"] == "ok"
