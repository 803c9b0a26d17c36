"""
Tests for the calculator JSON endpoints.
"""

import pytest


class TestCitiesEndpoint:
    def test_lists_all_cities(self, client):
        response = client.get("/api/v1/cities")

        assert response.status_code == 200
        data = response.get_json()
        assert len(data) == 10
        assert data[0]["id"] == "beijing"
        assert data[0]["social_insurance"]["base"]["min"] == 7162


class TestCalculateEndpoint:
    """Test the annual summary endpoint."""

    def test_calculate(self, client):
        response = client.post(
            "/api/v1/calculate",
            json={"monthly_base": 10000, "total_months": 15, "city": "beijing"},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["total_net_cash"] == pytest.approx(121110)
        assert data["total_value"] == pytest.approx(178710)
        assert data["bonus_tax_result"]["recommended_mode"] == "separate"
        assert len(data["monthly_details"]) == 12

    def test_city_defaults_from_settings(self, app, client):
        app.config["DEFAULT_CITY"] = "shanghai"

        response = client.post("/api/v1/calculate", json={"monthly_base": 10000})
        data = response.get_json()

        assert response.status_code == 200
        assert data["monthly_details"][0]["employer_insurance"]["injury"] == 16

    def test_invalid_input(self, client):
        response = client.post(
            "/api/v1/calculate", json={"monthly_base": "lots", "total_months": 30}
        )

        assert response.status_code == 400
        data = response.get_json()
        assert data["error"] == "Invalid input"
        fields = {tuple(d["loc"]) for d in data["details"]}
        assert ("monthly_base",) in fields
        assert ("total_months",) in fields

    def test_missing_body(self, client):
        response = client.post("/api/v1/calculate")

        assert response.status_code == 400

    def test_unknown_city(self, client):
        response = client.post(
            "/api/v1/calculate", json={"monthly_base": 10000, "city": "atlantis"}
        )

        assert response.status_code == 400


class TestStructureEndpoints:
    """Test structure breakdown and conversion."""

    def test_structure(self, client):
        response = client.post(
            "/api/v1/structure",
            json={"monthly_base": 20000, "alt_channel_ratio": 100, "alt_channel_fee_rate": 15},
        )

        assert response.status_code == 200
        assert response.get_json()["take_home_cash"] == 204000

    def test_convert(self, client):
        response = client.post(
            "/api/v1/convert",
            json={
                "current": {"monthly_base": 25000},
                "target": {"city": "shanghai", "months": 14},
                "raise_percent": 10,
            },
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["target_monthly_base"] > 0
        assert data["saturated"] is False
        assert (
            data["target_breakdown"]["comprehensive_value"]
            >= data["target_comprehensive_value"]
        )

    def test_convert_rejects_non_numeric_raise(self, client):
        response = client.post(
            "/api/v1/convert",
            json={"current": {"monthly_base": 25000}, "target": {}, "raise_percent": "ten"},
        )

        assert response.status_code == 400
        assert "raise_percent" in response.get_json()["error"]

    def test_convert_requires_current_base(self, client):
        response = client.post("/api/v1/convert", json={"current": {}, "target": {}})

        assert response.status_code == 400


class TestCompareEndpoints:
    def test_compare_cities(self, client):
        response = client.post(
            "/api/v1/compare/cities",
            json={"input": {"monthly_base": 20000}, "cities": ["beijing", "shanghai"]},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert [r["city"] for r in data["results"]] == ["beijing", "shanghai"]
        assert data["best_city"] in ("beijing", "shanghai")

    def test_compare_cities_count_checked(self, client):
        response = client.post(
            "/api/v1/compare/cities",
            json={"input": {"monthly_base": 20000}, "cities": ["beijing"]},
        )

        assert response.status_code == 400

    def test_compare_cities_requires_list(self, client):
        response = client.post(
            "/api/v1/compare/cities",
            json={"input": {"monthly_base": 20000}, "cities": "beijing"},
        )

        assert response.status_code == 400

    def test_compare_offers(self, client):
        response = client.post(
            "/api/v1/compare/offers",
            json={"offers": [{"monthly_base": 10000}, {"monthly_base": 30000}]},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["best_index"] == 1
        assert data["value_gaps"][1] == 0


class TestReconcileEndpoint:
    def test_reconcile(self, client):
        response = client.post(
            "/api/v1/reconcile", json={"monthly_base": 20000, "total_months": 15}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["difference"] == pytest.approx(4410)
        assert data["bracket_name"] == "20%"
