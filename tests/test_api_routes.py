"""
API tests for the plant data and analysis routes.

Uses FastAPI's TestClient with the plant store pointed at a
temporary directory.
"""

from tests.factories import PlantRowFactory, inventory_row, product_row, status_row


def analysis_payload(**overrides) -> dict:
    """Two active stores, one PLU stocked at one of them."""
    payload = {
        "inventory": [inventory_row("0001", "100", 5)],
        "status": [status_row("0001", False)],
        "product": [product_row("0001", "Active", "Both", "0001 - Apples")],
        "active_stores": ["100", "200"],
    }
    payload.update(overrides)
    return payload


# ===================
# APP
# ===================

class TestApp:
    """Health and root endpoints."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "plant_data_stored" in response.json()

    def test_root_lists_endpoints(self, test_client):
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["analysis"] == "/api/analysis"


# ===================
# PLANT DATA
# ===================

class TestPlantRoutes:
    """PUT / GET / DELETE /api/plants and the active store listing."""

    def test_status_when_empty(self, test_client):
        response = test_client.get("/api/plants")

        assert response.status_code == 200
        assert response.json() == {"metadata": None, "row_count": 0, "active_stores": 0}

    def test_upload(self, test_client, sample_plant_rows):
        response = test_client.put(
            "/api/plants",
            json={"source_file": "plants.csv", "records": sample_plant_rows},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["row_count"] == 7
        assert data["active_stores"] == 2
        assert data["metadata"]["source_file"] == "plants.csv"

        status = test_client.get("/api/plants").json()
        assert status["row_count"] == 7
        assert status["metadata"]["source_file"] == "plants.csv"

    def test_upload_invalid_rows(self, test_client):
        rows = PlantRowFactory.create_batch(2)
        del rows[1]["SITE_NUMBER"]

        response = test_client.put("/api/plants", json={"source_file": "plants.csv", "records": rows})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "PLANT_RECORDS_INVALID"
        assert error["details"]["errors"][0]["row"] == 2

    def test_upload_missing_columns(self, test_client):
        response = test_client.put(
            "/api/plants",
            json={"source_file": "plants.csv", "records": [{"SITE_NUMBER": "100"}]},
        )

        assert response.status_code == 422
        assert "Missing required columns" in response.json()["error"]["details"]["errors"][0]["error"]

    def test_upload_no_rows(self, test_client):
        response = test_client.put("/api/plants", json={"source_file": "plants.csv", "records": []})

        assert response.status_code == 422
        assert response.json()["error"]["details"]["errors"][0]["error"] == "No records supplied"

    def test_upload_invalid_rows_keeps_previous_data(self, test_client, sample_plant_rows):
        test_client.put("/api/plants", json={"source_file": "good.csv", "records": sample_plant_rows})
        test_client.put("/api/plants", json={"source_file": "bad.csv", "records": [{"REGION": "East"}]})

        assert test_client.get("/api/plants").json()["metadata"]["source_file"] == "good.csv"

    def test_clear(self, test_client, sample_plant_rows):
        test_client.put("/api/plants", json={"source_file": "plants.csv", "records": sample_plant_rows})

        response = test_client.delete("/api/plants")

        assert response.status_code == 204
        assert test_client.get("/api/plants").json()["row_count"] == 0

    def test_active_stores_without_data(self, test_client):
        response = test_client.get("/api/plants/active-stores")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PLANT_DATA_NOT_FOUND"

    def test_active_stores(self, test_client, sample_plant_rows):
        test_client.put("/api/plants", json={"source_file": "plants.csv", "records": sample_plant_rows})

        response = test_client.get("/api/plants/active-stores")

        assert response.status_code == 200
        assert response.json() == [
            {"site_number": "100", "site_description": "Downtown", "region": "East", "organization_number": "9000"},
            {"site_number": "200", "site_description": "Harbor", "region": "West", "organization_number": "9000"},
        ]

    def test_active_stores_search(self, test_client, sample_plant_rows):
        test_client.put("/api/plants", json={"source_file": "plants.csv", "records": sample_plant_rows})

        response = test_client.get("/api/plants/active-stores", params={"search": "harb"})

        assert [s["site_number"] for s in response.json()] == ["200"]


# ===================
# ANALYSIS
# ===================

class TestAnalysisRoutes:
    """POST /api/analysis and /api/analysis/channel-audit."""

    def test_explicit_active_stores(self, test_client):
        response = test_client.post("/api/analysis", json=analysis_payload())

        assert response.status_code == 200
        data = response.json()
        assert data["results"] == [{
            "plu": "0001",
            "description": "Apples",
            "sap_status": "Active",
            "published": False,
            "inventory_pct": 50.0,
            "stores_with_inventory": 1,
            "total_active_stores": 2,
            "inv_9801": 0,
            "inv_9803": 0,
            "recommendation": "No Action",
        }]
        assert data["filtered_out_results"] == []
        assert data["channel_audit_results"] == []
        assert data["summary"]["total_plus"] == 1
        assert data["summary"]["no_action"] == 1
        assert data["summary"]["error"] is None

    def test_active_stores_from_plant_rows(self, test_client, sample_plant_rows):
        payload = analysis_payload(active_stores=None, plant=sample_plant_rows)

        response = test_client.post("/api/analysis", json=payload)

        assert response.status_code == 200
        assert response.json()["summary"]["active_stores"] == 2

    def test_active_stores_from_stored_plant_data(self, test_client, sample_plant_rows):
        test_client.put("/api/plants", json={"source_file": "plants.csv", "records": sample_plant_rows})
        payload = analysis_payload(
            inventory=[inventory_row("0001", "100", 5), inventory_row("0001", "200", 2)],
            active_stores=None,
        )

        response = test_client.post("/api/analysis", json=payload)

        assert response.status_code == 200
        result = response.json()["results"][0]
        assert result["inventory_pct"] == 100.0
        assert result["recommendation"] == "Publish"

    def test_no_plant_data(self, test_client):
        response = test_client.post("/api/analysis", json=analysis_payload(active_stores=None))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PLANT_DATA_NOT_FOUND"

    def test_no_active_stores(self, test_client):
        response = test_client.post("/api/analysis", json=analysis_payload(active_stores=[]))

        assert response.status_code == 200
        data = response.json()
        assert data["results"] == []
        assert data["summary"]["active_stores"] == 0
        assert data["summary"]["error"] == "No active stores found"

    def test_invalid_inventory(self, test_client):
        payload = analysis_payload(inventory=[{"sku": "0001", "availableQuantity": 1}])

        response = test_client.post("/api/analysis", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVENTORY_RECORDS_INVALID"

    def test_invalid_plant_rows(self, test_client):
        payload = analysis_payload(active_stores=None, plant=[{"SITE_NUMBER": "100"}])

        response = test_client.post("/api/analysis", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "PLANT_RECORDS_INVALID"

    def test_missing_feed(self, test_client):
        payload = analysis_payload()
        del payload["status"]

        response = test_client.post("/api/analysis", json=payload)

        assert response.status_code == 422

    def test_filtered_and_audited_items(self, test_client):
        payload = analysis_payload(
            inventory=[inventory_row("0002", "100", 1), inventory_row("0002", "200", 1)],
            status=[status_row("0002", True), status_row("0003", False)],
            product=[
                product_row("0002", "Active", "Store"),
                product_row("0003", "Active", "Store"),
            ],
        )

        data = test_client.post("/api/analysis", json=payload).json()

        assert data["results"] == []
        assert data["filtered_out_results"] == []
        assert [r["plu"] for r in data["channel_audit_results"]] == ["0002"]
        assert data["channel_audit_results"][0]["would_recommend"] == "Unpublish"

    def test_channel_audit_endpoint(self, test_client):
        payload = analysis_payload(
            status=[status_row("0001", True)],
            product=[product_row("0001", "Active", "Store", "0001 - Apples")],
        )

        response = test_client.post("/api/analysis/channel-audit", json=payload)

        assert response.status_code == 200
        assert response.json() == [{
            "plu": "0001",
            "description": "Apples",
            "sap_status": "Active",
            "published": True,
            "inventory_pct": 50.0,
            "available_in_channel": "Store",
            "would_recommend": "Unpublish",
        }]
