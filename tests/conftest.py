"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from datetime import datetime
from unittest.mock import patch

from services.analysis_service import AnalysisService
from services.plant_store_service import PlantStoreService


# ===================
# FIXTURES
# ===================

@pytest.fixture
def analysis_service() -> AnalysisService:
    """AnalysisService with default thresholds (90 / 50)."""
    return AnalysisService()


@pytest.fixture
def plant_store(tmp_path) -> PlantStoreService:
    """
    PlantStoreService writing to a temporary directory.

    Usage:
        def test_something(plant_store):
            plant_store.save(records, "plants.csv")
    """
    return PlantStoreService(store_dir=str(tmp_path / "plant_store"))


@pytest.fixture
def reference_now() -> datetime:
    """Fixed "now" for store filter tests."""
    return datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def sample_plant_rows() -> list:
    """Plant master rows: two active sites, one per exclusion rule."""
    return [
        {"SITE_NUMBER": "100", "REGION": "East", "ORGANIZATION_NUMBER": "9000",
         "OPEN_DATE": "01/15/2010", "CLOSE_DATE": "", "SITE_DESCRIPTION": "Downtown"},
        {"SITE_NUMBER": "100", "REGION": "East", "ORGANIZATION_NUMBER": "9000",
         "OPEN_DATE": "01/15/2010", "CLOSE_DATE": "", "SITE_DESCRIPTION": ""},
        {"SITE_NUMBER": "200", "REGION": "West", "ORGANIZATION_NUMBER": 9000,
         "OPEN_DATE": 40000, "CLOSE_DATE": None, "SITE_DESCRIPTION": "Harbor"},
        {"SITE_NUMBER": "300", "REGION": "Canada", "ORGANIZATION_NUMBER": "9000",
         "OPEN_DATE": "2010-01-01", "CLOSE_DATE": "", "SITE_DESCRIPTION": "Toronto"},
        {"SITE_NUMBER": "400", "REGION": "East", "ORGANIZATION_NUMBER": "8000",
         "OPEN_DATE": "2010-01-01", "CLOSE_DATE": "", "SITE_DESCRIPTION": "Partner"},
        {"SITE_NUMBER": "500", "REGION": "East", "ORGANIZATION_NUMBER": "9000",
         "OPEN_DATE": "2010-01-01", "CLOSE_DATE": "2020-01-01", "SITE_DESCRIPTION": "Closed"},
        {"SITE_NUMBER": "9011", "REGION": "East", "ORGANIZATION_NUMBER": "9000",
         "OPEN_DATE": "2010-01-01", "CLOSE_DATE": "", "SITE_DESCRIPTION": "Excluded"},
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(plant_store):
    """
    Create FastAPI test client backed by a temporary plant store.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/plants")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    with patch("routes.plants.get_plant_store_service", return_value=plant_store):
        with patch("routes.analysis.get_plant_store_service", return_value=plant_store):
            yield TestClient(app)
