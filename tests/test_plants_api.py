# 📄 File: tests/test_plants_api.py
# 🧭 Purpose (Layman Explanation):
# Pretends to be the phone app and calls every web endpoint, checking the answers and error messages.
# 🧪 Purpose (Technical Summary):
# HTTP API tests through FastAPI's TestClient with an in-memory store, a fake identifier and a fake
# geocoder injected into the application factory.
# 🔗 Dependencies:
# pytest, fastapi.testclient (httpx), conftest fakes
# 🔄 Connected Modules / Calls From:
# pytest

import pytest
from fastapi.testclient import TestClient

from plantlens.main import create_application
from plantlens.modules.plant_records.domain.models.plant import IdentificationResult
from plantlens.modules.plant_records.infrastructure.storage.memory_store import MemoryPlantStore
from plantlens.shared.config.settings import Settings
from plantlens.shared.core.exceptions import PlantLensException, PlantNotFoundError

from .conftest import FakeGeocoder, FakeIdentifier, make_data_uri

PLANTS = "/api/plants"


def build_settings(**overrides) -> Settings:
    values = {"STORAGE_BACKEND": "memory", "IDENTIFIER_BACKEND": "mock", "REVERSE_GEOCODING_ENABLED": False}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def identifier():
    return FakeIdentifier()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def client(identifier, geocoder):
    app = create_application(
        build_settings(),
        plant_store=MemoryPlantStore(),
        plant_identifier=identifier,
        reverse_geocoder=geocoder,
    )
    with TestClient(app) as test_client:
        yield test_client


def identify(client, **body):
    body.setdefault("imageData", make_data_uri())
    return client.post(f"{PLANTS}/identify", json=body)


# =============================================================================
# HEALTH
# =============================================================================

def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["storage_backend"] == "memory"
    assert body["identifier"] == "fake"


# =============================================================================
# IDENTIFY
# =============================================================================

def test_identify_creates_plant(client, identifier):
    response = identify(client, aromaLevel=7)

    assert response.status_code == 200
    plant = response.json()
    assert plant["id"] == 1
    assert plant["scientificName"] == "Monstera deliciosa"
    assert plant["commonName"] == "Swiss Cheese Plant"
    assert plant["identificationCount"] == 1
    assert plant["aromaLevel"] == 7
    assert plant["confidence"] == 92
    assert plant["imageUrl"].startswith("data:image/png;base64,")
    assert "createdAt" in plant
    assert identifier.calls[0][1] == 7


def test_identify_defaults_aroma(client):
    assert identify(client).json()["aromaLevel"] == 5


def test_identify_twice_merges(client):
    first = identify(client).json()
    second = identify(client, aromaLevel=2).json()

    assert second["id"] == first["id"]
    assert second["identificationCount"] == 2
    assert second["aromaLevel"] == first["aromaLevel"]
    assert len(client.get(PLANTS).json()) == 1


def test_identify_without_image_is_rejected(client, identifier):
    response = client.post(f"{PLANTS}/identify", json={"aromaLevel": 3})

    assert response.status_code == 400
    assert response.json()["message"] == "Image data required"
    assert identifier.calls == []


def test_identify_with_empty_image_is_rejected(client):
    response = client.post(f"{PLANTS}/identify", json={"imageData": ""})

    assert response.status_code == 400
    assert response.json()["message"] == "Image data required"


@pytest.mark.parametrize("body", [
    {"aromaLevel": 11},
    {"aromaLevel": -1},
    {"latitude": 51.5},
    {"longitude": "-0.12"},
    {"latitude": "", "longitude": "51.5"},
    {"latitude": "51.5", "longitude": "   "},
    {"latitude": True, "longitude": "0.1"},
])
def test_identify_invalid_fields_are_rejected(client, identifier, body):
    response = identify(client, **body)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"
    assert identifier.calls == []


def test_identification_failure_returns_500(client, identifier):
    identifier.fail = True

    response = identify(client)

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to identify plant. Please try again."
    assert client.get(PLANTS).json() == []


def test_coordinates_are_reverse_geocoded(client, geocoder):
    plant = identify(client, latitude=51.4787, longitude=-0.2956).json()

    assert plant["latitude"] == "51.4787"
    assert plant["longitude"] == "-0.2956"
    assert plant["locationName"] == geocoder.name
    assert geocoder.calls == [("51.4787", "-0.2956")]


def test_supplied_location_name_skips_geocoding(client, geocoder):
    plant = identify(client, latitude="51.4787", longitude="-0.2956", locationName="Kew Gardens").json()

    assert plant["locationName"] == "Kew Gardens"
    assert geocoder.calls == []


def test_failed_geocoding_leaves_location_empty(client, geocoder):
    geocoder.name = None

    plant = identify(client, latitude="51.4787", longitude="-0.2956").json()

    assert plant["latitude"] == "51.4787"
    assert plant["locationName"] is None


# =============================================================================
# READ / UPDATE / DELETE
# =============================================================================

def test_list_is_newest_first(client, identifier):
    identify(client)
    identifier.result = IdentificationResult(
        scientific_name="Ficus lyrata", common_name="Fiddle Leaf Fig", family="Moraceae",
        origin="Western Africa", light_requirements="Bright, indirect light",
        watering="Water when top 1-2 inches of soil are dry.", special_features="Violin-shaped leaves",
        confidence=85,
    )
    identify(client)

    plants = client.get(PLANTS).json()
    assert [p["id"] for p in plants] == [2, 1]
    assert plants[0]["commonName"] == "Fiddle Leaf Fig"


def test_get_plant(client):
    created = identify(client).json()

    response = client.get(f"{PLANTS}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_plant(client):
    response = client.get(f"{PLANTS}/99")

    assert response.status_code == 404
    assert response.json()["message"] == "Plant not found"


def test_application_errors_render_code_and_details(client):
    response = client.get(f"{PLANTS}/99")

    error = response.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["details"]["plant_id"] == 99
    assert error["details"]["resource_type"] == "plant"
    assert isinstance(PlantNotFoundError(99), PlantLensException)


def test_non_numeric_plant_id_is_rejected(client):
    assert client.get(f"{PLANTS}/abc").status_code == 400


def test_increment_count(client):
    created = identify(client).json()

    response = client.patch(f"{PLANTS}/{created['id']}/count")
    assert response.status_code == 200
    assert response.json()["identificationCount"] == 2


def test_increment_missing_plant(client):
    response = client.patch(f"{PLANTS}/5/count")

    assert response.status_code == 404
    assert response.json()["message"] == "Plant not found"


def test_delete_plant(client):
    created = identify(client).json()

    response = client.delete(f"{PLANTS}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Plant deleted successfully"}
    assert client.get(f"{PLANTS}/{created['id']}").status_code == 404


def test_delete_missing_plant(client):
    response = client.delete(f"{PLANTS}/3")

    assert response.status_code == 404
    assert response.json()["message"] == "Plant not found"


def test_delete_all_restarts_numbering(client):
    identify(client)
    identify(client)

    response = client.delete(PLANTS)
    assert response.status_code == 200
    assert response.json() == {"message": "All plants deleted successfully"}
    assert client.get(PLANTS).json() == []

    fresh = identify(client).json()
    assert fresh["id"] == 1
    assert fresh["identificationCount"] == 1


# =============================================================================
# CROSS-CUTTING
# =============================================================================

def test_request_id_is_echoed(client):
    response = client.get(PLANTS, headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client):
    assert client.get(PLANTS).headers.get("X-Request-ID")


def test_custom_api_prefix(identifier):
    app = create_application(
        build_settings(API_PREFIX="v2/"),
        plant_store=MemoryPlantStore(),
        plant_identifier=identifier,
    )
    with TestClient(app) as test_client:
        assert test_client.get("/v2/plants").json() == []
        assert test_client.get(PLANTS).status_code == 404
