# 📄 File: tests/conftest.py
# 🧭 Purpose (Layman Explanation):
# Shared test helpers: fresh plant stores of every kind, a pretend cloud bucket,
# pretend AI and map services, and ready-made plant data.
# 🧪 Purpose (Technical Summary):
# Pytest fixtures and fakes for the record store contract suite, backend-specific tests,
# gateway tests and API tests.
# 🔗 Dependencies:
# pytest, pytest-asyncio, Pillow
# 🔄 Connected Modules / Calls From:
# All test modules

import base64
import io
import os

# Test environment must be in place before settings are first read
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["IDENTIFIER_BACKEND"] = "mock"
os.environ["REVERSE_GEOCODING_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Dict, List, Optional, Set

import pytest
from PIL import Image

from plantlens.modules.plant_records.domain.models.plant import IdentificationResult, PlantCreate
from plantlens.modules.plant_records.domain.services.plant_identifier import PlantIdentifier
from plantlens.modules.plant_records.infrastructure.storage.file_store import FilePlantStore
from plantlens.modules.plant_records.infrastructure.storage.memory_store import MemoryPlantStore
from plantlens.modules.plant_records.infrastructure.storage.object_store import ObjectPlantStore
from plantlens.shared.core.exceptions import (
    FileStorageError,
    PlantIdentificationError,
    StorageObjectNotFoundError,
)


# =============================================================================
# FAKES
# =============================================================================

class FakeBlobClient:
    """In-memory bucket with the blob client interface and switchable failures."""

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.initialized = False
        self.closed = False
        self.failing_prefixes: Dict[str, Set[str]] = {"upload": set(), "download": set(), "delete": set()}

    def fail(self, operation: str, prefix: str = "") -> None:
        self.failing_prefixes[operation].add(prefix)

    def _check(self, operation: str, key: str) -> None:
        for prefix in self.failing_prefixes[operation]:
            if key.startswith(prefix):
                raise FileStorageError(f"{operation} failed", operation=operation, storage_path=key)

    async def initialize(self) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True

    async def upload_bytes(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._check("upload", path)
        self.objects[path] = bytes(data)
        self.content_types[path] = content_type
        return path

    async def download_bytes(self, path: str) -> bytes:
        self._check("download", path)
        if path not in self.objects:
            raise StorageObjectNotFoundError(path)
        return self.objects[path]

    async def delete_files(self, paths: List[str]) -> bool:
        for path in paths:
            self._check("delete", path)
        for path in paths:
            self.objects.pop(path, None)
        return True


class FakeIdentifier(PlantIdentifier):
    """Returns a fixed result, or fails when told to."""

    provider_name = "fake"

    def __init__(self, result: Optional[IdentificationResult] = None, fail: bool = False):
        self.result = result or IdentificationResult(
            scientific_name="Monstera deliciosa",
            common_name="Swiss Cheese Plant",
            family="Araceae",
            origin="Central America, Southern Mexico",
            light_requirements="Bright, indirect light",
            watering="Water when top inch of soil is dry.",
            special_features="Split leaves",
            confidence=92,
            care_level="Easy to Moderate",
        )
        self.fail = fail
        self.calls = []

    async def identify(self, image_data: str, aroma_level: Optional[int] = None) -> IdentificationResult:
        self.calls.append((image_data, aroma_level))
        if self.fail:
            raise PlantIdentificationError(provider=self.provider_name)
        return self.result


class FakeGeocoder:
    def __init__(self, name: Optional[str] = "Kew, London Borough of Richmond upon Thames, England"):
        self.name = name
        self.calls = []

    async def lookup(self, latitude: str, longitude: str) -> Optional[str]:
        self.calls.append((latitude, longitude))
        return self.name

    async def close(self) -> None:
        return None


class FakeAPIClient:
    """Stands in for APIClient; records requests and replays a canned response or error."""

    def __init__(self, response=None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    async def post(self, endpoint, data=None, params=None, timeout=None):
        self.requests.append(("POST", endpoint, data, params))
        if self.error:
            raise self.error
        return self.response

    async def get(self, endpoint, params=None, timeout=None):
        self.requests.append(("GET", endpoint, None, params))
        if self.error:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


# =============================================================================
# DATA
# =============================================================================

def make_plant(**overrides) -> PlantCreate:
    fields = {
        "scientific_name": "Monstera deliciosa",
        "common_name": "Swiss Cheese Plant",
        "family": "Araceae",
        "origin": "Central America, Southern Mexico",
        "light_requirements": "Bright, indirect light",
        "watering": "Water when top inch of soil is dry.",
        "special_features": "Split leaves",
        "confidence": 92,
        "image_url": "https://example.com/monstera.jpg",
    }
    fields.update(overrides)
    return PlantCreate(**fields)


def make_data_uri(size=(16, 16), color=(34, 139, 34), fmt="PNG", mode="RGB") -> str:
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    mime = "image/png" if fmt == "PNG" else "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(buffer.getvalue()).decode('ascii')}"


@pytest.fixture
def plant_factory():
    return make_plant


@pytest.fixture
def image_data_uri() -> str:
    return make_data_uri()


# =============================================================================
# STORES
# =============================================================================

@pytest.fixture
def fake_bucket() -> FakeBlobClient:
    return FakeBlobClient()


@pytest.fixture
async def memory_store() -> MemoryPlantStore:
    store = MemoryPlantStore()
    await store.initialize()
    return store


@pytest.fixture
async def file_store(tmp_path) -> FilePlantStore:
    store = FilePlantStore(tmp_path / "data")
    await store.initialize()
    return store


@pytest.fixture
async def object_store(fake_bucket) -> ObjectPlantStore:
    store = ObjectPlantStore(fake_bucket)
    await store.initialize()
    return store


@pytest.fixture(params=["memory", "filesystem", "object"])
async def store(request, tmp_path):
    """Every backend, for the shared contract suite."""
    if request.param == "memory":
        backend = MemoryPlantStore()
    elif request.param == "filesystem":
        backend = FilePlantStore(tmp_path / "data")
    else:
        backend = ObjectPlantStore(FakeBlobClient())
    await backend.initialize()
    yield backend
    await backend.close()
