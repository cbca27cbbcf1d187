# 📄 File: tests/test_settings.py
# 🧭 Purpose (Layman Explanation):
# Checks that the app reads its settings correctly and picks the right kind of plant storage.
# 🧪 Purpose (Technical Summary):
# Settings validation, record store factory selection and blob client error mapping tests.
# 🔗 Dependencies:
# pytest, pydantic, pydantic-settings
# 🔄 Connected Modules / Calls From:
# pytest

import pytest
from pydantic import ValidationError

from plantlens.modules.plant_records.infrastructure.storage.factory import create_plant_store
from plantlens.modules.plant_records.infrastructure.storage.file_store import FilePlantStore
from plantlens.modules.plant_records.infrastructure.storage.memory_store import MemoryPlantStore
from plantlens.modules.plant_records.infrastructure.storage.object_store import ObjectPlantStore
from plantlens.shared.config.settings import Settings
from plantlens.shared.core.exceptions import (
    ConfigurationError,
    FileStorageError,
    StorageObjectNotFoundError,
)
from plantlens.shared.infrastructure.storage.supabase_storage import SupabaseStorageClient


def test_backend_names_are_normalized():
    settings = Settings(STORAGE_BACKEND="FileSystem", IDENTIFIER_BACKEND="OpenAI")
    assert settings.STORAGE_BACKEND == "filesystem"
    assert settings.IDENTIFIER_BACKEND == "openai"


@pytest.mark.parametrize("field, value", [
    ("STORAGE_BACKEND", "postgres"),
    ("IDENTIFIER_BACKEND", "gemini"),
    ("LOG_FORMAT", "xml"),
    ("IMAGE_QUALITY", 0),
])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


@pytest.mark.parametrize("value, expected", [("api", "/api"), ("/api/", "/api"), ("", "")])
def test_api_prefix_is_normalized(value, expected):
    assert Settings(API_PREFIX=value).API_PREFIX == expected


def test_mock_identifier_without_key():
    assert Settings(IDENTIFIER_BACKEND="openai", OPENAI_API_KEY=None).use_mock_identifier is True
    assert Settings(IDENTIFIER_BACKEND="openai", OPENAI_API_KEY="sk-test").use_mock_identifier is False


def test_factory_memory_backend():
    assert isinstance(create_plant_store(Settings(STORAGE_BACKEND="memory")), MemoryPlantStore)


def test_factory_filesystem_backend(tmp_path):
    store = create_plant_store(Settings(STORAGE_BACKEND="filesystem", DATA_DIR=str(tmp_path), IMAGE_QUALITY=70))

    assert isinstance(store, FilePlantStore)
    assert store.data_dir == tmp_path
    assert store.image_quality == 70


def test_factory_object_backend_requires_credentials():
    with pytest.raises(ConfigurationError):
        create_plant_store(Settings(STORAGE_BACKEND="object", SUPABASE_URL=None, SUPABASE_SERVICE_ROLE_KEY=None))


def test_factory_object_backend():
    store = create_plant_store(Settings(
        STORAGE_BACKEND="object",
        SUPABASE_URL="https://example.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="service-role-key",
    ))

    assert isinstance(store, ObjectPlantStore)
    assert isinstance(store.blob_client, SupabaseStorageClient)


async def test_blob_client_without_credentials_fails_at_start():
    client = SupabaseStorageClient(Settings(SUPABASE_URL=None, SUPABASE_SERVICE_ROLE_KEY=None))

    with pytest.raises(ConfigurationError):
        await client.initialize()


class StorageApiError(Exception):
    def __init__(self, message, code, status):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status


class ErroringBucket:
    def __init__(self, error):
        self.error = error

    def download(self, path):
        raise self.error


class ErroringStorage:
    def __init__(self, error):
        self.bucket = ErroringBucket(error)

    def from_(self, name):
        return self.bucket


@pytest.mark.parametrize("error", [
    StorageApiError("Object not found", "not_found", 400),
    StorageApiError("The resource was not found", "NoSuchKey", 404),
    Exception({"statusCode": "404", "error": "not_found", "message": "Object not found"}),
])
async def test_blob_client_reports_missing_objects(error):
    client = SupabaseStorageClient(Settings(SUPABASE_URL="https://example.supabase.co"))
    client.storage = ErroringStorage(error)

    with pytest.raises(StorageObjectNotFoundError):
        await client.download_bytes("plants/index.json")


async def test_blob_client_download_outage_is_not_a_missing_object():
    client = SupabaseStorageClient(Settings(SUPABASE_URL="https://example.supabase.co"))
    client.storage = ErroringStorage(StorageApiError("Service Unavailable", "service_unavailable", 503))

    with pytest.raises(FileStorageError) as exc_info:
        await client.download_bytes("plants/index.json")
    assert not isinstance(exc_info.value, StorageObjectNotFoundError)
