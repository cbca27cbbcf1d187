# 📄 File: tests/test_file_store.py
# 🧭 Purpose (Layman Explanation):
# Checks that plants saved to disk end up in the right files, photos become JPEG files,
# and broken files on disk do not crash the app.
# 🧪 Purpose (Technical Summary):
# Filesystem backend tests: on-disk layout, metadata counters, image externalization and degradation paths.
# 🔗 Dependencies:
# pytest, pytest-asyncio, Pillow, conftest fixtures
# 🔄 Connected Modules / Calls From:
# pytest

import io
import json

from PIL import Image

from plantlens.modules.plant_records.domain.models.user import UserCreate
from plantlens.modules.plant_records.infrastructure.storage.file_store import FilePlantStore

from .conftest import make_data_uri, make_plant


async def test_initialize_creates_directories(tmp_path):
    store = FilePlantStore(tmp_path / "data")
    await store.initialize()

    for name in ("plants", "images", "users"):
        assert (tmp_path / "data" / name).is_dir()


async def test_plant_written_as_camel_case_document(file_store):
    await file_store.create_plant(make_plant(care_level="Easy"))

    document = json.loads((file_store.plants_dir / "1.json").read_text())
    assert document["id"] == 1
    assert document["scientificName"] == "Monstera deliciosa"
    assert document["identificationCount"] == 1
    assert document["aromaLevel"] == 5
    assert document["careLevel"] == "Easy"
    assert "createdAt" in document


async def test_metadata_tracks_next_identifiers(file_store):
    await file_store.create_plant(make_plant())
    await file_store.create_user(UserCreate(username="alice", password="secret"))

    metadata = json.loads(file_store.metadata_file.read_text())
    assert metadata == {"nextPlantId": 2, "nextUserId": 2}


async def test_inline_image_is_externalized_as_jpeg(file_store):
    plant = await file_store.create_plant(make_plant(image_url=make_data_uri(size=(32, 24))))

    assert plant.image_url == "/data/images/plant-1.jpg"
    image_path = file_store.images_dir / "plant-1.jpg"
    assert image_path.exists()
    with Image.open(io.BytesIO(image_path.read_bytes())) as img:
        assert img.format == "JPEG"
        assert img.size == (32, 24)


async def test_large_image_is_downscaled(tmp_path):
    store = FilePlantStore(tmp_path, image_max_dimension=64)
    await store.initialize()

    await store.create_plant(make_plant(image_url=make_data_uri(size=(256, 128))))

    with Image.open(store.images_dir / "plant-1.jpg") as img:
        assert max(img.size) == 64


async def test_undecodable_image_stays_inline(file_store):
    payload = "data:image/jpeg;base64,!!not-base64!!"
    plant = await file_store.create_plant(make_plant(image_url=payload))

    assert plant.image_url == payload
    assert list(file_store.images_dir.iterdir()) == []
    assert (await file_store.get_plant(1)).image_url == payload


async def test_oversized_image_stays_inline(tmp_path):
    store = FilePlantStore(tmp_path, max_image_size=10)
    await store.initialize()
    payload = make_data_uri(size=(64, 64))

    plant = await store.create_plant(make_plant(image_url=payload))
    assert plant.image_url == payload


async def test_merge_does_not_write_new_image(file_store):
    await file_store.create_plant(make_plant())
    merged = await file_store.create_plant(make_plant(image_url=make_data_uri()))

    assert merged.identification_count == 2
    assert merged.image_url == "https://example.com/monstera.jpg"
    assert not (file_store.images_dir / "plant-1.jpg").exists()


async def test_delete_plant_removes_image(file_store):
    await file_store.create_plant(make_plant(image_url=make_data_uri()))

    assert await file_store.delete_plant(1) is True
    assert not (file_store.plants_dir / "1.json").exists()
    assert not (file_store.images_dir / "plant-1.jpg").exists()


async def test_delete_all_keeps_user_counter(file_store):
    await file_store.create_user(UserCreate(username="alice", password="secret"))
    await file_store.create_plant(make_plant(image_url=make_data_uri()))
    await file_store.create_plant(make_plant(scientific_name="Ficus lyrata", common_name="Fiddle Leaf Fig"))

    await file_store.delete_all_plants()

    assert list(file_store.plants_dir.glob("*.json")) == []
    assert list(file_store.images_dir.glob("*.jpg")) == []
    assert json.loads(file_store.metadata_file.read_text()) == {"nextPlantId": 1, "nextUserId": 2}


async def test_malformed_record_is_skipped(file_store):
    await file_store.create_plant(make_plant())
    (file_store.plants_dir / "7.json").write_text("{not json")
    (file_store.plants_dir / "8.json").write_text(json.dumps({"id": 8, "scientificName": "Half a record"}))

    plants = await file_store.get_all_plants()
    assert [p.id for p in plants] == [1]
    assert await file_store.get_plant(7) is None
    assert await file_store.get_plant(8) is None


async def test_missing_metadata_starts_at_one(file_store):
    assert not file_store.metadata_file.exists()
    plant = await file_store.create_plant(make_plant())
    assert plant.id == 1


async def test_corrupt_metadata_does_not_reuse_existing_identifier(file_store):
    await file_store.create_plant(make_plant())
    await file_store.create_plant(make_plant(scientific_name="Ficus lyrata", common_name="Fiddle Leaf Fig"))
    file_store.metadata_file.write_text("garbage")

    plant = await file_store.create_plant(make_plant(scientific_name="Ficus elastica", common_name="Rubber Plant"))
    assert plant.id == 3


async def test_records_survive_new_store_instance(tmp_path):
    first = FilePlantStore(tmp_path)
    await first.initialize()
    created = await first.create_plant(make_plant())

    second = FilePlantStore(tmp_path)
    await second.initialize()
    assert await second.get_plant(created.id) == created
    assert (await second.create_plant(make_plant(common_name="Other"))).id == 2


async def test_failed_record_write_returns_unpersisted_plant(file_store, monkeypatch):
    monkeypatch.setattr(file_store, "_write_json", lambda path, document: False)

    plant = await file_store.create_plant(make_plant())

    assert plant.id == 1
    assert plant.identification_count == 1
    assert await file_store.get_all_plants() == []
    assert not file_store.metadata_file.exists()


async def test_missing_data_directory_degrades(tmp_path):
    store = FilePlantStore(tmp_path / "never-created")

    assert await store.get_all_plants() == []
    assert await store.get_plant(1) is None
    assert await store.delete_plant(1) is False
    assert await store.get_user_by_username("alice") is None
