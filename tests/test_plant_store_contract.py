# 📄 File: tests/test_plant_store_contract.py
# 🧭 Purpose (Layman Explanation):
# Checks that every place we can keep plants (memory, disk, cloud) behaves exactly the same way.
# 🧪 Purpose (Technical Summary):
# Contract suite parametrized over the memory, filesystem and object backends: identifier assignment,
# duplicate merge, ordering, deletion, counter reset and user records.
# 🔗 Dependencies:
# pytest, pytest-asyncio, conftest fixtures
# 🔄 Connected Modules / Calls From:
# pytest

from datetime import timedelta

from plantlens.modules.plant_records.domain.models.user import UserCreate

from .conftest import make_plant


async def test_create_plant_assigns_first_identifier_and_defaults(store):
    plant = await store.create_plant(make_plant())

    assert plant.id == 1
    assert plant.identification_count == 1
    assert plant.aroma_level == 5
    assert plant.location_name is None
    assert plant.latitude is None and plant.longitude is None
    assert plant.created_at.tzinfo is not None


async def test_create_plant_keeps_supplied_values(store):
    plant = await store.create_plant(
        make_plant(aroma_level=8, latitude="51.4787", longitude="-0.2956", location_name="Kew Gardens")
    )

    assert plant.aroma_level == 8
    assert plant.latitude == "51.4787"
    assert plant.longitude == "-0.2956"
    assert plant.location_name == "Kew Gardens"


async def test_duplicate_names_merge_into_existing_record(store):
    first = await store.create_plant(make_plant())
    merged = await store.create_plant(
        make_plant(family="Something Else", confidence=40, image_url="https://example.com/other.jpg")
    )

    assert merged.id == first.id
    assert merged.identification_count == 2
    assert merged.family == "Araceae"
    assert merged.confidence == 92
    assert merged.image_url == "https://example.com/monstera.jpg"

    plants = await store.get_all_plants()
    assert len(plants) == 1
    assert plants[0].identification_count == 2


async def test_same_scientific_name_with_other_common_name_is_new_record(store):
    await store.create_plant(make_plant())
    other = await store.create_plant(make_plant(common_name="Split-leaf Philodendron"))

    assert other.id == 2
    assert other.identification_count == 1
    assert len(await store.get_all_plants()) == 2


async def test_identifiers_grow_and_listing_is_newest_first(store):
    names = [("Monstera deliciosa", "Swiss Cheese Plant"),
             ("Sansevieria trifasciata", "Snake Plant"),
             ("Ficus lyrata", "Fiddle Leaf Fig")]
    for scientific, common in names:
        await store.create_plant(make_plant(scientific_name=scientific, common_name=common))

    plants = await store.get_all_plants()
    assert [p.id for p in plants] == [3, 2, 1]
    assert plants[0].scientific_name == "Ficus lyrata"


async def test_get_plant_round_trips_record(store):
    created = await store.create_plant(make_plant(latitude=51.5, longitude=-0.12))
    fetched = await store.get_plant(created.id)

    assert fetched == created
    assert fetched.latitude == "51.5"
    assert fetched.created_at.utcoffset() == timedelta(0)


async def test_get_missing_plant_returns_none(store):
    assert await store.get_plant(42) is None


async def test_empty_store_lists_nothing(store):
    assert await store.get_all_plants() == []


async def test_update_plant_count_increments_by_one(store):
    created = await store.create_plant(make_plant())

    updated = await store.update_plant_count(created.id)
    assert updated.identification_count == 2

    again = await store.update_plant_count(created.id)
    assert again.identification_count == 3
    assert (await store.get_plant(created.id)).identification_count == 3


async def test_update_missing_plant_count_returns_none(store):
    assert await store.update_plant_count(7) is None


async def test_delete_plant_removes_record(store):
    created = await store.create_plant(make_plant())

    assert await store.delete_plant(created.id) is True
    assert await store.get_plant(created.id) is None
    assert await store.get_all_plants() == []


async def test_delete_missing_plant_returns_false(store):
    assert await store.delete_plant(99) is False


async def test_deleted_identifier_is_not_reused(store):
    await store.create_plant(make_plant())
    second = await store.create_plant(make_plant(scientific_name="Ficus elastica", common_name="Rubber Plant"))
    await store.delete_plant(second.id)

    third = await store.create_plant(make_plant(scientific_name="Ficus lyrata", common_name="Fiddle Leaf Fig"))
    assert third.id == 3


async def test_recreating_deleted_plant_starts_new_record(store):
    created = await store.create_plant(make_plant())
    await store.update_plant_count(created.id)
    await store.delete_plant(created.id)

    recreated = await store.create_plant(make_plant())
    assert recreated.id == 2
    assert recreated.identification_count == 1


async def test_delete_all_plants_resets_counter(store):
    await store.create_plant(make_plant())
    await store.create_plant(make_plant(scientific_name="Ficus lyrata", common_name="Fiddle Leaf Fig"))

    await store.delete_all_plants()
    assert await store.get_all_plants() == []

    fresh = await store.create_plant(make_plant())
    assert fresh.id == 1
    assert fresh.identification_count == 1


async def test_delete_all_on_empty_store(store):
    await store.delete_all_plants()
    assert (await store.create_plant(make_plant())).id == 1


async def test_users_get_sequential_identifiers(store):
    alice = await store.create_user(UserCreate(username="alice", password="secret"))
    bob = await store.create_user(UserCreate(username="bob", password="hunter2"))

    assert (alice.id, bob.id) == (1, 2)
    assert await store.get_user(2) == bob
    assert (await store.get_user_by_username("alice")).id == 1


async def test_missing_users_return_none(store):
    assert await store.get_user(5) is None
    assert await store.get_user_by_username("nobody") is None


async def test_user_counter_survives_plant_reset(store):
    await store.create_user(UserCreate(username="alice", password="secret"))
    await store.create_plant(make_plant())
    await store.delete_all_plants()

    bob = await store.create_user(UserCreate(username="bob", password="hunter2"))
    assert bob.id == 2
