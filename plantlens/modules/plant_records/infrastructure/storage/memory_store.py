# 📄 File: plantlens/modules/plant_records/infrastructure/storage/memory_store.py
# 🧭 Purpose (Layman Explanation):
# Keeps plant records only while the app is running. Handy for tests and demos; everything is
# forgotten on restart.
# 🧪 Purpose (Technical Summary):
# Ephemeral PlantStore implementation backed by in-process dicts and counters.
# Inline images are kept as given.
# 🔗 Dependencies:
# PlantStore interface, domain models, structured logging
# 🔄 Connected Modules / Calls From:
# factory.py (STORAGE_BACKEND=memory), tests

from typing import Dict, List, Optional

from plantlens.shared.utils.logging import get_logger

from ...domain.models.plant import Plant, PlantCreate
from ...domain.models.user import User, UserCreate
from ...domain.repositories.plant_store import (
    INITIAL_ID,
    PlantStore,
    find_duplicate,
    sort_newest_first,
)

logger = get_logger(__name__)


class MemoryPlantStore(PlantStore):
    """In-memory record store; state lives for the lifetime of the instance."""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._plants: Dict[int, Plant] = {}
        self._next_user_id = INITIAL_ID
        self._next_plant_id = INITIAL_ID

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def create_user(self, user: UserCreate) -> User:
        created = User(id=self._next_user_id, **user.model_dump())
        self._users[created.id] = created
        self._next_user_id += 1
        return created

    async def get_all_plants(self) -> List[Plant]:
        return sort_newest_first(self._plants.values())

    async def get_plant(self, plant_id: int) -> Optional[Plant]:
        return self._plants.get(plant_id)

    async def create_plant(self, plant: PlantCreate) -> Plant:
        existing = find_duplicate(self._plants.values(), plant)
        if existing:
            logger.log_business_event(
                "plant_merged",
                f"Duplicate identification merged into plant {existing.id}",
                entity_id=str(existing.id),
                entity_type="plant",
            )
            return await self.update_plant_count(existing.id)

        created = plant.to_plant(self._next_plant_id)
        self._plants[created.id] = created
        self._next_plant_id += 1

        logger.log_business_event(
            "plant_created",
            f"Plant {created.id} created",
            entity_id=str(created.id),
            entity_type="plant",
        )
        return created

    async def update_plant_count(self, plant_id: int) -> Optional[Plant]:
        plant = self._plants.get(plant_id)
        if not plant:
            return None
        updated = plant.with_incremented_count()
        self._plants[plant_id] = updated
        return updated

    async def delete_plant(self, plant_id: int) -> bool:
        return self._plants.pop(plant_id, None) is not None

    async def delete_all_plants(self) -> None:
        self._plants.clear()
        self._next_plant_id = INITIAL_ID
        logger.log_business_event("plants_cleared", "All plants deleted", entity_type="plant")
