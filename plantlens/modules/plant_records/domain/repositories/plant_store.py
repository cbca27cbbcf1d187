# 📄 File: plantlens/modules/plant_records/domain/repositories/plant_store.py
# 🧭 Purpose (Layman Explanation):
# Defines what any place that keeps plant records must be able to do (list, find, add, count again, remove)
# without saying whether the records live in memory, on disk or in the cloud.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Plant Record Store: identifier assignment, duplicate-aware
# insertion and best-effort persistence shared by the memory, filesystem and object backends.
# 🔗 Dependencies:
# Domain models (Plant, PlantCreate, User, UserCreate), typing, abc
# 🔄 Connected Modules / Calls From:
# Storage backends, command handlers, API routes, FastAPI dependencies

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..models.plant import Plant, PlantCreate
from ..models.user import User, UserCreate

INITIAL_ID = 1


class PlantStore(ABC):
    """
    Repository interface for Plant and User records.

    Every backend satisfies the same contract:
    - Identifiers are assigned by the store from a monotonic counter
    - Creating a plant whose (scientific name, common name) pair already exists
      increments the existing record's count instead of inserting a row
    - Deleting every plant resets the plant counter to 1
    - Medium failures are logged and degrade to None / [] / False, never raised

    Implementation Notes:
    - Concrete implementations are in the infrastructure layer
    - All operations are async; durable backends await disk or network I/O
    - The duplicate scan and the following write are not atomic
    """

    async def initialize(self) -> None:
        """Prepare the underlying medium (directories, bucket)."""
        return None

    async def close(self) -> None:
        """Release resources held by the backend."""
        return None

    # =========================================================================
    # USERS
    # =========================================================================

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]:
        """
        Get user by identifier.

        Args:
            user_id: User identifier

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        """
        Get user by exact username match.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_user(self, user: UserCreate) -> User:
        """
        Create a user with the next unused identifier.

        Username uniqueness is not enforced.
        """
        pass

    # =========================================================================
    # PLANTS
    # =========================================================================

    @abstractmethod
    async def get_all_plants(self) -> List[Plant]:
        """
        Get every plant, newest identifier first.

        Returns:
            List of plants ordered by identifier descending; empty on read failure
        """
        pass

    @abstractmethod
    async def get_plant(self, plant_id: int) -> Optional[Plant]:
        """
        Get plant by identifier.

        Returns:
            Plant if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_plant(self, plant: PlantCreate) -> Plant:
        """
        Create a plant, or merge into an existing record with the same names.

        A matching (scientific_name, common_name) pair increments the existing
        record's identification count and returns it; no other incoming field
        is applied. Otherwise the next plant identifier is assigned, inline
        images may be externalized, defaults are applied and the record is
        persisted.

        Args:
            plant: Creation payload

        Returns:
            The created or merged plant
        """
        pass

    @abstractmethod
    async def update_plant_count(self, plant_id: int) -> Optional[Plant]:
        """
        Increment a plant's identification count by exactly one.

        Returns:
            Updated plant, None if the identifier does not exist
        """
        pass

    @abstractmethod
    async def delete_plant(self, plant_id: int) -> bool:
        """
        Delete a plant and, best-effort, its externalized image.

        The plant counter is not rewound.

        Returns:
            True if the record was removed, False if it did not exist or could not be removed
        """
        pass

    @abstractmethod
    async def delete_all_plants(self) -> None:
        """
        Delete every plant and image and reset the plant counter to 1.
        """
        pass


def find_duplicate(plants: Iterable[Plant], plant: PlantCreate) -> Optional[Plant]:
    """Return the first stored plant whose name pair matches the payload."""
    key = plant.name_key
    for existing in plants:
        if existing.name_key == key:
            return existing
    return None


def sort_newest_first(plants: Iterable[Plant]) -> List[Plant]:
    return sorted(plants, key=lambda p: p.id, reverse=True)
