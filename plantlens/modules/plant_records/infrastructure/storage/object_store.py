# 📄 File: plantlens/modules/plant_records/infrastructure/storage/object_store.py
# 🧭 Purpose (Layman Explanation):
# Saves plant records and photos in cloud storage. Because the cloud bucket is treated like a box
# of named files that cannot be listed, it also keeps an index file saying which plants exist.
# 🧪 Purpose (Technical Summary):
# Remote object-store PlantStore implementation over a key-addressed blob client. Records are JSON blobs,
# plants/index.json is the authoritative identifier list rewritten on every create/delete, and
# identifier counters live under metadata/. Blob failures are logged and degraded, never raised;
# the index and counters are only rewritten after a successful read.
# 🔗 Dependencies:
# SupabaseStorageClient (or any client with upload_bytes/download_bytes/delete_files), Pillow image helpers
# 🔄 Connected Modules / Calls From:
# factory.py (STORAGE_BACKEND=object), tests (fake bucket)

import json
from typing import Any, List, Optional
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from plantlens.shared.core.exceptions import (
    FileStorageError,
    PlantLensException,
    StorageObjectNotFoundError,
)
from plantlens.shared.utils.images import is_data_uri, prepare_image_for_storage
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

PLANT_INDEX_KEY = "plants/index.json"
NEXT_PLANT_ID_KEY = "metadata/nextPlantId.json"
NEXT_USER_ID_KEY = "metadata/nextUserId.json"
JSON_CONTENT_TYPE = "application/json"
# Characters left unescaped in username keys
URI_COMPONENT_SAFE = "-_.!~*'()"


def plant_key(plant_id: int) -> str:
    return f"plants/{plant_id}.json"


def image_key(plant_id: int) -> str:
    return f"images/plant-{plant_id}.jpg"


def user_key(user_id: int) -> str:
    return f"users/{user_id}.json"


def username_key(username: str) -> str:
    return f"users/by-username/{quote(username, safe=URI_COMPONENT_SAFE)}.json"


class ObjectPlantStore(PlantStore):
    """
    Object-store record store.

    Keys::

        plants/{id}.json             one Plant per blob
        plants/index.json            JSON array of plant identifiers
        images/plant-{id}.jpg        externalized photos
        metadata/nextPlantId.json    {"id": n}
        metadata/nextUserId.json     {"id": n}
        users/{id}.json              one User per blob
        users/by-username/{name}.json  {"id": n}
    """

    def __init__(
        self,
        blob_client,
        max_image_size: Optional[int] = None,
        image_max_dimension: int = 2048,
        image_quality: int = 85
    ):
        self.blob_client = blob_client
        self.max_image_size = max_image_size
        self.image_max_dimension = image_max_dimension
        self.image_quality = image_quality

    async def initialize(self) -> None:
        """Connect the blob client; configuration and bucket errors are fatal at start-up."""
        await self.blob_client.initialize()
        logger.info("Object plant store ready")

    async def close(self) -> None:
        await self.blob_client.close()

    # =========================================================================
    # BLOB HELPERS
    # =========================================================================

    async def _download(self, key: str) -> Optional[bytes]:
        """Absent keys read as None; any other storage failure propagates."""
        try:
            return await self.blob_client.download_bytes(key)
        except StorageObjectNotFoundError:
            return None

    async def _read_json(self, key: str) -> Optional[Any]:
        """Best-effort read of a single document; unreadable blobs return None."""
        try:
            raw = await self._download(key)
            if raw is None:
                return None
            return json.loads(raw.decode("utf-8"))
        except (FileStorageError, ValueError) as e:
            logger.warning(f"Failed to read blob {key}: {e}", extra={'operation': 'read', 'key': key})
            return None

    async def _load_json(self, key: str) -> Optional[Any]:
        """
        Strict read for bookkeeping blobs.

        Returns None only when the key does not exist. Transport failures and
        undecodable content raise FileStorageError so that callers never
        rewrite the index or a counter from a state they could not see.
        """
        raw = await self._download(key)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise FileStorageError(f"Corrupt blob {key}: {e}", operation="read", storage_path=key)

    async def _write_json(self, key: str, document: Any) -> bool:
        try:
            await self.blob_client.upload_bytes(
                key, json.dumps(document).encode("utf-8"), content_type=JSON_CONTENT_TYPE
            )
            return True
        except FileStorageError as e:
            logger.error(f"Failed to write blob {key}: {e}", extra={'operation': 'write', 'key': key})
            return False

    async def _delete(self, keys: List[str]) -> bool:
        try:
            return await self.blob_client.delete_files(keys)
        except FileStorageError as e:
            logger.warning(f"Failed to delete blobs {keys}: {e}", extra={'operation': 'delete'})
            return False

    async def _load_counter(self, key: str) -> int:
        """
        Counters are stored as {"id": n}. Missing or malformed counters read
        as 1; an unreachable counter raises FileStorageError.
        """
        raw = await self._download(key)
        if raw is None:
            return INITIAL_ID

        try:
            document = json.loads(raw.decode("utf-8"))
        except ValueError:
            document = None
        if isinstance(document, dict):
            value = document.get("id")
            if isinstance(value, int) and not isinstance(value, bool) and value >= INITIAL_ID:
                return value

        logger.warning(f"Ignoring malformed counter {key}", extra={'operation': 'read', 'key': key})
        return INITIAL_ID

    async def _write_counter(self, key: str, value: int) -> bool:
        return await self._write_json(key, {"id": value})

    async def _load_index(self) -> List[int]:
        """The plant index; a missing index is empty, an unreadable or malformed one raises."""
        document = await self._load_json(PLANT_INDEX_KEY)
        if document is None:
            return []
        if not isinstance(document, list):
            raise FileStorageError(
                "Plant index is not a JSON array", operation="read", storage_path=PLANT_INDEX_KEY
            )
        return [item for item in document if isinstance(item, int) and not isinstance(item, bool)]

    async def _write_index(self, index: List[int]) -> bool:
        return await self._write_json(PLANT_INDEX_KEY, index)

    async def _externalize_image(self, plant_id: int, image_url: str) -> str:
        """Upload an inline data URI; the blob key is returned, or the payload unchanged on failure."""
        if not is_data_uri(image_url):
            return image_url

        key = image_key(plant_id)
        try:
            image_bytes = prepare_image_for_storage(
                image_url,
                max_size=self.max_image_size,
                max_dimension=self.image_max_dimension,
                quality=self.image_quality,
            )
            await self.blob_client.upload_bytes(key, image_bytes, content_type="image/jpeg")
        except PlantLensException as e:
            logger.warning(
                f"Image upload failed for plant {plant_id}, keeping inline payload: {e}",
                extra={'operation': 'upload_image', 'key': key}
            )
            return image_url

        return key

    # =========================================================================
    # USERS
    # =========================================================================

    async def get_user(self, user_id: int) -> Optional[User]:
        document = await self._read_json(user_key(user_id))
        if document is None:
            return None
        try:
            return User.model_validate(document)
        except PydanticValidationError:
            logger.warning(f"Malformed user blob {user_id}")
            return None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        pointer = await self._read_json(username_key(username))
        if not isinstance(pointer, dict) or not isinstance(pointer.get("id"), int):
            return None

        user = await self.get_user(pointer["id"])
        if user and user.username == username:
            return user
        return None

    async def create_user(self, user: UserCreate) -> User:
        try:
            user_id = await self._load_counter(NEXT_USER_ID_KEY)
        except FileStorageError as e:
            logger.error(f"User counter unavailable, user not saved: {e}", extra={'operation': 'create_user'})
            return User(id=INITIAL_ID, **user.model_dump())

        created = User(id=user_id, **user.model_dump())

        if await self._write_json(user_key(user_id), created.to_dict()):
            await self._write_json(username_key(created.username), {"id": user_id})
            await self._write_counter(NEXT_USER_ID_KEY, user_id + 1)
        return created

    # =========================================================================
    # PLANTS
    # =========================================================================

    async def get_all_plants(self) -> List[Plant]:
        try:
            index = await self._load_index()
        except FileStorageError as e:
            logger.warning(f"Plant index unavailable, listing nothing: {e}", extra={'operation': 'list'})
            return []

        plants = []
        for plant_id in index:
            plant = await self.get_plant(plant_id)
            if plant:
                plants.append(plant)
        return sort_newest_first(plants)

    async def get_plant(self, plant_id: int) -> Optional[Plant]:
        document = await self._read_json(plant_key(plant_id))
        if document is None:
            return None
        try:
            return Plant.model_validate(document)
        except PydanticValidationError as e:
            logger.warning(
                f"Skipping malformed plant blob {plant_id}: {e.error_count()} errors",
                extra={'operation': 'read', 'key': plant_key(plant_id)}
            )
            return None

    async def create_plant(self, plant: PlantCreate) -> Plant:
        try:
            index = await self._load_index()
        except FileStorageError as e:
            logger.error(f"Plant index unavailable, plant not saved: {e}", extra={'operation': 'create'})
            return plant.to_plant(INITIAL_ID)

        existing_plants = []
        for existing_id in index:
            existing_plant = await self.get_plant(existing_id)
            if existing_plant:
                existing_plants.append(existing_plant)

        existing = find_duplicate(existing_plants, plant)
        if existing:
            logger.log_business_event(
                "plant_merged",
                f"Duplicate identification merged into plant {existing.id}",
                entity_id=str(existing.id),
                entity_type="plant",
            )
            updated = await self.update_plant_count(existing.id)
            return updated or existing

        # Never hand out an identifier that is still indexed
        next_free = max(index, default=0) + 1
        try:
            counter = await self._load_counter(NEXT_PLANT_ID_KEY)
        except FileStorageError as e:
            logger.error(f"Plant counter unavailable, plant not saved: {e}", extra={'operation': 'create'})
            return plant.to_plant(next_free)
        plant_id = max(counter, next_free)

        image_url = await self._externalize_image(plant_id, plant.image_url)
        created = plant.to_plant(plant_id, image_url=image_url)

        if not await self._write_json(plant_key(plant_id), created.to_dict()):
            if image_url != plant.image_url:
                await self._delete([image_key(plant_id)])
            return plant.to_plant(plant_id)

        await self._write_index(index + [plant_id])
        await self._write_counter(NEXT_PLANT_ID_KEY, plant_id + 1)

        logger.log_business_event(
            "plant_created",
            f"Plant {plant_id} created",
            entity_id=str(plant_id),
            entity_type="plant",
            extra={'image_externalized': image_url != plant.image_url},
        )
        return created

    async def update_plant_count(self, plant_id: int) -> Optional[Plant]:
        plant = await self.get_plant(plant_id)
        if not plant:
            return None

        updated = plant.with_incremented_count()
        if not await self._write_json(plant_key(plant_id), updated.to_dict()):
            return None
        return updated

    async def delete_plant(self, plant_id: int) -> bool:
        plant = await self.get_plant(plant_id)
        if not plant:
            return False

        try:
            index = await self._load_index()
        except FileStorageError as e:
            logger.error(f"Plant index unavailable, plant {plant_id} kept: {e}", extra={'operation': 'delete'})
            return False

        if not await self._delete([plant_key(plant_id)]):
            return False

        if plant.image_url == image_key(plant_id):
            await self._delete([image_key(plant_id)])

        await self._write_index([item for item in index if item != plant_id])

        logger.log_business_event(
            "plant_deleted", f"Plant {plant_id} deleted", entity_id=str(plant_id), entity_type="plant"
        )
        return True

    async def delete_all_plants(self) -> None:
        try:
            index = await self._load_index()
        except FileStorageError as e:
            logger.error(f"Plant index unavailable, nothing deleted: {e}", extra={'operation': 'delete_all'})
            return

        keys = []
        for plant_id in index:
            keys.append(plant_key(plant_id))
            keys.append(image_key(plant_id))

        if keys and not await self._delete(keys):
            logger.error(
                "Bulk delete failed, index and counter left unchanged",
                extra={'operation': 'delete_all', 'keys': keys}
            )
            return

        await self._write_index([])
        await self._write_counter(NEXT_PLANT_ID_KEY, INITIAL_ID)

        logger.log_business_event("plants_cleared", "All plants deleted", entity_type="plant")
