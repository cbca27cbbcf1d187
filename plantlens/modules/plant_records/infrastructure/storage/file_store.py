# 📄 File: plantlens/modules/plant_records/infrastructure/storage/file_store.py
# 🧭 Purpose (Layman Explanation):
# Saves each plant as its own small file on disk, keeps photos as JPEG files next to them,
# and remembers which number the next plant should get.
# 🧪 Purpose (Technical Summary):
# Local-filesystem PlantStore implementation: one JSON document per record under plants/ and users/,
# JPEG images under images/, and metadata.json holding the next identifier per entity type.
# Every disk failure is logged and degraded; nothing raises through the store contract.
# 🔗 Dependencies:
# pathlib, json, Pillow (via shared image helpers), domain models, structured logging
# 🔄 Connected Modules / Calls From:
# factory.py (STORAGE_BACKEND=filesystem), main.py (serves images/ at /data/images), tests

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from plantlens.shared.core.exceptions import PlantLensException
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

IMAGE_URL_PREFIX = "/data/images"


class FilePlantStore(PlantStore):
    """
    Filesystem record store.

    Layout under ``data_dir``::

        metadata.json          {"nextPlantId": n, "nextUserId": m}
        plants/{id}.json       one Plant per file
        images/plant-{id}.jpg  externalized photos
        users/{id}.json        one User per file
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        max_image_size: Optional[int] = None,
        image_max_dimension: int = 2048,
        image_quality: int = 85
    ):
        self.data_dir = Path(data_dir)
        self.plants_dir = self.data_dir / "plants"
        self.images_dir = self.data_dir / "images"
        self.users_dir = self.data_dir / "users"
        self.metadata_file = self.data_dir / "metadata.json"

        self.max_image_size = max_image_size
        self.image_max_dimension = image_max_dimension
        self.image_quality = image_quality

    async def initialize(self) -> None:
        """Create the data directories."""
        self._ensure_directories()
        logger.info(f"Filesystem plant store ready at {self.data_dir}")

    def _ensure_directories(self) -> None:
        for directory in (self.plants_dir, self.images_dir, self.users_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error(
                    f"Failed to create data directory: {e}",
                    extra={'operation': 'mkdir', 'path': str(directory)}
                )

    # =========================================================================
    # DOCUMENT HELPERS
    # =========================================================================

    def _plant_path(self, plant_id: int) -> Path:
        return self.plants_dir / f"{plant_id}.json"

    def _user_path(self, user_id: int) -> Path:
        return self.users_dir / f"{user_id}.json"

    def _image_path(self, plant_id: int) -> Path:
        return self.images_dir / f"plant-{plant_id}.jpg"

    def _read_json(self, path: Path) -> Optional[Any]:
        """Read a JSON document; missing or unreadable files return None."""
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(
                f"Failed to read {path.name}: {e}",
                extra={'operation': 'read', 'path': str(path)}
            )
            return None

    def _write_json(self, path: Path, document: Any) -> bool:
        """Write a JSON document through a temporary file; returns success."""
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            tmp_path.replace(path)
            return True
        except OSError as e:
            logger.error(
                f"Failed to write {path.name}: {e}",
                extra={'operation': 'write', 'path': str(path)}
            )
            tmp_path.unlink(missing_ok=True)
            return False

    def _remove(self, path: Path) -> bool:
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(
                f"Failed to delete {path.name}: {e}",
                extra={'operation': 'delete', 'path': str(path)}
            )
            return False

    def _read_metadata(self) -> Dict[str, int]:
        """Next identifiers per entity type; missing or corrupt metadata reads as 1/1."""
        metadata = {"nextPlantId": INITIAL_ID, "nextUserId": INITIAL_ID}
        stored = self._read_json(self.metadata_file)
        if isinstance(stored, dict):
            for key in metadata:
                value = stored.get(key)
                if isinstance(value, int) and not isinstance(value, bool) and value >= INITIAL_ID:
                    metadata[key] = value
        return metadata

    def _write_metadata(self, metadata: Dict[str, int]) -> bool:
        return self._write_json(self.metadata_file, metadata)

    def _load_plant(self, path: Path) -> Optional[Plant]:
        document = self._read_json(path)
        if document is None:
            return None
        try:
            return Plant.model_validate(document)
        except PydanticValidationError as e:
            logger.warning(
                f"Skipping malformed plant record {path.name}: {e.error_count()} errors",
                extra={'operation': 'read', 'path': str(path)}
            )
            return None

    def _externalize_image(self, plant_id: int, image_url: str) -> str:
        """
        Write an inline data URI to images/plant-{id}.jpg.

        Returns:
            The served reference, or the inline payload unchanged on any failure
        """
        if not is_data_uri(image_url):
            return image_url

        image_path = self._image_path(plant_id)
        try:
            image_bytes = prepare_image_for_storage(
                image_url,
                max_size=self.max_image_size,
                max_dimension=self.image_max_dimension,
                quality=self.image_quality,
            )
            image_path.parent.mkdir(parents=True, exist_ok=True)
            image_path.write_bytes(image_bytes)
        except (PlantLensException, OSError) as e:
            logger.warning(
                f"Image externalization failed for plant {plant_id}, keeping inline payload: {e}",
                extra={'operation': 'write_image', 'path': str(image_path)}
            )
            return image_url

        return f"{IMAGE_URL_PREFIX}/{image_path.name}"

    # =========================================================================
    # USERS
    # =========================================================================

    async def get_user(self, user_id: int) -> Optional[User]:
        document = self._read_json(self._user_path(user_id))
        if document is None:
            return None
        try:
            return User.model_validate(document)
        except PydanticValidationError:
            logger.warning(f"Malformed user record {user_id}")
            return None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        try:
            paths = sorted(self.users_dir.glob("*.json"))
        except OSError as e:
            logger.error(f"Failed to list users: {e}", extra={'operation': 'list'})
            return None

        for path in paths:
            document = self._read_json(path)
            if isinstance(document, dict) and document.get("username") == username:
                try:
                    return User.model_validate(document)
                except PydanticValidationError:
                    continue
        return None

    async def create_user(self, user: UserCreate) -> User:
        metadata = self._read_metadata()
        created = User(id=metadata["nextUserId"], **user.model_dump())

        if self._write_json(self._user_path(created.id), created.to_dict()):
            metadata["nextUserId"] = created.id + 1
            self._write_metadata(metadata)
        return created

    # =========================================================================
    # PLANTS
    # =========================================================================

    async def get_all_plants(self) -> List[Plant]:
        try:
            paths = list(self.plants_dir.glob("*.json"))
        except OSError as e:
            logger.error(f"Failed to list plants: {e}", extra={'operation': 'list'})
            return []

        plants = [plant for plant in (self._load_plant(path) for path in paths) if plant]
        return sort_newest_first(plants)

    async def get_plant(self, plant_id: int) -> Optional[Plant]:
        return self._load_plant(self._plant_path(plant_id))

    async def create_plant(self, plant: PlantCreate) -> Plant:
        existing_plants = await self.get_all_plants()

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

        metadata = self._read_metadata()
        # Never hand out an identifier that is still on disk
        highest = max((p.id for p in existing_plants), default=0)
        plant_id = max(metadata["nextPlantId"], highest + 1)

        image_url = self._externalize_image(plant_id, plant.image_url)
        created = plant.to_plant(plant_id, image_url=image_url)

        if not self._write_json(self._plant_path(plant_id), created.to_dict()):
            if image_url != plant.image_url:
                self._remove(self._image_path(plant_id))
            return plant.to_plant(plant_id)

        metadata["nextPlantId"] = plant_id + 1
        self._write_metadata(metadata)

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
        if not self._write_json(self._plant_path(plant_id), updated.to_dict()):
            return None
        return updated

    async def delete_plant(self, plant_id: int) -> bool:
        plant_path = self._plant_path(plant_id)
        if not plant_path.exists():
            return False

        try:
            plant_path.unlink()
        except OSError as e:
            logger.error(
                f"Failed to delete plant {plant_id}: {e}",
                extra={'operation': 'delete', 'path': str(plant_path)}
            )
            return False

        self._remove(self._image_path(plant_id))
        logger.log_business_event(
            "plant_deleted", f"Plant {plant_id} deleted", entity_id=str(plant_id), entity_type="plant"
        )
        return True

    async def delete_all_plants(self) -> None:
        for directory, pattern in ((self.plants_dir, "*.json"), (self.images_dir, "plant-*.jpg")):
            try:
                paths = list(directory.glob(pattern))
            except OSError as e:
                logger.error(f"Failed to list {directory.name}: {e}", extra={'operation': 'list'})
                continue
            for path in paths:
                self._remove(path)

        metadata = self._read_metadata()
        metadata["nextPlantId"] = INITIAL_ID
        self._write_metadata(metadata)

        logger.log_business_event("plants_cleared", "All plants deleted", entity_type="plant")
