# 📄 File: plantlens/modules/plant_records/infrastructure/storage/factory.py
# 🧭 Purpose (Layman Explanation):
# Picks where plant records are kept (memory, local disk or cloud bucket) based on the app settings.
# 🧪 Purpose (Technical Summary):
# Backend selection for the PlantStore contract driven by STORAGE_BACKEND.
# 🔗 Dependencies:
# Settings, storage backends, SupabaseStorageClient
# 🔄 Connected Modules / Calls From:
# main.py lifespan, tests

from typing import Optional

from plantlens.shared.config.settings import Settings, get_settings
from plantlens.shared.core.exceptions import ConfigurationError
from plantlens.shared.infrastructure.storage.supabase_storage import SupabaseStorageClient
from plantlens.shared.utils.logging import get_logger

from ...domain.repositories.plant_store import PlantStore
from .file_store import FilePlantStore
from .memory_store import MemoryPlantStore
from .object_store import ObjectPlantStore

logger = get_logger(__name__)


def create_plant_store(settings: Optional[Settings] = None) -> PlantStore:
    """
    Build the configured record store backend.

    Raises:
        ConfigurationError: Unknown backend, or object backend without Supabase credentials
    """
    settings = settings or get_settings()
    backend = settings.STORAGE_BACKEND
    image_options = {
        "max_image_size": settings.MAX_IMAGE_SIZE,
        "image_max_dimension": settings.IMAGE_MAX_DIMENSION,
        "image_quality": settings.IMAGE_QUALITY,
    }

    if backend == "memory":
        store = MemoryPlantStore()
    elif backend == "filesystem":
        store = FilePlantStore(settings.DATA_DIR, **image_options)
    elif backend == "object":
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise ConfigurationError(
                "STORAGE_BACKEND=object requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY",
                setting="STORAGE_BACKEND",
            )
        store = ObjectPlantStore(SupabaseStorageClient(settings), **image_options)
    else:
        raise ConfigurationError(f"Unknown storage backend: {backend}", setting="STORAGE_BACKEND")

    logger.info(f"Plant store backend selected: {backend}")
    return store
