# 📄 File: plantlens/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# This file talks to the cloud storage bucket, putting small files (plant records, photos)
# in and taking them back out by name.

# 🧪 Purpose (Technical Summary):
# Supabase Storage client wrapper exposing key-addressed blob operations
# (upload with upsert, download, remove) over a single bucket, with bucket
# bootstrap and uniform FileStorageError reporting.

# 🔗 Dependencies:
# - supabase: Storage client
# - plantlens.shared.config.settings: Supabase URL, key and bucket name

# 🔄 Connected Modules / Calls From:
# Called by: plantlens.modules.plant_records.infrastructure.storage.object_store (remote record store)
# Connects to: Supabase cloud storage

from typing import List, Optional

from supabase import Client, ClientOptions, create_client

from plantlens.shared.config.settings import Settings, get_settings
from plantlens.shared.core.exceptions import (
    ConfigurationError,
    FileStorageError,
    StorageObjectNotFoundError,
)
from plantlens.shared.utils.logging import get_logger

logger = get_logger(__name__)


def _is_not_found(error: Exception) -> bool:
    """
    Supabase reports a missing object either as a 404 or as a 400 whose
    error code is ``not_found`` ("Object not found").
    """
    payload = error.args[0] if error.args and isinstance(error.args[0], dict) else {}
    status_code = getattr(error, "status", None) or payload.get("statusCode")
    code = getattr(error, "code", None) or payload.get("error")
    message = getattr(error, "message", None) or payload.get("message") or str(error)

    if str(status_code) == "404" or str(code).lower() in ("not_found", "nosuchkey"):
        return True
    return "not found" in str(message).lower()


class SupabaseStorageClient:
    """
    Blob client over one Supabase Storage bucket.

    Every object is addressed by its key (``plants/1.json``,
    ``images/plant-1.jpg``). Failures are raised as FileStorageError so that
    callers can decide how to degrade.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize Supabase Storage client with configuration."""
        settings = settings or get_settings()
        self.supabase_url = settings.SUPABASE_URL
        self.supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY
        self.bucket_name = settings.SUPABASE_STORAGE_BUCKET
        self.timeout = settings.SUPABASE_STORAGE_TIMEOUT

        self.client: Optional[Client] = None
        self.storage = None

    async def initialize(self) -> None:
        """Initialize the Supabase client and storage."""
        if not self.supabase_url or not self.supabase_key:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required for the object store",
                setting="SUPABASE_URL",
            )

        try:
            self.client = create_client(
                self.supabase_url,
                self.supabase_key,
                options=ClientOptions(
                    postgrest_client_timeout=10,
                    storage_client_timeout=self.timeout
                )
            )
            self.storage = self.client.storage

            await self._ensure_bucket_exists()

            logger.info("Supabase Storage client initialized successfully")

        except FileStorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize Supabase Storage: {e}")
            raise FileStorageError(f"Storage initialization failed: {e}", operation="initialize")

    async def _ensure_bucket_exists(self) -> None:
        """Ensure the record bucket exists."""
        try:
            buckets = self.storage.list_buckets()
            bucket_names = [bucket.name for bucket in buckets]

            if self.bucket_name not in bucket_names:
                self.storage.create_bucket(self.bucket_name, options={"public": False})
                logger.info(f"Created storage bucket: {self.bucket_name}")

        except Exception as e:
            logger.error(f"Failed to ensure bucket exists: {e}")
            raise FileStorageError(f"Bucket setup failed: {e}", operation="create_bucket")

    def _bucket(self):
        if self.storage is None:
            raise FileStorageError("Storage client is not initialized", operation="bucket")
        return self.storage.from_(self.bucket_name)

    async def upload_bytes(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream"
    ) -> str:
        """
        Upload (or overwrite) an object.

        Returns:
            The object key that was written
        """
        try:
            self._bucket().upload(
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "true"
                }
            )
            logger.debug(f"Object uploaded: {path}", extra={'bytes': len(data)})
            return path

        except FileStorageError:
            raise
        except Exception as e:
            raise FileStorageError(f"Upload failed: {e}", operation="upload", storage_path=path)

    async def download_bytes(self, path: str) -> bytes:
        """Download an object; a missing key raises StorageObjectNotFoundError."""
        try:
            response = self._bucket().download(path)
        except FileStorageError:
            raise
        except Exception as e:
            if _is_not_found(e):
                raise StorageObjectNotFoundError(path)
            raise FileStorageError(f"Download failed: {e}", operation="download", storage_path=path)

        if not isinstance(response, (bytes, bytearray)):
            raise StorageObjectNotFoundError(path)
        return bytes(response)

    async def delete_files(self, paths: List[str]) -> bool:
        """Delete objects from storage."""
        if not paths:
            return True
        try:
            self._bucket().remove(paths)
            logger.debug(f"Objects deleted: {paths}")
            return True
        except FileStorageError:
            raise
        except Exception as e:
            raise FileStorageError(f"Delete failed: {e}", operation="delete", storage_path=",".join(paths))

    async def close(self) -> None:
        self.client = None
        self.storage = None
