# uploads/blobstore.py

import logging
from functools import lru_cache
from pathlib import Path

from django.conf import settings
from django.core.files import File
from django.core.files.storage import FileSystemStorage, InMemoryStorage, Storage

from filehub.errors import StartupFault, StorageFault

logger = logging.getLogger(__name__)


class BlobNotFound(Exception):
    """The blob store has no bytes under the requested key."""


class BlobStore:
    """
    Durable byte storage addressed by storage key, independent of metadata.
    Any Django `Storage` (local filesystem, S3 via django-storages, in-memory)
    can back it; the pipelines only ever talk to this interface.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def write(self, key: str, stream) -> str:
        """
        Writes `stream` under `key` and returns the key actually used.
        A write that fails part-way is discarded before StorageFault is raised,
        so no half-written blob is left behind.
        """
        content = stream if isinstance(stream, File) else File(stream, name=key)
        try:
            # The storage may rename on collision; the partial blob lives under this name.
            name = self.storage.get_available_name(key)
        except Exception as e:
            raise StorageFault(f"Could not reach storage backend: {e}") from e
        try:
            return self.storage.save(name, content)
        except Exception as e:
            logger.error(f"Blob write for '{name}' failed: {e}. Discarding partial blob.", exc_info=True)
            self._discard(name)
            raise StorageFault(f"Could not save file to storage backend: {e}") from e

    def open_read(self, key: str):
        """Returns a binary file object positioned at the start of the blob."""
        try:
            if not self.storage.exists(key):
                raise BlobNotFound(key)
            return self.storage.open(key, 'rb')
        except (BlobNotFound, FileNotFoundError):
            raise BlobNotFound(key)
        except Exception as e:
            raise StorageFault(f"Could not read file from storage backend: {e}") from e

    def delete(self, key: str) -> bool:
        """Deletes the blob. Returns False when there was nothing to delete."""
        try:
            if not self.storage.exists(key):
                return False
            self.storage.delete(key)
        except Exception as e:
            raise StorageFault(f"Could not delete file from storage backend: {e}") from e
        return True

    def exists(self, key: str) -> bool:
        try:
            return self.storage.exists(key)
        except Exception as e:
            raise StorageFault(f"Could not reach storage backend: {e}") from e

    def keys(self):
        """Lists every key at the root of the store."""
        try:
            _, files = self.storage.listdir('')
        except FileNotFoundError:
            return []
        except Exception as e:
            raise StorageFault(f"Could not list storage backend: {e}") from e
        return sorted(files)

    def _discard(self, key):
        try:
            if self.storage.exists(key):
                self.storage.delete(key)
        except Exception:
            logger.error(f"Could not discard partial blob '{key}'. It must be reconciled manually.", exc_info=True)


def build_storage(backend: str) -> Storage:
    if backend == 'filesystem':
        location = Path(settings.UPLOAD_DIR)
        location.mkdir(parents=True, exist_ok=True)
        return FileSystemStorage(location=location)
    if backend == 's3':
        # Imported lazily so the boto3 stack is only needed when S3 is in use.
        from storages.backends.s3boto3 import S3Boto3Storage
        return S3Boto3Storage()
    if backend == 'memory':
        return InMemoryStorage()
    raise StartupFault(f"Unknown FILE_STORAGE_BACKEND: {backend!r}")


@lru_cache(maxsize=None)
def get_blob_store() -> BlobStore:
    """The process-wide blob store selected by FILE_STORAGE_BACKEND."""
    backend = settings.FILE_STORAGE_BACKEND
    logger.info(f"Using '{backend}' blob storage backend.")
    return BlobStore(build_storage(backend))
