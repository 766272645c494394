# uploads/services.py
import logging
import os
import re
import secrets
import time
import uuid
from dataclasses import dataclass
from urllib.parse import quote

from django.conf import settings
from django.db import DatabaseError, transaction

from filehub.errors import NotFoundError, PartialDeleteError, StorageFault, ValidationError
from .blobstore import BlobNotFound, BlobStore
from .models import StoredFile

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = (
    'image/jpeg', 'image/png', 'image/gif',
    'application/pdf', 'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document', 'text/plain',
    'video/mp4', 'video/quicktime', 'video/avi',
    'audio/mpeg', 'audio/wav', 'audio/ogg',
)

INLINE = 'inline'
ATTACHMENT = 'attachment'

_EXTENSION_RE = re.compile(r'^\.[A-Za-z0-9]{1,16}$')
# Characters encodeURIComponent leaves unescaped, besides letters and digits.
_URI_COMPONENT_SAFE = "!~*()'-._"


def generate_storage_key(original_name: str) -> str:
    """
    `<epoch millis>-<random>` plus the original extension, e.g.
    `1718000000000-483920113.txt`. Nothing else from the client-supplied name
    ends up in the key.
    """
    extension = os.path.splitext(os.path.basename(original_name))[1]
    if not _EXTENSION_RE.match(extension):
        extension = ''
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


def content_disposition(mode: str, filename: str) -> str:
    return f'{mode}; filename="{quote(filename, safe=_URI_COMPONENT_SAFE)}"'


@dataclass
class ResolvedFile:
    record: StoredFile
    stream: object
    disposition: str

    @property
    def content_type(self):
        return self.record.mimetype

    @property
    def content_disposition(self):
        return content_disposition(self.disposition, self.record.original_name)


class FileService:
    """
    Ingestion, retrieval and deletion of uploaded files. The catalog
    (StoredFile rows) decides whether a file exists; the blob store holds the
    bytes. The two are only ever kept in step by ordering: blob first on
    upload, blob first on delete.
    """

    def __init__(self, blob_store: BlobStore, max_upload_size: int = None,
                 allowed_content_types=ALLOWED_CONTENT_TYPES):
        self.blob_store = blob_store
        self.max_upload_size = max_upload_size if max_upload_size is not None else settings.MAX_UPLOAD_SIZE
        self.allowed_content_types = tuple(allowed_content_types)

    def validate(self, *, original_name, content_type, size):
        if not original_name:
            raise ValidationError("No file uploaded")
        content_type = (content_type or '').split(';')[0].strip().lower()
        if content_type not in self.allowed_content_types:
            raise ValidationError(
                f"Invalid file type: {content_type or 'unknown'}. "
                f"Allowed types: {', '.join(self.allowed_content_types)}"
            )
        if size is None or size < 0:
            raise ValidationError("File size is unknown")
        if size > self.max_upload_size:
            raise ValidationError(
                f"File too large: {size} bytes. Maximum allowed size is {self.max_upload_size} bytes"
            )
        return content_type

    def ingest(self, *, stream, original_name, content_type, size) -> StoredFile:
        content_type = self.validate(original_name=original_name, content_type=content_type, size=size)
        original_name = os.path.basename(original_name.replace('\\', '/'))[:255]
        if not original_name:
            raise ValidationError("No file uploaded")

        storage_key = self.blob_store.write(generate_storage_key(original_name), stream)
        logger.info(f"Stored blob '{storage_key}' ({size} bytes, {content_type}) for '{original_name}'.")

        try:
            with transaction.atomic():
                record = StoredFile.objects.create(
                    storage_key=storage_key,
                    original_name=original_name,
                    mimetype=content_type,
                    size_bytes=size,
                )
        except DatabaseError as e:
            logger.error(f"Metadata insert for blob '{storage_key}' failed: {e}. Removing the blob.", exc_info=True)
            try:
                self.blob_store.delete(storage_key)
            except StorageFault:
                logger.error(f"Could not remove orphaned blob '{storage_key}'. Run reconcile_storage to clean it up.")
            raise StorageFault(f"Failed to save file metadata: {e}") from e

        logger.info(f"Catalogued file {record.id} -> '{storage_key}'.")
        return record

    def list_files(self):
        return StoredFile.objects.order_by('-uploaded_at')

    def get_file(self, file_id) -> StoredFile:
        try:
            return StoredFile.objects.get(pk=uuid.UUID(str(file_id)))
        except (ValueError, StoredFile.DoesNotExist):
            raise NotFoundError("File not found.")

    def resolve(self, storage_key: str, disposition: str = INLINE) -> ResolvedFile:
        try:
            record = StoredFile.objects.get(storage_key=storage_key)
        except StoredFile.DoesNotExist:
            raise NotFoundError("File not found in database")

        try:
            stream = self.blob_store.open_read(record.storage_key)
        except BlobNotFound:
            logger.warning(f"Catalog/blob drift: record {record.id} points at missing blob '{storage_key}'.")
            raise NotFoundError("File not found on server", consistency_fault=True)

        return ResolvedFile(record=record, stream=stream, disposition=disposition)

    def delete(self, file_id):
        record = self.get_file(file_id)
        storage_key = record.storage_key

        removed = self.blob_store.delete(storage_key)
        if not removed:
            logger.warning(f"Blob '{storage_key}' for file {record.id} was already absent.")

        try:
            with transaction.atomic():
                record.delete()
        except DatabaseError as e:
            if removed:
                logger.error(f"Blob '{storage_key}' deleted but catalog record {file_id} was not: {e}", exc_info=True)
                raise PartialDeleteError(
                    "File bytes were deleted but the file record could not be removed.",
                    file_id=file_id,
                    storage_key=storage_key,
                ) from e
            raise StorageFault(f"Failed to delete file record: {e}") from e

        logger.info(f"Deleted file {file_id} ('{storage_key}').")
