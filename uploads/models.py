import uuid
from django.db import models
from django.utils import timezone


class StoredFile(models.Model):
    """
    Catalog entry for one blob. Only created after the blob write succeeded;
    `storage_key` always names an existing entry in the blob store.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    storage_key = models.CharField(
        max_length=255,
        unique=True,
        help_text="Generated key of the raw file in the blob store."
    )
    original_name = models.CharField(max_length=255, help_text="Client-supplied filename. Untrusted.")
    mimetype = models.CharField(max_length=255)
    size_bytes = models.PositiveBigIntegerField()

    uploaded_at = models.DateTimeField(default=timezone.now, db_index=True, editable=False)

    class Meta:
        ordering = ['-uploaded_at']

    def __str__(self):
        return f"{self.original_name} ({self.storage_key})"
