# uploads/management/commands/reconcile_storage.py

import logging
import time

from django.core.management.base import BaseCommand

from uploads.blobstore import get_blob_store
from uploads.models import StoredFile

logger = logging.getLogger(__name__)

DEFAULT_GRACE_SECONDS = 300


def _key_age_seconds(key, now):
    prefix = key.split('-', 1)[0]
    if not prefix.isdigit():
        return None
    return now - int(prefix) / 1000


def find_drift(blob_store, grace_seconds=DEFAULT_GRACE_SECONDS, now=None):
    """
    Compares the catalog with the blob store.
    Returns (dangling records, orphaned blob keys).

    The catalog is read before the blob store is listed, so an upload that
    completes in between shows up as a fresh blob, never as a record without
    one. Blobs whose key timestamp and records whose upload time are younger
    than `grace_seconds` are skipped: an upload in flight has written its blob
    but not yet its record.
    """
    now = time.time() if now is None else now
    records = list(StoredFile.objects.all())
    stored_keys = set(blob_store.keys())
    catalogued_keys = {record.storage_key for record in records}

    dangling = [
        record for record in records
        if record.storage_key not in stored_keys
        and now - record.uploaded_at.timestamp() >= grace_seconds
    ]
    orphaned = []
    for key in sorted(stored_keys - catalogued_keys):
        age = _key_age_seconds(key, now)
        if age is not None and age < grace_seconds:
            continue
        orphaned.append(key)
    return dangling, orphaned


class Command(BaseCommand):
    help = "Reports (and with --fix removes) file records without blobs and blobs without records."

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help="Delete orphaned blobs and dangling file records.",
        )
        parser.add_argument(
            '--grace-seconds',
            type=int,
            default=DEFAULT_GRACE_SECONDS,
            help="Ignore blobs written less than this many seconds ago.",
        )

    def handle(self, *args, **options):
        blob_store = get_blob_store()
        dangling, orphaned = find_drift(blob_store, grace_seconds=options['grace_seconds'])

        for record in dangling:
            self.stdout.write(f"dangling record: {record.id} -> {record.storage_key}")
        for key in orphaned:
            self.stdout.write(f"orphaned blob: {key}")

        if not dangling and not orphaned:
            self.stdout.write(self.style.SUCCESS("Catalog and blob store are in sync."))
            return

        if not options['fix']:
            self.stdout.write(self.style.WARNING(
                f"Found {len(dangling)} dangling record(s) and {len(orphaned)} orphaned blob(s). "
                "Re-run with --fix to remove them."
            ))
            return

        for key in orphaned:
            logger.info(f"Removing orphaned blob '{key}'.")
            blob_store.delete(key)

        deleted_count, _ = StoredFile.objects.filter(pk__in=[record.pk for record in dangling]).delete()
        logger.info(f"Removed {deleted_count} dangling file record(s).")

        self.stdout.write(self.style.SUCCESS(
            f"Removed {len(orphaned)} orphaned blob(s) and {deleted_count} dangling record(s)."
        ))
