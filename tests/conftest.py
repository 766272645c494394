"""Shared fixtures.

- **blob_store**: a fresh in-memory `BlobStore`, injected into services under test.
- **file_service**: a `FileService` wired to `blob_store`.
- **api_client**: DRF test client for HTTP-level tests. Views use the
  process-wide store from `get_blob_store()`, which is reset around every test.
"""

import pytest
from django.core.files.storage import InMemoryStorage
from rest_framework.test import APIClient

from uploads.blobstore import BlobStore, get_blob_store
from uploads.services import FileService


@pytest.fixture(autouse=True)
def reset_blob_store():
    get_blob_store.cache_clear()
    yield
    get_blob_store.cache_clear()


@pytest.fixture
def blob_store() -> BlobStore:
    return BlobStore(InMemoryStorage())


@pytest.fixture
def file_service(blob_store) -> FileService:
    return FileService(blob_store=blob_store, max_upload_size=1024)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()
