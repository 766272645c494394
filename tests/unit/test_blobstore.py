"""Behaviour every blob store backend has to provide."""

import io
from collections.abc import Iterable

import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage, InMemoryStorage

from filehub.errors import StartupFault, StorageFault
from uploads.blobstore import BlobNotFound, BlobStore, build_storage

# pylint: disable=redefined-outer-name


class FailingWriteStorage(InMemoryStorage):
    """Writes some bytes, then dies, like a disk filling up mid-upload."""

    def _save(self, name, content):
        super()._save(name, ContentFile(b"partial"))
        raise OSError("No space left on device")


class FailingDeleteStorage(InMemoryStorage):
    def delete(self, name):
        raise OSError("storage unreachable")


@pytest.fixture(params=["memory", "filesystem"])
def store(request: pytest.FixtureRequest, tmp_path) -> Iterable[BlobStore]:
    match request.param:
        case "memory":
            yield BlobStore(InMemoryStorage())
        case "filesystem":
            yield BlobStore(FileSystemStorage(location=tmp_path / "blobs"))
        case _:
            raise ValueError(f"unknown store type: {request.param}")


def test_write_and_open_read_roundtrip(store: BlobStore):
    key = store.write("1700000000000-1.txt", io.BytesIO(b"hello"))

    assert key == "1700000000000-1.txt"
    with store.open_read(key) as f:
        assert f.read() == b"hello"


def test_open_read_missing_key_raises_blob_not_found(store: BlobStore):
    with pytest.raises(BlobNotFound):
        store.open_read("nope.txt")


def test_delete_reports_whether_anything_was_removed(store: BlobStore):
    key = store.write("1700000000000-2.bin", io.BytesIO(b"\x00\x01"))

    assert store.delete(key) is True
    assert store.exists(key) is False
    assert store.delete(key) is False


def test_keys_lists_stored_blobs(store: BlobStore):
    store.write("b.txt", io.BytesIO(b"b"))
    store.write("a.txt", io.BytesIO(b"a"))

    assert store.keys() == ["a.txt", "b.txt"]


def test_failed_write_discards_partial_blob():
    store = BlobStore(FailingWriteStorage())

    with pytest.raises(StorageFault):
        store.write("1700000000000-3.txt", io.BytesIO(b"0123456789"))

    assert store.exists("1700000000000-3.txt") is False
    assert store.keys() == []


def test_failed_write_under_renamed_key_discards_that_blob():
    storage = FailingWriteStorage()
    InMemoryStorage._save(storage, "1700000000000-4.txt", ContentFile(b"original"))
    store = BlobStore(storage)

    with pytest.raises(StorageFault):
        store.write("1700000000000-4.txt", io.BytesIO(b"0123456789"))

    assert store.keys() == ["1700000000000-4.txt"]
    with store.open_read("1700000000000-4.txt") as f:
        assert f.read() == b"original"


def test_failed_delete_is_a_storage_fault():
    storage = FailingDeleteStorage()
    store = BlobStore(storage)
    store.write("k.txt", io.BytesIO(b"k"))

    with pytest.raises(StorageFault):
        store.delete("k.txt")


def test_build_storage_filesystem_creates_upload_dir(settings, tmp_path):
    settings.UPLOAD_DIR = tmp_path / "nested" / "uploads"

    storage = build_storage("filesystem")

    assert isinstance(storage, FileSystemStorage)
    assert settings.UPLOAD_DIR.is_dir()


def test_build_storage_rejects_unknown_backend():
    with pytest.raises(StartupFault):
        build_storage("gridfs")
