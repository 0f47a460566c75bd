import base64

import pytest

from conftest import build_store
from wpimage.image_resolver import ImageResolver
from wpimage.stores.memory import MemoryStore


def test_size_accessors(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    assert image.url("medium").endswith("/hero-300x169.jpg")
    assert image.width("medium") == 300
    assert image.height("medium") == 169
    assert image.size("width", "large") == 1024
    assert image.width() == 1600


def test_size_lookup_is_memoized(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    image.size("url", "medium")
    image.size("url", "medium")
    image.width("medium")
    image.height("medium")
    assert store.variant_calls[(10, "medium")] == 1


def test_missing_size_is_none_and_looked_up_once(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    assert image.url("thumbnail") is None
    assert image.width("thumbnail") is None
    assert store.variant_calls[(10, "thumbnail")] == 1


def test_unknown_source_key_is_none(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    assert image.size("filesize", "full") is None


def test_resolve_invalidates_every_cached_size(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    image.url("medium")
    image.url("large")
    image.resolve(10)
    image.url("medium")
    image.url("large")
    assert store.variant_calls[(10, "medium")] == 2
    assert store.variant_calls[(10, "large")] == 2


def test_data_uri_reads_original_file(tmp_path, no_context):
    store = build_store(uploads_dir=str(tmp_path))
    folder = tmp_path / "2024" / "01"
    folder.mkdir(parents=True)
    (folder / "hero.jpg").write_bytes(b"\xff\xd8original")

    image = ImageResolver(10, store=store, current_record=no_context)
    expected = "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8original").decode()
    assert image.data_uri() == expected


def test_data_uri_for_size_assumes_sized_file_next_to_original(tmp_path, no_context):
    # The sized file path is derived from the size URL's file name; this is
    # a naming heuristic, not something the store guarantees.
    store = build_store(uploads_dir=str(tmp_path))
    folder = tmp_path / "2024" / "01"
    folder.mkdir(parents=True)
    (folder / "hero.jpg").write_bytes(b"original")
    (folder / "hero-300x169.jpg").write_bytes(b"medium")

    image = ImageResolver(10, store=store, current_record=no_context)
    assert image.data_uri("medium") == "data:image/jpeg;base64," + base64.b64encode(b"medium").decode()


def test_data_uri_for_size_in_other_directory_is_not_found(tmp_path, no_context):
    store = MemoryStore(
        [{"id": 5, "type": "attachment"}],
        attachments={5: {"file_path": str(tmp_path / "photo.jpg"), "mime_type": "image/jpeg"}},
        variants={5: {"small": {"url": "https://cdn.example.com/resized/photo-small.jpg", "width": 10, "height": 10}}},
    )
    (tmp_path / "photo.jpg").write_bytes(b"original")
    (tmp_path / "resized").mkdir()
    (tmp_path / "resized" / "photo-small.jpg").write_bytes(b"small")

    image = ImageResolver(5, store=store, current_record=no_context)
    with pytest.raises(OSError):
        image.data_uri("small")


def test_data_uri_unknown_size_is_none(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    assert image.data_uri("thumbnail") is None


def test_data_uri_unreadable_file_raises(store, no_context):
    image = ImageResolver(10, store=store, current_record=no_context)
    with pytest.raises(OSError):
        image.data_uri()


def test_data_uri_without_image_never_reads(store, no_context):
    class ExplodingFilesystem:
        def read_file(self, path):
            raise AssertionError("read_file should not be called")

    image = ImageResolver(999, store=store, filesystem=ExplodingFilesystem(), current_record=no_context)
    assert image.data_uri() is None
    assert image.data_uri("medium") is None


def test_data_uri_uses_injected_filesystem(store, no_context):
    class FakeFilesystem:
        def __init__(self):
            self.paths = []

        def read_file(self, path):
            self.paths.append(path)
            return b"abc"

    fs = FakeFilesystem()
    image = ImageResolver(10, store=store, filesystem=fs, current_record=no_context)
    assert image.data_uri("large") == "data:image/jpeg;base64,YWJj"
    assert fs.paths == ["/srv/uploads/2024/01/hero-1024x576.jpg"]
