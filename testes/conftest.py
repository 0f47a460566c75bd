import os
import sys
from collections import Counter

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from wpimage.stores.memory import MemoryStore

UPLOADS = "https://example.com/wp-content/uploads/2024/01"


class CountingStore(MemoryStore):
    """MemoryStore that counts size lookups."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.variant_calls = Counter()

    def get_sized_variant(self, attachment_id, size):
        self.variant_calls[(attachment_id, size)] += 1
        return super().get_sized_variant(attachment_id, size)


def build_store(uploads_dir="/srv/uploads", **kwargs):
    return CountingStore(
        [
            {"id": 10, "type": "attachment", "title": "Hero"},
            {"id": 11, "type": "attachment", "title": "Banner"},
            {"id": 12, "type": "attachment", "title": "Orphan"},
            {
                "id": 20,
                "type": "post",
                "title": "Hello world",
                "link": "https://example.com/hello-world/",
                "content": "<h3>Intro</h3><p>Some text</p><h4>Detail</h4>",
                "featured_media": 10,
                "date": "2024-01-15T09:30:00",
            },
            {"id": 21, "type": "post", "title": "No image"},
            {"id": 30, "type": "page", "title": "Broken", "featured_media": 99},
        ],
        attachments={
            10: {
                "file_path": f"{uploads_dir}/2024/01/hero.jpg",
                "mime_type": "image/jpeg",
                "title": "Hero",
                "alt_text": "A hero",
                "caption": "Caption text",
                "description": "<p>Description</p>",
            },
            11: {
                "file_path": f"{uploads_dir}/2024/01/banner.png",
                "mime_type": "image/png",
                "title": "Banner",
            },
        },
        variants={
            10: {
                "full": {"url": f"{UPLOADS}/hero.jpg", "width": 1600, "height": 900},
                "medium": {"url": f"{UPLOADS}/hero-300x169.jpg", "width": 300, "height": 169},
                "large": {"url": f"{UPLOADS}/hero-1024x576.jpg", "width": 1024, "height": 576},
            },
            11: {
                "full": {"url": f"{UPLOADS}/banner.png", "width": 800, "height": 200},
            },
        },
        fields={
            20: {
                "hero": {"id": 10, "url": f"{UPLOADS}/hero.jpg", "sizes": {}},
                "banner": 11,
                "banner_text": "11",
                "hero_url": f"{UPLOADS}/hero.jpg",
                "empty": "",
                "related": 20,
                "missing": 404,
                "superscript": "\u00b2",
            },
        },
        **kwargs,
    )


@pytest.fixture
def store():
    return build_store()


@pytest.fixture
def no_context():
    return lambda: 0
