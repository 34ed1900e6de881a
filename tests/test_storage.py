from pathlib import Path

import pytest

from core import storage
from core.config import settings


def test_local_storage_writes_under_media_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "local")
    monkeypatch.setattr(settings, "media_dir", str(tmp_path))

    out = storage.storage_put("images/hero/1-front.jpg", b"jpeg-bytes", "image/jpeg")

    assert out == {"key": "images/hero/1-front.jpg", "url": "/media/images/hero/1-front.jpg"}
    assert (Path(tmp_path) / "images/hero/1-front.jpg").read_bytes() == b"jpeg-bytes"


def test_s3_storage_puts_object(monkeypatch):
    calls = []

    class FakeS3:
        def put_object(self, **kwargs):
            calls.append(kwargs)

    monkeypatch.setattr(settings, "storage_backend", "s3")
    monkeypatch.setattr(settings, "s3_bucket", "landscaping-media")
    monkeypatch.setattr(settings, "s3_public_base_url", None)
    monkeypatch.setattr(storage, "_s3_client", lambda: FakeS3())

    out = storage.storage_put("images/about/2-team.png", b"png", "image/png")

    assert out["url"] == "https://landscaping-media.s3.amazonaws.com/images/about/2-team.png"
    assert calls == [
        {"Bucket": "landscaping-media", "Key": "images/about/2-team.png", "Body": b"png", "ContentType": "image/png"}
    ]


def test_s3_storage_requires_bucket(monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "s3")
    monkeypatch.setattr(settings, "s3_bucket", None)

    with pytest.raises(RuntimeError, match="S3_BUCKET"):
        storage.storage_put("images/x.png", b"x", "image/png")
