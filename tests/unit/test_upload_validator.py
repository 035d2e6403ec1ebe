"""Unit tests for upload validation (type and size checks)."""

from __future__ import annotations

import pytest

from chatsense.config import MAX_UPLOAD_BYTES
from chatsense.ingest.types import UploadedFile
from chatsense.ingest.validator import is_valid_upload, partition_uploads


def _file(name: str, size: int = 10, content_type: str = "") -> UploadedFile:
    return UploadedFile(name=name, data=b"x" * size, content_type=content_type)


@pytest.mark.parametrize("name", ["result.json", "messages.html", "RESULT.JSON", "Chat.Html"])
def test_accepts_supported_extensions_any_case(name):
    assert is_valid_upload(_file(name))


@pytest.mark.parametrize("name", ["notes.txt", "archive.zip", "photo.png", "result.json.bak", "json"])
def test_rejects_other_extensions(name):
    assert not is_valid_upload(_file(name))


def test_rejects_other_extensions_regardless_of_size():
    assert not is_valid_upload(_file("notes.txt", size=0))
    assert not is_valid_upload(_file("notes.txt", size=MAX_UPLOAD_BYTES + 1))


@pytest.mark.parametrize("content_type", ["application/json", "text/html", "text/html; charset=utf-8"])
def test_accepts_declared_mime_type_without_extension(content_type):
    assert is_valid_upload(_file("export", content_type=content_type))


def test_rejects_unrelated_mime_type():
    assert not is_valid_upload(_file("export", content_type="text/plain"))


def test_accepts_file_at_exact_size_limit():
    assert is_valid_upload(_file("result.json", size=MAX_UPLOAD_BYTES))


@pytest.mark.parametrize("name", ["result.json", "messages.html"])
def test_rejects_oversized_file_regardless_of_extension(name):
    assert not is_valid_upload(_file(name, size=MAX_UPLOAD_BYTES + 1))


def test_custom_size_limit():
    assert not is_valid_upload(_file("result.json", size=11), max_bytes=10)


def test_partition_keeps_order_and_reports_rejected_names():
    files = [
        _file("b.json"),
        _file("skip.txt"),
        _file("a.html"),
        _file("big.json", size=MAX_UPLOAD_BYTES + 1),
    ]

    valid, rejected = partition_uploads(files)

    assert [f.name for f in valid] == ["b.json", "a.html"]
    assert rejected == ["skip.txt", "big.json"]
