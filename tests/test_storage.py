"""Tests for upload validation and the local blob store."""

import asyncio
from uuid import uuid4

import pytest

from lifeweeks.core.errors import FileValidationError, StorageError
from lifeweeks.storage.validation import (
    MAX_FILE_SIZE,
    file_kind,
    format_file_size,
    validate_file,
)


class TestValidateFile:
    """Tests for upload validation."""

    def test_accepts_allowed_type(self):
        """Test allowed types up to the size limit pass."""
        validate_file(1024, "image/png")
        validate_file(MAX_FILE_SIZE, "application/pdf")

    def test_mime_type_is_case_insensitive(self):
        """Test MIME types are matched ignoring case."""
        validate_file(10, "Image/PNG")

    def test_rejects_oversized(self):
        """Test files over the limit are rejected."""
        with pytest.raises(FileValidationError, match="less than 50MB"):
            validate_file(MAX_FILE_SIZE + 1, "image/png")

    def test_rejects_unknown_type(self):
        """Test types outside the allow-list are rejected."""
        with pytest.raises(FileValidationError, match="not supported"):
            validate_file(10, "application/x-msdownload")

    def test_rejects_missing_type(self):
        """Test a missing type is rejected."""
        with pytest.raises(FileValidationError):
            validate_file(10, None)

    def test_custom_limit(self):
        """Test a custom size limit."""
        with pytest.raises(FileValidationError):
            validate_file(2 * 1024 * 1024, "image/png", max_size=1024 * 1024)


class TestFileHelpers:
    """Tests for file display helpers."""

    @pytest.mark.parametrize(
        "mime_type, kind",
        [
            ("image/jpeg", "image"),
            ("video/mp4", "video"),
            ("audio/mpeg", "audio"),
            ("application/pdf", "pdf"),
            ("application/msword", "document"),
            ("application/vnd.ms-excel", "spreadsheet"),
            ("application/zip", "archive"),
            ("text/plain", "file"),
        ],
    )
    def test_file_kind(self, mime_type, kind):
        """Test MIME types map onto file kinds."""
        assert file_kind(mime_type) == kind

    def test_format_file_size(self):
        """Test human-readable sizes."""
        assert format_file_size(0) == "0 Bytes"
        assert format_file_size(512) == "512 Bytes"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(5 * 1024 * 1024) == "5 MB"


class TestLocalBlobStore:
    """Tests for the filesystem blob store."""

    def test_upload_read_delete(self, store):
        """Test a blob can be written, read and removed."""
        owner, event = uuid4(), uuid4()

        path = asyncio.run(store.upload(b"hello", owner, event, "Notes.TXT"))

        assert path.startswith(f"{owner}/{event}/")
        assert path.endswith(".txt")
        assert asyncio.run(store.read(path)) == b"hello"

        asyncio.run(store.delete(path))
        assert not store.resolve(path).exists()

    def test_paths_are_unique(self, store):
        """Test the same file name gets distinct paths."""
        owner, event = uuid4(), uuid4()
        first = asyncio.run(store.upload(b"a", owner, event, "same.png"))
        second = asyncio.run(store.upload(b"b", owner, event, "same.png"))
        assert first != second

    def test_delete_missing_blob_is_not_an_error(self, store):
        """Test deleting a missing blob succeeds."""
        asyncio.run(store.delete(f"{uuid4()}/{uuid4()}/gone.png"))

    def test_read_missing_blob(self, store):
        """Test reading a missing blob raises."""
        with pytest.raises(StorageError):
            asyncio.run(store.read(f"{uuid4()}/{uuid4()}/gone.png"))

    def test_rejects_path_traversal(self, store):
        """Test paths outside the root are refused."""
        with pytest.raises(StorageError):
            store.resolve("../outside.txt")

    def test_signed_url_round_trip(self, store):
        """Test a minted URL verifies."""
        url = asyncio.run(store.signed_url("a/b/c.png", 60))
        path, query = url.split("?")
        params = dict(part.split("=") for part in query.split("&"))

        assert path == "/files/a/b/c.png"
        assert store.verify("a/b/c.png", int(params["expires"]), params["signature"])

    def test_verify_rejects_tampering(self, store):
        """Test a changed path or expiry fails verification."""
        url = asyncio.run(store.signed_url("a/b/c.png", 60))
        params = dict(part.split("=") for part in url.split("?")[1].split("&"))

        assert not store.verify("a/b/other.png", int(params["expires"]), params["signature"])
        assert not store.verify("a/b/c.png", int(params["expires"]) + 1, params["signature"])

    def test_verify_rejects_expired(self, store):
        """Test an expired URL fails verification."""
        url = asyncio.run(store.signed_url("a/b/c.png", 60))
        params = dict(part.split("=") for part in url.split("?")[1].split("&"))
        expires = int(params["expires"])

        assert not store.verify("a/b/c.png", expires, params["signature"], now=expires + 1)
