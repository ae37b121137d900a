"""Tests for identifier helpers and upload validators."""

import uuid

import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile

from core.helpers import is_valid_uuid, parse_uuid
from core.validators import FileSizeValidator


class TestParseUuid:
    def test_parses_string(self):
        value = uuid.uuid4()

        assert parse_uuid(str(value)) == value

    def test_passes_uuid_through(self):
        value = uuid.uuid4()

        assert parse_uuid(value) is value

    @pytest.mark.parametrize("value", ["", "not-a-uuid", "1234", None, 42, ["x"]])
    def test_malformed_is_none(self, value):
        assert parse_uuid(value) is None

    def test_is_valid_uuid(self):
        assert is_valid_uuid(str(uuid.uuid4()))
        assert not is_valid_uuid("abc")


class TestFileSizeValidator:
    def test_accepts_small_file(self):
        FileSizeValidator(max_mb=1)(SimpleUploadedFile("a.png", b"x" * 1024))

    def test_rejects_large_file(self):
        upload = SimpleUploadedFile("a.png", b"x" * (1024 * 1024 + 1))

        with pytest.raises(ValidationError, match="less than 1MB"):
            FileSizeValidator(max_mb=1)(upload)

    def test_equality_for_migrations(self):
        assert FileSizeValidator(max_mb=5) == FileSizeValidator(max_mb=5)
        assert FileSizeValidator(max_mb=5) != FileSizeValidator(max_mb=10)
