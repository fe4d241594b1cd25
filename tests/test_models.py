"""Unit tests for storage API models and timestamp parsing."""

from datetime import datetime, timezone

import pytest

from pybunnysync.exceptions import BunnyInvalidResponseError
from pybunnysync.models import StorageObject, parse_listing
from pybunnysync.utils import format_size, parse_storage_timestamp

SAMPLE_RECORD = {
    "Guid": "33ea1f9b-3012-4ddd-af33-24741c559ef0",
    "StorageZoneName": "my-storage-zone",
    "Path": "/my-storage-zone/",
    "ObjectName": "404.html",
    "Length": 11720,
    "LastChanged": "2025-02-03T21:26:21.866",
    "ServerId": 12,
    "ArrayNumber": 5,
    "IsDirectory": False,
    "UserId": "0e64cafc-0bf2-47e1-9adc-257c80124475",
    "ContentType": "",
    "DateCreated": "2025-02-03T21:26:21.866",
    "StorageZoneId": 134123,
    "Checksum": "312341234adfadsfasdf",
    "ReplicatedZones": "DE",
}


class TestStorageObject:
    """Tests for StorageObject deserialization."""

    def test_from_api_response(self):
        """Test parsing a full listing record."""
        obj = StorageObject.from_api_response(SAMPLE_RECORD)

        expected_time = datetime(2025, 2, 3, 21, 26, 21, 866000, tzinfo=timezone.utc)
        assert obj == StorageObject(
            guid="33ea1f9b-3012-4ddd-af33-24741c559ef0",
            storage_zone_name="my-storage-zone",
            path="/my-storage-zone/",
            object_name="404.html",
            length=11720,
            last_changed=expected_time,
            is_directory=False,
            date_created=expected_time,
        )

    def test_full_path(self):
        """Test that full_path joins container path and name."""
        obj = StorageObject.from_api_response(SAMPLE_RECORD)
        assert obj.full_path == "/my-storage-zone/404.html"

    def test_missing_key_raises(self):
        """Test that a record without ObjectName is rejected."""
        record = dict(SAMPLE_RECORD)
        del record["ObjectName"]

        with pytest.raises(BunnyInvalidResponseError, match="ObjectName"):
            StorageObject.from_api_response(record)

    def test_invalid_timestamp_raises(self):
        """Test that an unparsable LastChanged is rejected."""
        record = dict(SAMPLE_RECORD, LastChanged="yesterday")

        with pytest.raises(BunnyInvalidResponseError):
            StorageObject.from_api_response(record)


class TestParseListing:
    """Tests for parse_listing."""

    def test_parse_list(self):
        """Test parsing a list of records."""
        directory = dict(
            SAMPLE_RECORD, ObjectName="images", IsDirectory=True, Length=0
        )
        objects = parse_listing([SAMPLE_RECORD, directory])

        assert [o.object_name for o in objects] == ["404.html", "images"]
        assert objects[1].is_directory is True

    def test_non_list_rejected(self):
        """Test that a non-array payload is rejected."""
        with pytest.raises(BunnyInvalidResponseError, match="JSON array"):
            parse_listing({"HttpCode": 404})


class TestParseStorageTimestamp:
    """Tests for parse_storage_timestamp."""

    def test_naive_timestamp_is_utc(self):
        """Test that naive timestamps are interpreted as UTC."""
        dt = parse_storage_timestamp("2025-02-03T21:26:21")
        assert dt == datetime(2025, 2, 3, 21, 26, 21, tzinfo=timezone.utc)

    def test_fraction_digits(self):
        """Test one to seven fractional digits."""
        assert parse_storage_timestamp("2025-02-03T21:26:21.5").microsecond == 500000
        assert (
            parse_storage_timestamp("2025-02-03T21:26:21.1234567").microsecond
            == 123456
        )

    def test_zulu_suffix(self):
        """Test a trailing Z."""
        dt = parse_storage_timestamp("2025-02-03T21:26:21.866Z")
        assert dt.tzinfo == timezone.utc
        assert dt.microsecond == 866000

    def test_offset_converted_to_utc(self):
        """Test that explicit offsets are converted to UTC."""
        dt = parse_storage_timestamp("2025-02-03T23:26:21+02:00")
        assert dt == datetime(2025, 2, 3, 21, 26, 21, tzinfo=timezone.utc)

    def test_empty(self):
        """Test that empty values return None."""
        assert parse_storage_timestamp(None) is None
        assert parse_storage_timestamp("") is None


class TestFormatSize:
    """Tests for format_size."""

    def test_units(self):
        """Test size formatting across units."""
        assert format_size(512) == "512 B"
        assert format_size(1536) == "1.5 KB"
        assert format_size(5 * 1024 * 1024) == "5.0 MB"
        assert format_size(2 * 1024 * 1024 * 1024) == "2.0 GB"
