"""Tests for weather models and their persisted shape."""

import pytest

from weatherboard.models.weather import Sample, record_from_dict, record_to_dict
from weatherboard.tests.helpers import make_record


class TestLocationRecord:
    def test_identity(self):
        record = make_record(42, "Lima")
        assert record.id == 42
        assert record.name == "Lima"

    def test_frozen(self):
        record = make_record(1)
        with pytest.raises(AttributeError):
            record.current = None


class TestRecordDict:
    def test_shape(self):
        record = make_record(1, "Lima", forecast=[Sample(100, 12.5, 500)])
        data = record_to_dict(record)
        assert data["current"]["id"] == 1
        assert data["current"]["name"] == "Lima"
        assert data["forecast"] == [[100, 12.5, 500]]

    def test_from_dict(self):
        record = make_record(1, "Lima", forecast=[Sample(100, 12.5, 500)])
        assert record_from_dict(record_to_dict(record)) == record

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid location record"):
            record_from_dict({"current": {"id": "x"}, "forecast": []})
        with pytest.raises(ValueError):
            record_from_dict(None)
        with pytest.raises(ValueError):
            record_from_dict({"current": record_to_dict(make_record(1))["current"], "forecast": [[1, 2]]})

    def test_infinite_id(self):
        data = record_to_dict(make_record(1))
        data["current"]["id"] = float("inf")
        with pytest.raises(ValueError, match="Invalid location record"):
            record_from_dict(data)
