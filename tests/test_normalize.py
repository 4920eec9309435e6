"""Unit tests for the record normaliser.  Every parser must be total."""

from datetime import datetime, timezone

import pytest

from src.domain.entities import DeliveryRecord
from src.domain.enums import DeliveryStatus, Priority
from src.domain.normalize import (
    normalize_delivery,
    normalize_priority,
    normalize_status,
    to_number,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestToNumber:
    def test_native_number(self):
        assert to_number(40.7) == 40.7
        assert to_number(3) == 3.0

    def test_numeric_string(self):
        assert to_number("40.7") == 40.7
        assert to_number(" -74.006 ") == -74.006

    def test_garbage_string_uses_fallback(self):
        assert to_number("abc") == 0.0
        assert to_number("", fallback=7.0) == 7.0

    @pytest.mark.parametrize("value", ["1e3", "+.5", "5.", "-0.25E-1"])
    def test_decimal_forms(self, value):
        assert to_number(value) == float(value)

    @pytest.mark.parametrize("value", ["1_000", "4_0.7", "٤٠.٧", "0x10", "1e400"])
    def test_non_decimal_syntax_uses_fallback(self, value):
        assert to_number(value, fallback=-1.0) == -1.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "NaN", "-inf"])
    def test_non_finite_uses_fallback(self, value):
        assert to_number(value, fallback=-1.0) == -1.0

    @pytest.mark.parametrize("value", [None, True, False, [1], {"a": 1}, object()])
    def test_other_types_use_fallback(self, value):
        assert to_number(value) == 0.0

    def test_int_too_large_for_float(self):
        assert to_number(10**400) == 0.0


class TestNormalizeStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("in_progress", DeliveryStatus.ON_WAY),
            ("onway", DeliveryStatus.ON_WAY),
            ("  On   Way ", DeliveryStatus.ON_WAY),
            ("COMPLETE", DeliveryStatus.DELIVERED),
            ("completed", DeliveryStatus.DELIVERED),
            ("not_started", DeliveryStatus.PENDING),
            ("canceled", DeliveryStatus.CANCELLED),
            ("noanswer", DeliveryStatus.NO_ANSWER),
        ],
    )
    def test_synonyms(self, raw, expected):
        assert normalize_status(raw) == expected

    @pytest.mark.parametrize("status", list(DeliveryStatus))
    def test_canonical_labels_pass_through(self, status):
        assert normalize_status(status.value) is status

    @pytest.mark.parametrize("raw", ["xyz-unknown", "", None, 3, ["Delivered"]])
    def test_unknown_defaults_to_pending(self, raw):
        assert normalize_status(raw) is DeliveryStatus.PENDING


class TestNormalizePriority:
    def test_case_insensitive(self):
        assert normalize_priority(" URGENT ") is Priority.URGENT

    @pytest.mark.parametrize("raw", ["asap", None, 1])
    def test_unknown_defaults_to_medium(self, raw):
        assert normalize_priority(raw) is Priority.MEDIUM


class TestNormalizeDelivery:
    def test_empty_record_gets_defaults(self):
        record = normalize_delivery({}, now=NOW)
        assert record == DeliveryRecord(
            created_at=NOW.isoformat(), updated_at=NOW.isoformat()
        )

    @pytest.mark.parametrize("raw", [None, "garbage", 42, [("latitude", 1)]])
    def test_non_mapping_input_never_raises(self, raw):
        record = normalize_delivery(raw, now=NOW)
        assert record.latitude == 0.0
        assert record.status is DeliveryStatus.PENDING

    def test_string_coordinates_are_parsed(self):
        record = normalize_delivery({"latitude": "40.7", "longitude": "abc"})
        assert record.latitude == 40.7
        assert record.longitude == 0.0

    def test_legacy_camel_case_keys(self):
        record = normalize_delivery(
            {
                "_id": "k17abc",
                "externalId": "ORD-1",
                "customerName": "John Smith",
                "customerPhone": "+1234567890",
                "customerAddress": "123 Main St",
                "driverId": "d1",
                "status": "in_progress",
                "priority": "high",
                "orderValue": "129.99",
                "createdAt": "2024-01-01T00:00:00.000Z",
            }
        )
        assert record.id == "k17abc"
        assert record.external_id == "ORD-1"
        assert record.customer_name == "John Smith"
        assert record.driver_id == "d1"
        assert record.status is DeliveryStatus.ON_WAY
        assert record.priority is Priority.HIGH
        assert record.order_value == 129.99
        assert record.updated_at == "2024-01-01T00:00:00.000Z"

    def test_created_at_from_epoch_millis(self):
        record = normalize_delivery({"_creation_time": 1_700_000_000_000})
        assert record.created_at == "2023-11-14T22:13:20+00:00"
        assert record.updated_at == record.created_at

    def test_unusable_epoch_falls_back_to_now(self):
        record = normalize_delivery({"_creationTime": 1e300}, now=NOW)
        assert record.created_at == NOW.isoformat()

    def test_datetime_timestamps(self):
        created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        record = normalize_delivery({"created_at": created})
        assert record.created_at == "2026-01-02T03:04:05+00:00"

    def test_order_value(self):
        assert normalize_delivery({}).order_value is None
        assert normalize_delivery({"order_value": "abc"}).order_value == 0.0
        assert normalize_delivery({"order_value": 12.5}).order_value == 12.5

    def test_optional_fields_stay_absent(self):
        record = normalize_delivery({"id": "x"})
        assert record.customer_id is None
        assert record.notes is None
        assert record.driver is None

    def test_linked_summaries(self):
        record = normalize_delivery(
            {
                "driver": {"id": "d1", "name": "Alex", "raw": {"phone": "+1555"}},
                "product": {"id": "p1", "title": "Headphones"},
                "customerRecord": {"id": "c1", "name": "John"},
            }
        )
        assert record.driver.id == "d1"
        assert record.driver.raw == {"phone": "+1555"}
        assert record.product.title == "Headphones"
        assert record.customer_record.name == "John"

    def test_malformed_linked_summary_is_dropped(self):
        record = normalize_delivery({"driver": "d1", "product": {"title": "x"}})
        assert record.driver is None
        assert record.product is None
