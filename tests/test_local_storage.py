"""
Device-scoped local storage and the append-only request lists.
"""

import json

from portal.schemas.price_change import PriceChange
from portal.services.local_storage import LocalStorage
from portal.services.request_repository import (
    DesignRequestRepository,
    PriceChangeRepository,
)

DEVICE = "a" * 32
OTHER_DEVICE = "b" * 32


def make_price_change(price_change_data, record_id):
    return PriceChange.model_validate({**price_change_data, "id": record_id})


class TestLocalStorage:

    def test_missing_key_returns_none(self, db_session):
        assert LocalStorage(db_session, DEVICE).get_item("anything") is None

    def test_set_and_overwrite(self, db_session):
        storage = LocalStorage(db_session, DEVICE)
        storage.set_item("k", "1")
        storage.set_item("k", "2")

        assert storage.get_item("k") == "2"

    def test_values_isolated_per_device(self, db_session):
        LocalStorage(db_session, DEVICE).set_item("k", "mine")

        assert LocalStorage(db_session, OTHER_DEVICE).get_item("k") is None


class TestRequestRepository:

    def test_save_appends_in_order(self, db_session, price_change_data):
        PriceChangeRepository.save(db_session, DEVICE, make_price_change(price_change_data, "PC-000001"))
        PriceChangeRepository.save(db_session, DEVICE, make_price_change(price_change_data, "PC-000002"))

        records = PriceChangeRepository.get_all(db_session, DEVICE)
        assert [r.id for r in records] == ["PC-000001", "PC-000002"]
        assert records[0].store_name == ["Yogurtland - Downtown LA", "Yogurtland - Irvine"]

    def test_stored_under_fixed_key_as_json_array(self, db_session, price_change_data):
        PriceChangeRepository.save(db_session, DEVICE, make_price_change(price_change_data, "PC-000003"))

        raw = LocalStorage(db_session, DEVICE).get_item("yogurtland_price_changes")
        items = json.loads(raw)
        assert isinstance(items, list)
        assert items[0]["id"] == "PC-000003"
        assert items[0]["status"] == "Pending"
        assert items[0]["managerEmail"] == "sam@example.com"

    def test_get_by_id(self, db_session, price_change_data):
        PriceChangeRepository.save(db_session, DEVICE, make_price_change(price_change_data, "PC-000004"))

        assert PriceChangeRepository.get_by_id(db_session, DEVICE, "PC-000004").description == "Per-ounce price update"
        assert PriceChangeRepository.get_by_id(db_session, DEVICE, "PC-999999") is None

    def test_corrupt_value_reads_as_empty(self, db_session):
        LocalStorage(db_session, DEVICE).set_item("yogurtland_design_requests", "{not json")

        assert DesignRequestRepository.get_all(db_session, DEVICE) == []

    def test_unreadable_records_are_skipped(self, db_session, price_change_data):
        good = make_price_change(price_change_data, "PC-000005").to_storage()
        LocalStorage(db_session, DEVICE).set_item(
            "yogurtland_price_changes", json.dumps([{"id": "junk"}, good])
        )

        assert [r.id for r in PriceChangeRepository.get_all(db_session, DEVICE)] == ["PC-000005"]
