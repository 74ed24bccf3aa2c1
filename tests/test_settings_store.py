"""Settings record store tests."""
from datetime import datetime, timedelta

import pytest

from app.models.settings import SettingRecord
from app.services.settings_store import SettingsStore, SettingsValidationError


def test_upsert_same_key_twice_keeps_one_record_with_latest_data(db_session):
    store = SettingsStore(db_session)

    store.upsert("homepage_v1", "homepage", {"sections": [{"section_id": "hero"}]})
    store.upsert("homepage_v1", "homepage", {"sections": []})

    records = db_session.query(SettingRecord).filter(SettingRecord.key == "homepage_v1").all()
    assert len(records) == 1
    assert records[0].data == {"sections": []}


def test_upsert_replaces_tab_and_data_wholesale(db_session):
    store = SettingsStore(db_session)
    store.upsert("theme_v1", "appearance", {"color": "red", "font": "serif"})

    record = store.upsert("theme_v1", "branding", {"color": "blue"})

    assert record.tab == "branding"
    assert record.data == {"color": "blue"}
    assert store.list("appearance") == []


def test_upsert_without_key_is_rejected(db_session):
    store = SettingsStore(db_session)

    with pytest.raises(SettingsValidationError):
        store.upsert(None, "homepage", {})
    with pytest.raises(SettingsValidationError):
        store.upsert("   ", "homepage", {})
    assert db_session.query(SettingRecord).count() == 0


def test_delete_missing_key_is_not_an_error(db_session):
    store = SettingsStore(db_session)

    assert store.delete("does-not-exist") is False


def test_delete_removes_record(db_session):
    store = SettingsStore(db_session)
    store.upsert("calculation_rent", "calculation", [{"label": "Office", "amount": 100}])

    assert store.delete("calculation_rent") is True
    assert store.get("calculation_rent") is None


def test_delete_scoped_to_tab_leaves_other_tabs_alone(db_session):
    store = SettingsStore(db_session)
    store.upsert("shared", "homepage", {})

    assert store.delete("shared", tab="calculation") is False
    assert store.get("shared") is not None


def test_list_filters_by_tab_newest_first(db_session):
    now = datetime.utcnow()
    db_session.add_all([
        SettingRecord(key="a", tab="calculation", data=1, created_at=now - timedelta(minutes=2)),
        SettingRecord(key="b", tab="calculation", data=2, created_at=now),
        SettingRecord(key="c", tab="homepage", data=3, created_at=now - timedelta(minutes=1)),
    ])
    db_session.commit()
    store = SettingsStore(db_session)

    assert [r.key for r in store.list("calculation")] == ["b", "a"]
    assert [r.key for r in store.list()] == ["b", "c", "a"]


def test_upsert_many_handles_repeated_keys_in_one_batch(db_session):
    store = SettingsStore(db_session)

    records = store.upsert_many([
        ("calculation_rent", "calculation", [1]),
        ("calculation_rent", "calculation", [2]),
        ("calculation_shipping", "calculation", [3]),
    ])

    assert len(records) == 3
    assert db_session.query(SettingRecord).count() == 2
    assert store.get("calculation_rent").data == [2]
