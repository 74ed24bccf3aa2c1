"""Per-domain settings helpers."""
from app.services.settings_domains import (
    COST_CATEGORIES,
    CalculationSettingsService,
    HomepageSettingsService,
    build_payload,
    normalize_payload,
    parse_maybe_json,
)


def test_normalize_payload_coerces_legacy_values():
    form = normalize_payload({
        "advertising": [5, {"label": "Ads", "amount": "12.5"}, {"label": "Bad", "amount": "x"}],
        "rent": 300,
        "shipping": "garbage",
    })

    assert form["advertising"] == [
        {"label": "Default", "amount": 5},
        {"label": "Ads", "amount": 12.5},
        {"label": "Bad", "amount": None},
    ]
    assert form["rent"] == [{"label": "Default", "amount": 300}]
    assert form["shipping"] == []
    assert set(form) == set(COST_CATEGORIES)


def test_normalize_payload_of_nothing_is_empty():
    assert normalize_payload(None) == {}
    assert normalize_payload({}) == {}


def test_build_payload_includes_every_category():
    payload = build_payload({"packaging": [{"label": None, "amount": 3}, {"label": "Box", "amount": "n/a"}]})

    assert payload["packaging"] == [{"label": "", "amount": 3}, {"label": "Box", "amount": None}]
    assert all(payload[category] == [] for category in COST_CATEGORIES if category != "packaging")


def test_parse_maybe_json():
    assert parse_maybe_json('{"a": 1}') == {"a": 1}
    assert parse_maybe_json("plain text") == "plain text"
    assert parse_maybe_json([1]) == [1]
    assert parse_maybe_json(None) is None


def test_homepage_service_replaces_sections(db_session):
    service = HomepageSettingsService(db_session)

    service.save([{"section_id": "hero", "label": "Hero", "data": None}])
    service.save([])

    assert service.get() == {"sections": []}
    assert len(service.records()) == 1


def test_calculation_service_aggregates_records(db_session):
    service = CalculationSettingsService(db_session)
    service.save({"rent": [{"label": "Office", "amount": 200}], "freeship": 15})

    form = service.get()

    assert form["rent"] == [{"label": "Office", "amount": 200}]
    assert form["freeship"] == [{"label": "Default", "amount": 15}]
    assert form["advertising"] == []


def test_cost_item_labels_become_strings():
    assert normalize_payload({"rent": [{"label": 5, "amount": 1}]})["rent"] == [{"label": "5", "amount": 1}]
    assert build_payload({"rent": [{"label": 7, "amount": 2}]})["rent"] == [{"label": "7", "amount": 2}]
