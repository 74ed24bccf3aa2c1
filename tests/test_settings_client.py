"""Async settings client, exercised against the app in-process."""
import httpx
import pytest

from app.main import app
from app.services.settings_client import SettingsClient, SettingsClientError


@pytest.fixture
def settings_client(override_dependencies):
    return SettingsClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))


async def test_upsert_and_list(settings_client):
    await settings_client.upsert_setting("theme_v1", "appearance", {"dark": True})
    await settings_client.upsert_setting("theme_v1", "appearance", {"dark": False})

    records = await settings_client.get_settings("appearance")

    assert len(records) == 1
    assert records[0]["data"] == {"dark": False}


async def test_calculation_round_trip(settings_client):
    await settings_client.save_calculation({"rent": [{"label": "Office", "amount": 900}]})

    form = await settings_client.get_calculation()

    assert form["rent"] == [{"label": "Office", "amount": 900}]
    assert form["shipping"] == []


async def test_homepage_and_product_costs(settings_client):
    await settings_client.save_homepage([{"section_id": "hero", "label": "Hero", "data": {}}])
    assert (await settings_client.get_homepage())["sections"][0]["section_id"] == "hero"

    preset = await settings_client.save_product_cost({"title": "Default", "profitMargin": 25})
    assert preset["data"]["profit_margin"] == 25
    assert len(await settings_client.list_product_costs()) == 1

    result = await settings_client.delete_product_cost(preset["key"])
    assert result == {"key": preset["key"], "deleted": True}


async def test_api_failure_message_is_raised(settings_client):
    with pytest.raises(SettingsClientError) as excinfo:
        await settings_client.upsert_setting("", "homepage", {})

    assert excinfo.value.message == "Missing key or tab"
    assert excinfo.value.status_code == 400


async def test_unreachable_api_yields_none():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = SettingsClient(base_url="http://settings.invalid", transport=httpx.MockTransport(handler))

    assert await client.get_settings("homepage") is None
    with pytest.raises(SettingsClientError):
        await client.delete_setting("homepage_v1")


async def test_unsuccessful_envelope_is_an_error():
    def handler(request):
        return httpx.Response(200, json={"success": False, "message": "Backend unavailable"})

    client = SettingsClient(base_url="http://settings.invalid", transport=httpx.MockTransport(handler))

    with pytest.raises(SettingsClientError, match="Backend unavailable"):
        await client.get_homepage()
