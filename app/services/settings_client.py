"""HTTP client for the settings API, used by admin tooling."""
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from app.config import settings
from app.services.settings_domains import build_payload

logger = logging.getLogger(__name__)


class SettingsClientError(Exception):
    """A settings request failed; ``message`` is what the API reported."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SettingsClient:
    """Thin async wrapper around the ``/api/settings`` routes."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=self.timeout)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        async with self._client() as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.HTTPError as e:
                logger.warning("Settings request %s %s failed: %s", method, url, e)
                raise SettingsClientError(str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error or not isinstance(payload, dict) or not payload.get("success"):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise SettingsClientError(message or f"Request failed with status {response.status_code}", response.status_code)
        return payload.get("data")

    # Generic store

    async def get_settings(self, tab: Optional[str] = None) -> Optional[List[Dict[str, Any]]]:
        """List records, or None when the API could not be reached."""
        params = {"tab": tab} if tab else None
        try:
            return await self._request("GET", "/api/settings", params=params)
        except SettingsClientError as e:
            logger.warning("Could not load settings for tab %s: %s", tab, e.message)
            return None

    async def upsert_setting(self, key: str, tab: str, data: Any) -> Dict[str, Any]:
        return await self._request("POST", "/api/settings", json={"key": key, "tab": tab, "data": data})

    async def delete_setting(self, key: str) -> Dict[str, Any]:
        return await self._request("DELETE", "/api/settings", params={"key": key})

    # Homepage

    async def get_homepage(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/settings/homepage")

    async def save_homepage(self, sections: List[Mapping[str, Any]]) -> Dict[str, Any]:
        return await self._request("POST", "/api/settings/homepage", json={"data": {"sections": list(sections)}})

    # Calculation

    async def get_calculation(self) -> Dict[str, List[Dict[str, Any]]]:
        return await self._request("GET", "/api/settings/calculation")

    async def save_calculation(self, form: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return await self._request("POST", "/api/settings/calculation", json={"data": build_payload(form)})

    # Product cost

    async def list_product_costs(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/settings/product-cost")

    async def save_product_cost(self, preset: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/settings/product-cost", json=dict(preset))

    async def delete_product_cost(self, key: str) -> Dict[str, Any]:
        return await self._request("DELETE", "/api/settings/product-cost", params={"key": key})
