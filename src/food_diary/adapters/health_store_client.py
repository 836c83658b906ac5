"""HTTP client for the health store bridge."""

from dataclasses import dataclass
from datetime import timedelta

import httpx

from food_diary.domain.entries import NutritionRecord
from food_diary.domain.errors import HealthStoreError, HealthStoreUnavailableError
from food_diary.services.health_sync import HealthStore

MEAL_DURATION = timedelta(minutes=15)
HTTP_NOT_FOUND = 404


@dataclass
class HttpxHealthStoreClient(HealthStore):
    """HTTPX-backed client for a Health Connect / HealthKit bridge."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None
    timeout: float = 15

    @classmethod
    def build(
        cls, base_url: str, token: str | None = None, timeout: float = 15
    ) -> "HttpxHealthStoreClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            token=token,
            timeout=timeout,
        )

    async def is_available(self) -> bool:
        """Return True when the bridge reports the store as ready."""
        try:
            response = await self.http_client.get(
                f"{self.base_url}/status", headers=self._headers(), timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            raise HealthStoreUnavailableError(f"health store unreachable: {exc}") from exc
        if response.status_code != httpx.codes.OK:
            return False
        return bool(response.json().get("available", True))

    async def exists(self, external_id: str) -> bool:
        """Return True if the nutrition record is still stored."""
        response = await self._request("GET", f"/records/nutrition/{external_id}")
        return response.status_code != HTTP_NOT_FOUND

    async def create(self, record: NutritionRecord) -> str:
        """Insert a nutrition record and return its store id."""
        response = await self._request(
            "POST", "/records/nutrition", json=_to_payload(record)
        )
        record_id = response.json().get("id")
        if not record_id:
            raise HealthStoreError("No record ID returned")
        return str(record_id)

    async def update(self, external_id: str, record: NutritionRecord) -> None:
        """Overwrite a stored nutrition record."""
        await self._request(
            "PUT", f"/records/nutrition/{external_id}", json=_to_payload(record)
        )

    async def delete(self, external_id: str) -> None:
        """Delete a stored nutrition record."""
        await self._request("DELETE", f"/records/nutrition/{external_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> httpx.Response:
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(),
                json=json,
                timeout=self.timeout,
            )
            if response.status_code == HTTP_NOT_FOUND and method in {"GET", "DELETE"}:
                return response
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise HealthStoreError(f"{method} {path} failed: {exc}") from exc
        return response

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


def _to_payload(record: NutritionRecord) -> dict[str, object]:
    start = record.timestamp.astimezone()
    return {
        "name": record.name,
        "start_time": start.isoformat(),
        "end_time": (start + MEAL_DURATION).isoformat(),
        "energy_kcal": float(record.calories),
        "protein_g": record.proteins,
        "total_carbohydrate_g": record.carbs,
        "total_fat_g": record.fats,
    }
