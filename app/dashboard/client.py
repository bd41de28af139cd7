"""HTTP client the admin dashboard uses to talk to the CMS API."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from app.config import settings
from app.schemas.carousel import CarouselItemResponse, ReorderEntry

logger = logging.getLogger(__name__)

# (filename, content, content_type) as accepted by httpx multipart uploads
ImageFile = tuple[str, bytes, str]


class ApiError(Exception):
    """A request to the CMS API failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CmsApiClient:
    """Authenticated client for the carousel endpoints.

    Holds one ``httpx.AsyncClient`` between :meth:`connect` and
    :meth:`close`; also usable as an async context manager.
    """

    TIMEOUT = 30.0  # seconds

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.TIMEOUT,
                transport=self._transport,
            )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CmsApiClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        if self._client is None:
            raise RuntimeError("CmsApiClient is not connected")

        try:
            response = await self._client.request(
                method, path, headers=self._headers(), **kwargs
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Could not reach the server: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or body.get("success") is False:
            message = body.get("message") or response.reason_phrase or (
                f"Request failed with status {response.status_code}"
            )
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if not body:
            raise ApiError(
                f"Unexpected response from server for {method} {path}",
                status_code=response.status_code,
            )
        return body

    async def login(self, email: str, password: str) -> str:
        """Log in and keep the returned token for later requests."""
        body = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = body["token"]
        return self.token

    async def list_carousel_items(self) -> list[CarouselItemResponse]:
        body = await self._request("GET", "/carousel")
        return [CarouselItemResponse.model_validate(item) for item in body["data"]]

    async def get_carousel_item(self, item_id: str) -> CarouselItemResponse:
        body = await self._request("GET", f"/carousel/{item_id}")
        return CarouselItemResponse.model_validate(body["data"])

    async def create_carousel_item(
        self, fields: dict[str, Any], image: ImageFile | None = None
    ) -> CarouselItemResponse:
        files = {"image": image} if image else None
        body = await self._request("POST", "/carousel", data=_form(fields), files=files)
        return CarouselItemResponse.model_validate(body["data"])

    async def update_carousel_item(
        self, item_id: str, fields: dict[str, Any], image: ImageFile | None = None
    ) -> CarouselItemResponse:
        files = {"image": image} if image else None
        body = await self._request("PUT", f"/carousel/{item_id}", data=_form(fields), files=files)
        return CarouselItemResponse.model_validate(body["data"])

    async def delete_carousel_item(self, item_id: str) -> str:
        body = await self._request("DELETE", f"/carousel/{item_id}")
        return body.get("message", "")

    async def reorder_carousel_items(self, entries: Sequence[ReorderEntry]) -> str:
        """Send a complete arrangement as one batch."""
        body = await self._request(
            "PUT",
            "/carousel/reorder",
            json={"items": [entry.model_dump() for entry in entries]},
        )
        return body.get("message", "")


def _form(fields: dict[str, Any]) -> dict[str, str]:
    """Multipart form values are strings; ``None`` becomes an empty field."""
    return {key: "" if value is None else str(value) for key, value in fields.items()}
