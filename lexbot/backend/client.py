"""HTTP client for the conversational backend."""

import json

import httpx
from loguru import logger

from lexbot.backend.errors import BackendError, TransportError
from lexbot.backend.models import BackendRequest, BackendResponse


class BackendClient:
    """
    POST chat messages to the backend and parse its reply.

    Exactly one request per :meth:`send`; failures are raised as
    :class:`TransportError` or :class:`BackendError` and never retried.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.api_key = api_key
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def send(self, request: BackendRequest) -> BackendResponse:
        try:
            resp = await self._http.post(
                self.url,
                json=request.to_payload(),
                headers=self.headers,
            )
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if resp.status_code != 200:
            raise BackendError(resp.status_code, _error_message(resp))

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BackendError(resp.status_code, "Malformed backend response") from e
        if not isinstance(data, dict):
            raise BackendError(resp.status_code, "Malformed backend response")

        logger.debug(f"Backend replied: dialogState={data.get('dialogState')}")
        return BackendResponse.from_payload(data)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


def _error_message(resp: httpx.Response) -> str:
    """Pull ``message`` out of a JSON error body, else the reason phrase."""
    try:
        data = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return resp.reason_phrase or "Unknown error"
