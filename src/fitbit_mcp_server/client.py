"""
HTTP client for the Fitbit Web API.

Every tool goes through FitbitClient.fetch_json, which attaches the bearer
credential, performs a single GET and decodes the JSON body. Failures are
raised as FitbitError subclasses so the tool layer can turn them into error
results.
"""

from json import JSONDecodeError
import logging
from typing import Any

import httpx  # pylint: disable=import-error

logger = logging.getLogger(__name__)

FITBIT_API_BASE_URL = "https://api.fitbit.com/1"
USER_AGENT = "fitbit-mcp-server/1.0"


class FitbitError(Exception):
    """Base class for failures talking to the Fitbit API."""


class UpstreamError(FitbitError):
    """The Fitbit API answered with a non-success status code."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Fitbit API error: {status_code} {reason}")


class NetworkError(FitbitError):
    """The request never produced an HTTP response (DNS, connection, timeout)."""


class FitbitClient:
    """
    Authenticated GET access to the Fitbit Web API.

    Args:
        access_token (str): OAuth access token sent as a bearer credential.
        base_url (str): API root, including the version prefix.
        http_client (httpx.AsyncClient | None): Shared client to use. When omitted
            one is created and closed by aclose().
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = FITBIT_API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http_client = http_client if http_client is not None else httpx.AsyncClient()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def fetch_json(self, path: str) -> Any:
        """
        GET a path relative to the API root and return the decoded JSON body.

        Args:
            path (str): Endpoint path, e.g. '/user/-/profile.json'.

        Raises:
            UpstreamError: The response status was not 2xx.
            NetworkError: The transport failed before a response arrived.
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._http_client.get(url, headers=self.headers)
        except httpx.RequestError as e:
            logger.error("Error making request to %s: %s", path, e)
            raise NetworkError(f"Network error: {e}") from e

        if not response.is_success:
            logger.error(
                "Error making request to %s: %s %s",
                path,
                response.status_code,
                response.reason_phrase,
            )
            raise UpstreamError(response.status_code, response.reason_phrase)

        try:
            return response.json()
        except JSONDecodeError as e:
            logger.error("Invalid JSON in response from: %s", path)
            raise FitbitError("Invalid JSON in response") from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
