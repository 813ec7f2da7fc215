"""
redact-data - Redact Store HTTP Backend

DataStorer backed by a remote redact-store data service over HTTP.

Endpoints used:
- GET  {base}/data/{path}                          -> Data
- GET  {base}/data/{path}?skip=N&page_size=M       -> DataCollection
- POST {base}/data?path={path}  (JSON Data body)   -> 2xx on success
"""

import logging
from urllib.parse import quote

import httpx

from ...data import Data, DataCollection, DataPath
from ...errors import StorageInternalError, StorageNotFoundError
from ..interface import DataStorer, check_page

logger = logging.getLogger(__name__)


class RedactDataStorer(DataStorer):
    """
    Client for a redact-store server.

    Transport errors, unexpected status codes and undecodable bodies all
    surface as StorageInternalError; a 404 on a single-path read is
    StorageNotFoundError.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize redact-store client.

        Args:
            url: Base URL of the redact-store server, e.g. http://localhost:8080
            timeout: Request timeout in seconds
            client: Pre-built client (its base_url must point at the server)
        """
        if not url and client is None:
            raise ValueError("url is required")

        self.url = url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(base_url=self.url, timeout=timeout)

    @staticmethod
    def _data_url(key: str) -> str:
        return f"/data/{quote(key, safe='')}"

    def _internal_error(self, op: str, path: str, e: Exception) -> StorageInternalError:
        logger.error(
            "redact-store %s failed for path '%s': %s",
            op,
            path,
            e,
            extra={"path": path, "operation": op, "url": self.url, "error": str(e)},
            exc_info=True,
        )
        return StorageInternalError(e, details={"path": path, "operation": op})

    async def get(self, path: str | DataPath) -> Data:
        key = str(DataPath.of(path))

        try:
            response = await self._client.get(self._data_url(key))
        except httpx.HTTPError as e:
            raise self._internal_error("get", key, e) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise StorageNotFoundError(key)

        try:
            response.raise_for_status()
            return Data.model_validate_json(response.content)
        except (httpx.HTTPStatusError, ValueError) as e:
            raise self._internal_error("get", key, e) from e

    async def get_collection(self, path: str | DataPath, skip: int, page_size: int) -> DataCollection:
        check_page(skip, page_size)
        prefix = str(DataPath.of(path))

        try:
            response = await self._client.get(
                self._data_url(prefix),
                params={"skip": skip, "page_size": page_size},
            )
        except httpx.HTTPError as e:
            raise self._internal_error("get_collection", prefix, e) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            return DataCollection()

        try:
            response.raise_for_status()
            return DataCollection.model_validate_json(response.content)
        except (httpx.HTTPStatusError, ValueError) as e:
            raise self._internal_error("get_collection", prefix, e) from e

    async def create(self, data: Data) -> bool:
        try:
            response = await self._client.post(
                "/data",
                params={"path": data.key},
                content=data.model_dump_json(),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise self._internal_error("create", data.key, e) from e

        return True

    async def close(self) -> None:
        """Close the HTTP client if this storer created it."""
        if self._owns_client:
            await self._client.aclose()
