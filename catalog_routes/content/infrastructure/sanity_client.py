import asyncio
import json
from typing import Any

import aiohttp
from aiohttp import (
    ClientConnectorError,
    ClientPayloadError,
    ClientResponseError,
    ContentTypeError,
    ServerDisconnectedError,
)

from catalog_routes.config.logger_config import logger
from catalog_routes.errors import ConfigurationError


class SanityQueryClient:
    """Read-only client for the Sanity HTTP query API.

    Only published documents are requested. Transient failures (5xx, 429, connection
    resets, undecodable bodies) are retried with exponential backoff; anything else
    returns ``None`` to the caller.
    """

    def __init__(
        self,
        project_id: str,
        dataset: str = "production",
        api_version: str = "2023-05-03",
        token: str | None = None,
        retries: int = 3,
        backoff_base: float = 2.0,
    ) -> None:
        if not project_id:
            raise ConfigurationError("Sanity project id is not configured (SANITY_PROJECT_ID)")
        if not dataset:
            raise ConfigurationError("Sanity dataset is not configured (SANITY_DATASET)")
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip("v")
        self.token = token
        self.retries = max(1, retries)
        self.backoff_base = backoff_base

    @property
    def query_url(self) -> str:
        return f"https://{self.project_id}.api.sanity.io/v{self.api_version}/data/query/{self.dataset}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def query(
        self,
        session: aiohttp.ClientSession,
        groq: str,
        *,
        operation: str,
    ) -> list[dict[str, Any]] | None:
        params = {"query": groq, "perspective": "published"}
        data = await self._fetch(session, params, operation=operation)
        if data is None:
            return None
        result = data.get("result")
        if result is None:
            return []
        if not isinstance(result, list):
            logger.warning("Unexpected result shape operation={} type={}", operation, type(result).__name__)
            return []
        return [row for row in result if isinstance(row, dict)]

    async def _fetch(
        self,
        session: aiohttp.ClientSession,
        params: dict[str, Any],
        *,
        operation: str,
    ) -> dict[str, Any] | None:
        timeout = aiohttp.ClientTimeout(total=45, connect=10)
        for attempt in range(1, self.retries + 1):
            try:
                async with session.get(
                    self.query_url,
                    params=params,
                    headers=self._headers(),
                    timeout=timeout,
                ) as resp:
                    if resp.status >= 500 or resp.status == 429:
                        logger.warning(
                            "Server error {}. operation={} attempt={}/{}",
                            resp.status,
                            operation,
                            attempt,
                            self.retries,
                        )
                        raise ClientResponseError(
                            resp.request_info,
                            resp.history,
                            status=resp.status,
                            message="Server Error",
                        )

                    if resp.status != 200:
                        body = await resp.text()
                        logger.error("HTTP {} operation={}: {}", resp.status, operation, body)
                        return None

                    try:
                        data = await resp.json()
                    except (ContentTypeError, json.JSONDecodeError, ValueError) as exc:
                        if attempt == self.retries:
                            logger.error("Failed after {} attempts. operation={} error={}", self.retries, operation, exc)
                            return None
                        wait_time = self.backoff_base**attempt
                        logger.warning("Undecodable response ({}). Retrying in {}s...", exc, wait_time)
                        await asyncio.sleep(wait_time)
                        continue

                    if not isinstance(data, dict):
                        logger.error("Unexpected payload operation={} type={}", operation, type(data).__name__)
                        return None
                    return data

            except (
                ClientResponseError,
                ClientConnectorError,
                ServerDisconnectedError,
                asyncio.TimeoutError,
                ClientPayloadError,
            ) as exc:
                if attempt == self.retries:
                    logger.error("Failed after {} attempts. operation={} error={}", self.retries, operation, exc)
                    return None
                wait_time = self.backoff_base**attempt
                logger.warning("Connection unstable ({}). Retrying in {}s...", exc, wait_time)
                await asyncio.sleep(wait_time)

        return None
