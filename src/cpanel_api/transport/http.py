"""
HTTP gateway for the cPanel service.

UAPI:      GET /execute/{module}/{function}?key=value
API2/API1: GET /json-api/cpanel?cpanel_jsonapi_apiversion=N&...
"""

import json
import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import BaseModel

from cpanel_api.args import Args, Generation, encode_args
from cpanel_api.errors import ResponseDecodeError, ResponseTooLargeError, TransportError
from cpanel_api.gateway import RESPONSE_SIZE_LIMIT
from cpanel_api.transport.envelope import finish_call

logger = logging.getLogger(__name__)

DEFAULT_PORT = 2083
USER_AGENT = "cpanel-api/0.1.0"


class HttpGateway:
    def __init__(
        self,
        host: str,
        user: str,
        token: str,
        port: int = DEFAULT_PORT,
        verify: bool = True,
        timeout: float = 30.0,
        size_limit: int = RESPONSE_SIZE_LIMIT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._user = user
        self._size_limit = size_limit
        self._client: Optional[httpx.AsyncClient] = httpx.AsyncClient(
            base_url=f"https://{host}:{port}",
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
                "Authorization": f"cpanel {user}:{token}",
            },
            verify=verify,
            timeout=timeout,
            transport=transport,
        )

    @property
    def closed(self) -> bool:
        return self._client is None

    async def _fetch(self, path: str, params: list[tuple[str, str]]) -> Any:
        """GET ``path`` and return the decoded JSON body, refusing oversize responses."""
        if self._client is None:
            raise TransportError("Gateway is closed")
        try:
            async with self._client.stream("GET", path, params=params) as resp:
                if resp.status_code >= 400:
                    body = (await resp.aread())[:200].decode("utf-8", "replace")
                    logger.error("Request to %s failed: HTTP %s", path, resp.status_code)
                    raise TransportError(f"HTTP {resp.status_code}: {body}", details={"status": resp.status_code})
                chunks: list[bytes] = []
                received = 0
                async for chunk in resp.aiter_bytes():
                    received += len(chunk)
                    if received > self._size_limit:
                        logger.error("Response from %s exceeded %d bytes", path, self._size_limit)
                        raise ResponseTooLargeError(self._size_limit)
                    chunks.append(chunk)
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", path, e)
            raise TransportError(f"Request to {path} failed: {e}")
        try:
            return json.loads(b"".join(chunks))
        except ValueError as e:
            raise ResponseDecodeError(f"Invalid JSON from {path}: {e}")

    def _json_api_params(self, generation: Generation, module: str, function: str) -> list[tuple[str, str]]:
        return [
            ("cpanel_jsonapi_user", self._user),
            ("cpanel_jsonapi_apiversion", generation.value),
            ("cpanel_jsonapi_module", module),
            ("cpanel_jsonapi_func", function),
        ]

    async def uapi(self, module: str, function: str, args: Args, model: Optional[type[BaseModel]] = None) -> Any:
        logger.debug("UAPI %s::%s", module, function)
        raw = await self._fetch(f"/execute/{module}/{function}", encode_args(args, Generation.UAPI))
        return finish_call(Generation.UAPI, raw, module, function, model)

    async def api2(self, module: str, function: str, args: Args, model: Optional[type[BaseModel]] = None) -> Any:
        logger.debug("API2 %s::%s", module, function)
        params = self._json_api_params(Generation.API2, module, function) + encode_args(args, Generation.API2)
        raw = await self._fetch("/json-api/cpanel", params)
        return finish_call(Generation.API2, raw, module, function, model)

    async def api1(
        self, module: str, function: str, args: Sequence[str], model: Optional[type[BaseModel]] = None,
    ) -> Any:
        logger.debug("API1 %s::%s", module, function)
        params = self._json_api_params(Generation.API1, module, function)
        params += [(f"arg-{i}", arg) for i, arg in enumerate(args)]
        raw = await self._fetch("/json-api/cpanel", params)
        return finish_call(Generation.API1, raw, module, function, model)

    async def close(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
