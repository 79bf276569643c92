"""
CPanelAPI / AsyncCPanelAPI: one calling convention over UAPI, API2 and API1.
"""

import asyncio
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from pydantic import BaseModel

from cpanel_api.args import Args, api1_arguments
from cpanel_api.errors import TransportError
from cpanel_api.gateway import Gateway
from cpanel_api.transport.http import DEFAULT_PORT, HttpGateway


class AsyncCPanelAPI:
    """Async client (primary). Wraps exactly one gateway, which it owns."""

    def __init__(self, gateway: Optional[Gateway] = None):
        self.gateway = gateway

    @classmethod
    def connect(
        cls,
        host: str,
        user: str,
        token: str,
        port: int = DEFAULT_PORT,
        verify: bool = True,
        timeout: float = 30.0,
    ) -> "AsyncCPanelAPI":
        """Build a client backed by the HTTP gateway."""
        return cls(HttpGateway(host, user, token, port=port, verify=verify, timeout=timeout))

    async def uapi(
        self, module: str, function: str, args: Optional[Args] = None, model: Optional[type[BaseModel]] = None,
    ) -> Any:
        return await self._require_gateway().uapi(module, function, args or {}, model)

    async def api2(
        self, module: str, function: str, args: Optional[Args] = None, model: Optional[type[BaseModel]] = None,
    ) -> Any:
        return await self._require_gateway().api2(module, function, args or {}, model)

    async def api1(
        self,
        module: str,
        function: str,
        args: Union[Args, Sequence[str], None] = None,
        model: Optional[type[BaseModel]] = None,
    ) -> Any:
        """API1 call. ``args`` is either positional strings or a mapping whose keys carry ``name=value``."""
        if args is None:
            positional: list[str] = []
        elif isinstance(args, Mapping):
            positional = api1_arguments(dict(args))
        else:
            positional = list(args)
        return await self._require_gateway().api1(module, function, positional, model)

    async def close(self) -> None:
        if self.gateway is not None:
            await self.gateway.close()

    async def __aenter__(self) -> "AsyncCPanelAPI":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _require_gateway(self) -> Gateway:
        if self.gateway is None:
            raise TransportError("No gateway configured. Pass one to AsyncCPanelAPI() or use connect().")
        return self.gateway


class CPanelAPI:
    """Sync wrapper around AsyncCPanelAPI. Runs the event loop internally."""

    def __init__(self, gateway: Optional[Gateway] = None):
        self._async = AsyncCPanelAPI(gateway)
        self._loop = asyncio.new_event_loop()

    @classmethod
    def connect(cls, host: str, user: str, token: str, **kwargs: Any) -> "CPanelAPI":
        return cls(AsyncCPanelAPI.connect(host, user, token, **kwargs).gateway)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def gateway(self) -> Optional[Gateway]:
        return self._async.gateway

    def uapi(self, module: str, function: str, args: Optional[Args] = None, **kwargs: Any) -> Any:
        return self._run(self._async.uapi(module, function, args, **kwargs))

    def api2(self, module: str, function: str, args: Optional[Args] = None, **kwargs: Any) -> Any:
        return self._run(self._async.api2(module, function, args, **kwargs))

    def api1(self, module: str, function: str, args: Union[Args, Sequence[str], None] = None, **kwargs: Any) -> Any:
        return self._run(self._async.api1(module, function, args, **kwargs))

    def close(self) -> None:
        if self._loop.is_closed():
            return
        try:
            self._run(self._async.close())
        finally:
            self._loop.close()

    def __enter__(self) -> "CPanelAPI":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
