"""
Gateway contract: the capability a transport must provide.

A gateway performs one round trip per protocol generation, turns the response
envelope into a payload (validated into ``model`` when given) or a raised
RemoteCallFailure, and releases its resources on close(). close() must be
safe to call more than once.
"""

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel

from cpanel_api.args import Args

MEGABYTE = 1024 * 1024
RESPONSE_SIZE_LIMIT = (5 * MEGABYTE) + 1337


@runtime_checkable
class Gateway(Protocol):
    async def uapi(self, module: str, function: str, args: Args, model: Optional[type[BaseModel]] = None) -> Any:
        ...

    async def api2(self, module: str, function: str, args: Args, model: Optional[type[BaseModel]] = None) -> Any:
        ...

    async def api1(self, module: str, function: str, args: Sequence[str], model: Optional[type[BaseModel]] = None) -> Any:
        ...

    async def close(self) -> None:
        ...
