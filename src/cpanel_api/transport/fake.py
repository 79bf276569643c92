"""
In-memory gateway. Serves canned raw responses through the same decoding path
as the HTTP gateway, and records every call it receives.
"""

import copy
from typing import Any, NamedTuple, Optional, Sequence, Union

from pydantic import BaseModel

from cpanel_api.args import Args, Generation
from cpanel_api.errors import TransportError
from cpanel_api.transport.envelope import finish_call


class RecordedCall(NamedTuple):
    generation: Generation
    module: str
    function: str
    args: Union[Args, list[str]]


class FakeGateway:
    def __init__(self) -> None:
        self._responses: dict[tuple[Generation, str, str], Any] = {}
        self.calls: list[RecordedCall] = []
        self.close_count = 0

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    def respond(self, generation: Generation, module: str, function: str, raw: Any) -> None:
        """Register the raw decoded JSON returned for (generation, module, function)."""
        self._responses[(generation, module, function)] = raw

    def _call(
        self, generation: Generation, module: str, function: str, args: Any, model: Optional[type[BaseModel]],
    ) -> Any:
        self.calls.append(RecordedCall(generation, module, function, args))
        try:
            raw = self._responses[(generation, module, function)]
        except KeyError:
            raise TransportError(f"No response registered for {generation.name} {module}::{function}")
        return finish_call(generation, copy.deepcopy(raw), module, function, model)

    async def uapi(self, module: str, function: str, args: Args, model: Optional[type[BaseModel]] = None) -> Any:
        return self._call(Generation.UAPI, module, function, dict(args), model)

    async def api2(self, module: str, function: str, args: Args, model: Optional[type[BaseModel]] = None) -> Any:
        return self._call(Generation.API2, module, function, dict(args), model)

    async def api1(
        self, module: str, function: str, args: Sequence[str], model: Optional[type[BaseModel]] = None,
    ) -> Any:
        return self._call(Generation.API1, module, function, list(args), model)

    async def close(self) -> None:
        self.close_count += 1
