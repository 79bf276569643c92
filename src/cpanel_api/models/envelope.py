"""
Response envelopes, one per protocol generation.

The three shapes share no base: each variant declares its own fields and its
own failure rule. ``Envelope`` is the tagged union of all three, keyed by
``generation``.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from cpanel_api.args import Generation
from cpanel_api.errors import UNKNOWN_REASON, RemoteCallFailure


class Event(BaseModel):
    """API1/API2 ``event`` record."""
    result: int = 0
    reason: Optional[str] = None

    @field_validator("result", mode="before")
    @classmethod
    def _null_result(cls, value: Any) -> Any:
        return 0 if value is None else value


class UAPIResponse(BaseModel):
    generation: Literal[Generation.UAPI] = Generation.UAPI
    apiversion: Optional[int] = None
    module: Optional[str] = None
    func: Optional[str] = None
    status: int = 0
    errors: list[str] = []
    messages: list[str] = []
    warnings: list[str] = []
    metadata: dict[str, Any] = {}
    data: Optional[Any] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_result(cls, raw: Any) -> Any:
        # {"apiversion":3,"module":..,"func":..,"result":{"status":..}}
        if isinstance(raw, dict) and isinstance(raw.get("result"), dict) and "status" not in raw:
            lifted = {k: v for k, v in raw.items() if k != "result"}
            lifted.update(raw["result"])
            return lifted
        return raw

    @field_validator("errors", "messages", "warnings", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_dict(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value: Any) -> Any:
        return 0 if value is None else value

    def error(self) -> Optional[RemoteCallFailure]:
        if self.status == 1:
            return None
        if not self.errors:
            return RemoteCallFailure(UNKNOWN_REASON)
        return RemoteCallFailure("\n".join(self.errors))

    def message(self) -> Optional[str]:
        """Informational messages, reported whether or not the call succeeded."""
        if not self.messages:
            return None
        return "\n".join(self.messages)

    @property
    def ok(self) -> bool:
        return self.error() is None

    @property
    def payload(self) -> Any:
        return self.data


class API2Result(BaseModel):
    apiversion: Optional[int] = None
    module: Optional[str] = None
    func: Optional[str] = None
    event: Event = Field(default_factory=Event)
    data: Optional[Any] = None

    @field_validator("event", mode="before")
    @classmethod
    def _null_event(cls, value: Any) -> Any:
        return {} if value is None else value


class API2Response(BaseModel):
    generation: Literal[Generation.API2] = Generation.API2
    cpanelresult: API2Result = Field(default_factory=API2Result)

    @field_validator("cpanelresult", mode="before")
    @classmethod
    def _null_result(cls, value: Any) -> Any:
        return {} if value is None else value

    def error(self) -> Optional[RemoteCallFailure]:
        event = self.cpanelresult.event
        if event.result == 1:
            return None
        return RemoteCallFailure(event.reason or UNKNOWN_REASON)

    @property
    def ok(self) -> bool:
        return self.error() is None

    @property
    def payload(self) -> Any:
        return self.cpanelresult.data


class API1Data(BaseModel):
    result: Optional[str] = None


class API1Response(BaseModel):
    generation: Literal[Generation.API1] = Generation.API1
    apiversion: Optional[str] = None
    module: Optional[str] = None
    func: Optional[str] = None
    source: Optional[str] = None
    type: Optional[str] = None
    error_string: str = Field(default="", alias="error")
    event: Event = Field(default_factory=Event)
    data: API1Data = Field(default_factory=API1Data)

    model_config = {"populate_by_name": True}

    @field_validator("error_string", mode="before")
    @classmethod
    def _null_error(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("event", "data", mode="before")
    @classmethod
    def _null_record(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("apiversion", mode="before")
    @classmethod
    def _apiversion_text(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    def error(self) -> Optional[RemoteCallFailure]:
        # The top-level error string already carries the event reason when both are set
        if self.error_string:
            return RemoteCallFailure(self.error_string)
        if self.event.result != 1:
            return RemoteCallFailure(self.event.reason or UNKNOWN_REASON)
        return None

    @property
    def ok(self) -> bool:
        return self.error() is None

    @property
    def payload(self) -> Any:
        return self.data.result


Envelope = Annotated[Union[UAPIResponse, API2Response, API1Response], Field(discriminator="generation")]
