"""
Envelope decoding and error unification.

Whatever generation served a call, the caller sees one outcome: the payload,
or a RemoteCallFailure carrying the joined failure reasons.
"""

import logging
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from cpanel_api.args import Generation
from cpanel_api.errors import RemoteCallFailure, ResponseDecodeError
from cpanel_api.models.envelope import API1Response, API2Response, Envelope, UAPIResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ENVELOPE_MODELS: dict[Generation, type[BaseModel]] = {
    Generation.UAPI: UAPIResponse,
    Generation.API2: API2Response,
    Generation.API1: API1Response,
}


def parse_envelope(generation: Generation, raw: Any) -> Envelope:
    """Validate a decoded JSON object against the envelope for ``generation``."""
    if not isinstance(raw, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object for {generation.name} response, got {type(raw).__name__}"
        )
    try:
        return ENVELOPE_MODELS[generation].model_validate(raw)  # type: ignore[return-value]
    except ValidationError as e:
        raise ResponseDecodeError(f"Malformed {generation.name} response: {e}", details={"errors": e.errors()})


def unify(envelope: Envelope) -> Optional[RemoteCallFailure]:
    """The normalized error of any envelope variant, or None on success."""
    return envelope.error()


def decode_payload(envelope: Envelope, model: Optional[type[M]] = None) -> Union[M, Any]:
    """Return the envelope's payload, validated into ``model`` when one is given."""
    payload = envelope.payload
    if model is None:
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ResponseDecodeError(f"Payload does not match {model.__name__}: {e}", details={"errors": e.errors()})


def finish_call(
    generation: Generation,
    raw: Any,
    module: str,
    function: str,
    model: Optional[type[M]] = None,
) -> Union[M, Any]:
    """Decode a raw response, raise its unified error, or return its payload."""
    envelope = parse_envelope(generation, raw)
    if isinstance(envelope, UAPIResponse):
        message = envelope.message()
        if message:
            logger.warning("%s::%s: %s", module, function, message)
        for warning in envelope.warnings:
            logger.warning("%s::%s: %s", module, function, warning)
    error = unify(envelope)
    if error is not None:
        error.details = {"generation": generation.name, "module": module, "function": function}
        raise error
    return decode_payload(envelope, model)
