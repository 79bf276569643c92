"""
cpanel-api: cPanel API client for Python.

One calling convention over the service's three protocol generations
(API1, API2, UAPI), with a single normalized error.
"""

from cpanel_api.client import CPanelAPI, AsyncCPanelAPI
from cpanel_api.args import Args, Generation, encode_args, api1_arguments
from cpanel_api.gateway import Gateway, RESPONSE_SIZE_LIMIT
from cpanel_api.transport.http import HttpGateway
from cpanel_api.transport.fake import FakeGateway
from cpanel_api.transport.envelope import parse_envelope, unify
from cpanel_api.models.envelope import UAPIResponse, API2Response, API1Response, Envelope
from cpanel_api.errors import (
    CPanelAPIError,
    RemoteCallFailure,
    TransportError,
    ResponseTooLargeError,
    ResponseDecodeError,
)

__version__ = "0.1.0"
__all__ = [
    "CPanelAPI",
    "AsyncCPanelAPI",
    "Args",
    "Generation",
    "encode_args",
    "api1_arguments",
    "Gateway",
    "RESPONSE_SIZE_LIMIT",
    "HttpGateway",
    "FakeGateway",
    "parse_envelope",
    "unify",
    "UAPIResponse",
    "API2Response",
    "API1Response",
    "Envelope",
    "CPanelAPIError",
    "RemoteCallFailure",
    "TransportError",
    "ResponseTooLargeError",
    "ResponseDecodeError",
]
