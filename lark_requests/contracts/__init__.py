"""
Contracts.

interfaces.py defines the Request interface every API call implements;
response_wrappers.py defines the envelopes raw response bytes decode into.
Clients only ever talk to these types, never to ad-hoc dicts.
"""

from .interfaces import HttpMethod, Request
from .response_wrappers import (
    ApiResponse,
    Body,
    BodyResponse,
    FlattenResponse,
    RawResponse,
    decode_response,
)

__all__ = [
    "HttpMethod", "Request",
    "ApiResponse", "Body", "BodyResponse", "FlattenResponse", "RawResponse",
    "decode_response",
]
