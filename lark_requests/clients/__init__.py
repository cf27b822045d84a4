"""
HTTP clients.

Client (requests, blocking) and AsyncClient (httpx) accept any Request,
perform the call and return the decoded response data. Both share the
preparation and decoding rules in base.py.
"""

from .async_client import AsyncClient
from .base import PreparedCall, build_call, read_response
from .blocking import Client

__all__ = ["AsyncClient", "Client", "PreparedCall", "build_call", "read_response"]
