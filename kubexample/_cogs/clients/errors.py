"""
K8s API errors, as reported by the plugin.

Every HTTP status of 400 and above is one kind of failure for the plugin:
the command stops and reports it. The error keeps the HTTP status, and the
reason & message of the K8s ``Status`` body if the server has sent one.
The client library's own error is chained as the cause.

Networking and SSL errors are not wrapped: they escalate from ``aiohttp`` as is.
"""
import collections.abc
import json

import aiohttp
from typing_extensions import TypedDict


# https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.19/#status-v1-meta
class RawStatus(TypedDict, total=False):
    kind: str
    reason: str
    message: str


class APIError(Exception):

    def __init__(self, payload: RawStatus | None, *, status: int) -> None:
        super().__init__(payload.get('message') if payload else None)
        self.status = status
        self.reason = payload.get('reason') if payload else None
        self.message = payload.get('message') if payload else None

    def __str__(self) -> str:
        text = f"({self.status}) Reason: {self.reason or 'Unknown'}"
        return f"{text}: {self.message}" if self.message else text


async def check_response(response: aiohttp.ClientResponse) -> None:
    """ Raise :class:`APIError` for the failed responses, do nothing otherwise. """
    if response.status < 400:
        return

    # The body must be read before raise_for_status() releases the response.
    payload: RawStatus | None
    try:
        payload = await response.json()
    except (json.JSONDecodeError, aiohttp.ContentTypeError, aiohttp.ClientConnectionError):
        payload = None

    # Other kinds of bodies are not shown: they can contain anything, even the secrets.
    if not isinstance(payload, collections.abc.Mapping) or payload.get('kind') != 'Status':
        payload = None

    try:
        response.raise_for_status()
    except aiohttp.ClientResponseError as e:
        raise APIError(payload, status=response.status) from e
