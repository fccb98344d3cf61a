import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp

from kubexample._cogs.clients import auth, errors
from kubexample._cogs.configs import configuration
from kubexample._cogs.helpers import typedefs


@auth.authenticated
async def request(
        method: str,
        url: str,  # relative to the server/api root.
        *,
        settings: configuration.Settings,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger,
) -> aiohttp.ClientResponse:
    """
    Make one request to the API and check the response for errors.

    There are no retries: every invocation of the plugin makes exactly
    one request, and any failure of it is final for the invocation.
    """
    if context is None:  # for type-checking!
        raise RuntimeError("API instance is not injected by the decorator.")

    if '://' not in url:
        url = context.server.rstrip('/') + '/' + url.lstrip('/')

    if timeout is None:
        timeout = aiohttp.ClientTimeout(
            total=settings.networking.request_timeout,
            sock_connect=settings.networking.connect_timeout,
        )

    what = f"{method.upper()} {url}"
    logger.debug(f"Requesting: {what}")
    try:
        response = await context.session.request(
            method=method,
            url=url,
            json=payload,
            headers=headers,
            timeout=timeout,
        )
        await errors.check_response(response)  # but do not parse it!
    except (aiohttp.ClientError, errors.APIError, asyncio.TimeoutError) as e:
        logger.debug(f"Request failed: {what} -> {e!r}")
        raise
    logger.debug(f"Request succeeded: {what} -> {response.status}")
    return response


async def get(
        url: str,  # relative to the server/api root.
        *,
        settings: configuration.Settings,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        logger: typedefs.Logger,
) -> Any:
    response = await request(
        method='get',
        url=url,
        headers=headers,
        timeout=timeout,
        settings=settings,
        logger=logger,
    )
    async with response:
        return await response.json()


async def post(
        url: str,  # relative to the server/api root.
        *,
        settings: configuration.Settings,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        logger: typedefs.Logger,
) -> Any:
    response = await request(
        method='post',
        url=url,
        payload=payload,
        headers=headers,
        timeout=timeout,
        settings=settings,
        logger=logger,
    )
    async with response:
        return await response.json()
