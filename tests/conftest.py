import asyncio
import dataclasses
import logging
import threading
from collections.abc import Mapping
from typing import Any

import aiohttp.test_utils
import aiohttp.web
import pytest

from kubexample._cogs.configs.configuration import Settings
from kubexample._cogs.structs.credentials import ConnectionInfo
from kubexample._core.actions import loggers
from kubexample._core.reactor import running


def pytest_configure(config):
    # Unexpected warnings from our own code should fail the tests.
    config.addinivalue_line('filterwarnings', 'error::DeprecationWarning:kubexample.*')


@pytest.fixture(autouse=True)
def _restore_logging():
    """ The CLI commands configure the global logging; undo it after every test. """
    root = logging.getLogger()
    asyncio_logger = logging.getLogger('asyncio')
    level = root.level
    asyncio_handlers, asyncio_propagate = asyncio_logger.handlers[:], asyncio_logger.propagate
    yield
    for handler in [h for h in root.handlers if isinstance(h, loggers._PluginStreamHandler)]:
        root.removeHandler(handler)
    root.setLevel(level)
    asyncio_logger.handlers[:], asyncio_logger.propagate = asyncio_handlers, asyncio_propagate


@pytest.fixture()
def settings():
    return Settings()


@pytest.fixture()
def logger():
    return logging.getLogger('kubexample.tests')


#
# A fake K8s API server. Reasons:
# 1. We do not test the client library, we test the layers on top of it,
#    so the HTTP transport is real, but the server is a local stub.
# 2. No external calls must be made under any circumstances.
#    The unit-tests must be fully isolated from the environment.
#
# The server runs in its own thread & event loop, so that it serves both
# the async tests and the CLI tests (which run their own event loops).
#

@dataclasses.dataclass(frozen=True)
class FakeRequest:
    method: str
    path: str
    query: Mapping[str, str]
    headers: Mapping[str, str]
    data: Any


class FakeAPIServer:
    """
    A catch-all aiohttp application with the per-test responses.

    Sample usage::

        def test_me(fake_api):
            fake_api.add('get', '/api/v1/pods', {'items': []})
            do_something()
            assert len(fake_api.requests) == 1
            assert fake_api.requests[0].path == '/api/v1/pods'
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[FakeRequest] = []
        self.url: str = ''
        self._server: aiohttp.test_utils.TestServer | None = None

    def add(self, method: str, path: str, payload: Any = None, *, status: int = 200) -> None:
        self.responses[method.upper(), path] = (status, payload if payload is not None else {})

    async def handle(self, request: aiohttp.web.Request) -> aiohttp.web.StreamResponse:
        text = await request.text()
        try:
            data = await request.json() if text else None
        except ValueError:
            data = text
        self.requests.append(FakeRequest(
            method=request.method,
            path=request.path,
            query=dict(request.query),
            headers=dict(request.headers),
            data=data,
        ))

        status, payload = self.responses.get((request.method, request.path), (404, {
            'apiVersion': 'v1', 'kind': 'Status', 'status': 'Failure', 'code': 404,
            'reason': 'NotFound', 'message': 'the server could not find the requested resource',
        }))
        if isinstance(payload, str):
            return aiohttp.web.Response(status=status, text=payload)
        if isinstance(payload, bytes):
            return aiohttp.web.Response(status=status, body=payload)
        return aiohttp.web.json_response(payload, status=status)

    async def start(self) -> None:
        app = aiohttp.web.Application()
        app.router.add_route('*', '/{path:.*}', self.handle)
        self._server = aiohttp.test_utils.TestServer(app)
        await self._server.start_server(access_log=None)
        self.url = str(self._server.make_url('/')).rstrip('/')

    async def stop(self) -> None:
        if self._server is not None:
            await self._server.close()


@pytest.fixture()
def fake_api():
    api = FakeAPIServer()
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    try:
        asyncio.run_coroutine_threadsafe(api.start(), loop).result(timeout=10)
        yield api
    finally:
        asyncio.run_coroutine_threadsafe(api.stop(), loop).result(timeout=10)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=10)
        loop.close()


@pytest.fixture()
def connection_info(fake_api):
    return ConnectionInfo(server=fake_api.url)


@pytest.fixture()
def run_in_api(connection_info):
    """
    Run a coroutine function as the commands run: within an API context
    with a session to the fake API server, which is closed afterwards.
    """
    async def runner(fn, *args, **kwargs):
        return await running.run_in_context(lambda: fn(*args, **kwargs), info=connection_info)
    return runner


#
# Simulating that Kubernetes client libraries are not installed.
#

@pytest.fixture()
def no_kubernetes(mocker):
    mocker.patch.dict('sys.modules', {'kubernetes': None, 'kubernetes.config': None})


@pytest.fixture()
def no_pykube(mocker):
    mocker.patch.dict('sys.modules', {'pykube': None})


@pytest.fixture()
def no_clients(no_kubernetes, no_pykube):
    pass
