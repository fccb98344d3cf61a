import base64

import pytest

from kubexample._cogs.clients.api import get
from kubexample._cogs.clients.auth import APIContext, decode_to_pem
from kubexample._cogs.helpers import versions
from kubexample._cogs.structs.credentials import ConnectionInfo

PEM = '-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n'


@pytest.mark.parametrize('data', [
    PEM,
    PEM.encode('ascii'),
    base64.b64encode(PEM.encode('ascii')).decode('ascii'),
    base64.b64encode(PEM.encode('ascii')),
], ids=['pem-str', 'pem-bytes', 'b64-str', 'b64-bytes'])
def test_decoding_to_pem(data):
    assert decode_to_pem(data) == PEM


@pytest.mark.parametrize('kwargs, expected', [
    (dict(token='tkn'), 'Bearer tkn'),
    (dict(scheme='Digest', token='tkn'), 'Digest tkn'),
    (dict(scheme='Custom'), 'Custom'),
    (dict(username='user', password='pass'), 'Basic ' + base64.b64encode(b'user:pass').decode()),
], ids=['token', 'scheme-and-token', 'scheme-only', 'basic-auth'])
async def test_authorization_headers(fake_api, settings, logger, kwargs, expected):
    fake_api.add('get', '/url', {})
    async with APIContext(ConnectionInfo(server=fake_api.url, **kwargs)) as context:
        await get('/url', settings=settings, logger=logger, context=context)
    assert fake_api.requests[0].headers['Authorization'] == expected


async def test_no_authorization_header_without_credentials(fake_api, settings, logger):
    fake_api.add('get', '/url', {})
    async with APIContext(ConnectionInfo(server=fake_api.url)) as context:
        await get('/url', settings=settings, logger=logger, context=context)
    assert 'Authorization' not in fake_api.requests[0].headers


async def test_user_agent(fake_api, settings, logger):
    fake_api.add('get', '/url', {})
    async with APIContext(ConnectionInfo(server=fake_api.url)) as context:
        await get('/url', settings=settings, logger=logger, context=context)
    assert fake_api.requests[0].headers['User-Agent'] == f'kubexample/{versions.version or "unknown"}'


async def test_contextual_info_is_kept():
    info = ConnectionInfo(server='https://localhost:6443', default_namespace='ns')
    async with APIContext(info) as context:
        assert context.server == 'https://localhost:6443'
        assert context.default_namespace == 'ns'
        assert not context.session.closed
    assert context.session.closed


async def test_absent_ca_files_fail(tmp_path):
    with pytest.raises(OSError):
        APIContext(ConnectionInfo(server='https://localhost:6443', ca_path=str(tmp_path / 'ca.crt')))


async def test_malformed_ca_data_fails():
    with pytest.raises(ValueError):
        APIContext(ConnectionInfo(server='https://localhost:6443', ca_data='not-a-base64!'))
