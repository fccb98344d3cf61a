"""
Rudimentary piggybacking on the known K8s API clients for authentication.

The plugin is not a client library, and avoids bringing too much logic
for proper authentication, especially all the complex auth-providers.

Instead, it uses the existing clients (if installed), triggers the
authentication in them, and extracts the basic credentials for its own use.
If no client library is installed, the kubeconfig files and the in-cluster
service account are read directly, with limited capabilities.

.. seealso::
    :mod:`credentials` and :func:`activities.authenticate`.
"""
import os
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

import yaml

from kubexample._cogs.helpers import typedefs
from kubexample._cogs.structs import credentials

# Keep as constants to make them patchable. Higher priority is more preferred.
PRIORITY_OF_CLIENT: int = 10
PRIORITY_OF_PYKUBE: int = 20

# Rudimentary logins are used only if the clients are absent, so the priorities can overlap.
PRIORITY_OF_KUBECONFIG: int = 10
PRIORITY_OF_SERVICE_ACCOUNT: int = 20

# As per https://kubernetes.io/docs/tasks/run-application/access-api-from-pod/
SERVICE_ACCOUNT_DIR = '/var/run/secrets/kubernetes.io/serviceaccount'
SERVICE_ACCOUNT_SERVER = 'https://kubernetes.default.svc'

DEFAULT_KUBECONFIG = '~/.kube/config'


def has_client() -> bool:
    try:
        import kubernetes  # noqa: F401
    except ImportError:
        return False
    else:
        return True


def has_pykube() -> bool:
    try:
        import pykube  # noqa: F401
    except ImportError:
        return False
    else:
        return True


def login_via_client(
        *,
        logger: typedefs.Logger,
        **_: Any,
) -> credentials.ConnectionInfo | None:

    # Keep imports in the function, as module imports are mocked in some tests.
    try:
        import kubernetes.config
    except ImportError:
        return None

    try:
        kubernetes.config.load_incluster_config()  # cluster env vars
        logger.debug("Client is configured in cluster with service account.")
    except kubernetes.config.ConfigException:
        try:
            kubernetes.config.load_kube_config()  # developer's config files
            logger.debug("Client is configured via kubeconfig file.")
        except kubernetes.config.ConfigException as e:
            raise credentials.LoginError("Cannot authenticate the client library "
                                         "neither in-cluster, nor via kubeconfig.") from e

    config = kubernetes.client.Configuration.get_default_copy()

    # For auth-providers, this method is monkey-patched with the auth-provider's one.
    # We need the actual auth-provider's token, so we call it instead of accessing api_key.
    header: str | None = config.get_api_key_with_prefix('authorization')
    parts: Sequence[str] = header.split(' ', 1) if header else []
    scheme, token = ((None, None) if len(parts) == 0 else
                     (None, parts[0]) if len(parts) == 1 else
                     (parts[0], parts[1]))  # RFC-7235, Appendix C.

    # Note: kubernetes client has no concept of a "current" context's namespace.
    return credentials.ConnectionInfo(
        server=config.host,
        ca_path=config.ssl_ca_cert,  # can be a temporary file
        insecure=not config.verify_ssl,
        username=config.username or None,  # an empty string when not defined
        password=config.password or None,  # an empty string when not defined
        scheme=scheme,
        token=token,
        certificate_path=config.cert_file,  # can be a temporary file
        private_key_path=config.key_file,  # can be a temporary file
        priority=PRIORITY_OF_CLIENT,
    )


def login_via_pykube(
        *,
        logger: typedefs.Logger,
        **_: Any,
) -> credentials.ConnectionInfo | None:

    # Keep imports in the function, as module imports are mocked in some tests.
    try:
        import pykube
    except ImportError:
        return None

    config: pykube.KubeConfig
    try:
        config = pykube.KubeConfig.from_service_account()
        logger.debug("Pykube is configured in cluster with service account.")
    except FileNotFoundError:
        try:
            config = pykube.KubeConfig.from_file()
            logger.debug("Pykube is configured via kubeconfig file.")
        except (pykube.PyKubeError, FileNotFoundError) as e:
            raise credentials.LoginError("Cannot authenticate pykube "
                                         "neither in-cluster, nor via kubeconfig.") from e

    ca: pykube.config.BytesOrFile | None = config.cluster.get('certificate-authority')
    cert: pykube.config.BytesOrFile | None = config.user.get('client-certificate')
    pkey: pykube.config.BytesOrFile | None = config.user.get('client-key')
    return credentials.ConnectionInfo(
        server=config.cluster.get('server'),
        ca_path=ca.filename() if ca else None,  # can be a temporary file
        insecure=config.cluster.get('insecure-skip-tls-verify'),
        username=config.user.get('username'),
        password=config.user.get('password'),
        token=config.user.get('token'),
        certificate_path=cert.filename() if cert else None,  # can be a temporary file
        private_key_path=pkey.filename() if pkey else None,  # can be a temporary file
        default_namespace=config.namespace,
        priority=PRIORITY_OF_PYKUBE,
    )


def has_service_account() -> bool:
    return os.path.exists(os.path.join(SERVICE_ACCOUNT_DIR, 'token'))


def login_with_service_account(**_: Any) -> credentials.ConnectionInfo | None:
    """
    A minimalistic login handler that can get raw data from a service account.

    Used when the plugin runs inside a pod, and neither pykube-ng
    nor the official client library are installed.
    """
    token_path = os.path.join(SERVICE_ACCOUNT_DIR, 'token')
    ns_path = os.path.join(SERVICE_ACCOUNT_DIR, 'namespace')
    ca_path = os.path.join(SERVICE_ACCOUNT_DIR, 'ca.crt')

    if not os.path.exists(token_path):
        return None

    with open(token_path, encoding='utf-8') as f:
        token = f.read().strip()

    namespace: str | None = None
    if os.path.exists(ns_path):
        with open(ns_path, encoding='utf-8') as f:
            namespace = f.read().strip()

    # The in-cluster server can be overridden by the env vars, as K8s injects them into pods.
    host = os.environ.get('KUBERNETES_SERVICE_HOST')
    port = os.environ.get('KUBERNETES_SERVICE_PORT')
    server = f'https://{host}:{port}' if host and port else SERVICE_ACCOUNT_SERVER

    return credentials.ConnectionInfo(
        server=server,
        ca_path=ca_path if os.path.exists(ca_path) else None,
        token=token or None,
        default_namespace=namespace or None,
        priority=PRIORITY_OF_SERVICE_ACCOUNT,
    )


def has_kubeconfig() -> bool:
    env_var_set = bool(os.environ.get('KUBECONFIG'))
    file_exists = os.path.exists(os.path.expanduser(DEFAULT_KUBECONFIG))
    return env_var_set or file_exists


def login_with_kubeconfig(**_: Any) -> credentials.ConnectionInfo | None:
    """
    A minimalistic login handler that can get raw data from a kubeconfig file.

    Only the static credentials are supported: certificates, tokens, token files,
    basic auth. No auth-providers or exec-plugins are executed, though the
    access token of an auth-provider is used if it is already in the file.
    """

    # As per https://kubernetes.io/docs/concepts/configuration/organize-cluster-access-kubeconfig/
    kubeconfig = os.environ.get('KUBECONFIG')
    if not kubeconfig and os.path.exists(os.path.expanduser(DEFAULT_KUBECONFIG)):
        kubeconfig = DEFAULT_KUBECONFIG
    if not kubeconfig:
        return None

    paths = [path.strip() for path in kubeconfig.split(os.pathsep)]
    paths = [os.path.expanduser(path) for path in paths if path]

    # As prescribed: if the file is absent or non-deserialisable, then fail. The first value wins.
    # Relative paths inside of the files are relative to the file which mentions them.
    current_context: str | None = None
    contexts: dict[str, Any] = {}
    clusters: dict[str, Any] = {}
    users: dict[str, Any] = {}
    for path in paths:
        try:
            with open(path, encoding='utf-8') as f:
                config = yaml.safe_load(f.read()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise credentials.LoginError(f"Cannot read the kubeconfig file {path!r}.") from e
        if not isinstance(config, Mapping):
            raise credentials.LoginError(f"The kubeconfig file {path!r} is not a mapping.")

        basedir = os.path.dirname(os.path.abspath(path))
        if current_context is None:
            current_context = config.get('current-context')
        for name, section in _named_sections(config, 'contexts', 'context', path):
            contexts.setdefault(name, section)
        for name, section in _named_sections(config, 'clusters', 'cluster', path):
            clusters.setdefault(name, _resolve_paths(section, basedir))
        for name, section in _named_sections(config, 'users', 'user', path):
            users.setdefault(name, _resolve_paths(section, basedir))

    # Once fully parsed, use the current context only.
    if not current_context:
        raise credentials.LoginError("Current context is not set in kubeconfigs.")
    try:
        context = contexts[current_context]
        cluster = clusters[context['cluster']]
        user = users.get(context.get('user'), {})
    except (KeyError, TypeError) as e:
        raise credentials.LoginError(f"Kubeconfig's context {current_context!r} "
                                     f"refers to an undefined entry: {e}") from e
    if not cluster.get('server'):
        raise credentials.LoginError(f"Kubeconfig's context {current_context!r} has no server.")

    token: str | None = user.get('token')
    if not token and user.get('tokenFile'):
        try:
            with open(user['tokenFile'], encoding='utf-8') as f:
                token = f.read().strip()
        except OSError as e:
            raise credentials.LoginError(f"Cannot read the token file {user['tokenFile']!r}.") from e
    provider = user.get('auth-provider') or {}
    provider_config = (provider.get('config') if isinstance(provider, Mapping) else None) or {}
    provider_token = provider_config.get('access-token') if isinstance(provider_config, Mapping) else None

    return credentials.ConnectionInfo(
        server=cluster.get('server'),
        ca_path=cluster.get('certificate-authority'),
        ca_data=cluster.get('certificate-authority-data'),
        insecure=cluster.get('insecure-skip-tls-verify'),
        certificate_path=user.get('client-certificate'),
        certificate_data=user.get('client-certificate-data'),
        private_key_path=user.get('client-key'),
        private_key_data=user.get('client-key-data'),
        username=user.get('username'),
        password=user.get('password'),
        token=token or provider_token,
        default_namespace=context.get('namespace'),
        priority=PRIORITY_OF_KUBECONFIG,
    )


_PATH_FIELDS = ('certificate-authority', 'client-certificate', 'client-key', 'tokenFile')


def _resolve_paths(section: Mapping[str, Any], basedir: str) -> dict[str, Any]:
    resolved = dict(section)
    for field in _PATH_FIELDS:
        if resolved.get(field):
            resolved[field] = os.path.join(basedir, os.path.expanduser(resolved[field]))
    return resolved


def _named_sections(
        config: Mapping[str, Any],
        key: str,
        field: str,
        path: str,
) -> Iterator[tuple[str, Mapping[str, Any]]]:
    items = config.get(key) or []
    if not isinstance(items, list):
        raise credentials.LoginError(f"Kubeconfig's {key!r} in {path!r} is not a list.")
    for item in items:
        if not isinstance(item, Mapping) or not item.get('name'):
            raise credentials.LoginError(f"Kubeconfig's {key!r} in {path!r} has an unnamed entry.")
        section = item.get(field) or {}
        if not isinstance(section, Mapping):
            raise credentials.LoginError(f"Kubeconfig's {field} {item['name']!r} is not a mapping.")
        yield item['name'], section
