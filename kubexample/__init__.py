"""
An example kubectl plugin: add & list pods, list the resource kinds.

The plugin is invoked as ``kubectl example ...`` once the ``kubectl-example``
executable is on the ``PATH``; or directly as ``python -m kubexample``.
"""
# isort: skip_file

from kubexample._cogs.clients.errors import (
    APIError,
)
from kubexample._cogs.configs.configuration import (
    Settings,
    NetworkingSettings,
)
from kubexample._cogs.helpers.versions import (
    version as __version__,
)
from kubexample._cogs.structs.credentials import (
    LoginError,
    ConnectionInfo,
)
from kubexample._cogs.structs.workloads import (
    PodRequest,
    PodRow,
    ResourceRow,
)
from kubexample._core.intents.piggybacking import (
    login_via_pykube,
    login_via_client,
    login_with_kubeconfig,
    login_with_service_account,
)

__all__ = [
    'APIError',
    'Settings',
    'NetworkingSettings',
    'LoginError',
    'ConnectionInfo',
    'PodRequest',
    'PodRow',
    'ResourceRow',
    'login_via_pykube',
    'login_via_client',
    'login_with_kubeconfig',
    'login_with_service_account',
]
