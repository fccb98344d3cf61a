"""
The authentication activity: turning the ambient configuration into credentials.

The specific authentication methods belong to :mod:`piggybacking`.
This module only decides which of them are applicable in the current
environment, runs them once, and picks the most preferred credentials.
"""
import logging
from collections.abc import Callable, Sequence
from typing import Any

from kubexample._cogs.structs import credentials
from kubexample._core.intents import piggybacking

logger = logging.getLogger(__name__)

LoginFn = Callable[..., credentials.ConnectionInfo | None]


def get_login_fns() -> Sequence[LoginFn]:
    """
    Select the login methods for the current environment.

    The client libraries (if installed) know better how to authenticate,
    so the rudimentary logins are used only when neither of them is present.
    """
    if piggybacking.has_pykube():
        return [piggybacking.login_via_pykube]
    elif piggybacking.has_client():
        return [piggybacking.login_via_client]
    else:
        fns: list[LoginFn] = []
        if piggybacking.has_kubeconfig():
            fns.append(piggybacking.login_with_kubeconfig)
        if piggybacking.has_service_account():
            fns.append(piggybacking.login_with_service_account)
        return fns


def authenticate(
        *,
        login_fns: Sequence[LoginFn] | None = None,
        **kwargs: Any,
) -> credentials.ConnectionInfo:
    """
    Retrieve the credentials once, successfully or not, and return the best ones.

    All login methods are tried; the failed ones are only logged
    unless all of them fail or none of them returns anything.
    """
    login_fns = login_fns if login_fns is not None else get_login_fns()
    if not login_fns:
        raise credentials.LoginError("No kubeconfig or service account is found; "
                                     "cannot login to the cluster.")

    results: list[credentials.ConnectionInfo] = []
    errors: list[credentials.LoginError] = []
    for fn in login_fns:
        try:
            info = fn(logger=logger, **kwargs)
        except credentials.LoginError as e:
            logger.debug(f"Login via {fn.__name__} has failed: {e}")
            errors.append(e)
        else:
            if info is not None:
                logger.debug(f"Login via {fn.__name__} has succeeded: {info.server}")
                results.append(info)

    if not results:
        if errors:
            raise errors[0]
        raise credentials.LoginError("No credentials were retrieved from the login methods.")

    # The first one wins among the equally preferred ones.
    return max(results, key=lambda info: info.priority)
