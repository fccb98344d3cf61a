from kubexample._cogs.clients import api
from kubexample._cogs.configs import configuration
from kubexample._cogs.helpers import typedefs
from kubexample._cogs.structs import bodies, references


async def list_objs(
        *,
        settings: configuration.Settings,
        resource: references.Resource,
        namespace: references.Namespace,
        logger: typedefs.Logger,
) -> list[bodies.RawBody]:
    """
    List the objects of specific resource type.

    If the namespace is `None`, the objects of all namespaces are listed
    (for namespaced resources); otherwise, only those of that namespace.

    The list's items come without their kind & apiVersion from the server,
    so they are restored from the list's own kind & apiVersion.
    """
    rsp = await api.get(
        url=resource.get_url(namespace=namespace),
        logger=logger,
        settings=settings,
    )

    items: list[bodies.RawBody] = []
    for item in rsp.get('items') or []:
        if 'kind' in rsp:
            item.setdefault('kind', rsp['kind'][:-4] if rsp['kind'][-4:] == 'List' else rsp['kind'])
        if 'apiVersion' in rsp:
            item.setdefault('apiVersion', rsp['apiVersion'])
        items.append(item)
    return items
