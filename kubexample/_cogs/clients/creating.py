from kubexample._cogs.clients import api
from kubexample._cogs.configs import configuration
from kubexample._cogs.helpers import typedefs
from kubexample._cogs.structs import bodies, references


async def create_obj(
        *,
        settings: configuration.Settings,
        resource: references.Resource,
        namespace: references.Namespace = None,
        body: bodies.RawBody,
        logger: typedefs.Logger,
) -> bodies.RawBody:
    """
    Create an object of a resource, and return it as the server has stored it.

    The object goes to the namespace of its metadata; if there is none there,
    the explicitly given namespace is put into the metadata and used.
    """
    if namespace is not None:
        body.setdefault('metadata', {}).setdefault('namespace', namespace)

    namespace = body.get('metadata', {}).get('namespace')
    created_body: bodies.RawBody = await api.post(
        url=resource.get_url(namespace=namespace),
        payload=body,
        logger=logger,
        settings=settings,
    )
    return created_body
