"""
The actions behind the CLI commands: one API request each, then the output.

The actions are invoked within a prepared API context (see :func:`running.run`),
so they neither login nor handle the API errors: the errors are escalated
to the runner and reported there with the command's own diagnostic.
"""
import logging

import click

from kubexample._cogs.clients import creating, fetching, scanning
from kubexample._cogs.configs import configuration
from kubexample._cogs.structs import references, workloads
from kubexample._core.engines import rendering

logger = logging.getLogger(__name__)

NO_PODS_MESSAGE = "No Pods found"
NO_RESOURCES_MESSAGE = "No resources found"


async def add_pod(
        *,
        request: workloads.PodRequest,
        settings: configuration.Settings,
) -> None:
    """ Create a single-container pod from the requested image. """
    logger.info(f"Creating pod {request.name!r} of image {request.image!r} "
                f"in namespace {request.namespace!r}.")
    body = await creating.create_obj(
        settings=settings,
        resource=references.PODS,
        namespace=request.namespace,
        body=request.as_body(),
        logger=logger,
    )
    name = body.get('metadata', {}).get('name', request.name)
    click.echo(f"pod/{name} created")


async def list_pods(
        *,
        settings: configuration.Settings,
        namespace: references.Namespace = None,
) -> None:
    """ List the pods of one namespace, or of all namespaces if it is `None`. """
    items = await fetching.list_objs(
        settings=settings,
        resource=references.PODS,
        namespace=namespace,
        logger=logger,
    )
    rows = workloads.pod_rows(items)
    if not rows:
        click.echo(NO_PODS_MESSAGE)
    else:
        rendering.print_table(workloads.PodRow.COLUMNS, [row.as_cells() for row in rows])


async def list_resources(
        *,
        settings: configuration.Settings,
) -> None:
    """ List the resource kinds served by the core API group. """
    resources = await scanning.read_resources(settings=settings, logger=logger)
    rows = workloads.resource_rows(resources)
    if not rows:
        click.echo(NO_RESOURCES_MESSAGE)
    else:
        rendering.print_table(workloads.ResourceRow.COLUMNS, [row.as_cells() for row in rows])
