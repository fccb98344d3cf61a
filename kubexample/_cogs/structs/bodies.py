"""
All the structures coming from/to the Kubernetes API.

For type-checking, they are detailed to the per-field level
(e.g. `TypedDict` instead of just ``Mapping[Any, Any]``) --
but only for the fields used by the plugin. All other fields are passed
through as they are, and are not declared in the type definitions.
"""
from collections.abc import Mapping

from typing_extensions import TypedDict

Labels = Mapping[str, str]

# The labels put on every pod created by the plugin.
DEMO_LABELS: Labels = {'app': 'demo'}


class RawMeta(TypedDict, total=False):
    uid: str
    name: str
    namespace: str
    labels: Labels
    resourceVersion: str
    creationTimestamp: str


class RawContainer(TypedDict, total=False):
    name: str
    image: str


class RawPodSpec(TypedDict, total=False):
    containers: list[RawContainer]


class RawBody(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawMeta
    spec: RawPodSpec


class RawAPIResource(TypedDict, total=False):
    name: str
    singularName: str
    namespaced: bool
    kind: str
    verbs: list[str]
    shortNames: list[str]


def build_pod(
        *,
        name: str,
        image: str,
        namespace: str | None = None,
        labels: Labels | None = None,
) -> RawBody:
    """
    Build a body of a single-container pod.

    The container is named the same as the pod.
    """
    meta: RawMeta = {'name': name, 'labels': dict(labels if labels is not None else DEMO_LABELS)}
    if namespace is not None:
        meta['namespace'] = namespace
    return {
        'apiVersion': 'v1',
        'kind': 'Pod',
        'metadata': meta,
        'spec': {'containers': [{'name': name, 'image': image}]},
    }
