"""
The requests and the display rows of the plugin's commands.

All of them live only for one request/response cycle and are never stored.
The rows are read-only projections of the API responses for the tables.
"""
import dataclasses
from collections.abc import Iterable

from kubexample._cogs.structs import bodies

DEFAULT_IMAGE = 'nginx'
DEFAULT_NAMESPACE = 'default'


@dataclasses.dataclass(frozen=True)
class PodRequest:
    name: str
    image: str = DEFAULT_IMAGE
    namespace: str = DEFAULT_NAMESPACE

    def as_body(self) -> bodies.RawBody:
        return bodies.build_pod(name=self.name, image=self.image, namespace=self.namespace)


@dataclasses.dataclass(frozen=True)
class PodRow:
    name: str
    namespace: str

    COLUMNS = ('Pod Name', 'namespace')

    @classmethod
    def from_body(cls, body: bodies.RawBody) -> "PodRow":
        meta = body.get('metadata', {})
        return cls(name=meta.get('name', ''), namespace=meta.get('namespace', ''))

    def as_cells(self) -> tuple[object, ...]:
        return (self.name, self.namespace)


@dataclasses.dataclass(frozen=True)
class ResourceRow:
    name: str
    namespaced: bool
    kind: str

    COLUMNS = ('Resource', 'Namespaced', 'Kind')

    @classmethod
    def from_api_resource(cls, resource: bodies.RawAPIResource) -> "ResourceRow":
        return cls(
            name=resource.get('name', ''),
            namespaced=bool(resource.get('namespaced', False)),
            kind=resource.get('kind', ''),
        )

    def as_cells(self) -> tuple[object, ...]:
        return (self.name, self.namespaced, self.kind)


def pod_rows(items: Iterable[bodies.RawBody]) -> list[PodRow]:
    return [PodRow.from_body(item) for item in items]


def resource_rows(items: Iterable[bodies.RawAPIResource]) -> list[ResourceRow]:
    return [ResourceRow.from_api_resource(item) for item in items]
