import dataclasses

# A namespace specification, where `None` means all namespaces (i.e. cluster-wide).
Namespace = str | None


@dataclasses.dataclass(frozen=True)
class Resource:
    """
    A reference to a built-in resource type, or to a whole group-version of them.

    It is used to form the K8s API URLs: of the lists of objects (for creation
    and listing), and of the group-version discovery documents.
    """

    group: str
    """
    The resource's API group; e.g. ``"apps"``, ``"batch"``.
    For Core v1 API resources, an empty string: ``""``.
    """

    version: str
    """
    The resource's API version; e.g. ``"v1"``, ``"v1beta1"``, etc.
    """

    plural: str
    """
    The resource's plural name; e.g. ``"pods"``.
    Empty for the references to the group-version as a whole.
    """

    namespaced: bool | None = None
    """
    Whether the resource is namespaced (``True``) or cluster-scoped (``False``).
    """

    @property
    def api_version(self) -> str:
        return f'{self.group}/{self.version}' if self.group else self.version

    def get_version_url(self) -> str:
        """ Build a URL of the discovery document of the resource's group-version. """
        return '/api/v1' if self.group == '' and self.version == 'v1' else f'/apis/{self.api_version}'

    def get_url(self, *, namespace: Namespace = None) -> str:
        """
        Build a URL of the resource's objects, relative to the server.

        If the namespace is not set, a cluster-wide URL is returned:
        e.g. the pods of all namespaces.
        """
        if not self.namespaced and namespace is not None:
            raise ValueError("Specific namespaces are not supported for cluster-scoped resources.")
        if namespace is None:
            return f'{self.get_version_url()}/{self.plural}'
        return f'{self.get_version_url()}/namespaces/{namespace}/{self.plural}'


PODS = Resource('', 'v1', 'pods', namespaced=True)
