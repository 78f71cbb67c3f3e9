# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Named access to metadata properties.

Lets assertions read properties the way a matcher DSL would::

    props = InstanceProperties(resource)
    props.its("meta-data/local-ipv4")
    props["user-data"]
    props.hostname        # fetches the path "hostname"

Any name the wrapper does not define is handed to resource.get unchanged.
"""

from ec2instance.resource import MetadataResource


class InstanceProperties:
    def __init__(self, resource: MetadataResource):
        self._resource = resource

    @property
    def resource(self) -> MetadataResource:
        return self._resource

    def exists(self) -> bool:
        return self._resource.exists()

    def its(self, property_path: str) -> str:
        return self._resource.get(property_path)

    def __getitem__(self, property_path: str) -> str:
        return self._resource.get(property_path)

    def __getattr__(self, name: str) -> str:
        # Only reached for names not found normally. Private and dunder
        # lookups (copy, pickle, ...) are not metadata paths.
        if name.startswith("_"):
            raise AttributeError(name)
        return self._resource.get(name)

    def __repr__(self):
        return "InstanceProperties(%r)" % (self._resource,)
