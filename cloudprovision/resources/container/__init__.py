from cloudprovision.resources.container.resource import ContainerResource
from cloudprovision.resources.container.schema import (CONTAINER_SCHEMA, ContainerConfig, ContainerState, FieldSpec,
                                                       Versioning)

__all__ = [
    "CONTAINER_SCHEMA",
    "ContainerConfig",
    "ContainerResource",
    "ContainerState",
    "FieldSpec",
    "Versioning",
]
