from cloudprovision.resources.container import ContainerConfig, ContainerResource, ContainerState, Versioning

__all__ = [
    "ContainerConfig",
    "ContainerResource",
    "ContainerState",
    "Versioning",
]
