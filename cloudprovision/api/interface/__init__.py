from cloudprovision.api.interface.container import Container
from cloudprovision.api.interface.options import ContainerCreateOpts, ContainerHeaders, ContainerUpdateOpts
from cloudprovision.api.interface.service import Service

__all__ = [
    "Container",
    "Service",
    "ContainerCreateOpts",
    "ContainerUpdateOpts",
    "ContainerHeaders",
]
