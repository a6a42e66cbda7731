from cloudprovision.api.azure.container import AzureContainer
from cloudprovision.api.azure.service import AzureService

__all__ = [
    "AzureContainer",
    "AzureService",
]
