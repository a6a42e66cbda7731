from cloudprovision.provider.credentials import ProviderCredentials
from cloudprovision.provider.factory import ProviderFactory

__all__ = [
    "ProviderCredentials",
    "ProviderFactory",
]
