"""
Platform options of a cluster installed on Azure.

The `Platform` model holds the global configuration shared by every machine set of the cluster. Field names follow
the python convention but the model reads and writes the camelCase names used in install configs.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class OutboundType(str, Enum):
    """Strategy used for egress from the cluster."""

    # Standard load balancer for egress from the cluster.
    LOADBALANCER = "Loadbalancer"

    # User defined routing tables for egress.
    USER_DEFINED_ROUTING = "UserDefinedRouting"


_STORAGE_SUFFIXES = {
    "AzurePublicCloud": "core.windows.net",
    "AzureUSGovernmentCloud": "core.usgovcloudapi.net",
    "AzureChinaCloud": "core.chinacloudapi.cn",
    "AzureGermanCloud": "core.cloudapi.de",
}


class CloudEnvironment(str, Enum):
    """Name of an Azure cloud environment."""

    PUBLIC = "AzurePublicCloud"
    US_GOVERNMENT = "AzureUSGovernmentCloud"
    CHINA = "AzureChinaCloud"
    GERMAN = "AzureGermanCloud"

    @property
    def environment_name(self):
        """
        Name that Azure uses for the cloud environment.
        """
        return self.value

    @property
    def storage_endpoint_suffix(self):
        """
        DNS suffix of the storage endpoints in this environment (e.g. `core.windows.net`).
        """
        return _STORAGE_SUFFIXES[self.value]


class Platform(BaseModel):
    """
    Global configuration used by all the machine sets of an Azure cluster.

    Attributes:
        region: Azure region where the cluster will be created.
        base_domain_resource_group_name: Resource group where the Azure DNS zone for the base domain is found.
        default_machine_platform: Default machine pool configuration for pools that do not define their own.
        network_resource_group_name: Network resource group that contains an existing VNet.
        virtual_network: Name of an existing VNet for the installer to use.
        control_plane_subnet: Existing subnet for the control plane nodes.
        compute_subnet: Existing subnet for the compute nodes.
        cloud_name: Azure cloud environment used to configure the SDK endpoints.
        outbound_type: Egress strategy. Defaults to `Loadbalancer`.
    """
    model_config = ConfigDict(populate_by_name=True)

    region: str
    base_domain_resource_group_name: Optional[str] = Field(default=None, alias="baseDomainResourceGroupName")
    default_machine_platform: Optional[Dict[str, Any]] = Field(default=None, alias="defaultMachinePlatform")
    network_resource_group_name: Optional[str] = Field(default=None, alias="networkResourceGroupName")
    virtual_network: Optional[str] = Field(default=None, alias="virtualNetwork")
    control_plane_subnet: Optional[str] = Field(default=None, alias="controlPlaneSubnet")
    compute_subnet: Optional[str] = Field(default=None, alias="computeSubnet")
    cloud_name: CloudEnvironment = Field(default=CloudEnvironment.PUBLIC, alias="cloudName")
    outbound_type: OutboundType = Field(default=OutboundType.LOADBALANCER, alias="outboundType")

    def set_base_domain(self, base_domain_id):
        """
        Parses the resource id of the base domain DNS zone and sets the related fields.

        :param base_domain_id:
            Resource id like `/subscriptions/<sub>/resourceGroups/<group>/providers/Microsoft.Network/dnszones/<zone>`.
        """
        parts = base_domain_id.split("/")

        if len(parts) < 5 or not parts[4]:
            raise ValueError(f"Base domain id '{base_domain_id}' does not contain a resource group")

        self.base_domain_resource_group_name = parts[4]

    def to_dict(self):
        """Return the install config representation (camelCase names, unset fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
