from azure.storage.blob import BlobServiceClient

from cloudprovision.api.azure.container import AzureContainer
from cloudprovision.api.interface.service import Service
from cloudprovision.platforms.azure import CloudEnvironment


class AzureService(Service):
    """
    Object storage service backed by an Azure Blob Storage account.

    Args:
        blob_service (BlobServiceClient): The blob service client of the storage account.
        region (str, optional): Region of the storage account.
    """

    def __init__(self, blob_service, region=None):
        super().__init__(region)
        self._blob_service = blob_service

    @classmethod
    def from_settings(cls, region=None, connection_string=None, account_name=None, account_key=None,
                      cloud_name=None):
        """
        Builds the service either from a connection string or from an account name and key.

        :param region:
            Region of the storage account.

        :param connection_string:
            Storage account connection string. Takes precedence over the account name/key.

        :param account_name:
            Storage account name, used to build the blob endpoint of the cloud environment.

        :param account_key:
            Storage account key.

        :param cloud_name:
            Azure cloud environment name (`AzurePublicCloud` when not set).

        :return:
            AzureService instance.
        """
        if connection_string is not None:
            return cls(BlobServiceClient.from_connection_string(connection_string), region=region)

        if account_name is None:
            raise KeyError("A connection string or an account name is required by the Azure storage backend!")

        cloud = CloudEnvironment(cloud_name or CloudEnvironment.PUBLIC)
        account_url = f"https://{account_name}.blob.{cloud.storage_endpoint_suffix}"

        return cls(BlobServiceClient(account_url, credential=account_key), region=region)

    @property
    def service_raw(self):
        """
        Retrieves the original Azure Service client.
        """
        return self._blob_service

    @property
    def url(self):
        return self._blob_service.url

    @property
    def account_name(self):
        return self._blob_service.account_name

    def __getitem__(self, container_name):
        if type(container_name) is not str:
            raise KeyError("Type of container not understood. Try the name of the container (as a string).")

        return AzureContainer(self, container_name)

    def __str__(self):
        return f"[Azure blob storage ({self.account_name}); Region: '{self.region}']"

    def __repr__(self):
        return str(self)
